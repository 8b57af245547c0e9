"""
Prometheus metrics definitions for the image host API.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
uploads_total = Counter(
    'uploads_total',
    'Total upload attempts by outcome',
    ['outcome']
)

upload_size_bytes = Histogram(
    'upload_size_bytes',
    'Size of stored uploads in bytes',
    buckets=[1024, 10240, 102400, 524288, 1048576, 2097152, 5242880, 10485760]
)

# Retrieval metrics
signed_urls_issued_total = Counter(
    'signed_urls_issued_total',
    'Total presigned download URLs issued'
)

images_not_found_total = Counter(
    'images_not_found_total',
    'Total retrievals answered with 404'
)

# Object store metrics
storage_operation_duration_seconds = Histogram(
    'storage_operation_duration_seconds',
    'Object store call latency in seconds',
    ['operation'],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

storage_failures_total = Counter(
    'storage_failures_total',
    'Total object store failures',
    ['operation']
)
