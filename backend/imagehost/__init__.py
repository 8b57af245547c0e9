"""
Anonymous image hosting gateway backed by S3-compatible object storage.
"""
__version__ = "0.1.0"
