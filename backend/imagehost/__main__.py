"""
Process entry point: python -m imagehost

Settings are loaded before uvicorn starts so a missing bucket or
credential stops the process instead of failing per request.
"""
import uvicorn

from imagehost.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "imagehost.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
        log_config=None,
    )


if __name__ == "__main__":
    main()
