"""Start the proxy with uvicorn: ``python -m complaints_proxy``."""

import uvicorn

from complaints_proxy.config import ProxySettings


def main() -> None:
    settings = ProxySettings.from_env()
    uvicorn.run(
        "complaints_proxy.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
