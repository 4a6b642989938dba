import uvicorn

from articles_api.config import get_settings
from articles_api.logging_config import setup_logging
from articles_api.main import create_app


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    app = create_app(settings)
    # log_config=None keeps the handlers installed by setup_logging.
    uvicorn.run(app, host=settings.HTTP_HOST, port=settings.HTTP_PORT, log_config=None)


if __name__ == "__main__":
    main()
