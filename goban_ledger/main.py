"""Process entry point: read configuration, set up logging and serve the API."""

import uvicorn

from goban_ledger.api.app import create_app
from goban_ledger.core.config import get_settings
from goban_ledger.core.logs import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
