"""Process entrypoint: `python -m src.main` or the `shared-puzzle` script."""

import uvicorn

from src.api.app import create_app
from src.core.config import Settings
from src.core.log_config import configure_logging


def main() -> None:  # pragma: no cover - runner
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":  # pragma: no cover
    main()
