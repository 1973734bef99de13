"""Application entry point for the photo catalog server."""

from photocatalog.app import App
from photocatalog.config import Config
from photocatalog.logging import setup_logging
from photocatalog.web.runner import run_server


def main() -> None:
    config = Config()  # type: ignore[call-arg]
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
