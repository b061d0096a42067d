"""Punto de entrada principal."""

import sys


def main() -> int:
    """Ejecutar aplicación."""
    from .config import configure_logging, get_config
    from .tui.app import LearnShelfApp

    config = get_config()
    configure_logging(config.log_level)

    app = LearnShelfApp(config=config)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
