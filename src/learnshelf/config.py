"""Configuración global de la aplicación."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir


def _default_data_dir() -> Path:
    return Path(user_data_dir("learnshelf", "learnshelf"))


@dataclass(frozen=True)
class Config:
    """Configuración inmutable de la aplicación."""

    # Paths
    data_dir: Path = _default_data_dir()

    # Almacén
    storage_key: str = "lms_data"

    # Catálogo
    page_size: int = 9

    # Logging
    log_level: str = "WARNING"

    # App
    app_name: str = "LearnShelf"
    version: str = "0.1.0"

    @classmethod
    def from_env(cls) -> Config:
        """Crear configuración desde variables de entorno."""
        data_dir = os.getenv("LEARNSHELF_DATA_DIR")

        return cls(
            data_dir=Path(data_dir) if data_dir else _default_data_dir(),
            storage_key=os.getenv("LEARNSHELF_STORAGE_KEY", "lms_data"),
            page_size=int(os.getenv("LEARNSHELF_PAGE_SIZE", "9")),
            log_level=os.getenv("LEARNSHELF_LOG_LEVEL", "WARNING").upper(),
        )

    def ensure_dirs(self) -> None:
        """Crear directorios necesarios si no existen."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# Instancia global
_config: Config | None = None


def get_config() -> Config:
    """Obtener instancia de configuración (singleton)."""
    global _config
    if _config is None:
        _config = Config.from_env()
        _config.ensure_dirs()
    return _config


def set_config(config: Config) -> None:
    """Establecer configuración (para tests)."""
    global _config
    _config = config
    _config.ensure_dirs()


def configure_logging(level: str = "WARNING") -> None:
    """Configurar logging de la aplicación."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
