"""Datos semilla: catálogo inicial y usuario por defecto."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Any

import yaml

from .models import StoreData

SEED_FILE = "seed.yaml"


@lru_cache(maxsize=1)
def _read_seed_text() -> str:
    return (resources.files("learnshelf") / "data" / SEED_FILE).read_text(encoding="utf-8")


def load_seed_dict() -> dict[str, Any]:
    """Documento semilla como diccionario (copia nueva en cada llamada)."""
    return yaml.safe_load(_read_seed_text())


def load_seed_data() -> StoreData:
    """Documento semilla ya convertido a modelos."""
    return StoreData.from_dict(load_seed_dict())
