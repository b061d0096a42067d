"""Almacén local: un único documento JSON con todo el estado."""

from __future__ import annotations

import json
import logging
from typing import Callable

from .backends import StorageBackend, StorageError
from .models import StoreData
from .seed import load_seed_data
from .validation import is_valid_store_data

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "lms_data"


class LocalStore:
    """Lee y escribe el documento completo bajo una sola clave.

    Si el documento falta, no se puede decodificar o no pasa la validación,
    se reemplaza por los datos semilla y se persisten antes de devolverlos.
    Los datos corruptos se descartan, no se intentan recuperar.
    """

    def __init__(
        self,
        backend: StorageBackend,
        key: str = DEFAULT_STORAGE_KEY,
        seed_factory: Callable[[], StoreData] = load_seed_data,
    ) -> None:
        """Inicializar con backend y clave."""
        self.backend = backend
        self.key = key
        self.seed_factory = seed_factory

    def load(self) -> StoreData:
        """Cargar documento, sembrando si falta o es inválido."""
        try:
            raw = self.backend.get(self.key)
        except StorageError as e:
            logger.error("Error reading stored data: %s", e)
            return self._reseed()

        if raw is None:
            logger.info("No stored data under %r, seeding", self.key)
            return self._reseed()

        try:
            decoded = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Stored data is not valid JSON (%s), replacing with seed", e)
            return self._reseed()

        if not is_valid_store_data(decoded):
            logger.warning("Invalid data structure in storage, replacing with seed")
            return self._reseed()

        try:
            return StoreData.from_dict(decoded)
        except (KeyError, ValueError, TypeError) as e:
            logger.warning("Stored data could not be decoded (%s), replacing with seed", e)
            return self._reseed()

    def save(self, data: StoreData) -> None:
        """Guardar el documento completo. Lanza StorageError si falla."""
        payload = json.dumps(data.to_dict(), ensure_ascii=False).encode("utf-8")
        try:
            self.backend.set(self.key, payload)
        except StorageError as e:
            logger.error("Error saving data: %s", e)
            raise

    def _reseed(self) -> StoreData:
        data = self.seed_factory()
        try:
            self.save(data)
        except StorageError:
            # La lectura sigue disponible aunque no se pueda persistir la semilla
            pass
        return data
