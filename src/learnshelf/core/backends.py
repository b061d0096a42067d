"""Backends de almacenamiento clave/valor."""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path


class StorageError(Exception):
    """El medio de almacenamiento rechazó la operación."""

    pass


class StorageBackend(ABC):
    """Interfaz base: un valor en bytes por clave."""

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Leer valor, o None si la clave no existe."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Escribir valor completo. Lanza StorageError si falla."""
        pass


class MemoryBackend(StorageBackend):
    """Backend en memoria (tests y sesiones efímeras)."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self.items: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self.items.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.items[key] = bytes(value)


class FileBackend(StorageBackend):
    """Un fichero JSON por clave dentro de un directorio base."""

    def __init__(self, base_path: Path) -> None:
        """Inicializar con ruta base."""
        self.base_path = Path(base_path)

    def path_for(self, key: str) -> Path:
        """Ruta del fichero de una clave."""
        return self.base_path / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Escribir a un temporal y reemplazar: nunca queda un fichero a medias
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
