"""Tests para el almacén local y sus backends."""

import json
from pathlib import Path

import pytest

from learnshelf.core.backends import FileBackend, MemoryBackend, StorageBackend, StorageError
from learnshelf.core.seed import load_seed_data, load_seed_dict
from learnshelf.core.store import DEFAULT_STORAGE_KEY, LocalStore


class FailingBackend(StorageBackend):
    """Backend que rechaza todas las escrituras."""

    def __init__(self, initial: bytes | None = None) -> None:
        self.value = initial

    def get(self, key: str) -> bytes | None:
        return self.value

    def set(self, key: str, value: bytes) -> None:
        raise StorageError("quota exceeded")


def stored_json(backend: MemoryBackend) -> dict:
    return json.loads(backend.items[DEFAULT_STORAGE_KEY])


class TestSeed:
    """Tests para los datos semilla."""

    def test_seed_has_eight_courses(self) -> None:
        """Test catálogo inicial."""
        data = load_seed_data()
        assert len(data.courses) == 8
        assert [c.id for c in data.courses] == [str(i) for i in range(1, 9)]
        assert data.enrollments == []
        assert data.user.user_id == "current-user"

    def test_seed_is_fresh_copy(self) -> None:
        """Test cada llamada devuelve un documento independiente."""
        first = load_seed_dict()
        first["courses"].clear()
        assert len(load_seed_dict()["courses"]) == 8

    def test_seed_prerequisites(self) -> None:
        """Test prerrequisitos del catálogo."""
        data = load_seed_data()
        assert data.get_course("2").prerequisites == ("1",)
        assert data.get_course("7").prerequisites == ("1", "4")
        assert data.get_course("1").prerequisites == ()


class TestLocalStore:
    """Tests para carga y guardado."""

    def test_load_empty_seeds_and_persists(self) -> None:
        """Test sembrado cuando no hay datos."""
        backend = MemoryBackend()
        data = LocalStore(backend).load()

        assert len(data.courses) == 8
        assert DEFAULT_STORAGE_KEY in backend.items
        assert stored_json(backend) == load_seed_dict()

    @pytest.mark.parametrize(
        "raw",
        [
            b"not json",
            b"\xff\xfe",
            b"null",
            b"[]",
            b'"lms"',
            b"{}",
            b'{"courses": [], "enrollments": []}',
            b'{"courses": {}, "enrollments": [], "user": {}}',
        ],
    )
    def test_load_invalid_replaces_with_seed(self, raw: bytes) -> None:
        """Test datos corruptos se reemplazan por la semilla."""
        backend = MemoryBackend({DEFAULT_STORAGE_KEY: raw})
        data = LocalStore(backend).load()

        assert len(data.courses) == 8
        assert stored_json(backend) == load_seed_dict()

    def test_load_bad_level_replaces_whole_document(self) -> None:
        """Test un solo campo inválido descarta todo el documento."""
        doc = load_seed_dict()
        doc["courses"][0]["level"] = "expert"
        doc["user"]["name"] = "Edited"
        backend = MemoryBackend({DEFAULT_STORAGE_KEY: json.dumps(doc).encode()})

        data = LocalStore(backend).load()
        assert data.user.name == "Demo User"
        assert data.courses[0].level == "beginner"

    def test_load_unparseable_timestamp_replaces_with_seed(self) -> None:
        """Test timestamp con forma de string pero inválido."""
        doc = load_seed_dict()
        doc["enrollments"] = [{
            "userId": "current-user",
            "courseId": "1",
            "status": "enrolled",
            "progress": 10,
            "enrolledAt": "yesterday",
        }]
        backend = MemoryBackend({DEFAULT_STORAGE_KEY: json.dumps(doc).encode()})

        data = LocalStore(backend).load()
        assert data.enrollments == []

    def test_self_heal_is_idempotent(self) -> None:
        """Test cargar dos veces tras corrupción da el mismo resultado."""
        backend = MemoryBackend({DEFAULT_STORAGE_KEY: b"{broken"})
        store = LocalStore(backend)

        first = store.load()
        persisted = backend.items[DEFAULT_STORAGE_KEY]
        second = store.load()

        assert first == second
        assert backend.items[DEFAULT_STORAGE_KEY] == persisted

    def test_load_valid_document_is_kept(self) -> None:
        """Test documento válido se respeta."""
        doc = load_seed_dict()
        doc["user"]["name"] = "Ana"
        doc["enrollments"] = [{
            "userId": "current-user",
            "courseId": "1",
            "status": "completed",
            "progress": 100,
            "enrolledAt": "2024-01-01T10:00:00.000Z",
            "completedAt": "2024-02-01T10:00:00.000Z",
        }]
        backend = MemoryBackend({DEFAULT_STORAGE_KEY: json.dumps(doc).encode()})

        data = LocalStore(backend).load()
        assert data.user.name == "Ana"
        assert len(data.enrollments) == 1
        assert data.enrollments[0].completed_at.year == 2024

    def test_save_round_trip(self) -> None:
        """Test guardar y volver a cargar."""
        backend = MemoryBackend()
        store = LocalStore(backend)
        data = store.load()
        data.user.name = "Changed"
        store.save(data)

        assert store.load().user.name == "Changed"

    def test_save_failure_raises(self) -> None:
        """Test error de escritura se propaga."""
        store = LocalStore(FailingBackend(json.dumps(load_seed_dict()).encode()))
        data = store.load()

        with pytest.raises(StorageError):
            store.save(data)

    def test_load_survives_failed_seed_write(self) -> None:
        """Test la lectura devuelve la semilla aunque no se pueda guardar."""
        data = LocalStore(FailingBackend()).load()
        assert len(data.courses) == 8

    def test_custom_key(self) -> None:
        """Test clave configurable."""
        backend = MemoryBackend()
        LocalStore(backend, key="other").load()
        assert list(backend.items) == ["other"]


class TestFileBackend:
    """Tests para el backend de ficheros."""

    def test_missing_key_returns_none(self, tmp_path: Path) -> None:
        """Test clave inexistente."""
        assert FileBackend(tmp_path).get("nothing") is None

    def test_set_and_get(self, tmp_path: Path) -> None:
        """Test escribir y leer."""
        backend = FileBackend(tmp_path / "nested")
        backend.set("lms_data", b'{"a": 1}')

        assert backend.get("lms_data") == b'{"a": 1}'
        assert (tmp_path / "nested" / "lms_data.json").exists()
        assert [p.name for p in (tmp_path / "nested").iterdir()] == ["lms_data.json"]

    def test_overwrite(self, tmp_path: Path) -> None:
        """Test sobrescritura completa."""
        backend = FileBackend(tmp_path)
        backend.set("k", b"first value")
        backend.set("k", b"2")
        assert backend.get("k") == b"2"

    def test_write_failure_raises_storage_error(self, tmp_path: Path) -> None:
        """Test fallo del medio como StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        backend = FileBackend(blocker / "data")

        with pytest.raises(StorageError):
            backend.set("k", b"x")

    def test_store_with_file_backend(self, tmp_path: Path) -> None:
        """Test almacén sobre ficheros."""
        store = LocalStore(FileBackend(tmp_path))
        data = store.load()
        data.user.email = "file@learnshelf.org"
        store.save(data)

        reloaded = LocalStore(FileBackend(tmp_path)).load()
        assert reloaded.user.email == "file@learnshelf.org"
