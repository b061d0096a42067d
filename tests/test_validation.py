"""Tests para la validación del documento persistido."""

import copy

import pytest

from learnshelf.core.seed import load_seed_dict
from learnshelf.core.validation import is_valid_store_data


@pytest.fixture
def doc() -> dict:
    data = load_seed_dict()
    data["enrollments"] = [{
        "userId": "current-user",
        "courseId": "1",
        "status": "enrolled",
        "progress": 40,
        "enrolledAt": "2024-01-01T00:00:00Z",
    }]
    return data


class TestValidator:
    """Tests para is_valid_store_data."""

    def test_seed_is_valid(self) -> None:
        """Test la semilla pasa la validación."""
        assert is_valid_store_data(load_seed_dict())

    def test_document_with_enrollment_is_valid(self, doc: dict) -> None:
        """Test documento con inscripción."""
        assert is_valid_store_data(doc)

    @pytest.mark.parametrize("value", [None, 0, "text", [], True, 3.5])
    def test_wrong_top_level(self, value) -> None:
        """Test forma raíz incorrecta."""
        assert is_valid_store_data(value) is False

    @pytest.mark.parametrize(
        "path,value",
        [
            (("courses", 0, "level"), "expert"),
            (("courses", 0, "duration"), "8"),
            (("courses", 0, "duration"), True),
            (("courses", 0, "isFree"), "yes"),
            (("courses", 0, "id"), 1),
            (("courses", 0, "prerequisites"), "1"),
            (("enrollments", 0, "status"), "dropped"),
            (("enrollments", 0, "progress"), 101),
            (("enrollments", 0, "progress"), -1),
            (("enrollments", 0, "progress"), "50"),
            (("enrollments", 0, "enrolledAt"), 1700000000),
            (("enrollments", 0, "completedAt"), 1700000000),
            (("user", "email"), None),
            (("user", "preferences", "notifications"), "no"),
            (("user", "preferences", "preferredCategories"), ["ok", 3]),
        ],
    )
    def test_field_mismatch(self, doc: dict, path: tuple, value) -> None:
        """Test cualquier campo inválido rechaza el documento."""
        target = doc
        for key in path[:-1]:
            target = target[key]
        target[path[-1]] = value
        assert is_valid_store_data(doc) is False

    @pytest.mark.parametrize(
        "path",
        [
            ("courses", 0, "title"),
            ("enrollments", 0, "enrolledAt"),
            ("user", "preferences"),
            ("user",),
            ("courses",),
        ],
    )
    def test_missing_field(self, doc: dict, path: tuple) -> None:
        """Test campo requerido ausente."""
        target = doc
        for key in path[:-1]:
            target = target[key]
        del target[path[-1]]
        assert is_valid_store_data(doc) is False

    def test_optional_fields(self, doc: dict) -> None:
        """Test campos opcionales ausentes o presentes."""
        doc = copy.deepcopy(doc)
        del doc["courses"][0]["prerequisites"]
        doc["courses"][1]["imageUrl"] = "https://img.example/2.png"
        doc["enrollments"][0]["completedAt"] = "2024-02-01T00:00:00Z"
        doc["user"]["avatar"] = "avatar.png"
        assert is_valid_store_data(doc) is True

    def test_float_progress_in_range(self, doc: dict) -> None:
        """Test progreso numérico no entero."""
        doc["enrollments"][0]["progress"] = 33.3
        assert is_valid_store_data(doc) is True

    def test_unknown_prerequisite_ids_are_tolerated(self, doc: dict) -> None:
        """Test ids de prerrequisito inexistentes."""
        doc["courses"][0]["prerequisites"] = ["does-not-exist"]
        assert is_valid_store_data(doc) is True
