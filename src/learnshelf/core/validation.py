"""Validación estructural del documento persistido.

Cada predicado recibe un valor ya decodificado de JSON y devuelve un bool.
Ninguno lanza excepciones: el resultado solo decide si el documento se
acepta al cargar o se reemplaza por los datos semilla.
"""

from __future__ import annotations

from typing import Any, Callable

from .models import LEVELS, STATUSES

Predicate = Callable[[Any], bool]


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def is_number(value: Any) -> bool:
    # bool es subclase de int en Python
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_optional(predicate: Predicate) -> Predicate:
    """Aceptar None además de lo que acepte `predicate`."""
    return lambda value: value is None or predicate(value)


def is_list_of(predicate: Predicate) -> Predicate:
    return lambda value: isinstance(value, list) and all(predicate(v) for v in value)


def one_of(choices: tuple[str, ...]) -> Predicate:
    return lambda value: isinstance(value, str) and value in choices


def in_range(low: float, high: float) -> Predicate:
    return lambda value: is_number(value) and low <= value <= high


def has_fields(
    required: dict[str, Predicate],
    optional: dict[str, Predicate] | None = None,
) -> Predicate:
    """Objeto con campos requeridos y opcionales, cada uno con su predicado."""
    optional = optional or {}

    def check(value: Any) -> bool:
        if not isinstance(value, dict):
            return False
        for name, predicate in required.items():
            if name not in value or not predicate(value[name]):
                return False
        for name, predicate in optional.items():
            if name in value and not predicate(value[name]):
                return False
        return True

    return check


is_course = has_fields(
    required={
        "id": is_string,
        "title": is_string,
        "description": is_string,
        "category": is_string,
        "duration": is_number,
        "isFree": is_bool,
        "level": one_of(LEVELS),
        "instructor": is_string,
    },
    optional={
        "prerequisites": is_optional(is_list_of(is_string)),
        "imageUrl": is_optional(is_string),
    },
)

is_enrollment = has_fields(
    required={
        "userId": is_string,
        "courseId": is_string,
        "status": one_of(STATUSES),
        "progress": in_range(0, 100),
        "enrolledAt": is_string,
    },
    optional={
        "completedAt": is_optional(is_string),
    },
)

is_preferences = has_fields(
    required={
        "preferredCategories": is_list_of(is_string),
        "notifications": is_bool,
    },
)

is_user = has_fields(
    required={
        "userId": is_string,
        "name": is_string,
        "email": is_string,
        "preferences": is_preferences,
    },
    optional={
        "avatar": is_optional(is_string),
    },
)

is_store_data = has_fields(
    required={
        "courses": is_list_of(is_course),
        "enrollments": is_list_of(is_enrollment),
        "user": is_user,
    },
)


def is_valid_store_data(value: Any) -> bool:
    """Verificar que `value` tiene la forma del documento persistido."""
    return is_store_data(value)
