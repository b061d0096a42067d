"""Vistas del catálogo: filtros, orden, paginación e historial."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable

from .models import Course, Enrollment

UNKNOWN_COURSE = "Unknown Course"

ALL = "all"
PRICE_FILTERS = ("all", "free", "paid")
SORT_KEYS = ("title", "duration")

CourseLookup = Callable[[str], "Course | None"]


@dataclass(frozen=True)
class EnrollmentView:
    """Inscripción junto a su curso."""

    enrollment: Enrollment
    course: Course


@dataclass(frozen=True)
class HistorySummary:
    """Resumen del historial de aprendizaje."""

    total_courses: int = 0
    total_hours: float = 0


def filter_courses(
    courses: Iterable[Course],
    query: str = "",
    category: str = ALL,
    price: str = ALL,
) -> list[Course]:
    """Filtrar por texto, categoría y precio."""
    needle = query.lower()
    result = []
    for course in courses:
        matches_search = needle in course.title.lower() or needle in course.description.lower()
        matches_category = category == ALL or course.category == category
        matches_price = (
            price == ALL
            or (price == "free" and course.is_free)
            or (price == "paid" and not course.is_free)
        )
        if matches_search and matches_category and matches_price:
            result.append(course)
    return result


def sort_courses(courses: Iterable[Course], sort_by: str = "title") -> list[Course]:
    """Ordenar por título o duración. Otras claves conservan el orden."""
    if sort_by == "title":
        return sorted(courses, key=lambda c: c.title.casefold())
    if sort_by == "duration":
        return sorted(courses, key=lambda c: c.duration)
    return list(courses)


def categories(courses: Iterable[Course]) -> list[str]:
    """Categorías únicas en orden de aparición, precedidas de "all"."""
    return [ALL, *dict.fromkeys(c.category for c in courses)]


def total_pages(total: int, page_size: int) -> int:
    """Número de páginas necesarias para `total` cursos."""
    if page_size < 1:
        return 0
    return math.ceil(total / page_size)


def my_learning(enrollments: Iterable[Enrollment], lookup: CourseLookup) -> list[EnrollmentView]:
    """Unir inscripciones con sus cursos, omitiendo cursos inexistentes."""
    views = []
    for enrollment in enrollments:
        course = lookup(enrollment.course_id)
        if course is not None:
            views.append(EnrollmentView(enrollment=enrollment, course=course))
    return views


def learning_history(enrollments: Iterable[Enrollment], lookup: CourseLookup) -> list[EnrollmentView]:
    """Cursos completados, el más reciente primero."""
    done = [v for v in my_learning(enrollments, lookup) if v.enrollment.completed_at is not None]
    return sorted(done, key=lambda v: v.enrollment.completed_at, reverse=True)


def history_summary(history: Iterable[EnrollmentView]) -> HistorySummary:
    """Total de cursos completados y horas acumuladas."""
    items = list(history)
    return HistorySummary(
        total_courses=len(items),
        total_hours=sum(v.course.duration for v in items),
    )


def prerequisite_titles(course: Course, lookup: CourseLookup) -> list[str]:
    """Títulos de los prerrequisitos; los ids desconocidos se muestran genéricos."""
    titles = []
    for prereq_id in course.prerequisites:
        prereq = lookup(prereq_id)
        titles.append(prereq.title if prereq else UNKNOWN_COURSE)
    return titles
