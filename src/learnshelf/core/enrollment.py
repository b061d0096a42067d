"""Ciclo de vida de una inscripción: inscrito -> completado."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable

from .models import STATUS_COMPLETED, STATUS_ENROLLED, Course, Enrollment

MIN_PROGRESS = 0
MAX_PROGRESS = 100


class EnrollmentError(Exception):
    """No se cumple una precondición para inscribirse."""

    pass


class ProgressError(Exception):
    """Valor de progreso no válido."""

    pass


def clamp_progress(value: float) -> int:
    """Limitar el progreso a [0, 100] como entero. Lanza ProgressError si no es finito."""
    if not math.isfinite(value):
        raise ProgressError("Progress must be a finite number")
    return int(round(min(max(value, MIN_PROGRESS), MAX_PROGRESS)))


def new_enrollment(user_id: str, course_id: str, now: datetime) -> Enrollment:
    """Crear inscripción nueva con progreso 0."""
    return Enrollment(
        user_id=user_id,
        course_id=course_id,
        status=STATUS_ENROLLED,
        progress=MIN_PROGRESS,
        enrolled_at=now,
    )


def apply_progress(enrollment: Enrollment, value: float, now: datetime) -> None:
    """Aplicar un nuevo progreso respetando el estado terminal.

    Una inscripción completada no vuelve atrás, y `completed_at` se fija
    solo la primera vez que el progreso llega a 100.
    """
    clamped = clamp_progress(value)
    if enrollment.is_completed:
        enrollment.progress = MAX_PROGRESS
        if enrollment.completed_at is None:
            enrollment.completed_at = now
        return

    enrollment.progress = clamped
    if enrollment.progress == MAX_PROGRESS:
        enrollment.status = STATUS_COMPLETED
        if enrollment.completed_at is None:
            enrollment.completed_at = now


def prerequisites_satisfied(course: Course, enrollments: Iterable[Enrollment]) -> bool:
    """True si todos los prerrequisitos del curso están completados."""
    if not course.prerequisites:
        return True
    completed = {e.course_id for e in enrollments if e.is_completed}
    return all(prereq_id in completed for prereq_id in course.prerequisites)

