"""Operaciones sobre el almacén: consultas, inscripciones y perfil.

Cada operación lee el documento completo, lo modifica en memoria y lo
vuelve a escribir entero. Solo hay un escritor, así que no hay bloqueo.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from .enrollment import (
    EnrollmentError,
    apply_progress,
    new_enrollment,
    prerequisites_satisfied,
)
from .models import CURRENT_USER_ID, Course, Enrollment, User, unique_categories, utcnow
from .store import LocalStore

logger = logging.getLogger(__name__)


class LearningService:
    """Fachada usada por la capa de presentación."""

    def __init__(
        self,
        store: LocalStore,
        clock: Callable[[], datetime] = utcnow,
        user_id: str = CURRENT_USER_ID,
    ) -> None:
        """Inicializar servicio."""
        self.store = store
        self.clock = clock
        self.user_id = user_id

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    def list_courses(self, page: int = 1, page_size: int = 10) -> list[Course]:
        """Página de cursos (1-indexada) en el orden guardado."""
        if page < 1 or page_size < 1:
            return []
        courses = self.store.load().courses
        start = (page - 1) * page_size
        return courses[start:start + page_size]

    def total_courses(self) -> int:
        """Número total de cursos."""
        return len(self.store.load().courses)

    def get_course(self, course_id: str) -> Course | None:
        """Obtener curso por id."""
        return self.store.load().get_course(course_id)

    def list_enrollments(self) -> list[Enrollment]:
        """Inscripciones del usuario actual."""
        return [e for e in self.store.load().enrollments if e.user_id == self.user_id]

    def get_enrollment(self, course_id: str) -> Enrollment | None:
        """Inscripción del usuario actual en un curso."""
        return self.store.load().find_enrollment(self.user_id, course_id)

    # ------------------------------------------------------------------
    # Ciclo de vida de inscripciones
    # ------------------------------------------------------------------

    def prerequisites_satisfied(self, course: Course) -> bool:
        """True si el usuario completó todos los prerrequisitos."""
        return prerequisites_satisfied(course, self.list_enrollments())

    def check_can_enroll(self, course_id: str) -> Course:
        """Validar precondiciones de inscripción. Lanza EnrollmentError."""
        data = self.store.load()
        course = data.get_course(course_id)
        if course is None:
            raise EnrollmentError("Course not found")
        if data.find_enrollment(self.user_id, course_id) is not None:
            raise EnrollmentError("You are already enrolled in this course")
        mine = [e for e in data.enrollments if e.user_id == self.user_id]
        if not prerequisites_satisfied(course, mine):
            raise EnrollmentError("You must complete all prerequisite courses first")
        return course

    def enroll(self, course_id: str) -> None:
        """Inscribir al usuario. No hace nada si ya está inscrito."""
        data = self.store.load()
        if data.find_enrollment(self.user_id, course_id) is not None:
            return

        data.enrollments.append(new_enrollment(self.user_id, course_id, self.clock()))
        self.store.save(data)
        logger.debug("Enrolled %s in course %s", self.user_id, course_id)

    def update_progress(self, course_id: str, progress: float) -> None:
        """Actualizar progreso. No hace nada si no hay inscripción."""
        data = self.store.load()
        enrollment = data.find_enrollment(self.user_id, course_id)
        if enrollment is None:
            return

        apply_progress(enrollment, progress, self.clock())
        self.store.save(data)
        logger.debug(
            "Progress for course %s is now %d (%s)",
            course_id, enrollment.progress, enrollment.status,
        )

    # ------------------------------------------------------------------
    # Perfil
    # ------------------------------------------------------------------

    def get_user(self) -> User:
        """Usuario actual."""
        return self.store.load().user

    def update_user_profile(
        self,
        name: str | None = None,
        email: str | None = None,
        avatar: str | None = None,
    ) -> None:
        """Actualizar datos del perfil. El userId no se puede cambiar."""
        data = self.store.load()
        if name is not None:
            data.user.name = name
        if email is not None:
            data.user.email = email
        if avatar is not None:
            data.user.avatar = avatar
        self.store.save(data)

    def update_user_preferences(
        self,
        preferred_categories: list[str] | None = None,
        notifications: bool | None = None,
    ) -> None:
        """Actualizar preferencias (merge superficial)."""
        data = self.store.load()
        prefs = data.user.preferences
        if preferred_categories is not None:
            prefs.preferred_categories = unique_categories(preferred_categories)
        if notifications is not None:
            prefs.notifications = notifications
        self.store.save(data)

