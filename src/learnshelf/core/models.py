"""Modelos de datos: cursos, inscripciones y usuario."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

CURRENT_USER_ID = "current-user"

LEVELS = ("beginner", "intermediate", "advanced")

STATUS_ENROLLED = "enrolled"
STATUS_COMPLETED = "completed"
STATUSES = (STATUS_ENROLLED, STATUS_COMPLETED)


def utcnow() -> datetime:
    """Hora actual en UTC."""
    return datetime.now(timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    # Los timestamps guardados por navegadores terminan en "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Course:
    """Un curso del catálogo (inmutable)."""

    id: str
    title: str
    description: str
    category: str
    duration: float  # horas
    is_free: bool
    level: str  # beginner, intermediate, advanced
    instructor: str
    prerequisites: tuple[str, ...] = ()
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "duration": self.duration,
            "isFree": self.is_free,
            "level": self.level,
            "instructor": self.instructor,
            "prerequisites": list(self.prerequisites),
        }
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Course:
        """Crear desde diccionario."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            category=data["category"],
            duration=data["duration"],
            is_free=data["isFree"],
            level=data["level"],
            instructor=data["instructor"],
            prerequisites=tuple(data.get("prerequisites") or ()),
            image_url=data.get("imageUrl"),
        )


@dataclass
class Enrollment:
    """Inscripción del usuario en un curso."""

    user_id: str
    course_id: str
    status: str = STATUS_ENROLLED  # enrolled, completed
    progress: int = 0  # 0 - 100
    enrolled_at: datetime = field(default_factory=utcnow)
    completed_at: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        data: dict[str, Any] = {
            "userId": self.user_id,
            "courseId": self.course_id,
            "status": self.status,
            "progress": self.progress,
            "enrolledAt": self.enrolled_at.isoformat(),
        }
        if self.completed_at is not None:
            data["completedAt"] = self.completed_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Enrollment:
        """Crear desde diccionario."""
        completed = data.get("completedAt")
        status = data["status"]
        # Una inscripción completada siempre tiene progreso 100
        progress = 100 if status == STATUS_COMPLETED else int(round(data["progress"]))
        return cls(
            user_id=data["userId"],
            course_id=data["courseId"],
            status=status,
            progress=progress,
            enrolled_at=_parse_timestamp(data["enrolledAt"]),
            completed_at=_parse_timestamp(completed) if completed else None,
        )


@dataclass
class UserPreferences:
    """Preferencias del usuario."""

    preferred_categories: list[str] = field(default_factory=list)
    notifications: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        return {
            "preferredCategories": list(self.preferred_categories),
            "notifications": self.notifications,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserPreferences:
        """Crear desde diccionario."""
        return cls(
            preferred_categories=unique_categories(data.get("preferredCategories", [])),
            notifications=data.get("notifications", False),
        )


@dataclass
class User:
    """El único usuario local."""

    user_id: str
    name: str
    email: str
    preferences: UserPreferences = field(default_factory=UserPreferences)
    avatar: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        data: dict[str, Any] = {
            "userId": self.user_id,
            "name": self.name,
            "email": self.email,
            "preferences": self.preferences.to_dict(),
        }
        if self.avatar is not None:
            data["avatar"] = self.avatar
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        """Crear desde diccionario."""
        return cls(
            user_id=data["userId"],
            name=data["name"],
            email=data["email"],
            preferences=UserPreferences.from_dict(data["preferences"]),
            avatar=data.get("avatar"),
        )


@dataclass
class StoreData:
    """Documento persistido completo."""

    courses: list[Course] = field(default_factory=list)
    enrollments: list[Enrollment] = field(default_factory=list)
    user: User = field(
        default_factory=lambda: User(user_id=CURRENT_USER_ID, name="", email="")
    )

    def to_dict(self) -> dict[str, Any]:
        """Convertir a diccionario."""
        return {
            "courses": [c.to_dict() for c in self.courses],
            "enrollments": [e.to_dict() for e in self.enrollments],
            "user": self.user.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoreData:
        """Crear desde diccionario."""
        return cls(
            courses=[Course.from_dict(c) for c in data.get("courses", [])],
            enrollments=[Enrollment.from_dict(e) for e in data.get("enrollments", [])],
            user=User.from_dict(data["user"]),
        )

    def get_course(self, course_id: str) -> Course | None:
        """Obtener curso por id."""
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    def find_enrollment(self, user_id: str, course_id: str) -> Enrollment | None:
        """Obtener inscripción por (usuario, curso)."""
        for enrollment in self.enrollments:
            if enrollment.user_id == user_id and enrollment.course_id == course_id:
                return enrollment
        return None


def unique_categories(categories: list[str]) -> list[str]:
    """Quitar duplicados conservando el orden."""
    return list(dict.fromkeys(categories))
