"""Core: modelos, almacén e inscripciones."""

from .backends import FileBackend, MemoryBackend, StorageBackend, StorageError
from .enrollment import EnrollmentError
from .models import Course, Enrollment, StoreData, User, UserPreferences
from .profile import ProfileValidationError
from .service import LearningService
from .store import LocalStore

__all__ = [
    "Course",
    "Enrollment",
    "User",
    "UserPreferences",
    "StoreData",
    "StorageBackend",
    "MemoryBackend",
    "FileBackend",
    "StorageError",
    "LocalStore",
    "LearningService",
    "EnrollmentError",
    "ProfileValidationError",
]
