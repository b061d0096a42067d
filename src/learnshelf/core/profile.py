"""Formulario de perfil: validación antes de escribir en el almacén."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

if TYPE_CHECKING:
    from .service import LearningService


class ProfileValidationError(Exception):
    """Datos de perfil inválidos."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("; ".join(messages))


class PreferencesForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preferred_categories: list[str] = Field(default_factory=list, alias="preferredCategories")
    notifications: bool = False


class ProfileForm(BaseModel):
    """Campos editables del perfil."""

    name: str
    email: EmailStr
    preferences: PreferencesForm = Field(default_factory=PreferencesForm)

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def email_required(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Email is required")
        return v


def _message_for(error: dict[str, Any]) -> str:
    field_name = error["loc"][0] if error["loc"] else ""
    message = error["msg"]
    if message.startswith("Value error, "):
        return message[len("Value error, "):]
    if field_name == "email":
        return "Enter a valid email"
    return f"{'.'.join(str(p) for p in error['loc'])}: {message}"


def validate_profile(values: dict[str, Any]) -> ProfileForm:
    """Validar datos del formulario. Lanza ProfileValidationError."""
    try:
        return ProfileForm.model_validate(values)
    except ValidationError as e:
        raise ProfileValidationError([_message_for(err) for err in e.errors()]) from e


def submit_profile(service: LearningService, values: dict[str, Any]) -> ProfileForm:
    """Validar y guardar perfil y preferencias."""
    form = validate_profile(values)
    service.update_user_profile(name=form.name, email=str(form.email))
    service.update_user_preferences(
        preferred_categories=form.preferences.preferred_categories,
        notifications=form.preferences.notifications,
    )
    return form
