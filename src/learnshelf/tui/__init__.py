"""Interfaz de consola."""

from .app import LearnShelfApp

__all__ = ["LearnShelfApp"]
