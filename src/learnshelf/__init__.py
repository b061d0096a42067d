"""LearnShelf: catálogo de cursos y seguimiento de progreso local."""

__version__ = "0.1.0"
