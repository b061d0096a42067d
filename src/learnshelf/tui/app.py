"""Aplicación de consola - LearnShelf."""

from __future__ import annotations

import sys
from typing import Callable

from ..config import Config, get_config
from ..core import catalog
from ..core.backends import FileBackend, StorageError
from ..core.enrollment import EnrollmentError, ProgressError
from ..core.models import Course, Enrollment
from ..core.profile import ProfileValidationError, submit_profile
from ..core.service import LearningService
from ..core.store import LocalStore

if sys.platform == "win32":
    import colorama
    colorama.init()

PROGRESS_BAR_WIDTH = 20


def progress_bar(progress: int, width: int = PROGRESS_BAR_WIDTH) -> str:
    """Barra de progreso en texto."""
    filled = round(progress / 100 * width)
    return "█" * filled + "░" * (width - filled)


class LearnShelfApp:
    """Catálogo y seguimiento de cursos en consola."""

    def __init__(
        self,
        service: LearningService | None = None,
        config: Config | None = None,
        input_func: Callable[[str], str] = input,
    ) -> None:
        self.config = config or get_config()
        if service is None:
            store = LocalStore(FileBackend(self.config.data_dir), key=self.config.storage_key)
            service = LearningService(store)
        self.service = service
        self.input_func = input_func
        self.running = True

        # Estado del catálogo
        self.page = 1
        self.query = ""
        self.category = catalog.ALL
        self.price = catalog.ALL
        self.sort_by = "title"

    def print_header(self) -> None:
        """Imprimir encabezado."""
        print("\033[33m" + "=" * 50 + "\033[0m")
        print("\033[33m" + f"           📚 {self.config.app_name}" + "\033[0m")
        print("\033[33m" + "    tu catálogo de cursos, sin conexión" + "\033[0m")
        print("\033[33m" + "=" * 50 + "\033[0m")
        print()

    def print_info(self, message: str) -> None:
        """Imprimir mensaje informativo."""
        print(f"\033[36mℹ {message}\033[0m")

    def print_success(self, message: str) -> None:
        """Imprimir mensaje de éxito."""
        print(f"\033[32m✓ {message}\033[0m")

    def print_error(self, message: str) -> None:
        """Imprimir mensaje de error."""
        print(f"\033[31m✗ {message}\033[0m")

    def get_input(self, prompt: str = "> ") -> str:
        """Obtener input del usuario."""
        try:
            return self.input_func(f"\033[33m{prompt}\033[0m").strip()
        except (KeyboardInterrupt, EOFError):
            print("\n\033[33m¡Hasta luego!\033[0m")
            self.running = False
            return ""

    def show_welcome(self) -> None:
        """Mostrar mensaje de bienvenida."""
        self.print_header()
        self.print_info("Escribe 'catalog' para ver los cursos")
        self.print_info("Escribe 'my' para ver tus cursos")
        self.print_info("Escribe 'help' para ver todos los comandos")
        print()

    def run(self) -> None:
        """Ejecutar la aplicación."""
        self.show_welcome()

        while self.running:
            try:
                command = self.get_input()
                if not command:
                    continue

                self.process_command(command)

            except KeyboardInterrupt:
                print("\n\033[33m¡Hasta luego!\033[0m")
                break
            except Exception as e:
                self.print_error(f"Error: {e}")
                continue

    def process_command(self, command: str) -> None:
        """Procesar comando del usuario."""
        parts = command.split()
        cmd = parts[0].lower().lstrip("/")
        args = parts[1:]

        handlers = {
            "help": self.cmd_help,
            "catalog": self.cmd_catalog,
            "search": self.cmd_search,
            "category": self.cmd_category,
            "price": self.cmd_price,
            "sort": self.cmd_sort,
            "course": self.cmd_course,
            "enroll": self.cmd_enroll,
            "learn": self.cmd_learn,
            "progress": self.cmd_progress,
            "my": self.cmd_my,
            "history": self.cmd_history,
            "profile": self.cmd_profile,
            "edit": self.cmd_edit,
            "quit": self.cmd_quit,
            "exit": self.cmd_quit,
            "q": self.cmd_quit,
        }

        handler = handlers.get(cmd)
        if handler:
            handler(args)
        else:
            self.print_error(f"Comando desconocido: {cmd}")
            self.print_info("Escribe 'help' para ver los comandos disponibles")

    def cmd_help(self, args) -> None:
        """Mostrar ayuda."""
        print("\033[32m📚 Comandos disponibles\033[0m")
        print()
        print("\033[33m🔎 Catálogo:\033[0m")
        print("  \033[36mcatalog [página]\033[0m       - Ver cursos")
        print("  \033[36msearch [texto]\033[0m         - Buscar por título o descripción")
        print("  \033[36mcategory <nombre|all>\033[0m  - Filtrar por categoría")
        print("  \033[36mprice <all|free|paid>\033[0m  - Filtrar por precio")
        print("  \033[36msort <title|duration>\033[0m  - Ordenar")
        print("  \033[36mcourse <id>\033[0m            - Detalles de un curso")
        print()
        print("\033[33m🎓 Aprendizaje:\033[0m")
        print("  \033[36menroll <id>\033[0m            - Inscribirse en un curso")
        print("  \033[36mlearn <id>\033[0m             - Ver un curso en el que estás inscrito")
        print("  \033[36mprogress <id> <0-100>\033[0m  - Actualizar progreso")
        print("  \033[36mmy\033[0m                     - Mis cursos")
        print("  \033[36mhistory\033[0m                - Historial de cursos completados")
        print()
        print("\033[33m👤 Perfil:\033[0m")
        print("  \033[36mprofile\033[0m                - Ver perfil")
        print("  \033[36medit\033[0m                   - Editar perfil y preferencias")
        print()
        print("  \033[36mquit, exit, q\033[0m          - Salir")

    # ------------------------------------------------------------------
    # Catálogo
    # ------------------------------------------------------------------

    def cmd_catalog(self, args) -> None:
        """Mostrar página del catálogo con filtros activos."""
        if args:
            try:
                self.page = max(int(args[0]), 1)
            except ValueError:
                self.print_error(f"Página inválida: {args[0]}")
                return

        page_size = self.config.page_size
        pages = catalog.total_pages(self.service.total_courses(), page_size)
        # Los filtros se aplican sobre la página cargada
        courses = self.service.list_courses(self.page, page_size)
        shown = catalog.sort_courses(
            catalog.filter_courses(courses, self.query, self.category, self.price),
            self.sort_by,
        )

        print(f"\033[32m📚 Catálogo (página {self.page} de {max(pages, 1)})\033[0m")
        filters = [f"orden: {self.sort_by}"]
        if self.query:
            filters.append(f"búsqueda: '{self.query}'")
        if self.category != catalog.ALL:
            filters.append(f"categoría: {self.category}")
        if self.price != catalog.ALL:
            filters.append(f"precio: {self.price}")
        print(f"\033[37m   {' | '.join(filters)}\033[0m")
        print()

        if not shown:
            self.print_info("No se encontraron cursos")
            return

        for course in shown:
            self._print_course_line(course)
        print()
        self.print_info(f"Categorías: {', '.join(catalog.categories(courses))}")

    def cmd_search(self, args) -> None:
        """Establecer texto de búsqueda (vacío lo limpia)."""
        self.query = " ".join(args)
        self.cmd_catalog([])

    def cmd_category(self, args) -> None:
        """Filtrar por categoría."""
        self.category = " ".join(args) or catalog.ALL
        self.cmd_catalog([])

    def cmd_price(self, args) -> None:
        """Filtrar por precio."""
        price = args[0].lower() if args else catalog.ALL
        if price not in catalog.PRICE_FILTERS:
            self.print_error(f"Filtro de precio inválido: {price}")
            return
        self.price = price
        self.cmd_catalog([])

    def cmd_sort(self, args) -> None:
        """Cambiar orden."""
        sort_by = args[0].lower() if args else "title"
        if sort_by not in catalog.SORT_KEYS:
            self.print_error(f"Orden inválido: {sort_by}")
            return
        self.sort_by = sort_by
        self.cmd_catalog([])

    def cmd_course(self, args) -> None:
        """Mostrar detalles de un curso."""
        course = self._require_course(args)
        if course is None:
            return

        print(f"\033[32m📘 {course.title}\033[0m")
        print(f"   {course.description}")
        print()
        print(f"   Categoría:  {course.category}")
        print(f"   Nivel:      {course.level}")
        print(f"   Duración:   {course.duration:g} horas")
        print(f"   Instructor: {course.instructor}")
        print(f"   Precio:     {'Gratis' if course.is_free else 'De pago'}")

        titles = catalog.prerequisite_titles(course, self.service.get_course)
        if titles:
            print("   Prerrequisitos:")
            for title in titles:
                print(f"     • {title}")
        print()

        enrollment = self.service.get_enrollment(course.id)
        if enrollment:
            self._print_enrollment(enrollment)
        else:
            self.print_info(f"Escribe 'enroll {course.id}' para inscribirte")

    # ------------------------------------------------------------------
    # Aprendizaje
    # ------------------------------------------------------------------

    def cmd_enroll(self, args) -> None:
        """Inscribirse en un curso."""
        if not args:
            self.print_error("Course ID is required")
            return
        course_id = args[0]

        try:
            course = self.service.check_can_enroll(course_id)
            self.service.enroll(course_id)
        except EnrollmentError as e:
            self.print_error(str(e))
            return
        except StorageError:
            self.print_error("Failed to enroll in course")
            return

        self.print_success(f"Inscrito en '{course.title}'")
        self.cmd_learn([course_id])

    def cmd_learn(self, args) -> None:
        """Mostrar un curso en el que el usuario está inscrito."""
        course = self._require_course(args)
        if course is None:
            return

        enrollment = self.service.get_enrollment(course.id)
        if enrollment is None:
            self.print_error("You are not enrolled in this course")
            return

        print(f"\033[32m🎓 {course.title}\033[0m")
        print(f"   {course.description}")
        print()
        self._print_enrollment(enrollment)
        if not enrollment.is_completed:
            self.print_info(f"Escribe 'progress {course.id} <0-100>' para actualizar tu progreso")

    def cmd_progress(self, args) -> None:
        """Actualizar progreso de un curso."""
        if len(args) < 2:
            self.print_error("Uso: progress <id> <0-100>")
            return

        course_id = args[0]
        try:
            value = float(args[1])
        except ValueError:
            self.print_error(f"Progreso inválido: {args[1]}")
            return

        enrollment = self.service.get_enrollment(course_id)
        if enrollment is None:
            self.print_error("You are not enrolled in this course")
            return
        if enrollment.is_completed:
            self.print_info("Este curso ya está completado")
            return

        try:
            self.service.update_progress(course_id, value)
        except ProgressError as e:
            self.print_error(str(e))
            return
        except StorageError:
            self.print_error("Failed to update progress")
            return

        updated = self.service.get_enrollment(course_id)
        if updated is not None:
            self._print_enrollment(updated)
            if updated.is_completed:
                self.print_success("¡Curso completado!")

    def cmd_my(self, args) -> None:
        """Listar cursos en los que el usuario está inscrito."""
        views = catalog.my_learning(self.service.list_enrollments(), self.service.get_course)

        print("\033[32m🎓 Mis cursos\033[0m")
        print()
        if not views:
            self.print_info("Aún no estás inscrito en ningún curso")
            return

        for view in views:
            status = "✅" if view.enrollment.is_completed else "📖"
            print(f"  {status} [{view.course.id}] {view.course.title}")
            print(f"     {progress_bar(view.enrollment.progress)} {view.enrollment.progress}%")
        print()

    def cmd_history(self, args) -> None:
        """Mostrar cursos completados y resumen."""
        history = catalog.learning_history(self.service.list_enrollments(), self.service.get_course)
        summary = catalog.history_summary(history)

        print("\033[32m🏆 Historial de aprendizaje\033[0m")
        print()
        print(f"\033[33mCursos completados: {summary.total_courses}\033[0m")
        print(f"\033[33mHoras de aprendizaje: {summary.total_hours:g} horas\033[0m")
        print()

        if not history:
            self.print_info("Todavía no has completado ningún curso")
            return

        for view in history:
            completed = view.enrollment.completed_at.strftime("%Y-%m-%d")
            print(f"  ✅ {view.course.title} ({view.course.duration:g} h) - {completed}")
        print()

    # ------------------------------------------------------------------
    # Perfil
    # ------------------------------------------------------------------

    def cmd_profile(self, args) -> None:
        """Mostrar perfil."""
        user = self.service.get_user()
        prefs = user.preferences

        print("\033[32m👤 Perfil\033[0m")
        print(f"   Nombre: {user.name}")
        print(f"   Email:  {user.email}")
        print(f"   Categorías preferidas: {', '.join(prefs.preferred_categories) or '-'}")
        print(f"   Notificaciones: {'Sí' if prefs.notifications else 'No'}")
        print()

    def cmd_edit(self, args) -> None:
        """Editar perfil y preferencias."""
        user = self.service.get_user()
        prefs = user.preferences

        name = self.get_input(f"Nombre [{user.name}]: ") or user.name
        if not self.running:
            return
        email = self.get_input(f"Email [{user.email}]: ") or user.email
        if not self.running:
            return
        raw_categories = self.get_input(
            f"Categorías preferidas [{', '.join(prefs.preferred_categories)}]: "
        )
        if not self.running:
            return
        categories = (
            [c.strip() for c in raw_categories.split(",") if c.strip()]
            if raw_categories
            else prefs.preferred_categories
        )
        raw_notify = self.get_input(
            f"¿Recibir notificaciones por email? (y/n) [{'y' if prefs.notifications else 'n'}]: "
        ).lower()
        if not self.running:
            return
        notifications = raw_notify in ("y", "s", "yes", "si", "sí") if raw_notify else prefs.notifications

        values = {
            "name": name,
            "email": email,
            "preferences": {
                "preferredCategories": categories,
                "notifications": notifications,
            },
        }

        try:
            submit_profile(self.service, values)
        except ProfileValidationError as e:
            for message in e.messages:
                self.print_error(message)
            return
        except StorageError:
            self.print_error("Failed to update profile")
            return

        self.print_success("Profile updated successfully")

    def cmd_quit(self, args) -> None:
        """Salir."""
        print("\033[33m¡Hasta luego!\033[0m")
        self.running = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_course(self, args) -> Course | None:
        if not args:
            self.print_error("Course ID is required")
            return None
        course = self.service.get_course(args[0])
        if course is None:
            self.print_error("Course not found")
        return course

    def _print_course_line(self, course: Course) -> None:
        price = "\033[32mGratis\033[0m" if course.is_free else "\033[35mDe pago\033[0m"
        print(f"  \033[36m[{course.id}]\033[0m {course.title}")
        print(f"      {course.category} · {course.level} · {course.duration:g} h · {price}")

    def _print_enrollment(self, enrollment: Enrollment) -> None:
        status = "Completado" if enrollment.is_completed else "Inscrito"
        print(f"   Estado:   {status}")
        print(f"   Progreso: {progress_bar(enrollment.progress)} {enrollment.progress}%")
        print(f"   Inscrito: {enrollment.enrolled_at.strftime('%Y-%m-%d')}")
        if enrollment.completed_at:
            print(f"   Completado: {enrollment.completed_at.strftime('%Y-%m-%d')}")
        print()
