"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering with the naming
and Java helpers the generators rely on. Each engine owns its own cache of
compiled templates.
"""

import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    Template,
    TemplateNotFound,
)

from ...diagnostics import ConverterError
from ...logging_config import get_logger
from .naming import NAMING_HELPERS

logger = get_logger(__name__)

DEFAULT_EXTENSION = ".j2"


class TemplateError(ConverterError):
    """Exception raised for template-related errors."""

    pass


class TemplateNotFoundError(TemplateError):
    """Raised when no template resource matches a name."""

    pass


class TemplateCache:
    """
    Compiled templates by name.

    Entries are never replaced once stored. Reads are safe from several
    threads; concurrent writers should be serialised by the caller, the lock
    here only keeps the first compiled template.
    """

    def __init__(self):
        self._templates: Dict[str, Template] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> Optional[Template]:
        return self._templates.get(name)

    def put(self, name: str, template: Template) -> Template:
        """Store a template unless one is cached already; return the cached one."""
        with self._lock:
            return self._templates.setdefault(name, template)

    def clear(self):
        with self._lock:
            self._templates.clear()

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Union[str, Path]] = None,
        extension: str = DEFAULT_EXTENSION,
        cache_templates: bool = True,
        helpers: Optional[Dict[str, Callable]] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            extension: Suffix appended to logical template names
            cache_templates: Keep compiled templates for the engine's lifetime
            helpers: Extra helpers exposed to templates as filters and globals
        """
        self.template_dir = Path(template_dir) if template_dir else None
        self.extension = extension
        self.cache_templates = cache_templates
        self.cache = TemplateCache()
        self._memory = DictLoader({})
        self._env = None
        self._setup_environment(helpers or {})

    def _setup_environment(self, helpers: Dict[str, Callable]):
        """Setup Jinja2 environment with code generation utilities."""
        loaders = [self._memory]
        if self.template_dir and self.template_dir.exists():
            loaders.append(FileSystemLoader(str(self.template_dir)))
        elif self.template_dir:
            logger.warning("Template directory not found: %s", self.template_dir)

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            cache_size=0,
        )

        all_helpers = {**NAMING_HELPERS, **helpers}
        for name, helper in all_helpers.items():
            self._env.filters[name] = helper
            self._env.globals[name] = helper

        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def _resolve_name(self, name: str) -> str:
        return name if name.endswith(self.extension) else f"{name}{self.extension}"

    def get_template(self, name: str) -> Template:
        """
        Get a compiled template, compiling it on first use.

        Raises:
            TemplateNotFoundError: If no template matches the name
            TemplateError: If the template fails to compile
        """
        resolved = self._resolve_name(name)

        if self.cache_templates:
            cached = self.cache.get(resolved)
            if cached is not None:
                return cached

        try:
            template = self._env.get_template(resolved)
        except TemplateNotFound as e:
            raise TemplateNotFoundError(f"Template not found: {resolved}") from e
        except Exception as e:
            raise TemplateError(f"Failed to compile template {resolved}: {e}") from e

        logger.debug("Compiled template %s", resolved)
        if self.cache_templates:
            template = self.cache.put(resolved, template)
        return template

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Logical template name, extension optional
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        template = self.get_template(template_name)
        try:
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        In-memory templates take precedence over files with the same name.
        """
        resolved = self._resolve_name(name)
        self._memory.mapping[resolved] = content

    def template_exists(self, name: str) -> bool:
        """Check if a template exists."""
        return self._resolve_name(name) in self._env.list_templates()

    def list_templates(self) -> List[str]:
        """Logical names of all available templates, sorted."""
        names = {
            name[: -len(self.extension)]
            for name in self._env.list_templates()
            if name.endswith(self.extension)
        }
        return sorted(names)

    def clear_cache(self):
        """Evict all compiled templates."""
        self.cache.clear()

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Indent all lines in a string."""
        indent = " " * spaces
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else line for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_template_engine(
    template_dir: Optional[Union[str, Path]] = None, **kwargs: Any
) -> TemplateEngine:
    """Create a new template engine; engines are never shared implicitly."""
    return TemplateEngine(template_dir, **kwargs)
