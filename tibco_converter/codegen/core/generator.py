"""
Base generator interface for all Spring Boot artifact generators.

Defines the contract that every generator implements and the result types
they return. Generators never raise out of ``generate``; failures are
reported as diagnostics on the result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, TypeVar

from ...diagnostics import Diagnostic, DiagnosticsMixin, ValidationResult
from ...logging_config import get_logger
from .config import GenerationConfig
from .naming import sanitize_package_name
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)

M = TypeVar("M")


class FileKind(Enum):
    """Kinds of generated artifacts."""

    CONTROLLER = "CONTROLLER"
    SERVICE = "SERVICE"
    REPOSITORY = "REPOSITORY"
    DTO = "DTO"
    CONFIG = "CONFIG"
    TEST = "TEST"


@dataclass
class GeneratedFile:
    """A generated source file, relative to the output directory."""

    path: str
    content: str
    kind: FileKind


@dataclass
class GenerationResult:
    """Container for generation results and metadata."""

    files: List[GeneratedFile] = field(default_factory=list)
    warnings: List[Diagnostic] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    success: bool = True
    metadata: Dict[str, Any] = field(default_factory=dict)


class CodeGenerator(DiagnosticsMixin, ABC, Generic[M]):
    """Abstract base class for all code generators."""

    def __init__(
        self,
        template_engine: Optional[TemplateEngine] = None,
        verbose: bool = False,
    ):
        """
        Initialize generator.

        Args:
            template_engine: Engine to render with; a new one is created
                from ``get_template_directory()`` when omitted
            verbose: Keep exception details in diagnostics
        """
        self.verbose = verbose
        self._template_engine = template_engine
        self.clear_diagnostics()

    @property
    @abstractmethod
    def artifact_name(self) -> str:
        """Name of the artifact this generator emits (e.g. 'controller')."""
        pass

    @property
    def file_extension(self) -> str:
        return ".java"

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    def get_template_extension(self) -> str:
        return ".j2"

    def get_template_helpers(self) -> Dict[str, Callable]:
        """Extra helpers exposed to this generator's templates."""
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(
                self.get_template_directory(),
                extension=self.get_template_extension(),
                helpers=self.get_template_helpers(),
            )
        return self._template_engine

    @abstractmethod
    def generate(self, model: M, config: GenerationConfig) -> GenerationResult:
        """
        Generate files for a model.

        Args:
            model: Parsed domain model
            config: Generation configuration

        Returns:
            GenerationResult with files and diagnostics
        """
        pass

    @abstractmethod
    def validate(self, model: M) -> ValidationResult:
        """Check a model before generation."""
        pass

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        return self.template_engine.render(template_name, context)

    def format_code(self, code: str) -> str:
        """
        Tidy generated Java source.

        Strips trailing whitespace, allows at most one consecutive blank
        line and ends the file with a single newline.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def create_generated_file(self, path: str, content: str, kind: FileKind) -> GeneratedFile:
        return GeneratedFile(path=path, content=self.format_code(content), kind=kind)

    def package_path(self, package_name: str) -> str:
        """Slash path of a Java package."""
        return sanitize_package_name(package_name).replace(".", "/")

    def source_path(self, package_name: str, class_name: str) -> str:
        return f"{self.package_path(package_name)}/{class_name}{self.file_extension}"

    def generate_imports(self, imports: Iterable[str]) -> List[str]:
        """Sorted, de-duplicated ``import x;`` lines."""
        return [f"import {name};" for name in sorted(set(imports))]

    def render_or_record(
        self, template_name: str, context: Dict[str, Any], source: str
    ) -> Optional[str]:
        """Render a template, recording ``TEMPLATE_ERROR`` instead of raising."""
        try:
            return self.render_template(template_name, context)
        except TemplateError as e:
            logger.error("Template %s failed for %s: %s", template_name, source, e)
            self.add_error(str(e), source, "TEMPLATE_ERROR")
            return None

    def create_generation_result(
        self, files: List[GeneratedFile], metadata: Optional[Dict[str, Any]] = None
    ) -> GenerationResult:
        """Wrap files with a snapshot of the current diagnostics."""
        errors = self.errors
        return GenerationResult(
            files=files,
            warnings=self.warnings,
            errors=errors,
            success=not errors,
            metadata=metadata or {},
        )


def generate_code(
    generator: CodeGenerator, model: Any, config: Optional[GenerationConfig] = None
) -> GenerationResult:
    """
    Validate a model and generate files for it.

    Validation errors are returned without generating anything.
    """
    config = config or GenerationConfig()
    validation = generator.validate(model)
    if not validation.valid:
        return GenerationResult(
            warnings=validation.warnings, errors=validation.errors, success=False
        )

    result = generator.generate(model, config)
    result.metadata.setdefault("artifact", generator.artifact_name)
    result.metadata.setdefault("file_count", len(result.files))
    return result
