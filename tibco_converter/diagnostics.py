"""
Diagnostics shared by every parser and generator.

Parsers and generators accumulate warnings and errors while they work and
hand them back inside a result object. Public operations never let an
exception escape; the result's ``success`` flag tells the caller what happened.
"""

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, List, Optional, TypeVar

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ConverterError(Exception):
    """Base exception for converter errors raised inside a component."""

    pass


class DiagnosticCategory(Enum):
    """Where a diagnostic comes from in the error taxonomy."""

    STRUCTURAL = "structural"  # Malformed markup
    FORMAT = "format"  # Well-formed but not the expected document
    ELEMENT = "element"  # One activity/transition/element could not be read
    TEMPLATE = "template"  # Template missing or failed to render
    POLICY = "policy"  # Valid input that produces no output
    INTERNAL = "internal"


# Diagnostic codes by category
DIAGNOSTIC_CATEGORIES: Dict[str, DiagnosticCategory] = {
    "XML_INVALID": DiagnosticCategory.STRUCTURAL,
    "PARSE_ERROR": DiagnosticCategory.STRUCTURAL,
    "READ_ERROR": DiagnosticCategory.STRUCTURAL,
    "INVALID_BWP": DiagnosticCategory.FORMAT,
    "INVALID_XSD": DiagnosticCategory.FORMAT,
    "NO_PROCESS_DEF": DiagnosticCategory.FORMAT,
    "NO_SCHEMA_DEF": DiagnosticCategory.FORMAT,
    "MISSING_NAMESPACE": DiagnosticCategory.FORMAT,
    "MISSING_XS_NAMESPACE": DiagnosticCategory.FORMAT,
    "ACTIVITY_PARSE_ERROR": DiagnosticCategory.ELEMENT,
    "TRANSITION_PARSE_ERROR": DiagnosticCategory.ELEMENT,
    "ELEMENT_PARSE_ERROR": DiagnosticCategory.ELEMENT,
    "MISSING_ACTIVITY_ID": DiagnosticCategory.ELEMENT,
    "INVALID_TRANSITION": DiagnosticCategory.ELEMENT,
    "MISSING_ELEMENT_NAME": DiagnosticCategory.ELEMENT,
    "MISSING_TYPE_NAME": DiagnosticCategory.ELEMENT,
    "MISSING_PROCESS_NAME": DiagnosticCategory.FORMAT,
    "NO_ACTIVITIES": DiagnosticCategory.FORMAT,
    "EMPTY_SCHEMA": DiagnosticCategory.FORMAT,
    "TEMPLATE_ERROR": DiagnosticCategory.TEMPLATE,
    "GENERATION_ERROR": DiagnosticCategory.INTERNAL,
    "NO_HTTP_ACTIVITIES": DiagnosticCategory.POLICY,
    "NO_COMPLEX_TYPES": DiagnosticCategory.POLICY,
}


@dataclass
class Diagnostic:
    """A single warning or error."""

    message: str
    source: str
    code: str
    stack: Optional[str] = None

    @property
    def category(self) -> DiagnosticCategory:
        return DIAGNOSTIC_CATEGORIES.get(self.code, DiagnosticCategory.INTERNAL)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message} ({self.source})"


@dataclass
class ParseResult(Generic[T]):
    """Parsed model plus the diagnostics collected while building it."""

    data: Optional[T]
    warnings: List[Diagnostic] = field(default_factory=list)
    errors: List[Diagnostic] = field(default_factory=list)
    success: bool = False


@dataclass
class ValidationResult:
    """Outcome of a validation pass."""

    valid: bool
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[Diagnostic] = field(default_factory=list)


class DiagnosticsMixin:
    """
    Warning/error accumulation for parsers and generators.

    State is per call: every public operation starts with
    ``clear_diagnostics()`` so one instance can be reused sequentially.
    """

    verbose: bool = False

    def clear_diagnostics(self) -> None:
        """Reset accumulated warnings and errors."""
        self._warnings: List[Diagnostic] = []
        self._errors: List[Diagnostic] = []

    @property
    def warnings(self) -> List[Diagnostic]:
        return list(getattr(self, "_warnings", []))

    @property
    def errors(self) -> List[Diagnostic]:
        return list(getattr(self, "_errors", []))

    def add_warning(self, message: str, source: str, code: str) -> None:
        """Record a warning."""
        if not hasattr(self, "_warnings"):
            self.clear_diagnostics()
        logger.debug("warning %s at %s: %s", code, source, message)
        self._warnings.append(Diagnostic(message, source, code))

    def add_error(
        self, message: str, source: str, code: str, stack: Optional[str] = None
    ) -> None:
        """Record an error."""
        if not hasattr(self, "_errors"):
            self.clear_diagnostics()
        logger.debug("error %s at %s: %s", code, source, message)
        self._errors.append(Diagnostic(message, source, code, stack))

    def handle_error(self, error: Exception, source: str, code: str) -> None:
        """
        Record an unexpected exception as an error.

        The message is prefixed with the exception type. In verbose mode the
        bare exception text is kept along with the traceback.
        """
        logger.error("%s failed: %s", source, error, exc_info=self.verbose)
        if self.verbose:
            stack = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
            self.add_error(str(error), source, code, stack)
        else:
            self.add_error(f"{type(error).__name__}: {error}", source, code)

    def create_result(self, data: Optional[T]) -> ParseResult[T]:
        """Wrap data with a snapshot of the current diagnostics."""
        errors = self.errors
        return ParseResult(
            data=data,
            warnings=self.warnings,
            errors=errors,
            success=not errors and data is not None,
        )

    def create_validation_result(self) -> ValidationResult:
        """Build a validation result from the current diagnostics."""
        errors = self.errors
        return ValidationResult(
            valid=not errors, errors=errors, warnings=self.warnings
        )
