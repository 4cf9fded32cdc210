"""
tibco_converter - TIBCO BusinessWorks to Spring Boot converter.

Parses BusinessWorks process definitions and XML Schemas into typed models
and generates Spring Boot controllers and DTOs from them.
"""

__version__ = "0.1.0"

from .diagnostics import (
    ConverterError,
    Diagnostic,
    DiagnosticCategory,
    ParseResult,
    ValidationResult,
)
from .parsers import ParserConfig, ProcessParser, SchemaParser, extract_process, extract_schema
from .codegen import (
    ControllerGenerator,
    DtoGenerator,
    GenerationConfig,
    GenerationResult,
    load_config,
)

__all__ = [
    "ControllerGenerator",
    "ConverterError",
    "Diagnostic",
    "DiagnosticCategory",
    "DtoGenerator",
    "GenerationConfig",
    "GenerationResult",
    "ParseResult",
    "ParserConfig",
    "ProcessParser",
    "SchemaParser",
    "ValidationResult",
    "__version__",
    "extract_process",
    "extract_schema",
    "load_config",
]
