"""
Core code generation infrastructure.
"""

from .config import (
    ConfigError,
    ConfigManager,
    GenerationConfig,
    GenerationOptions,
    TemplateNames,
    load_config,
    save_config,
    validate_config,
)
from .generator import (
    CodeGenerator,
    FileKind,
    GeneratedFile,
    GenerationResult,
    generate_code,
)
from .naming import NameSanitizer, NamingCase, create_java_sanitizer
from .templates import (
    TemplateCache,
    TemplateEngine,
    TemplateError,
    TemplateNotFoundError,
    create_template_engine,
)

__all__ = [
    "CodeGenerator",
    "ConfigError",
    "ConfigManager",
    "FileKind",
    "GeneratedFile",
    "GenerationConfig",
    "GenerationOptions",
    "GenerationResult",
    "NameSanitizer",
    "NamingCase",
    "TemplateCache",
    "TemplateEngine",
    "TemplateError",
    "TemplateNames",
    "TemplateNotFoundError",
    "create_java_sanitizer",
    "create_template_engine",
    "generate_code",
    "load_config",
    "save_config",
    "validate_config",
]
