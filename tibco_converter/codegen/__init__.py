"""
Spring Boot code generation from parsed processes and schemas.
"""

from .core import (
    ConfigError,
    FileKind,
    GeneratedFile,
    GenerationConfig,
    GenerationOptions,
    GenerationResult,
    TemplateEngine,
    TemplateError,
    TemplateNotFoundError,
    generate_code,
    load_config,
)
from .registry import (
    GeneratorRegistry,
    PROCESS_MODEL,
    RegistryError,
    SCHEMA_MODEL,
    create_default_registry,
)
from .spring import ControllerGenerator, DtoGenerator

__all__ = [
    "ConfigError",
    "ControllerGenerator",
    "DtoGenerator",
    "FileKind",
    "GeneratedFile",
    "GenerationConfig",
    "GenerationOptions",
    "GenerationResult",
    "GeneratorRegistry",
    "PROCESS_MODEL",
    "RegistryError",
    "SCHEMA_MODEL",
    "TemplateEngine",
    "TemplateError",
    "TemplateNotFoundError",
    "create_default_registry",
    "generate_code",
    "load_config",
]
