"""
Generator registry for the Spring Boot artifacts.

Maps artifact names to generator classes, together with the model each
generator consumes and the option that switches it on.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from ..diagnostics import ConverterError
from .core.config import GenerationOptions
from .core.generator import CodeGenerator
from .core.templates import TemplateEngine
from .spring.controller import ControllerGenerator
from .spring.dto import DtoGenerator

PROCESS_MODEL = "process"
SCHEMA_MODEL = "schema"


class RegistryError(ConverterError):
    """Exception raised for registry-related errors."""

    pass


@dataclass
class Registration:
    generator_class: Type[CodeGenerator]
    model: str  # PROCESS_MODEL or SCHEMA_MODEL
    option: Optional[str] = None  # GenerationOptions toggle


class GeneratorRegistry:
    """Registry for managing available generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Registration] = {}

    def register(
        self,
        name: str,
        generator_class: Type[CodeGenerator],
        model: str,
        option: Optional[str] = None,
        replace: bool = False,
    ):
        """
        Register a generator for an artifact.

        Args:
            name: Artifact name (e.g. 'controller', 'dto')
            generator_class: Class implementing CodeGenerator
            model: Model the generator consumes ('process' or 'schema')
            option: GenerationOptions field enabling the generator
            replace: If True, replace an existing registration

        Raises:
            RegistryError: If the registration is invalid or already exists
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        if model not in (PROCESS_MODEL, SCHEMA_MODEL):
            raise RegistryError(f"Unknown model kind: {model}")

        if option is not None and not hasattr(GenerationOptions(), option):
            raise RegistryError(f"Unknown generation option: {option}")

        key = name.lower()
        if key in self._generators and not replace:
            raise RegistryError(f"Generator already registered: {name}")

        self._generators[key] = Registration(generator_class, model, option)

    def unregister(self, name: str):
        """Remove a generator; unknown names are ignored."""
        self._generators.pop(name.lower(), None)

    def _registration(self, name: str) -> Registration:
        key = name.lower()
        if key not in self._generators:
            available = ", ".join(self.list_generators()) or "none"
            raise RegistryError(
                f"No generator registered for: {name}. Available: {available}"
            )
        return self._generators[key]

    def get_generator_class(self, name: str) -> Type[CodeGenerator]:
        """
        Get generator class for an artifact.

        Raises:
            RegistryError: If the name is not registered
        """
        return self._registration(name).generator_class

    def create_generator(
        self,
        name: str,
        template_engine: Optional[TemplateEngine] = None,
        verbose: bool = False,
    ) -> CodeGenerator:
        """
        Create generator instance for an artifact.

        Raises:
            RegistryError: If the name is unknown or creation fails
        """
        generator_class = self.get_generator_class(name)
        try:
            return generator_class(template_engine=template_engine, verbose=verbose)
        except Exception as e:
            raise RegistryError(f"Failed to create {name} generator: {e}") from e

    def list_generators(self) -> List[str]:
        """Registered artifact names, sorted."""
        return sorted(self._generators.keys())

    def generators_for(self, model: str, options: Optional[GenerationOptions] = None) -> List[str]:
        """Names of generators consuming ``model`` that ``options`` enables."""
        options = options or GenerationOptions()
        names = []
        for name in self.list_generators():
            registration = self._generators[name]
            if registration.model != model:
                continue
            if registration.option and not getattr(options, registration.option, False):
                continue
            names.append(name)
        return names

    def get_info(self, name: str) -> Dict[str, Any]:
        registration = self._registration(name)
        return {
            "name": name.lower(),
            "class": registration.generator_class.__name__,
            "model": registration.model,
            "option": registration.option,
            "module": registration.generator_class.__module__,
        }


def create_default_registry() -> GeneratorRegistry:
    """Registry with the built-in controller and DTO generators."""
    registry = GeneratorRegistry()
    registry.register("controller", ControllerGenerator, PROCESS_MODEL, "generate_controllers")
    registry.register("dto", DtoGenerator, SCHEMA_MODEL, "generate_dtos")
    return registry
