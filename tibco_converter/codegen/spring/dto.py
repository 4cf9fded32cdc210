"""
DTO generator: one Java class per named complex type of a schema.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...diagnostics import ValidationResult
from ...logging_config import get_logger
from ...models.schema import Element, Restriction, Schema, SchemaType, TypeKind
from ..core.config import GenerationConfig
from ..core.generator import CodeGenerator, FileKind, GeneratedFile, GenerationResult
from ..core.naming import create_java_sanitizer, sanitize_class_name, sanitize_package_name
from .types import (
    JAVA_HELPERS,
    java_imports,
    java_type,
    validation_annotations,
    validation_package_for,
)

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_EXTENSION = ".java.j2"

DTO_SUFFIX = "DTO"
LOMBOK_IMPORTS = ["lombok.AllArgsConstructor", "lombok.Data", "lombok.NoArgsConstructor"]


def dto_class_name(type_name: str) -> str:
    return sanitize_class_name(type_name.rsplit(":", 1)[-1]) + DTO_SUFFIX


class DtoGenerator(CodeGenerator[Schema]):
    """Generates data transfer objects from schema complex types."""

    @property
    def artifact_name(self) -> str:
        return "dto"

    def get_template_directory(self) -> Optional[Path]:
        return TEMPLATE_DIR

    def get_template_extension(self) -> str:
        return TEMPLATE_EXTENSION

    def get_template_helpers(self) -> Dict[str, Callable]:
        return JAVA_HELPERS

    def generate(self, model: Schema, config: GenerationConfig) -> GenerationResult:
        """
        Generate one DTO per complex type.

        Args:
            model: Parsed schema
            config: Generation configuration

        Returns:
            GenerationResult with DTO files
        """
        self.clear_diagnostics()
        files: List[GeneratedFile] = []

        complex_types = model.complex_types
        if not complex_types:
            self.add_warning(
                "Schema has no complex types; no DTOs generated", "dto", "NO_COMPLEX_TYPES"
            )
            return self.create_generation_result(files)

        for schema_type in complex_types:
            try:
                generated = self._generate_dto(schema_type, model, config)
            except Exception as e:
                self.handle_error(e, f"dto:{schema_type.name}", "GENERATION_ERROR")
                continue
            if generated is not None:
                files.append(generated)

        logger.info("Generated %d DTOs", len(files))
        return self.create_generation_result(
            files, {"target_namespace": model.target_namespace}
        )

    def validate(self, model: Schema) -> ValidationResult:
        """Errors when the schema declares neither elements nor types."""
        self.clear_diagnostics()
        if not model.elements and not model.types:
            self.add_error("Schema has no elements or types", "schema", "EMPTY_SCHEMA")
        return self.create_validation_result()

    def resolve_property_type(
        self, element: Element, schema: Schema
    ) -> Tuple[str, List[Restriction]]:
        """
        Java type of a property and the restrictions that apply to it.

        Complex references become DTO classes; simple references use their
        base type and carry their restrictions.
        """
        referenced = schema.get_type(element.type_name)
        restrictions: List[Restriction] = []

        if referenced is not None and referenced.kind == TypeKind.COMPLEX:
            item_type = dto_class_name(referenced.name)
        elif referenced is not None:
            item_type = java_type(referenced.base_type)
            restrictions = referenced.restrictions
        else:
            item_type = java_type(element.type_name)

        if element.is_repeated:
            return f"List<{item_type}>", restrictions
        return item_type, restrictions

    def _generate_dto(
        self, schema_type: SchemaType, schema: Schema, config: GenerationConfig
    ) -> Optional[GeneratedFile]:
        class_name = dto_class_name(schema_type.name)
        package_name = sanitize_package_name(f"{config.package_name}.dto")
        options = config.options
        sanitizer = create_java_sanitizer()

        properties: List[Dict[str, Any]] = []
        used_types = set()
        for element in schema_type.properties:
            prop_type, restrictions = self.resolve_property_type(element, schema)
            annotations = (
                validation_annotations(element, restrictions) if options.use_validation else []
            )
            used_types.update(prop_type.replace("<", " ").replace(">", " ").split())
            properties.append(
                {
                    "name": element.name,
                    "field_name": sanitizer.sanitize_name(element.name),
                    "java_type": prop_type,
                    "annotations": annotations,
                    "documentation": element.documentation,
                }
            )

        imports = java_imports(used_types)
        if options.use_lombok:
            imports.extend(LOMBOK_IMPORTS)
        if any(p["annotations"] for p in properties):
            validation = validation_package_for(config.spring_boot_version)
            imports.append(f"{validation}.constraints.*")

        context = {
            "package_name": package_name,
            "class_name": class_name,
            "type_name": schema_type.name,
            "imports": self.generate_imports(imports),
            "properties": properties,
            "use_lombok": options.use_lombok,
        }

        content = self.render_or_record(config.templates.dto, context, f"dto:{schema_type.name}")
        if content is None:
            return None

        return self.create_generated_file(
            self.source_path(package_name, class_name), content, FileKind.DTO
        )
