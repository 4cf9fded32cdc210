"""
Spring REST controller generator.

One controller is emitted per process that has at least one HTTP receiver;
each receiver becomes one handler method.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ...diagnostics import ValidationResult
from ...logging_config import get_logger
from ...models.process import ActivityKind, Process
from ..core.config import GenerationConfig
from ..core.generator import CodeGenerator, FileKind, GeneratedFile, GenerationResult
from ..core.naming import (
    base_name,
    create_java_sanitizer,
    sanitize_class_name,
    sanitize_package_name,
)
from .endpoints import Endpoint, synthesize_endpoints
from .types import JAVA_HELPERS, SPRING_IMPORTS, validation_package_for

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_EXTENSION = ".java.j2"


class ControllerGenerator(CodeGenerator[Process]):
    """
    Generates ``@RestController`` classes from processes.

    Example:
        >>> result = ControllerGenerator().generate(process, GenerationConfig())
        >>> for generated in result.files:
        ...     print(generated.path)
    """

    @property
    def artifact_name(self) -> str:
        return "controller"

    def get_template_directory(self) -> Optional[Path]:
        return TEMPLATE_DIR

    def get_template_extension(self) -> str:
        return TEMPLATE_EXTENSION

    def get_template_helpers(self) -> Dict[str, Callable]:
        return JAVA_HELPERS

    def generate(self, model: Process, config: GenerationConfig) -> GenerationResult:
        """
        Generate the controller for a process.

        Args:
            model: Parsed process
            config: Generation configuration

        Returns:
            GenerationResult with zero or one CONTROLLER file
        """
        self.clear_diagnostics()
        files: List[GeneratedFile] = []

        try:
            if not model.activities_of_kind(ActivityKind.HTTP_RECEIVER):
                self.add_warning(
                    f"Process '{model.name}' has no HTTP receiver activities; "
                    "no controller generated",
                    "controller",
                    "NO_HTTP_ACTIVITIES",
                )
                return self.create_generation_result(files)

            generated = self._generate_controller(model, config)
            if generated is not None:
                files.append(generated)
                logger.info("Generated controller %s", generated.path)

        except Exception as e:
            self.handle_error(e, "controller", "GENERATION_ERROR")

        return self.create_generation_result(files, {"process": model.name})

    def validate(self, model: Process) -> ValidationResult:
        """Errors when the process has no name or no activities."""
        self.clear_diagnostics()

        if not model.name or not model.name.strip():
            self.add_error("Process name is required", "process", "MISSING_PROCESS_NAME")

        if not model.activities:
            self.add_error("Process has no activities", "process", "NO_ACTIVITIES")

        return self.create_validation_result()

    def class_name_for(self, process: Process) -> str:
        return sanitize_class_name(base_name(process.name)) + "Controller"

    def _generate_controller(
        self, process: Process, config: GenerationConfig
    ) -> Optional[GeneratedFile]:
        class_name = self.class_name_for(process)
        package_name = sanitize_package_name(f"{config.package_name}.controller")
        endpoints = synthesize_endpoints(process)

        context = self._build_context(process, config, class_name, package_name, endpoints)
        content = self.render_or_record(config.templates.controller, context, "controller")
        if content is None:
            return None

        return self.create_generated_file(
            self.source_path(package_name, class_name), content, FileKind.CONTROLLER
        )

    def _build_context(
        self,
        process: Process,
        config: GenerationConfig,
        class_name: str,
        package_name: str,
        endpoints: List[Endpoint],
    ) -> Dict[str, Any]:
        options = config.options
        validation = validation_package_for(config.spring_boot_version)
        has_validation = options.use_validation and any(e.has_request_body for e in endpoints)

        return {
            "package_name": package_name,
            "class_name": class_name,
            "imports": self._imports(config, endpoints, validation, has_validation),
            "process_name": process.name,
            "description": process.description,
            "endpoints": [self._endpoint_context(e, has_validation) for e in endpoints],
            "has_validation": has_validation,
            "use_lombok": options.use_lombok,
        }

    def _imports(
        self,
        config: GenerationConfig,
        endpoints: List[Endpoint],
        validation: str,
        has_validation: bool,
    ) -> List[str]:
        imports = [
            SPRING_IMPORTS["web"],
            SPRING_IMPORTS["http"],
            f"{sanitize_package_name(config.package_name)}.dto.*",
        ]
        if has_validation:
            imports.append(f"{validation}.Valid")
        if config.options.use_lombok:
            imports.append(SPRING_IMPORTS["slf4j"])
        if any(e.has_query_params for e in endpoints):
            imports.append("java.util.Map")
        return self.generate_imports(imports)

    def _endpoint_context(self, endpoint: Endpoint, has_validation: bool) -> Dict[str, Any]:
        # Path variables must not shadow the fixed parameters or Java keywords
        names = create_java_sanitizer()
        names.add_used_name("request")
        names.add_used_name("queryParams")
        parameters = [
            f'@PathVariable("{name}") String {names.sanitize_name(name)}'
            for name in endpoint.path_variables
        ]
        if endpoint.has_request_body:
            valid = "@Valid " if has_validation else ""
            parameters.append(f"{valid}@RequestBody {endpoint.request_type} request")
        if endpoint.has_query_params:
            parameters.append("@RequestParam Map<String, String> queryParams")

        return {
            "activity_name": endpoint.activity_name,
            "method": endpoint.method,
            "path": endpoint.path,
            "method_name": endpoint.method_name,
            "request_type": endpoint.request_type,
            "response_type": endpoint.response_type,
            "description": endpoint.description,
            "has_request_body": endpoint.has_request_body,
            "has_path_variables": endpoint.has_path_variables,
            "has_query_params": endpoint.has_query_params,
            "parameters": parameters,
        }
