"""Tests for the generator registry."""

import pytest

from tibco_converter.codegen import (
    ControllerGenerator,
    DtoGenerator,
    GenerationOptions,
    GeneratorRegistry,
    PROCESS_MODEL,
    RegistryError,
    SCHEMA_MODEL,
    TemplateEngine,
    create_default_registry,
)


class TestGeneratorRegistry:
    """Tests for registering and creating generators."""

    def setup_method(self):
        self.registry = create_default_registry()

    def test_default_generators(self):
        assert self.registry.list_generators() == ["controller", "dto"]
        assert self.registry.get_generator_class("controller") is ControllerGenerator
        assert self.registry.get_generator_class("DTO") is DtoGenerator

    def test_generators_for_model(self):
        assert self.registry.generators_for(PROCESS_MODEL) == ["controller"]
        assert self.registry.generators_for(SCHEMA_MODEL) == ["dto"]

    def test_generators_for_respects_options(self):
        options = GenerationOptions(generate_controllers=False)
        assert self.registry.generators_for(PROCESS_MODEL, options) == []
        assert self.registry.generators_for(SCHEMA_MODEL, options) == ["dto"]

    def test_create_generator(self):
        engine = TemplateEngine()
        generator = self.registry.create_generator("controller", template_engine=engine, verbose=True)
        assert isinstance(generator, ControllerGenerator)
        assert generator.template_engine is engine
        assert generator.verbose

    def test_unknown_generator(self):
        with pytest.raises(RegistryError, match="Available: controller, dto"):
            self.registry.create_generator("service")

    def test_register_requires_generator_class(self):
        with pytest.raises(RegistryError):
            self.registry.register("thing", object, PROCESS_MODEL)

    def test_register_rejects_unknown_model(self):
        with pytest.raises(RegistryError):
            self.registry.register("other", ControllerGenerator, "wsdl")

    def test_register_rejects_unknown_option(self):
        with pytest.raises(RegistryError):
            self.registry.register("other", ControllerGenerator, PROCESS_MODEL, "generate_magic")

    def test_duplicate_registration(self):
        with pytest.raises(RegistryError):
            self.registry.register("controller", ControllerGenerator, PROCESS_MODEL)
        self.registry.register("controller", ControllerGenerator, PROCESS_MODEL, replace=True)
        assert self.registry.get_info("controller")["option"] is None

    def test_unregister(self):
        self.registry.unregister("dto")
        self.registry.unregister("unknown")
        assert self.registry.list_generators() == ["controller"]

    def test_get_info(self):
        info = self.registry.get_info("dto")
        assert info == {
            "name": "dto",
            "class": "DtoGenerator",
            "model": SCHEMA_MODEL,
            "option": "generate_dtos",
            "module": "tibco_converter.codegen.spring.dto",
        }

    def test_empty_registry(self):
        registry = GeneratorRegistry()
        assert registry.list_generators() == []
        with pytest.raises(RegistryError, match="Available: none"):
            registry.get_generator_class("controller")
