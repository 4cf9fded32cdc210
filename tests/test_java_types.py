"""Tests for Java/Spring lookup helpers."""

from tibco_converter.codegen.spring.types import (
    http_method_annotation,
    if_eq,
    if_ne,
    java_imports,
    java_string,
    java_type,
    spring_imports,
    validation_annotations,
    validation_package_for,
)
from tibco_converter.models import Element, Restriction, RestrictionKind


class TestJavaType:
    """Tests for the XSD to Java type table."""

    def test_known_types(self):
        assert java_type("string") == "String"
        assert java_type("xs:int") == "Integer"
        assert java_type("xsd:dateTime") == "LocalDateTime"
        assert java_type("decimal") == "BigDecimal"

    def test_unknown_types_default_to_string(self):
        assert java_type("tns:Custom") == "String"
        assert java_type(None) == "String"

    def test_java_imports(self):
        assert java_imports(["String", "List", "LocalDate", "List"]) == [
            "java.time.LocalDate",
            "java.util.List",
        ]


class TestValidationAnnotations:
    """Tests for bean-validation annotation synthesis."""

    def test_required_only(self):
        assert validation_annotations(Element("name")) == ["@NotNull"]

    def test_optional_without_restrictions(self):
        assert validation_annotations(Element("name", min_occurs=0)) == []

    def test_not_null_comes_first(self):
        annotations = validation_annotations(
            Element("code"), [Restriction(RestrictionKind.PATTERN, "[A-Z]+")]
        )
        assert annotations == ["@NotNull", '@Pattern(regexp = "[A-Z]+")']

    def test_length_kinds(self):
        element = Element("code", min_occurs=0)
        assert validation_annotations(element, [Restriction(RestrictionKind.LENGTH, 5)]) == [
            "@Size(min = 5, max = 5)"
        ]
        assert validation_annotations(
            element,
            [
                Restriction(RestrictionKind.MIN_LENGTH, 1),
                Restriction(RestrictionKind.MAX_LENGTH, 10),
            ],
        ) == ["@Size(min = 1)", "@Size(max = 10)"]

    def test_enumerations_become_one_pattern(self):
        annotations = validation_annotations(
            Element("version", min_occurs=0),
            [
                Restriction(RestrictionKind.ENUMERATION, "1.0"),
                Restriction(RestrictionKind.ENUMERATION, "2.0"),
            ],
        )
        assert annotations == ['@Pattern(regexp = "1\\\\.0|2\\\\.0")']

    def test_pattern_is_escaped_for_java(self):
        annotations = validation_annotations(
            Element("digits", min_occurs=0), [Restriction(RestrictionKind.PATTERN, "\\d+")]
        )
        assert annotations == ['@Pattern(regexp = "\\\\d+")']


class TestHelpers:
    """Tests for the remaining template helpers."""

    def test_java_string(self):
        assert java_string('say "hi"\n') == 'say \\"hi\\"\\n'

    def test_http_method_annotation(self):
        assert http_method_annotation("get") == "@GetMapping"
        assert http_method_annotation("DELETE") == "@DeleteMapping"
        assert http_method_annotation("OPTIONS") == "@RequestMapping"
        assert http_method_annotation(None) == "@RequestMapping"

    def test_branching(self):
        assert if_eq("a", "a", "yes", "no") == "yes"
        assert if_eq("a", "b", "yes", "no") == "no"
        assert if_ne("a", "b", "yes") == "yes"
        assert if_ne("a", "a", "yes") == ""

    def test_spring_imports(self):
        assert spring_imports(["web", "validation", "unknown", "web"], "javax.validation") == [
            "import org.springframework.web.bind.annotation.*;",
            "import javax.validation.constraints.*;",
        ]

    def test_validation_package(self):
        assert validation_package_for("3.1.0") == "jakarta.validation"
        assert validation_package_for("2.7.18") == "javax.validation"
        assert validation_package_for("latest") == "jakarta.validation"
