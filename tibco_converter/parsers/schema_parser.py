"""
XML Schema parser.

Turns ``.xsd`` markup into a ``Schema`` model of elements, named types and
imports. Type references are kept as written; imports are recorded, never
fetched.
"""

from typing import List, Optional, Union

from ..diagnostics import ParseResult, ValidationResult
from ..logging_config import get_logger
from ..models.schema import (
    Element,
    Import,
    Restriction,
    RestrictionKind,
    Schema,
    SchemaType,
    TypeKind,
    UNBOUNDED,
)
from . import xml_tree
from .base import BaseParser, ParserConfig, item_locator
from .xml_tree import TreeNode

logger = get_logger(__name__)

XML_SCHEMA_NAMESPACE = "http://www.w3.org/2001/XMLSchema"

SCHEMA_MARKERS = ("xs:schema", "xsd:schema", "<schema")

ROOT_CANDIDATES = ["xs:schema", "xsd:schema", "schema"]

PROPERTY_GROUPINGS = ("sequence", "choice", "all")

# Where derived complex types keep their own groupings
DERIVED_CONTENT = (("complexContent", "extension"), ("complexContent", "restriction"))

BASE_TYPE_LOCATIONS = (
    ("extension",),
    ("complexContent", "extension"),
    ("simpleContent", "extension"),
    ("restriction",),
    ("complexContent", "restriction"),
    ("simpleContent", "restriction"),
)

# Facet -> restriction kind; None marks facets that are recognised but not kept
FACETS = {
    "pattern": RestrictionKind.PATTERN,
    "length": RestrictionKind.LENGTH,
    "minLength": RestrictionKind.MIN_LENGTH,
    "maxLength": RestrictionKind.MAX_LENGTH,
    "enumeration": RestrictionKind.ENUMERATION,
    "minInclusive": None,
    "maxInclusive": None,
    "minExclusive": None,
    "maxExclusive": None,
}

LENGTH_KINDS = frozenset(
    [RestrictionKind.LENGTH, RestrictionKind.MIN_LENGTH, RestrictionKind.MAX_LENGTH]
)


def parse_occurs(value: Optional[str], default: int = 1) -> Union[int, str]:
    """
    Parse a minOccurs/maxOccurs value.

    Raises:
        ValueError: If the value is neither an integer nor ``unbounded``
    """
    if value is None or value.strip() == "":
        return default
    value = value.strip()
    if value == UNBOUNDED:
        return UNBOUNDED
    return int(value)


def restriction_value(kind: RestrictionKind, value: str) -> Union[str, int]:
    """Length-kind values become ints when numeric; others stay literal."""
    if kind in LENGTH_KINDS and value.strip().isdigit():
        return int(value.strip())
    return value


class SchemaParser(BaseParser[Schema]):
    """
    Parser for XML Schema documents.

    Example:
        >>> result = SchemaParser().parse(text)
        >>> for schema_type in result.data.complex_types:
        ...     print(schema_type.name, [p.name for p in schema_type.properties])
    """

    source_name = "schema"

    def parse(self, text: str) -> ParseResult[Schema]:
        """
        Parse schema markup.

        Args:
            text: Raw XSD

        Returns:
            ParseResult holding the Schema, or None when the document is
            malformed or is not a schema
        """
        self.clear_diagnostics()

        self._check_document(text)
        if self.errors:
            return self.create_result(None)

        try:
            tree = self.load_tree(text)
            if tree is None:
                return self.create_result(None)

            definition = self.find_root(tree, ROOT_CANDIDATES, "schema")
            if definition is None:
                self.add_error("No schema definition found", self.source_name, "NO_SCHEMA_DEF")
                return self.create_result(None)

            schema = Schema(
                target_namespace=xml_tree.attr_or_child(definition, "targetNamespace"),
                elements=self._extract_elements(definition),
                types=self._extract_types(definition),
                imports=self._extract_imports(definition),
            )
            logger.info(
                "Parsed schema: %d elements, %d types, %d imports",
                len(schema.elements),
                len(schema.types),
                len(schema.imports),
            )
            return self.create_result(schema)

        except Exception as e:
            self.handle_error(e, self.source_name, "PARSE_ERROR")
            if not self.config.continue_on_error:
                raise
            return self.create_result(None)

    def validate(self, text: str) -> ValidationResult:
        """Check that text looks like a schema without building it."""
        self.clear_diagnostics()
        self._check_document(text)
        return self.create_validation_result()

    def _check_document(self, text: str) -> None:
        self.check_structure(text)

        if not any(marker in text for marker in SCHEMA_MARKERS):
            self.add_error(
                "Not a valid XSD file - missing schema element",
                self.source_name,
                "INVALID_XSD",
            )

        if XML_SCHEMA_NAMESPACE not in xml_tree.namespaces(text).values():
            self.add_warning(
                "Missing XML Schema namespace declaration",
                "namespaces",
                "MISSING_XS_NAMESPACE",
            )

    # Elements

    def _extract_elements(self, definition: TreeNode) -> List[Element]:
        return self._collect_elements(xml_tree.iter_nodes(definition, "element"))

    def _collect_elements(self, nodes) -> List[Element]:
        elements = []
        for node in nodes:
            try:
                element = self._parse_element(node)
            except Exception as e:
                locator = item_locator("element", xml_tree.attr_or_child(node, "name"))
                self.recover(e, locator, "ELEMENT_PARSE_ERROR")
                continue
            if element is not None:
                elements.append(element)
        return elements

    def _parse_element(self, node: TreeNode) -> Optional[Element]:
        name = xml_tree.attr_or_child(node, "name")
        if not name:
            self.add_warning("Element missing name", "element", "MISSING_ELEMENT_NAME")
            return None

        min_occurs = parse_occurs(node.attr("minOccurs"))
        if min_occurs == UNBOUNDED:
            raise ValueError(f"minOccurs of '{name}' cannot be unbounded")

        return Element(
            name=name,
            type_name=node.attr("type") or "string",
            min_occurs=min_occurs,
            max_occurs=parse_occurs(node.attr("maxOccurs")),
            documentation=self._documentation(node),
        )

    def _documentation(self, node: TreeNode) -> Optional[str]:
        documentation = xml_tree.descend(node, "annotation", "documentation")
        if documentation is None or not documentation.text:
            return None
        return documentation.text

    # Types

    def _extract_types(self, definition: TreeNode) -> List[SchemaType]:
        types = []
        for node in xml_tree.iter_nodes(definition, "complexType"):
            schema_type = self._parse_complex_type(node)
            if schema_type is not None:
                types.append(schema_type)

        for node in xml_tree.iter_nodes(definition, "simpleType"):
            schema_type = self._parse_simple_type(node)
            if schema_type is not None:
                types.append(schema_type)
        return types

    def _parse_complex_type(self, node: TreeNode) -> Optional[SchemaType]:
        name = node.attr("name")
        if not name:
            self.add_warning("Complex type missing name", "complexType", "MISSING_TYPE_NAME")
            return None

        containers = [node]
        for path in DERIVED_CONTENT:
            derived = xml_tree.descend(node, *path)
            if derived is not None:
                containers.append(derived)

        properties: List[Element] = []
        for container in containers:
            for grouping in PROPERTY_GROUPINGS:
                group = xml_tree.find_child(container, grouping)
                if group is not None:
                    properties.extend(
                        self._collect_elements(xml_tree.iter_nodes(group, "element"))
                    )

        return SchemaType(
            name=name,
            kind=TypeKind.COMPLEX,
            base_type=self._base_type(node),
            properties=properties,
        )

    def _parse_simple_type(self, node: TreeNode) -> Optional[SchemaType]:
        name = node.attr("name")
        if not name:
            self.add_warning("Simple type missing name", "simpleType", "MISSING_TYPE_NAME")
            return None

        return SchemaType(
            name=name,
            kind=TypeKind.SIMPLE,
            base_type=self._base_type(node),
            restrictions=self._restrictions(node),
        )

    def _base_type(self, node: TreeNode) -> Optional[str]:
        for path in BASE_TYPE_LOCATIONS:
            derivation = xml_tree.descend(node, *path)
            if derivation is not None and derivation.attr("base"):
                return derivation.attr("base")
        return None

    def _restrictions(self, node: TreeNode) -> List[Restriction]:
        restriction = xml_tree.find_child(node, "restriction")
        if restriction is None:
            return []

        restrictions = []
        for facet, kind in FACETS.items():
            for facet_node in xml_tree.iter_nodes(restriction, facet):
                value = facet_node.attr("value")
                if value is None:
                    continue
                if kind is None:
                    logger.debug("Ignoring %s facet with value %s", facet, value)
                    continue
                restrictions.append(Restriction(kind=kind, value=restriction_value(kind, value)))
        return restrictions

    # Imports

    def _extract_imports(self, definition: TreeNode) -> List[Import]:
        imports = []
        for node in xml_tree.iter_nodes(definition, "import"):
            namespace = node.attr("namespace")
            location = node.attr("schemaLocation")
            if namespace and location:
                imports.append(Import(namespace=namespace, schema_location=location))
        return imports


def extract_schema(text: str, config: Optional[ParserConfig] = None) -> ParseResult[Schema]:
    """Parse schema markup with a fresh parser."""
    return SchemaParser(config).parse(text)
