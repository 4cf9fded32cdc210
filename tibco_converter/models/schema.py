"""
Schema model for XML Schema (XSD) documents.

Type references stay as strings; nothing here resolves them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

UNBOUNDED = "unbounded"

Occurs = Union[int, str]  # int or UNBOUNDED


class TypeKind(Enum):
    SIMPLE = "SIMPLE"
    COMPLEX = "COMPLEX"


class RestrictionKind(Enum):
    PATTERN = "PATTERN"
    LENGTH = "LENGTH"
    MIN_LENGTH = "MIN_LENGTH"
    MAX_LENGTH = "MAX_LENGTH"
    ENUMERATION = "ENUMERATION"


@dataclass
class Restriction:
    kind: RestrictionKind
    value: Union[str, int]


@dataclass
class Element:
    """An element declaration, or a property of a complex type."""

    name: str
    type_name: str = "string"
    min_occurs: int = 1
    max_occurs: Occurs = 1
    documentation: Optional[str] = None

    @property
    def required(self) -> bool:
        return self.min_occurs > 0

    @property
    def is_repeated(self) -> bool:
        return self.max_occurs == UNBOUNDED or (
            isinstance(self.max_occurs, int) and self.max_occurs > 1
        )


@dataclass
class SchemaType:
    name: str
    kind: TypeKind
    base_type: Optional[str] = None
    properties: List[Element] = field(default_factory=list)
    restrictions: List[Restriction] = field(default_factory=list)


@dataclass
class Import:
    namespace: str
    schema_location: str


@dataclass
class Schema:
    """A parsed XML Schema document."""

    target_namespace: Optional[str] = None
    elements: List[Element] = field(default_factory=list)
    types: List[SchemaType] = field(default_factory=list)
    imports: List[Import] = field(default_factory=list)

    def get_type(self, name: str) -> Optional[SchemaType]:
        """Get type by name, ignoring any namespace prefix."""
        wanted = name.rsplit(":", 1)[-1]
        for schema_type in self.types:
            if schema_type.name == wanted:
                return schema_type
        return None

    @property
    def complex_types(self) -> List[SchemaType]:
        return [t for t in self.types if t.kind == TypeKind.COMPLEX]

    @property
    def simple_types(self) -> List[SchemaType]:
        return [t for t in self.types if t.kind == TypeKind.SIMPLE]
