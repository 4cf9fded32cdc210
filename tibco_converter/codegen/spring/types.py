"""
Java and Spring lookup tables plus the template helpers built on them.

Every table lookup has an explicit default; none of these helpers raise on
unknown input.
"""

from typing import Any, Dict, Iterable, List, Optional

from ...models.schema import Restriction, RestrictionKind

DEFAULT_JAVA_TYPE = "String"
DEFAULT_MAPPING_ANNOTATION = "@RequestMapping"

# XSD primitive -> Java type
JAVA_TYPES: Dict[str, str] = {
    "string": "String",
    "int": "Integer",
    "integer": "Integer",
    "long": "Long",
    "short": "Short",
    "double": "Double",
    "float": "Float",
    "boolean": "Boolean",
    "date": "LocalDate",
    "dateTime": "LocalDateTime",
    "time": "LocalTime",
    "decimal": "BigDecimal",
    "base64Binary": "byte[]",
    "anyURI": "String",
}

# Java type -> import it needs
JAVA_TYPE_IMPORTS: Dict[str, str] = {
    "LocalDate": "java.time.LocalDate",
    "LocalDateTime": "java.time.LocalDateTime",
    "LocalTime": "java.time.LocalTime",
    "BigDecimal": "java.math.BigDecimal",
    "List": "java.util.List",
}

HTTP_METHOD_ANNOTATIONS: Dict[str, str] = {
    "GET": "@GetMapping",
    "POST": "@PostMapping",
    "PUT": "@PutMapping",
    "DELETE": "@DeleteMapping",
    "PATCH": "@PatchMapping",
}

# Feature -> import; "validation" is filled in per validation package
SPRING_IMPORTS: Dict[str, str] = {
    "web": "org.springframework.web.bind.annotation.*",
    "http": "org.springframework.http.ResponseEntity",
    "jpa": "org.springframework.data.jpa.repository.*",
    "service": "org.springframework.stereotype.Service",
    "component": "org.springframework.stereotype.Component",
    "autowired": "org.springframework.beans.factory.annotation.Autowired",
    "validation": "{validation}.constraints.*",
    "valid": "{validation}.Valid",
    "lombok": "lombok.*",
    "slf4j": "lombok.extern.slf4j.Slf4j",
}


def validation_package_for(spring_boot_version: str) -> str:
    """``jakarta.validation`` from Spring Boot 3 on, ``javax.validation`` before."""
    try:
        major = int(str(spring_boot_version).split(".")[0])
    except ValueError:
        return "jakarta.validation"
    return "jakarta.validation" if major >= 3 else "javax.validation"


def java_type(xsd_type: Optional[str]) -> str:
    """Map an XSD primitive (prefix ignored) to a Java type."""
    if not xsd_type:
        return DEFAULT_JAVA_TYPE
    return JAVA_TYPES.get(str(xsd_type).rsplit(":", 1)[-1], DEFAULT_JAVA_TYPE)


def java_string(value: Any) -> str:
    """Escape a value for use inside a Java string literal."""
    return (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def _enumeration_pattern(values: Iterable[Any]) -> str:
    escaped = []
    for value in values:
        text = str(value)
        for char in "\\.^$|?*+()[]{}":
            text = text.replace(char, "\\" + char)
        escaped.append(text)
    return "|".join(escaped)


def validation_annotations(
    element: Any, restrictions: Optional[List[Restriction]] = None
) -> List[str]:
    """
    Build bean-validation annotations for a field.

    Args:
        element: Element (or anything with ``required``/``restrictions``)
        restrictions: Restrictions to apply; defaults to the element's own

    Returns:
        Annotation lines, ``@NotNull`` first when the element is required
    """
    annotations = []
    if getattr(element, "required", False):
        annotations.append("@NotNull")

    if restrictions is None:
        restrictions = getattr(element, "restrictions", None) or []

    enumerations = [r.value for r in restrictions if r.kind == RestrictionKind.ENUMERATION]

    for restriction in restrictions:
        kind, value = restriction.kind, restriction.value
        if kind == RestrictionKind.PATTERN:
            annotations.append(f'@Pattern(regexp = "{java_string(value)}")')
        elif kind == RestrictionKind.LENGTH:
            annotations.append(f"@Size(min = {value}, max = {value})")
        elif kind == RestrictionKind.MIN_LENGTH:
            annotations.append(f"@Size(min = {value})")
        elif kind == RestrictionKind.MAX_LENGTH:
            annotations.append(f"@Size(max = {value})")

    if enumerations:
        pattern = _enumeration_pattern(enumerations)
        annotations.append(f'@Pattern(regexp = "{java_string(pattern)}")')

    return annotations


def if_eq(a: Any, b: Any, then: Any, otherwise: Any = "") -> Any:
    return then if a == b else otherwise


def if_ne(a: Any, b: Any, then: Any, otherwise: Any = "") -> Any:
    return then if a != b else otherwise


def http_method_annotation(verb: Optional[str]) -> str:
    """Spring mapping annotation for an HTTP verb."""
    return HTTP_METHOD_ANNOTATIONS.get(str(verb or "").upper(), DEFAULT_MAPPING_ANNOTATION)


def spring_imports(
    features: Iterable[str], validation_package: str = "jakarta.validation"
) -> List[str]:
    """Import statements for the named features; unknown features are dropped."""
    lines = []
    for feature in features:
        target = SPRING_IMPORTS.get(feature)
        if target is None:
            continue
        line = f"import {target.format(validation=validation_package)};"
        if line not in lines:
            lines.append(line)
    return lines


def java_imports(types: Iterable[str]) -> List[str]:
    """Imports needed by the given Java type names."""
    targets = {JAVA_TYPE_IMPORTS[t] for t in types if t in JAVA_TYPE_IMPORTS}
    return sorted(targets)


# Template helpers, registered by the template engine
JAVA_HELPERS: Dict[str, Any] = {
    "java_type": java_type,
    "java_string": java_string,
    "validation_annotations": validation_annotations,
    "if_eq": if_eq,
    "if_ne": if_ne,
    "http_method_annotation": http_method_annotation,
    "spring_imports": spring_imports,
}
