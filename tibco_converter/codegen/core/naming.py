"""
Naming utilities for safe Java code generation.

Handles name sanitization, case conversions, keyword conflicts
and the accessor/plural helpers exposed to templates.
"""

import re
from enum import Enum
from typing import Dict, Optional, Set


class NamingCase(Enum):
    """Different naming case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName
    KEBAB_CASE = "kebab"  # user-name


JAVA_RESERVED_WORDS = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while", "true", "false", "null",
    "var", "record", "yield",
}


def _words(value: str) -> list:
    """Split a name into lowercase words on case changes and separators."""
    text = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", str(value))
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", text)
    return [part.lower() for part in re.split(r"[^a-zA-Z0-9]+", text) if part]


def snake_case(value: str) -> str:
    """Convert string to snake_case."""
    return "_".join(_words(value))


def kebab_case(value: str) -> str:
    """Convert string to kebab-case."""
    return "-".join(_words(value))


def camel_case(value: str) -> str:
    """Convert string to camelCase."""
    parts = _words(value)
    if not parts:
        return str(value)
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


def pascal_case(value: str) -> str:
    """Convert string to PascalCase."""
    return "".join(p.capitalize() for p in _words(value))


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def pluralize(word: str) -> str:
    """Naive English plural: y -> ies, s/sh/ch -> +es, else +s."""
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith(("s", "sh", "ch")):
        return word + "es"
    return word + "s"


def getter(field_name: str) -> str:
    """Getter method name for a field, e.g. ``orderId`` -> ``getOrderId``."""
    return "get" + upper_first(camel_case(field_name))


def setter(field_name: str) -> str:
    """Setter method name for a field."""
    return "set" + upper_first(camel_case(field_name))


def sanitize_class_name(name: str) -> str:
    """
    Make a valid Java class name.

    Non-alphanumerics are removed at word boundaries; a name that does not
    start with a letter is prefixed with ``Generated``.
    """
    cleaned = pascal_case(name) if re.search(r"[^a-zA-Z0-9]", name) else name
    cleaned = re.sub(r"[^a-zA-Z0-9]", "", cleaned)
    if not cleaned or not cleaned[0].isalpha():
        cleaned = "Generated" + cleaned
    return upper_first(cleaned)


def sanitize_package_name(name: str) -> str:
    """Lowercase dotted package name with empty segments removed."""
    cleaned = re.sub(r"[^a-z0-9.]", "", name.lower())
    cleaned = re.sub(r"\.+", ".", cleaned)
    return cleaned.strip(".")


class NameSanitizer:
    """Handles name sanitization, case conversion and uniqueness."""

    def __init__(self, reserved_words: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
        """
        self.reserved_words = reserved_words or set()
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.CAMEL_CASE,
        suffix_on_conflict: str = "",
    ) -> str:
        """
        Sanitize a name and make it unique within this sanitizer.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix put before the counter on duplicates

        Returns:
            Sanitized name not returned before by this instance
        """
        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted, suffix_on_conflict)
        self._used_names.add(final_name)
        return final_name

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r"[^a-zA-Z0-9_-]", "_", name).strip("_-")
        if not cleaned:
            cleaned = "generated"
        if cleaned[0].isdigit():
            cleaned = f"generated_{cleaned}"
        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        """Convert name to target case style."""
        converters = {
            NamingCase.SNAKE_CASE: snake_case,
            NamingCase.CAMEL_CASE: camel_case,
            NamingCase.PASCAL_CASE: pascal_case,
            NamingCase.KEBAB_CASE: kebab_case,
        }
        return converters[target_case](name)

    def _resolve_conflicts(self, name: str, suffix: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name.lower() in self.reserved_words:
            name = f"{name}Action"

        original_name = name
        counter = 2
        while name in self._used_names:
            name = f"{original_name}{suffix}{counter}"
            counter += 1

        return name

    def reset_used_names(self):
        """Reset the tracking of used names."""
        self._used_names.clear()

    def add_used_name(self, name: str):
        """Manually add a name to the used names set."""
        self._used_names.add(name)


def create_java_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Java."""
    return NameSanitizer(JAVA_RESERVED_WORDS)


# Template helpers, registered by the template engine
NAMING_HELPERS: Dict[str, object] = {
    "camel_case": camel_case,
    "pascal_case": pascal_case,
    "snake_case": snake_case,
    "kebab_case": kebab_case,
    "pluralize": pluralize,
    "getter": getter,
    "setter": setter,
}


def base_name(name: str, extensions: Optional[tuple] = (".process", ".bwp")) -> str:
    """Strip directories and a process file extension from a process name."""
    name = re.split(r"[\\/]", name)[-1]
    for extension in extensions or ():
        if name.endswith(extension):
            return name[: -len(extension)]
    return name
