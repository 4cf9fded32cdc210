"""
Parsers for BusinessWorks processes and XML Schemas.
"""

from .base import BaseParser, ParserConfig
from .process_parser import ProcessParser, extract_process
from .schema_parser import SchemaParser, extract_schema
from .xml_tree import TreeNode, TreeParseError

__all__ = [
    "BaseParser",
    "ParserConfig",
    "ProcessParser",
    "SchemaParser",
    "TreeNode",
    "TreeParseError",
    "extract_process",
    "extract_schema",
]
