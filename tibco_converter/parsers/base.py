"""
Shared parser plumbing: configuration and the structural pre-checks.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..diagnostics import DiagnosticsMixin, ParseResult, ValidationResult
from ..logging_config import get_logger
from . import xml_tree
from .xml_tree import TreeNode, TreeParseError

logger = get_logger(__name__)

T = TypeVar("T")


def item_locator(kind: str, label: Optional[str]) -> str:
    """Diagnostic source for one item, e.g. ``activity 'ReceiveOrder'``."""
    return f"{kind} '{label}'" if label else kind


@dataclass
class ParserConfig:
    """
    Parser behaviour switches.

    Attributes:
        verbose: Keep exception text and tracebacks in diagnostics
        continue_on_error: Record unexpected exceptions and keep going;
            when False they are re-raised after being recorded
    """

    verbose: bool = False
    continue_on_error: bool = True


class BaseParser(DiagnosticsMixin, ABC, Generic[T]):
    """Base class for document parsers."""

    source_name = "document"

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self.verbose = self.config.verbose
        self.clear_diagnostics()

    @abstractmethod
    def parse(self, text: str) -> ParseResult[T]:
        """Parse raw text into a model."""
        pass

    @abstractmethod
    def validate(self, text: str) -> ValidationResult:
        """Run the pre-parse checks only."""
        pass

    def check_structure(self, text: str) -> None:
        """Record an ``XML_INVALID`` error per structural check failure."""
        check = xml_tree.structural_check(text)
        for message in check.errors:
            self.add_error(message, self.source_name, "XML_INVALID")

    def load_tree(self, text: str) -> Optional[TreeNode]:
        """Load the document, recording ``PARSE_ERROR`` on failure."""
        try:
            return xml_tree.load(text)
        except TreeParseError as e:
            self.handle_error(e, self.source_name, "PARSE_ERROR")
            return None

    def find_root(self, tree: TreeNode, candidates, fallback: str) -> Optional[TreeNode]:
        """
        Resolve the document root.

        Args:
            tree: Document node from ``xml_tree.load``
            candidates: Root names tried in order against the document
            fallback: Tag searched recursively when no candidate matches

        Returns:
            The root node, or None
        """
        for candidate in candidates:
            node = xml_tree.value_at(tree, candidate)
            if isinstance(node, TreeNode):
                return node

        matches = xml_tree.nodes_named(tree, fallback)
        return matches[0] if matches else None

    def recover(self, error: Exception, source: str, code: str) -> None:
        """
        Downgrade a per-item failure to a warning.

        Re-raises when ``continue_on_error`` is off.
        """
        logger.warning("Skipping %s: %s", source, error)
        self.add_warning(f"Failed to parse {source}: {error}", source, code)
        if not self.config.continue_on_error:
            raise error
