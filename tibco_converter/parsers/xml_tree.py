"""
Schema-agnostic XML tree loading and lookup.

Parses markup with lxml into a light ``TreeNode`` tree and offers the
path- and tag-based lookups the process and schema parsers are built on.
Nothing here knows about BusinessWorks or XML Schema.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from lxml import etree

from ..diagnostics import ConverterError
from ..logging_config import get_logger

logger = get_logger(__name__)

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"
DOCUMENT_TAG = "#document"

# Tags that are always rendered as lists by TreeNode.to_dict()
REPEATABLE_TAGS = frozenset(
    ["activity", "transition", "variable", "mapping", "element", "type"]
)

_NAMESPACE_RE = re.compile(r"""xmlns(?::([\w.\-]+))?\s*=\s*["']([^"']*)["']""")

# Markup that contains '<' or '>' without being a tag
_MASKED_RE = re.compile(
    r"<!--.*?-->|<!\[CDATA\[.*?\]\]>|<\?.*?\?>|<!DOCTYPE[^>]*>",
    re.DOTALL | re.IGNORECASE,
)

# Quoted attribute values may contain '>'
_TAG_BODY = r"""(?:"[^"]*"|'[^']*'|[^'">])*"""
_OPEN_TAG_RE = re.compile(r"<[^/!?]" + _TAG_BODY + ">")
_CLOSE_TAG_RE = re.compile(r"</[^>]*>")
_SELF_CLOSING_RE = re.compile(r"<[^/!?]" + _TAG_BODY + "/>")


class TreeParseError(ConverterError):
    """Raised when markup is not well-formed."""

    pass


def local_name(name: str) -> str:
    """
    Strip a namespace from a tag or attribute name.

    Handles both ``prefix:local`` and lxml's ``{uri}local`` forms. This is the
    only place names are normalised.
    """
    if name.startswith("{"):
        name = name.split("}", 1)[1]
    if ":" in name:
        name = name.rsplit(":", 1)[1]
    return name


@dataclass
class TreeNode:
    """One element of a loaded document."""

    name: str  # Qualified name as written, e.g. "pd:activity"
    tag: str  # Local name, e.g. "activity"
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children and not self.attributes

    def attr(self, name: str) -> Optional[str]:
        """Attribute value by local name."""
        return self.attributes.get(local_name(name))

    def to_dict(self) -> Dict[str, Any]:
        """
        Render the generic mapping form of this node.

        Attributes are keyed with ``@_``, text with ``#text``; leaf children
        collapse to their text and repeatable tags are always lists.
        """
        result: Dict[str, Any] = {
            f"{ATTRIBUTE_PREFIX}{key}": value for key, value in self.attributes.items()
        }
        if self.text:
            result[TEXT_KEY] = self.text

        for child in self.children:
            value: Any = (child.text or "") if child.is_leaf else child.to_dict()
            existing = result.get(child.name)
            if existing is None:
                result[child.name] = [value] if child.tag in REPEATABLE_TAGS else value
            elif isinstance(existing, list):
                existing.append(value)
            else:
                result[child.name] = [existing, value]

        return result


@dataclass
class StructuralCheck:
    """Result of the heuristic well-formedness check."""

    valid: bool
    errors: List[str] = field(default_factory=list)


def _build_node(element: etree._Element) -> TreeNode:
    qname = etree.QName(element)
    name = f"{element.prefix}:{qname.localname}" if element.prefix else qname.localname

    attributes = {local_name(key): value for key, value in element.attrib.items()}
    text = element.text.strip() if element.text and element.text.strip() else None

    children = [
        _build_node(child) for child in element if isinstance(child.tag, str)
    ]

    return TreeNode(
        name=name,
        tag=qname.localname,
        attributes=attributes,
        text=text,
        children=children,
    )


def load(text: str) -> TreeNode:
    """
    Parse markup into a document node.

    Args:
        text: UTF-8 XML text

    Returns:
        Synthetic document node whose single child is the root element

    Raises:
        TreeParseError: If the markup is not well-formed
    """
    parser = etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )
    try:
        root = etree.fromstring(text.lstrip("\ufeff").encode("utf-8"), parser)
    except etree.XMLSyntaxError as e:
        raise TreeParseError(f"Failed to parse XML: {e}") from e
    except ValueError as e:
        raise TreeParseError(f"Failed to parse XML: {e}") from e

    logger.debug("Loaded XML document with root <%s>", root.tag)
    return TreeNode(name=DOCUMENT_TAG, tag=DOCUMENT_TAG, children=[_build_node(root)])


def value_at(tree: TreeNode, path: str) -> Union[TreeNode, str, None]:
    """
    Look up a dotted path such as ``pd:ProcessDefinition.pd:name``.

    Each segment matches a direct child by qualified name, then by local
    name. A segment starting with ``@`` reads an attribute and must be last.
    """
    current: Union[TreeNode, str, None] = tree
    segments = path.split(".")

    for index, segment in enumerate(segments):
        if not isinstance(current, TreeNode):
            return None

        if segment.startswith("@"):
            if index != len(segments) - 1:
                return None
            return current.attr(segment[1:])

        match = next((c for c in current.children if c.name == segment), None)
        if match is None:
            wanted = local_name(segment)
            match = next((c for c in current.children if c.tag == wanted), None)
        current = match

    return current


def iter_nodes(tree: TreeNode, tag: str) -> Iterator[TreeNode]:
    """
    Yield descendants whose local name matches ``tag``, in document order.

    Matching ignores namespace prefixes on both sides. A match is not
    searched further, so nested elements of the same name are not repeated.
    """
    wanted = local_name(tag)
    for child in tree.children:
        if child.tag == wanted:
            yield child
        else:
            yield from iter_nodes(child, wanted)


def nodes_named(tree: TreeNode, tag: str) -> List[TreeNode]:
    """List form of ``iter_nodes``."""
    return list(iter_nodes(tree, tag))


def find_child(node: TreeNode, *names: str) -> Optional[TreeNode]:
    """First direct child matching any of ``names`` (tried in order)."""
    for name in names:
        wanted = local_name(name)
        for child in node.children:
            if child.tag == wanted:
                return child
    return None


def find_children(node: TreeNode, name: str) -> List[TreeNode]:
    """All direct children with the given local name."""
    wanted = local_name(name)
    return [child for child in node.children if child.tag == wanted]


def descend(node: TreeNode, *path: str) -> Optional[TreeNode]:
    """Follow a chain of direct children, e.g. ``complexContent``, ``extension``."""
    current: Optional[TreeNode] = node
    for name in path:
        if current is None:
            return None
        current = find_child(current, name)
    return current


def child_text(node: TreeNode, name: str) -> Optional[str]:
    child = find_child(node, name)
    return child.text if child is not None else None


def attr_or_child(node: TreeNode, name: str) -> Optional[str]:
    """Attribute value, falling back to a child element's text."""
    value = node.attr(name)
    if value:
        return value
    text = child_text(node, name)
    return text or None


def structural_check(text: str) -> StructuralCheck:
    """
    Cheap well-formedness heuristic.

    The text must start with ``<`` and end with ``>``, and after masking
    comments, CDATA, declarations and DOCTYPE the number of opening tags must
    equal closing plus self-closing tags. This is not a grammar check.
    """
    errors = []
    stripped = text.strip().lstrip("\ufeff")

    if not stripped.startswith("<"):
        errors.append("XML must start with an opening tag")

    if not stripped.endswith(">"):
        errors.append("XML must end with a closing tag")

    masked = _MASKED_RE.sub("", stripped)
    open_tags = len(_OPEN_TAG_RE.findall(masked))
    close_tags = len(_CLOSE_TAG_RE.findall(masked))
    self_closing = len(_SELF_CLOSING_RE.findall(masked))

    if open_tags != close_tags + self_closing:
        errors.append("Unbalanced XML tags detected")

    return StructuralCheck(valid=not errors, errors=errors)


def namespaces(text: str) -> Dict[str, str]:
    """
    Collect ``xmlns`` declarations by regular expression.

    The default namespace is keyed ``"default"``. Later declarations of the
    same prefix win.
    """
    found = {}
    for prefix, uri in _NAMESPACE_RE.findall(text):
        found[prefix or "default"] = uri
    return found
