"""Query and update KDL documents.

Zellij stores both its configuration and its bundled theme definitions as
KDL. This module wraps the ``kdl`` parser with the handful of operations the
theme picker needs: listing the children of a top-level node and replacing a
top-level scalar node such as ``theme "dracula"``.
"""

from __future__ import annotations

import re

import kdl

from zeltheme.errors import DocumentParseError
from zeltheme.logger import get_logger

logger = get_logger(__name__)

THEMES_NODE = "themes"
THEME_NODE = "theme"

# Keep numbers and strings in their source form (1 stays 1, 0x10 stays 0x10)
PARSE_CONFIG = kdl.ParseConfig(nativeUntaggedValues=False)

_STRING_PATTERN = re.compile(r'"(?:\\.|[^"\\])*"')
_COMMENT_MARKERS = ("//", "/*", "/-")


def parse_document(text: str, source: str | None = None) -> kdl.Document:
    """Parse KDL text into a document tree.

    Args:
        text: The KDL source text.
        source: Optional description of where the text came from, for error messages.

    Returns:
        The parsed document.

    Raises:
        DocumentParseError: If the text is not valid KDL.
    """
    try:
        return kdl.parse(text, PARSE_CONFIG)
    except kdl.ParseError as exc:
        raise DocumentParseError(str(exc), source=source) from exc


def find_node(doc: kdl.Document, node_name: str) -> kdl.Node | None:
    """Return the first top-level node with the given name, if any."""
    for node in doc.nodes:
        if node.name == node_name:
            return node
    return None


def extract_child_node_names(doc: kdl.Document, node_name: str) -> list[str]:
    """List the names of the children of a top-level node.

    Args:
        doc: The document to search.
        node_name: Name of the top-level node whose children are wanted.

    Returns:
        Child node names in document order, or an empty list when the node is
        missing or has no children.
    """
    node = find_node(doc, node_name)
    if node is None or not node.nodes:
        return []
    return [child.name for child in node.nodes]


def extract_theme_names(text: str, source: str | None = None) -> list[str]:
    """Parse a theme definition file and list the themes it defines.

    Args:
        text: KDL text of the theme file.
        source: Optional description of where the text came from.

    Returns:
        Names of the children of the ``themes`` node.

    Raises:
        DocumentParseError: If the text is not valid KDL.
    """
    return extract_child_node_names(parse_document(text, source=source), THEMES_NODE)


def upsert_scalar_node(doc: kdl.Document, node_name: str, value: str) -> kdl.Document:
    """Set a top-level node to carry exactly one argument.

    An existing node keeps its position and children but loses all of its
    previous arguments and properties. A missing node is appended at the end
    of the document.

    Args:
        doc: The document to update in place.
        node_name: Name of the top-level node.
        value: The single argument the node should carry.

    Returns:
        The same document, for chaining.
    """
    node = find_node(doc, node_name)
    if node is None:
        logger.debug(f"Appending new {node_name!r} node")
        doc.nodes.append(kdl.Node(name=node_name, args=[value]))
    else:
        logger.debug(f"Replacing arguments of existing {node_name!r} node")
        node.args.clear()
        node.props.clear()
        node.args.append(value)
    return doc


def find_scalar_value(doc: kdl.Document, node_name: str) -> str | None:
    """Return the first string argument of a top-level node.

    Args:
        doc: The document to search.
        node_name: Name of the top-level node.

    Returns:
        The argument, or None when the node is missing or its first argument
        is not a string.
    """
    node = find_node(doc, node_name)
    if node is None or not node.args:
        return None
    # Tagged values are wrapped; untagged ones are plain Python values
    value = getattr(node.args[0], "value", node.args[0])
    if isinstance(value, str):
        return value
    return None


def serialize_document(doc: kdl.Document) -> str:
    """Render a document back to KDL text.

    Args:
        doc: The document to render.

    Returns:
        KDL text terminated by a newline.
    """
    text = str(doc)
    if not text.endswith("\n"):
        text += "\n"
    return text


def has_comments(text: str) -> bool:
    """Check whether KDL text contains comments that printing would drop.

    String literals are ignored so URLs such as ``"https://..."`` do not count.

    Args:
        text: KDL source text.

    Returns:
        True if the text has line, block or slashdash comments.
    """
    stripped = _STRING_PATTERN.sub('""', text)
    return any(marker in stripped for marker in _COMMENT_MARKERS)
