"""Conversion between MWS XML documents and plain Python structures.

A parsed document is a tree of three node kinds:

* leaf: ``str``, an element with text content only;
* mapping: ``dict``, an element with child elements, keyed by local tag name;
* sequence: ``list``, repeated sibling elements sharing a tag name.

Whether a child is a mapping or a sequence depends on how many siblings the
server sent, so callers go through :func:`normalize_items` and
:func:`as_list` instead of checking types themselves.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Mapping, Optional, Union

from ..signing import format_value

logger = logging.getLogger(__name__)

Node = Union[str, List[Any], Dict[str, Any]]

ATTRIBUTES_KEY = "_attributes"
VALUE_KEY = "_value"


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tag names."""
    return tag.rsplit("}", 1)[-1]


def element_to_node(element: ET.Element) -> Node:
    children = list(element)
    if not children:
        return element.text or ""

    node: Dict[str, Any] = {}
    for child in children:
        name = local_name(child.tag)
        value = element_to_node(child)
        if name not in node:
            node[name] = value
        elif isinstance(node[name], list):
            node[name].append(value)
        else:
            node[name] = [node[name], value]
    return node


def parse_document(content: Union[str, bytes]) -> Node:
    """Parse an XML response body into a document tree.

    The root element itself is dropped; the result is its content, so a
    ``ListOrdersResponse`` body yields ``{"ListOrdersResult": {...}, ...}``.
    Attributes are ignored.

    Raises:
        xml.etree.ElementTree.ParseError: If the body is not well-formed XML
    """
    return element_to_node(ET.fromstring(content))


def get_path(document: Any, *path: str, default: Any = None) -> Any:
    """Follow ``path`` through nested mappings, returning ``default`` if any step is missing."""
    node = document
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return default
        node = node[key]
    return node


def as_list(node: Any) -> List[Any]:
    """Treat a possibly-single node as a sequence. Empty leaves become ``[]``."""
    if node is None or node == "":
        return []
    if isinstance(node, list):
        return list(node)
    return [node]


def normalize_items(node: Any, id_field: str) -> List[Any]:
    """Normalize a result element that may hold one item or many.

    A single item arrives as a mapping that carries ``id_field`` directly;
    several arrive as a sequence of such mappings.
    """
    if isinstance(node, Mapping) and id_field not in node:
        logger.warning("Result item without %s field, keeping it as a single item", id_field)
    return as_list(node)


def _fill(element: ET.Element, value: Any) -> None:
    if value is None:
        return
    if not isinstance(value, Mapping):
        element.text = format_value(value)
        return

    for key, child in value.items():
        if key == ATTRIBUTES_KEY:
            if not isinstance(child, Mapping):
                raise ValueError(
                    f"{ATTRIBUTES_KEY} of <{element.tag}> must be a mapping, got {type(child).__name__}"
                )
            for name, attr in child.items():
                element.set(name, format_value(attr))
        elif key == VALUE_KEY:
            element.text = format_value(child)
        elif isinstance(child, (list, tuple)):
            for item in child:
                _fill(ET.SubElement(element, key), item)
        else:
            _fill(ET.SubElement(element, key), child)


def build_xml(data: Mapping[str, Any], root: str, encoding: Optional[str] = None) -> str:
    """Serialize a mapping to an XML document.

    Mapping keys become child elements and sequences become repeated sibling
    elements. An ``_attributes`` mapping sets attributes on its element and
    ``_value`` sets its text.

    Args:
        data: Document content
        root: Root element name
        encoding: Encoding named in the XML declaration, if any

    Returns:
        XML document as a string

    Raises:
        ValueError: If an ``_attributes`` value is not a mapping
    """
    element = ET.Element(root)
    _fill(element, data)
    if encoding:
        declaration = f'<?xml version="1.0" encoding="{encoding}"?>'
    else:
        declaration = '<?xml version="1.0"?>'
    return declaration + "\n" + ET.tostring(element, encoding="unicode")
