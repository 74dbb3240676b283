"""
Generic XML tree used by the TestNG walker.

Every element is exposed as an ``Element`` whose children are grouped by tag
into ordered lists, so repeated siblings and single occurrences look the
same to callers. Attributes live in their own mapping, separate from the
child elements.
"""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import StructureError

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r'^\s*([+-]?\d+)')


@dataclass
class Element:
    """A parsed XML element."""
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: dict[str, list["Element"]] = field(default_factory=dict)
    text: Optional[str] = None

    def get_all(self, tag: str) -> list["Element"]:
        """Return the child elements with the given tag (empty if none)."""
        return self.children.get(tag) or []

    def first(self, tag: str) -> Optional["Element"]:
        """Return the first child element with the given tag, if any."""
        items = self.get_all(tag)
        return items[0] if items else None

    def first_text(self, tag: str) -> Optional[str]:
        """Return the text of the first child element with the given tag."""
        child = self.first(tag)
        return child.text if child is not None else None


def _convert(node: ET.Element) -> Element:
    element = Element(tag=node.tag, attributes=dict(node.attrib))
    text = (node.text or "").strip()
    element.text = text or None
    for child in node:
        element.children.setdefault(child.tag, []).append(_convert(child))
    return element


def parse_xml_string(text) -> Element:
    """Parse XML text (str or bytes) into a document node.

    The returned document node has no tag attributes of its own; its
    ``children`` maps the root element's tag to a one-element list.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.error(f"Failed to parse XML: {e}")
        raise StructureError(f"Failed to parse TestNG XML: {e}") from e
    return Element(tag="#document", children={root.tag: [_convert(root)]})


def parse_xml_file(path) -> Element:
    """Read an XML file and parse it into a document node."""
    logger.info(f"Reading TestNG report file: {path}")
    return parse_xml_string(Path(path).read_bytes())


def str_attr(node: Optional[Element], name: str, default: Optional[str] = None) -> Optional[str]:
    """Return a non-empty attribute value, or ``default``."""
    if node is None:
        return default
    value = node.attributes.get(name)
    return value if value else default


def int_attr(node: Optional[Element], name: str, default: int = 0) -> int:
    """Return the leading integer of an attribute value, or ``default``.

    Parsing stops at the first non-digit, so ``"12ms"`` gives 12 and
    ``"1.5"`` gives 1.
    """
    value = str_attr(node, name)
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    return int(match.group(1))
