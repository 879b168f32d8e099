"""
Boundary to the XML parser.

The tree itself is ElementTree's; this module only decodes the buffer, keeps
either the parsed root or the parser's error, and labels elements for display.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Iterator, Optional

from .logging_config import get_logger

logger = get_logger('xml_tree')


@dataclass
class XmlData:
    """Result of handing a buffer to the XML parser."""
    text: str
    root: Optional[ET.Element] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.root is not None

    @classmethod
    def parse(cls, data: bytes) -> XmlData:
        """Parse a buffer as UTF-8 XML; parse errors are kept, not raised."""
        data = bytes(data)
        text = data.decode('utf-8', errors='replace')
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            logger.warning(f"XML parse failed: {e}")
            return cls(text=text, error=str(e))
        return cls(text=text, root=root)


def element_label(element: ET.Element) -> str:
    """Label an element as <tag> or <tag id="...">."""
    label = f'<{element.tag}'
    element_id = element.get('id')
    if element_id is not None:
        label += f' id="{element_id}"'
    return label + '>'


def walk(element: ET.Element, depth: int = 0) -> Iterator[tuple[int, str]]:
    """Yield (depth, line) pairs: element labels, attributes and non-blank text."""
    yield depth, element_label(element)
    for name, value in element.attrib.items():
        yield depth + 1, f'@{name}="{value}"'
    text = (element.text or '').strip()
    if text:
        yield depth + 1, text
    for child in element:
        yield from walk(child, depth + 1)
        tail = (child.tail or '').strip()
        if tail:
            yield depth + 1, tail
