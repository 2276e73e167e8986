"""
markup.py

Parse XML into a small, immutable node tree that the transform step consumes.

ElementTree keeps text in `.text`/`.tail` attributes; here every element instead
gets one ordered `children` tuple in which text runs, child elements, comments
and processing instructions appear in document order:

    <a>x<b/>y<!-- c --></a>  ->  Element("a", (), (Text("x"), Element("b"), Text("y"), Other("comment")))

Conventions:
- Text runs are trimmed; whitespace-only runs (indentation) are dropped
- CDATA sections are plain text, merged with adjacent text runs
- Namespace URIs are dropped, only local names are kept ('{ns}tag' -> 'tag')
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union
import xml.etree.ElementTree as ET
from xml.parsers.expat import errors as expat_errors

from xml_json_etl.errors import EmptyDocumentError, MalformedMarkupError
from xml_json_etl.logging_setup import get_logger

log = get_logger(__name__)

_NO_ELEMENTS = expat_errors.codes[expat_errors.XML_ERROR_NO_ELEMENTS]


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class Other:
    """A node that never reaches the JSON output (comment, processing instruction)."""

    kind: str
    content: str = ""


@dataclass(frozen=True)
class Element:
    name: str
    attributes: Tuple[Tuple[str, str], ...] = ()
    children: Tuple["MarkupNode", ...] = ()


MarkupNode = Union[Element, Text, Other]


def local_name(name: str) -> str:
    if name.startswith("{"):
        return name.split("}", 1)[1]
    return name


def _text_runs(raw: str | None) -> List[Text]:
    text = (raw or "").strip()
    return [Text(text)] if text else []


def from_etree(elem: ET.Element) -> MarkupNode:
    """Recursively convert an ElementTree node into a markup node."""
    if elem.tag is ET.Comment:
        return Other("comment", elem.text or "")
    if elem.tag is ET.ProcessingInstruction:
        return Other("processing-instruction", elem.text or "")

    children: List[MarkupNode] = _text_runs(elem.text)
    for child in elem:
        children.append(from_etree(child))
        children.extend(_text_runs(child.tail))

    attributes = tuple((local_name(k), v) for k, v in elem.attrib.items())
    return Element(local_name(elem.tag), attributes, tuple(children))


class _DocumentTarget:
    """TreeBuilder target that also remembers whether any element was opened.

    Expat reports "no element found" both for input without a root and for
    input that ends inside one; only the first is an empty document.
    """

    def __init__(self):
        self.builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self.seen_element = False

    def start(self, tag, attrib):
        self.seen_element = True
        return self.builder.start(tag, attrib)

    def end(self, tag):
        return self.builder.end(tag)

    def data(self, data):
        self.builder.data(data)

    def comment(self, text):
        return self.builder.comment(text)

    def pi(self, target, text=None):
        return self.builder.pi(target, text)

    def close(self):
        return self.builder.close()


def parse_markup(data: Union[bytes, str]) -> Element:
    """Parse a complete XML document and return its root element.

    Raises EmptyDocumentError when the input holds no root element and
    MalformedMarkupError for any other parser failure, including a document
    that ends before its root element is closed.
    """
    target = _DocumentTarget()
    parser = ET.XMLParser(target=target)
    try:
        parser.feed(data)
        root = parser.close()
    except ET.ParseError as exc:
        line, column = exc.position
        log.debug("XML parse failed", error=str(exc), line=line, column=column)
        if exc.code == _NO_ELEMENTS and not target.seen_element:
            raise EmptyDocumentError("No XML root element found") from exc
        raise MalformedMarkupError(str(exc).split(":")[0], line, column) from exc

    node = from_etree(root)
    if not isinstance(node, Element):
        raise AssertionError(f"document root is a {type(node).__name__}, not an element")
    return node


def parse_markup_file(path: Union[str, Path]) -> Element:
    with open(path, "rb") as fh:
        return parse_markup(fh.read())
