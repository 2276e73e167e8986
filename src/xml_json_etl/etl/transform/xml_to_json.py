"""
xml_to_json.py

Shape-inferring XML -> JSON converter. Every value is a string, an object or a
list; which one is decided per node:

- An element without attributes that contains text becomes that text (the
  first text run); anything else inside it is dropped
- Otherwise the element becomes an object: attributes first (minus ignored
  names), then converted children. A child with the same name as an attribute
  overwrites it
- Text next to attributes or child elements is stored under 'value'
- Child elements with the same tag are grouped into lists
- A single child whose tag looks like the singular of its parent's tag
  (<groups><group/></groups>) is wrapped in a one-element list, depending on
  `ConvertConfig.list_detection`
- Comments and processing instructions are dropped

Object keys keep the order in which they first appear in the document.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from xml_json_etl.constants import TEXT_KEY
from xml_json_etl.etl.extract.markup import (
    Element,
    MarkupNode,
    Text,
    parse_markup,
    parse_markup_file,
)
from xml_json_etl.etl.transform.config import ConvertConfig, is_ignored

JsonValue = Union[str, Dict[str, Any], list, None]


def convert_node(
    node: MarkupNode, config: ConvertConfig
) -> Optional[Tuple[str, JsonValue]]:
    """Convert one markup node into a (key, value) JSON property.

    Returns None for nodes that have no JSON representation.
    """
    if isinstance(node, Text):
        return TEXT_KEY, node.content
    if not isinstance(node, Element):
        return None

    # <parent><child>..</child>Text</parent> -> "Text"; <child> is ignored.
    if not node.attributes:
        for child in node.children:
            if isinstance(child, Text):
                return node.name, child.content

    obj: Dict[str, JsonValue] = {
        name: value
        for name, value in node.attributes
        if not is_ignored(name, config)
    }
    obj.update(aggregate_children(node.name, node.children, config))
    return node.name, obj


def aggregate_children(
    parent_name: str, children: Iterable[MarkupNode], config: ConvertConfig
) -> Dict[str, JsonValue]:
    """Convert children in document order and merge same-named results.

    The first occurrence of a name is stored as-is, or as a one-element list
    when the plural check says it is an item of `parent_name`. A second
    occurrence turns the stored value into a list; later ones are appended.
    """
    plural_check = config.plural_check
    merged: Dict[str, JsonValue] = {}

    for child in children:
        converted = convert_node(child, config)
        if converted is None:
            continue
        name, value = converted

        if name not in merged:
            if plural_check is not None and plural_check(parent_name, name):
                merged[name] = [value]
            else:
                merged[name] = value
            continue

        current = merged[name]
        if isinstance(current, list):
            current.append(value)
        elif isinstance(current, (str, dict)):
            merged[name] = [current, value]
        else:
            raise AssertionError(
                f"unexpected {type(current).__name__} stored for '{name}' under '{parent_name}'"
            )

    return merged


def convert_document(root: Element, config: ConvertConfig) -> Dict[str, JsonValue]:
    """Convert a root element into {root_name: root_value}."""
    converted = convert_node(root, config)
    if converted is None:
        raise AssertionError(f"root element '{root.name}' produced no property")
    name, value = converted
    return {name: value}


def xml_to_json(data: Union[bytes, str], config: Optional[ConvertConfig] = None) -> Dict[str, JsonValue]:
    return convert_document(parse_markup(data), config or ConvertConfig())


def xml_file_to_json(
    input_path: Union[str, Path], config: Optional[ConvertConfig] = None
) -> Dict[str, JsonValue]:
    return convert_document(parse_markup_file(input_path), config or ConvertConfig())
