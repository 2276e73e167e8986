from .config import ConvertConfig, is_ignored
from .plurals import ListDetection, looks_singular_of
from .xml_to_json import (
    aggregate_children,
    convert_document,
    convert_node,
    xml_file_to_json,
)

__all__ = [
    "ConvertConfig",
    "ListDetection",
    "aggregate_children",
    "convert_document",
    "convert_node",
    "is_ignored",
    "looks_singular_of",
    "xml_file_to_json",
]
