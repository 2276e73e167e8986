"""
Markup extraction: XML bytes/text -> immutable node tree.
"""

from .markup import Element, Other, Text, parse_markup, parse_markup_file

__all__ = ["Element", "Other", "Text", "parse_markup", "parse_markup_file"]
