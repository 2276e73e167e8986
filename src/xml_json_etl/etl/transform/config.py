"""Immutable per-run configuration of the XML -> JSON transform."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from xml_json_etl.constants import DEFAULT_IGNORED_ATTRIBUTES
from xml_json_etl.etl.transform.plurals import ListDetection, PluralCheck, get_plural_check


@dataclass(frozen=True)
class ConvertConfig:
    """What the converter may be told: which attributes to drop and how to
    recognise list parents. Safe to share between documents and threads."""

    ignored_attribute_names: FrozenSet[str] = field(
        default_factory=lambda: frozenset(DEFAULT_IGNORED_ATTRIBUTES)
    )
    list_detection: ListDetection = ListDetection.STEM

    def __post_init__(self):
        # Accept any iterable / plain strings from callers and normalise.
        object.__setattr__(
            self, "ignored_attribute_names", frozenset(self.ignored_attribute_names)
        )
        object.__setattr__(self, "list_detection", ListDetection(self.list_detection))

    @classmethod
    def build(
        cls,
        ignore_attributes: Iterable[str] = DEFAULT_IGNORED_ATTRIBUTES,
        list_detection: ListDetection | str = ListDetection.STEM,
    ) -> "ConvertConfig":
        return cls(frozenset(ignore_attributes), ListDetection(list_detection))

    @property
    def plural_check(self) -> Optional[PluralCheck]:
        return get_plural_check(self.list_detection)


def is_ignored(attribute_name: str, config: ConvertConfig) -> bool:
    """Attribute filter: True if the attribute must not become a JSON key."""
    return attribute_name in config.ignored_attribute_names
