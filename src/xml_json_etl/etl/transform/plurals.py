"""
plurals.py

Heuristics that decide whether a child tag looks like the singular form of its
parent tag, e.g. <groups><group/></groups>. A sole child that passes the check
is emitted as a one-element list so that the JSON shape does not depend on how
many items a particular document happens to contain.

Strategies are selected with `ListDetection`:

- NONE:   never wrap a sole child
- STEM:   English Snowball stems of both names are equal ("categories"/"category")
- SUFFIX: parent is the child plus a trailing "s" ("groups"/"group")
"""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Callable, Optional

import snowballstemmer

PluralCheck = Callable[[str, str], bool]


class ListDetection(str, Enum):
    NONE = "none"
    STEM = "stem"
    SUFFIX = "suffix"


@lru_cache(maxsize=1)
def _english_stemmer():
    return snowballstemmer.stemmer("english")


@lru_cache(maxsize=4096)
def _stem(word: str) -> str:
    return _english_stemmer().stemWord(word)


def stem_equality(parent_name: str, child_name: str) -> bool:
    """True when both names reduce to the same English stem."""
    return _stem(parent_name) == _stem(child_name)


def suffix_strip(parent_name: str, child_name: str) -> bool:
    """True when parent_name is child_name followed by a single 's'."""
    if not parent_name.endswith("s"):
        return False
    remainder = parent_name[:-1]
    return len(remainder) >= 1 and remainder == child_name


_STRATEGIES: dict[ListDetection, PluralCheck] = {
    ListDetection.STEM: stem_equality,
    ListDetection.SUFFIX: suffix_strip,
}


def get_plural_check(strategy: ListDetection) -> Optional[PluralCheck]:
    """Return the predicate for `strategy`, or None when detection is disabled."""
    return _STRATEGIES.get(ListDetection(strategy))


def looks_singular_of(
    parent_name: str, child_name: str, strategy: ListDetection = ListDetection.STEM
) -> bool:
    check = get_plural_check(strategy)
    if check is None:
        return False
    return check(parent_name, child_name)
