"""
TunnelView Kernel — Search Filters

Compiles the search box text into per-category term lists and checks a
single record against one category.

Grammar (query is lower-cased, split on whitespace):
  @in         inputs only
  @out        outputs only
  @b          bound (frequency set, no error)
  @u          unbound (no frequency, or error)
  @f=<hex>    frequency hex contains <hex>
  anything    name contains the word
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum

from tunnelview.kernel.types import TunnelInfo, frequency_hex

Predicate = Callable[[TunnelInfo, "list[str] | None"], bool]


def _name_matches(info: TunnelInfo, terms: list[str] | None) -> bool:
    if not terms:
        return True
    name = info.name.lower()
    return any(term in name for term in terms)


def _frequency_matches(info: TunnelInfo, terms: list[str] | None) -> bool:
    if not terms:
        return True
    digits = frequency_hex(info.frequency)
    return any(term in digits for term in terms)


class Filter(Enum):
    """
    One search category.

    value is (token pattern, predicate). A pattern with a capture group
    contributes its captures as terms; one without contributes no terms.
    """

    INPUT = (re.compile(r"^@in$"), lambda info, _terms: not info.output)
    OUTPUT = (re.compile(r"^@out$"), lambda info, _terms: info.output)
    BOUND = (re.compile(r"^@b$"), lambda info, _terms: info.frequency != 0 and not info.error)
    UNBOUND = (re.compile(r"^@u$"), lambda info, _terms: info.error or info.frequency == 0)
    FREQUENCY = (re.compile(r"^@f=([0-9a-f]+)$"), _frequency_matches)
    NAME = (re.compile(r"^([^@].*)$"), _name_matches)

    @property
    def pattern(self) -> re.Pattern[str]:
        return self.value[0]

    def filter(self, info: TunnelInfo, terms: list[str] | None) -> bool:
        predicate: Predicate = self.value[1]
        return bool(predicate(info, terms))


class InfoFilter:
    """
    Holds the categories activated by the last query.

    active_filters maps each active category to its terms, or None for
    tags that take no argument. Categories with no token are absent.
    """

    def __init__(self) -> None:
        self.query = ""
        self.active_filters: dict[Filter, list[str] | None] = {}

    def update_query(self, text: str) -> None:
        """Recompile active_filters from the (lower-cased) search text."""
        self.query = text
        active: dict[Filter, list[str] | None] = {}
        for token in text.split():
            for f in Filter:
                match = f.pattern.match(token)
                if match is None:
                    continue
                if f.pattern.groups:
                    terms = active.get(f) or []
                    terms.append(match.group(1))
                    active[f] = terms
                else:
                    active.setdefault(f, None)
                break
        self.active_filters = active

    def matches(self, info: TunnelInfo, f: Filter) -> bool:
        """Evaluate one active category against a record."""
        return f.filter(info, self.active_filters.get(f))

    def accepts(self, info: TunnelInfo) -> bool:
        """True if every active category accepts the record."""
        return all(f.filter(info, terms) for f, terms in self.active_filters.items())

    def name_terms(self) -> list[str] | None:
        """Terms of the NAME category, or None when it is inactive."""
        if Filter.NAME not in self.active_filters:
            return None
        return self.active_filters[Filter.NAME] or []
