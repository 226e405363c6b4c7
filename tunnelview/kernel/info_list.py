"""
TunnelView Kernel — Info List

The master map of tunnel records plus its two derived views:

  sorted    — every record in the map, selection-aware baseline order
  filtered  — the subset of sorted that passes the search and hide toggles,
              re-ranked for the search

The map is the only source of truth. Both views are rebuilt from scratch
on every change, so a rebuild and any history of merges reaching the same
map always produce the same views.

Single-threaded. Callers serialise access.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Protocol

from tunnelview.kernel.filters import InfoFilter
from tunnelview.kernel.location import LocationKey
from tunnelview.kernel.types import (
    FREQUENCY_OFFSET,
    LONG_MIN,
    PAGE_SIZE,
    SelectionMiss,
    TunnelInfo,
    VisibilityFlags,
)

logger = logging.getLogger(__name__)


class Scrollbar(Protocol):
    def set_range(self, min: int, max: int, page_size: int) -> None: ...


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def _same_group(info: TunnelInfo, selected: TunnelInfo | None) -> bool:
    return info.frequency != 0 and selected is not None and info.frequency == selected.frequency


def baseline_rank(info: TunnelInfo, selected: TunnelInfo | None) -> int:
    """
    Baseline order: selected group inputs (-3), the selected part (-2),
    the selected group's other outputs (-1), then ascending frequency.

    Inputs of the selected group land ahead of the selected part itself.
    """
    if selected is not None and info.loc == selected.loc:
        return -2
    if _same_group(info, selected) and not info.output:
        return -3
    if _same_group(info, selected):
        return -1
    return info.frequency + FREQUENCY_OFFSET


def name_score(name: str, terms: list[str]) -> int:
    """
    -(hits^2) + length of what is left of the name.

    Each term counts once and its first occurrence is cut out before the
    next term is tried.
    """
    hits = 0
    for term in terms:
        if not term:
            continue
        pattern = re.compile(re.escape(term), re.IGNORECASE)
        if pattern.search(name):
            hits += 1
            name = pattern.sub("", name, count=1)
    return -(hits * hits) + len(name)


def search_rank(info: TunnelInfo, selected: TunnelInfo | None, name_terms: list[str] | None) -> int:
    """Rank used by the filtered view. Lower sorts first."""
    if selected is not None and info.loc == selected.loc:
        return LONG_MIN + 1
    if _same_group(info, selected) and not info.output:
        return LONG_MIN
    if _same_group(info, selected):
        return LONG_MIN + 2
    if name_terms is not None:
        return name_score(info.name, name_terms)
    return info.frequency + FREQUENCY_OFFSET - (0 if info.output else 1)


def is_hidden(info: TunnelInfo, flags: VisibilityFlags) -> bool:
    if flags.hide_in and not info.output:
        return True
    if flags.hide_out and info.output:
        return True
    if flags.hide_bound and info.frequency != 0 and not info.error:
        return True
    if flags.hide_unbound and (info.error or info.frequency == 0):
        return True
    return False


# ---------------------------------------------------------------------------
# InfoList
# ---------------------------------------------------------------------------


class InfoList:
    """
    Holds the tunnel records shown in the tunnel list.

    Access the records through `sorted` and `filtered`; the master map
    itself is private.
    """

    def __init__(
        self,
        infos: Iterable[TunnelInfo] = (),
        *,
        scrollbar: Scrollbar | None = None,
        visible_entries: int = 4,
    ) -> None:
        self._master: dict[LocationKey, TunnelInfo] = {}
        self.sorted: list[TunnelInfo] = []
        self.filtered: list[TunnelInfo] = []
        self.selected: LocationKey | None = None
        self.search = ""
        self.flags = VisibilityFlags()
        self.scrollbar = scrollbar
        self.visible_entries = visible_entries
        self._filter = InfoFilter()

        for info in infos:
            self._master[info.loc] = info
        self.refresh()

    # -- queries -------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self._master)

    def __len__(self) -> int:
        return len(self._master)

    def __contains__(self, loc: object) -> bool:
        return loc in self._master

    def get(self, loc: LocationKey) -> TunnelInfo | None:
        return self._master.get(loc)

    @property
    def selected_info(self) -> TunnelInfo | None:
        """The selected record, or None if nothing is selected or it is gone."""
        if self.selected is None:
            return None
        return self._master.get(self.selected)

    def selected_record(self) -> TunnelInfo | None:
        return self.selected_info

    def find_input(self, frequency: int) -> TunnelInfo | None:
        return next(
            (info for info in self._master.values() if info.frequency == frequency and not info.output),
            None,
        )

    def find_any_output(self, frequency: int) -> TunnelInfo | None:
        return next(
            (info for info in self._master.values() if info.frequency == frequency and info.output),
            None,
        )

    # -- derived views -------------------------------------------------------

    def resort(self) -> None:
        """Rebuild `sorted` from the master map."""
        selected = self.selected_info
        self.sorted = sorted(
            self._master.values(),
            key=lambda info: (baseline_rank(info, selected), info.loc),
        )

    def refilter(self, search: str | None = None, flags: VisibilityFlags | None = None) -> None:
        """
        Rebuild `filtered` from `sorted`.

        search and flags default to the values the current view was built
        with; passing them records the new values.
        """
        if search is not None:
            self.search = search
        if flags is not None:
            self.flags = flags

        self._filter.update_query(self.search.lower())
        selected = self.selected_info
        selected_loc = selected.loc if selected is not None else None

        kept = [
            info
            for info in self.sorted
            if info.loc == selected_loc
            or (not is_hidden(info, self.flags) and self._filter.accepts(info))
        ]

        # Stable: equal search ranks keep their baseline order
        name_terms = self._filter.name_terms()
        self.filtered = sorted(kept, key=lambda info: search_rank(info, selected, name_terms))

    def refresh(self, search: str | None = None, flags: VisibilityFlags | None = None) -> None:
        """Resort and refilter."""
        self.resort()
        self.refilter(search, flags)

    # -- mutation ------------------------------------------------------------

    def replace_all(
        self,
        infos: Iterable[TunnelInfo],
        search: str | None = None,
        flags: VisibilityFlags | None = None,
    ) -> None:
        """Replace the master map. The last record for a duplicate key wins."""
        self._master.clear()
        for info in infos:
            self._master[info.loc] = info
        self.refresh(search, flags)
        self._update_scrollbar()
        logger.debug("InfoList: replaced, size=%d", len(self._master))

    def merge(
        self,
        infos: Iterable[TunnelInfo],
        search: str | None = None,
        flags: VisibilityFlags | None = None,
    ) -> None:
        """Insert or overwrite records by key, keeping everything else."""
        for info in infos:
            self._master[info.loc] = info
        self.refresh(search, flags)
        self._update_scrollbar()
        logger.debug("InfoList: merged, size=%d", len(self._master))

    def select(
        self,
        which: LocationKey | None,
        search: str | None = None,
        flags: VisibilityFlags | None = None,
    ) -> None:
        """Select a part by key. A key not in the map clears the selection."""
        try:
            self.selected = self._resolve(which)
        except SelectionMiss as e:
            logger.debug("InfoList: %s, clearing selection", e)
            self.selected = None
        self.refresh(search, flags)

    def _resolve(self, which: LocationKey | None) -> LocationKey | None:
        if which is None:
            return None
        info = self._master.get(which)
        if info is None:
            raise SelectionMiss(f"no tunnel at {which}")
        return info.loc

    def _update_scrollbar(self) -> None:
        if self.scrollbar is None:
            return
        size = len(self._master)
        top = min(max(size - self.visible_entries, 0), size)
        self.scrollbar.set_range(0, top, PAGE_SIZE)
