"""
Sync service — feeds server updates into an InfoList.

Updates arrive either as binary batches (the wire format in
tunnelview.kernel.wire) or as JSON (validated through the pydantic
models). Full batches replace the list; incremental ones merge into it.
"""

from __future__ import annotations

import logging

from tunnelview.kernel.info_list import InfoList
from tunnelview.kernel.types import TunnelBatch, VisibilityFlags
from tunnelview.kernel.wire import read_batch
from tunnelview.models.tunnel import TunnelBatchModel

logger = logging.getLogger(__name__)


class ListSync:
    """
    Applies batches to one InfoList.

    Owns the search text and hide toggles the list is filtered with, so a
    batch arriving between keystrokes keeps the user's view.
    """

    def __init__(self, infos: InfoList, search: str = "", flags: VisibilityFlags | None = None) -> None:
        self.infos = infos
        self.search = search
        self.flags = flags or VisibilityFlags()
        self.batches_applied = 0
        self.records_dropped = 0

    def apply(self, batch: TunnelBatch) -> None:
        if batch.full:
            self.infos.replace_all(batch.infos, self.search, self.flags)
        else:
            self.infos.merge(batch.infos, self.search, self.flags)
        self.batches_applied += 1
        self.records_dropped += batch.dropped
        logger.debug(
            "ListSync: applied %s batch of %d (%d dropped)",
            "full" if batch.full else "merge",
            len(batch.infos),
            batch.dropped,
        )

    def feed(self, data: bytes) -> bool:
        """Decode and apply a binary batch. Returns False if it was unusable."""
        batch = read_batch(data)
        if batch is None:
            logger.warning("ListSync: ignoring malformed batch (%d bytes)", len(data))
            return False
        self.apply(batch)
        return True

    def apply_json(self, text: str | bytes) -> None:
        """Validate and apply a JSON batch. Raises pydantic.ValidationError."""
        self.apply(TunnelBatchModel.model_validate_json(text).to_batch())

    def set_search(self, search: str, flags: VisibilityFlags | None = None) -> None:
        """User typed or toggled something: refilter with the new values."""
        self.search = search
        if flags is not None:
            self.flags = flags
        self.infos.refilter(self.search, self.flags)
