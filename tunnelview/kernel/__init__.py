"""
TunnelView Kernel — the pure view engine.

Components:
  location   — LocationKey plus its binary and structured codecs
  filters    — search text → per-category filters
  info_list  — master map → sorted view → filtered view
  wire       — binary record batches from the sync layer
"""

from tunnelview.kernel.filters import Filter, InfoFilter
from tunnelview.kernel.info_list import InfoList, baseline_rank, name_score, search_rank
from tunnelview.kernel.location import (
    LocationKey,
    location_from_tag,
    location_of,
    location_to_tag,
    pack_location,
    read_location,
    unpack_location,
    write_location,
)
from tunnelview.kernel.types import (
    DecodeError,
    Facing,
    SelectionMiss,
    TunnelBatch,
    TunnelInfo,
    VisibilityFlags,
    format_frequency,
)
from tunnelview.kernel.wire import pack_batch, pack_info, read_batch, unpack_info

__all__ = [
    "LocationKey",
    "Facing",
    "TunnelInfo",
    "TunnelBatch",
    "VisibilityFlags",
    "DecodeError",
    "SelectionMiss",
    "pack_location",
    "unpack_location",
    "read_location",
    "write_location",
    "location_to_tag",
    "location_from_tag",
    "location_of",
    "Filter",
    "InfoFilter",
    "InfoList",
    "baseline_rank",
    "search_rank",
    "name_score",
    "pack_info",
    "unpack_info",
    "pack_batch",
    "read_batch",
    "format_frequency",
]
