"""
TunnelView Kernel — Shared Types

Data classes used across location, filters, info_list, and wire.
These are the contracts that bind the kernel together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tunnelview.kernel.location import LocationKey

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Rows the scrollbar pages by
PAGE_SIZE = 23

# Keeps real frequencies above the resort sentinels (-3, -2, -1)
FREQUENCY_OFFSET = 32767

LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class Facing(IntEnum):
    """The six axis-aligned sides a tunnel part can sit on."""

    DOWN = 0
    UP = 1
    NORTH = 2
    SOUTH = 3
    WEST = 4
    EAST = 5


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TunnelViewError(Exception):
    """Base class for kernel errors."""


class DecodeError(TunnelViewError, ValueError):
    """Malformed or truncated location/record data."""


class SelectionMiss(TunnelViewError, LookupError):
    """A selection named a key the master map does not hold."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TunnelInfo:
    """
    Live state of one tunnel endpoint, as delivered by the sync layer.

    frequency == 0 means unbound. output=True is the source side.
    """

    loc: LocationKey
    frequency: int
    output: bool
    error: bool = False
    name: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.frequency, bool) or not isinstance(self.frequency, int):
            raise TypeError(f"TunnelInfo.frequency must be an int, got {type(self.frequency).__name__}")
        if not LONG_MIN <= self.frequency <= LONG_MAX:
            raise ValueError(f"TunnelInfo.frequency out of 64-bit range: {self.frequency}")


@dataclass(frozen=True)
class VisibilityFlags:
    """The four hide toggles the refilter pass honours."""

    hide_in: bool = False
    hide_out: bool = False
    hide_bound: bool = False
    hide_unbound: bool = False


@dataclass
class TunnelBatch:
    """One decoded update from the sync layer."""

    full: bool
    infos: list[TunnelInfo] = field(default_factory=list)
    dropped: int = 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def format_frequency(frequency: int) -> str:
    """
    Render a frequency as four groups of hex digits.

    Examples:
      0   → "NONE"
      5   → "0000 0000 0000 0005"
      -1  → "FFFF FFFF FFFF FFFF"
    """
    if frequency == 0:
        return "NONE"
    digits = f"{frequency & 0xFFFF_FFFF_FFFF_FFFF:016X}"
    return " ".join(digits[i : i + 4] for i in range(0, 16, 4))


def frequency_hex(frequency: int) -> str:
    """Lower-case 16-digit hex of the unsigned frequency, no grouping."""
    return f"{frequency & 0xFFFF_FFFF_FFFF_FFFF:016x}"
