"""
TunnelView Kernel — Location Keys

A LocationKey identifies one tunnel part: block position, the side it is
mounted on, and the dimension. It is the key of the master map and the
only thing the client sends back to the server when it refers to a part.

Two encodings:
  binary      — 17 bytes, big-endian: x:i32 y:i32 z:i32 facing:u8 dim:i32
  structured  — {"x": int, "y": int, "z": int, "f": facing, "d": int}

Readers never raise on bad input. They log and return None.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, BinaryIO, Protocol

from tunnelview.kernel.types import INT_MAX, INT_MIN, DecodeError, Facing

logger = logging.getLogger(__name__)

_LOCATION = struct.Struct(">iiiBi")
LOCATION_SIZE = _LOCATION.size  # 17

_TAG_FIELDS = ("x", "y", "z", "f", "d")


@dataclass(frozen=True, order=True)
class LocationKey:
    """
    Immutable position of a tunnel part.

    Equality and hash cover exactly (x, y, z, facing, dim). Ordering is
    the same tuple, used only to break ties between distinct keys.
    """

    x: int
    y: int
    z: int
    facing: Facing
    dim: int

    def __post_init__(self) -> None:
        for name in ("x", "y", "z", "dim"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"LocationKey.{name} must be an int, got {type(value).__name__}")
            if not INT_MIN <= value <= INT_MAX:
                raise ValueError(f"LocationKey.{name} out of 32-bit range: {value}")
        # Accept plain ordinals, store the enum
        object.__setattr__(self, "facing", Facing(self.facing))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z}) {self.facing.name.lower()} @ dim {self.dim}"


class BlockPos(Protocol):
    x: int
    y: int
    z: int
    dimension: int


class TunnelPart(Protocol):
    """Anything that sits at a block position on one side."""

    location: BlockPos
    side: Facing | int


def location_of(part: TunnelPart) -> LocationKey:
    """Derive the key of a tunnel part. Pure, copies three pieces of data."""
    pos = part.location
    return LocationKey(pos.x, pos.y, pos.z, Facing(part.side), pos.dimension)


# ---------------------------------------------------------------------------
# Binary codec
# ---------------------------------------------------------------------------


def pack_location(loc: LocationKey) -> bytes:
    """Encode a key as its 17-byte wire form."""
    return _LOCATION.pack(loc.x, loc.y, loc.z, loc.facing.value, loc.dim)


def unpack_location(data: bytes | bytearray | memoryview, offset: int = 0) -> LocationKey:
    """
    Decode a key from data[offset:offset + 17].
    Raises DecodeError on truncation or an invalid facing byte.
    """
    if len(data) - offset < LOCATION_SIZE:
        raise DecodeError(
            f"location truncated: need {LOCATION_SIZE} bytes, have {max(len(data) - offset, 0)}"
        )
    x, y, z, facing, dim = _LOCATION.unpack_from(data, offset)
    if facing >= len(Facing):
        raise DecodeError(f"invalid facing ordinal: {facing}")
    return LocationKey(x, y, z, Facing(facing), dim)


def write_location(stream: BinaryIO, loc: LocationKey) -> None:
    stream.write(pack_location(loc))


def read_location(stream: BinaryIO) -> LocationKey | None:
    """Read one key from a byte stream. Returns None if malformed."""
    data = stream.read(LOCATION_SIZE)
    try:
        return unpack_location(data)
    except DecodeError as e:
        logger.warning("read_location: dropping malformed location: %s", e)
        return None


# ---------------------------------------------------------------------------
# Structured codec
# ---------------------------------------------------------------------------


def location_to_tag(loc: LocationKey | None) -> dict[str, int]:
    """Encode a key as a named-field container. None encodes as {}."""
    if loc is None:
        return {}
    return {
        "x": loc.x,
        "y": loc.y,
        "z": loc.z,
        "f": loc.facing.value,
        "d": loc.dim,
    }


def _tag_int(tag: Mapping[str, Any], name: str) -> int:
    if name not in tag:
        raise DecodeError(f"missing field {name!r}")
    value = tag[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"field {name!r} is not an integer: {value!r}")
    if not INT_MIN <= value <= INT_MAX:
        raise DecodeError(f"field {name!r} out of range: {value}")
    return value


def tag_to_location(tag: Mapping[str, Any]) -> LocationKey:
    """Decode a named-field container. Raises DecodeError."""
    x, y, z, facing, dim = (_tag_int(tag, name) for name in _TAG_FIELDS)
    if not 0 <= facing < len(Facing):
        raise DecodeError(f"invalid facing ordinal: {facing}")
    return LocationKey(x, y, z, Facing(facing), dim)


def location_from_tag(tag: Mapping[str, Any]) -> LocationKey | None:
    """Decode a named-field container. Returns None if malformed."""
    try:
        return tag_to_location(tag)
    except DecodeError as e:
        logger.warning("location_from_tag: dropping malformed location: %s", e)
        return None
