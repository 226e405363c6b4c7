"""
TunnelView Kernel — Record Wire Format

Binary form of the record batches the server pushes to the list.
All integers big-endian.

  batch   := kind:u8 count:u32 record*
  record  := location(17) frequency:i64 output:u8 error:u8 name_len:u16 name:utf8

kind 0 replaces the whole list, kind 1 merges into it.

A record with a bad location is skipped; a truncated record ends the
batch. Whatever decoded cleanly before that is kept.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable

from tunnelview.kernel.location import LOCATION_SIZE, pack_location, unpack_location
from tunnelview.kernel.types import DecodeError, TunnelBatch, TunnelInfo

logger = logging.getLogger(__name__)

_HEADER = struct.Struct(">BI")
_BODY = struct.Struct(">qBBH")

BATCH_FULL = 0
BATCH_MERGE = 1

MAX_NAME_BYTES = 0xFFFF


class _SkipRecord(DecodeError):
    """Record is well-delimited but its content is invalid."""

    def __init__(self, reason: str, end: int) -> None:
        super().__init__(reason)
        self.end = end


def pack_info(info: TunnelInfo) -> bytes:
    name = info.name.encode("utf-8")
    if len(name) > MAX_NAME_BYTES:
        # Cut on a character boundary
        name = name[:MAX_NAME_BYTES].decode("utf-8", errors="ignore").encode("utf-8")
    body = _BODY.pack(info.frequency, int(info.output), int(info.error), len(name))
    return pack_location(info.loc) + body + name


def unpack_info(data: bytes | bytearray | memoryview, offset: int = 0) -> tuple[TunnelInfo, int]:
    """
    Decode one record at offset. Returns (record, offset after it).
    Raises DecodeError if the record is truncated or malformed.
    """
    body_at = offset + LOCATION_SIZE
    if len(data) - body_at < _BODY.size:
        raise DecodeError("record truncated before body")
    frequency, output, error, name_len = _BODY.unpack_from(data, body_at)
    name_at = body_at + _BODY.size
    end = name_at + name_len
    if len(data) < end:
        raise DecodeError(f"record name truncated: need {name_len} bytes, have {len(data) - name_at}")

    try:
        loc = unpack_location(data, offset)
    except DecodeError as e:
        raise _SkipRecord(str(e), end) from e

    name = bytes(data[name_at:end]).decode("utf-8", errors="replace")
    return TunnelInfo(loc=loc, frequency=frequency, output=bool(output), error=bool(error), name=name), end


def pack_batch(infos: Iterable[TunnelInfo], full: bool = True) -> bytes:
    records = [pack_info(info) for info in infos]
    header = _HEADER.pack(BATCH_FULL if full else BATCH_MERGE, len(records))
    return header + b"".join(records)


def read_batch(data: bytes | bytearray | memoryview) -> TunnelBatch | None:
    """
    Decode a batch. Returns None if the header itself is unusable.
    Malformed records are dropped with a warning and counted.
    """
    if len(data) < _HEADER.size:
        logger.warning("read_batch: header truncated (%d bytes)", len(data))
        return None
    kind, count = _HEADER.unpack_from(data, 0)
    if kind not in (BATCH_FULL, BATCH_MERGE):
        logger.warning("read_batch: unknown batch kind %d", kind)
        return None

    batch = TunnelBatch(full=kind == BATCH_FULL)
    offset = _HEADER.size
    for index in range(count):
        try:
            info, offset = unpack_info(data, offset)
        except _SkipRecord as e:
            logger.warning("read_batch: skipping record %d: %s", index, e)
            batch.dropped += 1
            offset = e.end
            continue
        except DecodeError as e:
            remaining = count - index
            logger.warning("read_batch: stopping at record %d of %d: %s", index, count, e)
            batch.dropped += remaining
            break
        batch.infos.append(info)
    return batch
