"""Bulk insertion of voxels into the `voxels` table with binary COPY."""

from __future__ import annotations

import struct
from typing import Iterable, Protocol

from .db_pool import DbPool
from .morton import decode_morton10
from .packet import Voxel

COPY_STATEMENT = "COPY voxels (x,y,z,r,g,b) FROM STDIN BINARY"

_SIGNATURE = b"PGCOPY\n\xff\r\n\x00"
_HEADER = _SIGNATURE + struct.pack(">ii", 0, 0)
_TRAILER = struct.pack(">h", -1)
_FIELD_COUNT = struct.pack(">h", 6)
_LENGTH = struct.Struct(">i")
_INT16 = struct.Struct(">h")
_INT32 = struct.Struct(">i")


class CopyError(RuntimeError):
    """Raised when the COPY into the database fails."""


class CopyConnection(Protocol):
    """A database connection able to stream data into a COPY ... FROM STDIN."""

    def copy_in(self, statement: str, data: bytes) -> None:
        ...


def _encode_field(value: int) -> bytes:
    if -32768 <= value <= 32767:
        return _LENGTH.pack(2) + _INT16.pack(value)
    return _LENGTH.pack(4) + _INT32.pack(value)


def _row_values(voxel: Voxel) -> tuple[int, ...]:
    x, y, z = decode_morton10(voxel.morton)
    rgb = voxel.rgb
    return x, y, z, (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


def build_copy_payload(voxels: Iterable[Voxel]) -> bytes:
    """Encode voxels as a binary COPY stream of (x, y, z, r, g, b) rows."""
    parts = [_HEADER]
    for voxel in voxels:
        parts.append(_FIELD_COUNT)
        parts.extend(_encode_field(value) for value in _row_values(voxel))
    parts.append(_TRAILER)
    return b"".join(parts)


class PgPipeline:
    """Inserts batches of voxels through connections borrowed from a pool."""

    def __init__(self, pool: DbPool) -> None:
        self._pool = pool

    def insert_bulk(self, voxels: Iterable[Voxel]) -> None:
        """Insert a batch; returning normally means it was stored."""
        payload = build_copy_payload(voxels)
        with self._pool.acquire() as conn:
            try:
                conn.copy_in(COPY_STATEMENT, payload)
            except CopyError:
                raise
            except Exception as exc:
                raise CopyError(f"COPY command error: {exc}") from exc