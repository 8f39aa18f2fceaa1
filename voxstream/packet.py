"""Wire format of the voxel stream: an 8-byte header followed by 8-byte voxels."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass

_HEADER = struct.Struct("<BBHHH")
_VOXEL = struct.Struct("<II")

HEADER_SIZE = _HEADER.size
VOXEL_SIZE = _VOXEL.size


class PacketError(ValueError):
    """Raised when a datagram does not hold a valid packet."""


class PacketFlags(enum.IntFlag):
    """Optional packet indicators."""

    NONE = 0x00


@dataclass(frozen=True)
class PacketHeader:
    """Packet header: protocol version, flags, drone id and voxel count."""

    ver: int = 1
    flags: int = PacketFlags.NONE
    drone_id: int = 0
    count: int = 0
    reserved: int = 0

    def to_bytes(self) -> bytes:
        """Encode the header in its 8-byte wire form."""
        return _HEADER.pack(self.ver, int(self.flags), self.drone_id, self.count, self.reserved)


@dataclass(frozen=True)
class Voxel:
    """A voxel: Morton-encoded position and 0x00RRGGBB colour."""

    morton: int
    rgb: int

    def to_bytes(self) -> bytes:
        """Encode the voxel in its 8-byte wire form."""
        return _VOXEL.pack(self.morton, self.rgb)


@dataclass(frozen=True)
class ParsedPacket:
    """A decoded packet: its header and the voxels it announces."""

    header: PacketHeader
    voxels: tuple[Voxel, ...]


def parse_packet(data: bytes | bytearray | memoryview) -> ParsedPacket:
    """Decode a received datagram; bytes past the announced voxels are ignored."""
    buf = bytes(data)
    if len(buf) < HEADER_SIZE:
        raise PacketError("packet too small")
    ver, flags, drone_id, count, reserved = _HEADER.unpack_from(buf)
    header = PacketHeader(ver=ver, flags=flags, drone_id=drone_id, count=count, reserved=reserved)
    end = packet_size_bytes(header)
    if len(buf) < end:
        raise PacketError("truncated packet (count mismatch)")
    voxels = tuple(Voxel(m, c) for m, c in _VOXEL.iter_unpack(buf[HEADER_SIZE:end]))
    return ParsedPacket(header=header, voxels=voxels)


def packet_size_bytes(header: PacketHeader) -> int:
    """Total size in bytes of a packet with the given header."""
    return HEADER_SIZE + header.count * VOXEL_SIZE