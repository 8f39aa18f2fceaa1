"""Turning a received datagram into a batch queued for the database."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .bounded_queue import BoundedQueue
from .packet import PacketError, Voxel, parse_packet

logger = logging.getLogger(__name__)

BATCH_QUEUE_CAPACITY = 32768


@dataclass
class VoxBatch:
    """Voxels from one drone, ready for insertion."""

    drone_id: int
    voxels: list[Voxel] = field(default_factory=list)


def handle_datagram(data: bytes, queue: BoundedQueue[VoxBatch]) -> Optional[VoxBatch]:
    """Parse a datagram and queue its batch; return it, or None if dropped."""
    try:
        packet = parse_packet(data)
    except PacketError as exc:
        logger.error("[SESSION] parse error: %s", exc)
        return None

    batch = VoxBatch(drone_id=packet.header.drone_id, voxels=list(packet.voxels))
    logger.info("[SESSION] drone_id=%d | voxels=%d", batch.drone_id, len(batch.voxels))

    if not queue.push(batch):
        logger.error("[SESSION] queue full: batch dropped")
        return None
    return batch