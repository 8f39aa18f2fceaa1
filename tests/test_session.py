from voxstream.bounded_queue import BoundedQueue
from voxstream.packet import PacketHeader, Voxel
from voxstream.session import VoxBatch, handle_datagram


def _datagram(drone_id, voxels):
    header = PacketHeader(drone_id=drone_id, count=len(voxels))
    return header.to_bytes() + b"".join(v.to_bytes() for v in voxels)


def test_valid_datagram_is_queued():
    queue = BoundedQueue(4)
    voxels = [Voxel(1, 0x112233), Voxel(2, 0x445566)]
    batch = handle_datagram(_datagram(7, voxels), queue)
    assert batch == VoxBatch(drone_id=7, voxels=voxels)
    assert queue.pop() == batch
    assert queue.pop() is None


def test_short_datagram_is_dropped():
    queue = BoundedQueue(4)
    assert handle_datagram(b"\x01\x00\x07", queue) is None
    assert len(queue) == 0


def test_truncated_datagram_is_dropped():
    queue = BoundedQueue(4)
    data = _datagram(3, [Voxel(1, 1), Voxel(2, 2)])[:-4]
    assert handle_datagram(data, queue) is None
    assert len(queue) == 0


def test_full_queue_drops_batch():
    queue = BoundedQueue(1)
    first = handle_datagram(_datagram(1, [Voxel(9, 9)]), queue)
    second = handle_datagram(_datagram(2, [Voxel(8, 8)]), queue)
    assert second is None
    assert len(queue) == 1
    assert queue.pop() == first