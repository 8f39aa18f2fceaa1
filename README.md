# voxstream

`voxstream` receives voxel streams sent by drones over UDP, decodes them and
stores them in bulk into a `voxels` table using PostgreSQL's binary `COPY`
format. It has no dependencies outside the standard library.

## Wire format

Every datagram starts with an 8-byte little-endian header followed by `count`
voxel records of 8 bytes each:

| Offset | Size | Field      | Meaning                 |
|--------|------|------------|-------------------------|
| 0      | 1    | `ver`      | protocol version        |
| 1      | 1    | `flags`    | see `PacketFlags`       |
| 2      | 2    | `drone_id` | sending drone           |
| 4      | 2    | `count`    | number of voxels        |
| 6      | 2    | `reserved` | 0                       |

Each voxel is two unsigned 32-bit integers: a 30-bit Morton code (10 bits per
axis) and a colour packed as `0x00RRGGBB`.

## Morton codes — `voxstream.morton`

```python
from voxstream.morton import encode_morton10, decode_morton10

code = encode_morton10(3, 5, 7)
assert decode_morton10(code) == (3, 5, 7)
```

`encode_morton10(x, y, z)` interleaves the low 10 bits of each coordinate;
`decode_morton10(m)` returns the `(x, y, z)` tuple.

## Packets — `voxstream.packet`

```python
from voxstream.morton import encode_morton10
from voxstream.packet import PacketHeader, Voxel, packet_size_bytes, parse_packet

voxel = Voxel(morton=encode_morton10(1, 2, 3), rgb=0x00FF8000)
header = PacketHeader(drone_id=42, count=1)
datagram = header.to_bytes() + voxel.to_bytes()

packet = parse_packet(datagram)
assert packet.header.drone_id == 42
assert packet.voxels == (voxel,)
assert len(datagram) == packet_size_bytes(header)
```

* `PacketHeader` and `Voxel` are frozen dataclasses with a `to_bytes()` method
  giving their 8-byte wire form. `PacketHeader` defaults to version 1, flags
  `PacketFlags.NONE` and zero for the other fields.
* `parse_packet(data)` returns a `ParsedPacket` (`header`, `voxels` tuple).
  Bytes past the announced voxels are ignored. It raises `PacketError` (a
  `ValueError`) with `"packet too small"` when the data is shorter than a
  header, and `"truncated packet (count mismatch)"` when it is shorter than the
  voxels the header announces.
* `packet_size_bytes(header)` is `8 + 8 * header.count`.

## Queues and workers

* `voxstream.bounded_queue.BoundedQueue(capacity=8192)` — a thread-safe FIFO.
  `push(item)` returns `False` when the queue already holds `capacity` items,
  `pop()` returns `None` when it is empty, and `len()` gives the current size.
  A negative capacity raises `ValueError`.
* `voxstream.thread_pool.ThreadPool(n)` — `n` daemon worker threads running
  posted callables in order. Exceptions raised by a job are logged, not
  propagated. `shutdown()` stops the workers and waits for them; jobs not yet
  started are dropped, and `post()` afterwards raises `RuntimeError`. The pool
  is a context manager that shuts down on exit.

## Database

* `voxstream.db_pool.DbPool(connect, size)` calls `connect()` `size` times
  (`size` must be positive, otherwise `ValueError`). `acquire()` is a context
  manager that waits for the first free connection and gives it back on exit;
  `release(conn)` marks a connection free and raises `ValueError` for one the
  pool does not hold.
* `voxstream.pg_pipeline.build_copy_payload(voxels)` returns a binary `COPY`
  stream: the `PGCOPY` header, one six-field row `(x, y, z, r, g, b)` per
  voxel — coordinates from the Morton code, channels from the colour — and the
  end marker. Values that fit in 16 bits are written as 2-byte fields, others
  as 4-byte fields.
* `voxstream.pg_pipeline.PgPipeline(pool).insert_bulk(voxels)` builds that
  payload, borrows a connection from the pool and calls
  `conn.copy_in("COPY voxels (x,y,z,r,g,b) FROM STDIN BINARY", payload)`.
  Any exception from `copy_in` is raised again as `CopyError` (a
  `RuntimeError`).

The connections in the pool are yours to supply: any object with a
`copy_in(statement, data)` method that sends `data` to the server as the input
of the given `COPY ... FROM STDIN` statement.

## Server

* `voxstream.session.handle_datagram(data, queue)` parses one datagram into a
  `VoxBatch` (`drone_id`, `voxels` list) and pushes it onto the queue. It
  returns the batch, or `None` when the packet is malformed or the queue is
  full; both cases are logged rather than raised.
* `voxstream.udp_server.UdpServer(port, pipeline, n_workers=None)` binds a UDP
  socket on `0.0.0.0:port` (port `0` picks a free one, readable afterwards as
  `server.port`) and starts a `ThreadPool` of `n_workers` threads (default: the
  CPU count). One worker drains batches from a queue of capacity 32768 into
  `pipeline.insert_bulk`, logging failures; the others parse datagrams of up
  to 2048 bytes. `run()` receives until `stop()` is called; `stop()` also
  shuts the workers down and closes the socket.

```python
import threading

from voxstream.db_pool import DbPool
from voxstream.pg_pipeline import PgPipeline
from voxstream.udp_server import UdpServer


class RecordingConnection:
    def __init__(self):
        self.payloads = []

    def copy_in(self, statement, data):
        self.payloads.append(data)


pool = DbPool(RecordingConnection, 4)
server = UdpServer(9000, PgPipeline(pool), 4)
threading.Thread(target=server.run).start()
# ... later
server.stop()
```

Progress and errors are reported through the standard `logging` module.

## What it does not do

* It ships no PostgreSQL driver and no connection adapter: you provide the
  `connect` factory and the `copy_in` method.
* It installs no command; start the server from your own code as shown above.