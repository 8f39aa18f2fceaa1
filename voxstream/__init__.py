"""Drone voxel stream ingestion: packet parsing, Morton codes, a UDP server and bulk COPY encoding."""

__version__ = "0.1.0"

__all__ = [
    "bounded_queue",
    "db_pool",
    "morton",
    "packet",
    "pg_pipeline",
    "session",
    "thread_pool",
    "udp_server",
]