"""
Snapshot serialization
"""

from .snapshot_codec import SnapshotCodec

__all__ = ["SnapshotCodec"]
