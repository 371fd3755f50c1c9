"""
Utility functions for SMPP capture inspection.
"""

from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass
class PayloadStats:
    """Statistics about the TCP payloads of a capture."""
    total_bytes: int
    packet_count: int
    avg_payload_size: float
    max_payload_size: int
    min_payload_size: int
    median_payload_size: float


def bytes_to_hex(data: bytes) -> str:
    """
    Render bytes as space-separated lowercase hex pairs.

    Args:
        data: Bytes to render

    Returns:
        Hex string such as ``"48 65 6c"``, empty for empty input
    """
    return bytes(data).hex(' ')


def format_ipv4(raw: bytes) -> str:
    """Render 4 address bytes as dotted decimal."""
    return '.'.join(str(b) for b in raw[:4])


def compute_payload_stats(lengths: Iterable[int]) -> PayloadStats:
    """
    Compute payload size statistics.

    Args:
        lengths: Payload byte counts, one per packet

    Returns:
        PayloadStats (all zero for an empty input)
    """
    sizes = np.fromiter(lengths, dtype=np.int64)
    if sizes.size == 0:
        return PayloadStats(0, 0, 0.0, 0, 0, 0.0)

    return PayloadStats(
        total_bytes=int(sizes.sum()),
        packet_count=int(sizes.size),
        avg_payload_size=float(sizes.mean()),
        max_payload_size=int(sizes.max()),
        min_payload_size=int(sizes.min()),
        median_payload_size=float(np.median(sizes)),
    )
