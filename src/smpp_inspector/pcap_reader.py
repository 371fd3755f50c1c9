"""
Classic PCAP container parsing.

Validates the global header and iterates the per-record headers of an
in-memory capture buffer.
"""

import logging
import struct
from pathlib import Path
from typing import Iterator, Union

from .config import (
    PCAP_GLOBAL_HEADER_SIZE,
    PCAP_RECORD_HEADER_SIZE,
    PCAP_MAGIC_BIG_ENDIAN,
    PCAP_MAGIC_LITTLE_ENDIAN,
)
from .types import CaptureRecord

logger = logging.getLogger(__name__)


class FormatError(ValueError):
    """Capture buffer is not a usable PCAP container."""
    pass


def detect_byte_order(buffer: bytes) -> str:
    """
    Validate the global header and return the struct byte-order prefix.

    Args:
        buffer: Whole capture file contents

    Returns:
        '>' for big-endian captures, '<' for little-endian ones

    Raises:
        FormatError: buffer too short or magic number not recognized
    """
    if len(buffer) < PCAP_GLOBAL_HEADER_SIZE:
        raise FormatError("Invalid PCAP file: too short for global header")

    magic = struct.unpack_from('>I', buffer, 0)[0]
    if magic == PCAP_MAGIC_BIG_ENDIAN:
        return '>'
    if magic == PCAP_MAGIC_LITTLE_ENDIAN:
        return '<'
    raise FormatError(f"Invalid PCAP file: bad magic number 0x{magic:08x}")


def _iter_records(buffer: bytes, byte_order: str) -> Iterator[CaptureRecord]:
    header_format = byte_order + 'IIII'
    offset = PCAP_GLOBAL_HEADER_SIZE
    buffer_len = len(buffer)

    while buffer_len - offset >= PCAP_RECORD_HEADER_SIZE:
        ts_sec, ts_usec, incl_len, orig_len = struct.unpack_from(header_format, buffer, offset)
        data_start = offset + PCAP_RECORD_HEADER_SIZE

        if incl_len > buffer_len - data_start:
            logger.debug(f"Truncated record at offset {offset}: captured length {incl_len}, "
                         f"{buffer_len - data_start} bytes left")
            break

        yield CaptureRecord(
            data=bytes(buffer[data_start:data_start + incl_len]),
            captured_length=incl_len,
            original_length=orig_len,
            timestamp=ts_sec + ts_usec / 1_000_000,
        )
        offset = data_start + incl_len


def read_records(buffer: bytes) -> Iterator[CaptureRecord]:
    """
    Iterate the records of a PCAP buffer.

    The global header is validated immediately; records are produced lazily.
    Iteration stops cleanly at the first record header or record body that
    would extend past the end of the buffer.

    Args:
        buffer: Whole capture file contents

    Returns:
        Iterator of CaptureRecord

    Raises:
        FormatError: buffer too short or magic number not recognized
    """
    byte_order = detect_byte_order(buffer)
    return _iter_records(buffer, byte_order)


def read_capture_file(pcap_path: Union[str, Path]) -> bytes:
    """Read a capture file into memory."""
    with open(pcap_path, 'rb') as f:
        return f.read()
