"""
SMPP header signatures.

Quick, non-decoding checks used to classify TCP payloads in packet summaries.
"""

import struct
from typing import Optional, Tuple

from .config import COMMAND_ID_MAP, SMPP_HEADER_SIZE


def is_known_command(command_id: int) -> bool:
    """Check whether a command id is in the fixed command table."""
    return command_id in COMMAND_ID_MAP


def peek_header(payload: bytes, offset: int = 0) -> Optional[Tuple[int, int]]:
    """
    Peek command_length and command_id without decoding.

    Returns:
        Tuple of (command_length, command_id) or None if fewer than 8 bytes remain
    """
    if len(payload) - offset < 8:
        return None
    return struct.unpack_from('!II', payload, offset)


def detect_smpp_header(payload: bytes, offset: int = 0) -> Tuple[bool, Optional[str]]:
    """
    Detect a plausible SMPP header at ``offset``.

    A header is plausible when its command id is known and its declared
    length covers at least a header and fits in the buffer.

    Args:
        payload: TCP payload bytes
        offset: Candidate PDU start

    Returns:
        Tuple of (detected: bool, error: Optional[str])
    """
    if len(payload) - offset < SMPP_HEADER_SIZE:
        return False, "payload too short for SMPP header"

    command_length, command_id = peek_header(payload, offset)

    if not is_known_command(command_id):
        return False, f"unknown command id: 0x{command_id:08x}"

    if command_length < SMPP_HEADER_SIZE:
        return False, f"command length too small: {command_length}"

    if offset + command_length > len(payload):
        return False, f"command length {command_length} exceeds payload"

    return True, None


def describe_payload(payload: bytes) -> str:
    """
    One-line description of a TCP payload for packet summaries.

    Args:
        payload: TCP payload bytes

    Returns:
        Command name of the first PDU (suffixed with " (Multiple)" when more
        bytes follow it), or "SMPP Data" when no header can be read
    """
    peeked = peek_header(payload)
    if peeked is None:
        return "SMPP Data"

    command_length, command_id = peeked
    if command_length < SMPP_HEADER_SIZE or command_length > len(payload):
        return "SMPP Data"

    info = COMMAND_ID_MAP.get(command_id, f"Unknown Command (0x{command_id:x})")
    if command_length < len(payload):
        info += " (Multiple)"
    return info
