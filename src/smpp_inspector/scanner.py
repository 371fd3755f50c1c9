"""
PDU boundary scanning.

Re-synchronizes on SMPP PDU starts inside a TCP payload that may begin
mid-PDU, hold several PDUs back to back, or end in truncated garbage.
"""

import logging
import struct
from typing import Callable, List, TypeVar

from .config import SMPP_HEADER_SIZE
from .decoder import decode_pdu
from .signatures import detect_smpp_header
from .types import ParsedPdu

logger = logging.getLogger(__name__)

T = TypeVar('T')


def _scan(payload: bytes, handler: Callable[[bytes], T]) -> List[T]:
    data = bytes(payload)
    results: List[T] = []
    offset = 0

    while offset + SMPP_HEADER_SIZE <= len(data):
        detected, _ = detect_smpp_header(data, offset)
        if not detected:
            offset += 1
            continue

        command_length = struct.unpack_from('!I', data, offset)[0]
        pdu_slice = data[offset:offset + command_length]
        try:
            results.append(handler(pdu_slice))
        except Exception as e:
            # Skip one byte so a bad slice can never stall the scan
            logger.warning(f"Error parsing PDU slice at offset {offset}, advancing one byte: {e}",
                           exc_info=True)
            offset += 1
            continue

        offset += command_length

    return results


def _validated_slice(pdu_slice: bytes) -> bytes:
    decode_pdu(pdu_slice)
    return pdu_slice


def scan_pdus(payload: bytes) -> List[bytes]:
    """
    Locate PDU boundaries.

    Each slice is decoded and discarded, so the boundaries match the ones
    parse_multiple_pdus settles on for the same payload.

    Args:
        payload: TCP payload bytes

    Returns:
        List of PDU byte slices, in payload order
    """
    return _scan(payload, _validated_slice)


def parse_multiple_pdus(payload: bytes,
                        decoder: Callable[[bytes], ParsedPdu] = decode_pdu) -> List[ParsedPdu]:
    """
    Scan a TCP payload and decode every PDU found.

    Args:
        payload: TCP payload bytes
        decoder: PDU decoder applied to each accepted slice

    Returns:
        List of ParsedPdu, in payload order
    """
    return _scan(payload, decoder)
