"""
Ethernet / IPv4 / TCP header stripping.

Recovers the TCP payload and endpoints of a captured frame. Anything that is
not IPv4 over Ethernet II carrying TCP is skipped.
"""

import struct
from typing import Optional, Tuple

from .config import (
    ETHERNET_HEADER_SIZE,
    ETHERTYPE_IPV4,
    IPV4_MIN_HEADER_SIZE,
    IP_PROTO_TCP,
    TCP_MIN_HEADER_SIZE,
    SMPP_HEADER_SIZE,
)
from .types import CaptureRecord, Endpoint, TcpPayload
from .utils import format_ipv4


def parse_ethernet_ipv4(frame: bytes) -> Optional[Tuple[str, str, int, int]]:
    """
    Parse Ethernet + IPv4 headers.

    Args:
        frame: Raw frame bytes (starting from Ethernet header)

    Returns:
        Tuple of (src_ip, dst_ip, ip_proto, ip_header_len) or None if the
        frame is not IPv4 or is too short
    """
    if len(frame) < ETHERNET_HEADER_SIZE:
        return None

    eth_type = struct.unpack_from('!H', frame, 12)[0]
    if eth_type != ETHERTYPE_IPV4:
        return None

    ip_start = ETHERNET_HEADER_SIZE
    if len(frame) < ip_start + IPV4_MIN_HEADER_SIZE:
        return None

    ip_header_len = (frame[ip_start] & 0x0F) * 4
    if ip_header_len < IPV4_MIN_HEADER_SIZE or len(frame) < ip_start + ip_header_len:
        return None

    proto = frame[ip_start + 9]
    src_ip = format_ipv4(frame[ip_start + 12:ip_start + 16])
    dst_ip = format_ipv4(frame[ip_start + 16:ip_start + 20])

    return src_ip, dst_ip, proto, ip_header_len


def parse_tcp_header(segment: bytes) -> Optional[Tuple[int, int, int]]:
    """
    Parse the fixed part of a TCP header.

    Args:
        segment: TCP header + payload bytes

    Returns:
        Tuple of (src_port, dst_port, tcp_header_len) or None if truncated
    """
    if len(segment) < TCP_MIN_HEADER_SIZE:
        return None

    src_port, dst_port = struct.unpack_from('!HH', segment, 0)
    tcp_header_len = ((segment[12] >> 4) & 0x0F) * 4

    if tcp_header_len < TCP_MIN_HEADER_SIZE or len(segment) < tcp_header_len:
        return None

    return src_port, dst_port, tcp_header_len


def strip_frame(record: CaptureRecord) -> Optional[TcpPayload]:
    """
    Strip link, network and transport headers from a captured frame.

    Args:
        record: One capture record

    Returns:
        TcpPayload, or None when the frame is not Ethernet/IPv4/TCP, is
        truncated, or its payload cannot hold an SMPP header
    """
    frame = record.data[:record.captured_length]

    ip_info = parse_ethernet_ipv4(frame)
    if ip_info is None:
        return None

    src_ip, dst_ip, proto, ip_header_len = ip_info
    if proto != IP_PROTO_TCP:
        return None

    tcp_start = ETHERNET_HEADER_SIZE + ip_header_len
    tcp_info = parse_tcp_header(frame[tcp_start:])
    if tcp_info is None:
        return None

    src_port, dst_port, tcp_header_len = tcp_info
    payload_offset = tcp_start + tcp_header_len
    payload_length = len(frame) - payload_offset

    # A payload of exactly one header is kept so a bare enquire_link decodes;
    # stricter captures drop anything of 16 bytes or fewer.
    if payload_length < SMPP_HEADER_SIZE:
        return None

    return TcpPayload(
        source=Endpoint(src_ip, src_port),
        destination=Endpoint(dst_ip, dst_port),
        payload=frame[payload_offset:],
    )
