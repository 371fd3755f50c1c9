"""
Test fixtures and utilities for capture decoding tests.

Builds synthetic SMPP PDUs, Ethernet/IPv4/TCP frames and PCAP buffers.
"""

import struct
from typing import Iterable, List, Optional, Sequence, Tuple


class TestFixtures:
    """Collection of test fixtures for pipeline testing."""

    # SMPP-M command ids
    BIND_RECEIVER = 0x00000001
    DELIVER_SM = 0x00000002
    DELIVER_SM_RESP = 0x80000002
    ENQUIRE_LINK = 0x00000004
    ENQUIRE_LINK_RESP = 0x80000004

    @staticmethod
    def create_pdu(command_id: int,
                   body: bytes = b'',
                   sequence_no: int = 1,
                   command_status: int = 0,
                   command_length: Optional[int] = None) -> bytes:
        """
        Create an SMPP PDU.

        Args:
            command_id: 32-bit command id
            body: Body bytes appended after the header
            sequence_no: Sequence number
            command_status: Command status
            command_length: Declared length (defaults to the real size)

        Returns:
            PDU bytes
        """
        if command_length is None:
            command_length = 16 + len(body)
        return struct.pack('!IIII', command_length, command_id, command_status, sequence_no) + body

    @staticmethod
    def create_tlv(tag: int, value: bytes, length: Optional[int] = None) -> bytes:
        """Create a TLV; ``length`` overrides the declared length."""
        if length is None:
            length = len(value)
        return struct.pack('!HH', tag, length) + value

    @staticmethod
    def create_deliver_sm_body(service_type: bytes = b'',
                               source: Tuple[int, int, bytes] = (1, 1, b'447700900123'),
                               dest: Tuple[int, int, bytes] = (1, 1, b'447700900456'),
                               esm_class: int = 0x00,
                               protocol_id: int = 0x00,
                               priority_flag: int = 0x00,
                               replace_if_present_flag: int = 0x00,
                               data_coding: int = 0x04,
                               sm_default_msg_id: int = 0x00,
                               short_message: bytes = b'Hello',
                               sm_length: Optional[int] = None,
                               tlvs: Iterable[bytes] = ()) -> bytes:
        """
        Create a deliver_sm body.

        Returns:
            Body bytes (without the 16-byte header)
        """
        if sm_length is None:
            sm_length = len(short_message)

        body = bytearray()
        body += service_type + b'\x00'
        body += bytes([source[0], source[1]]) + source[2] + b'\x00'
        body += bytes([dest[0], dest[1]]) + dest[2] + b'\x00'
        body += bytes([
            esm_class,
            protocol_id,
            priority_flag,
            replace_if_present_flag,
            data_coding,
            sm_default_msg_id,
            sm_length,
        ])
        body += short_message
        for tlv in tlvs:
            body += tlv
        return bytes(body)

    @classmethod
    def create_deliver_sm(cls, sequence_no: int = 1, **kwargs) -> bytes:
        """Create a complete deliver_sm PDU."""
        return cls.create_pdu(cls.DELIVER_SM, cls.create_deliver_sm_body(**kwargs), sequence_no=sequence_no)

    @classmethod
    def create_enquire_link(cls, sequence_no: int = 1) -> bytes:
        """Create a 16-byte enquire_link PDU."""
        return cls.create_pdu(cls.ENQUIRE_LINK, sequence_no=sequence_no)

    @staticmethod
    def create_frame(payload: bytes,
                     src_ip: str = '10.0.0.1',
                     src_port: int = 2775,
                     dst_ip: str = '10.0.0.2',
                     dst_port: int = 9999,
                     ethertype: int = 0x0800,
                     ip_proto: int = 6,
                     ip_options: bytes = b'',
                     tcp_options: bytes = b'') -> bytes:
        """
        Create an Ethernet II / IPv4 / TCP frame.

        Args:
            payload: TCP payload
            ip_options: Extra IPv4 header bytes (multiple of 4)
            tcp_options: Extra TCP header bytes (multiple of 4)

        Returns:
            Frame bytes
        """
        eth = b'\x00\x11\x22\x33\x44\x55' + b'\x66\x77\x88\x99\xaa\xbb' + struct.pack('!H', ethertype)

        ihl = (20 + len(ip_options)) // 4
        tcp_header_len = 20 + len(tcp_options)
        total_length = ihl * 4 + tcp_header_len + len(payload)

        ip = struct.pack(
            '!BBHHHBBH4s4s',
            0x40 | ihl,  # Version 4 + IHL
            0,
            total_length,
            0x1234,
            0x4000,  # Don't fragment
            64,
            ip_proto,
            0,
            bytes(int(p) for p in src_ip.split('.')),
            bytes(int(p) for p in dst_ip.split('.')),
        ) + ip_options

        tcp = struct.pack(
            '!HHIIBBHHH',
            src_port,
            dst_port,
            1000,  # Sequence
            2000,  # Acknowledgement
            (tcp_header_len // 4) << 4,
            0x18,  # PSH + ACK
            65535,
            0,
            0,
        ) + tcp_options

        return eth + ip + tcp + payload

    @staticmethod
    def create_pcap(frames: Sequence[bytes],
                    little_endian: bool = True,
                    captured_lengths: Optional[List[int]] = None,
                    start_ts: int = 1700000000) -> bytes:
        """
        Create a classic PCAP buffer.

        Args:
            frames: Frame bytes, one per record
            little_endian: Byte order of the container
            captured_lengths: Overrides for declared captured lengths
            start_ts: Timestamp (seconds) of the first record

        Returns:
            PCAP bytes
        """
        bo = '<' if little_endian else '>'
        data = bytearray(struct.pack(bo + 'IHHiIII', 0xA1B2C3D4, 2, 4, 0, 0, 65535, 1))

        for i, frame in enumerate(frames):
            incl_len = len(frame) if captured_lengths is None else captured_lengths[i]
            data += struct.pack(bo + 'IIII', start_ts + i, 500000, incl_len, len(frame))
            data += frame

        return bytes(data)
