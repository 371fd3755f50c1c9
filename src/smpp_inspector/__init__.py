"""
SMPP Capture Inspector

Extracts SMPP PDUs from classic PCAP captures: container parsing, Ethernet/
IPv4/TCP header stripping, PDU boundary re-synchronization and deliver_sm
decoding with TLVs and data-coding aware message rendering.
"""

from .analyzer import (
    analyze_capture,
    analyze_pcap,
    decode_packet,
    extract_packet_summaries,
    summaries_to_dataframe,
    NoSmppPacketsError,
    PacketNotFoundError,
    find_packet,
)
from .decoder import decode_pdu, decode_message, describe_esm_class, PduDecodeError
from .frame_parser import strip_frame
from .pcap_reader import read_records, read_capture_file, FormatError
from .scanner import scan_pdus, parse_multiple_pdus
from .types import (
    BodyKind,
    CaptureRecord,
    DeliverSmBody,
    Endpoint,
    PacketSummary,
    ParsedPdu,
    SmppAddress,
    SmppHeader,
    SmppTlv,
    TcpPayload,
    UnsupportedBody,
)

__version__ = "0.1.0"
__all__ = [
    'analyze_capture',
    'analyze_pcap',
    'decode_packet',
    'extract_packet_summaries',
    'summaries_to_dataframe',
    'NoSmppPacketsError',
    'PacketNotFoundError',
    'find_packet',
    'decode_pdu',
    'decode_message',
    'describe_esm_class',
    'PduDecodeError',
    'strip_frame',
    'read_records',
    'read_capture_file',
    'FormatError',
    'scan_pdus',
    'parse_multiple_pdus',
    'BodyKind',
    'CaptureRecord',
    'DeliverSmBody',
    'Endpoint',
    'PacketSummary',
    'ParsedPdu',
    'SmppAddress',
    'SmppHeader',
    'SmppTlv',
    'TcpPayload',
    'UnsupportedBody',
]
