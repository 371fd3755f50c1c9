"""
Capture analysis API.

Builds packet summaries from a capture buffer and decodes the PDUs of a
selected packet on demand.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from .frame_parser import strip_frame
from .pcap_reader import read_capture_file, read_records
from .scanner import parse_multiple_pdus
from .signatures import describe_payload
from .types import PacketSummary, ParsedPdu

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ['index', 'timestamp', 'src_ip', 'src_port', 'dst_ip', 'dst_port', 'length', 'info']


class NoSmppPacketsError(RuntimeError):
    """No TCP record with a usable payload was found in the capture."""
    pass


class PacketNotFoundError(LookupError):
    """No packet summary carries the requested index."""
    pass


def extract_packet_summaries(buffer: bytes, max_packets: Optional[int] = None) -> List[PacketSummary]:
    """
    Build summaries for every Ethernet/IPv4/TCP record carrying a payload.

    Args:
        buffer: Whole capture file contents
        max_packets: Optional limit on summaries produced

    Returns:
        List of PacketSummary, indexed from 1 in capture order

    Raises:
        FormatError: the buffer is not a PCAP container
    """
    summaries: List[PacketSummary] = []
    record_count = 0

    for record in read_records(buffer):
        if max_packets is not None and len(summaries) >= max_packets:
            break
        record_count += 1

        stripped = strip_frame(record)
        if stripped is None:
            continue

        summaries.append(PacketSummary(
            index=len(summaries) + 1,
            source=stripped.source,
            destination=stripped.destination,
            length=len(stripped.payload),
            info=describe_payload(stripped.payload),
            payload=stripped.payload,
            timestamp=record.timestamp,
        ))

    logger.debug(f"Read {record_count} records, {len(summaries)} with TCP payloads")
    return summaries


def analyze_capture(buffer: bytes, max_packets: Optional[int] = None) -> List[PacketSummary]:
    """
    Like extract_packet_summaries, but an empty result is an error.

    Raises:
        FormatError: the buffer is not a PCAP container
        NoSmppPacketsError: no matching record was found
    """
    summaries = extract_packet_summaries(buffer, max_packets=max_packets)
    if not summaries:
        raise NoSmppPacketsError("No valid TCP packets with payloads found in the PCAP file.")
    return summaries


def analyze_pcap(pcap_path: Union[str, Path], max_packets: Optional[int] = None) -> List[PacketSummary]:
    """
    Read a capture file and summarize its TCP packets.

    Args:
        pcap_path: Path to PCAP file
        max_packets: Optional limit on summaries produced

    Returns:
        List of PacketSummary
    """
    logger.info(f"Analyzing PCAP file: {pcap_path}")
    return analyze_capture(read_capture_file(pcap_path), max_packets=max_packets)


def decode_packet(summary: PacketSummary) -> List[ParsedPdu]:
    """Decode every PDU in a summarized packet's retained payload."""
    pdus = parse_multiple_pdus(summary.payload)
    logger.debug(f"Packet #{summary.index}: {len(pdus)} PDUs decoded")
    return pdus


def find_packet(summaries: List[PacketSummary], index: int) -> PacketSummary:
    """
    Look up a summary by its index.

    Raises:
        PacketNotFoundError: no summary has that index
    """
    for summary in summaries:
        if summary.index == index:
            return summary
    raise PacketNotFoundError(f"No packet with index {index}")


def summaries_to_dataframe(summaries: List[PacketSummary]) -> pd.DataFrame:
    """
    Tabulate packet summaries (payload bytes excluded).

    Args:
        summaries: Packet summaries

    Returns:
        DataFrame with one row per summary
    """
    return pd.DataFrame([s.to_dict() for s in summaries], columns=SUMMARY_COLUMNS)
