"""
Command-line interface for the SMPP capture inspector.

Usage:
    smpp-inspector --pcap capture.pcap
    smpp-inspector --pcap capture.pcap --out packets.csv
    smpp-inspector --pcap capture.pcap --packet 3 --format json --out pdus.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from .analyzer import analyze_pcap, decode_packet, find_packet, summaries_to_dataframe
from .config import DEFAULT_LOG_LEVEL, LOG_FORMAT
from .types import DeliverSmBody, PacketSummary, ParsedPdu
from .utils import compute_payload_stats


def export_summaries_csv(summaries: List[PacketSummary], output_path: str):
    """
    Export packet summaries to CSV file.

    Args:
        summaries: List of PacketSummary objects
        output_path: Output CSV file path
    """
    summaries_to_dataframe(summaries).to_csv(output_path, index=False)


def export_summaries_json(summaries: List[PacketSummary], output_path: str):
    """Export packet summaries to JSON file."""
    with open(output_path, 'w') as f:
        json.dump([s.to_dict() for s in summaries], f, indent=2)


def export_pdus_json(pdus: List[ParsedPdu], output_path: str):
    """Export decoded PDUs to JSON file."""
    with open(output_path, 'w') as f:
        json.dump([pdu.to_dict() for pdu in pdus], f, indent=2)


def print_summaries(summaries: List[PacketSummary]):
    df = summaries_to_dataframe(summaries)
    print(df.to_string(index=False))

    stats = compute_payload_stats(s.length for s in summaries)
    print()
    print(f"Packets: {stats.packet_count}, payload bytes: {stats.total_bytes} "
          f"(avg={stats.avg_payload_size:.1f}, min={stats.min_payload_size}, "
          f"max={stats.max_payload_size})")
    print("By first command:")
    for info, count in df['info'].value_counts().items():
        print(f"  {info}: {count}")


def print_pdus(summary: PacketSummary, pdus: List[ParsedPdu]):
    print(f"Packet #{summary.index}: {summary.source} -> {summary.destination}, "
          f"{summary.length} bytes, {len(pdus)} PDU(s)")
    print("-" * 80)
    for i, pdu in enumerate(pdus, start=1):
        header = pdu.header
        print(f"[{i}] {header.command_name} (0x{header.command_id:08x}) "
              f"len={header.command_length} status={header.command_status_name} "
              f"seq={header.sequence_no}")

        body = pdu.body
        if isinstance(body, DeliverSmBody):
            print(f"    service_type: {body.service_type!r}")
            print(f"    source: {body.source_addr.address} (ton={body.source_addr.ton}, npi={body.source_addr.npi})")
            print(f"    dest:   {body.dest_addr.address} (ton={body.dest_addr.ton}, npi={body.dest_addr.npi})")
            print(f"    esm_class: {body.esm_class_description}")
            print(f"    protocol_id={body.protocol_id} priority={body.priority_flag} "
                  f"replace_if_present={body.replace_if_present_flag} data_coding=0x{body.data_coding:02x} "
                  f"sm_default_msg_id={body.sm_default_msg_id} sm_length={body.sm_length}")
            for tlv in body.tlvs:
                print(f"    tlv {tlv.tag_name} [{tlv.length}]: {tlv.value_hex}")
            print(f"    message: {body.decoded_message}")
        else:
            print(f"    {body.note}")
            print(f"    raw_body: {body.to_dict()['raw_body']}")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Extract and decode SMPP PDUs from PCAP captures',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--pcap',
        type=str,
        required=True,
        help='Path to PCAP file to analyze'
    )

    parser.add_argument(
        '--packet',
        type=int,
        help='Index of the packet whose PDUs should be decoded'
    )

    parser.add_argument(
        '--out',
        type=str,
        help='Output file path (CSV or JSON based on extension)'
    )

    parser.add_argument(
        '--format',
        type=str,
        choices=['csv', 'json'],
        default='csv',
        help='Output format for packet listings (default: csv); decoded PDUs are always JSON'
    )

    parser.add_argument(
        '--max-packets',
        type=int,
        help='Maximum number of TCP packets to summarize'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, DEFAULT_LOG_LEVEL),
        format=LOG_FORMAT
    )

    try:
        summaries = analyze_pcap(args.pcap, max_packets=args.max_packets)

        if args.packet is not None:
            summary = find_packet(summaries, args.packet)
            pdus = decode_packet(summary)

            if args.out:
                export_pdus_json(pdus, args.out)
                print(f"Decoded PDUs exported to: {args.out}")
            else:
                print_pdus(summary, pdus)
        elif args.out:
            if Path(args.out).suffix == '.json' or args.format == 'json':
                export_summaries_json(summaries, args.out)
            else:
                export_summaries_csv(summaries, args.out)
            print(f"Found {len(summaries)} packets, exported to: {args.out}")
        else:
            print_summaries(summaries)

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
