"""
Example usage of the SMPP capture inspector.

Builds a small synthetic capture in memory and walks it through packet
summaries, on-demand PDU decoding and payload statistics.
"""

import pandas as pd

from src.smpp_inspector import (
    DeliverSmBody,
    analyze_capture,
    decode_packet,
    decode_message,
    describe_esm_class,
    summaries_to_dataframe,
)
from src.smpp_inspector.utils import compute_payload_stats
from tests.test_fixtures import TestFixtures


def build_sample_capture() -> bytes:
    """Capture with an enquire_link, a UCS-2 deliver_sm and a delivery receipt."""
    ucs2 = TestFixtures.create_deliver_sm(
        sequence_no=2,
        data_coding=0x08,
        short_message='Привет'.encode('utf-16-be'),
    )
    receipt = TestFixtures.create_deliver_sm(
        sequence_no=3,
        esm_class=0x04,
        short_message=b'',
        tlvs=[
            TestFixtures.create_tlv(0x001E, b'MSG0001\x00'),
            TestFixtures.create_tlv(0x0424, b'id:MSG0001 stat:DELIVRD'),
        ],
    )
    frames = [
        TestFixtures.create_frame(TestFixtures.create_enquire_link(sequence_no=1)),
        TestFixtures.create_frame(ucs2, src_ip='10.0.0.2', src_port=9999, dst_ip='10.0.0.1', dst_port=2775),
        TestFixtures.create_frame(b'\xff\xff' + receipt + TestFixtures.create_enquire_link(sequence_no=4),
                                  src_ip='10.0.0.2', src_port=9999, dst_ip='10.0.0.1', dst_port=2775),
    ]
    return TestFixtures.create_pcap(frames)


def example_packet_summaries(capture: bytes):
    """Example: List TCP packets in a capture."""
    print("=" * 80)
    print("EXAMPLE 1: Packet Summaries")
    print("=" * 80)

    summaries = analyze_capture(capture)
    df = summaries_to_dataframe(summaries)
    with pd.option_context('display.width', 120):
        print(df.to_string(index=False))
    return summaries


def example_decode_packets(summaries):
    """Example: Decode the PDUs carried by each packet."""
    print("\n" + "=" * 80)
    print("EXAMPLE 2: PDU Decoding")
    print("=" * 80)

    for summary in summaries:
        print(f"\nPacket #{summary.index} ({summary.info}):")
        for pdu in decode_packet(summary):
            print(f"  {pdu.header.command_name} seq={pdu.header.sequence_no}")
            if isinstance(pdu.body, DeliverSmBody):
                print(f"    esm_class: {pdu.body.esm_class_description}")
                print(f"    message:   {pdu.body.decoded_message}")
                for tlv in pdu.body.tlvs:
                    print(f"    tlv {tlv.tag_name}: {tlv.value_hex}")


def example_message_rendering():
    """Example: Render short messages under different data codings."""
    print("\n" + "=" * 80)
    print("EXAMPLE 3: Message Rendering")
    print("=" * 80)

    samples = [
        (b'Hello', 0x04),
        ('Grüße'.encode('latin-1'), 0x03),
        (b'\x48\x65', 0x00),
        (b'\x01\x02\x03', 0xF5),
        (b'', 0x04),
    ]
    for content, data_coding in samples:
        print(f"  0x{data_coding:02x}: {decode_message(content, data_coding)}")

    for esm_class in (0x00, 0x04, 0x23):
        mode, message_type = describe_esm_class(esm_class)
        print(f"  esm_class 0x{esm_class:02x}: {message_type}, {mode}")


def example_payload_stats(summaries):
    """Example: Payload size statistics."""
    print("\n" + "=" * 80)
    print("EXAMPLE 4: Payload Statistics")
    print("=" * 80)

    stats = compute_payload_stats(s.length for s in summaries)
    print(f"  packets={stats.packet_count} total={stats.total_bytes} "
          f"avg={stats.avg_payload_size:.1f} median={stats.median_payload_size:.1f}")


if __name__ == "__main__":
    print("\n" + "=" * 80)
    print("SMPP CAPTURE INSPECTOR - EXAMPLE USAGE")
    print("=" * 80 + "\n")

    capture = build_sample_capture()
    summaries = example_packet_summaries(capture)
    example_decode_packets(summaries)
    example_message_rendering()
    example_payload_stats(summaries)

    print("\n" + "=" * 80)
    print("Examples completed!")
    print("=" * 80)
