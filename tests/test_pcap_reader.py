"""
Unit tests for PCAP container parsing.
"""

import struct
import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.smpp_inspector.pcap_reader import FormatError, read_records, detect_byte_order
from tests.test_fixtures import TestFixtures


class TestGlobalHeader(unittest.TestCase):
    """Test global header validation."""

    def test_too_short(self):
        """Buffers shorter than 24 bytes are rejected."""
        with self.assertRaises(FormatError) as ctx:
            read_records(b'\xa1\xb2\xc3\xd4' + b'\x00' * 10)
        self.assertIn("too short", str(ctx.exception))

    def test_empty_buffer(self):
        with self.assertRaises(FormatError):
            read_records(b'')

    def test_bad_magic(self):
        """Unknown magic numbers are rejected before iteration."""
        buffer = b'\x0a\x0d\x0d\x0a' + b'\x00' * 20
        with self.assertRaises(FormatError) as ctx:
            read_records(buffer)
        self.assertIn("bad magic", str(ctx.exception))

    def test_format_error_is_value_error(self):
        self.assertTrue(issubclass(FormatError, ValueError))

    def test_byte_order_detection(self):
        little = TestFixtures.create_pcap([], little_endian=True)
        big = TestFixtures.create_pcap([], little_endian=False)
        self.assertEqual(detect_byte_order(little), '<')
        self.assertEqual(detect_byte_order(big), '>')


class TestRecordIteration(unittest.TestCase):
    """Test per-record iteration."""

    def test_little_endian_records(self):
        frames = [b'\x01' * 60, b'\x02' * 70]
        records = list(read_records(TestFixtures.create_pcap(frames, little_endian=True)))

        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].data, frames[0])
        self.assertEqual(records[0].captured_length, 60)
        self.assertEqual(records[1].data, frames[1])
        self.assertEqual(records[1].original_length, 70)

    def test_big_endian_records(self):
        frames = [b'\x03' * 42]
        records = list(read_records(TestFixtures.create_pcap(frames, little_endian=False)))

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].data, frames[0])
        self.assertEqual(records[0].captured_length, 42)

    def test_timestamp(self):
        records = list(read_records(TestFixtures.create_pcap([b'\x00' * 20], start_ts=100)))
        self.assertAlmostEqual(records[0].timestamp, 100.5)

    def test_header_only_capture(self):
        self.assertEqual(list(read_records(TestFixtures.create_pcap([]))), [])

    def test_corrupted_length_stops_iteration(self):
        """A 0xFFFFFFFF captured length never reads past the buffer."""
        frames = [b'\x01' * 30, b'\x02' * 30]
        buffer = TestFixtures.create_pcap(frames, captured_lengths=[30, 0xFFFFFFFF])
        records = list(read_records(buffer))

        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].data, frames[0])

    def test_corrupted_first_length(self):
        buffer = TestFixtures.create_pcap([b'\x01' * 30], captured_lengths=[0xFFFFFFFF], little_endian=False)
        self.assertEqual(list(read_records(buffer)), [])

    def test_truncated_record_body(self):
        buffer = TestFixtures.create_pcap([b'\x01' * 30, b'\x02' * 30])
        records = list(read_records(buffer[:-5]))
        self.assertEqual(len(records), 1)

    def test_truncated_record_header(self):
        """Fewer than 16 bytes after the last record ends iteration."""
        buffer = TestFixtures.create_pcap([b'\x01' * 30]) + b'\x00' * 15
        records = list(read_records(buffer))
        self.assertEqual(len(records), 1)

    def test_zero_length_record(self):
        buffer = TestFixtures.create_pcap([b'', b'\x05' * 8])
        records = list(read_records(buffer))
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].data, b'')
        self.assertEqual(records[1].data, b'\x05' * 8)

    def test_iterator_is_lazy_and_single_pass(self):
        records = read_records(TestFixtures.create_pcap([b'\x01' * 10, b'\x02' * 10]))
        self.assertEqual(next(records).data, b'\x01' * 10)
        self.assertEqual(len(list(records)), 1)
        self.assertEqual(list(records), [])

    def test_every_truncation_point_is_safe(self):
        buffer = TestFixtures.create_pcap([b'\x01' * 25, b'\x02' * 33, b'\x03' * 41])
        for end in range(24, len(buffer) + 1):
            records = list(read_records(buffer[:end]))
            for record in records:
                self.assertEqual(len(record.data), record.captured_length)
            self.assertLessEqual(len(records), 3)

    def test_record_header_fields_use_capture_byte_order(self):
        buffer = TestFixtures.create_pcap([b'\xff' * 4], little_endian=False)
        incl_len = struct.unpack_from('>I', buffer, 24 + 8)[0]
        self.assertEqual(incl_len, 4)
        self.assertEqual(list(read_records(buffer))[0].captured_length, 4)


if __name__ == '__main__':
    unittest.main()
