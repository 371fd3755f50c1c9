"""
Unit tests for SMPP header signatures.
"""

import struct
import unittest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from src.smpp_inspector.signatures import (
    describe_payload,
    detect_smpp_header,
    is_known_command,
    peek_header,
)


def header(command_length: int, command_id: int, sequence_no: int = 1) -> bytes:
    return struct.pack('!IIII', command_length, command_id, 0, sequence_no)


class TestDetectSmppHeader(unittest.TestCase):
    """Test header plausibility checks."""

    def test_valid_header(self):
        detected, error = detect_smpp_header(header(16, 0x00000004))
        self.assertTrue(detected, f"SMPP header not detected: {error}")
        self.assertIsNone(error)

    def test_unknown_command_id(self):
        detected, error = detect_smpp_header(header(16, 0x00000009))
        self.assertFalse(detected)
        self.assertIn("unknown command id", error)

    def test_length_below_header_size(self):
        detected, _ = detect_smpp_header(header(15, 0x00000004))
        self.assertFalse(detected)

    def test_length_past_end(self):
        detected, error = detect_smpp_header(header(17, 0x00000004))
        self.assertFalse(detected)
        self.assertIn("exceeds", error)

    def test_too_short(self):
        detected, _ = detect_smpp_header(header(16, 0x00000004)[:15])
        self.assertFalse(detected)

    def test_offset(self):
        payload = b'\xff\xff' + header(16, 0x80000004)
        self.assertFalse(detect_smpp_header(payload, 0)[0])
        self.assertTrue(detect_smpp_header(payload, 2)[0])

    def test_known_commands(self):
        for command_id in (0x00000001, 0x80000001, 0x00000002, 0x80000002,
                           0x00000003, 0x80000003, 0x00000004, 0x80000004):
            self.assertTrue(is_known_command(command_id), hex(command_id))
        self.assertFalse(is_known_command(0x00000000))
        self.assertFalse(is_known_command(0x80000000))

    def test_peek_header(self):
        self.assertEqual(peek_header(header(20, 0x00000002)), (20, 2))
        self.assertIsNone(peek_header(b'\x00' * 7))


class TestDescribePayload(unittest.TestCase):
    """Test one-line payload descriptions."""

    def test_single_pdu(self):
        self.assertEqual(describe_payload(header(16, 0x00000004)), 'enquire_link')

    def test_multiple_pdus(self):
        payload = header(16, 0x00000004) + header(16, 0x80000004)
        self.assertEqual(describe_payload(payload), 'enquire_link (Multiple)')

    def test_unknown_command(self):
        self.assertEqual(describe_payload(header(16, 0x00000015)), 'Unknown Command (0x15)')

    def test_implausible_length(self):
        self.assertEqual(describe_payload(header(4000, 0x00000004)), 'SMPP Data')
        self.assertEqual(describe_payload(header(3, 0x00000004)), 'SMPP Data')

    def test_too_short(self):
        self.assertEqual(describe_payload(b'\x00\x00'), 'SMPP Data')


if __name__ == '__main__':
    unittest.main()
