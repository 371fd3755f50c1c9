"""
SMPP PDU decoding.

Decodes the fixed header of a single, already-bounded PDU buffer and, for
deliver_sm, every body field, the optional TLVs and the message text.
"""

import logging
import struct
from typing import List, Optional, Tuple

from .config import (
    COMMAND_ID_MAP,
    DATA_CODING_MAP,
    DATA_CODING_GSM7,
    DELIVER_SM,
    ESM_MESSAGE_MODE_MAP,
    ESM_MESSAGE_TYPE_MAP,
    ESM_MODE_MASK,
    ESM_TYPE_MASK,
    SMPP_HEADER_SIZE,
    TEXT_CODECS,
    TLV_HEADER_SIZE,
    TLV_MESSAGE_PAYLOAD,
    UNKNOWN_COMMAND,
    UNKNOWN_MODE,
    UNKNOWN_TYPE,
)
from .types import (
    DeliverSmBody,
    ParsedPdu,
    PduBody,
    SmppAddress,
    SmppHeader,
    SmppTlv,
    UnsupportedBody,
)
from .utils import bytes_to_hex

logger = logging.getLogger(__name__)


class PduDecodeError(ValueError):
    """A fixed PDU field extends past the end of the buffer."""
    pass


class BufferReader:
    """
    Big-endian cursor over a PDU buffer.

    Fixed-size reads past the end raise PduDecodeError; C-strings and TLVs
    degrade gracefully instead.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.offset = 0

    def bytes_remaining(self) -> int:
        return len(self.data) - self.offset

    def _require(self, size: int, what: str):
        if self.bytes_remaining() < size:
            raise PduDecodeError(
                f"{what} needs {size} bytes at offset {self.offset}, "
                f"only {self.bytes_remaining()} left"
            )

    def read_uint8(self, what: str = "uint8") -> int:
        self._require(1, what)
        value = self.data[self.offset]
        self.offset += 1
        return value

    def read_uint32(self, what: str = "uint32") -> int:
        self._require(4, what)
        value = struct.unpack_from('!I', self.data, self.offset)[0]
        self.offset += 4
        return value

    def read_cstring(self) -> str:
        """Read up to the next NUL (or the end of the buffer) and skip the NUL."""
        end = self.data.find(b'\x00', self.offset)
        if end == -1:
            end = len(self.data)
            text = self.data[self.offset:end]
            self.offset = end
        else:
            text = self.data[self.offset:end]
            self.offset = end + 1
        return text.decode('ascii', errors='replace')

    def read_bytes(self, length: int) -> bytes:
        self._require(length, "octet string")
        value = self.data[self.offset:self.offset + length]
        self.offset += length
        return value

    def read_rest(self) -> bytes:
        value = self.data[self.offset:]
        self.offset = len(self.data)
        return value

    def read_tlv(self) -> Optional[SmppTlv]:
        """
        Read one TLV.

        Returns:
            SmppTlv, or None (cursor untouched) when fewer than 4 bytes remain
            or the declared length exceeds what is left
        """
        if self.bytes_remaining() < TLV_HEADER_SIZE:
            return None

        tag, length = struct.unpack_from('!HH', self.data, self.offset)
        if length > self.bytes_remaining() - TLV_HEADER_SIZE:
            return None

        self.offset += TLV_HEADER_SIZE
        return SmppTlv(tag=tag, length=length, value=self.read_bytes(length))


def resolve_command_name(command_id: int) -> str:
    return COMMAND_ID_MAP.get(command_id, UNKNOWN_COMMAND)


def describe_esm_class(esm_class: int) -> Tuple[str, str]:
    """
    Decompose an ESM class byte.

    Args:
        esm_class: Raw esm_class byte

    Returns:
        Tuple of (messaging mode, message type) descriptions
    """
    mode = ESM_MESSAGE_MODE_MAP.get(esm_class & ESM_MODE_MASK, UNKNOWN_MODE)
    message_type = ESM_MESSAGE_TYPE_MAP.get(esm_class & ESM_TYPE_MASK, UNKNOWN_TYPE)
    return mode, message_type


def data_coding_name(data_coding: int) -> str:
    return DATA_CODING_MAP.get(data_coding, f"Unknown (0x{data_coding:x})")


def decode_message(content: bytes, data_coding: int) -> str:
    """
    Render message content according to its data coding.

    UCS-2, Latin-1 and UTF-8 are decoded to text. GSM 7-bit is not unpacked
    and, like every other coding, is shown as a hex dump. A decoding failure
    is rendered inline instead of being raised.

    Args:
        content: Raw message bytes (short_message or message_payload)
        data_coding: data_coding byte of the PDU

    Returns:
        Text prefixed with the scheme name, e.g. "(UTF-8) Hello"
    """
    scheme = data_coding_name(data_coding)
    codec = TEXT_CODECS.get(data_coding)

    if codec is not None:
        try:
            text = bytes(content).decode(codec)
        except UnicodeDecodeError as e:
            text = f"[Error decoding: {e}]"
    elif data_coding == DATA_CODING_GSM7:
        text = f"[GSM 7-bit encoded data: {bytes_to_hex(content)}]"
    else:
        text = f"[Binary Data: {bytes_to_hex(content)}]"

    return f"({scheme}) {text}"


def decode_header(reader: BufferReader) -> SmppHeader:
    command_length = reader.read_uint32("command_length")
    command_id = reader.read_uint32("command_id")
    command_status = reader.read_uint32("command_status")
    sequence_no = reader.read_uint32("sequence_no")

    return SmppHeader(
        command_length=command_length,
        command_id=command_id,
        command_name=resolve_command_name(command_id),
        command_status=command_status,
        sequence_no=sequence_no,
    )


def _read_address(reader: BufferReader, prefix: str) -> SmppAddress:
    ton = reader.read_uint8(f"{prefix}_addr_ton")
    npi = reader.read_uint8(f"{prefix}_addr_npi")
    return SmppAddress(ton=ton, npi=npi, address=reader.read_cstring())


def parse_deliver_sm_body(reader: BufferReader) -> DeliverSmBody:
    """
    Decode a deliver_sm body starting at the reader's cursor.

    Args:
        reader: BufferReader positioned just after the header

    Returns:
        DeliverSmBody

    Raises:
        PduDecodeError: a fixed single-byte field is missing
    """
    service_type = reader.read_cstring()
    source_addr = _read_address(reader, "source")
    dest_addr = _read_address(reader, "dest")

    esm_class = reader.read_uint8("esm_class")
    mode, message_type = describe_esm_class(esm_class)

    protocol_id = reader.read_uint8("protocol_id")
    priority_flag = reader.read_uint8("priority_flag")
    replace_if_present_flag = reader.read_uint8("replace_if_present_flag")
    data_coding = reader.read_uint8("data_coding")
    sm_default_msg_id = reader.read_uint8("sm_default_msg_id")
    sm_length = reader.read_uint8("sm_length")

    short_message = None
    if 0 < sm_length <= reader.bytes_remaining():
        short_message = reader.read_bytes(sm_length)

    content = short_message
    tlvs: List[SmppTlv] = []
    while reader.bytes_remaining() > 0:
        tlv = reader.read_tlv()
        if tlv is None:
            break
        tlvs.append(tlv)
        if tlv.tag == TLV_MESSAGE_PAYLOAD:
            content = tlv.value

    if content is not None:
        decoded_message = decode_message(content, data_coding)
    else:
        decoded_message = "(No message content)"

    return DeliverSmBody(
        service_type=service_type,
        source_addr=source_addr,
        dest_addr=dest_addr,
        esm_class=esm_class,
        esm_message_mode=mode,
        esm_message_type=message_type,
        protocol_id=protocol_id,
        priority_flag=priority_flag,
        replace_if_present_flag=replace_if_present_flag,
        data_coding=data_coding,
        sm_default_msg_id=sm_default_msg_id,
        sm_length=sm_length,
        short_message=short_message,
        tlvs=tlvs,
        decoded_message=decoded_message,
    )


def decode_pdu(pdu_buffer: bytes) -> ParsedPdu:
    """
    Decode one SMPP PDU.

    The buffer's actual size is authoritative; a disagreeing command_length
    is only logged.

    Args:
        pdu_buffer: Exactly one PDU (header + body)

    Returns:
        ParsedPdu with a DeliverSmBody or an UnsupportedBody

    Raises:
        PduDecodeError: buffer shorter than the header or a deliver_sm
            fixed field is missing
    """
    reader = BufferReader(pdu_buffer)
    if reader.bytes_remaining() < SMPP_HEADER_SIZE:
        raise PduDecodeError(f"PDU too short for header: {reader.bytes_remaining()} bytes")

    header = decode_header(reader)

    if header.command_length != len(reader.data):
        logger.warning(
            f"SMPP command_length mismatch: header says {header.command_length}, "
            f"but buffer size is {len(reader.data)}. Parsing continues."
        )

    body: PduBody
    if header.command_name == DELIVER_SM:
        body = parse_deliver_sm_body(reader)
    else:
        body = UnsupportedBody(
            command_name=header.command_name,
            command_id=header.command_id,
            raw_body=reader.read_rest(),
            note=f"Parser for {header.command_name} (0x{header.command_id:x}) is not implemented.",
        )

    return ParsedPdu(header=header, body=body)
