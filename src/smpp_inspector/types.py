"""
Type definitions for the SMPP capture inspector.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .config import COMMAND_STATUS_MAP, TLV_TAG_MAP
from .utils import bytes_to_hex


class BodyKind(Enum):
    """Kinds of decoded PDU bodies."""
    DELIVER_SM = "deliver_sm"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Endpoint:
    """IPv4 address and TCP port."""
    ip: str
    port: int

    def __str__(self) -> str:
        return f"{self.ip}:{self.port}"


@dataclass(frozen=True)
class CaptureRecord:
    """One captured frame from the capture container."""
    data: bytes
    captured_length: int
    original_length: int = 0
    timestamp: float = 0.0


@dataclass(frozen=True)
class TcpPayload:
    """TCP payload recovered from an Ethernet/IPv4/TCP frame."""
    source: Endpoint
    destination: Endpoint
    payload: bytes


@dataclass
class PacketSummary:
    """Per-packet summary of a TCP record that may carry SMPP."""
    index: int  # 1-based, contiguous over accepted records
    source: Endpoint
    destination: Endpoint
    length: int  # payload byte count
    info: str
    payload: bytes = field(repr=False)
    timestamp: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'index': self.index,
            'timestamp': self.timestamp,
            'src_ip': self.source.ip,
            'src_port': self.source.port,
            'dst_ip': self.destination.ip,
            'dst_port': self.destination.port,
            'length': self.length,
            'info': self.info,
        }


@dataclass
class SmppHeader:
    """Fixed 16-byte SMPP header."""
    command_length: int
    command_id: int
    command_name: str
    command_status: int
    sequence_no: int

    @property
    def command_status_name(self) -> str:
        return COMMAND_STATUS_MAP.get(self.command_status, f"Unknown Status (0x{self.command_status:08x})")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'command_length': self.command_length,
            'command_id': f"0x{self.command_id:08x}",
            'command_name': self.command_name,
            'command_status': self.command_status,
            'command_status_name': self.command_status_name,
            'sequence_no': self.sequence_no,
        }


@dataclass
class SmppTlv:
    """Optional tag/length/value parameter."""
    tag: int
    length: int
    value: bytes

    @property
    def tag_name(self) -> str:
        return TLV_TAG_MAP.get(self.tag, f"0x{self.tag:04x}")

    @property
    def value_hex(self) -> str:
        return bytes_to_hex(self.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tag': f"0x{self.tag:04x}",
            'tag_name': self.tag_name,
            'length': self.length,
            'value': self.value_hex,
        }


@dataclass
class SmppAddress:
    """Type of number, numbering plan indicator and address string."""
    ton: int
    npi: int
    address: str

    def to_dict(self) -> Dict[str, Any]:
        return {'ton': self.ton, 'npi': self.npi, 'address': self.address}


@dataclass
class DeliverSmBody:
    """Decoded deliver_sm body."""
    service_type: str
    source_addr: SmppAddress
    dest_addr: SmppAddress
    esm_class: int
    esm_message_mode: str
    esm_message_type: str
    protocol_id: int
    priority_flag: int
    replace_if_present_flag: int
    data_coding: int
    sm_default_msg_id: int
    sm_length: int
    short_message: Optional[bytes]  # None when absent or longer than the buffer
    tlvs: List[SmppTlv]
    decoded_message: str
    kind: BodyKind = field(default=BodyKind.DELIVER_SM, init=False)

    @property
    def esm_class_description(self) -> str:
        return f"{self.esm_message_type}, {self.esm_message_mode} (0x{self.esm_class:02x})"

    def find_tlv(self, tag: int) -> Optional[SmppTlv]:
        """Return the last TLV carrying ``tag``, if any."""
        for tlv in reversed(self.tlvs):
            if tlv.tag == tag:
                return tlv
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'service_type': self.service_type,
            'source_addr': self.source_addr.to_dict(),
            'dest_addr': self.dest_addr.to_dict(),
            'esm_class': self.esm_class_description,
            'protocol_id': self.protocol_id,
            'priority_flag': self.priority_flag,
            'replace_if_present_flag': self.replace_if_present_flag,
            'data_coding': self.data_coding,
            'sm_default_msg_id': self.sm_default_msg_id,
            'sm_length': self.sm_length,
            'short_message': bytes_to_hex(self.short_message) if self.short_message is not None else None,
            'tlvs': [tlv.to_dict() for tlv in self.tlvs],
            'decoded_message': self.decoded_message,
        }


@dataclass
class UnsupportedBody:
    """Body of a command without a specific decoder."""
    command_name: str
    command_id: int
    raw_body: bytes
    note: str = ""
    kind: BodyKind = field(default=BodyKind.UNSUPPORTED, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind.value,
            'command_name': self.command_name,
            'command_id': f"0x{self.command_id:08x}",
            'note': self.note,
            'raw_body': bytes_to_hex(self.raw_body) if self.raw_body else "No body",
        }


PduBody = Union[DeliverSmBody, UnsupportedBody]


@dataclass
class ParsedPdu:
    """A decoded SMPP PDU."""
    header: SmppHeader
    body: PduBody

    def to_dict(self) -> Dict[str, Any]:
        return {'header': self.header.to_dict(), 'body': self.body.to_dict()}
