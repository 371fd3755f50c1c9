"""
Configuration constants for the SMPP capture inspector.

Centralizes header sizes, magic numbers and the protocol lookup tables.
"""

from typing import Dict

# Capture container (classic pcap)
PCAP_GLOBAL_HEADER_SIZE: int = 24
PCAP_RECORD_HEADER_SIZE: int = 16
PCAP_MAGIC_BIG_ENDIAN: int = 0xA1B2C3D4
PCAP_MAGIC_LITTLE_ENDIAN: int = 0xD4C3B2A1

# Link / network / transport
ETHERNET_HEADER_SIZE: int = 14
ETHERTYPE_IPV4: int = 0x0800
IPV4_MIN_HEADER_SIZE: int = 20
IP_PROTO_TCP: int = 6
TCP_MIN_HEADER_SIZE: int = 20

# SMPP
SMPP_HEADER_SIZE: int = 16
TLV_HEADER_SIZE: int = 4
TLV_MESSAGE_PAYLOAD: int = 0x0424

UNKNOWN_COMMAND: str = 'Unknown Command'
DELIVER_SM: str = 'deliver_sm'

# Logging
DEFAULT_LOG_LEVEL: str = 'WARNING'
LOG_FORMAT: str = '%(asctime)s %(levelname)s %(name)s: %(message)s'


class CommandIds:
    """SMPP-M command identifiers."""
    BIND_RECEIVER = 0x00000001
    BIND_RECEIVER_RESP = 0x80000001
    DELIVER_SM = 0x00000002
    DELIVER_SM_RESP = 0x80000002
    UNBIND = 0x00000003
    UNBIND_RESP = 0x80000003
    ENQUIRE_LINK = 0x00000004
    ENQUIRE_LINK_RESP = 0x80000004


COMMAND_ID_MAP: Dict[int, str] = {
    CommandIds.BIND_RECEIVER: 'bind_receiver',
    CommandIds.BIND_RECEIVER_RESP: 'bind_receiver_resp',
    CommandIds.DELIVER_SM: 'deliver_sm',
    CommandIds.DELIVER_SM_RESP: 'deliver_sm_resp',
    CommandIds.UNBIND: 'unbind',
    CommandIds.UNBIND_RESP: 'unbind_resp',
    CommandIds.ENQUIRE_LINK: 'enquire_link',
    CommandIds.ENQUIRE_LINK_RESP: 'enquire_link_resp',
}

# Command status (partial)
COMMAND_STATUS_MAP: Dict[int, str] = {
    0x00000000: 'ESME_ROK',
    0x00000001: 'ESME_RINVMSGLEN',
    0x00000002: 'ESME_RINVCMDLEN',
    0x00000003: 'ESME_RINVCMDID',
    0x00000004: 'ESME_RINVBNDSTS',
    0x00000005: 'ESME_RALYBND',
    0x00000006: 'ESME_RINVPRTFLG',
    0x00000008: 'ESME_RSYSERR',
    0x0000000A: 'ESME_RINVSRCADR',
    0x0000000B: 'ESME_RINVDSTADR',
    0x0000000D: 'ESME_RBINDFAIL',
    0x0000000E: 'ESME_RINVPASWD',
    0x0000000F: 'ESME_RINVSYSID',
    0x00000045: 'ESME_RSUBMITFAIL',
    0x00000058: 'ESME_RTHROTTLED',
    0x000000FF: 'ESME_RUNKNOWNERR',
}

DATA_CODING_MAP: Dict[int, str] = {
    0x00: 'Default (GSM 7-bit)',
    0x01: 'IA5 (ASCII)',
    0x02: '8-bit binary',
    0x03: 'Latin 1 (ISO-8859-1)',
    0x04: 'UTF-8',
    0x05: 'JIS',
    0x06: 'Cyrillic (ISO-8859-5)',
    0x07: 'Latin/Hebrew (ISO-8859-8)',
    0x08: 'UCS-2 (ISO/IEC-10646)',
    0x09: 'Pictogram Encoding',
    0x0A: 'ISO-2022-JP (Music Codes)',
    0x0D: 'Extended Kanji JIS',
    0x0E: 'KS C 5601',
}

# Data codings rendered as text; everything else is dumped as hex
TEXT_CODECS: Dict[int, str] = {
    0x03: 'latin-1',
    0x04: 'utf-8',
    0x08: 'utf-16-be',
}
DATA_CODING_GSM7: int = 0x00

# ESM class subfields
ESM_MODE_MASK: int = 0b00000011
ESM_TYPE_MASK: int = 0b00111100

ESM_MESSAGE_MODE_MAP: Dict[int, str] = {
    0b00: 'Default Mode',
    0b11: 'Store and Forward',
}

ESM_MESSAGE_TYPE_MAP: Dict[int, str] = {
    0b000000: 'Default Message',
    0b000100: 'Delivery Receipt',
    0b001000: 'Delivery Acknowledgement',
    0b010000: 'Manual/User Acknowledgement',
    0b011000: 'Conversation Abort (Korean CDMA)',
    0b100000: 'Intermediate Delivery Notification',
}

UNKNOWN_MODE: str = 'Unknown Mode'
UNKNOWN_TYPE: str = 'Unknown Type'

# Optional parameter tags
TLV_TAG_MAP: Dict[int, str] = {
    0x0005: 'dest_addr_subunit',
    0x0006: 'dest_network_type',
    0x0007: 'dest_bearer_type',
    0x000E: 'source_network_type',
    0x000F: 'source_bearer_type',
    0x001E: 'receipted_message_id',
    0x0204: 'user_message_reference',
    0x020A: 'source_port',
    0x020B: 'destination_port',
    0x020C: 'sar_msg_ref_num',
    0x020E: 'sar_total_segments',
    0x020F: 'sar_segment_seqnum',
    0x0302: 'language_indicator',
    0x0381: 'callback_num',
    0x0423: 'network_error_code',
    0x0424: 'message_payload',
    0x0425: 'delivery_failure_reason',
    0x0427: 'message_state',
}
