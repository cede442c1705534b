import struct

from cis_disasm.cipher import encode_encrypted_string
from cis_disasm.opcode import OP_ADD_CMD, OP_ADD_CMD_ALIAS, OP_PUSH_BIN, OP_PUSH_DWORD, OP_PUSH_STR
from cis_disasm.script import HEADER_SIZE, ScriptHeader

ENCODING = "shift_jis"


def op(code: int, payload: bytes = b"") -> bytes:
    return struct.pack("<H", code) + payload


def push_dword(value: int) -> bytes:
    return op(OP_PUSH_DWORD, struct.pack("<i", value))


def push_str(text: str, encoding: str = ENCODING) -> bytes:
    return op(OP_PUSH_STR, encode_encrypted_string(text, encoding))


def push_bin(body: bytes) -> bytes:
    return op(OP_PUSH_BIN, struct.pack("<i", len(body)) + body)


def add_cmd(command_id: int) -> bytes:
    return op(OP_ADD_CMD, struct.pack("<H", command_id))


def add_cmd_alias(command_id: int) -> bytes:
    return op(OP_ADD_CMD_ALIAS, struct.pack("<H", command_id))


def label_table(labels, encoding: str = ENCODING) -> bytes:
    out = b""
    for address, name in labels:
        out += struct.pack("<i", address) + encode_encrypted_string(name, encoding)
    return out + struct.pack("<i", -1)


def variable_table(values, encoding: str = ENCODING) -> bytes:
    out = b""
    for value in values:
        if isinstance(value, int):
            out += b"\x01" + struct.pack("<i", value)
        else:
            out += b"\x02" + encode_encrypted_string(value, encoding)
    return out + b"\xff"


def build_script(code: bytes, labels=(), variables=(), base_id: int = 0, variable_count=None, encoding: str = ENCODING) -> bytes:
    """Container with the regions laid out back to back after the header."""
    labels_blob = label_table(labels, encoding)
    variables_blob = variable_table(variables, encoding)

    code_offset = HEADER_SIZE
    label_offset = code_offset + len(code)
    variable_offset = label_offset + len(labels_blob)
    if variable_count is None:
        variable_count = len(variables)

    header = ScriptHeader(code_offset, variable_count, label_offset, base_id, variable_offset)
    return header.to_bytes() + code + labels_blob + variables_blob
