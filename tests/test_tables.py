import struct

import pytest

from cis_disasm.cipher import encode_encrypted_string
from cis_disasm.disassembler import Disassembler
from cis_disasm.exceptions import (
    FramingOverrunException,
    InvalidHeaderException,
    UnexpectedVariableTypeException,
    VariableCountMismatchException,
)
from cis_disasm.script import ScriptHeader, VariableType

from .helpers import build_script, label_table, op, push_str, variable_table


def test_header_fields():
    data = struct.pack("<5i", 20, 3, 40, 100, 60)
    header = ScriptHeader.from_bytes(data)
    assert header.code_offset == 20
    assert header.variable_count == 3
    assert header.label_offset == 40
    assert header.variable_base_id == 100
    assert header.variable_offset == 60
    assert header.code_length == 20
    assert header.to_bytes() == data


def test_short_header():
    with pytest.raises(InvalidHeaderException):
        ScriptHeader.from_bytes(b"\x00" * 19)


def test_labels_stop_at_sentinel():
    table = label_table([(0x20, "start"), (0x40, "loop")]) + b"garbage"
    labels = Disassembler().read_labels(table, 0)
    assert [(l.address, l.name) for l in labels] == [(0x20, "start"), (0x40, "loop")]


def test_empty_label_table():
    assert Disassembler().read_labels(struct.pack("<i", -1), 0) == []


def test_label_table_without_sentinel():
    table = struct.pack("<i", 0x10) + encode_encrypted_string("x", "ascii")
    with pytest.raises(FramingOverrunException):
        Disassembler().read_labels(table, 0)


def test_variables():
    table = variable_table([7, "名前", -1])
    variables = Disassembler().read_variables(table, 0, 3, 10)
    assert [v.id for v in variables] == [10, 11, 12]
    assert [v.value for v in variables] == [7, "名前", -1]
    assert [v.type for v in variables] == [VariableType.INTEGER, VariableType.STRING, VariableType.INTEGER]


def test_empty_variable_table():
    assert Disassembler().read_variables(b"\xff", 0, 0, 5) == []


@pytest.mark.parametrize("declared", [0, 1, 3])
def test_variable_count_mismatch(declared):
    table = variable_table([1, 2])
    with pytest.raises(VariableCountMismatchException) as info:
        Disassembler().read_variables(table, 0, declared, 0)
    assert info.value.expected == declared
    assert info.value.actual == 2


def test_count_is_independent_of_base_id():
    table = variable_table([1, 2])
    assert len(Disassembler().read_variables(table, 0, 2, 500)) == 2


@pytest.mark.parametrize("type_code", [0x00, 0x03, 0xFE])
def test_unexpected_variable_type(type_code):
    table = b"\x01" + struct.pack("<i", 1) + bytes([type_code]) + b"\xff"
    with pytest.raises(UnexpectedVariableTypeException) as info:
        Disassembler().read_variables(table, 0, 2, 0)
    assert info.value.type_code == type_code
    assert info.value.address == 5


def test_whole_container():
    data = build_script(
        op(0x0000) + push_str("はい"),
        labels=[(0x14, "entry")],
        variables=[3, "x"],
        base_id=7,
    )
    script = Disassembler().disassemble_script(data)

    assert script.header.code_offset == 20
    assert [i.mnemonic for i in script.instructions] == ["nop0", "push str"]
    assert script.instructions[0].address == 20
    assert [l.name for l in script.labels] == ["entry"]
    assert [(v.id, v.value) for v in script.variables] == [(7, 3), (8, "x")]
    assert script.encoding == "shift_jis"


def test_whole_container_variable_mismatch():
    data = build_script(op(0x0000), variables=[1], variable_count=2)
    with pytest.raises(VariableCountMismatchException):
        Disassembler().disassemble_script(data)


def test_code_offset_after_label_offset():
    header = ScriptHeader(30, 0, 20, 0, 20)
    data = header.to_bytes() + struct.pack("<i", -1) + b"\xff" * 12
    with pytest.raises(FramingOverrunException):
        Disassembler().disassemble_script(data)


def test_from_file(tmp_path):
    path = tmp_path / "script.dat"
    path.write_bytes(build_script(op(0x000D)))
    script = Disassembler().disassemble_from_file(str(path))
    assert script.instructions[0].mnemonic == "ret"
