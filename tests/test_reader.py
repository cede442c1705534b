import pytest

from cis_disasm.exceptions import FramingOverrunException
from cis_disasm.reader import ScriptReader


def test_little_endian_reads():
    reader = ScriptReader(bytes.fromhex("7f3412feffffff0102"))
    assert reader.read_byte() == 0x7F
    assert reader.read_uint16() == 0x1234
    assert reader.read_int32() == -2
    assert reader.read_bytes(2) == b"\x01\x02"
    assert reader.at_end


def test_reads_stop_at_region_end():
    reader = ScriptReader(b"\x00" * 8, 2, 5)
    assert reader.remaining == 3
    reader.read_uint16()
    with pytest.raises(FramingOverrunException) as info:
        reader.read_uint16()
    assert info.value.address == 4
    assert info.value.end == 5
    # failed read leaves the cursor alone
    assert reader.position == 4


def test_negative_count():
    with pytest.raises(FramingOverrunException):
        ScriptReader(b"\x00" * 4).read_bytes(-1)


@pytest.mark.parametrize("position, end", [(-1, 2), (3, 2), (0, 9)])
def test_invalid_region(position, end):
    with pytest.raises(FramingOverrunException):
        ScriptReader(b"\x00" * 8, position, end)
