from hypothesis import given, settings
from hypothesis import strategies as st

from cis_disasm.cipher import StringCipher, encode_encrypted_string, read_encrypted_string
from cis_disasm.reader import ScriptReader


@settings(max_examples=200, deadline=None)
@given(data=st.binary(min_size=0, max_size=512))
def test_decrypt_inverts_encrypt(data: bytes):
    buffer = bytearray(data)
    StringCipher.encrypt(buffer)
    StringCipher.decrypt(buffer)
    assert bytes(buffer) == data


@settings(max_examples=200, deadline=None)
@given(data=st.binary(min_size=0, max_size=512))
def test_encrypt_inverts_decrypt(data: bytes):
    buffer = bytearray(data)
    StringCipher.decrypt(buffer)
    StringCipher.encrypt(buffer)
    assert bytes(buffer) == data


def test_empty_input_is_untouched():
    assert StringCipher.encrypt(bytearray()) == bytearray()
    assert StringCipher.decrypt(bytearray()) == bytearray()


def test_known_ciphertext():
    # low byte of the seed is 0xA5; the key for the second byte is 0xB5694AD1
    assert bytes(StringCipher.encrypt(bytearray(b"AB"))) == b"\xe4\x93"
    assert bytes(StringCipher.decrypt(bytearray(b"\xe4\x93"))) == b"AB"


def test_works_in_place():
    buffer = bytearray(b"AB")
    result = StringCipher.encrypt(buffer)
    assert result is buffer
    assert buffer == bytearray(b"\xe4\x93")


def test_encrypt_then_decrypt_two_characters():
    framed = encode_encrypted_string("AB", "ascii")
    assert read_encrypted_string(ScriptReader(framed), "ascii") == "AB"


def test_encoded_string_layout():
    # length prefix counts the NUL terminator
    assert encode_encrypted_string("AB", "ascii") == b"\x03\x00\xe4\x93\x22"


def test_bytes_after_terminator_are_ignored():
    payload = bytearray(b"AB\x00XY")
    StringCipher.encrypt(payload)
    framed = len(payload).to_bytes(2, "little") + bytes(payload)
    reader = ScriptReader(framed)
    assert read_encrypted_string(reader, "ascii") == "AB"
    assert reader.at_end


def test_missing_terminator_keeps_whole_string():
    payload = bytearray(b"ABC")
    StringCipher.encrypt(payload)
    framed = b"\x03\x00" + bytes(payload)
    assert read_encrypted_string(ScriptReader(framed), "ascii") == "ABC"


def test_shift_jis_round_trip():
    text = "「こんにちは」"
    framed = encode_encrypted_string(text, "shift_jis")
    assert read_encrypted_string(ScriptReader(framed), "shift_jis") == text


@settings(max_examples=100, deadline=None)
@given(text=st.text(alphabet=st.characters(min_codepoint=1, max_codepoint=0x7E), max_size=64))
def test_framed_string_round_trip(text: str):
    framed = encode_encrypted_string(text, "ascii")
    reader = ScriptReader(framed)
    assert read_encrypted_string(reader, "ascii") == text
    assert reader.at_end
