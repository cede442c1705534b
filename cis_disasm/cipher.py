import struct

from .reader import ScriptReader

KEY_SEED = 0x4B5AB4A5


class StringCipher:
    """Rolling-key XOR used for every string stored in a script.

    The key update always mixes in the plaintext byte, which is what makes
    ``encrypt`` and ``decrypt`` inverse to each other. Both work in place.
    """

    @staticmethod
    def _next_key(key: int, plain: int) -> int:
        return (plain ^ ((key << 9) | ((key >> 23) & 0x1F0))) & 0xFFFFFFFF

    @staticmethod
    def decrypt(data: bytearray) -> bytearray:
        key = KEY_SEED
        for i in range(len(data)):
            data[i] = (key ^ data[i]) & 0xFF
            key = StringCipher._next_key(key, data[i])
        return data

    @staticmethod
    def encrypt(data: bytearray) -> bytearray:
        key = KEY_SEED
        for i in range(len(data)):
            plain = data[i]
            data[i] = (key ^ plain) & 0xFF
            key = StringCipher._next_key(key, plain)
        return data


def read_encrypted_bytes(reader: ScriptReader) -> bytes:
    length = reader.read_uint16()
    buffer = StringCipher.decrypt(bytearray(reader.read_bytes(length)))

    # Plaintext ends at the first NUL, anything after it is padding
    terminator = buffer.find(0)
    if terminator != -1:
        del buffer[terminator:]
    return bytes(buffer)


def read_encrypted_string(reader: ScriptReader, encoding: str) -> str:
    return read_encrypted_bytes(reader).decode(encoding, errors="replace")


def encode_encrypted_string(text: str, encoding: str) -> bytes:
    data = bytearray(text.encode(encoding))
    data.append(0)
    if len(data) > 0xFFFF:
        raise ValueError(f"Encoded string is too long ({len(data)} bytes, max 65535).")

    StringCipher.encrypt(data)
    return struct.pack("<H", len(data)) + bytes(data)
