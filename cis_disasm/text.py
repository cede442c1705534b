import logging
from typing import List, TextIO, Tuple

from .cipher import read_encrypted_string
from .reader import ScriptReader
from .script import CisScript

logger = logging.getLogger(__name__)

ORIGINAL_MARKER = "◇"
TRANSLATION_MARKER = "◆"

_ESCAPES = {"\\": "\\\\", "\r": "\\r", "\n": "\\n", "\t": "\\t"}


def escape(text: str) -> str:
    out = []
    for ch in text:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f"\\x{ord(ch):02X}")
        else:
            out.append(ch)
    return "".join(out)


def is_dialogue(text: str) -> bool:
    # Narrative lines start with a non-ASCII character, file names and
    # commands do not
    if not text.strip():
        return False
    return ord(text[0]) > 0x7F


def extract_text(script: CisScript) -> List[Tuple[int, str]]:
    """Collect (address, text) for every top-level push str worth translating.

    The operand is decrypted again from the raw buffer rather than taken
    from the decoded instruction.
    """
    results = []
    for instruction in script.instructions:
        if not instruction.is_text:
            continue

        reader = ScriptReader(script.data, instruction.address + 2, instruction.end)
        text = read_encrypted_string(reader, script.encoding)
        if is_dialogue(text):
            results.append((instruction.address, text))

    logger.debug("Extracted %d of %d top-level instructions", len(results), len(script.instructions))
    return results


def export_text(script: CisScript, writer: TextIO) -> int:
    entries = extract_text(script)
    for address, text in entries:
        text = escape(text)
        writer.write(f"{ORIGINAL_MARKER}{address:08X}{ORIGINAL_MARKER}{text}\n")
        writer.write(f"{TRANSLATION_MARKER}{address:08X}{TRANSLATION_MARKER}{text}\n")
        writer.write("\n")
    return len(entries)
