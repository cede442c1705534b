from .cipher import StringCipher, encode_encrypted_string, read_encrypted_string
from .disassembler import DEFAULT_ENCODING, DEFAULT_MAX_DEPTH, Disassembler
from .exceptions import (
    BlockDepthException,
    FramingOverrunException,
    InvalidHeaderException,
    ScriptFormatException,
    UnexpectedVariableTypeException,
    UnknownOpcodeException,
    VariableCountMismatchException,
)
from .instruction import Instruction
from .opcode import Opcode, OpcodeRegistry, OperandShape
from .script import CisScript, Label, ScriptHeader, Variable, VariableType
from .text import escape, export_text, extract_text

__all__ = [
    "BlockDepthException",
    "CisScript",
    "DEFAULT_ENCODING",
    "DEFAULT_MAX_DEPTH",
    "Disassembler",
    "FramingOverrunException",
    "Instruction",
    "InvalidHeaderException",
    "Label",
    "Opcode",
    "OpcodeRegistry",
    "OperandShape",
    "ScriptFormatException",
    "ScriptHeader",
    "StringCipher",
    "UnexpectedVariableTypeException",
    "UnknownOpcodeException",
    "Variable",
    "VariableCountMismatchException",
    "VariableType",
    "encode_encrypted_string",
    "escape",
    "export_text",
    "extract_text",
    "read_encrypted_string",
]
