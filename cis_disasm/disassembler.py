import json
import logging
import sys
from io import StringIO
from typing import List, Optional, Set, TextIO

from .cipher import read_encrypted_string
from .exceptions import (
    BlockDepthException,
    FramingOverrunException,
    UnexpectedVariableTypeException,
    UnknownOpcodeException,
    VariableCountMismatchException,
)
from .instruction import Instruction
from .opcode import OpcodeRegistry, OperandShape
from .reader import ScriptReader
from .script import CisScript, Label, ScriptHeader, Variable, VariableType
from .text import escape

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "shift_jis"
DEFAULT_MAX_DEPTH = 64

LABEL_TERMINATOR = -1

# Each nesting level costs two Python frames (decode_block, read_instruction)
RECURSION_HEADROOM = 200


def max_depth_limit() -> int:
    return max(0, (sys.getrecursionlimit() - RECURSION_HEADROOM) // 2)


class Disassembler:
    def __init__(self, encoding: str = DEFAULT_ENCODING, max_depth: int = DEFAULT_MAX_DEPTH):
        limit = max_depth_limit()
        if not 0 <= max_depth <= limit:
            raise ValueError(f"max_depth must be between 0 and {limit}, got {max_depth}")

        self.encoding = encoding
        self.max_depth = max_depth

    def disassemble_from_file(self, path: str) -> CisScript:
        with open(path, "rb") as f:
            return self.disassemble_script(f.read())

    def disassemble_script(self, data: bytes) -> CisScript:
        # |-----------|
        # | Header    |
        # | Code      |
        # | Label     |
        # | Variable  |
        # |-----------|
        data = bytes(data)
        header = ScriptHeader.from_bytes(data)

        registered: Set[int] = set()
        instructions = self.decode_block(data, header.code_offset, header.code_length, registered)
        labels = self.read_labels(data, header.label_offset)
        variables = self.read_variables(data, header.variable_offset, header.variable_count, header.variable_base_id)

        logger.info(
            "Decoded %d instructions, %d labels, %d variables (%d registered commands)",
            len(instructions),
            len(labels),
            len(variables),
            len(registered),
        )

        return CisScript(
            data=data,
            header=header,
            encoding=self.encoding,
            instructions=instructions,
            labels=labels,
            variables=variables,
        )

    def decode_block(self, data: bytes, start: int, length: int, registered: Set[int], depth: int = 0) -> List[Instruction]:
        """Decode exactly ``length`` bytes at ``start`` into instructions.

        ``registered`` is shared with every nested block of the same pass:
        commands added inside a push bin stay legal after it.
        """
        if depth > self.max_depth:
            raise BlockDepthException(start, depth, self.max_depth)
        if length < 0:
            raise FramingOverrunException(start, length, start)

        reader = ScriptReader(data, start, start + length)
        instructions = []

        try:
            while not reader.at_end:
                instructions.append(self.read_instruction(reader, registered, depth))
        except RecursionError:
            # Interpreter limit lowered after construction
            if depth:
                raise
            raise BlockDepthException(start, depth, self.max_depth) from None

        return instructions

    def read_instruction(self, reader: ScriptReader, registered: Set[int], depth: int = 0) -> Instruction:
        address = reader.position
        code = reader.read_uint16()
        opcode = OpcodeRegistry.get_by_value(code)

        if opcode is None:
            if code not in registered:
                raise UnknownOpcodeException(code, address)
            return Instruction(address, OpcodeRegistry.dynamic(code), reader.position - address, code)

        value = None
        children = ()
        shape = opcode.shape

        if shape is OperandShape.SCALAR32:
            value = reader.read_int32()

        elif shape is OperandShape.STRING:
            value = read_encrypted_string(reader, self.encoding)

        elif shape is OperandShape.REG_ID:
            value = reader.read_uint16()
            registered.add(value)
            logger.debug("%08X: %s registers command 0x%04X", address, opcode.mnemonic, value)

        elif shape is OperandShape.BLOCK:
            count = reader.read_int32()
            block_start = reader.position
            # The outer cursor resumes at block_start + count, whatever the blob holds
            value = reader.read_bytes(count)

            logger.debug("%08X: block %08X-%08X (depth %d)", address, block_start, block_start + count, depth + 1)
            children = tuple(self.decode_block(reader.data, block_start, count, registered, depth + 1))

        return Instruction(address, opcode, reader.position - address, value, children)

    def read_labels(self, data: bytes, offset: int) -> List[Label]:
        reader = ScriptReader(data, offset)
        labels = []

        while True:
            address = reader.read_int32()
            if address == LABEL_TERMINATOR:
                break
            name = read_encrypted_string(reader, self.encoding)
            labels.append(Label(address, name))

        return labels

    def read_variables(self, data: bytes, offset: int, count: int, base_id: int) -> List[Variable]:
        reader = ScriptReader(data, offset)
        variables = []

        while True:
            type_address = reader.position
            type_code = reader.read_byte()

            if type_code == VariableType.END:
                break
            elif type_code == VariableType.INTEGER:
                value = reader.read_int32()
            elif type_code == VariableType.STRING:
                value = read_encrypted_string(reader, self.encoding)
            else:
                raise UnexpectedVariableTypeException(type_code, type_address)

            variables.append(Variable(base_id + len(variables), VariableType(type_code), value))

        if len(variables) != count:
            raise VariableCountMismatchException(count, len(variables))

        return variables

    @staticmethod
    def format_instruction(instruction: Instruction) -> str:
        line = f"{instruction.address:08X} | {instruction.mnemonic}"
        shape = instruction.shape
        value = instruction.value

        if shape is OperandShape.SCALAR32:
            line += f" 0x{value & 0xFFFFFFFF:08X}"
        elif shape is OperandShape.STRING:
            line += f' "{escape(value)}"'
        elif shape is OperandShape.BLOCK:
            line += f' "{value.hex().upper()}"'
        elif shape is OperandShape.REG_ID or instruction.opcode.is_dynamic:
            line += f" 0x{value:04X}"

        return line

    @staticmethod
    def print_instruction(instruction: Instruction, writer: Optional[TextIO] = None) -> None:
        if writer is None:
            writer = sys.stdout

        writer.write(Disassembler.format_instruction(instruction))
        writer.write("\n")

        if instruction.is_block:
            start = instruction.block_start
            writer.write(f"{start:08X} | ; block start of {instruction.address:08X}\n")
            for child in instruction.children:
                Disassembler.print_instruction(child, writer)
            writer.write(f"{start + len(instruction.value):08X} | ; block end of {instruction.address:08X}\n")

    @staticmethod
    def print_script(script: CisScript, writer: Optional[TextIO] = None) -> None:
        if writer is None:
            writer = sys.stdout

        for instruction in script.instructions:
            Disassembler.print_instruction(instruction, writer)

    @staticmethod
    def render_disassembly(script: CisScript) -> str:
        buffer = StringIO()
        Disassembler.print_script(script, buffer)
        return buffer.getvalue()

    @staticmethod
    def render_to_json(script: CisScript, writer: Optional[TextIO] = None, indent: int = 2) -> None:
        if writer is None:
            writer = sys.stdout

        json.dump(script.to_dict(), writer, ensure_ascii=False, indent=indent)
        writer.write("\n")
