from dataclasses import dataclass
from typing import Tuple, Union

from .opcode import OP_PUSH_STR, Opcode, OperandShape

OperandValue = Union[None, int, str, bytes]


@dataclass(frozen=True)
class Instruction:
    address: int
    opcode: Opcode
    size: int
    value: OperandValue = None

    # Only push bin instructions own children, decoded from the bytes in value
    children: Tuple["Instruction", ...] = ()

    @property
    def mnemonic(self) -> str:
        return self.opcode.mnemonic

    @property
    def shape(self) -> OperandShape:
        return self.opcode.shape

    @property
    def end(self) -> int:
        return self.address + self.size

    @property
    def is_block(self) -> bool:
        return self.opcode.is_block

    @property
    def is_text(self) -> bool:
        return self.opcode.value == OP_PUSH_STR

    @property
    def block_start(self) -> int:
        # opcode (2) + byte count (4)
        return self.address + 6

    def to_dict(self) -> dict:
        result = {
            "address": self.address,
            "opcode": {
                "value": self.opcode.value,
                "mnemonic": self.opcode.mnemonic,
                "shape": self.opcode.shape.value,
            },
            "size": self.size,
        }

        if isinstance(self.value, bytes):
            result["value"] = self.value.hex().upper()
        elif self.value is not None:
            result["value"] = self.value

        if self.is_block:
            result["children"] = [child.to_dict() for child in self.children]

        return result
