import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Union

from .exceptions import InvalidHeaderException
from .instruction import Instruction

HEADER_SIZE = 20


class VariableType(IntEnum):
    INTEGER = 1
    STRING = 2
    END = 0xFF


@dataclass(frozen=True)
class ScriptHeader:
    code_offset: int
    variable_count: int
    label_offset: int
    variable_base_id: int
    variable_offset: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "ScriptHeader":
        if len(data) < HEADER_SIZE:
            raise InvalidHeaderException(len(data))
        return cls(*struct.unpack_from("<5i", data, 0))

    @property
    def code_length(self) -> int:
        return self.label_offset - self.code_offset

    def to_bytes(self) -> bytes:
        return struct.pack(
            "<5i",
            self.code_offset,
            self.variable_count,
            self.label_offset,
            self.variable_base_id,
            self.variable_offset,
        )

    def to_dict(self) -> dict:
        return {
            "code_offset": self.code_offset,
            "variable_count": self.variable_count,
            "label_offset": self.label_offset,
            "variable_base_id": self.variable_base_id,
            "variable_offset": self.variable_offset,
        }


@dataclass(frozen=True)
class Label:
    address: int
    name: str

    def to_dict(self) -> dict:
        return {"address": self.address, "name": self.name}


@dataclass(frozen=True)
class Variable:
    id: int
    type: VariableType
    value: Union[int, str]

    def to_dict(self) -> dict:
        return {"id": self.id, "type": self.type.name.lower(), "value": self.value}


@dataclass
class CisScript:
    data: bytes
    header: ScriptHeader
    encoding: str
    instructions: List[Instruction] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    variables: List[Variable] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "header": self.header.to_dict(),
            "encoding": self.encoding,
            "instructions": [instr.to_dict() for instr in self.instructions],
            "labels": [label.to_dict() for label in self.labels],
            "variables": [var.to_dict() for var in self.variables],
        }
