class ScriptFormatException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidHeaderException(ScriptFormatException):
    def __init__(self, size: int):
        message = f"The script is too small to hold a header! (Expected at least 20 bytes got {size}.)"
        super().__init__(message)
        self.size = size


class UnknownOpcodeException(ScriptFormatException):
    def __init__(self, opcode: int, address: int):
        message = f"Unknown command ID {opcode:04X} at {address:08X}."
        super().__init__(message)
        self.opcode = opcode
        self.address = address


class FramingOverrunException(ScriptFormatException):
    def __init__(self, address: int, size: int, end: int):
        message = f"Reading {size} byte(s) at {address:08X} crosses the region end {end:08X}."
        super().__init__(message)
        self.address = address
        self.size = size
        self.end = end


class BlockDepthException(ScriptFormatException):
    def __init__(self, address: int, depth: int, limit: int):
        message = f"Block at {address:08X} is nested {depth} levels deep (limit {limit})."
        super().__init__(message)
        self.address = address
        self.depth = depth
        self.limit = limit


class VariableCountMismatchException(ScriptFormatException):
    def __init__(self, expected: int, actual: int):
        message = f"Variable table holds {actual} entries but the header declares {expected}."
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnexpectedVariableTypeException(ScriptFormatException):
    def __init__(self, type_code: int, address: int):
        message = f"Unexpected variable type 0x{type_code:02X} at {address:08X}."
        super().__init__(message)
        self.type_code = type_code
        self.address = address


__all__ = [
    "BlockDepthException",
    "FramingOverrunException",
    "InvalidHeaderException",
    "ScriptFormatException",
    "UnexpectedVariableTypeException",
    "UnknownOpcodeException",
    "VariableCountMismatchException",
]
