from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

OP_PUSH_DWORD = 0x0002
OP_PUSH_STR = 0x0004
OP_PUSH_BIN = 0x0005
OP_ADD_CMD = 0x000E
OP_ADD_CMD_ALIAS = 0x000F

DYNAMIC_MNEMONIC = "exec_cmd"


class OperandShape(Enum):
    NONE = "none"
    SCALAR32 = "scalar32"
    STRING = "string"
    BLOCK = "block"
    REG_ID = "reg-id"
    SCALAR16 = "scalar16"


@dataclass(frozen=True)
class Opcode:
    value: int
    mnemonic: str
    shape: OperandShape = OperandShape.NONE

    @property
    def is_block(self) -> bool:
        return self.shape is OperandShape.BLOCK

    @property
    def is_dynamic(self) -> bool:
        return self.shape is OperandShape.SCALAR16


class OpcodeRegistry:
    _opcodes: List[Opcode] = []
    _by_value: Dict[int, Opcode] = {}
    _by_mnemonic: Dict[str, Opcode] = {}

    @classmethod
    def _define_opcode(cls, value: int, mnemonic: str, shape: OperandShape = OperandShape.NONE):
        if value in cls._by_value:
            raise ValueError(f"Opcode 0x{value:04X} defined twice")

        opcode = Opcode(value, mnemonic, shape)
        cls._opcodes.append(opcode)
        cls._by_value[value] = opcode

        # Some mnemonics are shared (while(internal)), keep the first
        cls._by_mnemonic.setdefault(mnemonic, opcode)

    @classmethod
    def initialize(cls):
        if cls._opcodes:
            return

        # Control flow and command registration
        cls._define_opcode(0x0000, "nop0")
        cls._define_opcode(0x0001, "nop1")
        cls._define_opcode(0x0002, "push dword", OperandShape.SCALAR32)
        cls._define_opcode(0x0004, "push str", OperandShape.STRING)
        cls._define_opcode(0x0005, "push bin", OperandShape.BLOCK)
        cls._define_opcode(0x0007, "jump_indirect")
        cls._define_opcode(0x0008, "jump_true")
        cls._define_opcode(0x0009, "jump_false")
        cls._define_opcode(0x000A, "call")
        cls._define_opcode(0x000B, "call_true")
        cls._define_opcode(0x000C, "call_false")
        cls._define_opcode(0x000D, "ret")
        cls._define_opcode(0x000E, "add_cmd", OperandShape.REG_ID)
        cls._define_opcode(0x000F, "add_cmd_alias", OperandShape.REG_ID)
        cls._define_opcode(0x0010, "stog")
        cls._define_opcode(0x0011, "gtos")
        cls._define_opcode(0x0012, "jump_break")
        cls._define_opcode(0x0013, "jump_reset")
        cls._define_opcode(0x0014, "load_script")
        cls._define_opcode(0x0020, "cmd_0020")
        cls._define_opcode(0x0021, "cmd_0021")
        cls._define_opcode(0x0022, "find_label")
        cls._define_opcode(0x0023, "cmd_0023")
        cls._define_opcode(0x0024, "cmd_0024")
        cls._define_opcode(0x0025, "exec_cmd")

        # Timing
        cls._define_opcode(0x0040, "clock")
        cls._define_opcode(0x0041, "tick")
        cls._define_opcode(0x0042, "ticks")
        cls._define_opcode(0x0043, "wait")
        cls._define_opcode(0x0044, "past")

        # Stack
        cls._define_opcode(0x0064, "drop")
        cls._define_opcode(0x0065, "drops")
        cls._define_opcode(0x0066, "dup")
        cls._define_opcode(0x0067, "dups")
        cls._define_opcode(0x0068, "pick")
        cls._define_opcode(0x0069, "push")
        cls._define_opcode(0x006A, "depth")
        cls._define_opcode(0x006B, "system_depth")
        cls._define_opcode(0x006C, "return_depth")
        cls._define_opcode(0x006D, "return_addr")

        # Loops
        cls._define_opcode(0x0096, "loop")
        cls._define_opcode(0x0097, "loop(internal)")
        cls._define_opcode(0x0098, "repeat")
        cls._define_opcode(0x0099, "repeat(internal)")
        cls._define_opcode(0x009A, "for")
        cls._define_opcode(0x009B, "for(internal)")
        cls._define_opcode(0x009C, "while")
        cls._define_opcode(0x009D, "while(internal)")
        cls._define_opcode(0x009E, "while(internal)")
        cls._define_opcode(0x009F, "do")
        cls._define_opcode(0x00A0, "break")
        cls._define_opcode(0x00A1, "if_break")
        cls._define_opcode(0x00A2, "nif_break")
        cls._define_opcode(0x00A3, "continue")
        cls._define_opcode(0x00A4, "if_continue")
        cls._define_opcode(0x00A5, "nif_continue")
        cls._define_opcode(0x00A6, "call_command")
        cls._define_opcode(0x00A7, "if_command")
        cls._define_opcode(0x00A8, "nif_command")

        # Secondary stack
        cls._define_opcode(0x00C8, "drop2")
        cls._define_opcode(0x00C9, "drops2")
        cls._define_opcode(0x00CA, "move12")
        cls._define_opcode(0x00CB, "moves12")
        cls._define_opcode(0x00CC, "move21")
        cls._define_opcode(0x00CD, "moves21")
        cls._define_opcode(0x00CE, "dup2")
        cls._define_opcode(0x00CF, "dup12")
        cls._define_opcode(0x00D0, "dup21")
        cls._define_opcode(0x00D2, "pick2")
        cls._define_opcode(0x00D3, "push2")
        cls._define_opcode(0x00D4, "depth2")

        # Arithmetic
        cls._define_opcode(0x00FA, "add")
        cls._define_opcode(0x00FB, "adds")
        cls._define_opcode(0x00FC, "sub")
        cls._define_opcode(0x00FD, "subs")
        cls._define_opcode(0x00FE, "mult")
        cls._define_opcode(0x00FF, "div")
        cls._define_opcode(0x0100, "mod")
        cls._define_opcode(0x0101, "negate")
        cls._define_opcode(0x0102, "max")
        cls._define_opcode(0x0103, "maxs")
        cls._define_opcode(0x0104, "min")
        cls._define_opcode(0x0105, "mins")
        cls._define_opcode(0x0106, "random")
        cls._define_opcode(0x0107, "set_random_seed")

        # Logic and comparison
        cls._define_opcode(0x012C, "not")
        cls._define_opcode(0x012D, "and")
        cls._define_opcode(0x012E, "ands")
        cls._define_opcode(0x012F, "or")
        cls._define_opcode(0x0130, "ors")
        cls._define_opcode(0x0131, "xor")
        cls._define_opcode(0x0132, "xors")
        cls._define_opcode(0x0133, "equal")
        cls._define_opcode(0x0134, "different")
        cls._define_opcode(0x0135, "larger")
        cls._define_opcode(0x0136, "larger_equal")
        cls._define_opcode(0x0137, "less")
        cls._define_opcode(0x0138, "less_equal")

        # Strings
        cls._define_opcode(0x015E, "strlen")
        cls._define_opcode(0x015F, "strleft")
        cls._define_opcode(0x0160, "strright")
        cls._define_opcode(0x0161, "strmid")

        # Files
        cls._define_opcode(0x0190, "fopen")
        cls._define_opcode(0x0191, "fcreate")
        cls._define_opcode(0x0192, "fclose")
        cls._define_opcode(0x0193, "fflush")
        cls._define_opcode(0x0194, "feof")
        cls._define_opcode(0x0195, "ferror")
        cls._define_opcode(0x0196, "flocation")
        cls._define_opcode(0x0197, "fseek")
        cls._define_opcode(0x0198, "fseekend")
        cls._define_opcode(0x0199, "fseekadd")
        cls._define_opcode(0x019A, "fread1")
        cls._define_opcode(0x019B, "freadU1")
        cls._define_opcode(0x019C, "fread2")
        cls._define_opcode(0x019D, "freadU2")
        cls._define_opcode(0x019E, "fread4")
        cls._define_opcode(0x019F, "freadU4")
        cls._define_opcode(0x01A0, "freadline")
        cls._define_opcode(0x01A1, "freadstr")
        cls._define_opcode(0x01A2, "freaddata")
        cls._define_opcode(0x01A3, "fwrite1")
        cls._define_opcode(0x01A4, "fwrite2")
        cls._define_opcode(0x01A5, "fwrite4")
        cls._define_opcode(0x01A6, "fwritechars")
        cls._define_opcode(0x01A7, "fwritestr")
        cls._define_opcode(0x01A8, "fwritedata")
        cls._define_opcode(0x01B8, "file_delete")
        cls._define_opcode(0x01B9, "file_copy")
        cls._define_opcode(0x01BA, "file_move")

        # Bitwise
        cls._define_opcode(0x01C2, "b_not")
        cls._define_opcode(0x01C3, "b_and")
        cls._define_opcode(0x01C4, "b_or")
        cls._define_opcode(0x01C5, "b_xor")
        cls._define_opcode(0x01C6, "b_shift_l")
        cls._define_opcode(0x01C7, "b_shift_r")
        cls._define_opcode(0x01C8, "b_shift_ar")

        # Arrays
        cls._define_opcode(0x01F4, "ArrayNew")
        cls._define_opcode(0x01F5, "ArrayDelete")
        cls._define_opcode(0x01F6, "ArrayLength")
        cls._define_opcode(0x01F7, "ArrayResize")
        cls._define_opcode(0x01F8, "ArrayAppend")
        cls._define_opcode(0x01F9, "ArraySet")
        cls._define_opcode(0x01FA, "ArrayGet")
        cls._define_opcode(0x01FB, "ArraySortInsert")
        cls._define_opcode(0x01FC, "ArraySortedSearch")

        # Flags
        cls._define_opcode(0x0208, "FlagsInit")
        cls._define_opcode(0x0209, "FlagsSet")
        cls._define_opcode(0x020A, "FlagsReset")
        cls._define_opcode(0x020B, "FlagsPut")
        cls._define_opcode(0x020C, "FlagsGet")
        cls._define_opcode(0x020D, "freadflags")
        cls._define_opcode(0x020E, "fwriteflags")
        cls._define_opcode(0x020F, "system_stacks_flush")
        cls._define_opcode(0x0210, "FlagsCopy")

        # Time
        cls._define_opcode(0x021C, "gettime")
        cls._define_opcode(0x021D, "decodetime")

        # Events
        cls._define_opcode(0x4000, "event_timer")
        cls._define_opcode(0x4001, "event_mouse_move")
        cls._define_opcode(0x4002, "event_mouse_left")
        cls._define_opcode(0x4003, "event_mouse_right")
        cls._define_opcode(0x4004, "event_key_press")
        cls._define_opcode(0x4005, "event_key_release")
        cls._define_opcode(0x4006, "show_hook")
        cls._define_opcode(0x4007, "event_mouse_wheel")

        # Layers
        cls._define_opcode(0x6000, "LayerNumber")
        cls._define_opcode(0x6001, "LayerReset")
        cls._define_opcode(0x6002, "LayerImage")
        cls._define_opcode(0x6003, "LayerTile")
        cls._define_opcode(0x6004, "LayerText")
        cls._define_opcode(0x6005, "LayerGetXY")
        cls._define_opcode(0x6006, "LayerGetWH")
        cls._define_opcode(0x6007, "LayerGetImageSize")
        cls._define_opcode(0x6008, "LayerActive")
        cls._define_opcode(0x6009, "LayerGetActive")
        cls._define_opcode(0x600A, "LayerMove")
        cls._define_opcode(0x600B, "LayerSetWindow")
        cls._define_opcode(0x600C, "LayerGetWindow")
        cls._define_opcode(0x600D, "LayerAddText")
        cls._define_opcode(0x600E, "LayerAddTextN")
        cls._define_opcode(0x600F, "LayerTextFormat")
        cls._define_opcode(0x6010, "LayerTextClear")
        cls._define_opcode(0x6011, "LayerTextFont")
        cls._define_opcode(0x6012, "LayerTextColor")
        cls._define_opcode(0x6013, "LayerTextColorN")
        cls._define_opcode(0x6014, "LayerTextLocate")
        cls._define_opcode(0x6015, "LayerTextLocateN")
        cls._define_opcode(0x6016, "LayerTextGetLocate")
        cls._define_opcode(0x6017, "LayerTextGetID")
        cls._define_opcode(0x6018, "LayerTextGetRegion")
        cls._define_opcode(0x6019, "LayerTextChangeColor")
        cls._define_opcode(0x601A, "LayerTextClearID")
        cls._define_opcode(0x601B, "LayerSetDensity")
        cls._define_opcode(0x601C, "LayerGetDensity")
        cls._define_opcode(0x601D, "LayerSetWindow2")
        cls._define_opcode(0x601E, "LayerGetWindow2")
        cls._define_opcode(0x601F, "LayerStretch")
        cls._define_opcode(0x6020, "LayerGetColorCode")
        cls._define_opcode(0x6021, "LayerGetScreenMode")
        cls._define_opcode(0x6022, "LayerSetScreenMode")
        cls._define_opcode(0x6023, "LayerSetMethod")
        cls._define_opcode(0x6024, "LayerGetMethod")
        cls._define_opcode(0x6025, "LayerSetDefaultMethod")
        cls._define_opcode(0x6026, "LayerGetDefaultMethod")
        cls._define_opcode(0x6027, "LayerActiveBlind")
        cls._define_opcode(0x6029, "LayerSetBlindColor")
        cls._define_opcode(0x602B, "LayerSetOffset")
        cls._define_opcode(0x602D, "LayerSetTitle")
        cls._define_opcode(0x602E, "LayerSetAlpha")
        cls._define_opcode(0x6030, "LayerSurface")

        # Sound
        cls._define_opcode(0x6100, "SoundIsEnable")
        cls._define_opcode(0x6101, "SoundRead")
        cls._define_opcode(0x6102, "SoundDelete")
        cls._define_opcode(0x6103, "SoundPlay")
        cls._define_opcode(0x6104, "SoundLoopPlay")
        cls._define_opcode(0x6105, "SoundStop")
        cls._define_opcode(0x6106, "SoundStatus")
        cls._define_opcode(0x6107, "SoundGetLength")

        # CD audio
        cls._define_opcode(0x6200, "CddaPlay")
        cls._define_opcode(0x6201, "CddaPlayLoop")
        cls._define_opcode(0x6202, "CddaStop")
        cls._define_opcode(0x6203, "CddaSetDrive")
        cls._define_opcode(0x6204, "CddaGetDrive")

        # Video
        cls._define_opcode(0x6501, "AviOpenFile")
        cls._define_opcode(0x6508, "AviClose")
        cls._define_opcode(0x6509, "AviGetFrameLength")
        cls._define_opcode(0x650A, "AviGetInfo")
        cls._define_opcode(0x6520, "AviSendFrameImage")

    @classmethod
    def get_by_value(cls, value: int) -> Optional[Opcode]:
        cls.initialize()
        return cls._by_value.get(value)

    @classmethod
    def get_by_mnemonic(cls, mnemonic: str) -> Optional[Opcode]:
        cls.initialize()
        return cls._by_mnemonic.get(mnemonic)

    @classmethod
    def all(cls) -> List[Opcode]:
        cls.initialize()
        return list(cls._opcodes)

    @staticmethod
    def dynamic(value: int) -> Opcode:
        """Opcode for a command made legal at runtime by add_cmd/add_cmd_alias."""
        return Opcode(value, DYNAMIC_MNEMONIC, OperandShape.SCALAR16)


# Initialize on module load
OpcodeRegistry.initialize()
