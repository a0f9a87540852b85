# src/retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from typing import Optional

from . import alu
from . import control
from . import display
from . import load

# @intent:map 上位ニブルだけで命令が確定するファミリー。
_SINGLE_PATTERNS = {
    0x1: "1nnn",
    0x2: "2nnn",
    0x3: "3xnn",
    0x4: "4xnn",
    0x5: "5xy0",  # 下位ニブルは判定に使わない
    0x6: "6xnn",
    0x7: "7xnn",
    0x9: "9xy0",
    0xA: "Annn",
    0xB: "Bnnn",
    0xC: "Cxnn",
    0xD: "Dxyn",
}

# @intent:map 2段目のデコードが必要なファミリー（0x0, 0xE, 0xF は nn、0x8 は n で分岐）。
_SYSTEM_PATTERNS = {0xE0: "00E0", 0xEE: "00EE"}

_ALU_PATTERNS = {
    0x0: "8xy0", 0x1: "8xy1", 0x2: "8xy2", 0x3: "8xy3",
    0x4: "8xy4", 0x5: "8xy5", 0x6: "8xy6", 0x7: "8xy7",
    0xE: "8xyE",
}

_KEY_PATTERNS = {0x9E: "Ex9E", 0xA1: "ExA1"}

_MISC_PATTERNS = {
    0x07: "Fx07", 0x0A: "Fx0A", 0x15: "Fx15", 0x18: "Fx18",
    0x1E: "Fx1E", 0x29: "Fx29", 0x33: "Fx33", 0x55: "Fx55",
    0x65: "Fx65",
}

# @intent:responsibility オペコードから命令パターン文字列を求めます。該当なしはNone。
def resolve_pattern(opcode: int) -> Optional[str]:
    family = (opcode & 0xF000) >> 12
    nn = opcode & 0x00FF
    n = opcode & 0x000F

    if family == 0x0:
        return _SYSTEM_PATTERNS.get(nn, "0nnn")
    if family == 0x8:
        return _ALU_PATTERNS.get(n)
    if family == 0xE:
        return _KEY_PATTERNS.get(nn)
    if family == 0xF:
        return _MISC_PATTERNS.get(nn)
    return _SINGLE_PATTERNS.get(family)

# @intent:map 命令パターンからニーモニックとオペランド書式へのマッピングテーブル。
DECODE_MAP = {
    "00E0": ("CLS", []),
    "00EE": ("RET", []),
    "0nnn": ("SYS", ["${nnn:03X}"]),
    "1nnn": ("JP", ["${nnn:03X}"]),
    "2nnn": ("CALL", ["${nnn:03X}"]),
    "3xnn": ("SE", ["V{x:X}", "#${nn:02X}"]),
    "4xnn": ("SNE", ["V{x:X}", "#${nn:02X}"]),
    "5xy0": ("SE", ["V{x:X}", "V{y:X}"]),
    "6xnn": ("LD", ["V{x:X}", "#${nn:02X}"]),
    "7xnn": ("ADD", ["V{x:X}", "#${nn:02X}"]),
    "8xy0": ("LD", ["V{x:X}", "V{y:X}"]),
    "8xy1": ("OR", ["V{x:X}", "V{y:X}"]),
    "8xy2": ("AND", ["V{x:X}", "V{y:X}"]),
    "8xy3": ("XOR", ["V{x:X}", "V{y:X}"]),
    "8xy4": ("ADD", ["V{x:X}", "V{y:X}"]),
    "8xy5": ("SUB", ["V{x:X}", "V{y:X}"]),
    "8xy6": ("SHR", ["V{x:X}"]),
    "8xy7": ("SUBN", ["V{x:X}", "V{y:X}"]),
    "8xyE": ("SHL", ["V{x:X}"]),
    "9xy0": ("SNE", ["V{x:X}", "V{y:X}"]),
    "Annn": ("LD", ["I", "${nnn:03X}"]),
    "Bnnn": ("JP", ["V0", "${nnn:03X}"]),
    "Cxnn": ("RND", ["V{x:X}", "#${nn:02X}"]),
    "Dxyn": ("DRW", ["V{x:X}", "V{y:X}", "{n}"]),
    "Ex9E": ("SKP", ["V{x:X}"]),
    "ExA1": ("SKNP", ["V{x:X}"]),
    "Fx07": ("LD", ["V{x:X}", "DT"]),
    "Fx0A": ("LD", ["V{x:X}", "K"]),
    "Fx15": ("LD", ["DT", "V{x:X}"]),
    "Fx18": ("LD", ["ST", "V{x:X}"]),
    "Fx1E": ("ADD", ["I", "V{x:X}"]),
    "Fx29": ("LD", ["F", "V{x:X}"]),
    "Fx33": ("LD", ["B", "V{x:X}"]),
    "Fx55": ("LD", ["[I]", "V{x:X}"]),
    "Fx65": ("LD", ["V{x:X}", "[I]"]),
}

# @intent:map 命令パターンから実行関数へのマッピングテーブル。
# SYS (0nnn) は実行関数を持たず、無視される。
EXECUTE_MAP = {
    # Display
    "00E0": display.execute_cls,
    "Dxyn": display.execute_drw,

    # Control
    "00EE": control.execute_ret,
    "1nnn": control.execute_jp,
    "2nnn": control.execute_call,
    "3xnn": control.execute_se_vx_nn,
    "4xnn": control.execute_sne_vx_nn,
    "5xy0": control.execute_se_vx_vy,
    "9xy0": control.execute_sne_vx_vy,
    "Bnnn": control.execute_jp_v0,
    "Ex9E": control.execute_skp,
    "ExA1": control.execute_sknp,
    "Fx0A": control.execute_ld_vx_k,

    # ALU
    "6xnn": alu.execute_ld_vx_nn,
    "7xnn": alu.execute_add_vx_nn,
    "8xy0": alu.execute_ld_vx_vy,
    "8xy1": alu.execute_or,
    "8xy2": alu.execute_and,
    "8xy3": alu.execute_xor,
    "8xy4": alu.execute_add_vx_vy,
    "8xy5": alu.execute_sub,
    "8xy6": alu.execute_shr,
    "8xy7": alu.execute_subn,
    "8xyE": alu.execute_shl,
    "Cxnn": alu.execute_rnd,

    # Load/Store
    "Annn": load.execute_ld_i,
    "Fx07": load.execute_ld_vx_dt,
    "Fx15": load.execute_ld_dt_vx,
    "Fx18": load.execute_ld_st_vx,
    "Fx1E": load.execute_add_i_vx,
    "Fx29": load.execute_ld_f_vx,
    "Fx33": load.execute_ld_b_vx,
    "Fx55": load.execute_store_registers,
    "Fx65": load.execute_load_registers,
}
