# src/retro_chip8/arch/chip8/constants.py
"""
CHIP-8の固定値（メモリ配置、画面サイズ、フォントテーブル）。
"""

MEMORY_SIZE = 4096
ADDRESS_MASK = 0x0FFF   # メモリアクセス時のアドレスマスク (mod 4096)
WORD_MASK = 0xFFFF      # PC / Iレジスタの16bit幅

PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
NUM_KEYS = 16

FONT_START = 0x050
FONT_GLYPH_SIZE = 5

# @intent:constant 16進数字0-Fのグリフ（4x5ピクセル、1行1バイト、MSB先頭）。
#                 ROMがFx29経由で参照するため、値は変更してはいけません。
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

FONT_SIZE = len(FONT)  # 80
