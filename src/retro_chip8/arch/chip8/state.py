# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState
from retro_chip8.core.errors import RomTooLarge
from retro_chip8.transport.memory import Memory, Framebuffer, Keypad
from retro_chip8.arch.chip8.constants import (
    MEMORY_SIZE, PROGRAM_START, DISPLAY_WIDTH, DISPLAY_HEIGHT,
    NUM_REGISTERS, FONT, FONT_START, FONT_SIZE,
)

# @intent:responsibility CHIP-8マシンの全ての状態（レジスタ、メモリ、スタック、画面、タイマー、キー）を保持します。
# @intent:rationale VFは独立したフラグフィールドではなく、レジスタ配列の16番目の要素として扱います。
#                  ROMはフラグを生成する命令の合間にVFを通常のデータとして読み書きできるためです。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8の状態を保持するデータクラス。

    - v: 汎用レジスタ V0-VF (各8bit)
    - i: インデックスレジスタ (16bit)
    - stack: 戻りアドレスのリスト
    - redraw: フレームバッファが変更されたことを示すフラグ。描画側がクリアする
    """
    pc: int = PROGRAM_START
    i: int = 0x0000
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    stack: List[int] = field(default_factory=list)
    memory: Memory = field(default_factory=lambda: Memory(MEMORY_SIZE))
    framebuffer: Framebuffer = field(default_factory=lambda: Framebuffer(DISPLAY_WIDTH, DISPLAY_HEIGHT))
    keypad: Keypad = field(default_factory=Keypad)
    redraw: bool = False
    delay_timer: int = 0
    sound_timer: int = 0

    # @intent:responsibility 全てのレジスタ・メモリ・画面・タイマー・キーを初期値に戻します。
    def reset(self) -> None:
        self.pc = PROGRAM_START
        self.i = 0x0000
        self.v = [0] * NUM_REGISTERS
        self.stack = []
        self.memory.clear()
        self.framebuffer.clear()
        self.keypad.release_all()
        self.redraw = False
        self.delay_timer = 0
        self.sound_timer = 0

    # @intent:responsibility フォントテーブルを0x050から書き込みます。
    # @intent:pre-condition tableは16グリフ x 5バイト = 80バイトである必要があります。
    def load_font(self, table: bytes = FONT) -> None:
        if len(table) != FONT_SIZE:
            raise ValueError(f"Font table must be {FONT_SIZE} bytes, got {len(table)}.")
        self.memory.load(FONT_START, bytes(table))

    # @intent:responsibility プログラムを0x200から書き込みます。
    # @intent:post-condition サイズ超過の場合は何も書き込まずにRomTooLargeを送出します。
    def load_program(self, data: bytes) -> None:
        limit = self.memory.get_size() - PROGRAM_START
        if len(data) > limit:
            raise RomTooLarge(len(data), limit)
        self.memory.load(PROGRAM_START, bytes(data))

    @property
    def vf(self) -> int:
        return self.v[0xF]
