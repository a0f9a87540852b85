# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（CLS, DRW）の実装。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import FLAG_REGISTER
from .base import ExecutionContext, read_byte

# --- CLS ---
def execute_cls(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.framebuffer.clear()
    state.redraw = True

# --- DRW Vx, Vy, n ---
# @intent:responsibility Iからnバイトのスプライトを(Vx, Vy)にXOR描画し、衝突をVFに記録します。
# @intent:rationale 各ピクセルの座標は行ごと・列ごとに独立して幅64/高さ32で折り返します。
#                  スプライトを矩形ブロックとして折り返すのではありません。
def execute_drw(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    fb = state.framebuffer
    # 座標はVFをクリアする前に取得する（x=F, y=F の場合に意味がある）
    origin_x = state.v[op.x] % fb.width
    origin_y = state.v[op.y] % fb.height
    state.v[FLAG_REGISTER] = 0

    for row in range(op.n):
        sprite_byte = read_byte(state, state.i + row)
        py = (origin_y + row) % fb.height
        for col in range(8):
            if sprite_byte & (0x80 >> col):
                px = (origin_x + col) % fb.width
                if fb.toggle_pixel(px, py):
                    state.v[FLAG_REGISTER] = 1

    state.redraw = True
