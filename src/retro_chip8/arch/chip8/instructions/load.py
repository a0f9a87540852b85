# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（Iレジスタ、タイマー、BCD、レジスタ一括転送）の実装。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import FONT_START, FONT_GLYPH_SIZE, WORD_MASK
from .base import ExecutionContext, read_byte, write_byte

# --- LD I, nnn ---
def execute_ld_i(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.i = op.nnn

# --- Timers ---
def execute_ld_vx_dt(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.delay_timer

def execute_ld_dt_vx(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.delay_timer = state.v[op.x]

def execute_ld_st_vx(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.sound_timer = state.v[op.x]

# --- ADD I, Vx ---
# @intent:responsibility Iは16bitで折り返す。メモリアクセス時にはさらに4096で折り返される。
def execute_add_i_vx(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.i = (state.i + state.v[op.x]) & WORD_MASK

# --- LD F, Vx ---
# @intent:responsibility Vxのフォントグリフの先頭アドレスをIに設定します。
def execute_ld_f_vx(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.i = FONT_START + state.v[op.x] * FONT_GLYPH_SIZE

# --- LD B, Vx ---
# @intent:responsibility Vxの10進3桁（百、十、一の位）をI, I+1, I+2に書き込みます。
def execute_ld_b_vx(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    value = state.v[op.x]
    write_byte(state, state.i, value // 100)
    write_byte(state, state.i + 1, (value % 100) // 10)
    write_byte(state, state.i + 2, value % 10)

# --- LD [I], Vx ---
# @intent:responsibility V0..Vx（両端含む）をIから始まるメモリへ書き込みます。Iは変化しません。
def execute_store_registers(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    for idx in range(op.x + 1):
        write_byte(state, state.i + idx, state.v[idx])

# --- LD Vx, [I] ---
def execute_load_registers(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    for idx in range(op.x + 1):
        state.v[idx] = read_byte(state, state.i + idx)
