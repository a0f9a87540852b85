# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFへのフラグ書き込みの順序には意味があります。
8xy4/8xy5/8xy7 は結果を書いた後にVFを設定し（x=Fの場合はフラグが残る）、
8xy6/8xyE はVFを設定した後に結果を書きます（x=Fの場合は結果が残る）。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import FLAG_REGISTER
from .base import ExecutionContext

# --- LD Vx, nn ---
def execute_ld_vx_nn(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = op.nn

# --- ADD Vx, nn ---
# @intent:responsibility 8bitで折り返す加算。VFは変化しません。
def execute_add_vx_nn(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- LD / OR / AND / XOR Vx, Vy ---
def execute_ld_vx_vy(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = state.v[op.y]

def execute_or(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] |= state.v[op.y]

def execute_and(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] &= state.v[op.y]

def execute_xor(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- ADD Vx, Vy ---
# @intent:responsibility 加算結果が255を超えた場合にVF=1（キャリー）とします。
def execute_add_vx_vy(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.v[FLAG_REGISTER] = 1 if res > 0xFF else 0

# --- SUB Vx, Vy ---
# @intent:responsibility 借りが発生した場合(Vy > Vx)にVF=0、それ以外はVF=1とします。
def execute_sub(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.v[op.x] = (v1 - v2) & 0xFF
    state.v[FLAG_REGISTER] = 0 if v2 > v1 else 1

# --- SUBN Vx, Vy ---
def execute_subn(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    v1 = state.v[op.x]
    v2 = state.v[op.y]
    state.v[op.x] = (v2 - v1) & 0xFF
    state.v[FLAG_REGISTER] = 0 if v1 > v2 else 1

# --- SHR Vx ---
# @intent:responsibility シフト前の最下位ビットをVFに格納してから右シフトします。
# x=Fの場合、シフトはフラグを書いた後のVFに対して行われる。
def execute_shr(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[FLAG_REGISTER] = state.v[op.x] & 0x01
    state.v[op.x] = state.v[op.x] >> 1

# --- SHL Vx ---
# @intent:responsibility シフト前の最上位ビットをVFに格納してから左シフトします。
def execute_shl(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[FLAG_REGISTER] = (state.v[op.x] & 0x80) >> 7
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF

# --- RND Vx, nn ---
def execute_rnd(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.v[op.x] = ctx.rng.randrange(256) & op.nn
