# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー待ち）の実装。

実行時点でstate.pcは既に次の命令（フェッチ位置+2）を指しています。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.core.errors import StackUnderflow, StackOverflow
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import WORD_MASK
from .base import ExecutionContext, skip_next

# --- RET ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
# @intent:post-condition スタックが空の場合はStackUnderflowを送出します。PCは既に次の命令へ進んだままで、例外には命令自身のPCが格納されます。
def execute_ret(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if not state.stack:
        raise StackUnderflow((state.pc - 2) & WORD_MASK)
    state.pc = state.stack.pop()

# --- JP nnn ---
def execute_jp(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = op.nnn

# --- CALL nnn ---
# @intent:responsibility 戻りアドレス（次の命令）をプッシュしてからジャンプします。
def execute_call(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if ctx.stack_limit is not None and len(state.stack) >= ctx.stack_limit:
        raise StackOverflow((state.pc - 2) & WORD_MASK, ctx.stack_limit)
    state.stack.append(state.pc)
    state.pc = op.nnn

# --- JP V0, nnn ---
# PCは16bitに収めるだけで0x0FFFへは丸めない。折り返しはフェッチ時に行われる。
def execute_jp_v0(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    state.pc = (op.nnn + state.v[0]) & WORD_MASK

# --- SE / SNE ---
def execute_se_vx_nn(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] == op.nn:
        skip_next(state)

def execute_sne_vx_nn(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] != op.nn:
        skip_next(state)

def execute_se_vx_vy(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

def execute_sne_vx_vy(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- SKP / SKNP ---
# キー番号はVxの下位4bit（キーパッドは16キーのみ）
def execute_skp(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if state.keypad.is_pressed(state.v[op.x] & 0xF):
        skip_next(state)

def execute_sknp(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    if not state.keypad.is_pressed(state.v[op.x] & 0xF):
        skip_next(state)

# --- LD Vx, K ---
# @intent:responsibility キーが押されるまで同じ命令を再実行させます（PCを戻す）。
# @intent:rationale スレッドをブロックせず、ドライバが step() を呼び続けることで待機を表現します。
def execute_ld_vx_k(state: Chip8CpuState, op: Operation, ctx: ExecutionContext) -> None:
    key = state.keypad.first_pressed()
    if key is None:
        state.pc = (state.pc - 2) & WORD_MASK
        return
    state.v[op.x] = key
