# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。

全てのメモリアクセスはここを経由し、アドレスを明示的に4096で折り返します。
"""
import random
from dataclasses import dataclass, field
from typing import Optional

from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import ADDRESS_MASK, WORD_MASK

# @intent:data_structure 命令実行に必要な、状態以外の依存（乱数源、スタック上限）をまとめます。
@dataclass
class ExecutionContext:
    rng: random.Random = field(default_factory=random.Random)
    stack_limit: Optional[int] = None  # Noneの場合は無制限

# @intent:utility_function アドレスを4096バイト空間に折り返して1バイト読み込みます。
def read_byte(state: Chip8CpuState, addr: int) -> int:
    return state.memory.read(addr & ADDRESS_MASK)

# @intent:utility_function アドレスを4096バイト空間に折り返して1バイト書き込みます。
def write_byte(state: Chip8CpuState, addr: int, val: int) -> None:
    state.memory.write(addr & ADDRESS_MASK, val & 0xFF)

# @intent:utility_function 16ビットワードをビッグエンディアン形式で読み込みます。
def read_word(state: Chip8CpuState, addr: int) -> int:
    """Big-endian 16-bit read."""
    return (read_byte(state, addr) << 8) | read_byte(state, addr + 1)

# @intent:utility_function 次の命令を読み飛ばします。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & WORD_MASK
