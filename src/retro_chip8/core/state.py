# retro_chip8/core/state.py
"""
Core Layer (状態の基底)
"""
from dataclasses import dataclass

# @intent:responsibility どのアーキテクチャにも共通する最小限の状態として、プログラムカウンタだけを持ちます。
@dataclass
class CpuState:
    pc: int = 0x0000
