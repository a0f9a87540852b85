# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 インタプリタの中心モジュール。
"""
import random
from typing import Dict, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.operation import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.constants import FONT, WORD_MASK
from retro_chip8.arch.chip8.instructions import ExecutionContext, decode_opcode, execute_instruction
from retro_chip8.arch.chip8.instructions.base import read_word

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8仮想マシンをエミュレートするクラス。

    外部のドライバが step() を任意の周期で、step_timers() を60Hzで呼び出します。
    フレームバッファとキーパッドは step() の合間に読み書きされます。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition stack_limitを指定する場合は1以上である必要があります。
    def __init__(self, rng: Optional[random.Random] = None, stack_limit: Optional[int] = None):
        if stack_limit is not None and stack_limit < 1:
            raise ValueError("stack_limit must be a positive integer or None.")
        self._context = ExecutionContext(rng=rng or random.Random(), stack_limit=stack_limit)
        self._last_operation: Optional[Operation] = None
        super().__init__()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    def get_state(self) -> Chip8CpuState:
        return self._state

    @property
    def stack_limit(self) -> Optional[int]:
        return self._context.stack_limit

    # @intent:responsibility 状態をリセットします。メモリも消去されるため、フォントとROMは再ロードが必要です。
    def reset(self) -> None:
        super().reset()
        self._last_operation = None

    # @intent:responsibility フォントテーブルを0x050にロードします。
    def load_font(self, table: bytes = FONT) -> None:
        self._state.load_font(table)

    # @intent:responsibility プログラムを0x200にロードします。
    def load_program(self, data: bytes) -> None:
        self._state.load_program(data)

    # @intent:responsibility PCから2バイトをビッグエンディアンでフェッチします。
    def _fetch(self) -> int:
        return read_word(self._state, self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility ディスパッチ前にPCを2進めます。ジャンプ/スキップ命令はこの値を基準にします。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + 2) & WORD_MASK

    def _execute(self, operation: Operation) -> None:
        self._last_operation = operation
        execute_instruction(operation, self._state, self._context)

    # @intent:responsibility 直近に実行（または実行を試みた）命令を返します。
    def get_last_operation(self) -> Optional[Operation]:
        return self._last_operation

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減らします。0未満にはなりません。
    def step_timers(self) -> None:
        s = self._state
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            s.sound_timer -= 1

    # @intent:responsibility サウンドタイマーが0より大きい間、音を鳴らすべきであることを示します。
    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # @intent:responsibility 描画側がフレームを消費したことを記録します。
    # @intent:return 再描画が必要だった場合はTrue。
    def consume_frame(self) -> bool:
        needs_redraw = self._state.redraw
        self._state.redraw = False
        return needs_redraw

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{idx:X}": value for idx, value in enumerate(s.v)}
        registers.update({
            "I": s.i, "PC": s.pc, "DT": s.delay_timer, "ST": s.sound_timer, "SP": len(s.stack)
        })
        return registers
