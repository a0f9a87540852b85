# retro_chip8/core/cpu.py
"""
Core Layer (命令サイクル)

フェッチ→デコード→PC更新→実行 の順序だけを固定し、
各段の中身はアーキテクチャ側のサブクラスに任せます。
"""
from abc import ABC, abstractmethod
from typing import Dict

from retro_chip8.core.operation import Operation
from retro_chip8.core.state import CpuState

# @intent:responsibility 命令サイクルの骨組みと、状態・実行命令数の保持を担います。
class AbstractCpu(ABC):
    """
    インタプリタの基底クラス。

    状態オブジェクトはインスタンスごとに1つだけ所有し、`get_state()` で参照を渡します。
    """
    def __init__(self):
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0

    # @intent:responsibility アーキテクチャ固有の初期状態を生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility 状態を作り直し、実行命令数も0に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    def get_cycle_count(self) -> int:
        return self._cycle_count

    @abstractmethod
    def _fetch(self) -> int:
        """PCの位置から命令語を読み出します。PC自体はここでは動かしません。"""
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 実行前に、PCを次の命令の先頭へ進めます。
    @abstractmethod
    def _update_pc(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行します。
    # @intent:post-condition 戻り値は無く、結果は状態オブジェクトの変化としてのみ観測されます。
    def step(self) -> None:
        opcode = self._fetch()
        operation = self._decode(opcode)
        # ジャンプ・スキップ系の命令は、進めた後のPCを基準に書き換える
        self._update_pc(operation)
        self._execute(operation)
        self._cycle_count += 1

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        レジスタ名から値への辞書を返します。
        表示側はこの辞書だけを見て、状態クラスの構造には依存しません。
        """
        pass
