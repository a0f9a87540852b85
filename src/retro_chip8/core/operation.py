# retro_chip8/core/operation.py
"""
デコード済み命令の不変データ構造

このモジュールは、フェッチされたオペコードを解析した結果を記録するデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（オペコード、パターン、ニーモニック、各フィールド）を記録するデータクラス。
    """
    opcode: int # 例: 0x8124
    pattern: str # 例: "8xy4"。実行テーブルのキーとなる
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    nnn: int = 0 # 下位12bit
    nn: int = 0 # 下位8bit
    n: int = 0 # 下位4bit
    x: int = 0 # bit 8-11
    y: int = 0 # bit 4-7

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic
