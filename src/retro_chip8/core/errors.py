# retro_chip8/core/errors.py
"""
エミュレーション中に発生するエラーの定義。

各エラーは組み込み例外（ValueError, IndexError）の系統も継承します。
"""

class Chip8Error(Exception):
    """CHIP-8エミュレーションに関する全てのエラーの基底クラス。"""


# @intent:responsibility ROMがメモリ空間(0x200以降)に収まらないことを表します。
class RomTooLarge(Chip8Error, ValueError):
    """
    ROMのバイト長が0x200からの空き領域を超えている場合に送出されます。
    ロード前に検出されるため、メモリは一切変更されません。
    """
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"ROM too large ({size} bytes). Max allowed from 0x200 is {limit} bytes."
        )


# @intent:responsibility 空のスタックに対するRET(00EE)を表します。
class StackUnderflow(Chip8Error, IndexError):
    """
    コールスタックが空の状態でRETが実行された場合に送出されます。
    """
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Stack underflow: RET with empty call stack at PC {pc:#06x}")


# @intent:responsibility 設定されたスタック段数を超えるCALLを表します。
class StackOverflow(Chip8Error, IndexError):
    def __init__(self, pc: int, limit: int):
        self.pc = pc
        self.limit = limit
        super().__init__(f"Stack overflow: CALL exceeds {limit} levels at PC {pc:#06x}")
