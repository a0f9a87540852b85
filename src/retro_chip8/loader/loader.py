# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8のROMは先頭から0x200に配置される生のバイナリです。
"""
from pathlib import Path
from typing import Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu

class RomLoader:
    """
    バイナリROMファイルを読み込み、CPUのメモリ(0x200以降)へロードするローダー。
    """
    # @intent:responsibility ファイルを読み込みCPUへロードします。ロードしたバイト数を返します。
    # @intent:post-condition サイズ超過時はRomTooLargeが伝播し、メモリは変更されません。
    def load_rom(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"ROM file '{path}' does not exist or is not a file.")
        data = path.read_bytes()
        cpu.load_program(data)
        return len(data)
