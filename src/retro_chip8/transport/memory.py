# retro_chip8/transport/memory.py
"""
Transport Layer (デバイス)

このモジュールは、CHIP-8のメモリ・フレームバッファ・キーパッドを
固定長で境界チェック付きのデバイスとして提供します。
アドレスの折り返し（wraparound）は呼び出し側が明示的に行う責務を負い、
ここでは範囲外アクセスを常にエラーとして扱います。
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

# @intent:responsibility 8bit単位で読み書きされるデバイスの抽象インターフェースを定義します。
class Device(ABC):
    """
    全てのデバイスはreadとwriteのインターフェースを実装する必要があります。
    """
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        """
        pass

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        """
        pass

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class Memory(Device):
    """
    バイトアドレス指定可能なRAM。CHIP-8では4096バイト固定で使用します。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    # @intent:pre-condition アドレスはメモリの有効範囲内である必要があります。
    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for memory of size {self._size}.")
        return self._memory[address]

    # @intent:pre-condition アドレスは有効範囲内であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise IndexError(f"Address {address} out of bounds for memory of size {self._size}.")
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility 連続したバイト列を一括で書き込みます。
    # @intent:post-condition 範囲外にはみ出す場合、一切書き込まずにIndexErrorを発生させます。
    def load(self, address: int, data: bytes) -> None:
        end = address + len(data)
        if not (0 <= address and end <= self._size):
            raise IndexError(
                f"Block {address:#06x}-{end:#06x} out of bounds for memory of size {self._size}."
            )
        self._memory[address:end] = data

    def clear(self) -> None:
        self._memory[:] = bytes(self._size)

    # @intent:responsibility UIやテスト用に、内容を書き換えずに参照するためのコピーを返します。
    def dump(self, address: int = 0, length: Optional[int] = None) -> bytes:
        if length is None:
            length = self._size - address
        return bytes(self._memory[address:address + length])

    def get_size(self) -> int:
        return self._size

# @intent:responsibility 64x32のモノクロフレームバッファを保持します。
class Framebuffer:
    """
    1ピクセル1バイトのフレームバッファ。各ピクセルは0x00（消灯）か0xFF（点灯）のみを取ります。
    """
    PIXEL_OFF = 0x00
    PIXEL_ON = 0xFF

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError("Framebuffer dimensions must be positive.")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self.width}x{self.height} framebuffer.")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._offset(x, y)]

    def is_on(self, x: int, y: int) -> bool:
        return self.get_pixel(x, y) == self.PIXEL_ON

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        self._pixels[self._offset(x, y)] = self.PIXEL_ON if on else self.PIXEL_OFF

    # @intent:responsibility 指定ピクセルを反転し、反転前に点灯していたかどうかを返します。
    # @intent:rationale スプライト描画のXORと衝突検出を1回のアクセスで行うために使用します。
    def toggle_pixel(self, x: int, y: int) -> bool:
        offset = self._offset(x, y)
        was_on = self._pixels[offset] == self.PIXEL_ON
        self._pixels[offset] = self.PIXEL_OFF if was_on else self.PIXEL_ON
        return was_on

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def rows(self) -> List[bytes]:
        """
        各行をbytesとして返します（読み取り専用のビュー）。
        """
        return [bytes(self._pixels[y * self.width:(y + 1) * self.width]) for y in range(self.height)]

    def to_bytes(self) -> bytes:
        return bytes(self._pixels)

    def count_lit(self) -> int:
        return self._pixels.count(self.PIXEL_ON)

# @intent:responsibility 16キーの押下状態を保持します。
class Keypad:
    """
    16進キーパッド (0-F) の押下状態。
    入力側はポーリング周期ごとに set_all で配列全体を上書きします。
    """
    KEY_COUNT = 16

    def __init__(self):
        self._keys: List[bool] = [False] * self.KEY_COUNT

    def _check(self, key: int) -> None:
        if not 0 <= key < self.KEY_COUNT:
            raise IndexError(f"Key {key} out of range 0-{self.KEY_COUNT - 1}.")

    def is_pressed(self, key: int) -> bool:
        self._check(key)
        return self._keys[key]

    def press(self, key: int) -> None:
        self._check(key)
        self._keys[key] = True

    def release(self, key: int) -> None:
        self._check(key)
        self._keys[key] = False

    # @intent:pre-condition statesはちょうど16要素である必要があります。
    def set_all(self, states: Iterable[bool]) -> None:
        new_keys = [bool(s) for s in states]
        if len(new_keys) != self.KEY_COUNT:
            raise ValueError(f"Expected {self.KEY_COUNT} key states, got {len(new_keys)}.")
        self._keys = new_keys

    def release_all(self) -> None:
        self._keys = [False] * self.KEY_COUNT

    # @intent:responsibility 押下されている最小のキー番号を返します。無ければNone。
    def first_pressed(self):
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def snapshot(self) -> List[bool]:
        return list(self._keys)
