# src/retro_chip8/ui/keymap.py
"""
物理キーボードからCHIP-8キーパッド(0-F)への対応付け。
"""
import warnings
from typing import Dict, List, Optional, Set

from PySide6.QtCore import Qt

from retro_chip8.transport.memory import Keypad

# @intent:utility_function キー名（"1", "Q", "Space" など）をQtのキーコードに変換します。該当なしはNone。
def qt_key_code(name: str) -> Optional[int]:
    key = getattr(Qt.Key, f"Key_{name}", None)
    if key is None and len(name) > 1:
        key = getattr(Qt.Key, f"Key_{name.capitalize()}", None)
    return _as_int(key) if key is not None else None

def _as_int(key) -> int:
    return int(getattr(key, "value", key))

# @intent:responsibility 押下中の物理キーを追跡し、ポーリングごとにキーパッド配列全体を上書きします。
class Keymap:
    def __init__(self, bindings: Dict[str, int]):
        self._bindings: Dict[int, int] = {}
        for name, chip8_key in bindings.items():
            code = qt_key_code(name)
            if code is None:
                warnings.warn(f"Unknown key name '{name}' in keymap, ignored")
                continue
            self._bindings[code] = chip8_key
        self._held: Set[int] = set()

    def is_bound(self, qt_key: int) -> bool:
        return _as_int(qt_key) in self._bindings

    # @intent:return 割り当て済みのキーであればTrue。
    def press(self, qt_key: int) -> bool:
        qt_key = _as_int(qt_key)
        if qt_key not in self._bindings:
            return False
        self._held.add(qt_key)
        return True

    def release(self, qt_key: int) -> bool:
        qt_key = _as_int(qt_key)
        if qt_key not in self._bindings:
            return False
        self._held.discard(qt_key)
        return True

    def release_all(self) -> None:
        self._held.clear()

    def states(self) -> List[bool]:
        states = [False] * Keypad.KEY_COUNT
        for code in self._held:
            states[self._bindings[code]] = True
        return states

    # @intent:responsibility 現在の押下状態でキーパッドの16要素全てを上書きします。
    def apply(self, keypad: Keypad) -> None:
        keypad.set_all(self.states())
