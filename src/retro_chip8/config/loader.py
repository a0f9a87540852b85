import warnings
import yaml
from typing import Dict, Any, Optional
from .models import EmulatorConfig, DisplayConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse_config(data or {})

    def parse_config(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        defaults = EmulatorConfig()

        # Parse Display
        display_data = data.get("display", {}) or {}
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", DisplayConfig.scale)),
            foreground=str(display_data.get("foreground", DisplayConfig.foreground)),
            background=str(display_data.get("background", DisplayConfig.background)),
        )
        if display.scale <= 0:
            raise ValueError(f"Invalid display.scale: {display.scale}")

        # Parse Keymap
        keymap_data = data.get("keymap")
        keymap = self._parse_keymap(keymap_data) if keymap_data else dict(DEFAULT_KEYMAP)

        config = EmulatorConfig(
            cpu_hz=self._parse_rate("cpu_hz", data.get("cpu_hz", defaults.cpu_hz)),
            timer_hz=self._parse_rate("timer_hz", data.get("timer_hz", defaults.timer_hz)),
            frame_hz=self._parse_rate("frame_hz", data.get("frame_hz", defaults.frame_hz)),
            max_frame_time=self._parse_rate("max_frame_time", data.get("max_frame_time", defaults.max_frame_time)),
            stack_limit=self._parse_optional_int(data.get("stack_limit")),
            seed=self._parse_optional_int(data.get("seed")),
            display=display,
            keymap=keymap,
        )
        if config.stack_limit is not None and config.stack_limit < 1:
            raise ValueError(f"Invalid stack_limit: {config.stack_limit}")
        return config

    def _parse_keymap(self, data: Any) -> Dict[str, int]:
        if not isinstance(data, dict):
            raise ValueError(f"Invalid keymap: expected a mapping, got {type(data).__name__}")
        keymap: Dict[str, int] = {}
        for name, value in data.items():
            key = self._parse_int(value)
            if not 0 <= key <= 0xF:
                raise ValueError(f"Invalid keymap entry '{name}': CHIP-8 key {key} out of range 0-F")
            keymap[str(name).upper()] = key

        missing = set(range(16)) - set(keymap.values())
        if missing:
            keys = ", ".join(f"{k:X}" for k in sorted(missing))
            warnings.warn(f"Keymap leaves CHIP-8 keys unbound: {keys}")
        return keymap

    def _parse_rate(self, name: str, value: Any) -> float:
        try:
            rate = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid {name}: {value}")
        if rate <= 0:
            raise ValueError(f"Invalid {name}: must be positive, got {value}")
        return rate

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
