# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
設定とROMを読み込み、メインウィンドウを起動します。
"""
import argparse
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.core.errors import RomTooLarge
from retro_chip8.loader.loader import RomLoader
from .main_window import MainWindow

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 emulator")
    parser.add_argument("rom", help="path to a CHIP-8 ROM image")
    parser.add_argument("--config", help="YAML emulator configuration")
    parser.add_argument("--scale", type=int, help="display scale factor (overrides config)")
    parser.add_argument("--cpu-hz", type=float, help="instructions per second (overrides config)")
    return parser

# @intent:responsibility 設定ファイルとコマンドライン引数を統合した設定を返します。
def load_config(args: argparse.Namespace) -> EmulatorConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
    if args.scale is not None:
        if args.scale <= 0:
            raise ValueError(f"Invalid scale: {args.scale}")
        config.display.scale = args.scale
    if args.cpu_hz is not None:
        if args.cpu_hz <= 0:
            raise ValueError(f"Invalid cpu-hz: {args.cpu_hz}")
        config.cpu_hz = args.cpu_hz
    return config

# @intent:responsibility アプリケーションを起動します。読み込み失敗時は終了コード1を返します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: failed to load config: {e}", file=sys.stderr)
        return 1

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(config)

    try:
        size = RomLoader().load_rom(args.rom, main_win.get_cpu())
    except RomTooLarge as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: failed to read ROM: {e}", file=sys.stderr)
        return 1

    print(f"Loaded {args.rom} ({size} bytes)")
    main_win.show()
    main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
