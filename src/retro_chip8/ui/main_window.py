# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
エミュレータの画面・ステータス表示を保持し、スケジューラをQTimerから駆動します。
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QLabel, QMessageBox
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.core.errors import Chip8Error
from retro_chip8.runtime.scheduler import Scheduler
from .display_view import DisplayView
from .keymap import Keymap

# 約1msごとにスケジューラを駆動する。実行回数はスケジューラ側が経過時間から決める
TICK_INTERVAL_MS = 1

# @intent:responsibility アプリケーションのメインウィンドウを定義し、エミュレーションループを所有します。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    """
    def __init__(self, config: Optional[EmulatorConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self._config = config or EmulatorConfig()
        self.setWindowTitle("Retro CHIP-8")

        self.display_view = DisplayView(
            DISPLAY_WIDTH, DISPLAY_HEIGHT,
            scale=self._config.display.scale,
            foreground=self._config.display.foreground,
            background=self._config.display.background,
            parent=self,
        )
        self.setCentralWidget(self.display_view)
        # フォーカスを失った時に押しっぱなしのキーが残らないようにする
        self.display_view.focus_lost.connect(self._on_focus_lost)

        self.status_label = QLabel("Stopped", self)
        self.statusBar().addPermanentWidget(self.status_label)

        self.keymap = Keymap(self._config.keymap)
        self.cpu, self.scheduler = self._setup_backend()

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_tick)

    # @intent:responsibility CPUとスケジューラを構築します。
    def _setup_backend(self):
        builder = SystemBuilder()
        return builder.build_system(self._config, on_frame=self._present_frame)

    def get_cpu(self) -> Chip8Cpu:
        return self.cpu

    def get_scheduler(self) -> Scheduler:
        return self.scheduler

    def start(self) -> None:
        self.scheduler.resume()
        self._timer.start(TICK_INTERVAL_MS)

    def stop(self) -> None:
        self._timer.stop()
        self.scheduler.stop()

    # @intent:responsibility 1回のタイマー発火ごとにキー状態を反映し、スケジューラを進めます。
    def _on_tick(self) -> None:
        self.keymap.apply(self.cpu.get_state().keypad)
        try:
            self.scheduler.tick()
        except Chip8Error as e:
            self._timer.stop()
            # StackUnderflow等は実行を試みた命令のPCを保持している
            pc = getattr(e, "pc", self.cpu.get_state().pc)
            print(f"Emulation stopped at PC: {pc:#06x}: {e}")
            self.status_label.setText(f"Stopped at PC {pc:03X}")
            QMessageBox.critical(self, "Emulation Error", str(e))

    def _on_focus_lost(self) -> None:
        self.keymap.release_all()

    # @intent:responsibility フレーム周期ごとに呼ばれ、再描画が必要な場合のみ画面を更新します。
    def _present_frame(self, cpu: Chip8Cpu) -> None:
        if cpu.consume_frame():
            self.display_view.update_frame(cpu.get_state().framebuffer)
        self._update_status(cpu)

    def _update_status(self, cpu: Chip8Cpu) -> None:
        regs = cpu.get_register_map()
        text = f"PC {regs['PC']:03X}  I {regs['I']:03X}  DT {regs['DT']:02X}"
        if cpu.sound_active:
            text += "  BEEP"
        self.status_label.setText(text)

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if event.key() == Qt.Key_Escape:
            self.close()
            return
        if event.isAutoRepeat() or not self.keymap.press(event.key()):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if event.isAutoRepeat() or not self.keymap.release(event.key()):
            super().keyReleaseEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.stop()
        super().closeEvent(event)
