import contextlib
import io
import sys
import unittest
from unittest import mock

from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QFocusEvent, QKeyEvent
from PySide6.QtCore import QEvent, Qt

from retro_chip8.config.models import EmulatorConfig
from retro_chip8.ui.main_window import MainWindow

class TestMainWindow(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.window = MainWindow(EmulatorConfig(cpu_hz=512, timer_hz=64, frame_hz=32))
        self.cpu = self.window.get_cpu()

    def tearDown(self):
        self.window.stop()
        self.window.deleteLater()

    def test_backend_is_built(self):
        self.assertIs(self.window.get_scheduler().running, True)
        self.assertEqual(self.cpu.get_state().memory.read(0x050), 0xF0)

    def test_present_frame_updates_display(self):
        state = self.cpu.get_state()
        state.framebuffer.set_pixel(1, 2, True)
        state.redraw = True
        self.window._present_frame(self.cpu)
        self.assertFalse(state.redraw)
        self.assertEqual(self.window.display_view.pixel_color(1, 2).name(), "#00de00")

    def test_status_shows_beep(self):
        self.cpu.get_state().sound_timer = 3
        self.window._present_frame(self.cpu)
        self.assertIn("BEEP", self.window.status_label.text())

    def test_key_events_reach_keypad(self):
        press = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_W, Qt.KeyboardModifier.NoModifier)
        self.window.keyPressEvent(press)
        self.window._on_tick()
        self.assertTrue(self.cpu.get_state().keypad.is_pressed(0x5))

        release = QKeyEvent(QEvent.Type.KeyRelease, Qt.Key.Key_W, Qt.KeyboardModifier.NoModifier)
        self.window.keyReleaseEvent(release)
        self.window._on_tick()
        self.assertFalse(self.cpu.get_state().keypad.is_pressed(0x5))

    def test_error_stops_emulation(self):
        self.cpu.load_program(bytes([0x00, 0xEE]))  # RET (空スタック)
        scheduler = self.window.get_scheduler()
        self.window.start()
        with mock.patch("retro_chip8.ui.main_window.QMessageBox.critical") as critical, \
             mock.patch.object(scheduler, "tick", side_effect=lambda: scheduler.advance(0.125)):
            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                self.window._on_tick()
        critical.assert_called_once()
        self.assertFalse(scheduler.running)
        # 進めた後のPC(0x202)ではなく、RETを実行したPCが表示される
        self.assertIn("Emulation stopped at PC: 0x0200", out.getvalue())
        self.assertEqual(self.window.status_label.text(), "Stopped at PC 200")

    def test_focus_loss_releases_held_keys(self):
        self.window.show()
        self.window.display_view.setFocus()
        press = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_W, Qt.KeyboardModifier.NoModifier)
        self.window.keyPressEvent(press)
        self.window._on_tick()
        self.assertTrue(self.cpu.get_state().keypad.is_pressed(0x5))

        # 画面ウィジェットがフォーカスを失う（ウィンドウの非アクティブ化も含む）
        QApplication.sendEvent(self.window.display_view, QFocusEvent(QEvent.Type.FocusOut))
        self.window._on_tick()
        self.assertFalse(self.cpu.get_state().keypad.is_pressed(0x5))

if __name__ == '__main__':
    unittest.main()
