import sys
import unittest
from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QSize

from retro_chip8.transport.memory import Framebuffer
from retro_chip8.ui.display_view import DisplayView

class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_size_hint_uses_scale(self):
        view = DisplayView(64, 32, scale=10)
        self.assertEqual(view.sizeHint(), QSize(640, 320))

    def test_initially_background(self):
        view = DisplayView(64, 32, background="#102030")
        self.assertEqual(view.pixel_color(0, 0).name(), "#102030")
        self.assertEqual(view.pixel_color(63, 31).name(), "#102030")

    def test_update_frame(self):
        view = DisplayView(64, 32, foreground="#ffffff", background="#000000")
        fb = Framebuffer(64, 32)
        fb.set_pixel(5, 6, True)
        fb.set_pixel(63, 31, True)
        view.update_frame(fb)

        self.assertEqual(view.pixel_color(5, 6).name(), "#ffffff")
        self.assertEqual(view.pixel_color(63, 31).name(), "#ffffff")
        self.assertEqual(view.pixel_color(6, 6).name(), "#000000")

        # 消灯したピクセルは背景色に戻る
        fb.set_pixel(5, 6, False)
        view.update_frame(fb)
        self.assertEqual(view.pixel_color(5, 6).name(), "#000000")

    def test_paint_does_not_fail(self):
        view = DisplayView(64, 32, scale=2)
        view.resize(view.sizeHint())
        image = view.grab()
        self.assertFalse(image.isNull())

if __name__ == '__main__':
    unittest.main()
