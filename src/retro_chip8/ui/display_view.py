# src/retro_chip8/ui/display_view.py
"""
フレームバッファを拡大表示するウィジェット。
"""
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QPainter, QColor, QImage
from PySide6.QtCore import QSize, Qt, Signal

from retro_chip8.transport.memory import Framebuffer

# @intent:responsibility 64x32のフレームバッファを指定倍率・指定色で描画します。
class DisplayView(QWidget):
    """
    フレームバッファの内容をQImageに写し取り、ウィジェット全体に引き伸ばして描画します。
    """
    # キーボードフォーカスを失った時に発行される
    focus_lost = Signal()

    def __init__(self, width: int, height: int, scale: int = 12,
                 foreground: str = "#00DE00", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._width = width
        self._height = height
        self._scale = scale
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._image = QImage(width, height, QImage.Format.Format_RGB32)
        self._image.fill(self._background)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setFocusPolicy(Qt.StrongFocus)

    def sizeHint(self) -> QSize:
        return QSize(self._width * self._scale, self._height * self._scale)

    # @intent:responsibility フレームバッファの内容を内部画像へ反映し、再描画を要求します。
    def update_frame(self, framebuffer: Framebuffer) -> None:
        on = self._foreground.rgb()
        off = self._background.rgb()
        for y, row in enumerate(framebuffer.rows()):
            for x, pixel in enumerate(row):
                self._image.setPixel(x, y, on if pixel else off)
        self.update()

    def pixel_color(self, x: int, y: int) -> QColor:
        return QColor(self._image.pixel(x, y))

    def focusOutEvent(self, event):
        super().focusOutEvent(event)
        self.focus_lost.emit()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(self.rect(), self._image)
        painter.end()
