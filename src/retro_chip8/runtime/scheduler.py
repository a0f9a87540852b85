# retro_chip8/runtime/scheduler.py
"""
実行スケジューラ。

経過した実時間をアキュムレータに積み上げ、CPU命令・タイマー減算・フレーム描画の
3つのレートをそれぞれ独立に「追いつき」ループで駆動します。
コアの正しさは実時間に依存せず、ここでの呼び出し回数だけが実時間と結びつきます。
"""
import time
from typing import Callable, NamedTuple, Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu

# @intent:data_structure 1回の advance() で実行された各処理の回数。
class TickResult(NamedTuple):
    cycles: int
    timer_ticks: int
    frames: int

FrameCallback = Callable[[Chip8Cpu], None]

# @intent:responsibility CPU・タイマー・描画を固定/可変レートで駆動するマルチレートスケジューラ。
class Scheduler:
    """
    壁時計アキュムレータ方式のスケジューラ。

    clock は秒単位の単調増加時刻を返す関数で、テストでは差し替え可能です。
    """
    def __init__(
        self,
        cpu: Chip8Cpu,
        cpu_hz: float,
        timer_hz: float = 60.0,
        frame_hz: float = 60.0,
        on_frame: Optional[FrameCallback] = None,
        max_frame_time: float = 0.25,
        clock: Callable[[], float] = time.perf_counter,
    ):
        for name, value in (("cpu_hz", cpu_hz), ("timer_hz", timer_hz), ("frame_hz", frame_hz)):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}.")
        if max_frame_time <= 0:
            raise ValueError(f"max_frame_time must be positive, got {max_frame_time}.")

        self._cpu = cpu
        self._cpu_dt = 1.0 / cpu_hz
        self._timer_dt = 1.0 / timer_hz
        self._frame_dt = 1.0 / frame_hz
        self._on_frame = on_frame
        self._max_frame_time = max_frame_time
        self._clock = clock

        self._cpu_acc = 0.0
        self._timer_acc = 0.0
        self._frame_acc = 0.0
        self._last: Optional[float] = None
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    # @intent:responsibility 停止状態を解除し、経過時間の計測をやり直します。
    def resume(self) -> None:
        self._running = True
        self._last = None

    # @intent:responsibility 経過時間を加算し、各レートの処理を必要回数だけ実行します。
    # @intent:rationale 長時間の停止（ウィンドウのドラッグ等）の後に大量の命令を一度に実行しないよう、
    #                  経過時間は max_frame_time で頭打ちにします。
    def advance(self, elapsed: float) -> TickResult:
        if not self._running:
            return TickResult(0, 0, 0)
        elapsed = min(max(elapsed, 0.0), self._max_frame_time)

        self._cpu_acc += elapsed
        self._timer_acc += elapsed
        self._frame_acc += elapsed

        cycles = 0
        while self._cpu_acc >= self._cpu_dt:
            self._cpu_acc -= self._cpu_dt
            try:
                self._cpu.step()
            except Exception:
                # 例外はドライバ（呼び出し側）へ伝播させ、以降の実行は止める
                self._running = False
                raise
            cycles += 1

        timer_ticks = 0
        while self._timer_acc >= self._timer_dt:
            self._cpu.step_timers()
            self._timer_acc -= self._timer_dt
            timer_ticks += 1

        frames = 0
        while self._frame_acc >= self._frame_dt:
            if self._on_frame:
                self._on_frame(self._cpu)
            self._frame_acc -= self._frame_dt
            frames += 1

        return TickResult(cycles, timer_ticks, frames)

    # @intent:responsibility 前回呼び出しからの実時間を測定して advance() します。
    def tick(self) -> TickResult:
        now = self._clock()
        if self._last is None:
            self._last = now
            return TickResult(0, 0, 0)
        elapsed = now - self._last
        self._last = now
        return self.advance(elapsed)
