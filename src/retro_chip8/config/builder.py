import random
from typing import Optional, Tuple

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.runtime.scheduler import Scheduler, FrameCallback
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいて、CPUとスケジューラを生成・接続し、フォントを導入します。
class SystemBuilder:
    def build_cpu(self, config: EmulatorConfig) -> Chip8Cpu:
        rng = random.Random(config.seed) if config.seed is not None else None
        cpu = Chip8Cpu(rng=rng, stack_limit=config.stack_limit)
        cpu.load_font()
        return cpu

    def build_system(
        self, config: EmulatorConfig, on_frame: Optional[FrameCallback] = None
    ) -> Tuple[Chip8Cpu, Scheduler]:
        cpu = self.build_cpu(config)
        scheduler = Scheduler(
            cpu,
            cpu_hz=config.cpu_hz,
            timer_hz=config.timer_hz,
            frame_hz=config.frame_hz,
            on_frame=on_frame,
            max_frame_time=config.max_frame_time,
        )
        return cpu, scheduler
