import unittest

from retro_chip8.arch.chip8.cpu import Chip8Cpu

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.cpu.load_font()
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x200):
        self.state.memory.write(current_pc, opcode >> 8)
        self.state.memory.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        self.cpu.step()

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timers(self):
        self.state.v[2] = 0x3C
        self._execute(0xF215) # LD DT, V2
        self.assertEqual(self.state.delay_timer, 0x3C)
        self._execute(0xF218) # LD ST, V2
        self.assertEqual(self.state.sound_timer, 0x3C)

        self.state.delay_timer = 0x11
        self._execute(0xF707) # LD V7, DT
        self.assertEqual(self.state.v[7], 0x11)

    def test_add_i_vx(self):
        self.state.i = 0x100
        self.state.v[1] = 0x20
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x120)

    def test_add_i_vx_does_not_touch_vf(self):
        self.state.i = 0xFFF
        self.state.v[1] = 0x01
        self.state.v[0xF] = 0x77
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x1000)
        self.assertEqual(self.state.v[0xF], 0x77)

    # @intent:test_case_wrap Iが16bit境界を越えても、メモリアクセスは4096で折り返されることを検証します。
    def test_add_i_vx_wraps_and_memory_access_is_masked(self):
        self.state.i = 0xFFFF
        self.state.v[1] = 2
        self._execute(0xF11E)
        self.assertEqual(self.state.i, 0x0001)

        self.state.v[0] = 0x99
        self._execute(0xF055) # LD [I], V0
        self.assertEqual(self.state.memory.read((0xFFFF + 2) % 4096), 0x99)

    def test_ld_f_vx(self):
        for digit in range(16):
            self.state.v[4] = digit
            self._execute(0xF429)
            self.assertEqual(self.state.i, 0x050 + digit * 5)

        # 文字"A"のグリフを指していること
        self.state.v[4] = 0xA
        self._execute(0xF429)
        glyph = self.state.memory.dump(self.state.i, 5)
        self.assertEqual(glyph, bytes([0xF0, 0x90, 0xF0, 0x90, 0x90]))

    def test_ld_b_vx(self):
        self.state.i = 0x300
        self.state.v[6] = 234
        self._execute(0xF633)
        self.assertEqual(self.state.memory.dump(0x300, 3), bytes([2, 3, 4]))

        self.state.v[6] = 7
        self._execute(0xF633)
        self.assertEqual(self.state.memory.dump(0x300, 3), bytes([0, 0, 7]))

        self.state.v[6] = 255
        self._execute(0xF633)
        self.assertEqual(self.state.memory.dump(0x300, 3), bytes([2, 5, 5]))
        self.assertEqual(self.state.i, 0x300)

    def test_ld_b_vx_wraps_at_end_of_memory(self):
        self.state.i = 0xFFF
        self.state.v[0] = 123
        self._execute(0xF033)
        self.assertEqual(self.state.memory.read(0xFFF), 1)
        self.assertEqual(self.state.memory.read(0x000), 2)
        self.assertEqual(self.state.memory.read(0x001), 3)

    def test_store_registers(self):
        self.state.i = 0x300
        self.state.v = [0x10 + idx for idx in range(16)]
        self._execute(0xF355) # V0..V3
        self.assertEqual(self.state.memory.dump(0x300, 5), bytes([0x10, 0x11, 0x12, 0x13, 0x00]))
        self.assertEqual(self.state.i, 0x300) # Iは変化しない

    def test_load_registers(self):
        self.state.i = 0x300
        self.state.memory.load(0x300, bytes([1, 2, 3, 4, 5]))
        self._execute(0xF365) # V0..V3
        self.assertEqual(self.state.v[:5], [1, 2, 3, 4, 0])
        self.assertEqual(self.state.i, 0x300)

    # @intent:test_case_roundtrip 全てのxについて、Fx55で保存しFx65で読み戻すと元の値が再現されることを検証します。
    def test_store_load_round_trip(self):
        for x in range(16):
            original = [(x * 17 + idx * 31) & 0xFF for idx in range(16)]
            self.state.v = list(original)
            self.state.i = 0x400
            self._execute(0xF055 | (x << 8))

            self.state.v = [0] * 16
            self._execute(0xF065 | (x << 8))
            self.assertEqual(self.state.v[:x + 1], original[:x + 1])
            self.assertEqual(self.state.v[x + 1:], [0] * (15 - x))

if __name__ == '__main__':
    unittest.main()
