# tests/arch/chip8/test_instructions_display.py
"""
画面命令（CLS, DRW）の単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu

# @intent:test_suite スプライト描画のXOR・折り返し・衝突検出と、再描画フラグの扱いを検証します。

@pytest.fixture
def cpu():
    cpu = Chip8Cpu()
    cpu.load_font()
    return cpu

def execute(cpu, opcode, current_pc=0x200):
    state = cpu.get_state()
    state.memory.write(current_pc, opcode >> 8)
    state.memory.write(current_pc + 1, opcode & 0xFF)
    state.pc = current_pc
    cpu.step()

def lit_pixels(state):
    fb = state.framebuffer
    return {(x, y) for y in range(fb.height) for x in range(fb.width) if fb.is_on(x, y)}

def test_cls_clears_and_sets_redraw(cpu):
    state = cpu.get_state()
    state.framebuffer.set_pixel(10, 10, True)
    execute(cpu, 0x00E0)
    assert state.framebuffer.count_lit() == 0
    assert state.redraw is True

def test_draw_single_row(cpu):
    state = cpu.get_state()
    state.memory.write(0x300, 0b10100001)
    state.i = 0x300
    state.v[0] = 4
    state.v[1] = 2
    execute(cpu, 0xD011)
    assert lit_pixels(state) == {(4, 2), (6, 2), (11, 2)}
    assert state.v[0xF] == 0
    assert state.redraw is True

def test_draw_font_glyph(cpu):
    state = cpu.get_state()
    state.v[2] = 0x0
    execute(cpu, 0xF229) # I = glyph "0"
    state.v[0] = 0
    state.v[1] = 0
    execute(cpu, 0xD015)
    expected_rows = ["1111", "1001", "1001", "1001", "1111"]
    for y, row in enumerate(expected_rows):
        for x, bit in enumerate(row):
            assert state.framebuffer.is_on(x, y) == (bit == "1")

# @intent:test_case_cls_then_draw CLS後の描画は描いたピクセル以外を消灯のままにすることを検証します。
def test_cls_then_draw(cpu):
    state = cpu.get_state()
    for x in range(64):
        state.framebuffer.set_pixel(x, 31, True)
    execute(cpu, 0x00E0)
    state.redraw = False

    state.memory.write(0x300, 0x80)
    state.i = 0x300
    state.v[0] = 20
    state.v[1] = 5
    execute(cpu, 0xD011)
    assert state.redraw is True
    assert lit_pixels(state) == {(20, 5)}

# @intent:test_case_collision 同じスプライトを2回描くと元に戻り、2回目でVF=1となることを検証します。
def test_draw_twice_restores_and_reports_collision(cpu):
    state = cpu.get_state()
    state.memory.load(0x300, bytes([0x3C, 0xC3, 0xFF]))
    state.i = 0x300
    state.v[0] = 30
    state.v[1] = 10
    state.framebuffer.set_pixel(0, 0, True)
    before = state.framebuffer.to_bytes()

    execute(cpu, 0xD013)
    assert state.v[0xF] == 0
    assert state.framebuffer.to_bytes() != before

    execute(cpu, 0xD013)
    assert state.v[0xF] == 1
    assert state.framebuffer.to_bytes() == before

def test_vf_reset_before_draw(cpu):
    state = cpu.get_state()
    state.memory.write(0x300, 0x80)
    state.i = 0x300
    state.v[0xF] = 1
    state.v[0] = 0
    state.v[1] = 0
    execute(cpu, 0xD011)
    assert state.v[0xF] == 0

def test_coordinates_taken_from_vf_before_reset(cpu):
    state = cpu.get_state()
    state.memory.write(0x300, 0x80)
    state.i = 0x300
    state.v[0xF] = 9
    state.v[1] = 3
    execute(cpu, 0xDF11)
    assert lit_pixels(state) == {(9, 3)}

def test_origin_is_taken_modulo_screen(cpu):
    state = cpu.get_state()
    state.memory.write(0x300, 0x80)
    state.i = 0x300
    state.v[0] = 64 + 5
    state.v[1] = 32 + 7
    execute(cpu, 0xD011)
    assert lit_pixels(state) == {(5, 7)}

# @intent:test_case_wrap 画面端をまたぐスプライトはピクセルごとに反対側へ折り返すことを検証します。
def test_sprite_wraps_horizontally_and_vertically(cpu):
    state = cpu.get_state()
    state.memory.load(0x300, bytes([0xFF, 0x81]))
    state.i = 0x300
    state.v[0] = 60
    state.v[1] = 31
    execute(cpu, 0xD012)
    expected = {(x % 64, 31) for x in range(60, 68)} | {(60, 0), (67 % 64, 0)}
    assert lit_pixels(state) == expected

def test_collision_on_partial_overlap_only(cpu):
    state = cpu.get_state()
    state.framebuffer.set_pixel(3, 0, True)
    state.memory.write(0x300, 0b00010000) # x=3
    state.i = 0x300
    state.v[0] = 0
    state.v[1] = 0
    execute(cpu, 0xD011)
    assert state.v[0xF] == 1
    assert not state.framebuffer.is_on(3, 0)

def test_zero_height_draw_sets_redraw(cpu):
    state = cpu.get_state()
    execute(cpu, 0xD010)
    assert state.redraw is True
    assert state.framebuffer.count_lit() == 0

def test_sprite_rows_wrap_memory(cpu):
    state = cpu.get_state()
    state.memory.write(0xFFF, 0x80)
    state.memory.write(0x000, 0x40)
    state.i = 0xFFF
    state.v[0] = 0
    state.v[1] = 0
    execute(cpu, 0xD012)
    assert lit_pixels(state) == {(0, 0), (1, 1)}

def test_framebuffer_stays_binary(cpu):
    state = cpu.get_state()
    state.memory.load(0x300, bytes(range(0x30, 0x3F)))
    state.i = 0x300
    for x in range(0, 64, 13):
        state.v[0] = x
        state.v[1] = x // 2
        execute(cpu, 0xD01F)
    assert set(state.framebuffer.to_bytes()) <= {0x00, 0xFF}
