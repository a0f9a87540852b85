# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.core.operation import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import ExecutionContext
from .maps import DECODE_MAP, EXECUTE_MAP, resolve_pattern

UNKNOWN = "UNKNOWN"

# @intent:responsibility CHIP-8のオペコードをデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    16bitオペコードから各フィールドを取り出し、Operationオブジェクトを返します。
    未定義のオペコードはニーモニック"UNKNOWN"として返され、実行時には無視されます。
    """
    fields = {
        "nnn": opcode & 0x0FFF,
        "nn": opcode & 0x00FF,
        "n": opcode & 0x000F,
        "x": (opcode & 0x0F00) >> 8,
        "y": (opcode & 0x00F0) >> 4,
    }
    pattern = resolve_pattern(opcode)
    if pattern is None:
        return Operation(opcode, UNKNOWN, UNKNOWN, [f"${opcode:04X}"], **fields)

    mnemonic, operand_formats = DECODE_MAP[pattern]
    operands = [fmt.format(**fields) for fmt in operand_formats]
    return Operation(opcode, pattern, mnemonic, operands, **fields)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, state: Chip8CpuState, ctx: ExecutionContext) -> None:
    """
    デコードされた命令を実行し、状態を変更します。実行関数の無い命令は何もしません。
    """
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor:
        executor(state, operation, ctx)
