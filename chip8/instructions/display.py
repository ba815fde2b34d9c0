"""CHIP-8 display operations."""

from chip8.constants import DISPLAY_SIZE, DISPLAY_START, MEMORY_SIZE
from chip8.decode import DecodedInstruction
from chip8.display import draw_sprite
from chip8.errors import InvalidAddress
from chip8.logging import get_logger
from chip8.state import MachineState, framebuffer

logger = get_logger("chip8.instructions")


def execute_display(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])
    start = int(state.I)
    if start + instruction.n > MEMORY_SIZE:
        raise InvalidAddress(start + instruction.n - 1)

    sprite = [int(b) for b in state.memory[start:start + instruction.n]]
    logger.debug(f"Draw a 8x{instruction.n} sprite at ({sprite_x}, {sprite_y}): {sprite}")

    new_framebuffer, collision = draw_sprite(framebuffer(state), sprite, sprite_x, sprite_y)
    return state.replace(
        memory=state.memory.at[DISPLAY_START:DISPLAY_START + DISPLAY_SIZE].set(new_framebuffer),
        V=state.V.at[0xF].set(int(collision)),
    )
