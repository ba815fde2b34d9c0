"""CHIP-8 call stack operations."""

from chip8.constants import ADDRESS_MASK
from chip8.errors import StackOverflow, StackUnderflow
from chip8.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push return address onto stack."""
    if len(stack.frames) >= stack.depth:
        raise StackOverflow(stack.depth)
    return stack.replace(frames=stack.frames + (int(address) & ADDRESS_MASK,))


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop return address from stack."""
    if not stack.frames:
        raise StackUnderflow()
    return stack.replace(frames=stack.frames[:-1]), stack.frames[-1]
