"""Fatal CHIP-8 execution errors.

None of these are recovered from inside the engine; they propagate to the
driver, which stops the run and reports them.
"""


class Chip8Error(Exception):
    """Base class for every fatal emulator error."""


class DecodeError(Chip8Error):
    """Raised when a fetched word matches no known instruction."""

    def __init__(self, address: int, msb: int, lsb: int):
        self.address = address
        self.msb = msb
        self.lsb = lsb
        super().__init__(
            f"Could not decode 0x{msb:02X}{lsb:02X} at address 0x{address:03X}"
        )

    @property
    def word(self) -> int:
        return (self.msb << 8) | self.lsb


class StackOverflow(Chip8Error):
    """Raised by a CALL when all stack slots are in use."""

    def __init__(self, address: int, depth: int):
        self.address = address
        self.depth = depth
        super().__init__(
            f"Stack overflow calling 0x{address:03X} (depth {depth})"
        )


class StackUnderflow(Chip8Error):
    """Raised by a RETURN with an empty stack."""

    def __init__(self):
        super().__init__("Return with an empty call stack")


class AddressOverflow(Chip8Error):
    """Raised at load time when a program does not fit in memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"Program of {size} bytes does not fit in the {capacity} bytes available"
        )


class MemoryAccessError(Chip8Error):
    """Raised when an instruction touches memory outside the address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        super().__init__(
            f"Memory access of {length} byte(s) at 0x{address:04X} is out of bounds"
        )
