# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every error raised by the Huffman modules."""


class HuffmanIOError(HuffmanError, OSError):
    """The input stream failed while it was being tallied."""


class UninitializedError(HuffmanError, RuntimeError):
    """A codec operation was called before any code was built."""

    def __init__(self, operation):
        super().__init__(f"{operation}() called before the code was built")
        self.operation = operation


class InvalidBitError(HuffmanError, ValueError):
    def __init__(self, char, position):
        super().__init__(f"invalid bit {char!r} at position {position}")
        self.char = char
        self.position = position


class InvalidSymbolError(HuffmanError, ValueError):
    def __init__(self, symbol):
        super().__init__(f"symbol {symbol!r} is not a byte value (0..255)")
        self.symbol = symbol
