"""Exception hierarchy shared by the translator and the machine."""


class TapeVMError(Exception):
    """Base class for every error raised by tapevm."""


# ──────────────────────────────────────────────
# Translation
# ──────────────────────────────────────────────

class TranslationError(TapeVMError):
    def __init__(self, message: str, position: int = -1, line: int = 0, col: int = 0):
        self.position = position
        self.line = line
        self.col = col
        super().__init__(f"L{line}:{col}: {message}" if line else message)


class UnmatchedBracket(TranslationError):
    """A ``]`` with no open loop, or a ``[`` never closed."""
    def __init__(self, symbol: str, position: int, line: int, col: int):
        self.symbol = symbol
        what = "closing" if symbol == "]" else "opening"
        super().__init__(f"unmatched {what} bracket '{symbol}'", position, line, col)


# ──────────────────────────────────────────────
# Execution
# ──────────────────────────────────────────────

class ExecutionError(TapeVMError):
    def __init__(self, message: str, ip: int):
        self.ip = ip
        super().__init__(f"ip={ip:04d}: {message}")


class PointerUnderflow(ExecutionError):
    def __init__(self, ip: int, cursor: int, offset: int):
        self.cursor = cursor
        self.offset = offset
        super().__init__(f"pointer underflow (cursor {cursor} moved by {offset})", ip)


class StepBudgetExceeded(ExecutionError):
    def __init__(self, ip: int, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"exceeded step budget of {max_steps}", ip)
