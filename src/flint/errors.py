"""Exceptions for callers that want a raised error instead of a status."""


class FlintStatusError(ValueError):
    """Raised when an invalid flint is used where a valid one is required."""

    def __init__(self, flint, operation: str = ""):
        self.flint = flint
        self.status = flint.status
        where = f" in {operation}" if operation else ""
        super().__init__(f"flint is {flint.status.value}{where}")
