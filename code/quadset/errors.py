from __future__ import annotations


class QuadSetError(Exception):
    pass


class InvalidNodeOperation(QuadSetError):
    """Raised when a node accessor is used on the wrong node kind."""

    def __init__(self, operation: str, kind: str) -> None:
        super().__init__(f"{operation} is not valid on a {kind} node")
        self.operation = operation
        self.kind = kind
