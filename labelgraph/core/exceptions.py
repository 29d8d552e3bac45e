"""Custom exception hierarchy."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass


class ContractError(AppError):
    """Raised when a caller violates a precondition of the core.

    This is a defect in the calling code, not a data problem.
    """
    pass


class StructuralError(AppError):
    """Base exception for problems that make a whole document unusable."""
    pass


class MalformedRecordError(StructuralError):
    """Raised when a record cannot be loaded into its entity table."""

    def __init__(self, kind: str, detail: str, original_error: Exception = None):
        super().__init__(f"Malformed {kind} record: {detail}", original_error=original_error)
        self.kind = kind
        self.detail = detail


class DanglingReferenceError(StructuralError):
    """Raised when a record or hierarchy edge points at a missing record."""

    def __init__(
        self,
        kind: str,
        record_id: Optional[int],
        field: str,
        target_kind: str,
        target_id: int,
    ):
        super().__init__(
            f"{kind} {record_id} references missing {target_kind} {target_id} via '{field}'"
        )
        self.kind = kind
        self.record_id = record_id
        self.field = field
        self.target_kind = target_kind
        self.target_id = target_id


class CycleDetected(StructuralError):
    """Raised when a hierarchy that must be acyclic contains a cycle."""

    def __init__(self, kind: str, node_id: int, path: Optional[list] = None):
        path_text = " -> ".join(str(n) for n in path) if path else str(node_id)
        super().__init__(f"Cycle detected in {kind} hierarchy at node {node_id} ({path_text})")
        self.kind = kind
        self.node_id = node_id
        self.path = list(path or [])
