"""
Exception taxonomy for the proof kernel.

Parse and instantiation errors are raised to the caller. The CheckError
family is raised inside the proof checker and always caught there: each one
becomes a per-line diagnostic in the CheckResult instead of aborting the run.
"""

from __future__ import annotations
from typing import Optional


class KernelError(Exception):
    """Base class for proofkernel exceptions."""


class ParseError(KernelError):
    """Malformed formula text. ``position`` is the 0-based offending offset."""

    def __init__(self, message: str, position: Optional[int] = None):
        self.message = message
        self.position = position
        if position is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} at position {position}")


class MissingInstantiation(KernelError):
    """A schema metavariable has no binding in the substitution."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"missing instantiation for {name}")


class UnboundVariable(KernelError):
    """A valuation does not assign a variable that occurs in the formula."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"valuation has no value for {name}")


class CodecError(KernelError):
    """Malformed step, justification or exercise payload."""


# =========================
# Per-line proof diagnostics
# =========================

class CheckError(KernelError):
    pass


class SchemaMismatch(CheckError):
    pass


class RuleViolation(CheckError):
    pass


class GoalMismatch(CheckError):
    pass


class LineReferenceError(CheckError):
    """A cited line does not exist yet or holds no formula.

    Reported with kind "ReferenceError"; the class name keeps clear of the
    builtin.
    """
    kind = "ReferenceError"
