"""Exceptions raised by the CHIP-8 interpreter core."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for interpreter failures."""


class IllegalOpcodeError(CPUError):
    """Raised in strict mode when an instruction word has no handler."""


class StackFault(CPUError):
    """Raised when a call overflows or a return underflows the call stack."""
