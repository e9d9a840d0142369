"""Service module exports."""

from . import debts, interest, progress

__all__ = ["debts", "interest", "progress"]
