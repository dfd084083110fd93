"""
Data models for Bill Splitter application
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List


MIN_PARTICIPANTS = 2
MAX_BILL_AMOUNT = 1e12


@dataclass
class Participant:
    """One person sharing the bill"""
    name: str
    percentage: float  # 0..100


@dataclass
class SplitConfiguration:
    """Complete set of inputs describing one bill-splitting scenario"""
    bill_amount: float
    tip_percentage: float  # 0..100, applied on top of bill_amount
    participants: List[Participant]


@dataclass
class ValidationResult:
    """Per-field validation messages, keyed by field path (e.g. participants.0.name)"""
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class SnapshotNotFoundError(LookupError):
    """Raised when a saved split index does not exist"""

    def __init__(self, index: int):
        super().__init__(f"Saved split at index {index} not found")
        self.index = index
