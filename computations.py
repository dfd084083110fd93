"""
Business logic and computations for Bill Splitter

Every function takes a SplitConfiguration (or a saved-splits list) and returns
a new value; the inputs are never mutated.
"""
from __future__ import annotations
import copy
import logging
from typing import List, Optional, Tuple

from models import (
    MAX_BILL_AMOUNT,
    MIN_PARTICIPANTS,
    Participant,
    SnapshotNotFoundError,
    SplitConfiguration,
    ValidationResult,
)
from utils import clamp, round_money, safe_float

logger = logging.getLogger(__name__)

PERCENT_TOLERANCE = 1e-9


def coerce_number(raw, low: float, high: Optional[float], label: str) -> Tuple[float, Optional[str]]:
    """
    Coerce raw input into [low, high].
    Returns (value, message); message is None when raw was accepted as-is.
    Non-numeric input becomes 0, below-range input becomes 0, above-range
    input is clamped to high.
    """
    v = safe_float(raw, None)
    if v is None:
        return 0.0, f"{label} must be a number"
    if v < low:
        return 0.0, f"{label} cannot be below {low:g}"
    if high is not None and v > high:
        return float(high), f"{label} cannot be above {high:g}"
    return v, None


def percentage_total(config: SplitConfiguration) -> float:
    """Sum of all participants' percentages"""
    return sum(p.percentage for p in config.participants)


def renormalize(config: SplitConfiguration) -> SplitConfiguration:
    """
    Make percentages sum to 100 by adjusting only the last participant:
    last = max(0, 100 - sum of the others). All other entries are untouched.
    """
    out = copy.deepcopy(config)
    if not out.participants:
        return out
    total = percentage_total(out)
    if abs(total - 100) > PERCENT_TOLERANCE:
        last = out.participants[-1]
        others = total - last.percentage
        last.percentage = max(0.0, 100.0 - others)
        logger.debug("Renormalized: total was %s, last participant now %s", total, last.percentage)
    return out


def add_participant(config: SplitConfiguration) -> SplitConfiguration:
    """Append 'Person <n+1>' with 0% and renormalize"""
    out = copy.deepcopy(config)
    out.participants.append(Participant(f"Person {len(out.participants) + 1}", 0.0))
    return renormalize(out)


def remove_participant(config: SplitConfiguration, index: int) -> SplitConfiguration:
    """Remove participant at index and renormalize; no-op below the 2-person minimum"""
    if len(config.participants) <= MIN_PARTICIPANTS:
        logger.debug("Remove ignored: at least %d participants required", MIN_PARTICIPANTS)
        return config
    if not 0 <= index < len(config.participants):
        logger.debug("Remove ignored: no participant at index %d", index)
        return config
    out = copy.deepcopy(config)
    del out.participants[index]
    return renormalize(out)


def update_percentage(config: SplitConfiguration, index: int, value) -> SplitConfiguration:
    """Set participant percentage (clamped to 0..100). Does not renormalize."""
    if not 0 <= index < len(config.participants):
        return config
    out = copy.deepcopy(config)
    out.participants[index].percentage = clamp(safe_float(value, 0.0), 0.0, 100.0)
    return out


def update_name(config: SplitConfiguration, index: int, name: str) -> SplitConfiguration:
    """Set participant name as typed; empty names are reported by validate()"""
    if not 0 <= index < len(config.participants):
        return config
    out = copy.deepcopy(config)
    out.participants[index].name = name
    return out


def update_bill_amount(config: SplitConfiguration, value) -> SplitConfiguration:
    """Set bill amount; invalid or negative input becomes 0"""
    amount, _ = coerce_number(value, 0.0, MAX_BILL_AMOUNT, "Bill amount")
    out = copy.deepcopy(config)
    out.bill_amount = amount
    return out


def update_tip_percentage(config: SplitConfiguration, value) -> SplitConfiguration:
    """Set tip percentage, clamped to 0..100"""
    tip, _ = coerce_number(value, 0.0, 100.0, "Tip percentage")
    out = copy.deepcopy(config)
    out.tip_percentage = tip
    return out


def total_with_tip(config: SplitConfiguration) -> float:
    """Bill amount including tip"""
    return float(config.bill_amount) * (1.0 + float(config.tip_percentage) / 100.0)


def amount_owed(config: SplitConfiguration, index: int) -> float:
    """Amount participant at index owes, rounded to 2 decimals"""
    p = config.participants[index]
    return round_money(total_with_tip(config) * float(p.percentage) / 100.0)


def amounts_owed(config: SplitConfiguration) -> List[float]:
    """amount_owed for every participant, in order"""
    return [amount_owed(config, i) for i in range(len(config.participants))]


def validate(config: SplitConfiguration) -> ValidationResult:
    """Check all fields; returns per-field messages and never mutates"""
    result = ValidationResult()
    errors = result.errors

    if config.bill_amount < 0:
        errors["bill_amount"] = "Bill amount must be positive"
    if not 0 <= config.tip_percentage <= 100:
        errors["tip_percentage"] = "Tip percentage must be between 0 and 100"
    if len(config.participants) < MIN_PARTICIPANTS:
        errors["participants"] = "At least two people are required"

    for i, p in enumerate(config.participants):
        if not p.name.strip():
            errors[f"participants.{i}.name"] = "Name is required"
        if not 0 <= p.percentage <= 100:
            errors[f"participants.{i}.percentage"] = "Percentage must be between 0 and 100"

    return result


def save_snapshot(history: List[SplitConfiguration], config: SplitConfiguration) -> List[SplitConfiguration]:
    """Return a new history with a deep copy of config appended"""
    return list(history) + [copy.deepcopy(config)]


def load_snapshot(history: List[SplitConfiguration], index: int) -> SplitConfiguration:
    """Return a deep copy of history[index]; raises SnapshotNotFoundError if out of range"""
    if not 0 <= index < len(history):
        raise SnapshotNotFoundError(index)
    return copy.deepcopy(history[index])
