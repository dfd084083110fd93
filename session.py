"""
Split session: the one owner of the active split and the saved splits
"""
from __future__ import annotations
import copy
import logging
from typing import Dict, List, Optional

from models import MAX_BILL_AMOUNT, SplitConfiguration, ValidationResult
from computations import (
    add_participant,
    amounts_owed,
    coerce_number,
    load_snapshot,
    percentage_total,
    remove_participant,
    renormalize,
    save_snapshot,
    total_with_tip,
    update_bill_amount,
    update_name,
    update_percentage,
    update_tip_percentage,
    validate,
)
from config import builtin_split, split_to_dict

logger = logging.getLogger(__name__)


class SplitSession:
    """
    Holds the active SplitConfiguration, the in-memory saved splits and the
    per-field messages produced when input had to be coerced.
    State is only ever replaced with values returned by computations.
    """

    def __init__(self, defaults: Optional[SplitConfiguration] = None):
        self._defaults = copy.deepcopy(defaults) if defaults is not None else builtin_split()
        self.config: SplitConfiguration = copy.deepcopy(self._defaults)
        self.history: List[SplitConfiguration] = []
        self.field_errors: Dict[str, str] = {}

    def _set_field_error(self, key: str, message: Optional[str]) -> None:
        if message:
            self.field_errors[key] = message
        else:
            self.field_errors.pop(key, None)

    # ---------- Participants ----------
    def add_participant(self) -> None:
        self.config = add_participant(self.config)
        logger.debug("Added participant; now %d", len(self.config.participants))

    def remove_participant(self, index: int) -> None:
        before = len(self.config.participants)
        self.config = remove_participant(self.config, index)
        if len(self.config.participants) < before:
            # row indices shift, stale per-row messages would point at the wrong person
            self.field_errors = {
                k: v for k, v in self.field_errors.items() if not k.startswith("participants.")
            }
            logger.debug("Removed participant %d; now %d", index, len(self.config.participants))

    def set_name(self, index: int, name: str) -> None:
        self.config = update_name(self.config, index, name)

    def set_percentage(self, index: int, raw) -> None:
        """Set a percentage; renormalization waits for commit_percentages()"""
        if not 0 <= index < len(self.config.participants):
            return
        _, message = coerce_number(raw, 0.0, 100.0, "Percentage")
        self._set_field_error(f"participants.{index}.percentage", message)
        self.config = update_percentage(self.config, index, raw)

    def commit_percentages(self) -> None:
        self.config = renormalize(self.config)

    # ---------- Bill ----------
    def set_bill_amount(self, raw) -> None:
        _, message = coerce_number(raw, 0.0, MAX_BILL_AMOUNT, "Bill amount")
        self._set_field_error("bill_amount", message)
        self.config = update_bill_amount(self.config, raw)

    def set_tip_percentage(self, raw) -> None:
        _, message = coerce_number(raw, 0.0, 100.0, "Tip percentage")
        self._set_field_error("tip_percentage", message)
        self.config = update_tip_percentage(self.config, raw)

    # ---------- Derived ----------
    def total(self) -> float:
        return total_with_tip(self.config)

    def amounts(self) -> List[float]:
        return amounts_owed(self.config)

    def percentage_total(self) -> float:
        return percentage_total(self.config)

    def validate(self) -> ValidationResult:
        return validate(self.config)

    # ---------- Saved splits ----------
    def save(self) -> ValidationResult:
        """Validate and, when valid, append a snapshot of the active split"""
        result = self.validate()
        if not result.is_valid:
            logger.info("Split not saved: %d invalid field(s)", len(result.errors))
            return result
        self.history = save_snapshot(self.history, self.config)
        logger.info("Saved split %d: %s", len(self.history), split_to_dict(self.config))
        return result

    def load(self, index: int) -> None:
        """Replace the active split with a copy of saved split index"""
        try:
            self.config = load_snapshot(self.history, index)
        except LookupError:
            logger.warning("Load failed: no saved split at index %d (have %d)", index, len(self.history))
            raise
        self.field_errors = {}
        logger.info("Loaded split %d", index + 1)

    def reset(self) -> None:
        """Start a new split from defaults; saved splits are kept"""
        self.config = copy.deepcopy(self._defaults)
        self.field_errors = {}
