"""
Configuration and defaults for Bill Splitter
"""
from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict
from typing import Optional

from computations import coerce_number, renormalize
from models import MAX_BILL_AMOUNT, MIN_PARTICIPANTS, Participant, SplitConfiguration
from utils import app_dir, clamp, safe_float

DEFAULT_TIP_PERCENTAGE = 15.0
LOG_LEVEL_ENV = "BILL_SPLITTER_LOG_LEVEL"

logger = logging.getLogger(__name__)


def load_settings(path: Optional[str] = None) -> dict:
    """Load optional settings JSON; missing file gives empty settings"""
    if path is None:
        path = os.path.join(app_dir(), "settings.json")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as ex:
        logger.warning("Ignoring malformed settings file %s: %s", path, ex)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object", path)
        return {}
    return data


def builtin_split() -> SplitConfiguration:
    """Two people, 50/50, no bill yet"""
    return SplitConfiguration(
        bill_amount=0.0,
        tip_percentage=DEFAULT_TIP_PERCENTAGE,
        participants=[
            Participant("Person 1", 50.0),
            Participant("Person 2", 50.0),
        ],
    )


def split_to_dict(config: SplitConfiguration) -> dict:
    """Convert SplitConfiguration to a plain dict"""
    return {
        "bill_amount": config.bill_amount,
        "tip_percentage": config.tip_percentage,
        "participants": [asdict(p) for p in config.participants],
    }


def dict_to_split(d: dict) -> SplitConfiguration:
    """
    Convert dict to SplitConfiguration, coercing numbers the same way the form does.
    Participants may be given as {"name", "percentage"} objects or bare names
    (bare names share 100% equally, remainder on the last one).
    """
    bill, _ = coerce_number(d.get("bill_amount", 0.0), 0.0, MAX_BILL_AMOUNT, "Bill amount")
    tip, _ = coerce_number(d.get("tip_percentage", DEFAULT_TIP_PERCENTAGE), 0.0, 100.0, "Tip percentage")

    raw_people = d.get("participants", [])
    if not isinstance(raw_people, list):
        logger.warning("Ignoring participants: expected a list, got %s", type(raw_people).__name__)
        raw_people = []
    participants = []
    for i, p in enumerate(raw_people):
        if isinstance(p, dict):
            name = str(p.get("name", f"Person {i + 1}"))
            pct = clamp(safe_float(p.get("percentage"), 0.0), 0.0, 100.0)
        else:
            name = str(p)
            pct = float(100 // len(raw_people))
        participants.append(Participant(name, pct))

    return renormalize(SplitConfiguration(bill, tip, participants))


def get_default_split(settings: Optional[dict] = None) -> SplitConfiguration:
    """Starting configuration: settings' default_split if usable, else the built-in 50/50"""
    settings = settings or {}
    d = settings.get("default_split")
    if not isinstance(d, dict):
        return builtin_split()
    split = dict_to_split(d)
    if len(split.participants) < MIN_PARTICIPANTS:
        logger.warning("default_split needs at least %d participants; using built-in default", MIN_PARTICIPANTS)
        return builtin_split()
    return split


def configure_logging(settings: Optional[dict] = None) -> None:
    """Set up root logging; level from env, then settings, then INFO"""
    settings = settings or {}
    level_name = os.environ.get(LOG_LEVEL_ENV) or settings.get("log_level") or "INFO"
    level = getattr(logging, str(level_name).upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
