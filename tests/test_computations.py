import pytest

from computations import (
    add_participant,
    amount_owed,
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
from models import MAX_BILL_AMOUNT, Participant, SnapshotNotFoundError, SplitConfiguration


def make_split(bill=100.0, tip=10.0, pcts=(50, 50)):
    people = [Participant(f"P{i + 1}", float(p)) for i, p in enumerate(pcts)]
    return SplitConfiguration(bill_amount=bill, tip_percentage=tip, participants=people)


def test_two_people_fifty_fifty_with_tip():
    cfg = make_split()
    assert amount_owed(cfg, 0) == 55.00
    assert amount_owed(cfg, 1) == 55.00


def test_amounts_sum_to_total_with_tip():
    cfg = make_split(bill=100, tip=15, pcts=(33, 33, 34))
    assert sum(amounts_owed(cfg)) == pytest.approx(total_with_tip(cfg), abs=0.01)


def test_amount_owed_rounds_half_up():
    # 0.125 * 100 / 100 -> 0.125 -> 0.13
    cfg = make_split(bill=0.25, tip=0, pcts=(50, 50))
    assert amount_owed(cfg, 0) == 0.13


def test_add_participant_gets_zero_and_sum_stays_100():
    cfg = add_participant(make_split())
    assert [p.percentage for p in cfg.participants] == [50, 50, 0]
    assert cfg.participants[2].name == "Person 3"
    assert percentage_total(cfg) == 100


def test_add_participant_does_not_mutate_input():
    cfg = make_split()
    add_participant(cfg)
    assert len(cfg.participants) == 2


def test_remove_participant_keeps_minimum_of_two():
    cfg = make_split()
    out = remove_participant(cfg, 0)
    assert out == cfg
    assert len(out.participants) == 2


def test_remove_participant_pushes_deficit_onto_last():
    cfg = make_split(pcts=(40, 30, 30))
    out = remove_participant(cfg, 1)
    assert [p.name for p in out.participants] == ["P1", "P3"]
    assert [p.percentage for p in out.participants] == [40, 60]


def test_remove_last_participant_renormalizes_new_last():
    cfg = make_split(pcts=(50, 30, 20))
    out = remove_participant(cfg, 2)
    assert [p.percentage for p in out.participants] == [50, 50]


def test_remove_participant_out_of_range_is_noop():
    cfg = make_split(pcts=(50, 30, 20))
    assert remove_participant(cfg, 7) == cfg
    assert remove_participant(cfg, -1) == cfg


def test_update_percentage_clamps_and_defers_renormalize():
    cfg = update_percentage(make_split(), 0, 70)
    assert [p.percentage for p in cfg.participants] == [70, 50]
    assert update_percentage(cfg, 0, 150).participants[0].percentage == 100
    assert update_percentage(cfg, 0, -5).participants[0].percentage == 0
    assert update_percentage(cfg, 0, "abc").participants[0].percentage == 0


def test_renormalize_adjusts_only_last():
    cfg = renormalize(update_percentage(make_split(pcts=(30, 30, 40)), 0, 50))
    assert [p.percentage for p in cfg.participants] == [50, 30, 20]
    assert percentage_total(cfg) == 100


def test_renormalize_floors_last_at_zero():
    cfg = renormalize(make_split(pcts=(80, 40, 10)))
    assert [p.percentage for p in cfg.participants] == [80, 40, 0]
    # the others already exceed 100, so the sum cannot be fixed from the last entry
    assert percentage_total(cfg) == 120


def test_renormalize_undoes_edit_of_last_participant():
    cfg = update_percentage(make_split(), 1, 30)
    assert percentage_total(cfg) == 80
    assert renormalize(cfg).participants[1].percentage == 50


def test_renormalize_leaves_balanced_split_alone():
    cfg = make_split(pcts=(20, 30, 50))
    assert renormalize(cfg) == cfg


def test_update_name():
    cfg = update_name(make_split(), 1, "Bob")
    assert cfg.participants[1].name == "Bob"


def test_update_bill_and_tip_coerce():
    cfg = make_split()
    assert update_bill_amount(cfg, "12.5").bill_amount == 12.5
    assert update_bill_amount(cfg, "twelve").bill_amount == 0
    assert update_bill_amount(cfg, -3).bill_amount == 0
    assert update_tip_percentage(cfg, 120).tip_percentage == 100
    assert update_tip_percentage(cfg, "x").tip_percentage == 0


def test_coerce_number_messages():
    assert coerce_number("5", 0, 100, "Tip") == (5.0, None)
    assert coerce_number("", 0, 100, "Tip") == (0.0, "Tip must be a number")
    assert coerce_number("-1", 0, None, "Bill amount") == (0.0, "Bill amount cannot be below 0")
    assert coerce_number(101, 0, 100, "Tip") == (100.0, "Tip cannot be above 100")


def test_validate_ok():
    assert validate(make_split()).is_valid


def test_validate_reports_each_field():
    cfg = SplitConfiguration(
        bill_amount=-1,
        tip_percentage=120,
        participants=[Participant("  ", 150)],
    )
    errors = validate(cfg).errors
    assert errors == {
        "bill_amount": "Bill amount must be positive",
        "tip_percentage": "Tip percentage must be between 0 and 100",
        "participants": "At least two people are required",
        "participants.0.name": "Name is required",
        "participants.0.percentage": "Percentage must be between 0 and 100",
    }
    # unchanged
    assert cfg.bill_amount == -1


def test_save_then_load_round_trip():
    cfg = make_split(pcts=(25, 75))
    history = save_snapshot([], cfg)
    loaded = load_snapshot(history, len(history) - 1)
    assert loaded == cfg
    assert loaded is not history[-1]


def test_snapshot_is_independent_of_later_edits():
    cfg = make_split()
    history = save_snapshot([], cfg)
    cfg.participants[0].name = "changed"
    loaded = load_snapshot(history, 0)
    loaded.participants[1].percentage = 1
    assert history[0].participants[0].name == "P1"
    assert history[0].participants[1].percentage == 50


def test_save_snapshot_returns_new_list():
    history = []
    out = save_snapshot(history, make_split())
    assert history == []
    assert len(out) == 1


@pytest.mark.parametrize("index", [-1, 1, 5])
def test_load_snapshot_out_of_range(index):
    history = save_snapshot([], make_split())
    with pytest.raises(SnapshotNotFoundError, match="not found"):
        load_snapshot(history, index)
    assert len(history) == 1


def test_load_snapshot_from_empty_history():
    with pytest.raises(LookupError):
        load_snapshot([], 0)


def test_huge_bill_is_capped_and_still_computes():
    cfg = update_bill_amount(make_split(), "1e27")
    assert cfg.bill_amount == MAX_BILL_AMOUNT
    assert amount_owed(cfg, 0) == pytest.approx(MAX_BILL_AMOUNT * 1.1 / 2)
    assert coerce_number("1e308", 0, MAX_BILL_AMOUNT, "Bill amount")[1] == "Bill amount cannot be above 1e+12"


def test_amount_owed_survives_uncapped_bill():
    # configurations built directly bypass the input ceiling
    cfg = make_split(bill=1e27, tip=0)
    assert amount_owed(cfg, 0) == pytest.approx(5e26)
    cfg = make_split(bill=1e308, tip=15)
    assert amount_owed(cfg, 0) == float("inf")


def test_renormalize_ignores_float_noise():
    cfg = make_split(pcts=(33.3, 33.3, 33.4))
    assert renormalize(cfg) == cfg
