# tests/test_assignment_service.py
"""
Assignment set: replace-on-write reconciliation.

Goal:
- bulk overwrite touches exactly the (work_line_id, date) cells of the range
- single-cell apply replaces the whole member set; empty set clears the cell
- locked cells reject writes atomically, storage unchanged
- only admin may mutate
"""

from __future__ import annotations

from datetime import date

import pytest

from app.core.errors import CellLockedError, InvalidRangeError, NotFoundError
from app.core.rbac import ADMIN, VIEWER, Forbidden
from app.services.assignment_service import AssignmentService

from tests.factories import make_assignment, make_lock, make_member, make_work_line


D1, D2, D3 = date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)


# ============================================================================
# Helpers
# ============================================================================

@pytest.fixture()
def crew(db):
    """Work-line L plus members A, B, C (names sort A < B < C)."""
    line = make_work_line(db, id="L", name="Horikawa crew")
    a = make_member(db, id="A", name="A")
    b = make_member(db, id="B", name="B")
    c = make_member(db, id="C", name="C")
    db.commit()
    return line, a, b, c


def _members(rows) -> list[str]:
    return [r.member_id for r in rows]


def _snapshot(svc: AssignmentService) -> list[tuple]:
    return [(a.id, a.is_holiday) for a in svc.load_assignments()]


# ============================================================================
# Bulk assignment
# ============================================================================

def test_bulk_overwrite_only_touches_range(db, crew):
    svc = AssignmentService(db)

    svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["A", "B"],
                    start_date=D1, end_date=D3)
    svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["C"],
                    start_date=D2, end_date=D2)

    assert _members(svc.cell_assignments("L", D1)) == ["A", "B"]
    assert _members(svc.cell_assignments("L", D2)) == ["C"]
    assert _members(svc.cell_assignments("L", D3)) == ["A", "B"]


def test_bulk_does_not_touch_other_work_lines(db, crew):
    make_work_line(db, id="L2", name="Tsuji crew")
    db.commit()
    svc = AssignmentService(db)

    svc.bulk_assign(role=ADMIN, work_line_id="L2", member_ids=["A"],
                    start_date=D1, end_date=D1)
    svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["B"],
                    start_date=D1, end_date=D1)

    assert _members(svc.cell_assignments("L2", D1)) == ["A"]
    assert _members(svc.cell_assignments("L", D1)) == ["B"]


def test_bulk_repeated_is_replace_not_accumulate(db, crew):
    svc = AssignmentService(db)

    for _ in range(2):
        svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["A", "B"],
                        start_date=D1, end_date=D3)

    assert len(svc.load_assignments(work_line_id="L")) == 6


def test_bulk_returns_day_major_rows_with_holiday_flags(db, crew):
    svc = AssignmentService(db)

    # 2024-01-06 Sat, 2024-01-07 Sun
    rows = svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["B", "A"],
                           start_date="2024-01-05", end_date="2024-01-07",
                           holiday_weekdays=[0, 6])

    assert [r.id for r in rows] == [
        "L_B_2024-01-05", "L_A_2024-01-05",
        "L_B_2024-01-06", "L_A_2024-01-06",
        "L_B_2024-01-07", "L_A_2024-01-07",
    ]
    assert [r.is_holiday for r in rows] == [False, False, True, True, True, True]


def test_bulk_holiday_rows_hidden_from_cell_but_kept_in_storage(db, crew):
    svc = AssignmentService(db)

    svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["A"],
                    start_date="2024-01-06", end_date="2024-01-06",
                    holiday_weekdays=[6])

    assert svc.cell_assignments("L", "2024-01-06") == []
    stored = svc.load_assignments(work_line_id="L", day="2024-01-06")
    assert [(a.member_id, a.is_holiday) for a in stored] == [("A", True)]


def test_bulk_rejected_when_any_day_locked(db, crew):
    svc = AssignmentService(db)
    svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["A"],
                    start_date=D1, end_date=D3)
    make_lock(db, work_line_id="L", day=D2)
    make_lock(db, work_line_id="L", day=D3)
    db.commit()
    before = _snapshot(svc)

    with pytest.raises(CellLockedError) as ei:
        svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["C"],
                        start_date=D1, end_date=D3)

    assert ei.value.dates == [D2, D3]
    assert ei.value.to_detail()["cells"] == [
        {"work_line_id": "L", "date": "2024-01-02"},
        {"work_line_id": "L", "date": "2024-01-03"},
    ]
    assert _snapshot(svc) == before


def test_bulk_lock_on_other_work_line_does_not_block(db, crew):
    make_work_line(db, id="L2", name="Tsuji crew")
    make_lock(db, work_line_id="L2", day=D1)
    db.commit()

    rows = AssignmentService(db).bulk_assign(
        role=ADMIN, work_line_id="L", member_ids=["A"], start_date=D1, end_date=D1,
    )
    assert len(rows) == 1


def test_bulk_invalid_range(db, crew):
    with pytest.raises(InvalidRangeError):
        AssignmentService(db).bulk_assign(
            role=ADMIN, work_line_id="L", member_ids=["A"], start_date=D3, end_date=D1,
        )


@pytest.mark.parametrize("work_line_id,member_ids", [("L", []), ("", ["A"]), ("  ", ["A"])])
def test_bulk_rejects_empty_inputs(db, crew, work_line_id, member_ids):
    with pytest.raises(ValueError):
        AssignmentService(db).bulk_assign(
            role=ADMIN, work_line_id=work_line_id, member_ids=member_ids,
            start_date=D1, end_date=D1,
        )


@pytest.mark.parametrize("weekdays", [[7], [-1], [0, 6, 9]])
def test_bulk_rejects_weekday_outside_week_and_writes_nothing(db, crew, weekdays):
    svc = AssignmentService(db)

    with pytest.raises(ValueError, match="0..6"):
        svc.bulk_assign(
            role=ADMIN, work_line_id="L", member_ids=["A"],
            start_date="2024-01-01", end_date="2024-01-07", holiday_weekdays=weekdays,
        )

    assert svc.load_assignments() == []


def test_bulk_unknown_member_is_not_found_and_writes_nothing(db, crew):
    svc = AssignmentService(db)

    with pytest.raises(NotFoundError) as ei:
        svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["A", "ghost"],
                        start_date=D1, end_date=D2)

    assert ei.value.entity == "Member"
    assert ei.value.ids == ["ghost"]
    assert svc.load_assignments() == []


def test_bulk_unknown_work_line_is_not_found(db, crew):
    with pytest.raises(NotFoundError) as ei:
        AssignmentService(db).bulk_assign(
            role=ADMIN, work_line_id="nope", member_ids=["A"], start_date=D1, end_date=D1,
        )
    assert ei.value.entity == "WorkLine"


def test_bulk_viewer_forbidden(db, crew):
    svc = AssignmentService(db)
    with pytest.raises(Forbidden):
        svc.bulk_assign(role=VIEWER, work_line_id="L", member_ids=["A"],
                        start_date=D1, end_date=D1)
    assert svc.load_assignments() == []


# ============================================================================
# Single cell
# ============================================================================

def test_apply_cell_replaces_member_set(db, crew):
    svc = AssignmentService(db)
    svc.apply_cell(role=ADMIN, work_line_id="L", day=D1, member_ids=["A", "B"])

    svc.apply_cell(role=ADMIN, work_line_id="L", day=D1, member_ids=["B", "C"])

    assert _members(svc.cell_assignments("L", D1)) == ["B", "C"]


def test_apply_cell_holiday_flag_applies_to_whole_cell(db, crew):
    svc = AssignmentService(db)

    rows = svc.apply_cell(role=ADMIN, work_line_id="L", day=D1,
                          member_ids=["A", "B"], is_holiday=True)

    assert all(r.is_holiday for r in rows)
    assert svc.cell_assignments("L", D1) == []


def test_apply_cell_empty_set_clears_only_that_cell(db, crew):
    svc = AssignmentService(db)
    svc.bulk_assign(role=ADMIN, work_line_id="L", member_ids=["A", "B"],
                    start_date=D1, end_date=D3)

    rows = svc.apply_cell(role=ADMIN, work_line_id="L", day=D2, member_ids=[], is_holiday=False)

    assert rows == []
    assert svc.load_assignments(work_line_id="L", day=D2) == []
    assert _members(svc.cell_assignments("L", D1)) == ["A", "B"]
    assert _members(svc.cell_assignments("L", D3)) == ["A", "B"]


def test_apply_cell_on_locked_cell_rejected_and_unchanged(db, crew):
    svc = AssignmentService(db)
    svc.apply_cell(role=ADMIN, work_line_id="L", day=D2, member_ids=["A"])
    make_lock(db, work_line_id="L", day=D2)
    db.commit()

    with pytest.raises(CellLockedError) as ei:
        svc.apply_cell(role=ADMIN, work_line_id="L", day=D2, member_ids=["B", "C"])

    assert ei.value.cells == [("L", D2)]
    assert _members(svc.cell_assignments("L", D2)) == ["A"]


def test_apply_cell_viewer_forbidden(db, crew):
    with pytest.raises(Forbidden):
        AssignmentService(db).apply_cell(role=VIEWER, work_line_id="L", day=D1, member_ids=["A"])


def test_apply_cell_unknown_member(db, crew):
    with pytest.raises(NotFoundError):
        AssignmentService(db).apply_cell(role=ADMIN, work_line_id="L", day=D1, member_ids=["ghost"])


# ============================================================================
# Queries
# ============================================================================

def test_cell_assignments_ordered_by_member_name(db, crew):
    make_member(db, id="Z", name="Aaron")
    db.commit()
    svc = AssignmentService(db)

    svc.apply_cell(role=ADMIN, work_line_id="L", day=D1, member_ids=["C", "Z", "A"])

    assert _members(svc.cell_assignments("L", D1)) == ["A", "Z", "C"]


def test_deleted_member_cascades_out_of_cell(db, crew):
    line, a, b, _c = crew
    make_assignment(db, work_line_id="L", member_id="A", day=D1)
    make_assignment(db, work_line_id="L", member_id="B", day=D1)
    db.commit()

    db.delete(a)
    db.commit()

    assert _members(AssignmentService(db).cell_assignments("L", D1)) == ["B"]
