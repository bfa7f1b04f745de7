from __future__ import annotations

import json
import logging

import pytest

from timetable_samples import BARE, ROWS, SAMPLE, table
from ttparse.errors import (
    EmptyDayNameError,
    InputTooShortError,
    NoDayDataError,
    TimetableParseError,
    TruncatedRowError,
)
from ttparse.models import ClassInfo, Timetable, TimeSlot
from ttparse.parser import (
    ParseState,
    TimetableParser,
    parse_cell,
    parse_day_rows,
    parse_time_slots,
    parse_timetable,
    parse_timetable_or_raise,
)
from ttparse.parser.delimiter import TAB


def test_bare_header_example() -> None:
    tt = parse_timetable_or_raise(BARE)
    assert tt.theory_slots == [TimeSlot("08:00", "08:50"), TimeSlot("09:00", "09:50")]
    assert tt.lab_slots == [TimeSlot("08:00", "09:40"), TimeSlot("09:40", "11:20")]
    assert tt.days["Monday"].theory == [ClassInfo("A1"), ClassInfo("L1")]
    assert tt.days["Monday"].lab == [ClassInfo("B2"), None]


def test_labelled_sample() -> None:
    tt = parse_timetable_or_raise(SAMPLE)
    assert [s.start for s in tt.theory_slots] == ["08:00", "08:55", "09:50", "14:00"]
    assert [s.end for s in tt.lab_slots] == ["08:50", "09:40", "10:40", "14:50"]
    assert list(tt.days) == ["MON", "TUE"]
    mon = tt.days["MON"]
    assert mon.theory[0].code == "A1" and mon.theory[0].room == "TH"
    assert mon.theory[1:] == [ClassInfo("F1"), None, ClassInfo("L1")]
    assert mon.lab == [ClassInfo("L1"), ClassInfo("L2"), ClassInfo("L3"), ClassInfo("L31")]
    assert tt.days["TUE"].theory[2].instructor == "SJT502"


def test_day_rows_line_up_with_slots() -> None:
    tt = parse_timetable_or_raise(SAMPLE)
    for day in tt.days.values():
        assert len(day.theory) == len(tt.theory_slots)
        assert len(day.lab) == len(tt.lab_slots)


def test_slot_count_skips_placeholders() -> None:
    lines = SAMPLE.splitlines()
    theory, lab, theory_cols, lab_cols = parse_time_slots(lines, TAB)
    assert len(theory) == 4 and theory_cols == [0, 1, 2, 4]
    assert len(lab) == 4 and lab_cols == [0, 1, 2, 4]


def test_header_with_missing_end() -> None:
    rows = [r[:] for r in ROWS]
    rows[1][3] = ""
    tt = parse_timetable_or_raise(table(rows))
    assert len(tt.theory_slots) == 3
    assert tt.days["MON"].theory == [
        parse_cell("A1-BCSE305L-TH-SJT704-ALL"),
        None,
        ClassInfo("L1"),
    ]


@pytest.mark.parametrize("sep", ["|", ","])
def test_other_delimiters(sep: str) -> None:
    rows = [[c for c in r] for r in ROWS]
    tt = parse_timetable_or_raise(table(rows, sep))
    assert tt == parse_timetable_or_raise(SAMPLE)


def test_space_aligned_text() -> None:
    text = "\n".join(
        [
            "THEORY  Start  08:00  08:55",
            "-  End  08:50  09:45",
            "LAB  Start  08:00  08:50",
            "-  End  08:50  09:40",
            "WED  THEORY  C1  D1",
            "WED  LAB  L13  L14",
        ]
    )
    tt = parse_timetable_or_raise(text)
    assert tt.days["WED"].theory == [ClassInfo("C1"), ClassInfo("D1")]
    assert tt.days["WED"].lab == [ClassInfo("L13"), ClassInfo("L14")]


def test_blank_lines_and_crlf() -> None:
    text = "\r\n\r\n" + SAMPLE.replace("\n", "\r\n\r\n") + "\r\n"
    assert parse_timetable_or_raise(text) == parse_timetable_or_raise(SAMPLE)


def test_short_rows_are_padded() -> None:
    rows = ROWS[:4] + [["THU", "THEORY", "E1"], ["THU", "LAB", "L19", "L20"]]
    tt = parse_timetable_or_raise(table(rows))
    assert tt.days["THU"].theory == [ClassInfo("E1"), None, None, None]
    assert tt.days["THU"].lab == [ClassInfo("L19"), ClassInfo("L20"), None, None]


def test_cells_without_slot_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    rows = ROWS[:4] + [["FRI", "THEORY", "A1", "B1", "C1", "X1", "D1", "Z9"], ROWS[5]]
    with caplog.at_level(logging.WARNING):
        tt = parse_timetable_or_raise(table(rows))
    assert tt.days["FRI"].theory == [ClassInfo("A1"), ClassInfo("B1"), ClassInfo("C1"), ClassInfo("D1")]
    assert "dropping 2 cell(s)" in caplog.text


def test_dangling_row_is_ignored() -> None:
    rows = ROWS + [["WED", "THEORY", "A1", "B1", "C1", "-", "D1"]]
    tt = parse_timetable_or_raise(table(rows))
    assert list(tt.days) == ["MON", "TUE"]


def test_pairing_is_positional(caplog: pytest.LogCaptureFixture) -> None:
    rows = ROWS[:4] + [ROWS[5], ROWS[4]]
    with caplog.at_level(logging.WARNING):
        tt = parse_timetable_or_raise(table(rows))
    # first row of the pair is read as theory whatever its label says
    assert tt.days["MON"].theory[0] == ClassInfo("L1")
    assert "pairing by position" in caplog.text


def test_duplicate_day_keeps_first_position() -> None:
    rows = ROWS + [["MON", "THEORY", "Z1", "-", "-", "-", "-"], ["MON", "LAB", "-", "-", "-", "-", "-"]]
    tt = parse_timetable_or_raise(table(rows))
    assert list(tt.days) == ["MON", "TUE"]
    assert tt.days["MON"].theory == [ClassInfo("Z1"), None, None, None]


def test_day_names_are_verbatim() -> None:
    rows = ROWS[:4] + [["Mon", *ROWS[4][1:]], ROWS[5], [" MON ", *ROWS[6][1:]], ROWS[7]]
    tt = parse_timetable_or_raise(table(rows))
    assert list(tt.days) == ["Mon", "MON"]


def test_all_empty_day_is_valid() -> None:
    rows = ROWS[:4] + [["SAT", "THEORY", "-", "-", "-", "-", "-"], ["SAT", "LAB", "", "", "", "", ""]]
    tt = parse_timetable_or_raise(table(rows))
    assert tt.days["SAT"].theory == [None] * 4
    assert list(tt.iter_classes()) == []


def test_too_short() -> None:
    result = parse_timetable("08:00\t09:00\n08:50\t09:50\n08:00\t09:40")
    assert not result.ok
    assert result.timetable is None
    assert isinstance(result.error, InputTooShortError)
    assert "too short" in result.reason
    assert result.state is ParseState.FAILED
    assert result.reached is ParseState.START


def test_empty_input() -> None:
    with pytest.raises(InputTooShortError):
        parse_timetable_or_raise("   \n\n")


def test_truncated_row() -> None:
    rows = ROWS[:4] + [["MON", "THEORY"], ROWS[5]]
    result = parse_timetable(table(rows))
    assert isinstance(result.error, TruncatedRowError)
    assert result.reached is ParseState.HEADER_PARSED


def test_empty_day_name() -> None:
    rows = ROWS[:4] + [["", *ROWS[4][1:]], ROWS[5]]
    with pytest.raises(EmptyDayNameError) as exc:
        parse_timetable_or_raise(table(rows))
    assert "day name is empty" in exc.value.reason


def test_errors_share_a_base() -> None:
    assert issubclass(NoDayDataError, TimetableParseError)
    assert NoDayDataError().reason == "no valid day data found"


def test_parser_state_machine() -> None:
    parser = TimetableParser()
    assert parser.state is ParseState.START
    parser.run(SAMPLE)
    assert parser.state is ParseState.DONE
    with pytest.raises(TimetableParseError):
        parser.run("x")
    assert parser.state is ParseState.FAILED
    assert parser.failed_after is ParseState.START


def test_success_result() -> None:
    result = parse_timetable(SAMPLE)
    assert result.ok and result.error is None and result.reason is None
    assert result.state is ParseState.DONE


def test_idempotent() -> None:
    assert parse_timetable_or_raise(SAMPLE) == parse_timetable_or_raise(SAMPLE)
    assert parse_timetable_or_raise(SAMPLE) is not parse_timetable_or_raise(SAMPLE)


def test_json_round_trip() -> None:
    tt = parse_timetable_or_raise(SAMPLE)
    data = json.loads(json.dumps(tt.to_dict()))
    assert Timetable.from_dict(data) == tt
    assert data["days"]["MON"]["theory"][2] is None
    assert data["days"]["MON"]["theory"][1] == {"code": "F1"}
    assert set(data["days"]["MON"]["theory"][0]) == {"code", "room", "instructor", "color"}


def test_unlabelled_header_keeps_columns_together() -> None:
    text = (
        "08:00\t09:00\n-\t09:50\n-\t09:40\n-\t11:20\n"
        "Monday\tTHEORY\tA1\tL1\nMonday\tLAB\tB2\tL2"
    )
    tt = parse_timetable_or_raise(text)
    assert tt.theory_slots == [TimeSlot("09:00", "09:50")]
    assert tt.lab_slots == [TimeSlot("09:40", "11:20")]
    assert tt.days["Monday"].theory == [ClassInfo("L1")]
    assert tt.days["Monday"].lab == [ClassInfo("L2")]


def test_unlabelled_header_with_leading_placeholder(caplog: pytest.LogCaptureFixture) -> None:
    text = (
        "-\t09:00\n-\t09:50\n-\t09:40\n-\t11:20\n"
        "Monday\tTHEORY\tLunch\tL1\nMonday\tLAB\t-\tL2"
    )
    with caplog.at_level(logging.WARNING):
        tt = parse_timetable_or_raise(text)
    assert tt.days["Monday"].theory == [ClassInfo("L1")]
    assert tt.days["Monday"].lab == [ClassInfo("L2")]
    assert "dropping" not in caplog.text


def test_one_labelled_row_sets_width_for_all() -> None:
    lines = ["THEORY\tStart\t08:00", "\t\t08:50", "\t\t08:00", "\t\t09:40"]
    theory, lab, theory_cols, lab_cols = parse_time_slots(lines, TAB)
    assert theory == [TimeSlot("08:00", "08:50")]
    assert lab == [TimeSlot("08:00", "09:40")]
    assert theory_cols == lab_cols == [0]


def test_day_rows_need_a_full_pair() -> None:
    lines = SAMPLE.splitlines()
    assert parse_day_rows(lines[:4], TAB, [0], [0]) == {}
    assert parse_day_rows(lines[:5], TAB, [0], [0]) == {}
    assert NoDayDataError().reason == "no valid day data found"
