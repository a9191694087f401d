"""Tests for the command line interface."""

from datetime import date, datetime

import pytest

from employee_scheduling.cli import main
from employee_scheduling.data_io import read_schedule, write_schedule
from employee_scheduling.domain.models import Employee, EmployeeSchedule, Shift


@pytest.fixture
def scored_dir(tmp_path):
    amy = Employee("Amy", skills={"Nurse"}, undesired_dates={date(2021, 2, 1)})
    schedule = EmployeeSchedule(
        employees=[amy, Employee("Beth", skills={"Doctor"})],
        shifts=[
            Shift("0", datetime(2021, 2, 1, 9), datetime(2021, 2, 1, 17), "Ward", "Nurse", "Amy"),
            Shift("1", datetime(2021, 2, 1, 9), datetime(2021, 2, 1, 17), "Ward", "Nurse", "Beth"),
        ],
    )
    return write_schedule(schedule, tmp_path / "scored")


@pytest.mark.integration
def test_demo_writes_csv(tmp_path, capsys):
    out = tmp_path / "demo"
    assert main(["demo", "--out", str(out), "--start", "2024-06-05"]) == 0
    assert "[OK] Wrote 15 employees" in capsys.readouterr().out

    schedule = read_schedule(out)
    assert len(schedule.employees) == 15
    assert schedule.employees[0].name == "Elsa Green"
    assert min(s.start for s in schedule.shifts).date() == date(2024, 6, 10)


@pytest.mark.integration
def test_demo_with_config_and_rng(tmp_path, capsys):
    config_file = tmp_path / "demo.yaml"
    config_file.write_text("employee_count: 5\nroster_length_days: 2\n")
    out = tmp_path / "demo"
    code = main(
        ["demo", "--out", str(out), "--config", str(config_file), "--rng", "python", "--seed", "3"]
    )
    assert code == 0
    assert "[OK] Wrote 5 employees" in capsys.readouterr().out
    assert len({s.start.date() for s in read_schedule(out).shifts}) == 2


def test_score(scored_dir, capsys):
    assert main(["score", "--data", str(scored_dir)]) == 0
    out = capsys.readouterr().out
    assert "Score: -1hard/-480soft (infeasible)" in out


def test_score_explain(scored_dir, capsys):
    assert main(["score", "--data", str(scored_dir), "--explain"]) == 0
    out = capsys.readouterr().out
    assert "Missing required skill" in out
    assert "Undesired day for employee" in out
    assert "Beth" in out


def test_score_explain_without_matches(tmp_path, capsys):
    assert main(["demo", "--out", str(tmp_path), "--start", "2024-06-05"]) == 0
    capsys.readouterr()
    assert main(["score", "--data", str(tmp_path), "--explain"]) == 0
    out = capsys.readouterr().out
    assert "Score: 0hard/0soft (feasible)" in out
    assert "No constraint matches." in out


def test_summarize(scored_dir, capsys):
    assert main(["summarize", "--data", str(scored_dir)]) == 0
    out = capsys.readouterr().out
    assert "Unassigned shifts: 0 of 2" in out
    assert "Score: -1hard/-480soft" in out


def test_missing_data_directory(tmp_path, capsys):
    assert main(["score", "--data", str(tmp_path / "missing")]) == 1
    assert "[ERROR] Missing employees.csv" in capsys.readouterr().out


def test_bad_config_reports_error(tmp_path, capsys):
    config_file = tmp_path / "demo.yaml"
    config_file.write_text("bogus: 1\n")
    assert main(["demo", "--out", str(tmp_path / "out"), "--config", str(config_file)]) == 1
    assert "[ERROR] Unknown demo data setting 'bogus'" in capsys.readouterr().out


def test_unknown_command_exits():
    with pytest.raises(SystemExit):
        main(["bogus"])


@pytest.mark.parametrize(
    "config_text, message",
    [
        ("seed: abc\n", "'seed' must be an integer"),
        ("employee_count: five\n", "'employee_count' must be an integer"),
        ("first_names: Amy\n", "'first_names' must be a list"),
    ],
)
def test_malformed_config_reports_error(tmp_path, capsys, config_text, message):
    config_file = tmp_path / "demo.yaml"
    config_file.write_text(config_text)
    out_dir = tmp_path / "out"
    assert main(["demo", "--out", str(out_dir), "--config", str(config_file)]) == 1
    assert f"[ERROR] Setting {message}" in capsys.readouterr().out
    assert not out_dir.exists()
