"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from health_tracker.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def initialized(runner):
    """Run init so commands find a database."""
    result = runner.invoke(main, ["init"])
    assert result.exit_code == 0, result.output
    return runner


class TestInit:
    """Tests for the init command."""

    def test_init(self, runner, data_dir):
        """Test init creates the database."""
        result = runner.invoke(main, ["init"])

        assert result.exit_code == 0
        assert "Database ready" in result.output
        assert (data_dir / "health_tracker.db").exists()

    def test_requires_init(self, runner):
        """Test commands refuse to run before init."""
        result = runner.invoke(main, ["journal", "show"])

        assert result.exit_code == 1
        assert "not initialized" in result.output


class TestJournalCommands:
    """Tests for journal commands."""

    def test_daily_and_show(self, initialized):
        """Test recording and showing daily numbers."""
        result = initialized.invoke(
            main, ["journal", "daily", "-d", "2024-03-01", "--weight", "80", "--steps", "9000"]
        )
        assert result.exit_code == 0, result.output
        assert "22% complete" in result.output

        result = initialized.invoke(main, ["journal", "show", "2024-03-01"])
        assert "weight: 80.0kg" in result.output
        assert "steps: 9000\n" in result.output

    def test_malformed_date(self, initialized):
        """Test --date must be YYYY-MM-DD."""
        result = initialized.invoke(main, ["journal", "daily", "-d", "2024-3-9", "--weight", "80"])

        assert result.exit_code == 2
        assert "expected YYYY-MM-DD" in result.output

    def test_invalid_value(self, initialized):
        """Test invalid input exits with an error."""
        result = initialized.invoke(main, ["journal", "daily", "--weight", "heavy"])

        assert result.exit_code == 1
        assert "Invalid value for weight" in result.output

    def test_body(self, initialized):
        """Test recording circumferences."""
        result = initialized.invoke(
            main, ["journal", "body", "-d", "2024-03-01", "--body-fat", "18", "-m", "waist=86"]
        )
        assert result.exit_code == 0, result.output

        result = initialized.invoke(main, ["journal", "show", "2024-03-01"])
        assert "waist: 86.0cm" in result.output

    def test_unknown_measure(self, initialized):
        """Test unknown circumference names are rejected."""
        result = initialized.invoke(main, ["journal", "body", "-m", "tail=3"])
        assert result.exit_code == 1

    def test_workout_follows_rotation(self, initialized):
        """Test workouts default to the next program day."""
        initialized.invoke(
            main,
            ["programs", "create", "Split", "--day", "squat,bench,row",
             "--day", "deadlift,ohp,pullup", "--activate"],
        )
        first = initialized.invoke(
            main, ["journal", "workout", "-d", "2024-03-01", "-e", "squat:5x100,5x100"]
        )
        second = initialized.invoke(
            main, ["journal", "workout", "-d", "2024-03-02", "--from-last"]
        )

        assert "(day 1)" in first.output
        assert second.exit_code == 0, second.output
        assert "(day 2)" in second.output

    def test_workout_needs_exercises(self, initialized):
        """Test an empty workout is refused."""
        result = initialized.invoke(main, ["journal", "workout"])
        assert result.exit_code == 1


class TestProgramCommands:
    """Tests for program commands."""

    def test_create_list_next(self, initialized):
        """Test creating, listing and following a program."""
        result = initialized.invoke(
            main, ["programs", "create", "Full Body", "--day", "squat,bench,row", "--activate"]
        )
        assert result.exit_code == 0, result.output

        assert "Full Body" in initialized.invoke(main, ["programs", "list"]).output

        result = initialized.invoke(main, ["programs", "next"])
        assert "Full Body: day 1 of 1" in result.output
        assert "- squat" in result.output

    def test_invalid_program(self, initialized):
        """Test validation messages are shown."""
        result = initialized.invoke(main, ["programs", "create", "Bad", "--day", "a,b"])

        assert result.exit_code == 1
        assert "Each day must have 3-6 exercises" in result.output

    def test_no_active_program(self, initialized):
        """Test next without an active program."""
        assert initialized.invoke(main, ["programs", "next"]).exit_code == 1


class TestGoalCommands:
    """Tests for goal commands."""

    def test_add_and_list(self, initialized):
        """Test adding and listing a goal."""
        result = initialized.invoke(main, ["goals", "add", "protein", "150"])
        assert result.exit_code == 0, result.output
        assert "Protein ↑" in result.output

        result = initialized.invoke(main, ["goals", "list"])
        assert "Protein" in result.output
        assert "150.0g" in result.output

    def test_missing_goal(self, initialized):
        """Test completing an unknown goal fails."""
        assert initialized.invoke(main, ["goals", "complete", "nope"]).exit_code == 1


class TestProfileCommands:
    """Tests for profile commands."""

    def test_set_and_show(self, initialized):
        """Test imperial height entry and display."""
        result = initialized.invoke(main, ["profile", "set", "--units", "imperial", "--height", "71"])
        assert result.exit_code == 0, result.output

        result = initialized.invoke(main, ["profile", "show"])
        assert "5'11\"" in result.output
        assert "imperial" in result.output

    def test_malformed_birth_date(self, initialized):
        """Test a bad birth date is refused and the profile still loads."""
        result = initialized.invoke(main, ["profile", "set", "--birth-date", "15/06/1990"])
        assert result.exit_code == 1
        assert "Invalid birth date" in result.output

        result = initialized.invoke(main, ["profile", "show"])
        assert result.exit_code == 0, result.output


class TestTrendCommands:
    """Tests for trend commands."""

    def test_series(self, initialized):
        """Test a series over the whole history."""
        initialized.invoke(main, ["journal", "daily", "-d", "2024-03-01", "--weight", "80"])
        initialized.invoke(main, ["journal", "daily", "-d", "2024-03-02", "--weight", "79"])

        result = initialized.invoke(main, ["trends", "series", "weight", "--all"])

        assert result.exit_code == 0, result.output
        assert "2024-03-01" in result.output
        assert "change -1.2%" in result.output

    def test_malformed_end(self, initialized):
        """Test --end must be YYYY-MM-DD."""
        result = initialized.invoke(main, ["trends", "series", "weight", "--end", "March"])
        assert result.exit_code == 2

    def test_stats(self, initialized):
        """Test statistics output."""
        result = initialized.invoke(main, ["trends", "stats"])
        assert "Days tracked:   0" in result.output


class TestBackupCommands:
    """Tests for backup commands."""

    def test_export_and_import(self, initialized, tmp_path):
        """Test exporting to a file and importing it back."""
        initialized.invoke(main, ["journal", "notes", "Hello", "-d", "2024-03-01"])
        path = tmp_path / "backup.json"

        result = initialized.invoke(main, ["backup", "export", "-o", str(path)])
        assert result.exit_code == 0, result.output
        assert json.loads(path.read_text())["journals"][0]["notes"] == "Hello"

        result = initialized.invoke(main, ["backup", "import", str(path), "--force"])
        assert result.exit_code == 0, result.output
        assert "Imported 1 journal(s)" in result.output

    def test_export_stdout(self, initialized):
        """Test exporting to stdout produces JSON only."""
        result = initialized.invoke(main, ["backup", "export", "-o", "-"])
        assert json.loads(result.stdout)["version"] == 3

    def test_old_bundle(self, initialized, tmp_path):
        """Test old bundles are refused."""
        path = tmp_path / "old.json"
        path.write_text(json.dumps({"version": 1, "programs": [], "journals": []}))

        result = initialized.invoke(main, ["backup", "import", str(path), "--merge"])

        assert result.exit_code == 1
        assert "older version" in result.output
