"""Tests for input validation."""

import pytest

from health_tracker.errors import ValidationError
from health_tracker.models.program import ProgramDay
from health_tracker.validation import validate_date, validate_measurements, validate_program


def days(*counts):
    return [ProgramDay(exercises=[f"ex{i}" for i in range(n)]) for n in counts]


class TestValidateProgram:
    """Tests for program validation."""

    def test_valid(self):
        """Test a valid program passes."""
        validate_program("Full Body", days(3, 6))

    def test_blank_name(self):
        """Test a name is required."""
        with pytest.raises(ValidationError, match="Please enter a program name"):
            validate_program("   ", days(3))

    def test_no_days(self):
        """Test at least one day is required."""
        with pytest.raises(ValidationError, match="Please add at least one day"):
            validate_program("Empty", [])

    @pytest.mark.parametrize("count", [2, 7])
    def test_exercise_count(self, count):
        """Test each day needs 3-6 exercises."""
        with pytest.raises(ValidationError, match="Each day must have 3-6 exercises"):
            validate_program("Bad", days(3, count))


class TestValidateMeasurements:
    """Tests for measurement validation."""

    def test_parses_numbers_and_skips_blanks(self):
        """Test numeric strings are parsed and blanks skipped."""
        data = {"weight": "80.5", "steps": "", "calories": "0", "protein": None}

        assert validate_measurements(data, ("weight", "steps", "calories", "protein")) == {
            "weight": 80.5,
            "calories": 0.0,
        }

    def test_only_requested_fields(self):
        """Test fields not asked for are ignored."""
        assert validate_measurements({"weight": 80, "other": "x"}, ("weight",)) == {"weight": 80.0}

    @pytest.mark.parametrize("value", ["-1", "abc", "nan"])
    def test_rejects_invalid(self, value):
        """Test negative and non-numeric input is rejected."""
        with pytest.raises(ValidationError, match="Invalid value for weight"):
            validate_measurements({"weight": value}, ("weight",))

    def test_is_value_error(self):
        """Test validation errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_measurements({"sleep": "-2"}, ("sleep",))


class TestValidateDate:
    """Tests for validate_date."""

    def test_valid(self):
        """Test canonical dates pass through unchanged."""
        assert validate_date("2024-03-09") == "2024-03-09"
        assert validate_date(None) is None

    @pytest.mark.parametrize("value", ["2024-3-9", "not-a-date", "20240309", "2024-02-30", ""])
    def test_rejects_non_canonical(self, value):
        """Test anything but YYYY-MM-DD is rejected."""
        with pytest.raises(ValidationError, match="expected YYYY-MM-DD"):
            validate_date(value)

    def test_label_in_message(self):
        """Test the field label appears in the error."""
        with pytest.raises(ValidationError, match="Invalid birth date"):
            validate_date("15/06/1990", "birth date")
