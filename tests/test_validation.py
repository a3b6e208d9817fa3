"""
Tests for event validation rules.
"""

import pendulum

from openslots.domain.models import Event, EventKind
from openslots.domain.validation import validate_event

TZ = "Europe/Berlin"


def _event(kind, start, end, weekly_recurring=False):
    return Event(
        kind=kind,
        starts_at=pendulum.parse(start, tz=TZ) if start else None,
        ends_at=pendulum.parse(end, tz=TZ) if end else None,
        weekly_recurring=weekly_recurring,
    )


class TestPresence:
    """Tests for required fields."""

    def test_blank_fields(self):
        result = validate_event(Event(kind=None, starts_at=None, ends_at=None))

        assert not result.is_valid
        assert result.errors == {
            "kind": ["can't be blank"],
            "starts_at": ["can't be blank"],
            "ends_at": ["can't be blank"],
        }

    def test_missing_end_skips_dependent_rules(self):
        """Test only the presence error is reported when ends_at is missing."""
        result = validate_event(_event(EventKind.APPOINTMENT, "2020-01-01 09:00", None))

        assert result.errors == {"ends_at": ["can't be blank"]}


class TestOpeningRules:
    """Tests for rules that apply to every event."""

    def test_valid_opening(self):
        result = validate_event(_event(EventKind.OPENING, "2020-01-01 09:00", "2020-01-01 10:00"))

        assert result.is_valid
        assert result.errors == {}

    def test_valid_recurring_opening(self):
        event = _event(EventKind.OPENING, "2020-01-01 09:00", "2020-01-01 10:00", weekly_recurring=True)

        assert validate_event(event).is_valid

    def test_not_a_30_min_slot(self):
        """Test a 41 minute event."""
        result = validate_event(_event(EventKind.OPENING, "2020-01-01 09:00", "2020-01-01 09:41"))

        assert result.errors == {"ends_at": ["is not a 30 min slot"]}

    def test_ends_before_starts(self):
        result = validate_event(_event(EventKind.OPENING, "2020-01-01 10:00", "2020-01-01 09:00"))

        assert result.errors == {"ends_at": ["can't be before starts_at"]}

    def test_ends_equal_to_starts(self):
        result = validate_event(_event(EventKind.OPENING, "2020-01-01 10:00", "2020-01-01 10:00"))

        assert "can't be before starts_at" in result.errors["ends_at"]

    def test_different_day(self):
        """Test a span across midnight."""
        result = validate_event(_event(EventKind.OPENING, "2020-01-01 23:30", "2020-01-02 00:30"))

        assert result.errors == {"ends_at": ["can't be on a different day"]}

    def test_collects_every_violation(self):
        """Test errors on one field accumulate instead of failing fast."""
        result = validate_event(_event(EventKind.OPENING, "2020-01-02 10:00", "2020-01-01 09:41"))

        assert result.errors == {
            "ends_at": [
                "can't be before starts_at",
                "can't be on a different day",
                "is not a 30 min slot",
            ]
        }


class TestAppointmentRules:
    """Tests for appointment-only rules."""

    def setup_method(self):
        self.openings = [_event(EventKind.OPENING, "2020-01-01 11:00", "2020-01-01 14:30")]

    def test_fits_in_opening(self):
        appointment = _event(EventKind.APPOINTMENT, "2020-01-01 13:00", "2020-01-01 14:00")

        assert validate_event(appointment, self.openings).is_valid

    def test_weekly_recurring_appointment(self):
        appointment = _event(
            EventKind.APPOINTMENT, "2020-01-01 13:00", "2020-01-01 13:30", weekly_recurring=True
        )

        result = validate_event(appointment, self.openings)

        assert result.errors == {"weekly_recurring": ["can't be true for appointment"]}

    def test_no_opening(self):
        appointment = _event(EventKind.APPOINTMENT, "2020-01-01 09:00", "2020-01-01 09:30")

        result = validate_event(appointment, self.openings)

        assert result.errors == {"kind": ["can't create appointment for no available slots"]}

    def test_partially_outside_opening(self):
        appointment = _event(EventKind.APPOINTMENT, "2020-01-01 14:00", "2020-01-01 15:00")

        result = validate_event(appointment, self.openings)

        assert result.errors == {"kind": ["can't create appointment for no available slots"]}

    def test_slot_already_booked(self):
        existing = self.openings + [
            _event(EventKind.APPOINTMENT, "2020-01-01 12:00", "2020-01-01 12:30")
        ]
        appointment = _event(EventKind.APPOINTMENT, "2020-01-01 11:30", "2020-01-01 12:30")

        result = validate_event(appointment, existing)

        assert not result.is_valid
        assert "can't create appointment for no available slots" in result.errors["kind"]

    def test_fits_in_recurring_opening(self):
        openings = [
            _event(EventKind.OPENING, "2020-01-01 09:00", "2020-01-01 10:00", weekly_recurring=True)
        ]
        appointment = _event(EventKind.APPOINTMENT, "2020-01-08 09:00", "2020-01-08 09:30")

        assert validate_event(appointment, openings).is_valid

    def test_openings_ignore_slot_rule(self):
        """Test openings may be created without any existing events."""
        opening = _event(EventKind.OPENING, "2020-01-01 09:00", "2020-01-01 09:30")

        assert validate_event(opening, []).is_valid
