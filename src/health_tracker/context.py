"""Process-wide application state for the outer surfaces."""

from dataclasses import dataclass, field

from .db.settings_store import ActiveProgramSetting
from .models.user_profile import UnitPreference, UserProfile
from .utils.dates import today_iso


@dataclass
class AppContext:
    """Mutable state shared by the CLI and web handlers.

    Created once at startup. Engine functions never read it; handlers pass
    the values they need explicitly.
    """

    active_program: ActiveProgramSetting = field(default_factory=ActiveProgramSetting)
    selected_date: str = field(default_factory=today_iso)
    unit_preference: UnitPreference = UnitPreference.METRIC
    journal_dates: set[str] = field(default_factory=set)

    def select_date(self, date: str) -> None:
        self.selected_date = date

    def set_unit_preference(self, preference: UnitPreference | str) -> None:
        self.unit_preference = UnitPreference(preference)

    def apply_profile(self, profile: UserProfile) -> None:
        self.set_unit_preference(profile.unit_preference)

    def mark_journal_date(self, date: str) -> None:
        self.journal_dates.add(date)

    def reset_journal_dates(self, dates=()) -> None:
        self.journal_dates = set(dates)
