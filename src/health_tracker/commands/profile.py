"""User profile commands."""

import click
import questionary
from questionary import Style

from ..db import ProfileRepository
from ..errors import StorageError, ValidationError
from ..models.user_profile import Sex, UnitPreference, UserProfile, volume_recommendations
from ..utils.units import IMPERIAL, ImperialHeight, format_height, to_imperial, to_metric
from ..validation import validate_date, validate_measurements
from .base import async_command, echo_error, echo_info, echo_success, ensure_initialized

custom_style = Style(
    [
        ("qmark", "fg:#673ab7 bold"),
        ("question", "bold"),
        ("answer", "fg:#f44336 bold"),
        ("pointer", "fg:#673ab7 bold"),
        ("highlighted", "fg:#673ab7 bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)


async def ask_profile(current: UserProfile) -> UserProfile:
    """Interactive questionnaire that edits a copy of the current profile."""
    click.echo("\n=== Profile ===\n")

    name = await questionary.text(
        "What's your name?", default=current.name or "", style=custom_style
    ).ask_async()

    units = await questionary.select(
        "Which units do you prefer?",
        choices=[
            questionary.Choice("Metric (kg, cm, L)", UnitPreference.METRIC),
            questionary.Choice("Imperial (lbs, in, fl oz)", UnitPreference.IMPERIAL),
        ],
        default=current.unit_preference,
        style=custom_style,
    ).ask_async()

    if units == UnitPreference.IMPERIAL:
        shown = to_imperial(current.height, "height") if current.height else None
        feet = await questionary.text(
            "Height, feet:", default=str(shown.feet) if shown else "", style=custom_style
        ).ask_async()
        inches = await questionary.text(
            "Height, inches:", default=f"{shown.inches:.0f}" if shown else "", style=custom_style
        ).ask_async()
        parsed = validate_measurements({"feet": feet, "inches": inches}, ("feet", "inches"))
        height = (
            to_metric(ImperialHeight(int(parsed["feet"]), parsed.get("inches", 0.0)), "height")
            if "feet" in parsed
            else current.height
        )
    else:
        cm = await questionary.text(
            "Height (cm):",
            default=f"{current.height:g}" if current.height else "",
            style=custom_style,
        ).ask_async()
        height = validate_measurements({"height": cm}, ("height",)).get("height", current.height)

    birth_date = await questionary.text(
        "Birth date (YYYY-MM-DD, optional):",
        default=current.birth_date or "",
        style=custom_style,
    ).ask_async()
    validate_date(birth_date or None, "birth date")

    sex = await questionary.select(
        "Sex:",
        choices=[
            questionary.Choice("Male", Sex.MALE),
            questionary.Choice("Female", Sex.FEMALE),
            questionary.Choice("Other", Sex.OTHER),
            questionary.Choice("Prefer not to say", ""),
        ],
        style=custom_style,
    ).ask_async()

    return UserProfile(
        name=(name or "").strip() or None,
        height=height,
        birth_date=birth_date or None,
        sex=sex or None,
        unit_preference=units,
        updated_at=current.updated_at,
    )


@click.group()
@click.pass_context
def profile(ctx):
    """View and edit your profile.

    Height is used for waist-to-height ratio; the unit preference controls
    how values are shown and entered everywhere.
    """
    ensure_initialized(ctx)


@profile.command()
@async_command
async def show():
    """Show the profile and training volume guidance."""
    current = await ProfileRepository().get()
    if not current.is_saved:
        echo_info("No profile saved yet. Use 'health-tracker profile set'")

    preference = current.unit_preference.value
    age = current.age()
    click.echo()
    click.echo(f"Name:   {current.name or '--'}")
    click.echo(f"Height: {format_height(current.height, preference)}")
    click.echo(f"Age:    {age if age is not None else '--'}")
    click.echo(f"Sex:    {current.sex.value if current.sex else '--'}")
    click.echo(f"Units:  {preference}")

    volume = volume_recommendations(age)
    click.echo()
    click.echo(f"Training volume ({volume.age_group}):")
    for label, item in (
        ("Maintain", volume.maintenance),
        ("Grow", volume.growth),
        ("Frequency", volume.frequency),
        ("Per session", volume.per_session),
    ):
        click.echo(f"  {label}: {item.description}")


@profile.command(name="set")
@click.option("--name", default=None, help="Your name")
@click.option("--height", default=None, help="Height in cm, or total inches with imperial units")
@click.option("--birth-date", default=None, help="Birth date (YYYY-MM-DD)")
@click.option("--sex", type=click.Choice([s.value for s in Sex]), default=None)
@click.option("--units", type=click.Choice([u.value for u in UnitPreference]), default=None)
@click.option("--interactive", "-i", is_flag=True, help="Answer questions instead")
@click.pass_context
@async_command
async def set_profile(
    ctx,
    name: str | None,
    height: str | None,
    birth_date: str | None,
    sex: str | None,
    units: str | None,
    interactive: bool,
):
    """Update profile fields. Fields not given are kept."""
    repo = ProfileRepository()
    current = await repo.get()

    try:
        if interactive:
            updated = await ask_profile(current)
        else:
            updated = current
            if units:
                updated.unit_preference = UnitPreference(units)
            parsed = validate_measurements({"height": height}, ("height",))
            if "height" in parsed:
                updated.height = (
                    to_metric(parsed["height"], "height")
                    if updated.unit_preference.value == IMPERIAL
                    else parsed["height"]
                )
            if name is not None:
                updated.name = name.strip() or None
            if birth_date is not None:
                validate_date(birth_date or None, "birth date")
                updated.birth_date = birth_date or None
            if sex:
                updated.sex = Sex(sex)
        await repo.save(updated)
    except (ValidationError, StorageError) as e:
        echo_error(str(e))
        ctx.exit(1)

    echo_success("Profile saved")
