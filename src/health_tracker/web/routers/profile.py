"""Profile routes."""

from dataclasses import asdict

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...context import AppContext
from ...db import ProfileRepository
from ...models.user_profile import Sex, UnitPreference, UserProfile, volume_recommendations
from ...validation import validate_date, validate_measurements
from ..dependencies import get_context

router = APIRouter(prefix="/profile", tags=["profile"])


class ProfileIn(BaseModel):
    name: str | None = None
    height: float | None = None  # cm
    birth_date: str | None = Field(default=None, alias="birthDate")
    sex: Sex | None = None
    unit_preference: UnitPreference = Field(default=UnitPreference.METRIC, alias="unitPreference")


def profile_response(profile: UserProfile) -> dict:
    age = profile.age()
    return {
        **profile.to_dict(),
        "age": age,
        "volume": asdict(volume_recommendations(age)),
    }


@router.get("")
async def get_profile():
    return profile_response(await ProfileRepository().get())


@router.put("")
async def save_profile(data: ProfileIn, context: AppContext = Depends(get_context)):
    validate_measurements({"height": data.height}, ("height",))
    validate_date(data.birth_date or None, "birth date")
    profile = UserProfile(
        name=(data.name or "").strip() or None,
        height=data.height or None,
        birth_date=data.birth_date or None,
        sex=data.sex,
        unit_preference=data.unit_preference,
    )
    saved = await ProfileRepository().save(profile)
    context.apply_profile(saved)
    return profile_response(saved)
