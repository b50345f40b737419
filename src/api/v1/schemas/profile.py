"""Pydantic schemas for Profile API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class EmergencyContactSchema(BaseModel):
    """An emergency contact as sent and returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=30)
    relationship: str | None = Field(None, max_length=50)


class ProfileUpdateRequest(BaseModel):
    """Schema for replacing a profile.

    ``full_name`` is required. Omitted scalars keep their stored value; an
    omitted list leaves that collection untouched, a supplied list replaces it.
    """

    full_name: str = Field(..., max_length=255)
    nickname: str | None = Field(None, max_length=100)
    gender: str | None = Field(None, max_length=20)
    address: str | None = None
    profile_image_url: str | None = Field(None, max_length=500)
    age: int | str | None = None
    health_conditions: list[str] | None = None
    interests: list[str] | None = None
    emergency_contacts: list[EmergencyContactSchema] | None = None


class ProfileData(BaseModel):
    """Schema for a user's full profile."""

    user_id: int
    email: str
    full_name: str | None = None
    nickname: str | None = None
    gender: str | None = None
    date_of_birth: date | None = None
    age: int | None = None
    address: str | None = None
    profile_image_url: str | None = None
    health_conditions: list[str] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    emergency_contacts: list[EmergencyContactSchema] = Field(default_factory=list)


class ProfileResponse(BaseModel):
    """Schema for single Profile."""

    success: bool = True
    data: ProfileData
