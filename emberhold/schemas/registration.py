"""
Registration data shapes shared by the service, repository and HTTP layers.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..models.enums import PlayerPronoun, PlayerSex


class StarterTown(BaseModel):
    """A town offered to new characters."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    name: str


class CharacterCreatePayload(BaseModel):
    """Everything needed to insert a new character row."""

    name: str = Field(min_length=1)
    sex: PlayerSex
    pronoun: PlayerPronoun = PlayerPronoun.THEY
    level: int = Field(ge=1)
    vocation: int = Field(ge=0)
    health: int = Field(ge=1)
    health_max: int = Field(ge=1)
    mana: int = Field(ge=0)
    mana_max: int = Field(ge=0)
    capacity: int = Field(ge=0)
    soul: int = Field(ge=0)
    town_id: int = Field(ge=1)
    look_type: int = Field(ge=0)


class AccountCreateData(BaseModel):
    """Input for the atomic account + main character + verification insert."""

    email: str
    password_hash: str = Field(repr=False)
    character: CharacterCreatePayload
    verification_expiry_days: int = Field(default=30, ge=1)


class FlashMessage(BaseModel):
    """One-shot status message shown on the next page."""

    type: Literal["success", "error", "info"]
    message: str


class RegistrationRedirect(BaseModel):
    """Terminal navigation after a successful signup."""

    location: str
    flash: FlashMessage
    account_id: int
