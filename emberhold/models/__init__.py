"""
Database models for the Emberhold account service.

Importing this package registers every model on the shared metadata.
"""

from .account import Account
from .base import Base
from .email_verification import EmailVerification
from .enums import (
    PLAYER_PRONOUN_CHOICES,
    PLAYER_SEX_CHOICES,
    PlayerPronoun,
    PlayerSex,
    parse_player_pronoun,
    parse_player_sex,
)
from .monster import Monster, Town
from .player import Player

__all__ = [
    "Account",
    "Base",
    "EmailVerification",
    "Monster",
    "PLAYER_PRONOUN_CHOICES",
    "PLAYER_SEX_CHOICES",
    "Player",
    "PlayerPronoun",
    "PlayerSex",
    "Town",
    "parse_player_pronoun",
    "parse_player_sex",
]
