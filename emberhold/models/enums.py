"""
Enumerations stored as integers on character rows.
"""

from enum import IntEnum


class PlayerSex(IntEnum):
    """Character sex; drives the starting outfit."""

    FEMALE = 0
    MALE = 1


class PlayerPronoun(IntEnum):
    """Pronoun set used when the game refers to a character."""

    THEY = 0
    SHE = 1
    HE = 2


def _choices(enum_cls: type[IntEnum]) -> tuple[str, ...]:
    return tuple(member.name.lower() for member in enum_cls) + tuple(str(member.value) for member in enum_cls)


PLAYER_SEX_CHOICES = _choices(PlayerSex)
PLAYER_PRONOUN_CHOICES = _choices(PlayerPronoun)


def _parse(enum_cls: type[IntEnum], raw: str) -> IntEnum:
    value = raw.strip().lower()
    if value.isdigit():
        return enum_cls(int(value))
    return enum_cls[value.upper()]


def parse_player_sex(raw: str) -> PlayerSex:
    """
    Parse a submitted sex value ("female", "male", "0" or "1").

    Raises:
        ValueError: If the value names no PlayerSex member
    """
    try:
        return PlayerSex(_parse(PlayerSex, raw))
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown player sex: {raw!r}") from e


def parse_player_pronoun(raw: str | None) -> PlayerPronoun:
    """Parse a submitted pronoun value; absent or blank input defaults to THEY."""
    if raw is None or not raw.strip():
        return PlayerPronoun.THEY
    try:
        return PlayerPronoun(_parse(PlayerPronoun, raw))
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown player pronoun: {raw!r}") from e
