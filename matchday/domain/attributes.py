"""Player attribute definitions and range validation."""

from __future__ import annotations

from enum import Enum

from .exceptions import OutOfRange, UnknownStat


class PlayerStat(str, Enum):
    OFFENSIVE_AWARENESS = "offensiveAwareness"
    BALL_CONTROL = "ballControl"
    DRIBBLING = "dribbling"
    TIGHT_POSSESSION = "tightPossession"
    LOW_PASS = "lowPass"
    LOFTED_PASS = "loftedPass"
    FINISHING = "finishing"
    HEADING = "heading"
    PLACE_KICKING = "placeKicking"
    CURL = "curl"
    SPEED = "speed"
    ACCELERATION = "acceleration"
    KICKING_POWER = "kickingPower"
    JUMP = "jump"
    PHYSICAL_CONTACT = "physicalContact"
    BALANCE = "balance"
    STAMINA = "stamina"
    DEFENSIVE_AWARENESS = "defensiveAwareness"
    BALL_WINNING = "ballWinning"
    AGGRESSION = "aggression"
    GK_AWARENESS = "gkAwareness"
    GK_CATCHING = "gkCatching"
    GK_CLEARING = "gkClearing"
    GK_REFLEXES = "gkReflexes"
    GK_REACH = "gkReach"
    WEAK_FOOT_USAGE = "weakFootUsage"
    WEAK_FOOT_ACCURACY = "weakFootAccuracy"
    FORM = "form"
    INJURY_RESISTANCE = "injuryResistance"

    @classmethod
    def parse(cls, name: "str | PlayerStat") -> "PlayerStat":
        if isinstance(name, PlayerStat):
            return name
        try:
            return cls(name)
        except ValueError as exc:
            raise UnknownStat(str(name)) from exc


def default_stats(value: int = 40) -> dict[PlayerStat, int]:
    return {stat: value for stat in PlayerStat}


def validate_stat_value(value: object, *, minimum: int = 40, maximum: int = 99) -> int:
    """Return ``value`` if it is an integer inside ``[minimum, maximum]``.

    Raises ``OutOfRange`` otherwise. Booleans and non-integral numbers are
    rejected rather than coerced.
    """
    if isinstance(value, bool):
        raise OutOfRange(value, minimum, maximum)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or not minimum <= value <= maximum:
        raise OutOfRange(value, minimum, maximum)
    return value

