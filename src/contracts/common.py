"""
Common data types and base models for the match analytics engine.
All models use Pydantic V2; Riot payloads arrive in camelCase JSON.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TeamSide(int, Enum):
    """Team identifiers used by Match-V5."""

    BLUE = 100
    RED = 200


class TeamPosition(str, Enum):
    """Assigned positions (``teamPosition``) on Summoner's Rift."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"
    NONE = "NONE"


# Role label reported when the top two positions are played equally often
MULTIROLE = "MULTIROLE"


def is_valid_role(role: str | None) -> bool:
    """Positions that take part in role-based computations."""
    return bool(role) and role != TeamPosition.NONE.value


class Position(BaseModel):
    """2D position on the map."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    x: int = Field(..., description="X coordinate on the map")
    y: int = Field(..., description="Y coordinate on the map")


class BaseContract(BaseModel):
    """Base model for all input data contracts with common configuration."""

    model_config = ConfigDict(
        # Riot JSON uses camelCase; Python callers may use snake_case
        alias_generator=to_camel,
        populate_by_name=True,
        # Use enum values in JSON
        use_enum_values=True,
        # Riot adds fields every patch; unknown keys are not an error
        extra="ignore",
        # Retrieved match data is never mutated
        frozen=True,
    )


class OutputContract(BaseModel):
    """Base model for derived, ephemeral engine outputs.

    Field names are part of the downstream formatting contract and must
    stay stable.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
        # "Perfect" KDA is math.inf; keep it distinguishable from a missing value
        ser_json_inf_nan="constants",
    )
