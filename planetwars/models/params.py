"""Game parameters shared by the engine and the agents."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..utils.constants import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    EDGE_SEPARATION,
    GROWTH_RATE_RANGE,
    GROWTH_TO_RADIUS_FACTOR,
    INITIAL_NEUTRAL_RATIO,
    INITIAL_SHIPS_RANGE,
    MAX_TICKS,
    NUM_PLANETS,
    RADIAL_SEPARATION,
    TRANSPORTER_SPEED,
)


class GameParams(BaseModel):
    """Read-only configuration for one match.

    Validation happens at construction: malformed parameters (for example a
    board with zero planets) raise pydantic.ValidationError before any state
    or forward model is built.
    """

    model_config = ConfigDict(frozen=True)

    width: int = Field(default=BOARD_WIDTH, gt=0, description="Board width")
    height: int = Field(default=BOARD_HEIGHT, gt=0, description="Board height")
    num_planets: int = Field(default=NUM_PLANETS, ge=2, description="Planets on the board")
    initial_neutral_ratio: float = Field(
        default=INITIAL_NEUTRAL_RATIO,
        ge=0.0,
        le=1.0,
        description="Fraction of planets that start neutral",
    )
    max_ticks: int = Field(default=MAX_TICKS, gt=0, description="Tick limit of a match")
    transporter_speed: float = Field(
        default=TRANSPORTER_SPEED, gt=0.0, description="Transporter distance per tick"
    )
    min_growth_rate: float = Field(default=GROWTH_RATE_RANGE[0], ge=0.0)
    max_growth_rate: float = Field(default=GROWTH_RATE_RANGE[1], ge=0.0)
    min_initial_ships_per_planet: float = Field(default=INITIAL_SHIPS_RANGE[0], ge=0.0)
    max_initial_ships_per_planet: float = Field(default=INITIAL_SHIPS_RANGE[1], ge=0.0)
    edge_separation: float = Field(default=EDGE_SEPARATION, ge=0.0)
    radial_separation: float = Field(default=RADIAL_SEPARATION, ge=0.0)
    growth_to_radius_factor: float = Field(default=GROWTH_TO_RADIUS_FACTOR, gt=0.0)

    @model_validator(mode="after")
    def check_ranges(self) -> "GameParams":
        if self.min_growth_rate > self.max_growth_rate:
            raise ValueError(
                f"min_growth_rate {self.min_growth_rate} exceeds max_growth_rate {self.max_growth_rate}"
            )
        if self.min_initial_ships_per_planet > self.max_initial_ships_per_planet:
            raise ValueError(
                f"min_initial_ships_per_planet {self.min_initial_ships_per_planet} exceeds "
                f"max_initial_ships_per_planet {self.max_initial_ships_per_planet}"
            )
        if 2 * self.edge_separation >= min(self.width, self.height):
            raise ValueError(
                f"edge_separation {self.edge_separation} leaves no room on a "
                f"{self.width}x{self.height} board"
            )
        return self

    @property
    def mean_initial_ships(self) -> float:
        return (self.min_initial_ships_per_planet + self.max_initial_ships_per_planet) / 2.0
