"""Search agent configuration models.

Invalid settings raise pydantic.ValidationError at construction.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MCTSConfig(BaseModel):
    """Settings for MCTSAgent."""

    model_config = ConfigDict(frozen=True)

    simulation_count: int = Field(default=50, ge=1, description="Iteration ceiling per decision")
    exploration_weight: float = Field(default=2.0, ge=0.0, description="UCB1 exploration constant")
    max_rollout_depth: int = Field(default=20, ge=5, description="Maximum ticks per playout")
    rollout_count: int = Field(default=3, ge=1, description="Playouts per expanded node")
    time_limit_ms: int = Field(default=200, gt=0, description="Wall-clock budget per decision")
    progressive_bias: float = Field(
        default=0.1, ge=0.0, description="Weight of the action heuristic in selection (0 disables)"
    )
    adaptive_playouts: bool = Field(
        default=True, description="Scale playout depth with the estimated game phase"
    )
    greedy_expansion_probability: float = Field(
        default=0.3, ge=0.0, le=1.0, description="Chance to expand the best-heuristic untried action"
    )
    rollout_heuristic_probability: float = Field(
        default=0.2, ge=0.0, le=1.0, description="Chance of a heuristic-guided playout move"
    )
    early_cutoff_probability: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Chance per playout tick to test for a decided game"
    )
    late_game_threshold: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Phase from which the root picks by mean value"
    )
    seed: int | None = Field(default=None, description="RNG seed for reproducible search")


class MinimaxConfig(BaseModel):
    """Settings for MinimaxAgent."""

    model_config = ConfigDict(frozen=True)

    depth: int = Field(default=2, ge=1, description="Plies searched (the root move counts as one)")
    use_alpha_beta: bool = Field(default=True, description="Prune with alpha-beta bounds")


class RHEAConfig(BaseModel):
    """Settings for the rolling-horizon evolutionary agents."""

    model_config = ConfigDict(frozen=True)

    sequence_length: int = Field(default=10, ge=1, description="Planned (source, target) pairs")
    population_size: int = Field(default=20, ge=1, description="Genomes per generation")
    generations: int = Field(default=20, ge=1, description="Generation ceiling per decision")
    max_evaluations: int = Field(default=400, ge=1, description="Rollout ceiling per decision")
    mutation_rate: float = Field(default=0.3, ge=0.0, le=1.0, description="Per-gene resample chance")
    elite_count: int = Field(default=4, ge=1, description="Genomes carried over unchanged")
    use_shift_buffer: bool = Field(
        default=True, description="Seed the next decision with the shifted best plan"
    )
    use_greedy_first_move: bool = Field(
        default=False, description="Try the one-step greedy move before evolving"
    )
    greedy_min_source_ships: float = Field(default=8.0, ge=0.0)
    greedy_max_target_ships: float = Field(default=30.0, gt=0.0)
    greedy_score: Literal["strength", "growth"] = Field(
        default="strength",
        description="Greedy move score: target value plus source strength, or target growth only",
    )
    seed_greedy: bool = Field(
        default=False, description="Seed the first population with the strongest-source, weakest-target plan"
    )
    adaptive_mutation: bool = Field(default=False, description="Adapt the mutation rate to progress")
    min_mutation: float = Field(default=0.05, ge=0.0, le=1.0)
    max_mutation: float = Field(default=0.8, ge=0.0, le=1.0)
    stagnation_patience: int = Field(
        default=4, ge=0, description="Generations without improvement before mutation rises"
    )
    time_limit_ms: int = Field(default=100, gt=0, description="Wall-clock budget per decision")
    seed: int | None = Field(default=None, description="RNG seed for reproducible search")

    @model_validator(mode="after")
    def check_population(self) -> "RHEAConfig":
        if self.elite_count > self.population_size:
            raise ValueError(
                f"elite_count {self.elite_count} exceeds population_size {self.population_size}"
            )
        if self.min_mutation > self.max_mutation:
            raise ValueError(
                f"min_mutation {self.min_mutation} exceeds max_mutation {self.max_mutation}"
            )
        return self
