"""Rolling Horizon Evolutionary Algorithm agents.

A plan is a fixed-length list of genes in [0, 1), read in pairs
(source fraction, target fraction). Each pair is decoded against the state
it is applied to, so the genome length never depends on how many planets a
player currently owns.

Per decision:
1. Optionally return a greedy one-step move without searching
2. Seed the population (optionally a greedy plan, the shifted best plan from
   last tick, then random plans until the evaluation or time limit)
3. Evolve: keep the elites, refill with mutated copies of elites
4. Decode the first pair of the best plan against the current state
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from ..models import DO_NOTHING, Action, GameParams, GameState, Observation, Planet, Player
from ..utils import GameRNG
from .abstract_state import AbstractGameState
from .adapters import ForwardModelAdapter, ObservationAdapter
from .base import PartialObservationPlayer, PlanetWarsPlayer
from .config import RHEAConfig
from .heuristics import greedy_move_score, growth_move_score
from .simple import DoNothingAgent

logger = logging.getLogger(__name__)

# Minimum score gain that counts as an improvement
IMPROVEMENT_THRESHOLD = 1e-6
# Genes per planned action
GENES_PER_ACTION = 2


class GenomeDecoder:
    """Maps (source fraction, target fraction) pairs onto concrete actions.

    Sources are the player's planets with a free transporter slot. Targets
    are all planets the player does not own. A fraction f selects index
    min(int(f * n), n - 1), and the decoded action sends half of the
    source's ships.
    """

    def __init__(self, player: Player):
        self.player = player

    def sources(self, state: GameState) -> list[Planet]:
        return [p for p in state.planets if p.owner == self.player and p.transporter is None]

    def targets(self, state: GameState) -> list[Planet]:
        return [p for p in state.planets if p.owner != self.player]

    def decode(self, state: GameState, source_gene: float, target_gene: float) -> Action:
        sources = self.sources(state)
        targets = self.targets(state)
        if not sources or not targets:
            return DO_NOTHING

        source = sources[self._index(source_gene, len(sources))]
        target = targets[self._index(target_gene, len(targets))]
        return Action(self.player, source.id, target.id, source.n_ships / 2.0)

    @staticmethod
    def _index(gene: float, size: int) -> int:
        return min(int(gene * size), size - 1)


@dataclass
class ScoredGenome:
    score: float
    genes: list[float]


class RollingHorizonSearch:
    """The evolutionary search shared by the RHEA agents.

    Holds the per-match session state (the shift buffer and the adaptive
    mutation rate). Call bind() before searching and reset() between
    matches.
    """

    def __init__(self, config: RHEAConfig, opponent_model: Optional[PlanetWarsPlayer] = None):
        self.config = config
        self.rng = GameRNG(config.seed)
        self.opponent_model = opponent_model or DoNothingAgent()
        self.player: Optional[Player] = None
        self.decoder: Optional[GenomeDecoder] = None
        self.best_genome: Optional[list[float]] = None
        self.mutation_rate = config.mutation_rate
        self.evaluations = 0

    @property
    def genome_length(self) -> int:
        return self.config.sequence_length * GENES_PER_ACTION

    def bind(self, player: Player, params: GameParams) -> None:
        """Attach the search to a side and prepare the opponent model."""
        self.player = player
        self.decoder = GenomeDecoder(player)
        self.opponent_model.prepare_to_play_as(player.opponent(), params)
        self.reset()

    def reset(self) -> None:
        self.best_genome = None
        self.mutation_rate = self._clamp_mutation(self.config.mutation_rate)

    # =========================================================================
    # DECISION
    # =========================================================================

    def search(self, root: AbstractGameState) -> Action:
        """Evolve plans from root and return the first planned action."""
        state = root.game_state
        if not self.decoder.sources(state) or not self.decoder.targets(state):
            return DO_NOTHING

        if self.config.use_greedy_first_move:
            greedy = self.greedy_action(state)
            if greedy is not None:
                logger.debug(f"RHEA {self.player.value}: greedy move {greedy}")
                return greedy

        start = time.perf_counter()
        deadline = start + self.config.time_limit_ms / 1000.0
        self.evaluations = 0
        if not self.config.adaptive_mutation:
            self.mutation_rate = self.config.mutation_rate

        population = self._initial_population(root, deadline)
        best = max(population, key=lambda g: g.score)
        stagnation = 0
        generation = 0

        while self._has_budget(generation, deadline):
            population.sort(key=lambda g: g.score, reverse=True)
            elites = population[: self.config.elite_count]

            children = []
            while len(elites) + len(children) < self.config.population_size and self._has_budget(
                generation, deadline
            ):
                parent = self.rng.choice(elites)
                children.append(self._evaluate(root, self.mutate(parent.genes)))

            population = elites + children
            generation_best = max(population, key=lambda g: g.score)
            if generation_best.score > best.score + IMPROVEMENT_THRESHOLD:
                best = generation_best
                stagnation = 0
            else:
                stagnation += 1

            if self.config.adaptive_mutation:
                self._adapt_mutation(stagnation)
            generation += 1

        if self.config.use_shift_buffer:
            self.best_genome = list(best.genes)

        action = self.decoder.decode(state, best.genes[0], best.genes[1])
        logger.debug(
            f"RHEA {self.player.value}: {generation} generations, {self.evaluations} evaluations, "
            f"best score {best.score:.1f}, chose {action} in "
            f"{(time.perf_counter() - start) * 1000:.1f}ms"
        )
        return action

    def greedy_action(self, state: GameState) -> Optional[Action]:
        """Best one-step launch by the configured greedy score, or None if nothing qualifies."""
        move_score = growth_move_score if self.config.greedy_score == "growth" else greedy_move_score
        best_score = float("-inf")
        best_action = None
        for source in self.decoder.sources(state):
            if source.n_ships <= self.config.greedy_min_source_ships:
                continue
            for target in self.decoder.targets(state):
                if target.n_ships >= self.config.greedy_max_target_ships:
                    continue
                score = move_score(source, target)
                if score > best_score:
                    best_score = score
                    best_action = Action(self.player, source.id, target.id, source.n_ships / 2.0)
        return best_action

    # =========================================================================
    # GENETIC OPERATORS
    # =========================================================================

    def random_genome(self) -> list[float]:
        return [self.rng.random() for _ in range(self.genome_length)]

    def greedy_genome(self, state: GameState) -> list[float]:
        """Plan that repeats strongest source against weakest target.

        Genes sit at the middle of each index's interval so decoding
        recovers the same index despite float rounding.
        """
        sources = self.decoder.sources(state)
        targets = self.decoder.targets(state)
        source_index = max(range(len(sources)), key=lambda i: sources[i].n_ships)
        target_index = min(range(len(targets)), key=lambda i: targets[i].n_ships)
        pair = [(source_index + 0.5) / len(sources), (target_index + 0.5) / len(targets)]
        return pair * self.config.sequence_length

    def mutate(self, genes: list[float]) -> list[float]:
        """Resample each gene with the mutation rate; at least one always changes."""
        forced = self.rng.randrange(len(genes))
        return [
            self.rng.random() if i == forced or self.rng.random() < self.mutation_rate else gene
            for i, gene in enumerate(genes)
        ]

    def shift(self, genes: list[float]) -> list[float]:
        """Drop the first planned action and append a random one."""
        return genes[GENES_PER_ACTION:] + [self.rng.random() for _ in range(GENES_PER_ACTION)]

    # =========================================================================
    # INTERNAL HELPER METHODS
    # =========================================================================

    def _initial_population(self, root: AbstractGameState, deadline: float) -> list[ScoredGenome]:
        """Score the seeded plans, then random plans while budget remains.

        Root must have at least one source and one target. At least one
        plan is always scored.
        """
        seeds = []
        if self.config.seed_greedy:
            seeds.append(self.greedy_genome(root.game_state))
        if self.config.use_shift_buffer and self.best_genome is not None:
            if len(self.best_genome) == self.genome_length:
                seeds.append(self.shift(self.best_genome))

        population = [self._evaluate(root, genes) for genes in seeds[: self.config.population_size]]
        while len(population) < self.config.population_size and (
            not population
            or (self.evaluations < self.config.max_evaluations and time.perf_counter() < deadline)
        ):
            population.append(self._evaluate(root, self.random_genome()))
        return population

    def _evaluate(self, root: AbstractGameState, genes: list[float]) -> ScoredGenome:
        """Roll the plan forward against the opponent model; score the ship lead."""
        self.evaluations += 1
        opponent = self.player.opponent()
        state = root

        for i in range(0, len(genes) - 1, GENES_PER_ACTION):
            if state.is_terminal():
                break
            current = state.game_state
            actions = {
                self.player: self.decoder.decode(current, genes[i], genes[i + 1]),
                opponent: self.opponent_model.get_action(current),
            }
            state = state.next(actions)

        scores = state.get_score()
        return ScoredGenome(score=scores[self.player] - scores[opponent], genes=genes)

    def _has_budget(self, generation: int, deadline: float) -> bool:
        return (
            generation < self.config.generations
            and self.evaluations < self.config.max_evaluations
            and time.perf_counter() < deadline
        )

    def _adapt_mutation(self, stagnation: int) -> None:
        if stagnation > self.config.stagnation_patience:
            self.mutation_rate = self._clamp_mutation(self.mutation_rate * 1.1)
        else:
            self.mutation_rate = self._clamp_mutation(self.mutation_rate * 0.95)

    def _clamp_mutation(self, rate: float) -> float:
        if not self.config.adaptive_mutation:
            return rate
        return min(max(rate, self.config.min_mutation), self.config.max_mutation)


class RHEAAgent(PlanetWarsPlayer):
    """Full-observation RHEA agent."""

    def __init__(self, config: Optional[RHEAConfig] = None, opponent_model: Optional[PlanetWarsPlayer] = None):
        super().__init__()
        self.config = config or RHEAConfig()
        self.planner = RollingHorizonSearch(self.config, opponent_model)

    @classmethod
    def create_basic(cls, seed: Optional[int] = None) -> "RHEAAgent":
        """Plain RHEA with elitism, a shift buffer and a greedy seed plan."""
        return cls(RHEAConfig(seed_greedy=True, seed=seed))

    @classmethod
    def create_hybrid_greedy(cls, seed: Optional[int] = None) -> "RHEAAgent":
        """Greedy first move, falling back to a (1+1) hill climber."""
        return cls(
            RHEAConfig(
                population_size=2,
                elite_count=1,
                generations=30,
                max_evaluations=30,
                mutation_rate=0.5,
                use_greedy_first_move=True,
                greedy_min_source_ships=10.0,
                greedy_max_target_ships=20.0,
                greedy_score="growth",
                seed=seed,
            )
        )

    @classmethod
    def create_smarter(cls, seed: Optional[int] = None) -> "RHEAAgent":
        """Greedy first move, then a larger population with a bigger elite."""
        return cls(
            RHEAConfig(
                population_size=30,
                elite_count=6,
                generations=50,
                max_evaluations=1500,
                mutation_rate=0.2,
                use_greedy_first_move=True,
                time_limit_ms=200,
                seed=seed,
            )
        )

    @classmethod
    def create_adaptive(cls, seed: Optional[int] = None) -> "RHEAAgent":
        """Evaluation-bounded RHEA whose mutation rate follows its progress."""
        return cls(
            RHEAConfig(
                population_size=10,
                elite_count=4,
                generations=1000,
                max_evaluations=50,
                mutation_rate=0.8,
                adaptive_mutation=True,
                time_limit_ms=30,
                seed=seed,
            )
        )

    def get_agent_type(self) -> str:
        return (
            f"RHEAAgent-{self.config.sequence_length}-"
            f"{self.config.population_size}-{self.config.elite_count}"
        )

    def reset(self) -> None:
        self.planner.bind(self.player, self.params)

    def decide(self, observable: GameState) -> Action:
        return self.planner.search(ForwardModelAdapter(observable.deep_copy(), self.params))


class PartialObservationRHEAAgent(PartialObservationPlayer):
    """RHEA agent that plans on a belief state built from its Observation.

    Seeds its first population with the greedy plan unless given a config.
    """

    def __init__(self, config: Optional[RHEAConfig] = None, opponent_model: Optional[PlanetWarsPlayer] = None):
        super().__init__()
        self.config = config or RHEAConfig(seed_greedy=True)
        self.planner = RollingHorizonSearch(self.config, opponent_model)

    def get_agent_type(self) -> str:
        return "PartialObservationRHEAAgent"

    def reset(self) -> None:
        self.planner.bind(self.player, self.params)

    def decide(self, observable: Observation) -> Action:
        return self.planner.search(ObservationAdapter(observable, self.params))
