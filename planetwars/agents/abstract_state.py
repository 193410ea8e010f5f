"""Abstract game state: the contract search algorithms explore.

Search agents never touch the forward model directly. They work through
this interface, so the same MCTS or RHEA code runs on the true state
(full observation) or on a belief state built from an Observation
(partial observation).
"""

from abc import ABC, abstractmethod
from enum import Enum

from ..models import Action, GameState, Player


class Observability(Enum):
    """Which kind of information an abstract state was built from."""

    FULL = "full"
    PARTIAL = "partial"


class ObservabilityError(RuntimeError):
    """Raised when code that needs the true state is handed a belief state.

    This is an internal programming error (for example running a
    full-observation heuristic over a partial-observation adapter), not a
    game condition.
    """


class AbstractGameState(ABC):
    """Value-semantics view of a game that search can branch on.

    Implementations must guarantee that next() and copy() never mutate the
    receiver.
    """

    @abstractmethod
    def copy(self) -> "AbstractGameState":
        """Return an independent deep copy."""

    @abstractmethod
    def is_terminal(self) -> bool:
        """Return True if the game is over in this state."""

    @abstractmethod
    def get_score(self) -> dict[Player, float]:
        """Return a per-player score (ships owned, Neutral scores 0)."""

    @abstractmethod
    def get_legal_actions(self, player: Player) -> list[Action]:
        """Return the coarse action set for a player, do-nothing first."""

    @abstractmethod
    def next(self, actions: dict[Player, Action]) -> "AbstractGameState":
        """Return the successor state after one tick; self is unchanged."""

    @property
    @abstractmethod
    def observability(self) -> Observability:
        """FULL for the true state, PARTIAL for a belief state."""

    @property
    @abstractmethod
    def game_state(self) -> GameState:
        """The concrete state heuristics may read (true state or belief)."""

    def full_state(self) -> GameState:
        """Return the true game state.

        Raises:
            ObservabilityError: If this state was built from partial information
        """
        if self.observability is not Observability.FULL:
            raise ObservabilityError(
                f"{type(self).__name__} holds a belief state; the true game state is not available"
            )
        return self.game_state
