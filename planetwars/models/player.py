"""Player identities."""

from enum import Enum


class Player(Enum):
    """Owner of a planet or transporter.

    NEUTRAL owns unclaimed planets. It never launches transporters and its
    planets never grow.
    """

    PLAYER1 = "Player1"
    PLAYER2 = "Player2"
    NEUTRAL = "Neutral"

    def opponent(self) -> "Player":
        """Return the other real player (NEUTRAL maps to itself)."""
        if self is Player.PLAYER1:
            return Player.PLAYER2
        if self is Player.PLAYER2:
            return Player.PLAYER1
        return Player.NEUTRAL

    @property
    def is_real(self) -> bool:
        return self is not Player.NEUTRAL


REAL_PLAYERS = (Player.PLAYER1, Player.PLAYER2)
