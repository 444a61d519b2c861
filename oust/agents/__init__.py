"""Players that produce complete Oust turns."""

from .players import AlphaBetaPlayer, Player, RandomPlayer

__all__ = ["AlphaBetaPlayer", "Player", "RandomPlayer"]
