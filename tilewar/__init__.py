"""A two-player turn-based strategy game on a tile board, with a lobby server and chat client."""

__version__ = "0.1.0"