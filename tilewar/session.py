"""A running game on the server: turn rotation and chat relay between players."""

import logging
from collections.abc import Callable, Mapping
from enum import IntEnum
from typing import Protocol

from tilewar.framing import encode_frame
from tilewar.protocol import BROADCAST, NetworkPackage, TextMessage

log = logging.getLogger(__name__)

HEADER_SIZE = 8
"""Width of the length prefix used on server connections."""

YOUR_TURN = "Your turn"
WAITING = "Waiting for"


class Connection(Protocol):
    """Anything packages can be written to and that can be closed."""

    def write(self, data: bytes) -> object: ...

    def close(self) -> object: ...


class GameStatus(IntEnum):
    """Lifecycle of a game session."""

    NONE = 0
    GAMING = 1
    END = 2**31 - 1


class GameSession:
    """Players keyed by id, taking turns in ascending id order."""

    def __init__(
        self,
        players: Mapping[int, Connection],
        on_game_over: Callable[["GameSession"], None] | None = None,
    ) -> None:
        if not players:
            raise ValueError("a game needs at least one player")
        self.players: dict[int, Connection] = dict(sorted(players.items()))
        self._order = list(self.players)
        self._current = 0
        self.on_game_over = on_game_over
        self.history: list[NetworkPackage] = []
        self.closed = False
        self.status = GameStatus.GAMING
        self.advance()

    @property
    def current_player(self) -> int:
        """Id of the player whose turn it is."""
        return self._order[self._current]

    def _send(self, connection: Connection, package: NetworkPackage) -> None:
        connection.write(encode_frame(package, HEADER_SIZE))

    def _send_all(self, connections: list[Connection], package: NetworkPackage) -> None:
        for connection in connections:
            self._send(connection, package)

    def receive(self, package: NetworkPackage) -> None:
        """Handle a package from a player; broadcast text is relayed and ends the turn."""
        self.history.append(package)
        if not package.text.defined:
            return
        log.info("We get message: %s", package.text.text)
        if package.text.dest == BROADCAST:
            relay = NetworkPackage(
                package.sender_id,
                TextMessage(dest=BROADCAST, text=package.text.text, defined=True),
            )
            self._send_all(list(self.players.values()), relay)
            self.advance()

    def advance(self) -> None:
        """Act on the current status: pass the turn on, or announce the end of the game."""
        if self.status is GameStatus.GAMING:
            log.info("Gaming mode")
            self._current = (self._current + 1) % len(self._order)
            current = self.current_player
            self._send(self.players[current], NetworkPackage(0, TextMessage(current, YOUR_TURN)))
            others = [conn for pid, conn in self.players.items() if pid != current]
            self._send_all(others, NetworkPackage(0, TextMessage(0, WAITING)))
        elif self.status is GameStatus.NONE:
            log.warning("None-state, the game was not set up")
        else:
            log.info("Game over")
            if self.on_game_over is not None:
                self.on_game_over(self)

    def close(self) -> None:
        """Close every player's connection."""
        if self.closed:
            return
        for connection in self.players.values():
            connection.close()
        self.closed = True