"""Lobby server: queues incoming players and starts a game for every pair."""

import argparse
import asyncio
import logging
import sys

from tilewar.framing import FrameReader
from tilewar.protocol import NetworkPackage
from tilewar.session import HEADER_SIZE, GameSession

log = logging.getLogger(__name__)


class LobbyServer:
    """Accepts players over TCP and groups them into game sessions."""

    required_players = 2

    def __init__(self) -> None:
        self._server: asyncio.AbstractServer | None = None
        self.queue: list[asyncio.StreamWriter] = []
        self.games: list[GameSession] = []
        self.history: list[NetworkPackage] = []
        self._sessions: dict[asyncio.StreamWriter, GameSession] = {}

    @property
    def is_listening(self) -> bool:
        return self._server is not None

    @property
    def users(self) -> list[object]:
        """Peer addresses of players still waiting for a game."""
        return [writer.get_extra_info("peername") for writer in self.queue]

    async def start(self, host: str = "0.0.0.0", port: int = 0) -> int:
        """Begin listening; return the port actually bound."""
        if self._server is not None:
            raise RuntimeError("server is already listening")
        self._server = await asyncio.start_server(self._serve_client, host, port)
        log.info("The server has been set up")
        return self._server.sockets[0].getsockname()[1]

    async def _serve_forever(self) -> None:
        if self._server is None:
            raise RuntimeError("server is not listening")
        await self._server.serve_forever()

    async def _serve_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        log.info("New connection")
        self.queue.append(writer)
        if len(self.queue) == self.required_players:
            self._create_game()
        frames = FrameReader(HEADER_SIZE)
        try:
            while data := await reader.read(4096):
                for package in frames.feed(data):
                    session = self._sessions.get(writer)
                    if session is None:
                        self._lobby_receive(package)
                    else:
                        session.receive(package)
        except (ConnectionError, ValueError) as exc:
            log.warning("Dropping connection: %s", exc)
        finally:
            if writer in self.queue:
                self.queue.remove(writer)
            writer.close()

    def _lobby_receive(self, package: NetworkPackage) -> None:
        self.history.append(package)
        if package.text.defined:
            log.info("Server has got new message : '%s'", package.text.text)

    def _create_game(self) -> None:
        delivery = {pid: self.queue.pop(0) for pid in range(1, self.required_players + 1)}
        session = GameSession(delivery, self._game_over)
        self.games.append(session)
        for writer in delivery.values():
            self._sessions[writer] = session

    def _game_over(self, session: GameSession) -> None:
        if session in self.games:
            self.games.remove(session)
        for writer in session.players.values():
            self._sessions.pop(writer, None)

    async def close(self) -> None:
        """Drop waiting players, end every game and stop listening."""
        if self._server is None:
            return
        for writer in self.queue:
            writer.close()
        self.queue.clear()
        for session in self.games:
            session.close()
        self.games.clear()
        self._sessions.clear()
        server, self._server = self._server, None
        server.close()
        await server.wait_closed()
        log.info("Server has been stopped!")


async def _run(host: str, port: int) -> None:
    server = LobbyServer()
    try:
        await server.start(host, port)
        await server._serve_forever()
    finally:
        await server.close()


def main(argv: list[str] | None = None) -> int:
    """Run the lobby server until interrupted."""
    parser = argparse.ArgumentParser(prog="tilewar-server", description="Run the game lobby server.")
    parser.add_argument("port", type=int, help="TCP port to listen on")
    parser.add_argument("--host", default="0.0.0.0", help="address to bind")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        asyncio.run(_run(args.host, args.port))
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        print(f"Unable to start the server: {exc}.", file=sys.stderr)
        return 1
    return 0