"""Client that connects to the lobby server and exchanges chat lines."""

import argparse
import asyncio
import logging
import sys
import threading
from collections import deque

from tilewar.framing import FrameReader, encode_frame
from tilewar.protocol import BROADCAST, NetworkPackage, TextMessage
from tilewar.session import HEADER_SIZE

log = logging.getLogger(__name__)


class ChatClient:
    """A TCP connection to the server that sends and receives packages."""

    def __init__(self) -> None:
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._frames = FrameReader(HEADER_SIZE)
        self._pending: deque[NetworkPackage] = deque()

    @property
    def connected(self) -> bool:
        return self._writer is not None

    @property
    def history(self) -> list[NetworkPackage]:
        """Every package received on the current connection."""
        return self._frames.history

    async def connect(self, host: str = "127.0.0.1", port: int = 0) -> None:
        """Open a connection, dropping any earlier one."""
        if self._writer is not None:
            await self.close()
        self._reader, self._writer = await asyncio.open_connection(host, port)
        self._frames = FrameReader(HEADER_SIZE)
        self._pending.clear()

    def _require(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        if self._reader is None or self._writer is None:
            raise RuntimeError("client is not connected")
        return self._reader, self._writer

    async def send_text(self, text: str) -> None:
        """Send a chat line addressed to every player."""
        _, writer = self._require()
        writer.write(encode_frame(NetworkPackage(0, TextMessage(BROADCAST, text)), HEADER_SIZE))
        await writer.drain()

    async def receive(self) -> NetworkPackage:
        """Wait for the next package; raise ConnectionError when the server hangs up."""
        reader, _ = self._require()
        while not self._pending:
            data = await reader.read(4096)
            if not data:
                raise ConnectionError("connection closed by server")
            self._pending.extend(self._frames.feed(data))
        package = self._pending.popleft()
        if package.text.defined:
            log.info("Client has got new message : '%s'", package.text.text)
        return package

    async def close(self) -> None:
        """Close the connection if it is open."""
        writer = self._writer
        self._reader = self._writer = None
        if writer is not None:
            writer.close()
            try:
                await writer.wait_closed()
            except ConnectionError:
                pass


def _stdin_lines(loop: asyncio.AbstractEventLoop) -> "asyncio.Queue[str | None]":
    queue: asyncio.Queue[str | None] = asyncio.Queue()

    def pump() -> None:
        for line in sys.stdin:
            loop.call_soon_threadsafe(queue.put_nowait, line.rstrip("\n"))
        loop.call_soon_threadsafe(queue.put_nowait, None)

    threading.Thread(target=pump, daemon=True).start()
    return queue


async def _run(host: str, port: int) -> None:
    client = ChatClient()
    await client.connect(host, port)
    print(f"Connected to {host}:{port}!")
    lines = _stdin_lines(asyncio.get_running_loop())

    async def read_loop() -> None:
        while True:
            package = await client.receive()
            if package.text.defined:
                print(package.text.text)

    async def write_loop() -> None:
        while (line := await lines.get()) is not None:
            await client.send_text(line)

    tasks = {asyncio.create_task(read_loop()), asyncio.create_task(write_loop())}
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, ConnectionError):
                raise exc
    finally:
        await client.close()


def main(argv: list[str] | None = None) -> int:
    """Connect to a server and relay lines between the terminal and the game."""
    parser = argparse.ArgumentParser(prog="tilewar-chat", description="Chat with players on a game server.")
    parser.add_argument("port", type=int, help="server port")
    parser.add_argument("--host", default="127.0.0.1", help="server address")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    try:
        asyncio.run(_run(args.host, args.port))
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        print(f"Wrong host or port: {exc}", file=sys.stderr)
        return 1
    return 0