import asyncio

import pytest

from tilewar.chat import ChatClient, main
from tilewar.framing import FrameReader, encode_frame
from tilewar.protocol import BROADCAST, NetworkPackage, TextMessage


async def _serve(handler):
    server = await asyncio.start_server(handler, "127.0.0.1", 0)
    return server, server.sockets[0].getsockname()[1]


@pytest.mark.asyncio
async def test_send_text_frames_broadcast():
    received = asyncio.Queue()

    async def handler(reader, writer):
        frames = FrameReader(8)
        while data := await reader.read(4096):
            for package in frames.feed(data):
                received.put_nowait(package)
        writer.close()

    server, port = await _serve(handler)
    client = ChatClient()
    try:
        await client.connect("127.0.0.1", port)
        assert client.connected is True
        await client.send_text("hello")
        package = await asyncio.wait_for(received.get(), 2)
        assert package == NetworkPackage(0, TextMessage(BROADCAST, "hello"))
        assert package.sender_id == 0
        assert package.text.dest == BROADCAST
        assert package.text.text == "hello"
    finally:
        await client.close()
        server.close()


@pytest.mark.asyncio
async def test_receive_split_frame():
    frame = encode_frame(NetworkPackage(0, TextMessage(5, "Your turn")), 8)

    async def handler(reader, writer):
        writer.write(frame[:5])
        await writer.drain()
        await asyncio.sleep(0.05)
        writer.write(frame[5:])
        await writer.drain()
        await reader.read()
        writer.close()

    server, port = await _serve(handler)
    client = ChatClient()
    try:
        await client.connect("127.0.0.1", port)
        package = await asyncio.wait_for(client.receive(), 2)
        assert (package.text.dest, package.text.text) == (5, "Your turn")
        assert client.history == [package]
    finally:
        await client.close()
        server.close()


@pytest.mark.asyncio
async def test_receive_two_packages_in_order():
    first = NetworkPackage(0, TextMessage(1, "one"))
    second = NetworkPackage(0, TextMessage(1, "two"))

    async def handler(reader, writer):
        writer.write(encode_frame(first, 8) + encode_frame(second, 8))
        await writer.drain()
        await reader.read()
        writer.close()

    server, port = await _serve(handler)
    client = ChatClient()
    try:
        await client.connect("127.0.0.1", port)
        got = [await asyncio.wait_for(client.receive(), 2) for _ in range(2)]
        assert got == [first, second]
    finally:
        await client.close()
        server.close()


@pytest.mark.asyncio
async def test_receive_after_hangup_raises():
    async def handler(reader, writer):
        writer.close()

    server, port = await _serve(handler)
    client = ChatClient()
    try:
        await client.connect("127.0.0.1", port)
        with pytest.raises(ConnectionError):
            await asyncio.wait_for(client.receive(), 2)
    finally:
        await client.close()
        server.close()


@pytest.mark.asyncio
async def test_send_without_connection_raises():
    client = ChatClient()
    with pytest.raises(RuntimeError):
        await client.send_text("nobody")


@pytest.mark.asyncio
async def test_close_disconnects():
    async def handler(reader, writer):
        await reader.read()
        writer.close()

    server, port = await _serve(handler)
    client = ChatClient()
    await client.connect("127.0.0.1", port)
    await client.close()
    server.close()
    assert client.connected is False


def test_main_rejects_missing_port():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2