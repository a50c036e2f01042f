import pytest

from tilewar.framing import FrameReader
from tilewar.protocol import BROADCAST, NetworkPackage, TextMessage
from tilewar.session import WAITING, YOUR_TURN, GameSession, GameStatus


class FakeConnection:
    def __init__(self):
        self.chunks = []
        self.closed = False

    def write(self, data):
        self.chunks.append(data)

    def close(self):
        self.closed = True

    def packages(self):
        return FrameReader(8).feed(b"".join(self.chunks))


def _texts(conn):
    return [(p.text.dest, p.text.text) for p in conn.packages()]


def test_first_turn_goes_to_second_player():
    a, b = FakeConnection(), FakeConnection()
    session = GameSession({1: a, 2: b})
    assert session.status is GameStatus.GAMING
    assert session.current_player == 2
    assert _texts(b) == [(2, YOUR_TURN)]
    assert _texts(a) == [(0, WAITING)]


def test_players_are_ordered_by_id():
    a, b, c = FakeConnection(), FakeConnection(), FakeConnection()
    session = GameSession({3: c, 1: a, 2: b})
    assert session.current_player == 2
    session.advance()
    assert session.current_player == 3
    session.advance()
    assert session.current_player == 1


def test_broadcast_is_relayed_and_turn_passes():
    a, b = FakeConnection(), FakeConnection()
    session = GameSession({1: a, 2: b})
    session.receive(NetworkPackage(2, TextMessage(BROADCAST, "hello")))
    pa, pb = a.packages(), b.packages()
    assert pa[1].sender_id == 2 and pa[1].text.text == "hello"
    assert pb[1].text.dest == BROADCAST and pb[1].text.text == "hello"
    assert session.current_player == 1
    assert _texts(a)[-1] == (1, YOUR_TURN)
    assert _texts(b)[-1] == (0, WAITING)
    assert len(session.history) == 1


def test_direct_message_is_not_relayed():
    a, b = FakeConnection(), FakeConnection()
    session = GameSession({1: a, 2: b})
    session.receive(NetworkPackage(1, TextMessage(2, "psst")))
    assert len(a.packages()) == 1
    assert len(b.packages()) == 1
    assert session.current_player == 2


def test_package_without_text_only_recorded():
    a, b = FakeConnection(), FakeConnection()
    session = GameSession({1: a, 2: b})
    session.receive(NetworkPackage(1))
    assert len(session.history) == 1
    assert len(a.packages()) == 1


def test_end_status_calls_game_over():
    ended = []
    session = GameSession({1: FakeConnection(), 2: FakeConnection()}, ended.append)
    session.status = GameStatus.END
    session.advance()
    assert ended == [session]


def test_none_status_sends_nothing():
    a, b = FakeConnection(), FakeConnection()
    session = GameSession({1: a, 2: b})
    session.status = GameStatus.NONE
    session.advance()
    assert len(a.packages()) == 1
    assert session.current_player == 2


def test_close_closes_connections():
    a, b = FakeConnection(), FakeConnection()
    session = GameSession({1: a, 2: b})
    session.close()
    assert a.closed and b.closed and session.closed


def test_empty_game_rejected():
    with pytest.raises(ValueError):
        GameSession({})