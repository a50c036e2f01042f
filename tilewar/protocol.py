"""Messages exchanged between game clients and the server, and their wire format.

Values are written big-endian: booleans as one byte, integers as unsigned
64-bit numbers and strings as a 32-bit byte length followed by UTF-16BE
text, with length 0xFFFFFFFF marking an absent string.
"""

import struct
from dataclasses import dataclass, field

BROADCAST = 2**31 - 1
"""Destination id that addresses every player in a game."""

_NULL_STRING = 0xFFFFFFFF
_BOOL = struct.Struct(">?")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")


def _pack_bool(value: bool) -> bytes:
    return _BOOL.pack(bool(value))


def _pack_u64(value: int) -> bytes:
    if not 0 <= value < 1 << 64:
        raise ValueError(f"{value} does not fit in an unsigned 64-bit field")
    return _U64.pack(value)


def _pack_string(value: str | None) -> bytes:
    if value is None:
        return _U32.pack(_NULL_STRING)
    encoded = value.encode("utf-16-be")
    if len(encoded) >= _NULL_STRING:
        raise ValueError("string is too long to encode")
    return _U32.pack(len(encoded)) + encoded


class _Reader:
    """Sequential reader over an encoded buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def _take(self, size: int) -> bytes:
        if self.remaining < size:
            raise ValueError("truncated package data")
        chunk = bytes(self._data[self._pos:self._pos + size])
        self._pos += size
        return chunk

    def bool(self) -> bool:
        return self._take(1) != b"\x00"

    def u64(self) -> int:
        return _U64.unpack(self._take(8))[0]

    def string(self) -> str | None:
        length = _U32.unpack(self._take(4))[0]
        if length == _NULL_STRING:
            return None
        if length % 2:
            raise ValueError(f"string byte length {length} is not a whole number of UTF-16 units")
        try:
            return self._take(length).decode("utf-16-be")
        except UnicodeDecodeError as exc:
            raise ValueError("string is not valid UTF-16") from exc


@dataclass(frozen=True)
class TextMessage:
    """A chat line addressed to player ``dest``; defined when it carries text."""

    dest: int = 0
    text: str | None = None
    defined: bool | None = None

    def __post_init__(self) -> None:
        if self.defined is None:
            object.__setattr__(self, "defined", self.text is not None)

    def _encode(self) -> bytes:
        return _pack_bool(bool(self.defined)) + _pack_string(self.text) + _pack_u64(self.dest)

    @classmethod
    def _decode(cls, reader: _Reader) -> "TextMessage":
        defined = reader.bool()
        text = reader.string()
        dest = reader.u64()
        return cls(dest=dest, text=text, defined=defined)


@dataclass(frozen=True)
class GameDataMessage:
    """Game state update; carries only its defined flag."""

    defined: bool = False

    def _encode(self) -> bytes:
        return _pack_bool(self.defined)

    @classmethod
    def _decode(cls, reader: _Reader) -> "GameDataMessage":
        return cls(reader.bool())


@dataclass(frozen=True)
class ErrorMessage:
    """Error report; carries only its defined flag."""

    defined: bool = False

    def _encode(self) -> bytes:
        return _pack_bool(self.defined)

    @classmethod
    def _decode(cls, reader: _Reader) -> "ErrorMessage":
        return cls(reader.bool())


@dataclass
class NetworkPackage:
    """One unit of traffic: the sender's id and its optional messages."""

    sender_id: int = 0
    text: TextMessage = field(default_factory=TextMessage)
    game_data: GameDataMessage = field(default_factory=GameDataMessage)
    error: ErrorMessage = field(default_factory=ErrorMessage)

    def update(
        self,
        text: TextMessage | None = None,
        game_data: GameDataMessage | None = None,
        error: ErrorMessage | None = None,
    ) -> None:
        """Replace each part with the given message if that message is defined."""
        if text is not None and text.defined:
            self.text = text
        if game_data is not None and game_data.defined:
            self.game_data = game_data
        if error is not None and error.defined:
            self.error = error

    def to_bytes(self) -> bytes:
        """Encode the package in wire format."""
        return (
            _pack_u64(self.sender_id)
            + self.text._encode()
            + self.game_data._encode()
            + self.error._encode()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "NetworkPackage":
        """Decode exactly one package; raise ValueError on short or extra data."""
        reader = _Reader(data)
        package = cls(
            sender_id=reader.u64(),
            text=TextMessage._decode(reader),
            game_data=GameDataMessage._decode(reader),
            error=ErrorMessage._decode(reader),
        )
        if reader.remaining:
            raise ValueError(f"{reader.remaining} unexpected bytes after package")
        return package