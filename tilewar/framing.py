"""Length-prefixed framing of packages over a byte stream."""

from tilewar.protocol import NetworkPackage

HEADER_SIZES = (2, 8)
"""Supported header widths in bytes: 16-bit and 64-bit length prefixes."""


def _check_header_size(header_size: int) -> None:
    if header_size not in HEADER_SIZES:
        raise ValueError(f"header size must be one of {HEADER_SIZES}, got {header_size}")


def encode_frame(package: NetworkPackage, header_size: int = 8) -> bytes:
    """Encode ``package`` preceded by its big-endian payload length."""
    _check_header_size(header_size)
    payload = package.to_bytes()
    if len(payload) >= 1 << (8 * header_size):
        raise ValueError(f"payload of {len(payload)} bytes does not fit a {header_size}-byte header")
    return len(payload).to_bytes(header_size, "big") + payload


class FrameReader:
    """Reassembles framed packages from arbitrarily split chunks of a stream."""

    def __init__(self, header_size: int = 8) -> None:
        _check_header_size(header_size)
        self.header_size = header_size
        self.history: list[NetworkPackage] = []
        self._buffer = bytearray()
        self._block_size: int | None = None

    @property
    def buffered(self) -> int:
        """Bytes received but not yet turned into a package, header included."""
        pending_header = self.header_size if self._block_size is not None else 0
        return len(self._buffer) + pending_header

    def feed(self, data: bytes) -> list[NetworkPackage]:
        """Add received bytes and return the packages completed by them, in order."""
        self._buffer += data
        packages: list[NetworkPackage] = []
        while True:
            if self._block_size is None:
                if len(self._buffer) < self.header_size:
                    break
                self._block_size = int.from_bytes(self._buffer[:self.header_size], "big")
                del self._buffer[:self.header_size]
            if len(self._buffer) < self._block_size:
                break
            block = bytes(self._buffer[:self._block_size])
            del self._buffer[:self._block_size]
            self._block_size = None
            package = NetworkPackage.from_bytes(block)
            self.history.append(package)
            packages.append(package)
        return packages