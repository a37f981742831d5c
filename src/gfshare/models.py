"""Share value type and its byte encoding."""

from __future__ import annotations

from dataclasses import dataclass, field

from gfshare.errors import MalformedShareError


@dataclass(frozen=True)
class Share:
    """One share: x-coordinate plus one y byte per secret byte.

    Encoded form is ``bytes([x]) + y``.

    Attributes:
        x: Nonzero evaluation point, shared by every byte position.
        y: Polynomial values at x, in secret-byte order.
    """

    x: int
    y: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.x, int) or isinstance(self.x, bool):
            raise MalformedShareError(f"x must be an int, got {type(self.x).__name__}")
        if not 1 <= self.x <= 255:
            raise MalformedShareError(f"x must be in [1, 255], got {self.x}")
        if not isinstance(self.y, (bytes, bytearray, memoryview)):
            raise MalformedShareError(f"y must be bytes-like, got {type(self.y).__name__}")
        if not isinstance(self.y, bytes):
            object.__setattr__(self, "y", bytes(self.y))
        if not self.y:
            raise MalformedShareError("Share must carry at least one y byte")

    def __len__(self) -> int:
        """Length of the secret this share belongs to."""
        return len(self.y)

    def to_bytes(self) -> bytes:
        return bytes([self.x]) + self.y

    @classmethod
    def from_bytes(cls, data: bytes) -> Share:
        if not data:
            raise MalformedShareError("Cannot decode an empty share")
        if len(data) < 2:
            raise MalformedShareError(
                f"Encoded share is truncated: need at least 2 bytes, got {len(data)}"
            )
        return cls(x=data[0], y=bytes(data[1:]))


def encode_share(share: Share) -> bytes:
    return share.to_bytes()


def decode_share(data: bytes) -> Share:
    return Share.from_bytes(data)
