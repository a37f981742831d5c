"""Tests for gfshare.models module."""

from __future__ import annotations

import pytest

from gfshare.errors import MalformedShareError
from gfshare.models import Share, decode_share, encode_share


class TestShare:
    def test_valid(self):
        s = Share(x=3, y=b"\x01\x02")
        assert s.x == 3
        assert s.y == b"\x01\x02"
        assert len(s) == 2

    def test_y_coerced_to_bytes(self):
        s = Share(x=1, y=bytearray(b"ab"))
        assert isinstance(s.y, bytes)
        assert s == Share(x=1, y=b"ab")

    @pytest.mark.parametrize("x", [0, 256, -1])
    def test_invalid_x(self, x: int):
        with pytest.raises(MalformedShareError, match=r"\[1, 255\]"):
            Share(x=x, y=b"\x00")

    @pytest.mark.parametrize("x", [1.5, "1", True, None])
    def test_non_int_x(self, x: object):
        with pytest.raises(MalformedShareError, match="x must be an int"):
            Share(x=x, y=b"a")  # type: ignore[arg-type]

    @pytest.mark.parametrize("y", [3, "abc", [1, 2]])
    def test_non_bytes_y(self, y: object):
        with pytest.raises(MalformedShareError, match="bytes-like"):
            Share(x=1, y=y)  # type: ignore[arg-type]

    def test_empty_y(self):
        with pytest.raises(MalformedShareError, match="at least one"):
            Share(x=1, y=b"")

    def test_frozen(self):
        s = Share(x=1, y=b"a")
        with pytest.raises(AttributeError):
            s.x = 2  # type: ignore[misc]

    def test_repr_hides_y(self):
        assert "secret-ish" not in repr(Share(x=1, y=b"secret-ish"))

    def test_hashable(self):
        assert len({Share(1, b"a"), Share(1, b"a"), Share(2, b"a")}) == 2


class TestEncoding:
    def test_encode_layout(self):
        assert encode_share(Share(x=7, y=b"\xaa\xbb")) == b"\x07\xaa\xbb"

    def test_decode(self):
        s = decode_share(b"\x07\xaa\xbb")
        assert s.x == 7
        assert s.y == b"\xaa\xbb"

    def test_round_trip(self):
        for s in [Share(1, b"\x00"), Share(255, bytes(range(256))), Share(42, b"hello")]:
            assert decode_share(encode_share(s)) == s
            assert Share.from_bytes(s.to_bytes()) == s

    def test_decode_preserves_length(self):
        data = b"\x05" + bytes(100)
        assert len(decode_share(data).y) == len(data) - 1

    def test_decode_empty(self):
        with pytest.raises(MalformedShareError, match="empty"):
            decode_share(b"")

    def test_decode_truncated(self):
        with pytest.raises(MalformedShareError, match="truncated"):
            decode_share(b"\x01")

    def test_decode_zero_x(self):
        with pytest.raises(MalformedShareError):
            decode_share(b"\x00\x01\x02")

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            decode_share(b"")
