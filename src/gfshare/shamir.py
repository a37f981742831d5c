"""Shamir's (n, k)-threshold secret sharing over GF(256).

Every secret byte is the constant term of its own random polynomial of
degree k-1. All polynomials are evaluated at the same x-coordinates 1..n,
so one share carries one x and one y byte per secret byte. Any k shares
reconstruct the secret; fewer reveal nothing about it.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable, Iterable, Iterator

import numpy as np

from gfshare import field as gf
from gfshare.errors import (
    DuplicateShareError,
    InconsistentSharesError,
    InsufficientSharesError,
    InvalidParametersError,
)
from gfshare.models import Share

logger = logging.getLogger(__name__)

MAX_SHARES = 255

# Returns the requested number of cryptographically secure random bytes.
RandomSource = Callable[[int], bytes]


def check_threshold(k: int) -> None:
    if not 1 <= k <= MAX_SHARES:
        raise InvalidParametersError(f"Need 1 <= k <= {MAX_SHARES}, got k={k}")


def check_share_count(k: int, n: int) -> None:
    if not k <= n <= MAX_SHARES:
        raise InvalidParametersError(
            f"Need k <= n <= {MAX_SHARES}, got k={k}, n={n}"
        )


def check_secret(secret: bytes) -> bytes:
    """Copy a bytes-like secret; reject anything else and empty secrets."""
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidParametersError(
            f"Secret must be bytes-like, got {type(secret).__name__}"
        )
    secret = bytes(secret)
    if not secret:
        raise InvalidParametersError("Secret must be non-empty")
    return secret


def _random_bytes(rng: RandomSource, count: int) -> bytes:
    data = rng(count)
    if len(data) != count:
        raise RuntimeError(
            f"Random source returned {len(data)} bytes, expected {count}"
        )
    return bytes(data)


class Dealer:
    """Lazy share generator for a single secret.

    Coefficients are drawn once, at construction. Iterating yields shares
    for x = 1, 2, ..., 255 and every iteration replays the same
    polynomials, so shares taken from separate iterations stay compatible.

    Args:
        secret: Non-empty byte string to split.
        threshold: Number of shares needed to reconstruct (k).
        rng: Random source; defaults to secrets.token_bytes.
    """

    def __init__(
        self,
        secret: bytes,
        threshold: int,
        rng: RandomSource | None = None,
    ) -> None:
        check_threshold(threshold)
        secret = check_secret(secret)
        if rng is None:
            rng = secrets.token_bytes

        width = len(secret)
        coeffs = np.empty((threshold, width), dtype=np.uint8)
        coeffs[0] = np.frombuffer(secret, dtype=np.uint8)
        if threshold > 1:
            noise = _random_bytes(rng, (threshold - 1) * width)
            coeffs[1:] = np.frombuffer(noise, dtype=np.uint8).reshape(
                threshold - 1, width
            )
        coeffs.setflags(write=False)

        self.threshold = threshold
        self._coeffs = coeffs
        logger.debug(
            "Dealer ready: threshold=%d, secret length=%d", threshold, width
        )

    @property
    def secret_length(self) -> int:
        return self._coeffs.shape[1]

    def share_at(self, x: int) -> Share:
        """Evaluate every byte polynomial at x."""
        if not 1 <= x <= MAX_SHARES:
            raise InvalidParametersError(f"x must be in [1, {MAX_SHARES}], got {x}")
        return Share(x=x, y=gf.horner(self._coeffs, x).tobytes())

    def __iter__(self) -> Iterator[Share]:
        for x in range(1, MAX_SHARES + 1):
            yield self.share_at(x)

    def take(self, n: int) -> list[Share]:
        """First n shares (x = 1..n)."""
        check_share_count(self.threshold, n)
        return [self.share_at(x) for x in range(1, n + 1)]


def generate(
    secret: bytes,
    k: int,
    n: int,
    rng: RandomSource | None = None,
) -> list[Share]:
    """Split secret into n shares with threshold k.

    Parameters are validated before any randomness is drawn.

    Raises:
        InvalidParametersError: k or n outside 1 <= k <= n <= 255, or a
            secret that is empty or not bytes-like.
        RuntimeError: the random source returned too few bytes.
    """
    # n must be valid before the dealer draws its coefficients.
    check_share_count(k, n)
    dealer = Dealer(secret, k, rng)
    shares = dealer.take(n)
    logger.debug(
        "Generated %d shares (threshold=%d) for %d-byte secret",
        n,
        k,
        dealer.secret_length,
    )
    return shares


def _lagrange_weights(xs: list[int]) -> list[int]:
    """Lagrange basis polynomials evaluated at x = 0.

    For points x_0..x_{m-1}:
        L_j(0) = prod_{m != j} (0 - x_m) / (x_j - x_m)
               = prod_{m != j} x_m / (x_m - x_j)

    Negation is the identity in characteristic 2, and subtraction is XOR.
    """
    weights = []
    for j, xj in enumerate(xs):
        w = 1
        for m, xm in enumerate(xs):
            if m == j:
                continue
            w = gf.mul(w, gf.div(xm, gf.sub(xm, xj)))
        weights.append(w)
    return weights


def _reconstruct(shares: Iterable[Share], min_shares: int) -> bytes:
    shares = list(shares)
    if len(shares) < min_shares:
        raise InsufficientSharesError(
            f"Need at least {min_shares} shares to reconstruct, got {len(shares)}"
        )

    xs = [s.x for s in shares]
    if len(set(xs)) != len(xs):
        dupes = sorted({x for x in xs if xs.count(x) > 1})
        raise DuplicateShareError(f"Duplicate x-coordinates in shares: {dupes}")

    lengths = {len(s.y) for s in shares}
    if len(lengths) != 1:
        raise InconsistentSharesError(
            f"All shares must have the same length, got {sorted(lengths)}"
        )

    weights = _lagrange_weights(xs)
    secret = np.zeros(len(shares[0].y), dtype=np.uint8)
    for share, w in zip(shares, weights, strict=True):
        secret ^= gf.scale(np.frombuffer(share.y, dtype=np.uint8), w)

    logger.debug(
        "Recovered %d-byte secret from %d shares", secret.size, len(shares)
    )
    return secret.tobytes()


def recover(shares: Iterable[Share]) -> bytes:
    """Reconstruct the secret via Lagrange interpolation at x = 0.

    The original threshold is unknown here, so only 2 shares are required.
    Given fewer shares than the threshold used at generation, the result is
    wrong and nothing flags it: that is inherent to the scheme.

    Raises:
        InsufficientSharesError: fewer than 2 shares.
        DuplicateShareError: two shares with the same x.
        InconsistentSharesError: y sequences of different lengths.
    """
    return _reconstruct(shares, min_shares=2)


class ShamirSecretSharing:
    """(n, k)-threshold secret sharing over GF(256) with a fixed threshold.

    Knowing k lets reconstruct() reject fewer than k shares, and makes
    k = 1 (every share is the secret) recoverable from a single share.

    Args:
        threshold: Shares needed to reconstruct (k), in [1, 255].
        rng: Random source; defaults to secrets.token_bytes.
    """

    def __init__(self, threshold: int, rng: RandomSource | None = None) -> None:
        check_threshold(threshold)
        self.threshold = threshold
        self.rng = rng

    def dealer(self, secret: bytes) -> Dealer:
        return Dealer(secret, self.threshold, self.rng)

    def share(self, secret: bytes, n: int) -> list[Share]:
        """Split secret into n shares. Default x-points: 1..n."""
        return generate(secret, self.threshold, n, self.rng)

    def reconstruct(self, shares: Iterable[Share]) -> bytes:
        """Reconstruct secret from at least `threshold` shares."""
        return _reconstruct(shares, min_shares=self.threshold)
