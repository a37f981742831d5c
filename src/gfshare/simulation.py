"""Monte Carlo check of the threshold property.

Recovery from k shares must always return the secret; interpolating the
same polynomials from k-1 shares must produce uniformly distributed noise.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import numpy as np
from scipy.stats import chisquare

from gfshare.errors import InvalidParametersError
from gfshare.models import Share
from gfshare.shamir import ShamirSecretSharing, check_secret, check_share_count


def uniformity_pvalue(samples: bytes) -> float:
    """Chi-square p-value of samples against the uniform distribution on bytes."""
    counts = np.bincount(np.frombuffer(samples, dtype=np.uint8), minlength=256)
    if counts.sum() == 0:
        raise ValueError("Need at least one sample")
    return float(chisquare(counts).pvalue)


@dataclass
class SimulationResult:
    """Aggregated results from a Monte Carlo run.

    Attributes:
        n_trials: Number of simulation trials.
        n_recovered: Trials where k shares returned the secret.
        n_guessed: Trials where k-1 shares happened to return the secret.
        recovery_rate: Empirical P[k shares recover the secret].
        guess_rate: Empirical P[k-1 shares recover the secret].
        uniformity_pvalue: Chi-square p-value of all k-1 share guesses.
    """

    n_trials: int
    n_recovered: int
    n_guessed: int
    recovery_rate: float
    guess_rate: float
    uniformity_pvalue: float


@dataclass
class TrialOutcome:
    """Outcome of a single simulation trial."""

    picked_shares: list[Share]
    recovered: bytes
    guess: bytes
    original_secret: bytes


class LeakageSimulator:
    """Monte Carlo engine for the k versus k-1 share property.

    Args:
        secret: Secret to split on every trial.
        threshold: Reconstruction threshold, at least 2.
        n_shares: Shares generated per trial.
        seed: RNG seed for reproducibility. Seeded runs are not secure and
            exist only for testing.
    """

    def __init__(
        self,
        secret: bytes,
        threshold: int,
        n_shares: int,
        seed: int | None = None,
    ) -> None:
        if threshold < 2:
            raise InvalidParametersError(
                f"Leakage simulation needs threshold >= 2, got {threshold}"
            )
        check_share_count(threshold, n_shares)
        self.secret = check_secret(secret)
        self.threshold = threshold
        self.n_shares = n_shares
        self.rng = random.Random(seed)
        self.scheme = ShamirSecretSharing(threshold, rng=self.rng.randbytes)
        self._attacker = ShamirSecretSharing(threshold - 1)

    def simulate_trial(self) -> TrialOutcome:
        """Split once, then reconstruct from a random k-subset and its k-1 prefix."""
        shares = self.scheme.share(self.secret, self.n_shares)
        picked = self.rng.sample(shares, self.threshold)
        return TrialOutcome(
            picked_shares=picked,
            recovered=self.scheme.reconstruct(picked),
            guess=self._attacker.reconstruct(picked[:-1]),
            original_secret=self.secret,
        )

    def run(self, n_trials: int = 1000) -> SimulationResult:
        """Run multiple trials and aggregate results."""
        if n_trials < 1:
            raise ValueError(f"n_trials must be positive, got {n_trials}")

        n_recovered = 0
        n_guessed = 0
        guesses = bytearray()

        for _ in range(n_trials):
            outcome = self.simulate_trial()
            if outcome.recovered == outcome.original_secret:
                n_recovered += 1
            if outcome.guess == outcome.original_secret:
                n_guessed += 1
            guesses += outcome.guess

        return SimulationResult(
            n_trials=n_trials,
            n_recovered=n_recovered,
            n_guessed=n_guessed,
            recovery_rate=n_recovered / n_trials,
            guess_rate=n_guessed / n_trials,
            uniformity_pvalue=uniformity_pvalue(bytes(guesses)),
        )
