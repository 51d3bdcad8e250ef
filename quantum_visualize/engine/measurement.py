"""Outcome probabilities and single-shot measurement sampling."""

from __future__ import annotations

import numpy as np


class MeasurementEngine:
    """Born-rule probabilities and inverse-CDF sampling over basis indices."""

    @staticmethod
    def probabilities(state) -> np.ndarray:
        """Returns |amplitude|^2 for each basis state."""
        return np.abs(np.asarray(state, dtype=np.complex128)) ** 2

    @staticmethod
    def measure(state, rng: np.random.Generator | None = None) -> int:
        """Draw one basis index without collapsing the state.

        Returns the smallest index whose cumulative probability is at least
        a uniform draw from [0, 1). Falls back to the last index when
        rounding leaves the total slightly below the draw.
        """
        rng = rng or np.random.default_rng()
        cdf = np.cumsum(MeasurementEngine.probabilities(state))
        r = rng.random()
        for i, c in enumerate(cdf):
            if r <= c:
                return i
        return len(cdf) - 1

    @staticmethod
    def most_likely(state) -> tuple[int, float]:
        """(index, probability) of the first maximum-probability basis state."""
        probs = MeasurementEngine.probabilities(state)
        best = int(np.argmax(probs))
        return best, float(probs[best])
