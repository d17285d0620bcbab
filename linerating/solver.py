"""Monotone root finding by bracket expansion and bisection.

Both inversions in this package have the same shape: a scalar function that
never decreases (rating as a function of conductor temperature, temperature
rise as a function of current) and a target value for it. find_root handles
both:

1. Expansion: grow the upper end of the bracket by a constant factor until
   f(upper) reaches the target or the upper end passes a hard limit.
2. Bisection: halve the bracket, keeping the half whose lower end is still
   below the target, until it is no wider than the tolerance.

The midpoint of the final bracket is returned. The procedure never raises
for numerical reasons: if the target is unreachable below the limit the
result is simply the last midpoint and RootResult.limit_reached is set.
Callers that need to tell "solved" from "gave up" should evaluate f at the
result and compare it with the target.

Example:
    >>> from linerating.solver import Bracket, SolverConfig, find_root
    >>>
    >>> config = SolverConfig(tolerance=1e-6, bracket=Bracket(0.0, 1.0))
    >>> result = find_root(lambda x: x**3, 27.0, config)
    >>> print(f"{result.value:.4f}")
    3.0000
"""

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass

from linerating._typecheck import beartype

logger = logging.getLogger(__name__)

# Largest upper bracket end the expansion phase will reach
DEFAULT_UPPER_LIMIT = sys.float_info.max / 2.0


# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class Bracket:
    """Interval [lower, upper] expected to bound a root from below and above."""

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(
                f"Bracket lower end ({self.lower}) must not exceed upper end ({self.upper})"
            )

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def midpoint(self) -> float:
        return self.lower / 2.0 + self.upper / 2.0


@beartype
@dataclass(frozen=True)
class SolverConfig:
    """Settings for find_root.

    Attributes:
        tolerance: Final bracket width, in the units of the unknown
        bracket: Initial bracket
        growth_factor: Multiplier applied to the upper end during expansion
        upper_limit: Expansion stops once the upper end reaches this value
    """

    tolerance: float
    bracket: Bracket
    growth_factor: float = 2.0
    upper_limit: float = DEFAULT_UPPER_LIMIT

    def __post_init__(self) -> None:
        if not self.tolerance > 0:
            raise ValueError(f"Tolerance must be positive, got {self.tolerance}")
        if not self.growth_factor > 1:
            raise ValueError(f"Growth factor must be greater than 1, got {self.growth_factor}")
        if not self.upper_limit > 0:
            raise ValueError(f"Upper limit must be positive, got {self.upper_limit}")
        if not self.bracket.upper > 0:
            raise ValueError(
                f"Bracket upper end must be positive to be expanded, got {self.bracket.upper}"
            )


# =============================================================================
# Result
# =============================================================================


@beartype
@dataclass(frozen=True)
class RootResult:
    """Outcome of a find_root call.

    Attributes:
        value: Midpoint of the final bracket
        bracket: Final bracket
        expansions: Number of times the upper end was grown
        iterations: Number of bisection steps
        limit_reached: Expansion stopped at the upper limit with f(upper)
            still below the target; value is then not a root
    """

    value: float
    bracket: Bracket
    expansions: int = 0
    iterations: int = 0
    limit_reached: bool = False


# =============================================================================
# Root Finder
# =============================================================================


@beartype
def find_root(
    f: Callable[[float], float],
    target: float,
    config: SolverConfig,
) -> RootResult:
    """Find x with f(x) close to target for a non-decreasing f.

    Monotonicity is a precondition, not something checked here. For a
    non-monotone f the result is whichever crossing the bisection happens to
    converge on.

    Args:
        f: Non-decreasing scalar function
        target: Value f should reach
        config: Tolerance, initial bracket and expansion settings

    Returns:
        RootResult whose value lies within tolerance of the root when f is
        continuous and non-decreasing on the final bracket
    """
    lower = config.bracket.lower
    upper = config.bracket.upper

    expansions = 0
    while f(upper) < target and upper < config.upper_limit:
        upper *= config.growth_factor
        expansions += 1

    limit_reached = upper >= config.upper_limit and f(upper) < target
    if limit_reached:
        logger.warning(
            "Bracket expansion hit the upper limit %.3g without reaching target %.6g",
            config.upper_limit,
            target,
        )

    iterations = 0
    while upper - lower > config.tolerance:
        # Halved before adding so the sum cannot overflow near the upper limit
        mid = lower / 2.0 + upper / 2.0
        if mid == lower or mid == upper:
            # Bracket is as narrow as float spacing allows
            break
        if f(mid) < target:
            lower = mid
        else:
            upper = mid
        iterations += 1

    logger.debug(
        "find_root: target=%.6g expansions=%d iterations=%d bracket=[%.9g, %.9g]",
        target,
        expansions,
        iterations,
        lower,
        upper,
    )

    return RootResult(
        value=lower / 2.0 + upper / 2.0,
        bracket=Bracket(lower, upper),
        expansions=expansions,
        iterations=iterations,
        limit_reached=limit_reached,
    )
