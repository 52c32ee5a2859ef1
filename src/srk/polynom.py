# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Polynomial calculation functions.

Mainly lagrange interpolation logic over plain (arbitrary sized)
integers. There is no prime field here, so instead of a multiplicative
inverse every division has to be exact.

Helpful introduction: https://www.youtube.com/watch?v=kkMps3X_tEE
(Simple introduction to Shamir's Secret Sharing and Lagrange interpolation)
"""

import random
import logging
from typing import List
from typing import Tuple
from typing import Callable
from typing import Iterator
from typing import Sequence
from typing import NamedTuple

from . import errors
from . import common_types as ct

logger = logging.getLogger(__name__)


randrange = random.SystemRandom().randrange

# upper bound (exclusive) for random coefficients generated by split
DEFAULT_COEFF_BOUND = 2 ** 128


class Point(NamedTuple):

    x: ct.XCoord
    y: ct.YCoord


Points = Sequence[Point]

Coefficients = List[int]


class BasisFraction(NamedTuple):
    """Unreduced fraction numer/denum of a lagrange basis polynomial."""

    numer: int
    denum: int


class InterpolationResult(NamedTuple):

    value        : int
    inexact_terms: Tuple[int, ...]


def prod(vals: Sequence[int]) -> int:
    """Product of numbers.

    This is sometimes also denoted by Π (upper case PI). The product
    of no values is 1.
    """
    accu = 1
    for val in vals:
        accu *= val
    return accu


def validate_distinct(points: Points) -> None:
    seen = set()
    for p in points:
        if p.x in seen:
            raise errors.DuplicateXCoordinate(p.x)
        seen.add(p.x)


def lagrange_basis(points: Points, j: int, at_x: int) -> BasisFraction:
    r"""Basis polynomial of points[j], evaluated at at_x.

    # \delta_j(x) = \prod{ \frac{x - x_i}{x_j - x_i} }
    # \space
    # \text{for} \space i \in C, i \not= j
    """
    xj = points[j].x

    # iterate in the given order so results are reproducible
    others = [p for i, p in enumerate(points) if i != j]

    numer = prod([at_x - o.x for o in others])
    denum = prod([xj   - o.x for o in others])

    if denum == 0:
        dupe_x = next(o.x for o in others if o.x == xj)
        raise errors.DuplicateXCoordinate(dupe_x)

    return BasisFraction(numer, denum)


def _interpolation_terms(points: Points, at_x: int) -> Iterator[Tuple[int, int, bool]]:
    for j, p in enumerate(points):
        numer, denum = lagrange_basis(points, j, at_x)
        term_numer   = p.y * numer
        quotient, remainder = divmod(term_numer, denum)
        yield (j, quotient, remainder == 0)


def _interpolate(points: Points, at_x: int, strict: bool) -> InterpolationResult:
    if len(points) == 0:
        raise errors.InsufficientShares(0, 1)

    validate_distinct(points)

    accu = 0
    inexact_terms: List[int] = []
    for j, term, is_exact in _interpolation_terms(points, at_x):
        if not is_exact:
            if strict:
                raise errors.InexactInterpolation(j)
            logger.warning(f"Non-integer division for term {j}. Result might be imprecise.")
            inexact_terms.append(j)
        accu += term

    return InterpolationResult(accu, tuple(inexact_terms))


def interpolate_checked(points: Points, at_x: int) -> InterpolationResult:
    """Interpolate y value at x, reporting inexact terms.

    Terms that do not divide exactly are floor divided and their
    indexes are collected in InterpolationResult.inexact_terms.
    """
    return _interpolate(points, at_x, strict=False)


def interpolate(points: Points, at_x: int, strict: bool = True) -> int:
    """Interpolate y value at x for a polynomial.

    With strict=True the first term that is not exactly divisible
    raises InexactInterpolation. With strict=False the floor divided
    sum is returned regardless.
    """
    return _interpolate(points, at_x, strict=strict).value


def poly_eval_fn(coeffs: Coefficients) -> Callable[[int], int]:
    """Return function to evaluate polynomial at x."""

    def eval_at(at_x: int) -> int:
        """Evaluate polynomial at x (horner's method)."""
        y = 0
        for coeff in reversed(coeffs):
            y = y * at_x + coeff
        return y

    return eval_at


def _split(
    secret     : int,
    threshold  : int,
    num_shares : int,
    make_coeff : ct.MakeCoeff,
    coeff_bound: int,
) -> Tuple[Point, ...]:
    # The coefficients of the polynomial are ordered in ascending
    # powers of x, so coeffs = [2, 5, 3] represents 2x° + 5x¹ + 3x²
    #
    # Note that the secret in the above case is 2 (the 0th
    # coefficient), which corresponds to the y value when we evaluate
    # at x=0. This is also why other implementations call this value
    # "intercept" or "y_intercept".
    coeffs: Coefficients = [secret]

    while len(coeffs) < threshold:
        coeffs.append(make_coeff(coeff_bound))

    eval_at = poly_eval_fn(coeffs)

    points = tuple(Point(x, eval_at(x)) for x in range(1, num_shares + 1))
    assert len(points) == num_shares

    # For x = 1..k every basis value at x=0 is an integer (a signed
    # binomial coefficient), so the prefix always joins exactly.
    recoverd_secret = join(points, threshold)
    assert recoverd_secret == secret

    return points


def split(
    secret     : int,
    threshold  : int,
    num_shares : int,
    make_coeff : ct.MakeCoeff = randrange,
    coeff_bound: int = DEFAULT_COEFF_BOUND,
) -> Tuple[Point, ...]:
    """Generate points of a split secret at x = 1..num_shares."""
    if num_shares < 1:
        raise ValueError("number of pieces too low, must be at least 1")
    elif threshold < 1:
        raise ValueError("threshold too low, must be at least 1")
    elif threshold > num_shares:
        raise ValueError("threshold too high, must be <= number of pieces")
    elif secret < 0:
        raise ValueError("Invalid secret, must be a positive integer")
    else:
        return _split(
            secret=secret,
            threshold=threshold,
            num_shares=num_shares,
            make_coeff=make_coeff,
            coeff_bound=coeff_bound,
        )


def join(points: Points, threshold: int, strict: bool = True) -> int:
    """Recover the secret from the first threshold points."""
    if len(points) >= threshold:
        return interpolate(points[:threshold], at_x=0, strict=strict)
    else:
        raise errors.InsufficientShares(len(points), threshold)
