#!/usr/bin/env python
# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Shamir Secret recovery.

Shares are decoded to points, the first k points (in the order they
were given) are selected and the polynomial is interpolated at x=0.
Any k correct points yield the same secret, so a stable prefix is all
the selection policy needed. If shares arrive in an arbitrary order,
sort them (e.g. by index) before calling reconstruct_secret.
"""

import logging
from typing import List
from typing import Tuple

from . import errors
from . import polynom
from . import enc_util
from . import parameters
from . import common_types as ct

logger = logging.getLogger(__name__)


def parse_index(raw_index: str) -> ct.XCoord:
    x = enc_util.parse_decimal(str(raw_index))
    if x is None:
        raise errors.InvalidShare(raw_index)
    else:
        return x


def decode_share(share: ct.ShareRecord) -> polynom.Point:
    x    = parse_index(share.index)
    base = enc_util.parse_base(share.base)
    y    = enc_util.digits2int(share.digits, base)
    return polynom.Point(x, y)


def decode_shares(shares: ct.ShareRecords) -> Tuple[polynom.Point, ...]:
    points: List[polynom.Point] = []
    for share in shares:
        point = decode_share(share)
        logger.debug(f"decoded share {share.index} (base {share.base}, {len(share.digits)} digits)")
        points.append(point)
    return tuple(points)


def select_points(points: polynom.Points, threshold: int) -> Tuple[polynom.Point, ...]:
    """Select the first threshold points in input order."""
    unique_coords = {p.x for p in points}
    if len(unique_coords) < threshold:
        raise errors.InsufficientShares(len(unique_coords), threshold)

    selected = tuple(points[:threshold])
    polynom.validate_distinct(selected)
    return selected


def reconstruct_secret(
    shares   : ct.ShareRecords,
    threshold: int,
    strict   : bool = True,
) -> ct.Secret:
    """Recover the secret from at least threshold shares.

    With strict=False, terms that do not divide exactly are floor
    divided and logged instead of raising InexactInterpolation.
    """
    if threshold < parameters.MIN_THRESHOLD:
        raise errors.InvalidThreshold(threshold)

    points   = decode_shares(shares)
    selected = select_points(points, threshold)

    logger.info(f"Interpolating secret with {threshold} of {len(points)} shares")
    return polynom.interpolate(selected, at_x=0, strict=strict)


def reconstruct_secret_str(
    shares   : ct.ShareRecords,
    threshold: int,
    strict   : bool = True,
) -> str:
    secret = reconstruct_secret(shares, threshold, strict=strict)
    return enc_util.secret2str(secret)


def reconstruct(share_set: ct.ShareSet, strict: bool = True) -> ct.Secret:
    """Recover the secret of a share set, using its threshold."""
    params = share_set.params
    parameters.validate_available(params, len(share_set.records))
    return reconstruct_secret(share_set.records, params.threshold, strict=strict)
