# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Threshold parameters (k of n) and their defaults."""

import os
import re
import logging
from typing import Optional
from typing import NamedTuple

from . import errors

logger = logging.getLogger(__name__)


MIN_THRESHOLD = 1

DEFAULT_SSS_T = 3
DEFAULT_SSS_N = 5

DEFAULT_BASE = 16

DEFAULT_SSS_T = int(os.getenv("SRK_THRESHOLD") or DEFAULT_SSS_T)
DEFAULT_SSS_N = int(os.getenv("SRK_NUM_SHARES") or DEFAULT_SSS_N)
DEFAULT_BASE  = int(os.getenv("SRK_DEFAULT_BASE") or DEFAULT_BASE)

# NOTE: strict is the default, best effort floor division must be opted into
DEFAULT_BEST_EFFORT = os.getenv("SRK_BEST_EFFORT", "0") == "1"


class ThresholdParams(NamedTuple):

    threshold : int  # k
    num_shares: Optional[int]  # n, may be unknown


def init_threshold_params(threshold: int, num_shares: Optional[int] = None) -> ThresholdParams:
    if threshold < MIN_THRESHOLD:
        raise errors.InvalidThreshold(threshold, num_shares)

    if num_shares is not None and threshold > num_shares:
        raise errors.InvalidThreshold(threshold, num_shares)

    return ThresholdParams(threshold, num_shares)


def validate_available(params: ThresholdParams, num_available: int) -> None:
    """Check that k <= n <= num_available."""
    if params.num_shares is not None and params.num_shares > num_available:
        logger.info(f"Only {num_available} of n={params.num_shares} shares available")

    if num_available < params.threshold:
        raise errors.InsufficientShares(num_available, params.threshold)


def parse_scheme(scheme_arg: str) -> ThresholdParams:
    if not re.match(r"^\d+of\d+$", scheme_arg):
        errmsg = f"Invalid parameter for --scheme={scheme_arg}. Try something like '3of5'"
        raise ValueError(errmsg)

    threshold, num_shares = map(int, scheme_arg.split("of"))
    return init_threshold_params(threshold, num_shares)
