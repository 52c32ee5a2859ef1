# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Errors raised while decoding shares and recovering a secret.

Every error names its kind and carries the offending datum as an
attribute, so callers can report it without parsing the message.
"""

from typing import Any
from typing import Optional


class RecoveryError(ValueError):

    kind: str = "RecoveryError"


class InvalidDigit(RecoveryError):

    kind = "InvalidDigit"

    def __init__(self, char: str, position: int, base: Optional[int] = None) -> None:
        self.char     = char
        self.position = position
        self.base     = base
        if base is None:
            errmsg = f"Invalid digit {char!r} at position {position}"
        else:
            errmsg = f"Invalid digit {char!r} at position {position} for base {base}"
        super().__init__(errmsg)


class InvalidBase(RecoveryError):

    kind = "InvalidBase"

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid base {value!r}, must be an integer in [2, 16]")


class DuplicateXCoordinate(RecoveryError):

    kind = "DuplicateXCoordinate"

    def __init__(self, x: int) -> None:
        self.x = x
        super().__init__(f"Points must be distinct, duplicate x={x}")


class InsufficientShares(RecoveryError):

    kind = "InsufficientShares"

    def __init__(self, have: int, need: int) -> None:
        self.have = have
        self.need = need
        super().__init__(f"Insufficient shares {have} < {need}")


class InexactInterpolation(RecoveryError):
    """A weighted term did not divide exactly.

    For genuine shares this never happens, so it points to corrupted or
    mismatched share data.
    """

    kind = "InexactInterpolation"

    def __init__(self, point_index: int) -> None:
        self.point_index = point_index
        errmsg = f"Non-integer division for term of point {point_index}. Corrupted or mismatched shares?"
        super().__init__(errmsg)


# alias for callers that use the name of the best-effort condition
InexactTerm = InexactInterpolation


class InvalidShare(RecoveryError):

    kind = "InvalidShare"

    def __init__(self, index: Any, reason: str = "index must be a decimal integer") -> None:
        self.index  = index
        self.reason = reason
        super().__init__(f"Invalid share {index!r}: {reason}")


class InvalidThreshold(RecoveryError):

    kind = "InvalidThreshold"

    def __init__(self, threshold: Any, num_shares: Optional[int] = None) -> None:
        self.threshold  = threshold
        self.num_shares = num_shares
        if num_shares is None:
            errmsg = f"Invalid threshold k={threshold}, must be >= 1"
        else:
            errmsg = f"Invalid threshold k={threshold} for n={num_shares}, must be 1 <= k <= n"
        super().__init__(errmsg)


class InvalidShareDocument(RecoveryError):

    kind = "InvalidShareDocument"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid share document: {reason}")
