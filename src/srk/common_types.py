# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""Types used across multiple modules."""

from typing import Any
from typing import Tuple
from typing import Union
from typing import Callable
from typing import Sequence
from typing import NamedTuple

from . import parameters

# from typing import TypeAlias
TypeAlias = Any

XCoord: TypeAlias = int
YCoord: TypeAlias = int
Secret: TypeAlias = int

# either the literal int or its decimal string, e.g. 16 or "16"
RawBase: TypeAlias = Union[int, str]


class ShareRecord(NamedTuple):
    index : str  # decimal string, becomes the x coordinate
    base  : RawBase
    digits: str  # the y coordinate, written in base


ShareRecords: TypeAlias = Sequence[ShareRecord]

MakeCoeff: TypeAlias = Callable[[int], int]


class ShareSet(NamedTuple):

    params : parameters.ThresholdParams
    records: Tuple[ShareRecord, ...]
