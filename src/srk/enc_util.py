# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Helper functions related to numeral encoding/decoding.

Share values are written as digit strings in some base between 2 and
16. They are routinely larger than 2**64, so everything here works on
(arbitrary sized) python integers and never touches float.
"""

import re
from typing import Optional

from . import errors
from . import common_types as ct

DIGITS = "0123456789abcdef"

MIN_BASE = 2
MAX_BASE = len(DIGITS)

DIGIT_VALUES = {char: val for val, char in enumerate(DIGITS)}

DECIMAL_RE = re.compile(r"-?[0-9]+")


def _is_valid_base(base: object) -> bool:
    # bool is a subclass of int, but True is not a base
    is_int = isinstance(base, int) and not isinstance(base, bool)
    return is_int and MIN_BASE <= base <= MAX_BASE  # type: ignore[operator]


def parse_base(raw_base: ct.RawBase) -> int:
    """Validate a base given as int or decimal string.

    This is the caller side check, done before any digits are decoded.
    """
    if isinstance(raw_base, str):
        base: object = parse_decimal(raw_base)
        if base is None:
            raise errors.InvalidBase(raw_base)
    else:
        base = raw_base

    if _is_valid_base(base):
        return base  # type: ignore[return-value]
    else:
        raise errors.InvalidBase(raw_base)


def digits2int(digits: str, base: int) -> int:
    r"""Convert a digit string to an (arbitrary sized) integer.

    Parsed left to right, most significant digit first. Digits are case
    insensitive. The empty string decodes to 0.

    >>> digits2int("111", 2)
    7
    >>> digits2int("FF", 16)
    255
    """
    if not _is_valid_base(base):
        raise errors.InvalidBase(base)

    num = 0
    for pos, char in enumerate(digits):
        digit = DIGIT_VALUES.get(char.lower(), -1)
        if digit < 0 or digit >= base:
            raise errors.InvalidDigit(char, pos, base)
        num = num * base + digit
    return num


def parse_decimal(text: str) -> Optional[int]:
    """Parse an optionally negative decimal, None if text is not one.

    Only the ascii digits 0-9 are accepted (str.isdigit and int also
    accept other unicode digits). Surrounding whitespace is ignored and
    there is no limit on the number of digits.
    """
    text = text.strip()
    if DECIMAL_RE.fullmatch(text) is None:
        return None
    elif text.startswith("-"):
        return -digits2int(text[1:], 10)
    else:
        return digits2int(text, 10)


def int2digits(num: int, base: int) -> str:
    """Convert a non-negative (arbitrary sized) int to a digit string.

    Digits are lower case, zero is "0".
    """
    if not _is_valid_base(base):
        raise errors.InvalidBase(base)

    if num < 0:
        raise ValueError(f"Invalid num={num}, must be a non-negative integer")

    if num == 0:
        return "0"

    parts = []
    while num:
        num, digit = divmod(num, base)
        parts.append(DIGITS[digit])

    return "".join(reversed(parts))


def secret2str(secret: ct.Secret) -> str:
    """Canonical base 10 representation of a secret.

    No leading zeros, "0" for zero and a leading "-" for negative values.
    """
    if secret < 0:
        return "-" + int2digits(-secret, 10)
    else:
        return int2digits(secret, 10)
