# This file is part of the srk project
# https://github.com/mbarkhau/srk
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Reading and writing of share documents.

A share document is a json object with one metadata entry "keys" and
one entry per share, keyed by the share index:

    {
        "keys": {"n": 4, "k": 3},
        "1"   : {"base": "10", "value": "4"},
        "2"   : {"base": "2" , "value": "111"},
        ...
    }
"""

import json
import logging
import pathlib as pl
from typing import Any
from typing import Dict
from typing import List
from typing import Union
from typing import Optional

from . import errors
from . import polynom
from . import shamir
from . import enc_util
from . import parameters
from . import common_types as ct

logger = logging.getLogger(__name__)


META_KEY = "keys"

PathLike = Union[str, pl.Path]


def _parse_count(meta: Dict[str, Any], key: str) -> Optional[int]:
    val = meta.get(key)
    if val is None:
        return None
    elif isinstance(val, int) and not isinstance(val, bool):
        return val

    num = enc_util.parse_decimal(val) if isinstance(val, str) else None
    if num is None or num < 0:
        raise errors.InvalidShareDocument(f"invalid value for '{META_KEY}.{key}': {val!r}")
    else:
        return num


def _parse_params(doc: Dict[str, Any]) -> parameters.ThresholdParams:
    meta = doc.get(META_KEY)
    if not isinstance(meta, dict):
        raise errors.InvalidShareDocument(f"missing '{META_KEY}' entry")

    threshold  = _parse_count(meta, 'k')
    num_shares = _parse_count(meta, 'n')
    if threshold is None:
        raise errors.InvalidShareDocument(f"missing '{META_KEY}.k'")

    return parameters.init_threshold_params(threshold, num_shares)


def _parse_record(key: str, entry: Any) -> ct.ShareRecord:
    if not isinstance(entry, dict):
        raise errors.InvalidShareDocument(f"share {key!r} must be an object")

    base   = entry.get('base')
    digits = entry.get('value')
    if base is None or not isinstance(digits, str):
        raise errors.InvalidShareDocument(f"share {key!r} requires 'base' and 'value'")

    return ct.ShareRecord(index=key, base=base, digits=digits)


def loads(text: str) -> ct.ShareSet:
    try:
        doc = json.loads(text)
    except ValueError as err:
        # JSONDecodeError or a number beyond the int conversion limit
        raise errors.InvalidShareDocument(f"invalid json: {err}") from err

    if not isinstance(doc, dict):
        raise errors.InvalidShareDocument("top level must be an object")

    params = _parse_params(doc)

    records: List[ct.ShareRecord] = []
    for key, entry in doc.items():
        if key == META_KEY:
            continue
        # validated here so that sorting by index can't fail
        shamir.parse_index(key)
        records.append(_parse_record(key, entry))

    # Deterministic order by index, independent of the key order in the
    # document. Reconstruction selects the first k of these.
    records.sort(key=lambda rec: shamir.parse_index(rec.index))
    logger.debug(f"loaded {len(records)} shares, k={params.threshold}, n={params.num_shares}")
    return ct.ShareSet(params, tuple(records))


def load(path: PathLike) -> ct.ShareSet:
    with pl.Path(path).open(mode="r", encoding="utf-8") as fobj:
        try:
            text = fobj.read()
        except UnicodeDecodeError as err:
            raise errors.InvalidShareDocument(f"invalid utf-8: {err}") from err

    return loads(text)


def dumps(share_set: ct.ShareSet) -> str:
    params = share_set.params
    meta: Dict[str, int] = {'k': params.threshold}
    if params.num_shares is not None:
        meta['n'] = params.num_shares

    doc: Dict[str, Any] = {META_KEY: meta}
    for record in share_set.records:
        doc[str(record.index)] = {'base': str(record.base), 'value': record.digits}

    return json.dumps(doc, indent=4)


def dump(share_set: ct.ShareSet, path: PathLike) -> None:
    with pl.Path(path).open(mode="w", encoding="utf-8") as fobj:
        fobj.write(dumps(share_set))
        fobj.write("\n")


def points2share_set(points: polynom.Points, threshold: int, base: int) -> ct.ShareSet:
    """Encode points as share records with digits in base."""
    params  = parameters.init_threshold_params(threshold, len(points))
    records = tuple(
        ct.ShareRecord(index=str(p.x), base=str(base), digits=enc_util.int2digits(p.y, base))
        for p in points
    )
    return ct.ShareSet(params, records)
