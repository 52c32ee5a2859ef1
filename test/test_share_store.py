import sys
import json

import pytest

from srk import errors
from srk import shamir
from srk import polynom
from srk import share_store
from srk.parameters import ThresholdParams
from srk.common_types import ShareSet
from srk.common_types import ShareRecord

# f(x) = x² + x + 2, keys deliberately out of order
SHARE_DOC = """
{
    "keys": {"n": 4, "k": 3},
    "6": {"base": "4", "value": "230"},
    "3": {"base": "16", "value": "E"},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "1000"}
}
"""


def test_loads():
    share_set = share_store.loads(SHARE_DOC)
    assert share_set.params == ThresholdParams(3, 4)
    assert [rec.index for rec in share_set.records] == ["1", "2", "3", "6"]
    assert share_set.records[0] == ShareRecord("1", "10", "4")
    assert share_set.records[3] == ShareRecord("6", "4", "230")

    assert shamir.reconstruct(share_set) == 2


def test_loads_numeric_order():
    doc = {
        'keys': {'k': 2},
        '10'  : {'base': 10, 'value': "34"},
        '2'   : {'base': 10, 'value': "10"},
        '1'   : {'base': 10, 'value': "7"},
    }
    share_set = share_store.loads(json.dumps(doc))
    assert [rec.index for rec in share_set.records] == ["1", "2", "10"]
    assert share_set.params == ThresholdParams(2, None)
    # y = 3x + 4
    assert shamir.reconstruct(share_set) == 4


def test_loads_string_counts():
    doc = {'keys': {'n': "2", 'k': "2"}, '1': {'base': "2", 'value': "111"}, '2': {'base': "16", 'value': "a"}}
    share_set = share_store.loads(json.dumps(doc))
    assert share_set.params == ThresholdParams(2, 2)
    assert shamir.reconstruct(share_set) == 4


INVALID_DOCS = [
    "not json",
    "[1, 2, 3]",
    '{"1": {"base": "10", "value": "4"}}',
    '{"keys": {"n": 3}}',
    '{"keys": {"k": "three"}}',
    '{"keys": {"k": true}}',
    '{"keys": {"k": "-1"}}',
    '{"keys": {"k": "\u00b2"}}',
    '{"keys": {"k": "\u0663"}}',
    '{"keys": {"k": 1}, "1": "4"}',
    '{"keys": {"k": 1}, "1": {"value": "4"}}',
    '{"keys": {"k": 1}, "1": {"base": "10", "value": 4}}',
]


@pytest.mark.parametrize("text", INVALID_DOCS)
def test_loads_invalid(text):
    with pytest.raises(errors.InvalidShareDocument):
        share_store.loads(text)


def test_loads_invalid_index():
    with pytest.raises(errors.InvalidShare) as excinfo:
        share_store.loads('{"keys": {"k": 1}, "one": {"base": "10", "value": "4"}}')
    assert excinfo.value.index == "one"

    doc = {'keys': {'k': 1}, "\u00b2": {'base': "10", 'value': "4"}}
    with pytest.raises(errors.InvalidShare) as excinfo:
        share_store.loads(json.dumps(doc))
    assert excinfo.value.index == "\u00b2"


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
def test_loads_number_too_long():
    text = '{"keys": {"k": ' + "9" * 5000 + '}}'
    try:
        share_store.loads(text)
        assert False, "expected InvalidShareDocument"
    except errors.InvalidShareDocument as err:
        assert isinstance(err.__cause__, ValueError)


def test_loads_invalid_threshold():
    with pytest.raises(errors.InvalidThreshold):
        share_store.loads('{"keys": {"n": 2, "k": 3}}')


def test_dumps():
    points    = polynom.split(1234, threshold=2, num_shares=3, make_coeff=lambda bound: 10)
    share_set = share_store.points2share_set(points, threshold=2, base=16)

    assert share_set.params == ThresholdParams(2, 3)
    # 1234 + 10x
    assert share_set.records[0] == ShareRecord("1", "16", "4dc")
    assert share_set.records[2] == ShareRecord("3", "16", "4f0")

    doc = json.loads(share_store.dumps(share_set))
    assert doc['keys'] == {'k': 2, 'n': 3}
    assert doc['1'] == {'base': "16", 'value': "4dc"}

    assert share_store.loads(share_store.dumps(share_set)) == share_set


def test_dumps_without_n():
    share_set = ShareSet(ThresholdParams(1, None), (ShareRecord("1", 10, "5"),))
    doc       = json.loads(share_store.dumps(share_set))
    assert doc == {'keys': {'k': 1}, '1': {'base': "10", 'value': "5"}}


def test_load_dump(tmp_path):
    path = tmp_path / "shares.json"
    path.write_text(SHARE_DOC, encoding="utf-8")

    share_set = share_store.load(path)
    assert shamir.reconstruct(share_set) == 2

    out_path = tmp_path / "shares_out.json"
    share_store.dump(share_set, str(out_path))
    assert share_store.load(out_path) == share_set


def test_load_invalid_utf8(tmp_path):
    path = tmp_path / "shares.json"
    path.write_bytes(b'{"keys": {"k": 1}, "1": {"base": "10", "value": "\xff"}}')

    try:
        share_store.load(path)
        assert False, "expected InvalidShareDocument"
    except errors.InvalidShareDocument as err:
        assert "utf-8" in str(err)
        assert isinstance(err.__cause__, UnicodeDecodeError)
