import string

from hypothesis import given
from hypothesis.strategies import (
    binary, booleans, dictionaries, floats, integers, just, lists, one_of, recursive, text, tuples,
)

import doson
from dosonlib.codec import seal_envelope
from dosonlib.value import NO_WEIGHT, String, Number, Boolean, List, Dict, Tuple, Binary

numbers = floats(allow_nan=False, allow_infinity=False).map(Number)
# small enough that sums of a few of them stay finite
bounded_numbers = floats(min_value=-1e100, max_value=1e100).map(Number)
whole_numbers = integers(min_value=-10**6, max_value=10**6).map(float)

# raw string payloads: no quotes, backslashes or control characters
raw_text = text(alphabet=string.ascii_letters + string.digits + " _-.,:[]{}()!?é中", max_size=10)

non_numeric_leaves = one_of(
    booleans().map(Boolean),
    raw_text.map(String),
    binary(max_size=12).map(Binary),
)


def plain_composites(children):
    return one_of(
        lists(children, max_size=5).map(List),
        tuples(children, children).map(lambda pair: Tuple(*pair)),
    )


def all_composites(children):
    return one_of(
        plain_composites(children),
        dictionaries(raw_text, children, max_size=5).map(Dict),
    )


plain_values = recursive(one_of(numbers, booleans().map(Boolean)), plain_composites, max_leaves=20)
printable_values = recursive(one_of(bounded_numbers, non_numeric_leaves), all_composites, max_leaves=20)


@given(plain_values)
def test_round_trip(value):
    assert doson.parse(doson.dump(value)) == value


@given(printable_values)
def test_round_trip_with_strings_dicts_and_blobs(value):
    assert doson.parse_strict(doson.dump(value)) == value


@given(printable_values)
def test_print_is_idempotent(value):
    buf = doson.dump(value)
    assert doson.dump(doson.parse(buf)) == buf


@given(printable_values)
def test_envelope_is_transparent(value):
    buf = doson.dump(value)
    assert doson.parse(seal_envelope(buf)) == doson.parse(buf)


@given(printable_values)
def test_envelope_round_trip(value):
    assert doson.parse(doson.envelope(value)) == value


@given(lists(whole_numbers))
def test_weight_of_numeric_list_is_sum(items):
    assert List([Number(n) for n in items]).weight() == sum(items)


@given(lists(floats(allow_nan=False, min_value=-1e300, max_value=1e300)))
def test_weight_of_float_list_is_sequential_sum(items):
    total = 0.0
    for n in items:
        total += n
    weight = List([Number(n) for n in items]).weight()
    assert weight == total


@given(lists(non_numeric_leaves))
def test_non_numeric_composite_weighs_nothing(items):
    assert List(items).weight() == 0
    assert Dict({str(i): v for i, v in enumerate(items)}).weight() == 0


@given(lists(one_of(whole_numbers.map(Number), non_numeric_leaves)))
def test_mixed_composite_weighs_its_numbers(items):
    expected = sum(v.as_number() for v in items if v.datatype() == "Number")
    assert List(items).weight() == expected


@given(non_numeric_leaves, whole_numbers)
def test_tuple_weight_skips_non_numeric(leaf, n):
    assert Tuple(leaf, Number(n)).weight() == n
    assert Tuple(Number(n), leaf).weight() == n


@given(lists(printable_values, max_size=5))
def test_size_is_additive(items):
    expected = sum(v.size() for v in items)
    assert List(items).size() == expected
    assert Dict({"k" * (i + 1): v for i, v in enumerate(items)}).size() == expected


@given(printable_values, printable_values)
def test_tuple_size(first, second):
    assert Tuple(first, second).size() == first.size() + second.size()


@given(floats(allow_nan=False), floats(allow_nan=False))
def test_ordering_agrees_with_floats(a, b):
    assert (Number(a) < Number(b)) == (a < b)
    assert (Number(a) <= Number(b)) == (a <= b)


@given(lists(printable_values, max_size=8))
def test_sorting_orders_by_weight(items):
    weights = [v.weight() for v in sorted(items)]
    assert weights == sorted(weights)


@given(printable_values, printable_values, printable_values)
def test_ordering_is_transitive(a, b, c):
    assert a.compare(a) == 0
    assert a.compare(b) == -b.compare(a)
    if a <= b and b <= c:
        assert a <= c


ACCESSORS = {
    "String": "as_string",
    "Number": "as_number",
    "Boolean": "as_bool",
    "Tuple": "as_tuple",
    "List": "as_list",
    "Dict": "as_dict",
    "Binary": "as_binary",
}


@given(one_of(printable_values, just(doson.NONE)))
def test_accessors_are_exact(value):
    for kind, name in ACCESSORS.items():
        present = getattr(value, name)() is not None
        assert present == (value.datatype() == kind)


def test_sentinel_leaves():
    assert String("").weight() == NO_WEIGHT
    assert doson.NONE.weight() == NO_WEIGHT
