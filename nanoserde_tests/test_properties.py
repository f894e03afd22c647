from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional

from hypothesis import given, settings, strategies as st

from nanoserde import (
    F64,
    I8,
    I32,
    U8,
    U16,
    U64,
    Array,
    Char,
    NanoserdeError,
    OutOfDataError,
    deserialize_bin,
    deserialize_json,
    deserialize_ron,
    serialize_bin,
    serialize_json,
    serialize_ron,
)

# surrogates cannot be encoded as utf-8
texts = st.text(alphabet=st.characters(exclude_categories=('Cs',)), max_size=20)
chars = st.characters(exclude_categories=('Cs',))
finite_floats = st.floats(allow_nan=False, allow_infinity=False)


class Shape(Enum):
    CIRCLE = 0
    SQUARE = 1


class Pair(NamedTuple):
    left: I8
    right: str


@dataclass
class Idle:
    pass


@dataclass
class Walk:
    steps: U16


Action = Idle | Walk | Pair


@dataclass
class Sample:
    id: U64
    name: str
    score: F64
    initial: Char
    delta: I32
    shape: Shape
    action: Action
    grid: Array[U8, 3]
    pair: tuple[I8, str]
    tags: list[str] = field(default_factory=list)
    counts: dict[str, U16] = field(default_factory=dict)
    parent: Optional[U8] = None


actions = st.one_of(
    st.just(Idle()),
    st.builds(Walk, st.integers(0, 2**16 - 1)),
    st.builds(Pair, st.integers(-128, 127), texts),
)

samples = st.builds(
    Sample,
    id=st.integers(0, 2**64 - 1),
    name=texts,
    score=finite_floats,
    initial=chars,
    delta=st.integers(-2**31, 2**31 - 1),
    shape=st.sampled_from(Shape),
    action=actions,
    grid=st.lists(st.integers(0, 255), min_size=3, max_size=3),
    pair=st.tuples(st.integers(-128, 127), texts),
    tags=st.lists(texts, max_size=5),
    counts=st.dictionaries(texts, st.integers(0, 2**16 - 1), max_size=5),
    parent=st.none() | st.integers(0, 255),
)


@given(samples)
def test_binary_round_trip(sample: Sample) -> None:
    assert deserialize_bin(Sample, serialize_bin(sample)) == sample


@given(samples)
def test_json_round_trip(sample: Sample) -> None:
    assert deserialize_json(Sample, serialize_json(sample)) == sample


@given(samples)
def test_ron_round_trip(sample: Sample) -> None:
    assert deserialize_ron(Sample, serialize_ron(sample)) == sample


@given(samples, st.data())
def test_truncated_binary_fails(sample: Sample, data: st.DataObject) -> None:
    encoded = serialize_bin(sample)
    cut = data.draw(st.integers(0, len(encoded) - 1))
    try:
        deserialize_bin(Sample, encoded[:cut])
    except OutOfDataError:
        pass
    else:
        raise AssertionError('a truncated document was accepted')


@settings(max_examples=300)
@given(st.binary(max_size=200))
def test_random_bytes_only_raise_nanoserde_errors(data: bytes) -> None:
    try:
        deserialize_bin(Sample, data)
    except NanoserdeError:
        pass


@given(st.lists(texts, max_size=10))
def test_string_lists_in_every_format(values: list[str]) -> None:
    assert deserialize_bin(list[str], serialize_bin(values, list[str])) == values
    assert deserialize_json(list[str], serialize_json(values, list[str])) == values
    assert deserialize_ron(list[str], serialize_ron(values, list[str])) == values
