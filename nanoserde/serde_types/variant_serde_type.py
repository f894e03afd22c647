# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Variant types are unions of classes, each class is one variant and its position in the union is its tag.

A dataclass without fields is a unit variant, a dataclass with fields has named data and a NamedTuple has positional
data:

>>> from dataclasses import dataclass
>>> from typing import NamedTuple
>>> from nanoserde.serde_types import make_serde_type
>>> @dataclass
... class Quit:
...     pass
>>> class Move(NamedTuple):
...     x: int
...     y: int
>>> @dataclass
... class Write:
...     text: str
>>> serde_type = make_serde_type(Quit | Move | Write)
>>> serde_type.to_json(Quit()), serde_type.to_json(Move(1, 2)), serde_type.to_json(Write('hi'))
('"Quit"', '{"Move":[1, 2]}', '{"Write":{"text":"hi"}}')
>>> serde_type.to_ron(Move(1, 2))
'Move(1, 2)'
>>> serde_type.to_bytes(Write('hi')).hex()
'020002000000000000006869'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.attrs import get_container_attrs
from nanoserde.serde_types.dataclass_serde_type import RecordSerdeType
from nanoserde.serde_types.namedtuple_serde_type import NamedTupleSerdeType
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import is_dataclass_class, is_namedtuple_class, pretty_type
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.variant import MAX_VARIANTS, decode_variant_tag, encode_variant
from nanoserde.text.tokens import TokenKind
from nanoserde.utils.typing import get_args


class VariantKind(Enum):
    UNIT = 'unit'
    POSITIONAL = 'positional'
    NAMED = 'named'


@dataclass(frozen=True, slots=True)
class Variant:
    name: str
    tag: int
    class_: type
    kind: VariantKind
    serde_type: Union[RecordSerdeType, NamedTupleSerdeType]

    @property
    def record(self) -> RecordSerdeType:
        assert isinstance(self.serde_type, RecordSerdeType)
        return self.serde_type

    @property
    def positional(self) -> NamedTupleSerdeType:
        assert isinstance(self.serde_type, NamedTupleSerdeType)
        return self.serde_type


def _variant_name(class_: type) -> str:
    rename = get_container_attrs(class_).rename
    if rename is None:
        return class_.__name__
    if not isinstance(rename, str):
        raise TypeError(f'{class_.__name__}: a variant can only be renamed to a single name')
    return rename


class VariantSerdeType(SerdeType[Any]):
    """ Represents a union of dataclasses and NamedTuples, like `Quit | Move | Write`.

    Binary writes a u16 tag followed by the variant's data. JSON writes a unit variant as `"Name"` and the other ones as
    `{"Name":data}`. RON writes the bare name followed by the data, if any.
    """

    __slots__ = ('_variants', '_by_class', '_by_name')

    _variants: tuple[Variant, ...]
    _by_class: dict[type, Variant]
    _by_name: dict[str, Variant]

    def __init__(self, variants: tuple[Variant, ...]) -> None:
        self._variants = variants
        self._by_class = {variant.class_: variant for variant in variants}
        self._by_name = {variant.name: variant for variant in variants}

    @property
    def variants(self) -> tuple[Variant, ...]:
        return self._variants

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        args = get_args(type_)
        if len(args) > MAX_VARIANTS:
            raise TypeError(f'at most {MAX_VARIANTS} variants are supported')
        variants: list[Variant] = []
        names: set[str] = set()
        for tag, class_ in enumerate(args):
            if get_container_attrs(class_).proxy is not None:
                raise TypeError(f'{pretty_type(class_)}: proxies are not supported on variants')
            serde_type: Union[RecordSerdeType, NamedTupleSerdeType]
            if is_namedtuple_class(class_):
                serde_type = NamedTupleSerdeType._from_type(class_, type_map=type_map)
                kind = VariantKind.POSITIONAL
            elif is_dataclass_class(class_):
                serde_type = RecordSerdeType._from_type(class_, type_map=type_map)
                kind = VariantKind.UNIT if serde_type.is_unit else VariantKind.NAMED
            else:
                raise TypeError(f'variants must be dataclasses or NamedTuples, got {pretty_type(class_)}')
            name = _variant_name(class_)
            if name in names:
                raise TypeError(f'duplicate variant name {name!r} in {pretty_type(type_)}')
            names.add(name)
            variants.append(Variant(name, tag, class_, kind, serde_type))
        return cls(tuple(variants))

    def _variant_of(self, value: Any) -> Variant:
        variant = self._by_class.get(type(value))
        if variant is not None:
            return variant
        for variant in self._variants:
            if isinstance(value, variant.class_):
                return variant
        raise TypeError(f'{type(value).__name__} is not a variant of {", ".join(self._by_name)}')

    def _lookup(self, state: DeJsonState | DeRonState, name: str, *, unit: Optional[bool] = None) -> Variant:
        variant = self._by_name.get(name)
        if variant is None or (unit is not None and (variant.kind is VariantKind.UNIT) != unit):
            raise state.err_enum(name)
        return variant

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        variant = self._variant_of(value)
        if deep:
            variant.serde_type._check_value(value, deep=True)

    @override
    def default(self) -> Any:
        return self._variants[0].serde_type.default()

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        variant = self._variant_of(value)
        encode_variant(serializer, variant.tag, value, variant.serde_type.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        tag = decode_variant_tag(deserializer, variants=len(self._variants))
        variant = self._variants[tag]
        if variant.kind is VariantKind.UNIT:
            return variant.class_()
        return variant.serde_type.deserialize(deserializer)

    @override
    def _ser_json(self, state: SerJsonState, value: Any, /) -> None:
        variant = self._variant_of(value)
        if variant.kind is VariantKind.UNIT:
            state.label(variant.name)
            return
        state.push('{')
        state.field(variant.name)
        if variant.kind is VariantKind.POSITIONAL:
            variant.positional.ser_json_items(state, value)
        else:
            variant.record.ser_json(state, value)
        state.push('}')

    @override
    def _de_json(self, state: DeJsonState, /) -> Any:
        if state.tok.kind is TokenKind.STR:
            variant = self._lookup(state, state.strbuf, unit=True)
            state.next_tok()
            return variant.class_()
        if state.tok.kind is not TokenKind.CURLY_OPEN:
            raise state.err_token('String or {')
        state.curly_open()
        variant = self._lookup(state, state.as_string(), unit=False)
        state.next_colon()
        if variant.kind is VariantKind.POSITIONAL:
            value = variant.positional.de_json_items(state)
        else:
            value = variant.record.de_json(state)
        state.curly_close()
        return value

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Any, /) -> None:
        variant = self._variant_of(value)
        state.push(variant.name)
        if variant.kind is VariantKind.POSITIONAL:
            variant.positional.ser_ron_items(state, depth, value)
        elif variant.kind is VariantKind.NAMED:
            variant.record.ser_ron(state, depth, value)

    @override
    def _de_ron(self, state: DeRonState, /) -> Any:
        variant = self._lookup(state, state.ident())
        if variant.kind is VariantKind.UNIT:
            return variant.class_()
        if variant.kind is VariantKind.POSITIONAL:
            return variant.positional.de_ron_items(state)
        return variant.record.de_ron(state)
