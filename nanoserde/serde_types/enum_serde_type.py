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

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.attrs import get_container_attrs
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import pretty_type
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.variant import MAX_VARIANTS, decode_variant_tag, encode_variant_tag
from nanoserde.text.tokens import TokenKind
from nanoserde.utils.typing import is_subclass

E = TypeVar('E', bound=Enum)


class EnumSerdeType(SerdeType[E]):
    """ Represents `enum.Enum` classes, every member is a unit variant.

    The tag of a member is its position in the class, the value of the member is not used. Members are written by
    name, `@nserde(rename={'MEMBER': 'Label'})` changes the names.

    >>> from enum import Enum
    >>> from nanoserde.serde_types import make_serde_type
    >>> from nanoserde.serde_types.attrs import nserde
    >>> @nserde(rename={'RED': 'Red'})
    ... class Color(Enum):
    ...     RED = 'r'
    ...     BLUE = 'b'
    >>> serde_type = make_serde_type(Color)
    >>> serde_type.to_json(Color.RED), serde_type.to_ron(Color.BLUE), serde_type.to_bytes(Color.BLUE).hex()
    ('"Red"', 'BLUE', '0100')
    """

    __slots__ = ('_class', '_members', '_labels', '_by_label')

    _class: type[E]
    _members: tuple[E, ...]
    _labels: dict[E, str]
    _by_label: dict[str, E]

    def __init__(self, class_: type[E], labels: dict[E, str]) -> None:
        self._class = class_
        self._members = tuple(labels)
        self._labels = labels
        self._by_label = {label: member for member, label in labels.items()}

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_subclass(type_, Enum):
            raise TypeError(f'{pretty_type(type_)} is not an Enum')
        members = list(type_)
        if not members:
            raise TypeError(f'{type_.__name__} has no members')
        if len(members) > MAX_VARIANTS:
            raise TypeError(f'at most {MAX_VARIANTS} variants are supported')
        rename = get_container_attrs(type_).rename or {}
        if not isinstance(rename, Mapping):
            raise TypeError(f'{type_.__name__}: enums are renamed with a mapping of member names to labels')
        unknown = sorted(set(rename) - set(type_.__members__))
        if unknown:
            raise TypeError(f'{type_.__name__}: unknown members in rename: {", ".join(unknown)}')
        labels = {member: rename.get(member.name, member.name) for member in members}
        if len(set(labels.values())) != len(labels):
            raise TypeError(f'{type_.__name__}: duplicate labels')
        return cls(type_, labels)

    def _member_from_label(self, state: DeJsonState | DeRonState, label: str) -> E:
        member = self._by_label.get(label)
        if member is None:
            raise state.err_enum(label)
        return member

    @override
    def _check_value(self, value: E, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__}, got {type(value).__name__}')

    @override
    def default(self) -> E:
        return self._members[0]

    @override
    def _serialize(self, serializer: Serializer, value: E, /) -> None:
        encode_variant_tag(serializer, self._members.index(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> E:
        return self._members[decode_variant_tag(deserializer, variants=len(self._members))]

    @override
    def _ser_json(self, state: SerJsonState, value: E, /) -> None:
        state.label(self._labels[value])

    @override
    def _de_json(self, state: DeJsonState, /) -> E:
        if state.tok.kind is not TokenKind.STR:
            raise state.err_token('String')
        member = self._member_from_label(state, state.strbuf)
        state.next_tok()
        return member

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: E, /) -> None:
        state.push(self._labels[value])

    @override
    def _de_ron(self, state: DeRonState, /) -> E:
        return self._member_from_label(state, state.ident())
