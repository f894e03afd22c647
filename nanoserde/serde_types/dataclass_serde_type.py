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
Records are dataclasses, their fields are written by name in the text formats and in declaration order in binary.

>>> from dataclasses import dataclass
>>> from typing import Annotated, Optional
>>> from nanoserde.serde_types import make_serde_type
>>> from nanoserde.serde_types.attrs import nserde
>>> @dataclass
... class Player:
...     name: Annotated[str, nserde(rename='Name')]
...     level: int = 1
...     guild: Optional[str] = None
>>> serde_type = make_serde_type(Player)
>>> serde_type.to_json(Player('ana'))
'{"Name":"ana","level":1}'
>>> serde_type.from_json('{"Name":"bob","extra":[1,2]}')
Player(name='bob', level=1, guild=None)
>>> print(serde_type.to_ron(Player('ana', 3, 'x')))
(
    Name:"ana",
    level:3,
    guild:"x",
)
"""

import copy
import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from structlog import get_logger
from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.attrs import DEFAULT, MISSING, SerdeAttrs, get_container_attrs, get_field_attrs
from nanoserde.serde_types.optional_serde_type import is_optional_type
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import get_class_hints, is_dataclass_class, pretty_type
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.text.de_state import DeTextState
from nanoserde.utils.typing import split_annotated

logger = get_logger()

# the value comes from the dataclass itself, the keyword argument is left out
_OMIT: Any = object()


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """How one dataclass field is written and what it becomes when it is absent from the input."""
    name: str
    label: str
    serde_type: Optional[SerdeType]
    attrs: SerdeAttrs
    optional: bool
    has_class_default: bool

    @property
    def skip(self) -> bool:
        return self.attrs.skip


class _ContainerDefaults:
    """Per document view of the container level defaults, `default_with` is called at most once."""

    __slots__ = ('_attrs', '_instance')

    def __init__(self, attrs: SerdeAttrs) -> None:
        self._attrs = attrs
        self._instance: Any = MISSING

    def value_of(self, spec: FieldSpec) -> Any:
        if self._attrs.default_with is not None:
            if self._instance is MISSING:
                self._instance = self._attrs.default_with()
            return getattr(self._instance, spec.name)
        if self._attrs.default is DEFAULT:
            assert spec.serde_type is not None
            return spec.serde_type.default()
        if self._attrs.has_default:
            return copy.deepcopy(getattr(self._attrs.default, spec.name))
        return MISSING


def _absent_value(spec: FieldSpec, defaults: _ContainerDefaults) -> Any:
    """ What an absent field becomes, in order of precedence:

    1. the field's `nserde(default=...)`
    2. the field's `nserde(default_with=...)`
    3. the dataclass field default
    4. None for optional fields
    5. the container's `default_with` or `default`

    `MISSING` is returned when none applies.
    """
    attrs = spec.attrs
    if attrs.has_default:
        if attrs.default is DEFAULT:
            assert spec.serde_type is not None
            return spec.serde_type.default()
        return attrs.literal_default()
    if attrs.default_with is not None:
        return attrs.default_with()
    if spec.has_class_default:
        return _OMIT
    if spec.optional:
        return None
    return defaults.value_of(spec)


def _needs_serde_type(attrs: SerdeAttrs, container: SerdeAttrs, *, optional: bool, has_class_default: bool) -> bool:
    """Skipped fields only need a serde type when their value comes from the default of the type."""
    if not attrs.skip or attrs.default is DEFAULT:
        return True
    if attrs.has_default or attrs.default_with is not None or has_class_default or optional:
        return False
    return container.default_with is None


class RecordSerdeType(SerdeType[Any]):
    """ Represents dataclasses with named fields.

    Fields are attributed with `Annotated[T, nserde(...)]` and the class with the `@nserde(...)` decorator. Fields with
    `init=False` are not serialized.
    """

    __slots__ = ('_class', '_attrs', '_fields', '_by_label', '_skipped_labels')

    _class: type
    _attrs: SerdeAttrs
    _fields: tuple[FieldSpec, ...]
    _by_label: dict[str, FieldSpec]
    _skipped_labels: frozenset[str]

    def __init__(self, class_: type, attrs: SerdeAttrs, fields: tuple[FieldSpec, ...]) -> None:
        self._class = class_
        self._attrs = attrs
        self._fields = fields
        self._by_label = {spec.label: spec for spec in fields if not spec.skip}
        self._skipped_labels = frozenset(spec.label for spec in fields if spec.skip)

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self._fields

    @property
    def is_unit(self) -> bool:
        return not self._fields

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_dataclass_class(type_):
            raise TypeError(f'{pretty_type(type_)} is not a dataclass')
        container = get_container_attrs(type_)
        if container.transparent:
            raise TypeError('transparent is only supported on tuple types with a single field')
        if container.has_default and container.default is not DEFAULT and not isinstance(container.default, type_):
            raise TypeError(f'container default must be DEFAULT or an instance of {type_.__name__}')
        hints = get_class_hints(type_)
        fields: list[FieldSpec] = []
        labels: set[str] = set()
        for field in dataclasses.fields(type_):
            if not field.init:
                continue
            field_type = hints[field.name]
            inner, metadata = split_annotated(field_type)
            attrs = get_field_attrs(metadata)
            if isinstance(attrs.rename, Mapping):
                raise TypeError(f'{type_.__name__}.{field.name}: only enums can be renamed with a mapping')
            label = attrs.rename or field.name
            if label in labels:
                raise TypeError(f'{type_.__name__}: duplicate field label {label!r}')
            labels.add(label)
            optional = is_optional_type(inner)
            has_class_default = (
                field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING
            )
            serde_type: Optional[SerdeType] = None
            if _needs_serde_type(attrs, container, optional=optional, has_class_default=has_class_default):
                serde_type = SerdeType.from_type(field_type, type_map=type_map)
            fields.append(FieldSpec(field.name, label, serde_type, attrs, optional, has_class_default))
        return cls(type_, container, tuple(fields))

    def _serialized_fields(self) -> list[FieldSpec]:
        return [spec for spec in self._fields if not spec.skip]

    def _field_type(self, spec: FieldSpec) -> SerdeType:
        assert spec.serde_type is not None
        return spec.serde_type

    def _build(self, values: dict[str, Any], on_missing: Callable[[FieldSpec], Any]) -> Any:
        defaults = _ContainerDefaults(self._attrs)
        kwargs: dict[str, Any] = {}
        for spec in self._fields:
            if spec.name in values:
                kwargs[spec.name] = values[spec.name]
                continue
            value = _absent_value(spec, defaults)
            if value is MISSING:
                value = on_missing(spec)
            if value is not _OMIT:
                kwargs[spec.name] = value
        return self._class(**kwargs)

    def _type_default(self, spec: FieldSpec) -> Any:
        return self._field_type(spec).default()

    def _build_from_text(self, state: DeTextState, values: dict[str, Any]) -> Any:
        def on_missing(spec: FieldSpec) -> Any:
            if spec.skip:
                return self._type_default(spec)
            raise state.err_nf(spec.name)
        return self._build(values, on_missing)

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__}, got {type(value).__name__}')
        if deep:
            for spec in self._serialized_fields():
                self._field_type(spec)._check_value(getattr(value, spec.name), deep=True)

    @override
    def default(self) -> Any:
        return self._build({}, self._type_default)

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        for spec in self._serialized_fields():
            self._field_type(spec).serialize(serializer, getattr(value, spec.name))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        values = {spec.name: self._field_type(spec).deserialize(deserializer) for spec in self._serialized_fields()}
        return self._build(values, self._type_default)

    def _writes_null(self, spec: FieldSpec) -> bool:
        return spec.attrs.serialize_none_as_null or self._attrs.serialize_none_as_null

    @override
    def _ser_json(self, state: SerJsonState, value: Any, /) -> None:
        state.push('{')
        first = True
        for spec in self._serialized_fields():
            item = getattr(value, spec.name)
            if spec.optional and item is None and not self._writes_null(spec):
                continue
            if not first:
                state.push(',')
            first = False
            state.field(spec.label)
            self._field_type(spec).ser_json(state, item)
        state.push('}')

    @override
    def _de_json(self, state: DeJsonState, /) -> Any:
        values: dict[str, Any] = {}
        state.curly_open()
        while state.next_str():
            key = state.strbuf
            spec = self._by_label.get(key)
            state.next_colon()
            if spec is None:
                if not state.settings.JSON_SKIP_UNKNOWN_KEYS:
                    raise state.err_exp(key)
                logger.debug('ignored json key', key=key, record=self._class.__name__)
                state.whole_field()
            else:
                values[spec.name] = self._field_type(spec).de_json(state)
            state.eat_comma_curly()
        state.curly_close()
        return self._build_from_text(state, values)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Any, /) -> None:
        state.st_pre()
        for spec in self._serialized_fields():
            item = getattr(value, spec.name)
            if spec.optional and item is None:
                continue
            state.field(depth + 1, spec.label)
            self._field_type(spec).ser_ron(state, depth + 1, item)
            state.conl()
        state.st_post(depth)

    @override
    def _de_ron(self, state: DeRonState, /) -> Any:
        values: dict[str, Any] = {}
        state.paren_open()
        while state.next_ident():
            key = state.identbuf
            spec = self._by_label.get(key)
            if spec is None and key not in self._skipped_labels:
                raise state.err_exp(key)
            state.next_colon()
            if spec is None:
                state.whole_field()
            else:
                values[spec.name] = self._field_type(spec).de_ron(state)
            state.eat_comma_paren()
        state.paren_close()
        return self._build_from_text(state, values)
