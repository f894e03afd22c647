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
Proxies let a type be serialized as another type, like a class that isn't a dataclass or a field with a custom form.

>>> from dataclasses import dataclass
>>> from typing import Annotated
>>> from nanoserde.serde_types import make_serde_type
>>> from nanoserde.serde_types.attrs import nserde
>>> @dataclass
... class Hex:
...     digits: str
...     @classmethod
...     def from_source(cls, value):
...         return cls(format(value, 'x'))
...     def into_source(self):
...         return int(self.digits, 16)
>>> @dataclass
... class Color:
...     rgb: Annotated[int, nserde(proxy=Hex)]
>>> serde_type = make_serde_type(Color)
>>> serde_type.to_json(Color(0xff00ff))
'{"rgb":{"digits":"ff00ff"}}'
>>> serde_type.from_json('{"rgb":{"digits":"10"}}')
Color(rgb=16)
"""

from types import NoneType
from typing import Any, Optional

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.attrs import SerdeAttrs, SerdeProxy, get_container_attrs
from nanoserde.serde_types.optional_serde_type import OptionalSerdeType, is_optional_type
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import pretty_type, strip_marker
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.utils.typing import get_args, get_origin, is_subclass, split_annotated


def _source_class(type_: Any) -> Optional[type]:
    origin = get_origin(type_) or type_
    return origin if isinstance(origin, type) else None


class ProxySerdeType(SerdeType[Any]):
    """ Serializes a value through a proxy class, see `SerdeProxy`.

    Values are converted with `proxy.from_source(value)` before being written and decoded proxies are converted back
    with `proxy_value.into_source()`. An optional field with a proxy converts only present values, None is written as
    None.
    """

    __slots__ = ('_proxy', '_target', '_optional', '_source')

    _proxy: type
    _target: SerdeType
    _optional: bool
    _source: Optional[type]

    def __init__(self, proxy: type, target: SerdeType, *, optional: bool, source: Optional[type]) -> None:
        self._proxy = proxy
        self._target = OptionalSerdeType(target) if optional else target
        self._optional = optional
        self._source = source

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        _, metadata = split_annotated(type_)
        if any(isinstance(meta, SerdeAttrs) for meta in metadata):
            attrs, source_type = strip_marker(type_, SerdeAttrs)
            source_type, _ = split_annotated(source_type)
        else:
            attrs, source_type = get_container_attrs(type_), type_
        proxy = attrs.proxy
        if proxy is None or not is_subclass(proxy, SerdeProxy):
            raise TypeError(f'proxy of {pretty_type(source_type)} must implement from_source and into_source')
        optional = is_optional_type(source_type)
        if optional:
            source_type, = (arg for arg in get_args(source_type) if arg is not NoneType)
        target = SerdeType.from_type(proxy, type_map=type_map)
        return cls(proxy, target, optional=optional, source=_source_class(source_type))

    def _into_proxy(self, value: Any) -> Any:
        if value is None and self._optional:
            return None
        return self._proxy.from_source(value)  # type: ignore[attr-defined]

    def _from_proxy(self, proxy_value: Any) -> Any:
        if proxy_value is None and self._optional:
            return None
        return proxy_value.into_source()

    @override
    def _check_value(self, value: Any, /, *, deep: bool) -> None:
        if value is None and self._optional:
            return
        if self._source is not None and not isinstance(value, self._source):
            raise TypeError(f'expected {self._source.__name__}, got {type(value).__name__}')
        if deep:
            self._target._check_value(self._into_proxy(value), deep=True)

    @override
    def default(self) -> Any:
        return self._from_proxy(self._target.default())

    @override
    def _serialize(self, serializer: Serializer, value: Any, /) -> None:
        self._target.serialize(serializer, self._into_proxy(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Any:
        return self._from_proxy(self._target.deserialize(deserializer))

    @override
    def _ser_json(self, state: SerJsonState, value: Any, /) -> None:
        self._target.ser_json(state, self._into_proxy(value))

    @override
    def _de_json(self, state: DeJsonState, /) -> Any:
        return self._from_proxy(self._target.de_json(state))

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Any, /) -> None:
        self._target.ser_ron(state, depth, self._into_proxy(value))

    @override
    def _de_ron(self, state: DeRonState, /) -> Any:
        return self._from_proxy(self._target.de_ron(state))
