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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, NamedTuple, Optional, TypeVar, final

from structlog import get_logger
from typing_extensions import Self

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.attrs import SerdeAttrs, get_container_attrs
from nanoserde.serde_types.utils import (
    TypeAliasMap,
    TypeToSerdeTypeMap,
    get_usable_origin_type,
    pretty_type,
)
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.utils.typing import split_annotated

if TYPE_CHECKING:
    from nanoserde.conf.settings import CodecSettings

logger = get_logger()

T = TypeVar('T')


def _resolve_settings(settings: Optional[CodecSettings]) -> CodecSettings:
    if settings is not None:
        return settings
    from nanoserde.conf.get_settings import get_global_settings
    return get_global_settings()


class SerdeType(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how it will be (de)serialized.

    A SerdeType is built once from an annotation (see `make_serde_type`) and can then encode and decode values of that
    annotation in the three formats: binary, JSON and RON. Each format has a pair of final methods that work on an
    encoder/decoder state, so compound types can nest the calls, and a pair of shortcuts that work on a whole
    document:

    - binary: `serialize`/`deserialize` and `to_bytes`/`from_bytes`
    - JSON: `ser_json`/`de_json` and `to_json`/`from_json`
    - RON: `ser_ron`/`de_ron` and `to_ron`/`from_ron`

    Subclasses implement the underscored versions of each method.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        serde_types_map: TypeToSerdeTypeMap

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    @final
    @staticmethod
    def from_type(type_: Any, /, *, type_map: TypeMap) -> SerdeType:
        """ Instantiate a SerdeType instance from a type signature using the given maps.

        `Annotated` metadata with a marker that is in the map (like the length of a fixed array) takes precedence,
        then a container level proxy, and then the type itself is looked up.
        """
        inner, metadata = split_annotated(type_)
        for meta in metadata:
            if isinstance(meta, SerdeAttrs) and meta.proxy is None:
                continue
            marker_serde_type = type_map.serde_types_map.get(type(meta))
            if marker_serde_type is not None:
                return marker_serde_type._from_type(type_, type_map=type_map)
        if get_container_attrs(inner).proxy is not None:
            proxy_serde_type = type_map.serde_types_map[SerdeAttrs]
            return proxy_serde_type._from_type(inner, type_map=type_map)
        usable_origin = get_usable_origin_type(inner, type_map=type_map)
        serde_type = type_map.serde_types_map[usable_origin]
        result = serde_type._from_type(inner, type_map=type_map)
        logger.debug('serde type built', type=pretty_type(inner), serde_type=type(result).__name__)
        return result

    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: TypeMap) -> Self:
        """ Instantiate a SerdeType instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        use `SerdeType.from_type` for inner types, forwarding the given `type_map`.
        """
        # XXX: a SerdeType that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a SerdeType.TypeMap')

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError if the value's type is not compatible, or a ValueError if it is out of range.

        The check recurses into compound values.
        """
        # XXX: subclasses must implement SerdeType._check_value, not SerdeType.check_value
        self._check_value(value, deep=True)

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `SerdeType.check_value`.

        Encoders call this with `deep=False` for each value they write, compound types check their items as they
        encode them.
        """
        raise NotImplementedError

    @abstractmethod
    def default(self) -> T:
        """The default value of the type, used for skipped fields and for `nserde(default=DEFAULT)`."""
        raise NotImplementedError

    # binary

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value instance according to the signature that was abstracted.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        # XXX: subclasses must implement SerdeType._serialize, not SerdeType.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """Deserialize a value, the deserializer is left right after the value."""
        # XXX: subclasses must implement SerdeType._deserialize, not SerdeType.deserialize
        return self._deserialize(deserializer)

    @final
    def to_bytes(self, value: T, /) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /, *, settings: Optional[CodecSettings] = None) -> T:
        """Parse a whole document, trailing bytes are an error."""
        settings = _resolve_settings(settings)
        deserializer = Deserializer.build_bytes_deserializer(data, max_length=settings.MAX_LENGTH_PREFIX)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        When implementing the serialization with compound encoders, `SerdeType.serialize` should be passed as an
        `Encoder` instead of `SerdeType._serialize`.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        raise NotImplementedError

    # JSON

    @final
    def ser_json(self, state: SerJsonState, value: T, /) -> None:
        self._check_value(value, deep=False)
        self._ser_json(state, value)

    @final
    def de_json(self, state: DeJsonState, /) -> T:
        """Decode a value starting at the current token, the state is left at the token after the value."""
        return self._de_json(state)

    @final
    def to_json(self, value: T, /) -> str:
        state = SerJsonState()
        self.ser_json(state, value)
        return state.finalize()

    @final
    def from_json(self, text: str, /, *, settings: Optional[CodecSettings] = None) -> T:
        state = DeJsonState(text, settings=settings)
        state.start()
        return self.de_json(state)

    @abstractmethod
    def _ser_json(self, state: SerJsonState, value: T, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def _de_json(self, state: DeJsonState, /) -> T:
        raise NotImplementedError

    # RON

    @final
    def ser_ron(self, state: SerRonState, depth: int, value: T, /) -> None:
        """Encode a value, `depth` is the indentation level of the line the value starts on."""
        self._check_value(value, deep=False)
        self._ser_ron(state, depth, value)

    @final
    def de_ron(self, state: DeRonState, /) -> T:
        return self._de_ron(state)

    @final
    def to_ron(self, value: T, /, *, settings: Optional[CodecSettings] = None) -> str:
        settings = _resolve_settings(settings)
        state = SerRonState(indent_width=settings.RON_INDENT_WIDTH)
        self.ser_ron(state, 0, value)
        return state.finalize()

    @final
    def from_ron(self, text: str, /, *, settings: Optional[CodecSettings] = None) -> T:
        state = DeRonState(text, settings=settings)
        state.start()
        return self.de_ron(state)

    @abstractmethod
    def _ser_ron(self, state: SerRonState, depth: int, value: T, /) -> None:
        raise NotImplementedError

    @abstractmethod
    def _de_ron(self, state: DeRonState, /) -> T:
        raise NotImplementedError
