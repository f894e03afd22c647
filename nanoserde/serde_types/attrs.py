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
Attributes that customize how records, tuple types and variants are serialized.

A single `nserde(...)` value carries all of them. On a field it goes into `Annotated` metadata, on a class it is used
as a decorator:

>>> from dataclasses import dataclass
>>> from typing import Annotated
>>> @nserde(default=DEFAULT)
... @dataclass
... class Point:
...     x: Annotated[int, nserde(rename='X')]
...     y: int
>>> get_container_attrs(Point).has_default
True
>>> nserde(colour='red')
Traceback (most recent call last):
...
TypeError: unknown nserde attribute: colour
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from typing import Any, Optional, Protocol, TypeVar, runtime_checkable

from typing_extensions import Self

T = TypeVar('T')
C = TypeVar('C', bound=type)


class _DefaultType:
    """Type of `DEFAULT`, there is only one instance."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'DEFAULT'


# use `nserde(default=DEFAULT)` for the default of the field's type, any other value is used as is
DEFAULT: Any = _DefaultType()


class _MissingType:
    __slots__ = ()

    def __repr__(self) -> str:
        return 'MISSING'


MISSING: Any = _MissingType()


@dataclass(frozen=True, eq=False)
class SerdeAttrs:
    """ Serialization attributes of a field or a class, build them with `nserde(...)`.

    Instances compare and hash by identity, so they can be used in `Annotated` metadata with any attribute value.
    """

    rename: Optional[str | Mapping[str, str]] = None
    default: Any = MISSING
    default_with: Optional[Callable[[], Any]] = None
    skip: bool = False
    proxy: Optional[type] = None
    transparent: bool = False
    serialize_none_as_null: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def literal_default(self) -> Any:
        """A copy of the literal default, must not be called when the default is `DEFAULT` or missing."""
        assert self.has_default and self.default is not DEFAULT
        return copy.deepcopy(self.default)

    def __call__(self, class_: C) -> C:
        """Use the attributes as class decorator."""
        class_.__nserde__ = self  # type: ignore[attr-defined]
        return class_


_KNOWN_ATTRIBUTES = frozenset(f.name for f in fields(SerdeAttrs))

NO_ATTRS = SerdeAttrs()


def nserde(**kwargs: Any) -> SerdeAttrs:
    unknown = sorted(set(kwargs) - _KNOWN_ATTRIBUTES)
    if unknown:
        raise TypeError(f'unknown nserde attribute: {", ".join(unknown)}')
    default_with = kwargs.get('default_with')
    if default_with is not None and not callable(default_with):
        raise TypeError('default_with must be a callable')
    return SerdeAttrs(**kwargs)


def get_field_attrs(metadata: tuple[Any, ...]) -> SerdeAttrs:
    """Find the attributes in `Annotated` metadata, at most one `nserde(...)` is allowed."""
    found = [meta for meta in metadata if isinstance(meta, SerdeAttrs)]
    if len(found) > 1:
        raise TypeError('only one nserde(...) is allowed per field')
    return found[0] if found else NO_ATTRS


def get_container_attrs(class_: Any) -> SerdeAttrs:
    """Attributes set with `@nserde(...)` on the class itself, base classes are not considered."""
    if not isinstance(class_, type):
        return NO_ATTRS
    attrs = class_.__dict__.get('__nserde__')
    return attrs if isinstance(attrs, SerdeAttrs) else NO_ATTRS


@runtime_checkable
class SerdeProxy(Protocol[T]):
    """ A type that stands in for another one when serializing.

    The value is converted with `from_source` before being written, and the decoded proxy is converted back with
    `into_source`.
    """

    @classmethod
    def from_source(cls, value: T, /) -> Self:
        ...

    def into_source(self) -> T:
        ...


def set_attributes(attrs: SerdeAttrs) -> frozenset[str]:
    """ Names of the attributes that differ from their default.

    >>> sorted(set_attributes(nserde(skip=True, rename='x')))
    ['rename', 'skip']
    """
    return frozenset(name for name in _KNOWN_ATTRIBUTES if getattr(attrs, name) is not getattr(NO_ATTRS, name))
