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

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, is_dataclass
from enum import Enum
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Annotated, Any, Iterator, NamedTuple, TypeAlias, TypeVar, get_type_hints

from structlog import get_logger

from nanoserde.utils.typing import get_args, get_origin, is_subclass, split_annotated

if TYPE_CHECKING:
    from nanoserde.serde_types import SerdeType


logger = get_logger()

T = TypeVar('T')
M = TypeVar('M')
TypeAliasMap: TypeAlias = Mapping[Any, type]
TypeToSerdeTypeMap: TypeAlias = Mapping[Any, type['SerdeType']]


class VariantUnion:
    """ Key of a `TypeToSerdeTypeMap` for unions without `None`, those are variant types.

    Unions that include `None` are optionals and use `types.UnionType` as key.
    """


def get_origin_classes(type_: Any) -> Iterator[type]:
    """ This util function is useful to generalize over a type T and unions A | B.

    A simple type T is yielded directly, and an union yields each type in it, only origin types are yielded.

    >>> list(get_origin_classes(int))
    [<class 'int'>]
    >>> list(get_origin_classes(set[int] | dict[int, str]))
    [<class 'set'>, <class 'dict'>]
    """
    type_, _ = split_annotated(type_)
    origin_type = get_origin(type_) or type_
    if origin_type is UnionType:
        for arg_type in get_args(type_):
            yield from get_origin_classes(arg_type)
    else:
        yield origin_type


def is_origin_hashable(type_: Any) -> bool:
    """ Checks whether the given type signature satisfies `collections.abc.Hashable`.

    This check ignores type arguments, but takes into account all types of an union.

    >>> is_origin_hashable(int | str | bytes)
    True
    >>> is_origin_hashable(int | set[int])
    False
    >>> is_origin_hashable(frozenset[int])
    True
    >>> is_origin_hashable(list)
    False

    Even though list is not hashable, a frozenset[list] is, simply because arguments are ignored:
    >>> is_origin_hashable(frozenset[list])
    True
    """
    return all(_is_origin_hashable(origin_class) for origin_class in get_origin_classes(type_))


def _is_origin_hashable(origin_class: Any) -> bool:
    # XXX: NewType markers and None are not classes, all of them stand for hashable values
    if not isinstance(origin_class, type):
        return True
    # XXX: dataclasses are only hashable when frozen, `__hash__` is None otherwise
    return is_subclass(origin_class, Hashable)


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(None)
    'None'
    >>> pretty_type(int)
    'int'
    >>> pretty_type(list[int])
    'list[int]'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__') or not hasattr(type_, '__name__'):
        return str(type_)
    else:
        return type_.__name__


def is_namedtuple_class(type_: Any) -> bool:
    return isinstance(type_, type) and NamedTuple in getattr(type_, '__orig_bases__', tuple())


def is_dataclass_class(type_: Any) -> bool:
    return isinstance(type_, type) and is_dataclass(type_)


def get_usable_origin_type(type_: Any, /, *, type_map: 'SerdeType.TypeMap') -> Any:
    """ Map a given type into a key that is usable in a SerdeType.TypeMap.

    Aliases of `type_map.alias_map` are applied to the origin. Unions are either optionals (`types.UnionType`) or
    variant types (`VariantUnion`), and classes that aren't in the map directly are looked up by kind: named tuples by
    `typing.NamedTuple`, dataclasses by `dataclasses.dataclass` and enums by `enum.Enum`.

    If the given type cannot be used in the given type_map, a TypeError exception will be raised.

    >>> from nanoserde.serde_types import DEFAULT_TYPE_MAP as type_map
    >>> from collections import OrderedDict
    >>> get_usable_origin_type(OrderedDict[str, int], type_map=type_map)
    <class 'dict'>
    >>> get_usable_origin_type(int | str, type_map=type_map)
    <class 'nanoserde.serde_types.utils.VariantUnion'>
    """
    if isinstance(type_, str):
        raise TypeError(f'unresolved string annotation {type_!r}')

    origin_type = get_origin(type_) or type_
    origin_type = type_map.alias_map.get(origin_type, origin_type)

    if origin_type is UnionType:
        if NoneType not in get_args(type_):
            origin_type = VariantUnion

    if origin_type in type_map.serde_types_map:
        return origin_type

    if NamedTuple in type_map.serde_types_map and is_namedtuple_class(type_):
        return NamedTuple

    if dataclass in type_map.serde_types_map and is_dataclass_class(type_):
        return dataclass

    if Enum in type_map.serde_types_map and is_subclass(type_, Enum):
        return Enum

    raise TypeError(f'type {pretty_type(type_)} is not supported by any SerdeType class')


def strip_marker(type_: Any, marker_class: type[M]) -> tuple[M, Any]:
    """ Take the first `marker_class` instance out of `Annotated` metadata.

    Returns the marker and the type without it, other metadata is kept.

    >>> from nanoserde.serde_types.markers import Boxed
    >>> strip_marker(Annotated[int, Boxed(), 'x'], Boxed)
    (Boxed(), typing.Annotated[int, 'x'])
    >>> strip_marker(Annotated[int, Boxed()], Boxed)
    (Boxed(), <class 'int'>)
    """
    inner, metadata = split_annotated(type_)
    for index, meta in enumerate(metadata):
        if isinstance(meta, marker_class):
            rest = metadata[:index] + metadata[index + 1:]
            if rest:
                return meta, Annotated[(inner, *rest)]  # type: ignore[return-value]
            return meta, inner
    raise TypeError(f'expected {marker_class.__name__} in annotation of {pretty_type(type_)}')


def get_class_hints(class_: type) -> dict[str, Any]:
    """Resolved annotations of a class, `Annotated` metadata is kept."""
    try:
        return get_type_hints(class_, include_extras=True)
    except NameError as e:
        raise TypeError(f'cannot resolve annotations of {class_.__name__}: {e}') from e
