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

import typing
from types import UnionType
from typing import Annotated, Any, TypeGuard, TypeVar

T = TypeVar('T')


def get_origin(type_: Any) -> Any:
    """ Like `typing.get_origin` but `typing.Union` and `X | Y` have the same origin.

    >>> get_origin(int | None) is UnionType
    True
    >>> get_origin(typing.Optional[int]) is UnionType
    True
    >>> get_origin(list[int])
    <class 'list'>
    >>> get_origin(int) is None
    True
    """
    origin = typing.get_origin(type_)
    if origin is typing.Union:
        return UnionType
    return origin


def get_args(type_: Any) -> tuple[Any, ...]:
    return typing.get_args(type_)


def is_subclass(type_: Any, class_: type[T]) -> TypeGuard[type[T]]:
    """ Like `issubclass` but returns False instead of raising when `type_` is not a class.

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(list[int], list)
    False
    """
    return isinstance(type_, type) and issubclass(type_, class_)


def split_annotated(type_: Any) -> tuple[Any, tuple[Any, ...]]:
    """ Separate `Annotated[T, x, y]` into `(T, (x, y))`, other types have no metadata.

    >>> split_annotated(Annotated[int, 'meta'])
    (<class 'int'>, ('meta',))
    >>> split_annotated(int)
    (<class 'int'>, ())
    """
    if typing.get_origin(type_) is Annotated:
        return type_.__origin__, tuple(type_.__metadata__)
    return type_, ()
