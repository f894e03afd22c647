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

from collections import OrderedDict, deque
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import NoneType, UnionType
from typing import Any, NamedTuple

from nanoserde.serde_types.array_serde_type import ArraySerdeType
from nanoserde.serde_types.attrs import SerdeAttrs
from nanoserde.serde_types.bool_serde_type import BoolSerdeType
from nanoserde.serde_types.box_serde_type import BoxSerdeType
from nanoserde.serde_types.char_serde_type import CharSerdeType
from nanoserde.serde_types.collection_serde_type import (
    BytesSerdeType,
    DequeSerdeType,
    FrozenSetSerdeType,
    ListSerdeType,
    SetSerdeType,
    VarTupleSerdeType,
)
from nanoserde.serde_types.dataclass_serde_type import RecordSerdeType
from nanoserde.serde_types.duration_serde_type import DurationSerdeType, SystemTimeSerdeType
from nanoserde.serde_types.enum_serde_type import EnumSerdeType
from nanoserde.serde_types.float_serde_type import Float32SerdeType, Float64SerdeType
from nanoserde.serde_types.map_serde_type import DictSerdeType
from nanoserde.serde_types.markers import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    ArrayLength,
    Boxed,
    Char,
    Duration,
    SystemTime,
    USize,
)
from nanoserde.serde_types.namedtuple_serde_type import NamedTupleSerdeType
from nanoserde.serde_types.null_serde_type import NullSerdeType
from nanoserde.serde_types.optional_serde_type import OptionalSerdeType
from nanoserde.serde_types.proxy_serde_type import ProxySerdeType
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.sized_int_serde_type import (
    Int8SerdeType,
    Int16SerdeType,
    Int32SerdeType,
    Int64SerdeType,
    Int128SerdeType,
    Uint8SerdeType,
    Uint16SerdeType,
    Uint32SerdeType,
    Uint64SerdeType,
    Uint128SerdeType,
    USizeSerdeType,
)
from nanoserde.serde_types.str_serde_type import StrSerdeType
from nanoserde.serde_types.tuple_serde_type import TupleSerdeType
from nanoserde.serde_types.utils import TypeAliasMap, TypeToSerdeTypeMap, VariantUnion
from nanoserde.serde_types.variant_serde_type import VariantSerdeType

__all__ = [
    'DEFAULT_TYPE_ALIAS_MAP',
    'DEFAULT_TYPE_MAP',
    'TYPE_TO_SERDE_TYPE_MAP',
    'ArraySerdeType',
    'BoolSerdeType',
    'BoxSerdeType',
    'BytesSerdeType',
    'CharSerdeType',
    'DequeSerdeType',
    'DictSerdeType',
    'DurationSerdeType',
    'EnumSerdeType',
    'Float32SerdeType',
    'Float64SerdeType',
    'FrozenSetSerdeType',
    'Int8SerdeType',
    'Int16SerdeType',
    'Int32SerdeType',
    'Int64SerdeType',
    'Int128SerdeType',
    'ListSerdeType',
    'NamedTupleSerdeType',
    'NullSerdeType',
    'OptionalSerdeType',
    'ProxySerdeType',
    'RecordSerdeType',
    'SerdeType',
    'SetSerdeType',
    'StrSerdeType',
    'SystemTimeSerdeType',
    'TupleSerdeType',
    'TypeAliasMap',
    'TypeToSerdeTypeMap',
    'USizeSerdeType',
    'Uint8SerdeType',
    'Uint16SerdeType',
    'Uint32SerdeType',
    'Uint64SerdeType',
    'Uint128SerdeType',
    'VarTupleSerdeType',
    'VariantSerdeType',
    'make_serde_type',
]

DEFAULT_TYPE_ALIAS_MAP: TypeAliasMap = {
    OrderedDict: dict,
    bytearray: bytes,
}

# Mapping between types and SerdeType classes.
TYPE_TO_SERDE_TYPE_MAP: TypeToSerdeTypeMap = {
    # builtin types:
    bool: BoolSerdeType,
    bytes: BytesSerdeType,
    dict: DictSerdeType,
    float: Float64SerdeType,
    frozenset: FrozenSetSerdeType,
    int: Int64SerdeType,
    list: ListSerdeType,
    set: SetSerdeType,
    str: StrSerdeType,
    tuple: TupleSerdeType,
    # XXX: ignored dict-item because technically None is not a type, type[None]/NoneType is
    None: NullSerdeType,  # type: ignore[dict-item]
    NoneType: NullSerdeType,
    # other Python types:
    deque: DequeSerdeType,
    UnionType: OptionalSerdeType,
    VariantUnion: VariantSerdeType,
    # XXX: these are not classes, classes of each kind are mapped to them by `get_usable_origin_type`
    NamedTuple: NamedTupleSerdeType,  # type: ignore[dict-item]
    dataclass: RecordSerdeType,  # type: ignore[dict-item]
    Enum: EnumSerdeType,
    # sized numbers and chars:
    I8: Int8SerdeType,
    I16: Int16SerdeType,
    I32: Int32SerdeType,
    I64: Int64SerdeType,
    I128: Int128SerdeType,
    U8: Uint8SerdeType,
    U16: Uint16SerdeType,
    U32: Uint32SerdeType,
    U64: Uint64SerdeType,
    U128: Uint128SerdeType,
    USize: USizeSerdeType,
    F32: Float32SerdeType,
    F64: Float64SerdeType,
    Char: CharSerdeType,
    # time:
    Duration: DurationSerdeType,
    SystemTime: SystemTimeSerdeType,
    # `Annotated` markers:
    ArrayLength: ArraySerdeType,
    Boxed: BoxSerdeType,
    SerdeAttrs: ProxySerdeType,
}

DEFAULT_TYPE_MAP = SerdeType.TypeMap(DEFAULT_TYPE_ALIAS_MAP, TYPE_TO_SERDE_TYPE_MAP)


@lru_cache(maxsize=None)
def make_serde_type(type_: Any, /) -> SerdeType:
    """ Like SerdeType.from_type, but with the default maps, the result is cached per type.

    If you need to customize the mapping use `SerdeType.from_type` instead.

    >>> make_serde_type(list[int]).to_json([1, 2])
    '[1,2]'
    >>> make_serde_type(dict[str, U8]).to_bytes({'a': 1}).hex()
    '010000000000000001000000000000006101'
    """
    return SerdeType.from_type(type_, type_map=DEFAULT_TYPE_MAP)
