# src/typedconf/core/kinds.py
"""
Classificação de tipos declarados.

Traduz anotações Python (`int`, `numpy.uint16`, `Optional[Job]`,
`List[str]`, `Dict[str, Endpoint]`...) para um descritor `TypeInfo`
consumido pelo decoder, pelo Default Applier e pelos validadores.

Decisões arquiteturais:
    - Larguras fixas de inteiros e floats são expressas com os tipos
      escalares do numpy; `int` e `float` valem como 64 bits
    - Anotações não suportadas caem em `Kind.ANY` (passthrough)
    - Zero values são construídos sem chamar `__init__`
"""

from __future__ import annotations

import collections.abc
import dataclasses
import types
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Union, get_args, get_origin, get_type_hints

import numpy as np

_UnionType = getattr(types, "UnionType", None)


class Kind(str, Enum):
    """Categorias de destino reconhecidas pelo engine."""

    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    STRING = "string"
    RECORD = "record"
    SEQUENCE = "sequence"
    MAP = "map"
    ANY = "any"


SCALAR_KINDS = frozenset({Kind.BOOL, Kind.INT, Kind.UINT, Kind.FLOAT, Kind.STRING})

_SIGNED_BITS = {int: 64, np.int8: 8, np.int16: 16, np.int32: 32, np.int64: 64}
_UNSIGNED_BITS = {np.uint8: 8, np.uint16: 16, np.uint32: 32, np.uint64: 64}
_FLOAT_BITS = {float: 64, np.float32: 32, np.float64: 64}

_SEQUENCE_ORIGINS = (list, collections.abc.Sequence, collections.abc.MutableSequence)
_MAP_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)


@dataclass(frozen=True)
class TypeInfo:
    """
    Descritor imutável de um tipo de destino.

    Campos:
    - kind: categoria (`Kind`)
    - type: classe concreta do valor (escalar, dataclass, list ou dict)
    - optional: aceita `None`
    - bits: largura para inteiros e floats
    - item: descritor do elemento (sequência) ou do valor (mapa)
    - key: descritor da chave (mapa)
    """

    kind: Kind
    type: Any
    optional: bool = False
    bits: int = 0
    item: Optional["TypeInfo"] = None
    key: Optional["TypeInfo"] = None

    @property
    def is_scalar(self) -> bool:
        return self.kind in SCALAR_KINDS

    @property
    def name(self) -> str:
        if self.kind in (Kind.SEQUENCE, Kind.MAP, Kind.RECORD) or self.is_scalar:
            return getattr(self.type, "__name__", str(self.type))
        return self.kind.value


ANY_INFO = TypeInfo(Kind.ANY, object)


def describe(tp: Any) -> TypeInfo:
    """Converte uma anotação já resolvida em `TypeInfo`."""
    if tp is Any or tp is object:
        return ANY_INFO

    origin = get_origin(tp)

    if origin is Union or (_UnionType is not None and origin is _UnionType):
        args = get_args(tp)
        members = [a for a in args if a is not type(None)]
        optional = len(members) != len(args)
        if len(members) == 1:
            return replace(describe(members[0]), optional=optional)
        return replace(ANY_INFO, optional=optional)

    if tp is bool:
        return TypeInfo(Kind.BOOL, bool)
    if tp in _SIGNED_BITS:
        return TypeInfo(Kind.INT, tp, bits=_SIGNED_BITS[tp])
    if tp in _UNSIGNED_BITS:
        return TypeInfo(Kind.UINT, tp, bits=_UNSIGNED_BITS[tp])
    if tp in _FLOAT_BITS:
        return TypeInfo(Kind.FLOAT, tp, bits=_FLOAT_BITS[tp])
    if tp is str:
        return TypeInfo(Kind.STRING, str)

    if tp is list or origin in _SEQUENCE_ORIGINS:
        args = get_args(tp)
        item = describe(args[0]) if args else ANY_INFO
        return TypeInfo(Kind.SEQUENCE, list, item=item)

    if tp is dict or origin in _MAP_ORIGINS:
        args = get_args(tp)
        key = describe(args[0]) if args else ANY_INFO
        value = describe(args[1]) if len(args) > 1 else ANY_INFO
        return TypeInfo(Kind.MAP, dict, item=value, key=key)

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return TypeInfo(Kind.RECORD, tp)

    return ANY_INFO


def new_record(cls: type) -> Any:
    """Cria uma instância "zerada" de um dataclass sem invocar `__init__`.

    Cada campo recebe o default/default_factory declarado no dataclass
    ou, na falta deles, o zero value do seu tipo.
    """
    obj = cls.__new__(cls)
    hints = get_type_hints(cls)
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            value = zero_value(describe(hints.get(f.name, Any)))
        object.__setattr__(obj, f.name, value)
    return obj


def zero_value(info: TypeInfo) -> Any:
    if info.optional or info.kind is Kind.ANY:
        return None
    if info.kind is Kind.BOOL:
        return False
    if info.kind in (Kind.INT, Kind.UINT, Kind.FLOAT):
        return info.type(0)
    if info.kind is Kind.STRING:
        return ""
    if info.kind is Kind.SEQUENCE:
        return []
    if info.kind is Kind.MAP:
        return {}
    return new_record(info.type)
