# src/typedconf/core/decoder.py
"""
Type-Directed Decoder.

Preenche um dataclass a partir de um documento não tipado (dicts, listas
e escalares produzidos pelo parser YAML/JSON), guiado pelas anotações
de tipo e pelos nomes externos dos campos.

Política de decode (v1):
    - todo valor de entrada `str` com destino escalar (ou `Any`) passa
      pelo hook `decode_string` (indireção `ENV:` + coerção); destinos
      record, sequência e mapa não passam pelo hook
    - record   → campos casados por nome externo exato, depois sem
      diferenciar maiúsculas/minúsculas
    - sequência → nova lista, elemento a elemento (`path[i]`)
    - mapa      → entradas mescladas no dict existente (`path[chave]`)
    - `None` em campo de record equivale a campo ausente

Modo weak (`weak_types=True`):
    - bool ↔ números, números/bool → str
    - valor único → lista de um elemento
    - lista de mapas → mapa mesclado

Invariantes:
    - Todo path atribuído a partir da entrada é registrado em UsedPaths
    - Toda chave sem campo correspondente é registrada em UnusedKeys
    - O alvo é mutado no lugar; records aninhados existentes são reaproveitados

Limites explícitos:
    - Não aplica defaults
    - Não valida obrigatoriedade nem chaves desconhecidas
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np

from .convert import check_float_range, check_int_range, decode_string
from .errors import InternalWriteError, TypeMismatchError, ValueConversionError
from .kinds import Kind, TypeInfo, new_record, zero_value
from .paths import ROOT, field_path, index_path, key_path
from .session import DecodeSession

_NOT_FOUND = object()

_CONTAINER_KINDS = frozenset({Kind.RECORD, Kind.SEQUENCE, Kind.MAP})


def decode_into(session: DecodeSession, document: Mapping, target: Any) -> None:
    """Decodifica `document` no dataclass `target` (mutado no lugar)."""
    _decode_record(session, ROOT, document, target)
    session.log(
        stage="decode",
        level="INFO",
        message="document decoded",
        used=len(session.used_paths),
        unused=len(session.unused_keys),
    )


def decode_value(session: DecodeSession, path: str, data: Any, info: TypeInfo, current: Any = None) -> Any:
    """
    Converte `data` para o tipo descrito por `info` e retorna o novo valor.

    `current` é o valor atualmente no destino; records e dicts existentes
    são preenchidos no lugar em vez de recriados.
    """
    if data is None:
        return zero_value(info)

    kind = info.kind
    if isinstance(data, str) and kind not in _CONTAINER_KINDS:
        data = decode_string(data, info, path)

    if kind is Kind.ANY:
        return data
    if kind is Kind.BOOL:
        return _decode_bool(session, path, data, info)
    if kind in (Kind.INT, Kind.UINT):
        return _decode_int(session, path, data, info)
    if kind is Kind.FLOAT:
        return _decode_float(session, path, data, info)
    if kind is Kind.STRING:
        return _decode_string(session, path, data, info)
    if kind is Kind.SEQUENCE:
        return _decode_sequence(session, path, data, info, current)
    if kind is Kind.MAP:
        return _decode_map(session, path, data, info, current)

    if not isinstance(data, Mapping):
        raise TypeMismatchError(data, info.name, path)
    record = current if isinstance(current, info.type) else new_record(info.type)
    _decode_record(session, path, data, record)
    return record


# -----------------------------
# Records
# -----------------------------

def _match_key(data: Mapping, name: str) -> Any:
    if name in data:
        return name
    folded = name.casefold()
    for key in data:
        if isinstance(key, str) and key.casefold() == folded:
            return key
    return _NOT_FOUND


def _decode_record(session: DecodeSession, path: str, data: Mapping, record: Any) -> None:
    consumed = set()

    for meta in session.fields_of(type(record)):
        key = _match_key(data, meta.external_name)
        if key is _NOT_FOUND:
            continue
        consumed.add(key)

        raw = data[key]
        if raw is None:
            continue

        fpath = field_path(path, meta.external_name)
        value = decode_value(session, fpath, raw, meta.info, getattr(record, meta.attr, None))
        assign(record, meta.attr, value, fpath)
        session.mark_used(fpath)

    for key in data:
        if key not in consumed:
            session.mark_unused(field_path(path, str(key)))


def assign(record: Any, attr: str, value: Any, path: str) -> None:
    try:
        setattr(record, attr, value)
    except (AttributeError, TypeError) as e:
        raise InternalWriteError(path, e) from e


# -----------------------------
# Containers
# -----------------------------

def _decode_sequence(session: DecodeSession, path: str, data: Any, info: TypeInfo, current: Any) -> list:
    if isinstance(data, (list, tuple)):
        items = list(data)
    elif session.weak_types and not isinstance(data, Mapping):
        items = [data]
    else:
        raise TypeMismatchError(data, info.name, path)

    previous = current if isinstance(current, list) else []
    out = []
    for i, raw in enumerate(items):
        ipath = index_path(path, i)
        prev = previous[i] if i < len(previous) else None
        out.append(decode_value(session, ipath, raw, info.item, prev))
        if raw is not None:
            session.mark_used(ipath)
    return out


def _decode_map(session: DecodeSession, path: str, data: Any, info: TypeInfo, current: Any) -> dict:
    if isinstance(data, Mapping):
        source = data
    elif session.weak_types and isinstance(data, list) and all(isinstance(m, Mapping) for m in data):
        source = {}
        for m in data:
            source.update(m)
    else:
        raise TypeMismatchError(data, info.name, path)

    result = current if isinstance(current, dict) else {}
    for raw_key, raw_value in source.items():
        key = decode_value(session, path, raw_key, info.key)
        epath = key_path(path, key)

        # copia a entrada, decodifica e grava de volta
        entry = result.get(key)
        result[key] = decode_value(session, epath, raw_value, info.item, entry)
        if raw_value is not None:
            session.mark_used(epath)
    return result


# -----------------------------
# Escalares
# -----------------------------

def _is_number(data: Any) -> bool:
    return isinstance(data, (int, float, np.number)) and not isinstance(data, bool)


def _decode_bool(session: DecodeSession, path: str, data: Any, info: TypeInfo) -> bool:
    if isinstance(data, (bool, np.bool_)):
        return bool(data)
    if session.weak_types and _is_number(data):
        return bool(data != 0)
    raise TypeMismatchError(data, info.name, path)


def _decode_int(session: DecodeSession, path: str, data: Any, info: TypeInfo) -> Any:
    if isinstance(data, (bool, np.bool_)):
        if not session.weak_types:
            raise TypeMismatchError(data, info.name, path)
        value = int(data)
    elif isinstance(data, (int, np.integer)):
        value = int(data)
    elif isinstance(data, (float, np.floating)):
        if not float(data).is_integer():
            raise ValueConversionError(data, info.name, path, reason="value is not an integer")
        value = int(data)
    else:
        raise TypeMismatchError(data, info.name, path)

    check_int_range(value, info, path)
    return info.type(value)


def _decode_float(session: DecodeSession, path: str, data: Any, info: TypeInfo) -> Any:
    if isinstance(data, (bool, np.bool_)):
        if not session.weak_types:
            raise TypeMismatchError(data, info.name, path)
        value = float(data)
    elif _is_number(data):
        try:
            value = float(data)
        except OverflowError as e:
            raise ValueConversionError(data, info.name, path, reason="value out of range") from e
    else:
        raise TypeMismatchError(data, info.name, path)

    check_float_range(value, info, path)
    return info.type(value)


def _decode_string(session: DecodeSession, path: str, data: Any, info: TypeInfo) -> str:
    if isinstance(data, str):
        return data
    if session.weak_types:
        if isinstance(data, (bool, np.bool_)):
            return "1" if data else "0"
        if isinstance(data, (int, np.integer)):
            return str(int(data))
        if isinstance(data, (float, np.floating)):
            return np.format_float_positional(float(data), trim="-")
    raise TypeMismatchError(data, info.name, path)
