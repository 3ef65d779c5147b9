# src/typedconf/core/defaults.py
"""Default Applier.

Percorre o alvo já decodificado (depth-first, guiado pelos tipos
declarados) e atribui o default declarado a cada folha escalar cujo
path não foi preenchido pela entrada.

Regras:
    - record: cada campo carrega o seu próprio default para baixo
    - sequência e mapa: elementos/entradas nunca carregam default
    - record opcional ausente (`None`) é ignorado, sem alocação
    - a entrada sempre vence o default

Todo nível retorna o valor (possivelmente novo) e o nível pai grava de
volta; mapas seguem copia / modifica / regrava.
"""

from __future__ import annotations

from typing import Any, Optional

from .convert import convert_string
from .decoder import assign
from .kinds import Kind, TypeInfo
from .paths import ROOT, field_path, index_path, key_path
from .session import DecodeSession


def apply_defaults(session: DecodeSession, target: Any) -> None:
    _apply_record(session, ROOT, target)
    session.log(stage="defaults", level="INFO", message="defaults applied")


def _apply_record(session: DecodeSession, path: str, record: Any) -> None:
    for meta in session.fields_of(type(record)):
        fpath = field_path(path, meta.external_name)
        current = getattr(record, meta.attr, None)
        value = _walk(session, fpath, current, meta.info, meta.default)
        if value is not current:
            assign(record, meta.attr, value, fpath)


def _walk(session: DecodeSession, path: str, value: Any, info: TypeInfo, default: Optional[str]) -> Any:
    kind = info.kind

    if kind is Kind.RECORD:
        if value is not None:
            _apply_record(session, path, value)
        return value

    if kind is Kind.SEQUENCE:
        if isinstance(value, list):
            for i, item in enumerate(value):
                value[i] = _walk(session, index_path(path, i), item, info.item, None)
        return value

    if kind is Kind.MAP:
        if isinstance(value, dict):
            for key in list(value):
                entry = value[key]
                value[key] = _walk(session, key_path(path, key), entry, info.item, None)
        return value

    if not info.is_scalar or default is None or session.is_used(path):
        return value

    parsed = convert_string(default, info, path)
    session.log(stage="defaults", level="DEBUG", message="default applied", path=path, value=default)
    return parsed
