# src/typedconf/core/validators.py
"""
Validadores estruturais.

Dois contratos independentes, avaliados após o Default Applier:
    - Required-Field Validator: todo campo `required` precisa ter o seu
      path em UsedPaths
    - Unknown-Key Validator (modo estrito): UnusedKeys precisa estar vazio

Ordem de travessia:
    - records: ordem de declaração (o campo é checado antes dos filhos)
    - sequências: ordem de índice
    - mapas: ordem de inserção

Invariantes:
    - A primeira violação encerra a validação
    - Records opcionais ausentes não são percorridos

Limites explícitos:
    - Não altera o alvo
    - Não aplica defaults
"""

from __future__ import annotations

from typing import Any

from .errors import RequiredMissingError, UnknownOptionError
from .kinds import Kind, TypeInfo
from .paths import ROOT, field_path, index_path, key_path
from .session import DecodeSession


def check_required(session: DecodeSession, target: Any) -> None:
    """
    Garante que toda opção obrigatória foi fornecida pela entrada.

    Um campo preenchido apenas por default não satisfaz `required`,
    pois UsedPaths só contém paths vindos da entrada.

    Raises:
        RequiredMissingError: com o path completo do primeiro campo ausente
            (ex.: `job.name`, `list[2].name`, `map[key3].name`).
    """
    _check_record(session, ROOT, target)
    session.log(stage="required", level="INFO", message="required options present")


def _check_record(session: DecodeSession, path: str, record: Any) -> None:
    for meta in session.fields_of(type(record)):
        fpath = field_path(path, meta.external_name)
        if meta.required and not session.is_used(fpath):
            raise RequiredMissingError(fpath)
        _check_value(session, fpath, getattr(record, meta.attr, None), meta.info)


def _check_value(session: DecodeSession, path: str, value: Any, info: TypeInfo) -> None:
    if value is None:
        return
    if info.kind is Kind.RECORD:
        _check_record(session, path, value)
    elif info.kind is Kind.SEQUENCE and isinstance(value, list):
        for i, item in enumerate(value):
            _check_value(session, index_path(path, i), item, info.item)
    elif info.kind is Kind.MAP and isinstance(value, dict):
        for key, entry in value.items():
            _check_value(session, key_path(path, key), entry, info.item)


def check_unknown(session: DecodeSession) -> None:
    """Modo estrito: falha com a primeira chave de entrada não utilizada."""
    if session.unused_keys:
        raise UnknownOptionError(session.unused_keys[0])
    session.log(stage="unknown", level="INFO", message="no unknown options")
