# src/typedconf/core/encode.py
"""Codificação de um dataclass preenchido de volta para documento.

Produz a árvore de dicts/listas/escalares Python indexada pelos nomes
externos dos campos, pronta para `yaml.safe_dump` ou `json.dumps`.
Escalares numpy viram escalares Python equivalentes.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Dict

import numpy as np

from .errors import InvalidTargetError
from .metadata import extract_fields


def as_document(conf: Any) -> Dict[str, Any]:
    if isinstance(conf, type) or not dataclasses.is_dataclass(conf):
        raise InvalidTargetError(f"cannot encode {type(conf).__name__}: not a dataclass instance")
    return _encode(conf)


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            meta.external_name: _encode(getattr(value, meta.attr))
            for meta in extract_fields(type(value))
        }
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    if isinstance(value, Mapping):
        return {_encode(k): _encode(v) for k, v in value.items()}
    if isinstance(value, np.generic):
        return value.item()
    return value
