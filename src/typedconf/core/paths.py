# src/typedconf/core/paths.py
"""Construção canônica de paths.

Decoder, Default Applier e validadores comparam paths por igualdade de
string, por isso existe uma única implementação de cada junção.

Formato:
    - campo de record  → `pai.nome` (ou `nome` na raiz)
    - item de sequência → `pai[i]`
    - entrada de mapa   → `pai[chave]`
"""

from __future__ import annotations

from typing import Any

ROOT = ""


def field_path(parent: str, name: str) -> str:
    if parent:
        return f"{parent}.{name}"
    return name


def index_path(parent: str, index: int) -> str:
    return f"{parent}[{index}]"


def key_path(parent: str, key: Any) -> str:
    return f"{parent}[{key}]"
