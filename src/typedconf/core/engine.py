# src/typedconf/core/engine.py
"""
Orquestração de uma sessão de carregamento.

Sequência fixa e linear, executada exatamente uma vez por chamada:

    Decode → Apply-Defaults → Check-Required → Check-Unknown

Decisões arquiteturais:
    - Cada chamada cria a sua própria `DecodeSession`
    - Metadados de toda a árvore de tipos são extraídos antes do decode,
      de modo que erros de schema falham cedo
    - A primeira exceção encerra a sessão; não há resultado parcial válido
    - Check-Unknown só roda em modo estrito; no modo leniente as chaves
      desconhecidas são apenas registradas no log da sessão

Limites explícitos:
    - Não lê arquivos nem parseia bytes (ver `loader`)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Optional

from .decoder import decode_into
from .defaults import apply_defaults
from .errors import InvalidRootTypeError, InvalidTargetError
from .session import DecodeSession
from .validators import check_required, check_unknown


def check_target(conf: Any) -> None:
    """Exige uma instância de dataclass não congelada."""
    if isinstance(conf, type) or not dataclasses.is_dataclass(conf):
        raise InvalidTargetError(
            "config load internal error: `conf` must be a dataclass instance, "
            f"got {type(conf).__name__}"
        )
    params = getattr(type(conf), "__dataclass_params__", None)
    if params is not None and params.frozen:
        raise InvalidTargetError(
            f"config load internal error: `conf` must be mutable, {type(conf).__name__} is frozen"
        )


def run_session(
    conf: Any,
    document: Optional[Mapping],
    *,
    weak_types: bool = False,
    deny_unknown: bool = False,
) -> DecodeSession:
    """
    Executa as quatro etapas sobre um documento já parseado.

    Args:
        conf: instância mutável de dataclass que será preenchida no lugar.
        document: árvore não tipada (dict); `None` equivale a `{}`.
        weak_types: habilita conversões permissivas entre tipos compatíveis.
        deny_unknown: falha se a entrada tiver chaves sem campo.

    Returns:
        DecodeSession: sessão encerrada (paths usados, chaves não usadas, eventos).

    Raises:
        ConfigError: qualquer subclasse, na primeira falha.
    """
    check_target(conf)

    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise InvalidRootTypeError(
            f"config root must be a mapping, got {type(document).__name__}"
        )

    session = DecodeSession(weak_types=weak_types)
    session.prepare(type(conf))

    decode_into(session, document, conf)
    apply_defaults(session, conf)
    check_required(session, conf)

    if deny_unknown:
        check_unknown(session)
    else:
        for key in session.unused_keys:
            session.log(stage="unknown", level="WARNING", message="unknown option ignored", key=key)

    return session
