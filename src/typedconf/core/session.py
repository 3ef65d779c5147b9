# src/typedconf/core/session.py
"""
Estado de uma sessão de carregamento.

Uma `DecodeSession` é criada por chamada de `load`/`load_from_bytes` e
passada explicitamente a todas as etapas (decode, defaults, required,
unknown). Ela consolida:
    - cache de metadados por dataclass
    - paths efetivamente preenchidos pela entrada (UsedPaths)
    - chaves de entrada sem campo correspondente (UnusedKeys)
    - log estruturado de eventos

Invariantes:
    - Nenhum estado é compartilhado entre sessões
    - UsedPaths nunca contém paths preenchidos por default
    - UnusedKeys preserva a ordem em que as chaves foram encontradas

Limites explícitos:
    - Não lê arquivos nem parseia documentos
    - Não decide a ordem das etapas (ver `engine.run_session`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Set

from .kinds import Kind, TypeInfo
from .metadata import FieldMeta, extract_fields


@dataclass
class DecodeSession:
    """
    Contexto explícito de uma única passagem de decode.

    Decisões arquiteturais:
        - Paths e chaves são registrados pela própria sessão, nunca por
          closures ou estado de módulo
        - Metadados são extraídos uma vez por classe e por sessão
        - Eventos seguem o formato {stage, level, message, timestamp, ...}
    """

    weak_types: bool = False

    used_paths: Set[str] = field(default_factory=set)
    unused_keys: List[str] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)

    _metadata: Dict[type, List[FieldMeta]] = field(default_factory=dict, init=False, repr=False)

    # -----------------------------
    # Metadados
    # -----------------------------
    def fields_of(self, cls: type) -> List[FieldMeta]:
        if cls not in self._metadata:
            self._metadata[cls] = extract_fields(cls)
        return self._metadata[cls]

    def prepare(self, cls: type) -> None:
        """Extrai os metadados de toda a árvore de tipos alcançável a partir de `cls`."""
        pending = [cls]
        while pending:
            current = pending.pop()
            if current in self._metadata:
                continue
            for meta in self.fields_of(current):
                pending.extend(_records_in(meta.info))

    # -----------------------------
    # Paths
    # -----------------------------
    def mark_used(self, path: str) -> None:
        self.used_paths.add(path)

    def is_used(self, path: str) -> bool:
        return path in self.used_paths

    def mark_unused(self, path: str) -> None:
        if path not in self.unused_keys:
            self.unused_keys.append(path)

    # -----------------------------
    # Logging
    # -----------------------------
    def log(self, *, stage: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "stage": stage,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)


def _records_in(info: TypeInfo) -> List[type]:
    out: List[type] = []
    stack = [info]
    while stack:
        current = stack.pop()
        if current.kind is Kind.RECORD:
            out.append(current.type)
        for child in (current.item, current.key):
            if child is not None:
                stack.append(child)
    return out
