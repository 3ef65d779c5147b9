# src/typedconf/core/metadata.py
"""
Field Metadata Extractor.

Lê as tags declaradas em `dataclasses.field(metadata=...)` e produz,
para cada campo de um dataclass, o seu `FieldMeta`: nome externo,
obrigatoriedade e string de default.

Vocabulário de tags:
    - `conf`: primeiro token (separado por vírgula) é o nome externo;
      ausente ou vazio cai no nome declarado do atributo; `-` exclui o campo
    - `conf_extraopts`: tokens separados por vírgula; `required` marca o
      campo como obrigatório; `default=<literal>` fornece o default

Invariantes:
    - Defaults só existem em campos escalares
    - Todo literal de default converte para o tipo do campo
    - A ordem retornada é a ordem de declaração do dataclass

Limites explícitos:
    - Não decodifica valores
    - Não mantém cache (o cache pertence à sessão)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, get_type_hints

from .convert import convert_string
from .errors import DefaultNotApplicableError, InvalidTargetError
from .kinds import TypeInfo, describe

TAG_NAME = "conf"
TAG_EXTRAOPTS = "conf_extraopts"
OPT_REQUIRED = "required"
OPT_DEFAULT = "default"
SKIP_NAME = "-"


@dataclass(frozen=True)
class FieldMeta:
    """Metadados imutáveis de um campo, válidos por toda a sessão."""

    attr: str
    external_name: str
    required: bool
    default: Optional[str]
    info: TypeInfo


def conf_field(name: Optional[str] = None, extraopts: str = "", **kwargs: Any) -> Any:
    """Atalho para `dataclasses.field` com as tags `conf` e `conf_extraopts`.

    Exemplo:
        age: int = conf_field("age", "default=19", default=0)
    """
    metadata: Dict[str, Any] = dict(kwargs.pop("metadata", None) or {})
    if name is not None:
        metadata[TAG_NAME] = name
    if extraopts:
        metadata[TAG_EXTRAOPTS] = extraopts
    return dataclasses.field(metadata=metadata, **kwargs)


def tag_parts(tag: str) -> Dict[str, str]:
    """Quebra uma tag em pares chave/valor.

    `required,default=a=b` -> {"required": "", "default": "a=b"}
    """
    parts: Dict[str, str] = {}
    for token in tag.split(","):
        key, _, value = token.partition("=")
        parts[key.strip(" \t")] = value
    return parts


def tag_index(tag: str, i: int) -> str:
    tokens = tag.split(",")
    if i >= len(tokens):
        return ""
    return tokens[i]


def external_name(f: dataclasses.Field) -> str:
    name = tag_index(f.metadata.get(TAG_NAME, ""), 0)
    if name:
        return name
    return f.name


def extract_fields(cls: type) -> List[FieldMeta]:
    """
    Extrai o `FieldMeta` de cada campo de `cls`.

    Args:
        cls (type): classe dataclass.

    Returns:
        List[FieldMeta]: metadados na ordem de declaração, sem os campos
        marcados com `-`.

    Raises:
        InvalidTargetError: se `cls` não for dataclass ou suas anotações
            não puderem ser resolvidas.
        DefaultNotApplicableError: se um default for declarado em campo
            não escalar.
        ValueConversionError: se o literal de default não converter para
            o tipo do campo.
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise InvalidTargetError(f"config load internal error: {cls!r} is not a dataclass")

    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise InvalidTargetError(
            f"config load internal error: cannot resolve annotations of {cls.__name__}: {e}"
        ) from e

    out: List[FieldMeta] = []
    for f in dataclasses.fields(cls):
        name = external_name(f)
        if name == SKIP_NAME:
            continue

        opts = tag_parts(f.metadata.get(TAG_EXTRAOPTS, ""))
        info = describe(hints.get(f.name, Any))
        default = opts.get(OPT_DEFAULT)

        if default is not None and not info.is_scalar:
            raise DefaultNotApplicableError(cls.__name__, f.name, info.kind.value)
        if default is not None:
            convert_string(default, info, f"{cls.__name__}.{f.name}")

        out.append(
            FieldMeta(
                attr=f.name,
                external_name=name,
                required=OPT_REQUIRED in opts,
                default=default,
                info=info,
            )
        )
    return out
