# src/typedconf/core/loader.py
"""
Loader de configuração tipada.

Ponto de entrada público do typedconf: lê o documento (arquivo ou bytes),
delega o parse ao parser do formato declarado e executa a sessão de
decode sobre o dataclass informado.

Formatos suportados (v1):
    - YAML (PyYAML, `SafeLoader` com timestamps mantidos como texto)
    - JSON (`json.loads`)

Decisões arquiteturais:
    - O formato pode ser explícito ou inferido pela extensão do arquivo
    - Documento vazio equivale a `{}`
    - A raiz do documento precisa ser um mapa
    - Erros de leitura e de parse são encapsulados em `InputAccessError`

Limites explícitos:
    - Não faz merge de múltiplas fontes
    - Não mantém estado entre chamadas
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml  # PyYAML

from .engine import check_target, run_session
from .errors import InputAccessError, InvalidRootTypeError, UnsupportedFormatError
from .session import DecodeSession

logger = logging.getLogger(__name__)


class _ConfigYamlLoader(yaml.SafeLoader):
    """SafeLoader que entrega timestamps (`2020-01-01`) como string."""


_ConfigYamlLoader.add_constructor(
    "tag:yaml.org,2002:timestamp",
    lambda loader, node: loader.construct_scalar(node),
)


class ConfigFormat(str, Enum):
    """Formatos de documento reconhecidos."""

    YAML = "yaml"
    JSON = "json"


_SUFFIX_FORMATS = {
    ".yaml": ConfigFormat.YAML,
    ".yml": ConfigFormat.YAML,
    ".json": ConfigFormat.JSON,
}

FormatLike = Union[ConfigFormat, str]


@dataclass(frozen=True)
class Settings:
    """
    Opções de carregamento agrupadas em um único objeto.

    Campos:
    - path: caminho do arquivo de configuração
    - format: formato do arquivo; `None` infere pela extensão
    - weak_types: conversões permissivas entre tipos compatíveis
    - deny_unknown: falha se o arquivo contiver opções sem campo
    """

    path: str
    format: Optional[FormatLike] = None
    weak_types: bool = False
    deny_unknown: bool = False


def resolve_format(value: Optional[FormatLike]) -> ConfigFormat:
    if isinstance(value, ConfigFormat):
        return value
    try:
        return ConfigFormat(str(value).lower())
    except ValueError as e:
        raise UnsupportedFormatError(f"unknown config type: {value!r}") from e


def infer_format(path: Path) -> ConfigFormat:
    suffix = path.suffix.lower()
    if suffix not in _SUFFIX_FORMATS:
        raise UnsupportedFormatError(f"cannot infer config type from extension: {path.suffix!r}")
    return _SUFFIX_FORMATS[suffix]


def parse_document(raw: Union[bytes, str], format: FormatLike) -> Dict[str, Any]:
    """
    Parseia bytes YAML/JSON em uma árvore não tipada.

    Raises:
        UnsupportedFormatError: formato desconhecido.
        InputAccessError: bytes malformados para o formato.
        InvalidRootTypeError: raiz do documento não é um mapa.
    """
    fmt = resolve_format(format)

    try:
        if fmt is ConfigFormat.YAML:
            data = yaml.load(raw, Loader=_ConfigYamlLoader)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, ValueError) as e:
        raise InputAccessError(f"config error: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidRootTypeError(f"config root must be a mapping, got {type(data).__name__}")

    return data


def load(
    conf: Any,
    *,
    path: Union[str, Path],
    format: Optional[FormatLike] = None,
    weak_types: bool = False,
    deny_unknown: bool = False,
) -> DecodeSession:
    """
    Carrega o arquivo em `path` no dataclass `conf`.

    Args:
        conf: instância mutável de dataclass (preenchida no lugar).
        path: caminho do arquivo.
        format: `ConfigFormat`, "yaml"/"json" ou `None` para inferir.
        weak_types: conversões permissivas (ex.: número → string).
        deny_unknown: falha com `UnknownOptionError` em opções desconhecidas.

    Returns:
        DecodeSession: sessão encerrada com paths usados e eventos.

    Raises:
        InvalidTargetError: `conf` não é dataclass mutável.
        UnsupportedFormatError: formato desconhecido ou não inferível.
        InputAccessError: arquivo ilegível ou malformado.
        ConfigError: demais falhas de decode, defaults e validação.
    """
    check_target(conf)

    p = Path(path)
    fmt = infer_format(p) if format is None else resolve_format(format)

    logger.debug("reading config file %s (format=%s)", p, fmt.value)
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise InputAccessError(f"config error: cannot read '{p}': {e}") from e

    document = parse_document(raw, fmt)
    return run_session(conf, document, weak_types=weak_types, deny_unknown=deny_unknown)


def load_from_bytes(
    conf: Any,
    *,
    data: Union[bytes, str],
    format: FormatLike = ConfigFormat.YAML,
    weak_types: bool = False,
    deny_unknown: bool = False,
) -> DecodeSession:
    """Igual a `load`, mas a partir de bytes já em memória (sem I/O)."""
    check_target(conf)
    document = parse_document(data, format)
    logger.debug("decoding %d bytes of config (format=%s)", len(data), resolve_format(format).value)
    return run_session(conf, document, weak_types=weak_types, deny_unknown=deny_unknown)


def load_with_settings(conf: Any, settings: Settings) -> DecodeSession:
    return load(
        conf,
        path=settings.path,
        format=settings.format,
        weak_types=settings.weak_types,
        deny_unknown=settings.deny_unknown,
    )
