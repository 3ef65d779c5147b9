# src/typedconf/__init__.py
"""
typedconf — configuração tipada a partir de YAML/JSON.

Uso típico:

    @dataclass
    class Conf:
        name: str = conf_field("name", "required", default="")
        age: int = conf_field("age", "default=19", default=0)

    conf = Conf()
    load(conf, path="app.yaml", deny_unknown=True)

Este módulo expõe a API pública; a implementação vive em `typedconf.core`.
"""

from .core.encode import as_document
from .core.engine import run_session
from .core.errors import (
    ConfigError,
    DefaultNotApplicableError,
    EnvVariableMissingError,
    InputAccessError,
    InternalWriteError,
    InvalidRootTypeError,
    InvalidTargetError,
    RequiredMissingError,
    TypeMismatchError,
    UnknownOptionError,
    UnsupportedFormatError,
    ValueConversionError,
)
from .core.loader import ConfigFormat, Settings, load, load_from_bytes, load_with_settings
from .core.metadata import FieldMeta, conf_field
from .core.session import DecodeSession

__all__ = [
    "ConfigError",
    "ConfigFormat",
    "DecodeSession",
    "DefaultNotApplicableError",
    "EnvVariableMissingError",
    "FieldMeta",
    "InputAccessError",
    "InternalWriteError",
    "InvalidRootTypeError",
    "InvalidTargetError",
    "RequiredMissingError",
    "Settings",
    "TypeMismatchError",
    "UnknownOptionError",
    "UnsupportedFormatError",
    "ValueConversionError",
    "as_document",
    "conf_field",
    "load",
    "load_from_bytes",
    "load_with_settings",
    "run_session",
]
