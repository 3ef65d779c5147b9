# src/typedconf/core/convert.py
"""Conversão de strings para escalares tipados.

Dois pontos de uso:
    - hook do decoder: todo valor de entrada do tipo `str` passa por
      `decode_string` (indireção `ENV:` + coerção)
    - Default Applier: strings de default passam por `convert_string`
      (apenas coerção, sem indireção de ambiente)

Regras de coerção:
    - bool: 1 t T TRUE true True / 0 f F FALSE false False
    - inteiros: base detectada pelo prefixo (0x, 0b, 0o, 0), range por largura
    - floats: decimal, científico, hexadecimal, inf/nan; overflow é erro
    - `_` separa dígitos (`1_000`, `0x_ff`, `1_000.5`); nunca no início,
      no fim ou duplicado
    - str e destinos não escalares: passthrough
"""

from __future__ import annotations

import math
import os
import re
from typing import Any, Optional, Tuple

import numpy as np

from .errors import EnvVariableMissingError, ValueConversionError
from .kinds import Kind, TypeInfo

ENV_PATTERN = re.compile(r"ENV:(.*)", re.DOTALL)

_BOOL_LITERALS = {
    "1": True, "t": True, "T": True, "TRUE": True, "true": True, "True": True,
    "0": False, "f": False, "F": False, "FALSE": False, "false": False, "False": False,
}

_DECIMAL_RE = re.compile(r"[0-9]+(?:_[0-9]+)*")
_PREFIXED_RE = re.compile(r"_?[0-9a-zA-Z]+(?:_[0-9a-zA-Z]+)*")

_FLOAT32_MAX = float(np.finfo(np.float32).max)


def resolve_env(value: str, path: str = "") -> str:
    """Resolve `ENV:<nome>`; qualquer outra string volta intacta."""
    m = ENV_PATTERN.match(value)
    if m is None:
        return value
    name = m.group(1)
    resolved = os.environ.get(name, "")
    if resolved == "":
        raise EnvVariableMissingError(name, path)
    return resolved


def _split_base(body: str) -> Tuple[int, str]:
    prefix = body[:2].lower()
    if prefix == "0x":
        return 16, body[2:]
    if prefix == "0b":
        return 2, body[2:]
    if prefix == "0o":
        return 8, body[2:]
    if len(body) > 1 and body[0] == "0":
        return 8, body[1:]
    return 10, body


def _parse_magnitude(body: str) -> Optional[int]:
    base, digits = _split_base(body)
    if base == 10:
        if not _DECIMAL_RE.fullmatch(digits):
            return None
    elif not _PREFIXED_RE.fullmatch(digits):
        return None
    try:
        return int(digits.replace("_", ""), base)
    except ValueError:
        return None


def _underscore_ok(text: str) -> bool:
    body = text[1:] if text[:1] in ("+", "-") else text
    hexa = False
    saw = "^"
    i = 0
    if len(body) >= 2 and body[0] == "0" and body[1].lower() in "box":
        hexa = body[1].lower() == "x"
        saw = "0"
        i = 2
    for c in body[i:]:
        if "0" <= c <= "9" or (hexa and c.lower() in "abcdef"):
            saw = "0"
        elif c == "_":
            if saw != "0":
                return False
            saw = "_"
        else:
            if saw == "_":
                return False
            saw = "!"
    return saw != "_"


def parse_bool(text: str, info: TypeInfo, path: str = "") -> bool:
    if text not in _BOOL_LITERALS:
        raise ValueConversionError(text, info.name, path)
    return _BOOL_LITERALS[text]


def parse_int(text: str, info: TypeInfo, path: str = "") -> Any:
    sign = ""
    body = text
    if text[:1] in ("+", "-"):
        sign, body = text[0], text[1:]

    magnitude = _parse_magnitude(body) if body else None
    if magnitude is None:
        raise ValueConversionError(text, info.name, path)

    value = -magnitude if sign == "-" else magnitude
    check_int_range(value, info, path, original=text)
    return info.type(value)


def parse_uint(text: str, info: TypeInfo, path: str = "") -> Any:
    magnitude = _parse_magnitude(text) if text else None
    if magnitude is None:
        raise ValueConversionError(text, info.name, path)
    check_int_range(magnitude, info, path, original=text)
    return info.type(magnitude)


def check_int_range(value: int, info: TypeInfo, path: str = "", original: Any = None) -> None:
    if info.kind is Kind.UINT:
        lo, hi = 0, (1 << info.bits) - 1
    else:
        lo, hi = -(1 << (info.bits - 1)), (1 << (info.bits - 1)) - 1
    if not lo <= value <= hi:
        shown = value if original is None else original
        raise ValueConversionError(shown, info.name, path, reason="value out of range")


def parse_float(text: str, info: TypeInfo, path: str = "") -> Any:
    if not text or text != text.strip():
        raise ValueConversionError(text, info.name, path)

    if "_" in text and not _underscore_ok(text):
        raise ValueConversionError(text, info.name, path)

    lowered = text.lower()
    digits = text.replace("_", "")
    try:
        if lowered.lstrip("+-").startswith("0x"):
            value = float.fromhex(digits)
        else:
            value = float(digits)
    except (ValueError, OverflowError) as e:
        raise ValueConversionError(text, info.name, path) from e

    if math.isinf(value) and "inf" not in lowered:
        raise ValueConversionError(text, info.name, path, reason="value out of range")
    check_float_range(value, info, path, original=text)
    return info.type(value)


def check_float_range(value: float, info: TypeInfo, path: str = "", original: Any = None) -> None:
    if info.bits == 32 and math.isfinite(value) and abs(value) > _FLOAT32_MAX:
        shown = value if original is None else original
        raise ValueConversionError(shown, info.name, path, reason="value out of range")


def convert_string(text: str, info: TypeInfo, path: str = "") -> Any:
    """Converte `text` para o escalar descrito por `info`."""
    if info.kind is Kind.BOOL:
        return parse_bool(text, info, path)
    if info.kind is Kind.INT:
        return parse_int(text, info, path)
    if info.kind is Kind.UINT:
        return parse_uint(text, info, path)
    if info.kind is Kind.FLOAT:
        return parse_float(text, info, path)
    return text


def decode_string(value: str, info: TypeInfo, path: str = "") -> Any:
    """Hook aplicado pelo decoder a todo valor de entrada do tipo `str`."""
    return convert_string(resolve_env(value, path), info, path)
