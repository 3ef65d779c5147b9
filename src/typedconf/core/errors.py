# src/typedconf/core/errors.py
"""
Exceções canônicas do typedconf.

Este módulo define a hierarquia oficial de exceções levantadas durante
uma sessão de carregamento: leitura do documento, decode tipado,
aplicação de defaults e validações estruturais.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Toda falha encerra a sessão na primeira ocorrência
    - Mensagens carregam o path, a chave ou o literal ofensor

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - O contexto da falha fica disponível também como atributo

Limites explícitos:
    - Não realiza retry, fallback ou recovery
    - Não formata mensagens para UI
"""

from __future__ import annotations

from typing import Any, Optional


class ConfigError(Exception):
    """
    Exceção base para qualquer falha de carregamento de configuração.

    Permite captura genérica (`except ConfigError`) pelo chamador,
    mantendo a distinção entre erros de entrada do usuário e erros
    internos de schema.
    """


class InputAccessError(ConfigError):
    """Arquivo ilegível ou bytes malformados para o formato declarado."""


class InvalidRootTypeError(InputAccessError):
    """
    Documento parseado cuja raiz não é um mapa chave-valor.

    Listas ou escalares no root nunca podem ser decodificados em um
    dataclass, portanto são rejeitados antes do decode.
    """


class UnsupportedFormatError(ConfigError):
    """Formato não reconhecido (v1: YAML/JSON)."""


class InvalidTargetError(ConfigError):
    """
    O alvo informado não é uma instância mutável de dataclass.

    Classes, instâncias congeladas (`frozen=True`) e valores que não são
    dataclasses caem aqui antes de qualquer leitura do documento.
    """


class EnvVariableMissingError(ConfigError):
    """Indireção `ENV:<nome>` resolvida para variável vazia ou ausente."""

    def __init__(self, variable: str, path: str = "") -> None:
        self.variable = variable
        self.path = path
        msg = f"empty ENV variable '{variable}'"
        if path:
            msg = f"error decoding '{path}': {msg}"
        super().__init__(msg)


class ValueConversionError(ConfigError):
    """
    Valor que não pôde ser convertido para o tipo escalar de destino.

    Cobre literais inválidos, valores fora do range do tipo de destino
    e strings de default malformadas.
    """

    def __init__(self, value: Any, target: str, path: str = "", reason: str = "invalid syntax") -> None:
        self.value = value
        self.target = target
        self.path = path
        self.reason = reason
        where = f" for option '{path}'" if path else ""
        super().__init__(f"cannot parse {value!r} as {target}{where}: {reason}")


class TypeMismatchError(ValueConversionError):
    """Valor de entrada com tipo incompatível com o campo de destino."""

    def __init__(self, value: Any, target: str, path: str = "") -> None:
        super().__init__(
            value,
            target,
            path,
            reason=f"expected type '{target}', got unconvertible type '{type(value).__name__}'",
        )


class DefaultNotApplicableError(ConfigError):
    """
    Default declarado em campo não escalar.

    Erro de schema (interno), nunca de entrada do usuário: defaults só
    existem para bool, inteiros, floats e strings.
    """

    def __init__(self, owner: str, field_name: str, kind: str) -> None:
        self.owner = owner
        self.field_name = field_name
        self.kind = kind
        super().__init__(
            f"internal error, default value not available for field "
            f"`{owner}.{field_name}` of kind '{kind}'"
        )


class RequiredMissingError(ConfigError):
    """Opção obrigatória ausente da entrada."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"required option '{path}' is not specified")


class UnknownOptionError(ConfigError):
    """Modo estrito ativo e a entrada contém chave sem campo correspondente."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"unknown option '{key}'")


class InternalWriteError(ConfigError):
    """Atribuição recusada pelo Python (ex.: dataclass aninhado congelado)."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        self.path = path
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"internal error, cannot assign option '{path}'{detail}")
