# tests/conftest.py
"""
Fixtures compartilhados para testes do typedconf.

Este módulo fornece:
- documentos YAML/JSON equivalentes aos usados pelos testes de loader
- variáveis de ambiente controladas (via `monkeypatch`) para a
  indireção `ENV:`

Decisões arquiteturais:
    - Documentos são fornecidos como string, o teste decide se grava
      em `tmp_path` ou usa `load_from_bytes`
    - Variáveis de ambiente são sempre isoladas por teste

Invariantes:
    - Nenhuma fixture altera o ambiente do processo de forma permanente
    - Dados retornados são determinísticos

Limites explícitos:
    - Não executa o engine
    - Não valida comportamento (isso é papel dos testes)
"""

import pytest

from tests.fixtures.env import ENV_JOB_NAME, ENV_JOB_SALARY, ENV_STRING


@pytest.fixture
def job_env(monkeypatch):
    """
    Fixture que define as variáveis de ambiente referenciadas por `ENV:`.

    Returns:
        dict: nome da variável → valor definido.
    """
    values = {
        ENV_JOB_NAME: "Test Job name",
        ENV_JOB_SALARY: "1.200",
        ENV_STRING: "Test String2",
    }
    for k, v in values.items():
        monkeypatch.setenv(k, v)
    return values


@pytest.fixture
def employee_yaml() -> str:
    """
    Fixture com um documento YAML de `Employee`.

    `age` e `job.address` são omitidos (cobertos por default) e os campos
    `job.name`/`job.salary` usam indireção de ambiente.
    """
    return f"""\
name: Test YAML Name
job:
  name: ENV:{ENV_JOB_NAME}
  salary: ENV:{ENV_JOB_SALARY}
favorite_dishes:
  - apples
  - ice cream
"""


@pytest.fixture
def employee_json() -> str:
    """Fixture com o mesmo documento de `employee_yaml`, em JSON."""
    return (
        '{"name": "Test JSON Name", '
        f'"job": {{"name": "ENV:{ENV_JOB_NAME}", "salary": "ENV:{ENV_JOB_SALARY}"}}, '
        '"favorite_dishes": ["apples", "ice cream"]}'
    )


@pytest.fixture
def nested_yaml() -> str:
    """
    Fixture com um documento que exercita records, sequências e mapas.

    Usado por:
        - Testes de defaults em elementos de sequência e entradas de mapa
        - Testes de paths de UsedPaths
    """
    return f"""\
string_test: Test String
struct_test:
  string_test: Test String
struct_slice_test:
  - string_test: Test String1
  - {{}}
  - string_test: Test String3
struct_map_test:
  map_key1:
    string_test: Test String1
  map_key2:
    string_test: ENV:{ENV_STRING}
  map_key3: {{}}
strings_slice_test:
  - a
  - b
  - c
"""
