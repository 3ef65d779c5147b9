# tests/core/engine/test_run_session.py
"""
Testes da orquestração da sessão (Decode → Defaults → Required → Unknown).

Os testes asseguram que:
- o alvo precisa ser uma instância mutável de dataclass
- os cenários de referência (Person) produzem o resultado esperado
- erros de schema falham antes de qualquer decode
- cada chamada usa estado próprio (sessões independentes)

Invariantes:
    - A primeira falha encerra a sessão
    - Chaves desconhecidas só falham em modo estrito
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

import pytest

from typedconf.core.engine import run_session
from typedconf.core.errors import (
    DefaultNotApplicableError,
    EnvVariableMissingError,
    InvalidRootTypeError,
    InvalidTargetError,
    RequiredMissingError,
    UnknownOptionError,
)
from typedconf.core.metadata import conf_field

from tests.fixtures.env import ENV_MISSING
from tests.fixtures.schemas import Person


@dataclass(frozen=True)
class FrozenPerson:
    name: str = conf_field("name", default="")


@dataclass
class Inner:
    values: List[int] = conf_field("values", "default=1", default_factory=list)


@dataclass
class Outer:
    inner: Optional[Inner] = conf_field("inner", default=None)


def test_scenario_name_and_default_age():
    conf = Person()
    run_session(conf, {"name": "John"})
    assert conf.name == "John"
    assert conf.age == 19


def test_scenario_empty_document_requires_name():
    with pytest.raises(RequiredMissingError) as exc:
        run_session(Person(), {})
    assert exc.value.path == "name"


def test_scenario_missing_env_variable(monkeypatch):
    monkeypatch.delenv(ENV_MISSING, raising=False)
    with pytest.raises(EnvVariableMissingError) as exc:
        run_session(Person(), {"name": f"ENV:{ENV_MISSING}"})
    assert ENV_MISSING in str(exc.value)


def test_env_variable_is_read_at_decode_time(monkeypatch):
    conf = Person()
    monkeypatch.setenv("TYPEDCONF_TEST_AGE", "41")
    run_session(conf, {"name": "John", "age": "ENV:TYPEDCONF_TEST_AGE"})
    assert conf.age == 41


@pytest.mark.parametrize("target", [Person, {"name": "x"}, "Person", None, FrozenPerson()])
def test_invalid_targets_are_rejected(target):
    with pytest.raises(InvalidTargetError):
        run_session(target, {"name": "x"})


def test_none_document_is_empty():
    conf = Person(name="x")
    with pytest.raises(RequiredMissingError):
        run_session(conf, None)


def test_document_root_must_be_mapping():
    with pytest.raises(InvalidRootTypeError):
        run_session(Person(), ["name", "John"])


def test_schema_errors_fail_before_decode():
    """
    Verifica que um default inválido em ramo ausente ainda falha.

    Decisões arquiteturais:
        - Metadados de toda a árvore de tipos são extraídos antes do decode
        - Erros de schema não dependem do conteúdo da entrada
    """
    conf = Outer()
    with pytest.raises(DefaultNotApplicableError):
        run_session(conf, {})
    assert conf.inner is None


def test_strict_and_lenient_unknown_keys():
    document = {"name": "John", "nickname": "J"}

    with pytest.raises(UnknownOptionError):
        run_session(Person(), document, deny_unknown=True)

    conf = Person()
    session = run_session(conf, document, deny_unknown=False)
    assert conf.name == "John"
    ignored = [e for e in session.events if e["message"] == "unknown option ignored"]
    assert [e["key"] for e in ignored] == ["nickname"]
    assert ignored[0]["level"] == "WARNING"


def test_stages_run_in_order():
    session = run_session(Person(), {"name": "John"}, deny_unknown=True)
    stages = [e["stage"] for e in session.events if e["level"] == "INFO"]
    assert stages == ["decode", "defaults", "required", "unknown"]


def test_required_check_runs_after_defaults():
    conf = Person()
    with pytest.raises(RequiredMissingError):
        run_session(conf, {"age": 3})
    assert conf.age == 3


def test_sessions_are_independent_across_threads():
    def _one(i):
        conf = Person()
        session = run_session(conf, {"name": f"n{i}"} if i % 2 else {"name": f"n{i}", "age": i})
        return conf, session

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(_one, range(16)))

    for i, (conf, session) in enumerate(results):
        assert conf.name == f"n{i}"
        assert conf.age == (19 if i % 2 else i)
        assert ("age" in session.used_paths) is (i % 2 == 0)
