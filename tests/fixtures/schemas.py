"""
Schemas de teste (dataclasses) — typedconf.

Estruturas reutilizadas pelos testes do core: records aninhados,
sequências e mapas de records, larguras fixas via numpy e o cenário
mínimo `Person {name required, age default=19}`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from typedconf import conf_field


@dataclass
class Person:
    name: str = conf_field("name", "required", default="")
    age: int = conf_field("age", "default=19", default=0)


@dataclass
class RequiredItem:
    string_test: str = conf_field("string_test", "required", default="")


@dataclass
class DefaultItem:
    string_test: str = conf_field("string_test", "default=Test String", default="")


@dataclass
class Nested:
    string_test: str = conf_field("string_test", "required", default="")
    int_test: int = conf_field("int_test", "default=18", default=0)
    struct_test: RequiredItem = conf_field("struct_test", "required", default_factory=RequiredItem)
    struct_slice_test: List[DefaultItem] = conf_field("struct_slice_test", "required", default_factory=list)
    struct_map_test: Dict[str, DefaultItem] = conf_field("struct_map_test", "required", default_factory=dict)
    strings_slice_test: List[str] = conf_field("strings_slice_test", default_factory=list)


@dataclass
class Job:
    name: str = conf_field("name", "required", default="")
    address: str = conf_field("address", "default=Test Address", default="")
    salary: float = conf_field("salary", "default=1.3", default=0.0)


@dataclass
class Employee:
    name: str = conf_field("name", "required", default="")
    age: int = conf_field(extraopts="default=19", default=0)
    job: Job = conf_field("job", "required", default_factory=Job)
    favorite_dishes: List[str] = conf_field("favorite_dishes", default_factory=list)


@dataclass
class Widths:
    flag: bool = conf_field("flag", "default=t", default=False)
    i8: np.int8 = conf_field("i8", "default=-0x10", default=np.int8(0))
    i32: np.int32 = conf_field("i32", default=np.int32(0))
    u8: np.uint8 = conf_field("u8", "default=0o17", default=np.uint8(0))
    u64: np.uint64 = conf_field("u64", default=np.uint64(0))
    f32: np.float32 = conf_field("f32", "default=2.5", default=np.float32(0))
    f64: float = conf_field("f64", "default=1e-3", default=0.0)
    label: str = conf_field("label", "default=a=b", default="")


@dataclass
class Proxy:
    host: str = conf_field("host", "required", default="")
    port: int = conf_field("port", "default=3128", default=0)


@dataclass
class Service:
    name: str = conf_field("name", default="")
    proxy: Optional[Proxy] = conf_field("proxy", default=None)
    tags: Dict[str, str] = conf_field("tags", default_factory=dict)
    secret: str = conf_field("-", default="hidden")
    limits: Dict[int, int] = field(default_factory=dict)
