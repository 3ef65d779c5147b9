# src/typedconf/core/__init__.py
"""
Core do typedconf.

Reúne o engine de decode/defaults/validação que materializa um dataclass
tipado a partir de um documento YAML/JSON não tipado.

Componentes principais:
    - metadata   → tags `conf` / `conf_extraopts` → FieldMeta
    - kinds      → anotações Python → TypeInfo, zero values
    - convert    → indireção `ENV:` e coerção string → escalar
    - session    → estado explícito de uma sessão (UsedPaths, UnusedKeys, eventos)
    - decoder    → documento → dataclass
    - defaults   → defaults declarados em folhas não fornecidas
    - validators → campos obrigatórios e chaves desconhecidas
    - engine     → orquestração das quatro etapas
    - loader     → leitura de arquivos/bytes e parse do formato
    - encode     → dataclass → documento

Limites explícitos:
    - Não é uma linguagem de schema
    - Não contém CLI
"""
