# src/pkgcompose/core/__init__.py
"""
Core do pkgcompose.

Este pacote reúne a implementação canônica do modelo de composição de
pacotes: tipos de artefatos, receitas declarativas, contexto por run,
composição de um pacote e montagem do grafo completo.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado global (todo estado vive em um BuildContext)
    - orientado a contratos explícitos

Componentes principais:
    - package      → ArtifactSet, PackageDescriptor, receitas, catálogo, contexto
    - assembly     → PackageBuilder (build_package) e montagem recursiva
    - config       → resolução de configuração (merge, validação estrutural, hashing)
    - traceability → Manifest da montagem

Limites explícitos:
    - Não emite arquivos de projeto
    - Não depende de CLI ou serviços externos
"""
