# src/pkgcompose/__init__.py
"""
pkgcompose — composição de pacotes para geradores de projetos de build.

Este pacote raiz define o namespace público do pkgcompose, uma biblioteca
que descreve, para um gerador externo de projetos, como um pacote nomeado
é composto: sua biblioteca principal, sua biblioteca opcional de suporte a
testes, seu executável de testes unitários e os pacotes dos quais depende
(transitivamente).

Princípios centrais:
    - O grafo de pacotes é um DAG explícito
    - A ordem das listas de dependências é um contrato (declaração, sem duplicatas)
    - Cada run de geração possui seu próprio contexto isolado
    - Nenhum erro é silenciado: ou o grafo é válido, ou a run falha

Arquitetura em alto nível:
    - core.package      → tipos imutáveis, receitas, catálogo e contexto de run
    - core.assembly     → composição de um pacote e montagem recursiva do grafo
    - core.config       → carregamento, merge e hashing de configuração
    - core.traceability → Manifest da montagem (estado e Event Log)

Limites explícitos:
    - Não compila fontes
    - Não emite arquivos de projeto (responsabilidade do gerador)
    - Não resolve versões nem layout de filesystem
"""

from .core.assembly import PackageAssembler, assemble_package, build_package, generate
from .core.package import (
    ArtifactSet,
    BuildContext,
    Library,
    PackageCatalog,
    PackageDefinition,
    PackageDescriptor,
    TestProject,
)

__all__ = [
    "ArtifactSet",
    "BuildContext",
    "Library",
    "PackageAssembler",
    "PackageCatalog",
    "PackageDefinition",
    "PackageDescriptor",
    "TestProject",
    "assemble_package",
    "build_package",
    "generate",
]
