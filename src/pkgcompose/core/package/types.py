# src/pkgcompose/core/package/types.py
"""
Tipos canônicos do grafo de pacotes do pkgcompose.

Este módulo define as estruturas imutáveis que o builder produz e que o
gerador externo consome (somente leitura) após a montagem.

Componentes principais:
    - ProjectKind       → enum de tipos de projeto (library, test_library, unittest)
    - BuildState        → enum da máquina de estados de construção de um pacote
    - Library           → handle imutável de uma biblioteca e suas dependências diretas
    - TestProject       → descritor imutável do executável de testes unitários
    - ArtifactSet       → par imutável (biblioteca principal, biblioteca de testes opcional)
    - PackageDescriptor → nó nomeado do grafo

Decisões arquiteturais:
    - Igualdade de handles é por identidade (eq=False), não por nome, para
      evitar aliasing acidental entre pacotes com nomes coincidentes
    - Listas de dependências são tuplas (ordem de declaração preservada)
    - Comparações estruturais entre runs usam `to_dict()`

Invariantes:
    - Um ArtifactSet possui exatamente uma biblioteca principal
    - Nenhuma instância é mutada após ser criada

Limites explícitos:
    - Não constrói pacotes (ver core.assembly)
    - Não detecta ciclos (ver core.assembly.assembler)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pkgcompose.core.errors import missing_artifact, raise_payload
from pkgcompose.core.exceptions import MissingArtifactError


class ProjectKind(str, Enum):
    """
    Tipos de projeto que um pacote expõe ao gerador.

    Tipos definidos:
        - LIBRARY: biblioteca principal do pacote
        - TEST_LIBRARY: biblioteca de suporte consumida apenas por testes
        - UNITTEST: executável de testes unitários

    O valor textual é estável e usado em `to_dict()`.
    """
    LIBRARY = "library"
    TEST_LIBRARY = "test_library"
    UNITTEST = "unittest"


class BuildState(str, Enum):
    """
    Estados de construção de um pacote dentro de uma run.

    Transições válidas:
        - UNBUILT  → BUILDING
        - BUILDING → BUILT | FAILED

    Uma visita a um pacote em BUILDING sinaliza ciclo. BUILT é terminal.
    """
    UNBUILT = "unbuilt"
    BUILDING = "building"
    BUILT = "built"
    FAILED = "failed"


@dataclass(frozen=True, eq=False)
class Library:
    """
    Handle imutável de uma biblioteca.

    Campos:
        - name: nome do projeto de biblioteca
        - path: caminho qualificado por plataforma (repassado, nunca interpretado)
        - kind: LIBRARY ou TEST_LIBRARY
        - dependencies: bibliotecas das quais esta depende, em ordem de link
    """
    name: str
    path: str
    kind: ProjectKind = ProjectKind.LIBRARY
    dependencies: Tuple["Library", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "kind": self.kind.value,
            "dependencies": [d.name for d in self.dependencies],
        }


@dataclass(frozen=True, eq=False)
class TestProject:
    """Descritor imutável do executável de testes unitários de um pacote."""

    __test__ = False  # não é uma classe de teste do pytest

    name: str
    path: str
    dependencies: Tuple[Library, ...] = ()

    @property
    def kind(self) -> ProjectKind:
        return ProjectKind.UNITTEST

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "kind": self.kind.value,
            "dependencies": [d.name for d in self.dependencies],
        }


@dataclass(frozen=True, eq=False)
class ArtifactSet:
    """
    Conjunto imutável de artefatos que um pacote expõe.

    Decisões arquiteturais:
        - A biblioteca principal é obrigatória; sua ausência é MissingArtifactError
        - A biblioteca de testes é opcional

    Invariantes:
        - No máximo uma biblioteca principal e uma de testes
        - Nenhum campo muda após a construção
    """
    main_library: Library
    test_library: Optional[Library] = None
    package: str = ""

    def __post_init__(self) -> None:
        if self.main_library is None:
            raise_payload(missing_artifact(package=self.package), MissingArtifactError)

    @property
    def has_test_library(self) -> bool:
        return self.test_library is not None

    def exported(self) -> Tuple[Library, ...]:
        """Bibliotecas exportadas, principal primeiro."""
        if self.test_library is None:
            return (self.main_library,)
        return (self.main_library, self.test_library)


@dataclass(frozen=True, eq=False)
class PackageDescriptor:
    """
    Nó nomeado do grafo de pacotes.

    Esta classe representa o resultado final do builder de um pacote:
    seus próprios artefatos, as referências aos sub-pacotes (em ordem de
    declaração) e o descritor do executável de testes.

    Decisões arquiteturais:
        - Sub-pacotes são referências às MESMAS instâncias cacheadas na run
          (compartilhamento estrutural, não cópia)
        - O descritor é somente leitura para o gerador

    Invariantes:
        - `sub_packages` forma um DAG (garantido pelo assembler)
        - `name` é único dentro de uma run

    Limites explícitos:
        - Não emite arquivos de projeto
        - Não valida ciclos por conta própria
    """
    name: str
    path: str
    artifacts: ArtifactSet
    sub_packages: Tuple["PackageDescriptor", ...] = ()
    test_project: Optional[TestProject] = None
    providers: Tuple[str, ...] = field(default=())

    @property
    def main_library(self) -> Library:
        return self.artifacts.main_library

    @property
    def test_library(self) -> Optional[Library]:
        return self.artifacts.test_library

    def walk(self) -> Iterator["PackageDescriptor"]:
        """
        Percorre o grafo em pós-ordem determinística (folhas primeiro).

        Cada instância aparece exatamente uma vez, mesmo quando alcançada por
        múltiplos caminhos (identidade, como nas bibliotecas). O próprio
        descritor é o último elemento.
        """
        seen: set = set()

        def _visit(node: "PackageDescriptor") -> Iterator["PackageDescriptor"]:
            if id(node) in seen:
                return
            seen.add(id(node))
            for sub in node.sub_packages:
                yield from _visit(sub)
            yield node

        yield from _visit(self)

    def transitive_libraries(self) -> List[Library]:
        """
        Bibliotecas principais de todo o sub-grafo, achatadas.

        A ordem é a da primeira ocorrência em profundidade seguindo a ordem de
        declaração de `sub_packages`; cada biblioteca aparece uma única vez.
        """
        out: List[Library] = []
        seen: set = set()
        visited: set = set()

        def _collect(node: "PackageDescriptor") -> None:
            if id(node) in visited:
                return
            visited.add(id(node))
            for sub in node.sub_packages:
                lib = sub.main_library
                if id(lib) not in seen:
                    seen.add(id(lib))
                    out.append(lib)
                _collect(sub)

        _collect(self)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "main_library": self.main_library.to_dict(),
            "test_library": self.test_library.to_dict() if self.test_library else None,
            "sub_packages": [p.name for p in self.sub_packages],
            "test_project": self.test_project.to_dict() if self.test_project else None,
            "providers": list(self.providers),
        }
