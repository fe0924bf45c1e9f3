# src/pkgcompose/core/package/artifacts.py
"""
Operações de setup de artefatos e achatamento de dependências.

Este módulo concentra as operações que criam os handles imutáveis de um
pacote (biblioteca principal, biblioteca de testes, projeto de testes) e
a função canônica de achatamento usada por todas as listas de dependência.

Política de achatamento (v1):
    - ordem da primeira ocorrência
    - deduplicação por identidade do handle (não por nome)
    - valores None são ignorados (artefatos opcionais ausentes)

Limites explícitos:
    - Não interpreta `path` (apenas repassa ao handle)
    - Não decide quais pacotes são dependências (ver core.assembly.builder)
"""

from __future__ import annotations

from typing import Iterable, List, Optional, TypeVar

from pkgcompose.core.exceptions import PackageDefinitionError

from .types import ArtifactSet, Library, ProjectKind, TestProject

T = TypeVar("T")

DEFAULT_TEST_LIBRARY_SUFFIX = "_testlib"
DEFAULT_TEST_PROJECT_SUFFIX = "_test"


def flatten_unique(items: Iterable[Optional[T]]) -> List[T]:
    """
    Achata uma sequência de handles removendo duplicatas por identidade.

    Dois handles com o mesmo nome, mas instâncias distintas, são mantidos:
    aliasing por nome não é permitido.
    """
    seen: set = set()
    out: List[T] = []
    for item in items:
        if item is None:
            continue
        key = id(item)
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def _validate_identity(name: str, path: str) -> None:
    if not isinstance(name, str) or not name.strip():
        raise PackageDefinitionError(
            message="package name must be a non-empty string",
            details={"package": name},
        )
    if not isinstance(path, str) or not path.strip():
        raise PackageDefinitionError(
            message=f"package '{name}' must declare a non-empty path",
            details={"package": name, "path": path},
        )


def setup_library(name: str, path: str, *, dependencies: Iterable[Library] = ()) -> Library:
    """Cria a biblioteca principal `name` com dependências achatadas."""
    _validate_identity(name, path)
    return Library(
        name=name,
        path=path,
        kind=ProjectKind.LIBRARY,
        dependencies=tuple(flatten_unique(dependencies)),
    )


def setup_test_library(
    name: str,
    path: str,
    *,
    dependencies: Iterable[Library] = (),
    suffix: str = DEFAULT_TEST_LIBRARY_SUFFIX,
) -> Library:
    """Cria a biblioteca de suporte a testes `<name><suffix>`."""
    _validate_identity(name, path)
    return Library(
        name=f"{name}{suffix}",
        path=path,
        kind=ProjectKind.TEST_LIBRARY,
        dependencies=tuple(flatten_unique(dependencies)),
    )


def setup_test_project(
    name: str,
    path: str,
    *,
    dependencies: Iterable[Library] = (),
    suffix: str = DEFAULT_TEST_PROJECT_SUFFIX,
) -> TestProject:
    """Cria o projeto do executável de testes `<name><suffix>`."""
    _validate_identity(name, path)
    return TestProject(
        name=f"{name}{suffix}",
        path=path,
        dependencies=tuple(flatten_unique(dependencies)),
    )


def setup_artifacts(
    name: str,
    path: str,
    *,
    dependencies: Iterable[Library] = (),
    test_support: bool = False,
    test_library_suffix: str = DEFAULT_TEST_LIBRARY_SUFFIX,
) -> ArtifactSet:
    """
    Constrói o ArtifactSet de um pacote.

    A biblioteca principal recebe `dependencies` (achatadas). Quando
    `test_support` é verdadeiro, a biblioteca de testes é criada e depende
    da biblioteca principal do próprio pacote.

    Args:
        name (str): Nome do pacote.
        path (str): Caminho qualificado por plataforma.
        dependencies (Iterable[Library]): Bibliotecas principais dos sub-pacotes.
        test_support (bool): Se o pacote declara código de suporte a testes.
        test_library_suffix (str): Sufixo do nome da biblioteca de testes.

    Returns:
        ArtifactSet: Artefatos imutáveis do pacote.

    Raises:
        PackageDefinitionError: Se `name` ou `path` forem vazios.
    """
    main = setup_library(name, path, dependencies=dependencies)
    test = None
    if test_support:
        test = setup_test_library(name, path, dependencies=(main,), suffix=test_library_suffix)
    return ArtifactSet(main_library=main, test_library=test, package=name)
