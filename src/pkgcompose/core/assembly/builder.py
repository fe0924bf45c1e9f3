# src/pkgcompose/core/assembly/builder.py
"""
PackageBuilder — composição de um único pacote.

Este módulo transforma uma receita de pacote e os descritores já
construídos das suas dependências em um PackageDescriptor totalmente
ligado.

Passos (v1):
    1. Validar que cada dependência declarada foi fornecida exatamente uma vez
    2. Construir o ArtifactSet do pacote
    3. Ligar à biblioteca principal as bibliotecas principais dos sub-pacotes
       (ordem de declaração, sem duplicatas)
    4. Construir o projeto de testes: biblioteca principal, biblioteca de
       testes própria (se houver) e, para cada dependência, sua biblioteca
       principal e, para provedores de infraestrutura de testes, sua
       biblioteca de testes
    5. Registrar o descritor no BuildContext (nome único por run)

Decisões arquiteturais:
    - Apenas provedores declarados diretamente contribuem biblioteca de testes
    - Um provedor sem biblioteca de testes é omitido (warning, não erro)
    - Provedores são uma anotação do chamador, nunca inferidos

Limites explícitos:
    - Não constrói dependências (ver assembler)
    - Não detecta ciclos
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from pkgcompose.core.config.settings import AssemblySettings
from pkgcompose.core.errors import duplicate_package, package_definition_error, raise_payload
from pkgcompose.core.exceptions import DuplicatePackageError, PackageDefinitionError
from pkgcompose.core.package.artifacts import (
    flatten_unique,
    setup_artifacts,
    setup_test_project,
)
from pkgcompose.core.package.context import BuildContext
from pkgcompose.core.package.recipe import PackageRecipe, dependency_names
from pkgcompose.core.package.types import Library, PackageDescriptor


def _index_dependencies(
    name: str,
    declared: List[str],
    dependencies: Iterable[PackageDescriptor],
) -> Dict[str, PackageDescriptor]:
    by_name: Dict[str, PackageDescriptor] = {}
    for dep in dependencies:
        seen = by_name.get(dep.name)
        if seen is not None and seen is not dep:
            raise_payload(duplicate_package(name=dep.name, scope=f"dependencies of '{name}'"), DuplicatePackageError)
        by_name[dep.name] = dep

    missing = [d for d in declared if d not in by_name]
    if missing:
        raise_payload(
            package_definition_error(
                package=name,
                message=f"Dependências declaradas não fornecidas para '{name}': {missing}",
                details={"missing": missing},
            ),
            PackageDefinitionError,
        )

    extra = [d for d in by_name if d not in declared]
    if extra:
        raise_payload(
            package_definition_error(
                package=name,
                message=f"Dependências fornecidas mas não declaradas por '{name}': {extra}",
                details={"undeclared": extra},
            ),
            PackageDefinitionError,
        )

    return by_name


def build_package(
    recipe: PackageRecipe,
    dependencies: Sequence[PackageDescriptor] = (),
    *,
    test_providers: Optional[Iterable[str]] = None,
    settings: Optional[AssemblySettings] = None,
    ctx: Optional[BuildContext] = None,
) -> PackageDescriptor:
    """
    Compõe o PackageDescriptor de um pacote.

    Args:
        recipe (PackageRecipe): Receita do pacote.
        dependencies (Sequence[PackageDescriptor]): Descritores já construídos
            de todas as dependências declaradas (qualquer ordem).
        test_providers (Optional[Iterable[str]]): Dependências que fornecem
            infraestrutura de testes. Quando None, usa `recipe.test_providers`.
        settings (Optional[AssemblySettings]): Nomeação e política de warnings.
        ctx (Optional[BuildContext]): Contexto da run onde o descritor é registrado.

    Returns:
        PackageDescriptor: Descritor imutável do pacote.

    Raises:
        PackageDefinitionError: Dependência declarada ausente, dependência
            não declarada, ou provedor fora das dependências.
        DuplicatePackageError: Duas instâncias distintas com o mesmo nome, ou
            nome já registrado no contexto.
        MissingArtifactError: Biblioteca principal não construída.
    """
    settings = settings or AssemblySettings()
    name = recipe.name
    declared = dependency_names(recipe)
    by_name = _index_dependencies(name, declared, dependencies)

    providers = tuple(recipe.test_providers if test_providers is None else test_providers)
    unknown = [p for p in providers if p not in declared]
    if unknown:
        raise_payload(
            package_definition_error(
                package=name,
                message=f"Provedores de testes de '{name}' fora de depends_on: {unknown}",
                details={"test_providers": unknown},
            ),
            PackageDefinitionError,
        )

    sub_packages = [by_name[d] for d in declared]

    artifacts = setup_artifacts(
        name,
        recipe.path,
        dependencies=[sub.main_library for sub in sub_packages],
        test_support=bool(recipe.test_support),
        test_library_suffix=settings.test_library_suffix,
    )

    test_deps: List[Optional[Library]] = [artifacts.main_library, artifacts.test_library]
    for sub in sub_packages:
        test_deps.append(sub.main_library)
        if sub.name not in providers:
            continue
        if sub.test_library is None:
            if ctx is not None and settings.warn_on_missing_test_library:
                ctx.add_warning(
                    package=name,
                    message=f"test provider '{sub.name}' has no test library; omitted",
                )
            continue
        test_deps.append(sub.test_library)

    test_project = setup_test_project(
        name,
        recipe.path,
        dependencies=flatten_unique(test_deps),
        suffix=settings.test_project_suffix,
    )

    descriptor = PackageDescriptor(
        name=name,
        path=recipe.path,
        artifacts=artifacts,
        sub_packages=tuple(sub_packages),
        test_project=test_project,
        providers=providers,
    )

    if ctx is not None:
        ctx.register(descriptor)
        ctx.log(
            package=name,
            level="INFO",
            message="package built",
            sub_packages=list(declared),
            test_dependencies=[lib.name for lib in test_project.dependencies],
        )

    return descriptor
