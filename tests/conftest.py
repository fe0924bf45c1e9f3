# tests/conftest.py
"""
Fixtures compartilhados para testes do pkgcompose.

Este módulo define fixtures reutilizáveis que fornecem:
- uma fábrica de receitas de pacote
- catálogos pequenos e determinísticos (base/core/app e um caso tipo cvmem)
- um BuildContext isolado
- um gerador dummy que apenas registra o que recebeu

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Nenhuma fixture realiza I/O (arquivos ficam a cargo de `tmp_path`)
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import pytest


@pytest.fixture
def make_recipe():
    """
    Fixture factory que cria `PackageDefinition` com defaults mínimos.

    O caminho padrão segue a convenção `github.com\\<org>\\<name>`, repassada
    sem interpretação aos artefatos.
    """
    from pkgcompose.core.package.recipe import PackageDefinition

    def _make(name, *, depends_on=(), test_providers=(), test_support=False, path=None):
        return PackageDefinition(
            name=name,
            path=path or f"github.com\\example\\{name}",
            depends_on=tuple(depends_on),
            test_providers=tuple(test_providers),
            test_support=test_support,
        )

    return _make


@pytest.fixture
def layered_catalog(make_recipe):
    """
    Catálogo base/core/app.

    - base: sem biblioteca de testes, sem dependências
    - core: depende de base
    - app: depende de core e base, possui biblioteca de testes
    """
    from pkgcompose.core.package.catalog import PackageCatalog

    return PackageCatalog.of(
        [
            make_recipe("base"),
            make_recipe("core", depends_on=["base"]),
            make_recipe("app", depends_on=["core", "base"], test_support=True),
        ]
    )


@pytest.fixture
def unittest_catalog(make_recipe):
    """
    Catálogo no formato de um pacote C++ com framework de testes.

    `cunittest` fornece infraestrutura de testes (biblioteca de testes);
    `centry` é declarado como provedor mas não possui biblioteca de testes.
    """
    from pkgcompose.core.package.catalog import PackageCatalog

    return PackageCatalog.of(
        [
            make_recipe("cbase"),
            make_recipe("cunittest", test_support=True),
            make_recipe("centry", depends_on=["cbase"]),
            make_recipe(
                "cvmem",
                depends_on=["cunittest", "centry", "cbase"],
                test_providers=["cunittest", "centry"],
            ),
        ]
    )


@pytest.fixture
def build_ctx():
    """BuildContext determinístico (run_id fixo, config vazia)."""
    from pkgcompose.core.package.context import BuildContext

    return BuildContext(run_id="run-test-001", config={})


@pytest.fixture
def RecordingGenerator():
    """
    Fixture factory que fornece um gerador duck-typed.

    O gerador retornado guarda cada raiz recebida em `received` e devolve
    os nomes do grafo em pós-ordem.
    """

    class _RecordingGenerator:
        def __init__(self):
            self.received = []

        def generate(self, root):
            self.received.append(root)
            return [p.name for p in root.walk()]

    return _RecordingGenerator


@pytest.fixture
def assembly_defaults_yaml() -> str:
    """YAML de defaults semelhante a um `pkgcompose.defaults.yaml` real."""
    return """\
assembly:
  test_project_suffix: _test
  test_library_suffix: _testlib
  warn_on_missing_test_library: true
"""


@pytest.fixture
def assembly_local_yaml() -> str:
    """YAML de override local (apenas as chaves sobrescritas)."""
    return """\
assembly:
  test_project_suffix: _unittest
  warn_on_missing_test_library: false
"""
