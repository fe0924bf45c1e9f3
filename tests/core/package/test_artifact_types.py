# tests/core/package/test_artifact_types.py
"""
Testes dos tipos imutáveis do grafo (Library, ArtifactSet, PackageDescriptor).

Os testes asseguram que:
- a igualdade de handles é por identidade, não por nome
- handles são imutáveis após a construção
- a biblioteca principal é obrigatória (MissingArtifactError)
- `walk()` e `transitive_libraries()` são determinísticos e sem duplicatas

Limites explícitos:
    - Não valida composição (ver test_builder_composition.py)
"""

import dataclasses

import pytest

try:
    from pkgcompose.core.exceptions import MissingArtifactError
    from pkgcompose.core.package.types import (
        ArtifactSet,
        Library,
        PackageDescriptor,
        ProjectKind,
        TestProject,
    )
except Exception as e:  # noqa: BLE001
    ArtifactSet = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing package types. Implement:"
            "- src/pkgcompose/core/package/types.py"
            f"Import error: {_IMPORT_ERR}"
        )


def _pkg(name, subs=()):
    lib = Library(name=name, path=f"p/{name}", dependencies=tuple(s.main_library for s in subs))
    return PackageDescriptor(
        name=name,
        path=f"p/{name}",
        artifacts=ArtifactSet(main_library=lib, package=name),
        sub_packages=tuple(subs),
        test_project=TestProject(name=f"{name}_test", path=f"p/{name}", dependencies=(lib,)),
    )


def test_library_equality_is_identity_based():
    """
    Verifica que dois handles com o mesmo nome e caminho não são iguais:
    aliasing acidental por nome não é permitido.
    """
    _require_imports()
    a = Library(name="cbase", path="x")
    b = Library(name="cbase", path="x")
    assert a == a
    assert a != b
    assert len({a, b}) == 2


def test_handles_are_immutable():
    _require_imports()
    lib = Library(name="cbase", path="x")
    artifacts = ArtifactSet(main_library=lib)
    with pytest.raises(dataclasses.FrozenInstanceError):
        lib.name = "other"
    with pytest.raises(dataclasses.FrozenInstanceError):
        artifacts.test_library = Library(name="t", path="x")


def test_main_library_is_mandatory():
    _require_imports()
    with pytest.raises(MissingArtifactError) as exc_info:
        ArtifactSet(main_library=None, package="broken")
    assert exc_info.value.details == {"package": "broken", "artifact": "main_library"}
    assert str(exc_info.value) == "Artefato obrigatório ausente em 'broken': main_library"
    assert exc_info.value.hint == "Todo pacote deve declarar uma biblioteca principal."


def test_exported_artifacts_main_first():
    _require_imports()
    main = Library(name="m", path="x")
    test = Library(name="m_testlib", path="x", kind=ProjectKind.TEST_LIBRARY)
    assert ArtifactSet(main_library=main).exported() == (main,)
    full = ArtifactSet(main_library=main, test_library=test)
    assert full.exported() == (main, test)
    assert full.has_test_library


def test_test_project_kind_is_unittest():
    _require_imports()
    tp = TestProject(name="x_test", path="x")
    assert tp.kind == ProjectKind.UNITTEST
    assert tp.to_dict()["kind"] == "unittest"


def test_walk_is_post_order_and_visits_each_package_once():
    """
    Verifica que `walk()` devolve folhas primeiro e visita pacotes
    compartilhados uma única vez, com o próprio nó por último.
    """
    _require_imports()
    base = _pkg("base")
    core = _pkg("core", [base])
    util = _pkg("util", [base])
    app = _pkg("app", [core, util, base])

    assert [p.name for p in app.walk()] == ["base", "core", "util", "app"]


def test_transitive_libraries_are_flattened_in_first_seen_order():
    _require_imports()
    base = _pkg("base")
    core = _pkg("core", [base])
    util = _pkg("util", [base])
    app = _pkg("app", [util, core])

    assert [lib.name for lib in app.transitive_libraries()] == ["util", "base", "core"]
    assert base.transitive_libraries() == []


def test_same_named_distinct_packages_are_both_visited():
    """
    Verifica que nós são distinguidos por identidade em `walk()` e em
    `transitive_libraries()`: duas instâncias com o mesmo nome (possível
    fora de um BuildContext) aparecem ambas, de forma consistente.
    """
    _require_imports()
    first = _pkg("base")
    second = _pkg("base")
    app = _pkg("app", [first, second])

    walked = list(app.walk())
    assert walked[0] is first
    assert walked[1] is second
    assert app.transitive_libraries() == [first.main_library, second.main_library]


def test_to_dict_is_plain_and_structural():
    _require_imports()
    base = _pkg("base")
    core = _pkg("core", [base])
    data = core.to_dict()

    assert data["name"] == "core"
    assert data["sub_packages"] == ["base"]
    assert data["main_library"] == {
        "name": "core",
        "path": "p/core",
        "kind": "library",
        "dependencies": ["base"],
    }
    assert data["test_library"] is None
    assert data["test_project"]["dependencies"] == ["core"]
