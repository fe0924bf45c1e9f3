# tests/core/config/test_config_merge_hashing.py
"""
Testes do deep-merge e do hash canônico de configuração.

Política validada:
    - dict → merge recursivo; list → sobrescrita; escalar → sobrescrita
    - conflito de tipos → ConfigTypeConflictError (com caminho da chave)
    - inputs nunca são mutados
    - o hash independe da ordem das chaves
"""

import pytest

try:
    from pkgcompose.core.config.errors import ConfigTypeConflictError
    from pkgcompose.core.config.hashing import compute_config_hash
    from pkgcompose.core.config.merge import deep_merge
except Exception as e:  # noqa: BLE001
    deep_merge = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing merge/hashing. Implement:"
            "- src/pkgcompose/core/config/merge.py (deep_merge)"
            "- src/pkgcompose/core/config/hashing.py (compute_config_hash)"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_recurses_and_overrides_scalars():
    _require_imports()
    base = {"assembly": {"test_project_suffix": "_test", "test_library_suffix": "_testlib"}}
    override = {"assembly": {"test_project_suffix": "_unittest"}}
    out = deep_merge(base, override)

    assert out == {"assembly": {"test_project_suffix": "_unittest", "test_library_suffix": "_testlib"}}
    assert base["assembly"]["test_project_suffix"] == "_test"
    assert override == {"assembly": {"test_project_suffix": "_unittest"}}


def test_merge_replaces_lists():
    _require_imports()
    out = deep_merge({"roots": ["a", "b"]}, {"roots": ["c"]})
    assert out == {"roots": ["c"]}


def test_merge_type_conflict_reports_key_path():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError) as exc_info:
        deep_merge({"assembly": {"warn_on_missing_test_library": True}}, {"assembly": {"warn_on_missing_test_library": "no"}})
    assert "assembly.warn_on_missing_test_library" in str(exc_info.value)


def test_merge_requires_dicts():
    _require_imports()
    with pytest.raises(ConfigTypeConflictError):
        deep_merge({"a": 1}, ["a"])


def test_hash_is_stable_and_order_independent():
    _require_imports()
    h1 = compute_config_hash({"a": 1, "b": {"c": 2}})
    h2 = compute_config_hash({"b": {"c": 2}, "a": 1})
    assert h1 == h2
    assert len(h1) == 64
    assert compute_config_hash({"a": 2}) != h1


def test_hash_requires_dict():
    _require_imports()
    with pytest.raises(TypeError):
        compute_config_hash(["a"])
