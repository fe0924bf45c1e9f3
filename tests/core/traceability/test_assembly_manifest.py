# tests/core/traceability/test_assembly_manifest.py
"""
Testes do Manifest de montagem.

Os testes asseguram que:
- o Manifest inicial não contém pacotes nem eventos
- cada chamada explícita acrescenta exatamente um evento, em ordem
- duração e estado por pacote são registrados
- `to_dict`/`from_dict` preservam o conteúdo
"""

from datetime import datetime, timedelta, timezone

import pytest

try:
    from pkgcompose.core.traceability.manifest import (
        AssemblyManifest,
        create_manifest,
        package_built,
        package_failed,
        package_started,
    )
except Exception as e:  # noqa: BLE001
    create_manifest = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing manifest. Implement:"
            "- src/pkgcompose/core/traceability/manifest.py"
            f"Import error: {_IMPORT_ERR}"
        )


T0 = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _manifest():
    return create_manifest(run_id="r1", started_at=T0, config_hash="0" * 64, root="cvmem")


def test_create_manifest_emits_no_events():
    _require_imports()
    m = _manifest()
    assert m.run == {"run_id": "r1", "started_at": T0.isoformat(), "root": "cvmem"}
    assert m.inputs == {"config_hash": "0" * 64}
    assert m.packages == {}
    assert m.events == []


def test_started_then_built_records_duration():
    _require_imports()
    m = _manifest()
    package_started(m, package="cbase", ts=T0, required_by="cvmem")
    package_built(
        m,
        package="cbase",
        ts=T0 + timedelta(milliseconds=250),
        result={"sub_packages": [], "test_dependencies": ["cbase"]},
    )

    p = m.packages["cbase"]
    assert p["status"] == "built"
    assert p["duration_ms"] == 250
    assert p["required_by"] == "cvmem"
    assert p["test_dependencies"] == ["cbase"]
    assert [e["event_type"] for e in m.events] == ["package_started", "package_built"]


def test_failed_records_error_payload():
    _require_imports()
    m = _manifest()
    package_started(m, package="a", ts=T0)
    package_failed(m, package="a", ts=T0, error={"type": "CYCLIC_DEPENDENCY", "message": "x"})

    assert m.packages["a"]["status"] == "failed"
    assert m.events[-1]["payload"] == {"error_type": "CYCLIC_DEPENDENCY"}


def test_naive_timestamps_are_treated_as_utc():
    _require_imports()
    m = create_manifest(run_id="r", started_at=datetime(2026, 1, 1), config_hash="h")
    assert m.run["started_at"].endswith("+00:00")


def test_round_trip_via_dict():
    _require_imports()
    m = _manifest()
    package_started(m, package="cbase", ts=T0)
    package_built(m, package="cbase", ts=T0, result={})

    restored = AssemblyManifest.from_dict(m.to_dict())
    assert restored.to_dict() == m.to_dict()
