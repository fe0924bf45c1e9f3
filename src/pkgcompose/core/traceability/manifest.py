# src/pkgcompose/core/traceability/manifest.py
"""
Manifest v1 — rastreabilidade de uma run de montagem.

O Manifest consolida, de forma determinística:
    - metadados da run (run_id, início, pacote raiz)
    - hash da configuração efetiva
    - estado incremental de cada pacote (building, built, failed)
    - Event Log ordenado de eventos explícitos

Princípios fundamentais:
    - Nenhum evento é emitido implicitamente
    - A ordem do Event Log reflete a ordem real de construção
    - O Manifest é serializável (`to_dict`/`from_dict`)

Limites explícitos:
    - Não persiste em disco (a montagem não possui interfaces de arquivo)
    - Não decide políticas de montagem
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Normaliza um timestamp para timezone-aware em UTC (naive é assumido UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _iso(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def _ms_between(start: datetime, end: datetime) -> int:
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0, int((e - s).total_seconds() * 1000))


@dataclass
class AssemblyManifest:
    """
    Estrutura canônica do Manifest de montagem.

    Campos:
        - run: metadados da run
        - inputs: hashes de entrada (config)
        - packages: estado por pacote, indexado por nome
        - events: Event Log ordenado
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    packages: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "packages": {k: dict(v) for k, v in self.packages.items()},
            "events": [dict(e) for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssemblyManifest":
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            packages={k: dict(v) for k, v in (data.get("packages", {}) or {}).items()},
            events=[dict(e) for e in (data.get("events", []) or [])],
        )


def create_manifest(
    *,
    run_id: str,
    started_at: datetime,
    config_hash: str,
    root: Optional[str] = None,
) -> AssemblyManifest:
    """
    Cria o Manifest inicial de uma run.

    Importante: esta função **não emite eventos**; pacotes e eventos
    iniciam vazios.
    """
    return AssemblyManifest(
        run={
            "run_id": run_id,
            "started_at": _iso(started_at),
            "root": root,
        },
        inputs={"config_hash": config_hash},
        packages={},
        events=[],
    )


def add_event(
    manifest: AssemblyManifest,
    *,
    event_type: str,
    ts: datetime,
    package: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """Anexa um evento ao Event Log, na ordem da chamada."""
    ev: Dict[str, Any] = {"event_type": event_type, "timestamp": _iso(ts)}
    if package is not None:
        ev["package"] = package
    if payload is not None:
        ev["payload"] = payload
    manifest.events.append(ev)


def package_started(manifest: AssemblyManifest, *, package: str, ts: datetime, required_by: Optional[str] = None) -> None:
    manifest.packages.setdefault(package, {})
    manifest.packages[package].update(
        {
            "package": package,
            "status": "building",
            "started_at": _iso(ts),
            "required_by": required_by,
        }
    )
    add_event(manifest, event_type="package_started", ts=ts, package=package, payload={"required_by": required_by})


def package_built(manifest: AssemblyManifest, *, package: str, ts: datetime, result: Dict[str, Any]) -> None:
    """
    Marca um pacote como construído, registrando duração e resumo.

    `result` aceita as chaves `sub_packages`, `test_dependencies` e `warnings`.
    """
    p = manifest.packages.setdefault(package, {"package": package})
    started_iso = p.get("started_at")
    started_dt = datetime.fromisoformat(started_iso) if started_iso else ts

    p.update(
        {
            "status": "built",
            "finished_at": _iso(ts),
            "duration_ms": _ms_between(started_dt, ts),
            "sub_packages": list(result.get("sub_packages", []) or []),
            "test_dependencies": list(result.get("test_dependencies", []) or []),
            "warnings": list(result.get("warnings", []) or []),
        }
    )
    add_event(
        manifest,
        event_type="package_built",
        ts=ts,
        package=package,
        payload={"duration_ms": p["duration_ms"]},
    )


def package_failed(manifest: AssemblyManifest, *, package: str, ts: datetime, error: Dict[str, Any]) -> None:
    """Marca um pacote como FAILED e associa o payload de erro serializado."""
    p = manifest.packages.setdefault(package, {"package": package})
    p.update(
        {
            "status": "failed",
            "finished_at": _iso(ts),
            "error": error,
        }
    )
    add_event(manifest, event_type="package_failed", ts=ts, package=package, payload={"error_type": error.get("type")})
