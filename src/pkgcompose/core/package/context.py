# src/pkgcompose/core/package/context.py
"""
Contexto de uma run de geração.

Este módulo define o `BuildContext`, a estrutura que substitui qualquer
registro global de pacotes: todo estado de uma run (cache de descritores,
máquina de estados por pacote, log estruturado e warnings) vive aqui e é
descartado com a run.

Princípios fundamentais:
    - Isolamento por run (cada run possui seu próprio contexto)
    - Ausência de estado global compartilhado
    - Construção no máximo uma vez por nome de pacote por run

Máquina de estados por pacote:
    - UNBUILT → BUILDING → BUILT (ou FAILED)
    - BUILDING → BUILDING sinaliza ciclo e força FAILED

Invariantes:
    - Um nome aparece no cache no máximo uma vez (DuplicatePackageError)
    - A promoção para BUILT acontece junto com a inserção no cache
    - Logs sempre incluem `run_id` e `package`
    - Warnings são agrupados por pacote

Limites explícitos:
    - Não constrói pacotes
    - Não percorre o grafo
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pkgcompose.core.errors import cyclic_dependency, duplicate_package, raise_payload
from pkgcompose.core.exceptions import CyclicDependencyError, DuplicatePackageError

from .types import BuildState, PackageDescriptor


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BuildContext:
    """
    Contexto canônico de uma run de montagem do grafo.

    Campos:
        - run_id: identificador único da run
        - created_at: timestamp UTC de criação
        - config: configuração efetiva (defaults + local deep-merge)
        - meta: metadados livres da run (ex.: config_hash, pacote raiz)
        - events: log estruturado de eventos
        - warnings: warnings por pacote
    """
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=_utcnow)
    config: Dict[str, Any] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    _descriptors: Dict[str, PackageDescriptor] = field(default_factory=dict, init=False, repr=False)
    _states: Dict[str, BuildState] = field(default_factory=dict, init=False, repr=False)
    _stack: List[str] = field(default_factory=list, init=False, repr=False)
    _failures: Dict[str, Exception] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Máquina de estados
    # -----------------------------
    def state_of(self, name: str) -> BuildState:
        return self._states.get(name, BuildState.UNBUILT)

    def building_chain(self) -> List[str]:
        """Pacotes atualmente em construção, do mais externo ao mais interno."""
        return list(self._stack)

    def mark_building(self, name: str) -> None:
        state = self.state_of(name)
        if state == BuildState.BUILDING:
            start = self._stack.index(name)
            cycle = self._stack[start:] + [name]
            payload = cyclic_dependency(cycle=cycle)
            for member in cycle[:-1]:
                self._states[member] = BuildState.FAILED
                self._failures[member] = CyclicDependencyError(
                    message=payload.message, details=dict(payload.details), hint=payload.hint
                )
            raise_payload(payload, CyclicDependencyError)
        if state == BuildState.BUILT:
            raise_payload(duplicate_package(name=name), DuplicatePackageError)

        self._states[name] = BuildState.BUILDING
        self._stack.append(name)

    def mark_failed(self, name: str, error: Optional[Exception] = None) -> None:
        self._states[name] = BuildState.FAILED
        if error is not None:
            self._failures.setdefault(name, error)
        if name in self._stack:
            self._stack.remove(name)

    def failure_of(self, name: str) -> Optional[Exception]:
        """Exceção que levou `name` a FAILED nesta run (None se não falhou)."""
        return self._failures.get(name)

    # -----------------------------
    # Cache de descritores
    # -----------------------------
    def register(self, descriptor: PackageDescriptor) -> None:
        """
        Registra o descritor finalizado e promove o pacote para BUILT.

        Raises:
            DuplicatePackageError: Se o nome já estiver registrado nesta run.
        """
        name = descriptor.name
        if name in self._descriptors:
            raise_payload(duplicate_package(name=name), DuplicatePackageError)

        self._descriptors[name] = descriptor
        self._states[name] = BuildState.BUILT
        if name in self._stack:
            self._stack.remove(name)

    def is_built(self, name: str) -> bool:
        return name in self._descriptors

    def get(self, name: str) -> PackageDescriptor:
        if name not in self._descriptors:
            raise KeyError(name)
        return self._descriptors[name]

    def built_names(self) -> List[str]:
        """Nomes em ordem de conclusão (folhas primeiro)."""
        return list(self._descriptors)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, package: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "package": package,
            "level": level,
            "message": message,
            "timestamp": _utcnow().isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, package: str, message: str) -> None:
        if package not in self.warnings:
            self.warnings[package] = []
        self.warnings[package].append(message)
