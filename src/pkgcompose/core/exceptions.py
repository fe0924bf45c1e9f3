"""
pkgcompose — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do pkgcompose.

Objetivo:
- Permitir que builder e assembler levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para PackageErrorPayload
- Evitar ValueError/RuntimeError genéricos em violações estruturais do grafo

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Toda exceção deste módulo é fatal para a run de montagem.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PackageGraphException(Exception):
    """Base class para exceções do grafo de pacotes.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class DuplicatePackageError(PackageGraphException):
    """O mesmo nome de pacote foi registrado duas vezes na mesma run."""


@dataclass(frozen=True)
class CyclicDependencyError(PackageGraphException):
    """Um pacote foi visitado em estado `building` (ciclo de dependências)."""

    @property
    def cycle(self) -> list:
        return list(self.details.get("cycle", []))


@dataclass(frozen=True)
class MissingArtifactError(PackageGraphException):
    """Um artefato obrigatório (biblioteca principal) não foi construído."""


@dataclass(frozen=True)
class UnknownPackageError(PackageGraphException):
    """Um pacote referenciado não está declarado no catálogo."""


@dataclass(frozen=True)
class PackageDefinitionError(PackageGraphException):
    """Definição de pacote inválida ou inconsistente com as dependências fornecidas."""
