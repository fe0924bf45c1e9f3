"""
pkgcompose — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do pkgcompose.
Erros de montagem do grafo fazem parte do contrato com o chamador da
montagem raiz e devem ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhum erro é silenciado: a montagem ou devolve um grafo válido,
ou falha com um tipo de erro nomeado.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .exceptions import (
    CyclicDependencyError,
    DuplicatePackageError,
    MissingArtifactError,
    PackageDefinitionError,
    PackageGraphException,
    UnknownPackageError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PackageErrorPayload:
    """
    Payload canônico de erro do pkgcompose.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

DUPLICATE_PACKAGE = "DUPLICATE_PACKAGE"
CYCLIC_DEPENDENCY = "CYCLIC_DEPENDENCY"
MISSING_ARTIFACT = "MISSING_ARTIFACT"
UNKNOWN_PACKAGE = "UNKNOWN_PACKAGE"
PACKAGE_DEFINITION_ERROR = "PACKAGE_DEFINITION_ERROR"
ASSEMBLY_EXECUTION_ERROR = "ASSEMBLY_EXECUTION_ERROR"

_CODES_BY_EXCEPTION = {
    DuplicatePackageError: DUPLICATE_PACKAGE,
    CyclicDependencyError: CYCLIC_DEPENDENCY,
    MissingArtifactError: MISSING_ARTIFACT,
    UnknownPackageError: UNKNOWN_PACKAGE,
    PackageDefinitionError: PACKAGE_DEFINITION_ERROR,
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def duplicate_package(
    *,
    name: str,
    scope: str = "run",
    hint: str = "Renomeie um dos pacotes ou remova a declaração repetida; nomes são únicos por run.",
) -> PackageErrorPayload:
    return PackageErrorPayload(
        type=DUPLICATE_PACKAGE,
        message=f"Pacote duplicado: {name}",
        details={"package": name, "scope": scope},
        hint=hint,
    )


def cyclic_dependency(
    *,
    cycle: List[str],
    hint: str = "Remova uma das arestas do ciclo; o grafo de pacotes deve ser um DAG.",
) -> PackageErrorPayload:
    return PackageErrorPayload(
        type=CYCLIC_DEPENDENCY,
        message="Ciclo de dependências detectado: " + " -> ".join(cycle),
        details={"cycle": list(cycle)},
        hint=hint,
    )


def missing_artifact(
    *,
    package: str,
    artifact: str = "main_library",
    hint: str = "Todo pacote deve declarar uma biblioteca principal.",
) -> PackageErrorPayload:
    return PackageErrorPayload(
        type=MISSING_ARTIFACT,
        message=f"Artefato obrigatório ausente em '{package}': {artifact}",
        details={"package": package, "artifact": artifact},
        hint=hint,
    )


def unknown_package(
    *,
    name: str,
    required_by: Optional[str] = None,
    hint: str = "Declare o pacote no catálogo (ou workspace) antes de referenciá-lo.",
) -> PackageErrorPayload:
    return PackageErrorPayload(
        type=UNKNOWN_PACKAGE,
        message=f"Pacote desconhecido: {name}",
        details={"package": name, "required_by": required_by},
        hint=hint,
    )


def package_definition_error(
    *,
    package: Optional[str],
    message: str,
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise depends_on/test_providers da definição do pacote.",
) -> PackageErrorPayload:
    merged: Dict[str, Any] = {"package": package}
    merged.update(details or {})
    return PackageErrorPayload(
        type=PACKAGE_DEFINITION_ERROR,
        message=message,
        details=merged,
        hint=hint,
    )


# ---------------------------------------------------------------------------
# Payload -> exceção / exceção -> payload
# ---------------------------------------------------------------------------

def raise_payload(payload: PackageErrorPayload, exc_type: type) -> None:
    """Levanta `exc_type` carregando os campos do payload."""
    raise exc_type(message=payload.message, details=dict(payload.details), hint=payload.hint)


def exception_to_payload(exc: BaseException) -> PackageErrorPayload:
    """Converte exceções em PackageErrorPayload (serializável, acionável).

    Regras:
    - PackageGraphException: código estável derivado da classe.
    - Outras exceções: encapsular como ASSEMBLY_EXECUTION_ERROR sem stack trace.
    """
    if isinstance(exc, PackageGraphException):
        code = _CODES_BY_EXCEPTION.get(type(exc), exc.__class__.__name__)
        return PackageErrorPayload(
            type=code,
            message=str(exc) or "Erro de montagem",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return PackageErrorPayload(
        type=ASSEMBLY_EXECUTION_ERROR,
        message=str(exc) or "Erro inesperado durante a montagem",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique a receita do pacote que falhou; nenhum grafo parcial é entregue.",
    )
