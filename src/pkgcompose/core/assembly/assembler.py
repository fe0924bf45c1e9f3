# src/pkgcompose/core/assembly/assembler.py
"""
Montagem raiz do grafo de pacotes.

Este módulo é o ponto de entrada que, para um pacote nomeado, constrói
recursivamente todas as dependências (folhas primeiro) antes do próprio
pacote e devolve o PackageDescriptor resultante ao gerador externo.

Responsabilidades do módulo:
    - Resolver receitas no catálogo (UnknownPackageError para nomes ausentes)
    - Construir cada pacote no máximo uma vez por run (cache do BuildContext)
    - Detectar ciclos via estado BUILDING e reportar a cadeia de nomes
    - Registrar início, conclusão e falha de cada pacote no Manifest
    - Entregar ao gerador apenas grafos completos e válidos

Decisões arquiteturais:
    - Pacotes irmãos que compartilham uma dependência recebem a MESMA instância
    - Qualquer erro é fatal: nenhum grafo parcial é entregue
    - A ordem dos sub-pacotes vem da declaração, nunca da ordem de construção

Limites explícitos:
    - Não compõe artefatos (ver builder)
    - Não emite arquivos de projeto
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from pkgcompose.core.config.hashing import compute_config_hash
from pkgcompose.core.config.settings import AssemblySettings
from pkgcompose.core.errors import exception_to_payload
from pkgcompose.core.exceptions import PackageDefinitionError, PackageGraphException
from pkgcompose.core.package.catalog import PackageCatalog
from pkgcompose.core.package.context import BuildContext
from pkgcompose.core.package.recipe import dependency_names
from pkgcompose.core.package.types import BuildState, PackageDescriptor
from pkgcompose.core.traceability.manifest import (
    AssemblyManifest,
    create_manifest,
    package_built,
    package_failed,
    package_started,
)

from .builder import build_package


def _now() -> datetime:
    return datetime.now(timezone.utc)


@runtime_checkable
class Generator(Protocol):
    """Colaborador externo que transforma o grafo resolvido em projetos de build."""

    def generate(self, root: PackageDescriptor) -> Any:
        ...


class PackageAssembler:
    """Montagem canônica do grafo (resolução + construção + rastreamento)."""

    def __init__(
        self,
        catalog: PackageCatalog,
        *,
        ctx: Optional[BuildContext] = None,
        settings: Optional[AssemblySettings] = None,
    ):
        self.catalog = catalog
        self.ctx: BuildContext = ctx if ctx is not None else BuildContext()
        self.settings: AssemblySettings = (
            settings if settings is not None else AssemblySettings.from_config(self.ctx.config)
        )
        self.manifest: AssemblyManifest = create_manifest(
            run_id=self.ctx.run_id,
            started_at=self.ctx.created_at,
            config_hash=compute_config_hash(self.ctx.config or {}),
        )
        self.ctx.meta.setdefault("config_hash", self.manifest.inputs["config_hash"])

    def assemble(self, name: str) -> PackageDescriptor:
        """
        Constrói `name` e todas as suas dependências transitivas.

        Raises:
            UnknownPackageError: Pacote (ou dependência) não declarado.
            CyclicDependencyError: Ciclo detectado; `details["cycle"]` traz a cadeia.
            DuplicatePackageError: Nome registrado duas vezes na run.
            PackageDefinitionError: Receita inconsistente.
            MissingArtifactError: Biblioteca principal ausente.
        """
        if self.manifest.run.get("root") is None:
            self.manifest.run["root"] = name
            self.ctx.meta.setdefault("root", name)
        return self._assemble(name, required_by=None)

    def _assemble(self, name: str, *, required_by: Optional[str]) -> PackageDescriptor:
        if self.ctx.is_built(name):
            return self.ctx.get(name)

        if self.ctx.state_of(name) == BuildState.FAILED:
            previous = self.ctx.failure_of(name)
            if isinstance(previous, PackageGraphException):
                # mesma classe e mesmos details da falha original
                raise type(previous)(
                    message=previous.message,
                    details=dict(previous.details or {}),
                    hint=previous.hint,
                )
            raise PackageDefinitionError(
                message=f"package '{name}' already failed in this run",
                details={"package": name, "state": BuildState.FAILED.value},
                hint="Inicie uma nova run após corrigir a falha anterior.",
            )

        recipe = self.catalog.get(name, required_by=required_by)
        self.ctx.mark_building(name)
        package_started(self.manifest, package=name, ts=_now(), required_by=required_by)
        self.ctx.log(package=name, level="DEBUG", message="package started", required_by=required_by)

        try:
            deps = [self._assemble(dep, required_by=name) for dep in dependency_names(recipe)]
            descriptor = build_package(recipe, deps, settings=self.settings, ctx=self.ctx)
        except Exception as exc:
            self._fail(name, exc)
            raise

        package_built(
            self.manifest,
            package=name,
            ts=_now(),
            result={
                "sub_packages": [p.name for p in descriptor.sub_packages],
                "test_dependencies": [lib.name for lib in descriptor.test_project.dependencies],
                "warnings": self.ctx.warnings.get(name, []),
            },
        )
        return descriptor

    def _fail(self, name: str, exc: Exception) -> None:
        error: Dict[str, Any] = exception_to_payload(exc).to_dict()
        self.ctx.mark_failed(name, exc)
        self.ctx.log(package=name, level="ERROR", message=error["message"], error_type=error["type"])
        package_failed(self.manifest, package=name, ts=_now(), error=error)


def assemble_package(
    name: str,
    catalog: PackageCatalog,
    *,
    config: Optional[Dict[str, Any]] = None,
    settings: Optional[AssemblySettings] = None,
) -> PackageDescriptor:
    """Executa uma run nova (contexto isolado) e devolve o descritor raiz."""
    assembler = PackageAssembler(catalog, ctx=BuildContext(config=dict(config or {})), settings=settings)
    return assembler.assemble(name)


def generate(
    name: str,
    catalog: PackageCatalog,
    generator: Generator,
    *,
    config: Optional[Dict[str, Any]] = None,
    settings: Optional[AssemblySettings] = None,
) -> Any:
    """
    Monta o grafo de `name` e o entrega ao gerador.

    O gerador é chamado exatamente uma vez, e somente se a montagem
    terminar sem erro. Retorna o que o gerador retornar.
    """
    root = assemble_package(name, catalog, config=config, settings=settings)
    return generator.generate(root)
