"""
# Package Core — pkgcompose

Este pacote define os **tipos imutáveis** e as **estruturas de run** que
compõem o grafo de pacotes.

## Componentes

- **types**: `Library`, `TestProject`, `ArtifactSet`, `PackageDescriptor`,
  `ProjectKind`, `BuildState`
- **artifacts**: operações de setup e `flatten_unique`
- **recipe**: `PackageRecipe` (Protocol) e `PackageDefinition`
- **catalog**: `PackageCatalog` (unicidade de nomes na declaração)
- **context**: `BuildContext` (cache, estados, log e warnings por run)

## Limites Explícitos

- Não compõe pacotes (ver `core.assembly`)
- Não emite arquivos de projeto
"""

from .artifacts import (
    flatten_unique,
    setup_artifacts,
    setup_library,
    setup_test_library,
    setup_test_project,
)
from .catalog import PackageCatalog
from .context import BuildContext
from .recipe import PackageDefinition, PackageRecipe
from .types import (
    ArtifactSet,
    BuildState,
    Library,
    PackageDescriptor,
    ProjectKind,
    TestProject,
)

__all__ = [
    "ArtifactSet",
    "BuildContext",
    "BuildState",
    "Library",
    "PackageCatalog",
    "PackageDefinition",
    "PackageDescriptor",
    "PackageRecipe",
    "ProjectKind",
    "TestProject",
    "flatten_unique",
    "setup_artifacts",
    "setup_library",
    "setup_test_library",
    "setup_test_project",
]
