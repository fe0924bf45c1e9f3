# src/pkgcompose/core/config/workspace.py
"""
Leitura de workspaces de pacotes.

Um workspace declara, em YAML ou JSON, o catálogo de pacotes de uma run.
Duas formas são aceitas para `packages`:

    # mapeamento nome -> definição
    packages:
      cbase:
        path: github.com\\jurgen-kluft\\cbase
      cvmem:
        path: github.com\\jurgen-kluft\\cvmem
        depends_on: [cunittest, cbase]
        test_providers: [cunittest]

    # lista de definições com `name`
    packages:
      - name: cbase
        path: github.com\\jurgen-kluft\\cbase

A ordem das entradas e de `depends_on` é preservada. Na forma de lista,
nomes repetidos geram DuplicatePackageError (o mapeamento YAML não
consegue expressar repetição).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, Tuple, Union

from pkgcompose.core.package.catalog import PackageCatalog
from pkgcompose.core.package.recipe import PackageDefinition

from .errors import WorkspaceFormatError
from .loader import read_mapping

_LIST_KEYS = ("depends_on", "test_providers")


def _entries(packages: Any) -> Iterator[Tuple[str, Dict[str, Any]]]:
    if isinstance(packages, dict):
        for name, entry in packages.items():
            yield str(name), entry if entry is not None else {}
        return

    if isinstance(packages, list):
        for i, entry in enumerate(packages):
            if not isinstance(entry, dict) or "name" not in entry:
                raise WorkspaceFormatError(f"packages[{i}] deve ser dict com 'name'")
            if not isinstance(entry["name"], str) or not entry["name"].strip():
                raise WorkspaceFormatError(f"packages[{i}].name deve ser str não vazia")
            yield entry["name"], entry
        return

    raise WorkspaceFormatError("Workspace deve declarar 'packages' como mapeamento ou lista")


def workspace_from_dict(data: Dict[str, Any]) -> PackageCatalog:
    """
    Constrói um PackageCatalog a partir do dicionário de um workspace.

    Valores nunca são convertidos: `path` deve ser str não vazia,
    `test_support` deve ser bool e as chaves de lista devem conter apenas str.

    Raises:
        WorkspaceFormatError: Se `packages` estiver ausente ou malformado.
        DuplicatePackageError: Se um nome se repetir.
    """
    catalog = PackageCatalog()
    for name, entry in _entries(data.get("packages")):
        if not isinstance(entry, dict):
            raise WorkspaceFormatError(f"Definição do pacote '{name}' deve ser dict")

        path = entry.get("path")
        if not isinstance(path, str) or not path.strip():
            raise WorkspaceFormatError(f"'{name}.path' deve ser str não vazia")

        test_support = entry.get("test_support", False)
        if not isinstance(test_support, bool):
            raise WorkspaceFormatError(
                f"'{name}.test_support' deve ser bool, recebido: {type(test_support).__name__}"
            )

        for key in _LIST_KEYS:
            value = entry.get(key)
            if value is None:
                continue
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise WorkspaceFormatError(f"'{name}.{key}' deve ser lista de str")

        catalog.add(PackageDefinition.from_mapping(name, entry))

    return catalog


def load_workspace(path: Union[str, Path]) -> PackageCatalog:
    """Carrega um workspace YAML/JSON do disco como PackageCatalog."""
    return workspace_from_dict(read_mapping(path))
