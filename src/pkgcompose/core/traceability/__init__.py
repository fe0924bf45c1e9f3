"""
Rastreabilidade da montagem do pkgcompose.

Este pacote define o Manifest de uma run: metadados, hash de
configuração, estado por pacote e Event Log ordenado.
"""

from .manifest import (
    AssemblyManifest,
    add_event,
    create_manifest,
    package_built,
    package_failed,
    package_started,
)

__all__ = [
    "AssemblyManifest",
    "add_event",
    "create_manifest",
    "package_built",
    "package_failed",
    "package_started",
]
