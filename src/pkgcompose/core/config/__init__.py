# src/pkgcompose/core/config/__init__.py

"""
Camada de configuração do pkgcompose.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar, validar estruturalmente e identificar a configuração de uma run
de montagem, além de declarar catálogos de pacotes a partir de arquivos
de workspace.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Conversão da seção `assembly` em `AssemblySettings`
    - Geração de hash canônico para o Manifest
    - Leitura de workspaces (`packages:`) em um `PackageCatalog`

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não monta o grafo
    - Não emite arquivos de projeto
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingError,
    UnsupportedConfigFormatError,
    WorkspaceFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import AssemblySettings
from .workspace import load_workspace, workspace_from_dict

__all__ = [
    "AssemblySettings",
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingError",
    "UnsupportedConfigFormatError",
    "WorkspaceFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "load_workspace",
    "workspace_from_dict",
]
