# src/pkgcompose/core/config/errors.py
"""
Exceções canônicas da camada de configuração do pkgcompose.

As exceções aqui definidas representam violações estruturais de
configuração ou de workspace, e não erros do grafo de pacotes (estes
vivem em `pkgcompose.core.exceptions`).

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do pkgcompose.

    Permite captura genérica de erros de configuração e distinção clara
    entre falhas de configuração e falhas de montagem do grafo.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    ou o arquivo de workspace não é encontrado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo não é um
    dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"assembly": {"test_project_suffix": "_test"}}
        - override: {"assembly": "strict"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidSettingError(ConfigError):
    """Valor de configuração com tipo inválido na seção `assembly`."""


class WorkspaceFormatError(ConfigError):
    """Estrutura inválida em um arquivo de workspace (`packages:`)."""
