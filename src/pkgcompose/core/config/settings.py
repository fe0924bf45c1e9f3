# src/pkgcompose/core/config/settings.py
"""
Configurações tipadas da montagem.

Converte a seção `assembly` da configuração efetiva em um objeto
imutável consumido pelo builder e pelo assembler.

Chaves reconhecidas (v1):
    - test_project_suffix (str, default "_test")
    - test_library_suffix (str, default "_testlib")
    - warn_on_missing_test_library (bool, default true)

Chaves desconhecidas são ignoradas; tipos inválidos e sufixos vazios geram
InvalidSettingError (um sufixo vazio daria ao projeto de testes o nome da
biblioteca principal).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from pkgcompose.core.package.artifacts import (
    DEFAULT_TEST_LIBRARY_SUFFIX,
    DEFAULT_TEST_PROJECT_SUFFIX,
)

from .errors import InvalidSettingError


@dataclass(frozen=True)
class AssemblySettings:
    """Parâmetros de nomeação e política de warnings da montagem."""

    test_project_suffix: str = DEFAULT_TEST_PROJECT_SUFFIX
    test_library_suffix: str = DEFAULT_TEST_LIBRARY_SUFFIX
    warn_on_missing_test_library: bool = True

    def __post_init__(self) -> None:
        for name in ("test_project_suffix", "test_library_suffix"):
            if not getattr(self, name).strip():
                raise InvalidSettingError(f"assembly.{name} não pode ser vazio")

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "AssemblySettings":
        section = (config or {}).get("assembly", {}) or {}
        if not isinstance(section, dict):
            raise InvalidSettingError(
                f"Seção 'assembly' deve ser dict, recebido: {type(section).__name__}"
            )

        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in section:
                continue
            value = section[f.name]
            expected = bool if f.default is True or f.default is False else str
            if not isinstance(value, expected):
                raise InvalidSettingError(
                    f"assembly.{f.name} deve ser {expected.__name__}, "
                    f"recebido: {type(value).__name__}"
                )
            values[f.name] = value

        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
