# src/pkgcompose/core/package/recipe.py
"""
Contrato canônico de receita de pacote.

Uma receita é a declaração de um pacote: identidade, caminho, dependências
diretas (em ordem de declaração), quais dependências fornecem
infraestrutura de testes e se o pacote possui biblioteca de suporte a
testes.

Receitas são declarativas: o builder é quem transforma uma receita e os
descritores já construídos das suas dependências em um PackageDescriptor.
Isso substitui funções "get package" com estado global por dados
explícitos consumidos dentro de um BuildContext.

Invariantes:
    - `name` é único dentro de um catálogo
    - `test_providers` é um subconjunto de `depends_on`
    - A ordem de `depends_on` define a ordem de link
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Protocol, Tuple, runtime_checkable


@runtime_checkable
class PackageRecipe(Protocol):
    """
    Contrato mínimo de uma receita de pacote.

    Atributos obrigatórios:
        - name: identificador único do pacote na run
        - path: caminho qualificado por plataforma
        - depends_on: nomes dos pacotes dos quais depende (ordem de declaração)
        - test_providers: nomes das dependências que fornecem biblioteca de testes
        - test_support: se o pacote possui biblioteca de suporte a testes

    O protocolo não impõe herança, apenas conformidade estrutural.
    """
    name: str
    path: str
    depends_on: Tuple[str, ...]
    test_providers: Tuple[str, ...]
    test_support: bool


@dataclass(frozen=True)
class PackageDefinition:
    """Receita imutável de pacote (implementação canônica de PackageRecipe)."""

    name: str
    path: str
    depends_on: Tuple[str, ...] = field(default=())
    test_providers: Tuple[str, ...] = field(default=())
    test_support: bool = False

    def __post_init__(self) -> None:
        # aceitar listas na construção, armazenar tuplas
        object.__setattr__(self, "depends_on", tuple(self.depends_on))
        object.__setattr__(self, "test_providers", tuple(self.test_providers))

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "PackageDefinition":
        """
        Cria uma definição a partir de uma entrada de workspace.

        Os valores são usados como estão; a validação de tipos cabe a quem lê
        o workspace (ver core.config.workspace).
        """
        return cls(
            name=name,
            path=data.get("path", ""),
            depends_on=tuple(data.get("depends_on", []) or []),
            test_providers=tuple(data.get("test_providers", []) or []),
            test_support=data.get("test_support", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "depends_on": list(self.depends_on),
            "test_providers": list(self.test_providers),
            "test_support": self.test_support,
        }


def dependency_names(recipe: PackageRecipe) -> List[str]:
    """Nomes de dependência sem duplicatas, na ordem de declaração."""
    out: List[str] = []
    for dep in getattr(recipe, "depends_on", ()) or ():
        if dep not in out:
            out.append(dep)
    return out
