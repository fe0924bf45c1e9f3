# src/pkgcompose/core/package/catalog.py
"""
Catálogo de receitas de pacote.

Este módulo define o `PackageCatalog`, responsável por registrar receitas
de pacote e validar a unicidade de seus nomes antes de qualquer montagem.

Responsabilidades do módulo:
    - Validar unicidade de `recipe.name`
    - Preservar ordem de declaração das receitas
    - Expor acesso controlado às receitas registradas

Invariantes:
    - Cada receita registrada possui um nome único
    - A lista de receitas reflete exatamente a ordem de registro
    - Nenhuma receita inválida é aceita

Limites explícitos:
    - Não constrói pacotes
    - Não detecta ciclos (a montagem faz isso)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from pkgcompose.core.errors import duplicate_package, raise_payload, unknown_package
from pkgcompose.core.exceptions import (
    DuplicatePackageError,
    PackageDefinitionError,
    UnknownPackageError,
)

from .recipe import PackageRecipe


@dataclass
class PackageCatalog:
    """
    Registro canônico de receitas de pacote.

    Decisões arquiteturais:
        - A validação ocorre no momento do registro
        - Duplicidade é erro fatal, nunca sobrescrita silenciosa
        - O catálogo é imutável do ponto de vista da montagem (somente leitura)
    """

    _recipes: Dict[str, PackageRecipe] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, recipes: Iterable[PackageRecipe]) -> "PackageCatalog":
        catalog = cls()
        for recipe in recipes:
            catalog.add(recipe)
        return catalog

    def add(self, recipe: PackageRecipe) -> None:
        name = getattr(recipe, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise PackageDefinitionError(
                message="recipe.name must be a non-empty string",
                details={"package": name},
            )

        if name in self._recipes:
            raise_payload(duplicate_package(name=name, scope="catalog"), DuplicatePackageError)

        self._recipes[name] = recipe
        self._order.append(name)

    def get(self, name: str, *, required_by: Optional[str] = None) -> PackageRecipe:
        if name not in self._recipes:
            raise_payload(unknown_package(name=name, required_by=required_by), UnknownPackageError)
        return self._recipes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._recipes

    def __len__(self) -> int:
        return len(self._order)

    def names(self) -> List[str]:
        return list(self._order)

    def list(self) -> List[PackageRecipe]:
        return [self._recipes[n] for n in self._order]
