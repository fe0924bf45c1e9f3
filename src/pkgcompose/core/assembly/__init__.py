"""
Montagem do grafo de pacotes do pkgcompose.

Componentes principais:
    - builder   → composição de um pacote a partir de dependências já construídas
    - assembler → montagem recursiva, detecção de ciclos e entrega ao gerador

Invariantes:
    - Cada pacote é construído no máximo uma vez por run
    - Pacotes só são construídos após suas dependências
    - Nenhum grafo parcial é entregue ao gerador
"""

from .assembler import Generator, PackageAssembler, assemble_package, generate
from .builder import build_package

__all__ = [
    "Generator",
    "PackageAssembler",
    "assemble_package",
    "build_package",
    "generate",
]
