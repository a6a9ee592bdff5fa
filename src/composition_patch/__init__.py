# src/composition_patch/__init__.py
"""
Composition Patch — motor de resolução de patches entre objetos hierárquicos.

Uma composition descreve como montar recursos compostos ("composed") a
partir de um recurso composite: cada template declara uma lista ordenada
de patches que copiam, transformam e injetam valores entre os dois objetos.

Arquitetura em alto nível:
    - core.fieldpath   → leitura/escrita por field path (dict/list)
    - core.composition → modelo, patch sets, patches, transforms, constantes
    - core.config      → carregamento YAML/JSON e deep-merge de compositions
    - core.render      → aplicação de listas de patches e log estruturado

Limites explícitos:
    - Não reconcilia nem persiste recursos
    - Não valida schemas de CRD
    - Não faz retry: toda falha é devolvida ao chamador
"""

from .core.composition import (  # noqa: F401
    CompositionSpec,
    apply_patch,
    inline_patch_sets,
    parse_composition_spec,
)
from .core.config import load_composition  # noqa: F401
from .core.render import RenderContext, render  # noqa: F401

__all__ = [
    "CompositionSpec",
    "RenderContext",
    "apply_patch",
    "inline_patch_sets",
    "load_composition",
    "parse_composition_spec",
    "render",
]
