"""
Inlining de patch sets.

Cada patch do tipo PatchSet de um template é substituído, na mesma posição,
pelos patches do patch set referenciado (na ordem declarada). Patch sets
não são expandidos recursivamente: um patch set que referencia outro não é
suportado.

A operação roda uma vez, antes de qualquer resolução. Uma referência a um
nome inexistente interrompe tudo com `UndefinedPatchSetError`. Templates já
processados antes da falha permanecem inlined; a lista do template que
falhou não é alterada.
"""

from __future__ import annotations

from typing import List

from composition_patch.core.errors import UndefinedPatchSetError

from .types import CompositionSpec, Patch, PatchSetPatch


def inline_patch_sets(spec: CompositionSpec) -> None:
    for template in spec.resources:
        patches: List[Patch] = []
        for p in template.patches:
            if not isinstance(p, PatchSetPatch):
                patches.append(p)
                continue

            ps = spec.find_patch_set(p.patch_set_name) if p.patch_set_name is not None else None
            if ps is None:
                raise UndefinedPatchSetError(str(p.patch_set_name))
            patches.extend(ps.patches)

        template.patches = patches
