# src/composition_patch/core/render/renderer.py
"""
Renderização de recursos compostos.

Aplica a lista de patches de cada template de uma composition, no papel
que o controller de composição exerce a cada reconciliação:

    - render_composed: parte de uma cópia do `base` do template e aplica
      os patches que fluem do composite para o composed
    - apply_to_composite: aplica os patches que fluem do composed de volta
      para o composite
    - render: inlining único + render_composed para todos os templates

Política de erro:
    - a primeira falha interrompe a lista com `PatchApplicationError`
      (índice do patch + causa encadeada)
    - patches anteriores à falha não são desfeitos; quem precisa de
      atomicidade faz snapshot do objeto antes
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from composition_patch.core.composition.inline import inline_patch_sets
from composition_patch.core.composition.patch import apply_patch, patch_type_of
from composition_patch.core.composition.policy import is_optional_field_path_not_found
from composition_patch.core.composition.types import (
    ComposedTemplate,
    CompositionSpec,
    FieldPathPatch,
    PatchType,
)
from composition_patch.core.errors import CompositionError, ErrorPayload, PatchApplicationError
from composition_patch.core.fieldpath import FieldPathError, Paved

from .context import RenderContext


FROM_COMPOSITE_PATCH_TYPES: FrozenSet[PatchType] = frozenset(
    {PatchType.FROM_COMPOSITE_FIELD_PATH, PatchType.FROM_CONSTANT_VALUE}
)
TO_COMPOSITE_PATCH_TYPES: FrozenSet[PatchType] = frozenset({PatchType.TO_COMPOSITE_FIELD_PATH})


def _template_label(template: ComposedTemplate, index: Optional[int] = None) -> str:
    if template.name:
        return template.name
    return f"resources[{index}]" if index is not None else "<unnamed>"


def _error_payload(exc: Exception) -> ErrorPayload:
    if isinstance(exc, CompositionError):
        return exc.to_payload()
    return ErrorPayload(
        type=exc.__class__.__name__,
        message=str(exc) or "patch failed",
        details={"path": getattr(exc, "path", None)},
    )


def _source_field_absent(patch: Any, composite: Dict[str, Any], composed: Dict[str, Any]) -> bool:
    """True quando o patch virou no-op porque o campo de origem (opcional) não existe."""
    if not isinstance(patch, FieldPathPatch) or patch.from_field_path is None:
        return False
    source = composed if patch.type is PatchType.TO_COMPOSITE_FIELD_PATH else composite
    try:
        Paved(source).get_value(patch.from_field_path)
    except FieldPathError as e:
        return is_optional_field_path_not_found(e, patch.policy)
    return False


def apply_patches(
    template: ComposedTemplate,
    composite: Dict[str, Any],
    composed: Dict[str, Any],
    *,
    only: Optional[Iterable[PatchType]] = None,
    ctx: Optional[RenderContext] = None,
    label: Optional[str] = None,
) -> None:
    """
    Aplica, em ordem, os patches (já inlined) de um template.

    Raises:
        PatchApplicationError: na primeira falha, com a causa encadeada.
    """
    allowed = frozenset(only) if only else frozenset()
    name = label or _template_label(template)

    for i, patch in enumerate(template.patches):
        ptype = patch_type_of(patch)

        if allowed and ptype not in {str(t) for t in allowed}:
            if ctx is not None:
                ctx.log(template=name, level="DEBUG", message="patch skipped", index=i, patch_type=ptype)
            continue

        absent = ctx is not None and _source_field_absent(patch, composite, composed)

        try:
            apply_patch(patch, composite, composed)
        except Exception as e:
            if ctx is not None:
                ctx.log(
                    template=name,
                    level="ERROR",
                    message="patch failed",
                    index=i,
                    patch_type=ptype,
                    error=_error_payload(e).to_dict(),
                )
            raise PatchApplicationError(i, ptype, e) from e

        if ctx is None:
            continue

        if absent:
            ctx.log(template=name, level="INFO", message="patch no-op", index=i, patch_type=ptype)
            ctx.add_warning(
                template=name,
                message=f"patch {i} ({ptype}): optional field {patch.from_field_path} not found",
            )
        else:
            ctx.log(template=name, level="INFO", message="patch applied", index=i, patch_type=ptype)


def render_composed(
    template: ComposedTemplate,
    composite: Dict[str, Any],
    *,
    ctx: Optional[RenderContext] = None,
    label: Optional[str] = None,
) -> Dict[str, Any]:
    """Novo objeto composed: `base` do template + patches composite -> composed."""
    composed = deepcopy(template.base)
    apply_patches(template, composite, composed, only=FROM_COMPOSITE_PATCH_TYPES, ctx=ctx, label=label)
    return composed


def apply_to_composite(
    template: ComposedTemplate,
    composite: Dict[str, Any],
    composed: Dict[str, Any],
    *,
    ctx: Optional[RenderContext] = None,
    label: Optional[str] = None,
) -> None:
    """Aplica os patches composed -> composite (ToCompositeFieldPath)."""
    apply_patches(template, composite, composed, only=TO_COMPOSITE_PATCH_TYPES, ctx=ctx, label=label)


def render(
    spec: CompositionSpec,
    composite: Dict[str, Any],
    *,
    ctx: Optional[RenderContext] = None,
) -> List[Dict[str, Any]]:
    """
    Renderiza todos os templates da composition.

    O inlining de patch sets é feito aqui, uma vez, sobre `spec` (mutado).
    Falha de inlining interrompe a renderização antes de qualquer patch.
    """
    inline_patch_sets(spec)

    out: List[Dict[str, Any]] = []
    for n, template in enumerate(spec.resources):
        out.append(render_composed(template, composite, ctx=ctx, label=_template_label(template, n)))
    return out
