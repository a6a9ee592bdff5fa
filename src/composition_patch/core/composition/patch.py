# src/composition_patch/core/composition/patch.py
"""
Resolução de um patch entre o composite e o composed.

Fluxo de `apply_patch`:
    1. filtro `only`: se informado e o tipo do patch não estiver nele,
       o patch é ignorado (sucesso sem efeito)
    2. despacho pela classe do patch
    3. leitura no objeto de origem, política de campo opcional,
       cadeia de transforms e escrita no objeto de destino

A escrita só acontece depois que toda a cadeia de transforms termina com
sucesso. Erros de escrita são propagados sem alteração.

Direção dos patches (os nomes dos paths são locais ao patch):
    - FromCompositeFieldPath: lê `from_field_path` do composite, escreve
      `to_field_path` no composed
    - ToCompositeFieldPath: lê `from_field_path` do composed, escreve
      `to_field_path` no composite
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Optional

from composition_patch.core.errors import (
    ConstantValueRequiredError,
    InvalidPatchTypeError,
    RequiredFieldError,
)
from composition_patch.core.fieldpath import FieldPathError, Paved

from .policy import is_optional_field_path_not_found
from .transforms import resolve_transforms
from .types import (
    FieldPathPatch,
    FromCompositeFieldPathPatch,
    FromConstantValuePatch,
    PatchType,
    ToCompositeFieldPathPatch,
)


def _copy_field_path(patch: FieldPathPatch, read_obj: Dict[str, Any], write_obj: Dict[str, Any]) -> None:
    if patch.from_field_path is None:
        raise RequiredFieldError("fromFieldPath", patch.type)

    try:
        value = Paved(read_obj).get_value(patch.from_field_path)
    except FieldPathError as e:
        if is_optional_field_path_not_found(e, patch.policy):
            return
        raise

    out = resolve_transforms(patch.transforms, value)
    Paved(write_obj).set_value(patch.effective_to_field_path(), deepcopy(out))


def _apply_from_composite(patch: FromCompositeFieldPathPatch, composite: Dict[str, Any], composed: Dict[str, Any]) -> None:
    _copy_field_path(patch, composite, composed)


def _apply_to_composite(patch: ToCompositeFieldPathPatch, composite: Dict[str, Any], composed: Dict[str, Any]) -> None:
    _copy_field_path(patch, composed, composite)


def _apply_from_constant(patch: FromConstantValuePatch, composite: Dict[str, Any], composed: Dict[str, Any]) -> None:
    if patch.to_field_path is None:
        raise RequiredFieldError("toFieldPath", patch.type)
    if patch.constant_value is None:
        raise ConstantValueRequiredError(patch.type)

    value = patch.constant_value.get_value()
    Paved(composed).set_value(patch.to_field_path, value)


# PatchSet não aparece aqui: sem inlining prévio ele é um tipo inválido
_APPLIERS: Dict[type, Callable[[Any, Dict[str, Any], Dict[str, Any]], None]] = {
    FromCompositeFieldPathPatch: _apply_from_composite,
    ToCompositeFieldPathPatch: _apply_to_composite,
    FromConstantValuePatch: _apply_from_constant,
}


def patch_type_of(patch: Any) -> str:
    ptype = getattr(patch, "type", None)
    if ptype is None:
        return type(patch).__name__
    return str(ptype)


def apply_patch(
    patch: Any,
    composite: Dict[str, Any],
    composed: Dict[str, Any],
    only: Optional[Iterable[PatchType]] = None,
) -> None:
    """
    Aplica um patch.

    Args:
        patch: patch já inlined (sem PatchSet).
        composite: objeto composite (mutado por ToCompositeFieldPath).
        composed: objeto composed (mutado pelos demais tipos).
        only: tipos de patch permitidos nesta fase; vazio ou None aceita todos.

    Raises:
        RequiredFieldError, ConstantValueRequiredError, InvalidPatchTypeError:
            configuração inválida do patch.
        FieldPathError: leitura/escrita falhou (inclui campo obrigatório ausente).
        CompositionError: falha em algum transform ou no valor constante.
    """
    allowed = {str(t) for t in only} if only else set()
    if allowed and patch_type_of(patch) not in allowed:
        return

    applier = _APPLIERS.get(type(patch))
    if applier is None:
        raise InvalidPatchTypeError(patch_type_of(patch))
    applier(patch, composite, composed)
