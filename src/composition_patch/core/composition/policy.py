"""
Política de patch para campos de origem ausentes.

A postura padrão é permissiva: sem política declarada, um
`fromFieldPath` ausente no objeto de origem torna o patch um no-op.
Apenas `Required` explícito faz a ausência virar erro.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from composition_patch.core.fieldpath import is_not_found


class FromFieldPathPolicy(str, Enum):
    OPTIONAL = "Optional"
    REQUIRED = "Required"

    def __str__(self) -> str:
        return self.value


@dataclass
class PatchPolicy:
    from_field_path: Optional[FromFieldPathPolicy] = None

    def from_field_path_policy(self) -> FromFieldPathPolicy:
        """Política efetiva de `fromFieldPath` (default: Optional)."""
        if self.from_field_path is None:
            return FromFieldPathPolicy.OPTIONAL
        return self.from_field_path


def effective_from_field_path_policy(policy: Optional[PatchPolicy]) -> FromFieldPathPolicy:
    if policy is None:
        return FromFieldPathPolicy.OPTIONAL
    return policy.from_field_path_policy()


def is_optional_field_path_not_found(err: Optional[BaseException], policy: Optional[PatchPolicy]) -> bool:
    """
    Indica se `err` é um "campo não encontrado" que a política absorve.

    Returns:
        bool: True quando o patch deve virar no-op; False quando o erro
        (se houver) deve ser propagado.
    """
    if err is None:
        return False
    if not is_not_found(err):
        return False
    return effective_from_field_path_policy(policy) is FromFieldPathPolicy.OPTIONAL
