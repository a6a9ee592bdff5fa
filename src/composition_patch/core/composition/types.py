# src/composition_patch/core/composition/types.py
"""
Tipos canônicos do modelo de composição.

Este módulo define os enums e as estruturas de dados que descrevem uma
composition: patch sets nomeados, templates de recursos compostos e os
patches de cada template.

Cada tipo de patch é uma classe própria, com o tag exposto em `type`
(atributo de classe). Assim, um patch só carrega os campos do seu tipo e
o despacho em `patch.apply_patch` é feito pela classe, não por campos
opcionais preenchidos.

Ciclo de vida:
    - construído a partir da configuração (`schema.parse_composition_spec`)
    - mutado in-place por `inline.inline_patch_sets`
    - somente leitura durante a resolução dos patches
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from .constant import ConstantValue
from .policy import PatchPolicy
from .transforms import Transform


class PatchType(str, Enum):
    """Tags de patch aceitos pela composition."""

    FROM_COMPOSITE_FIELD_PATH = "FromCompositeFieldPath"
    PATCH_SET = "PatchSet"
    TO_COMPOSITE_FIELD_PATH = "ToCompositeFieldPath"
    FROM_CONSTANT_VALUE = "FromConstantValue"

    def __str__(self) -> str:
        return self.value


@dataclass
class FieldPathPatch:
    """Campos comuns aos patches que copiam valores entre objetos."""

    from_field_path: Optional[str] = None
    to_field_path: Optional[str] = None
    policy: Optional[PatchPolicy] = None
    transforms: List[Transform] = field(default_factory=list)

    def effective_to_field_path(self) -> Optional[str]:
        """`to_field_path` quando declarado; caso contrário, `from_field_path`."""
        return self.to_field_path if self.to_field_path is not None else self.from_field_path


@dataclass
class FromCompositeFieldPathPatch(FieldPathPatch):
    """Lê do composite em `from_field_path` e escreve no composed."""

    type: ClassVar[PatchType] = PatchType.FROM_COMPOSITE_FIELD_PATH


@dataclass
class ToCompositeFieldPathPatch(FieldPathPatch):
    """Lê do composed em `from_field_path` e escreve no composite."""

    type: ClassVar[PatchType] = PatchType.TO_COMPOSITE_FIELD_PATH


@dataclass
class PatchSetPatch:
    """Referência a um patch set; desaparece após o inlining."""

    type: ClassVar[PatchType] = PatchType.PATCH_SET

    patch_set_name: Optional[str] = None


@dataclass
class FromConstantValuePatch:
    """Escreve um literal tipado no composed."""

    type: ClassVar[PatchType] = PatchType.FROM_CONSTANT_VALUE

    to_field_path: Optional[str] = None
    constant_value: Optional[ConstantValue] = None


Patch = Union[
    FromCompositeFieldPathPatch,
    ToCompositeFieldPathPatch,
    PatchSetPatch,
    FromConstantValuePatch,
]


@dataclass
class PatchSet:
    name: str
    patches: List[Patch] = field(default_factory=list)


@dataclass
class ComposedTemplate:
    """Template de um recurso composto: objeto base + lista ordenada de patches."""

    name: Optional[str] = None
    base: Dict[str, Any] = field(default_factory=dict)
    patches: List[Patch] = field(default_factory=list)


@dataclass
class CompositionSpec:
    patch_sets: List[PatchSet] = field(default_factory=list)
    resources: List[ComposedTemplate] = field(default_factory=list)

    def find_patch_set(self, name: str) -> Optional[PatchSet]:
        """Primeiro patch set com o nome informado, ou None."""
        for ps in self.patch_sets:
            if ps.name == name:
                return ps
        return None
