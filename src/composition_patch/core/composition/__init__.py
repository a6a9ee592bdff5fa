"""
Modelo de composição e motor de patches.

Componentes:
    - types       → PatchType, variantes de patch, PatchSet, ComposedTemplate, CompositionSpec
    - policy      → PatchPolicy e a política de campo opcional
    - constant    → ConstantValue e sua resolução
    - transforms  → map, math, string, convert e o pipeline
    - inline      → expansão de patch sets
    - patch       → aplicação de um patch
    - schema      → forma serializada (YAML/JSON) -> modelo tipado
"""

from .constant import ConstantType, ConstantValue  # noqa: F401
from .inline import inline_patch_sets  # noqa: F401
from .patch import apply_patch  # noqa: F401
from .policy import FromFieldPathPolicy, PatchPolicy, is_optional_field_path_not_found  # noqa: F401
from .schema import parse_composition_spec, parse_patch, parse_transform  # noqa: F401
from .transforms import (  # noqa: F401
    ConvertTransform,
    ConvertType,
    MapTransform,
    MathTransform,
    StringTransform,
    Transform,
    TransformType,
    resolve_transforms,
)
from .types import (  # noqa: F401
    ComposedTemplate,
    CompositionSpec,
    FromCompositeFieldPathPatch,
    FromConstantValuePatch,
    Patch,
    PatchSet,
    PatchSetPatch,
    PatchType,
    ToCompositeFieldPathPatch,
)
