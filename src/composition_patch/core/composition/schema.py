# src/composition_patch/core/composition/schema.py
"""
Schema canônico — Composition (forma serializada).

Converte o mapeamento carregado de YAML/JSON no modelo tipado de
`types.py`, validando apenas a estrutura: tipos dos campos, tags
conhecidos e configuração obrigatória de cada transform.

Campos obrigatórios *por tipo de patch* (ex.: `fromFieldPath`) não são
exigidos aqui; a ausência é reportada na resolução do patch, que é onde o
tipo decide o que é obrigatório.

Forma esperada:

    patchSets:
      - name: common
        patches: [...]
    resources:
      - name: bucket
        base: {...}
        patches:
          - type: FromCompositeFieldPath
            fromFieldPath: spec.region
            toFieldPath: spec.forProvider.region
            policy: {fromFieldPath: Required}
            transforms:
              - type: map
                map: {us: us-east-1}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from composition_patch.core.errors import (
    CompositionValidationError,
    InvalidPatchTypeError,
    TransformConfigRequiredError,
    TransformTypeNotSupportedError,
)

from .constant import ConstantValue
from .policy import FromFieldPathPolicy, PatchPolicy
from .transforms import (
    ConvertTransform,
    MapTransform,
    MathTransform,
    StringTransform,
    Transform,
    TransformType,
)
from .types import (
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


def _expect(cond: bool, msg: str) -> None:
    if not cond:
        raise CompositionValidationError(msg)


def _opt_str(d: Dict[str, Any], key: str, where: str) -> Optional[str]:
    v = d.get(key)
    _expect(v is None or isinstance(v, str), f"{where}.{key} must be a string")
    return v


def _list_of_mappings(v: Any, where: str) -> List[Dict[str, Any]]:
    if v is None:
        return []
    _expect(isinstance(v, list), f"{where} must be a list")
    for i, item in enumerate(v):
        _expect(isinstance(item, dict), f"{where}[{i}] must be a mapping")
    return v


# -----------------------------
# transforms
# -----------------------------

def parse_transform(d: Dict[str, Any], where: str = "transform") -> Transform:
    raw_type = d.get("type")
    try:
        ttype = TransformType(raw_type)
    except ValueError:
        raise TransformTypeNotSupportedError(raw_type) from None

    cfg = d.get(ttype.value)
    if cfg is None:
        raise TransformConfigRequiredError(ttype.value)
    _expect(isinstance(cfg, dict), f"{where}.{ttype.value} must be a mapping")

    if ttype is TransformType.MAP:
        for k, v in cfg.items():
            _expect(isinstance(k, str) and isinstance(v, str), f"{where}.map entries must map string to string")
        return MapTransform(pairs=dict(cfg))

    if ttype is TransformType.MATH:
        multiply = cfg.get("multiply")
        _expect(
            multiply is None or (isinstance(multiply, int) and not isinstance(multiply, bool)),
            f"{where}.math.multiply must be an integer",
        )
        return MathTransform(multiply=multiply)

    if ttype is TransformType.STRING:
        fmt = cfg.get("fmt")
        _expect(isinstance(fmt, str), f"{where}.string.fmt is required")
        return StringTransform(format=fmt)

    to_type = cfg.get("toType")
    _expect(isinstance(to_type, str) and bool(to_type), f"{where}.convert.toType is required")
    return ConvertTransform(to_type=to_type)


# -----------------------------
# patches
# -----------------------------

def _parse_policy(v: Any, where: str) -> Optional[PatchPolicy]:
    if v is None:
        return None
    _expect(isinstance(v, dict), f"{where}.policy must be a mapping")
    raw = v.get("fromFieldPath")
    if raw is None:
        return PatchPolicy()
    try:
        return PatchPolicy(from_field_path=FromFieldPathPolicy(raw))
    except ValueError:
        raise CompositionValidationError(
            f"{where}.policy.fromFieldPath must be one of {[p.value for p in FromFieldPathPolicy]}"
        ) from None


def _parse_constant_value(v: Any, where: str) -> Optional[ConstantValue]:
    if v is None:
        return None
    _expect(isinstance(v, dict), f"{where}.constantValue must be a mapping")

    s = v.get("string")
    i = v.get("int")
    b = v.get("bool")
    _expect(s is None or isinstance(s, str), f"{where}.constantValue.string must be a string")
    _expect(i is None or (isinstance(i, int) and not isinstance(i, bool)), f"{where}.constantValue.int must be an integer")
    _expect(b is None or isinstance(b, bool), f"{where}.constantValue.bool must be a boolean")

    return ConstantValue(type=v.get("type"), string_value=s, int_value=i, bool_value=b)


def parse_patch(d: Dict[str, Any], where: str = "patch") -> Patch:
    raw_type = d.get("type", PatchType.FROM_COMPOSITE_FIELD_PATH.value)
    try:
        ptype = PatchType(raw_type)
    except ValueError:
        raise InvalidPatchTypeError(raw_type) from None

    if ptype is PatchType.PATCH_SET:
        return PatchSetPatch(patch_set_name=_opt_str(d, "patchSetName", where))

    if ptype is PatchType.FROM_CONSTANT_VALUE:
        return FromConstantValuePatch(
            to_field_path=_opt_str(d, "toFieldPath", where),
            constant_value=_parse_constant_value(d.get("constantValue"), where),
        )

    transforms = [
        parse_transform(t, f"{where}.transforms[{n}]")
        for n, t in enumerate(_list_of_mappings(d.get("transforms"), f"{where}.transforms"))
    ]
    cls = FromCompositeFieldPathPatch if ptype is PatchType.FROM_COMPOSITE_FIELD_PATH else ToCompositeFieldPathPatch
    return cls(
        from_field_path=_opt_str(d, "fromFieldPath", where),
        to_field_path=_opt_str(d, "toFieldPath", where),
        policy=_parse_policy(d.get("policy"), where),
        transforms=transforms,
    )


def _parse_patches(v: Any, where: str) -> List[Patch]:
    return [parse_patch(p, f"{where}[{n}]") for n, p in enumerate(_list_of_mappings(v, where))]


# -----------------------------
# composition
# -----------------------------

def parse_composition_spec(data: Any) -> CompositionSpec:
    """Valida e materializa uma CompositionSpec a partir da forma serializada."""
    _expect(isinstance(data, dict), "composition must be a mapping/dict")

    patch_sets: List[PatchSet] = []
    seen: set[str] = set()
    for n, ps in enumerate(_list_of_mappings(data.get("patchSets"), "patchSets")):
        name = ps.get("name")
        _expect(isinstance(name, str) and bool(name.strip()), f"patchSets[{n}].name is required")
        _expect(name not in seen, f"duplicate patch set name: {name}")
        seen.add(name)
        patch_sets.append(PatchSet(name=name, patches=_parse_patches(ps.get("patches"), f"patchSets[{n}].patches")))

    resources: List[ComposedTemplate] = []
    for n, r in enumerate(_list_of_mappings(data.get("resources"), "resources")):
        base = r.get("base") or {}
        _expect(isinstance(base, dict), f"resources[{n}].base must be a mapping")
        resources.append(
            ComposedTemplate(
                name=_opt_str(r, "name", f"resources[{n}]"),
                base=base,
                patches=_parse_patches(r.get("patches"), f"resources[{n}].patches"),
            )
        )

    return CompositionSpec(patch_sets=patch_sets, resources=resources)
