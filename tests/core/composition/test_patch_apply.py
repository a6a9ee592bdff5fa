# tests/core/composition/test_patch_apply.py
"""
Testes da aplicação de um patch (apply_patch).

Os testes asseguram que:
- campos obrigatórios por tipo de patch são validados
- tipos inválidos (incluindo PatchSet não inlined) são rejeitados
- FromCompositeFieldPath copia composite -> composed (toFieldPath default = fromFieldPath)
- ToCompositeFieldPath copia composed -> composite
- a política de campo opcional/obrigatório é respeitada
- o filtro `only` transforma patches excluídos em no-op
- falhas na cadeia de transforms impedem a escrita
"""

import copy

import pytest

try:
    from composition_patch.core.composition import (
        ConstantType,
        ConstantValue,
        ConvertTransform,
        FromCompositeFieldPathPatch,
        FromConstantValuePatch,
        FromFieldPathPolicy,
        MapTransform,
        MathTransform,
        PatchPolicy,
        PatchSetPatch,
        PatchType,
        StringTransform,
        ToCompositeFieldPathPatch,
        apply_patch,
    )
    from composition_patch.core.errors import (
        ConstantValueRequiredError,
        ConversionFailedError,
        InvalidPatchTypeError,
        MapKeyNotFoundError,
        RequiredFieldError,
        RequiredValueError,
    )
    from composition_patch.core.fieldpath import FieldNotFoundError, FieldPathTypeError
except Exception as e:  # noqa: BLE001
    apply_patch = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing patch API. Implement:"
            "- src/composition_patch/core/composition/patch.py (apply_patch)"
            f"Import error: {_IMPORT_ERR}"
        )


def test_from_composite_requires_from_field_path(composite, composed):
    _require_imports()
    with pytest.raises(RequiredFieldError) as exc:
        apply_patch(FromCompositeFieldPathPatch(), composite, composed)
    assert exc.value.field_name == "fromFieldPath"
    assert exc.value.patch_type == "FromCompositeFieldPath"


def test_to_composite_requires_from_field_path(composite, composed):
    _require_imports()
    with pytest.raises(RequiredFieldError) as exc:
        apply_patch(ToCompositeFieldPathPatch(), composite, composed)
    assert exc.value.patch_type == "ToCompositeFieldPath"


def test_invalid_patch_type(composite, composed):
    _require_imports()

    class UnknownPatch:
        type = "invalid-patchtype"

    with pytest.raises(InvalidPatchTypeError) as exc:
        apply_patch(UnknownPatch(), composite, composed)
    assert exc.value.patch_type == "invalid-patchtype"


def test_patch_set_is_invalid_at_resolution(composite, composed):
    """PatchSet só existe antes do inlining."""
    _require_imports()
    with pytest.raises(InvalidPatchTypeError) as exc:
        apply_patch(PatchSetPatch(patch_set_name="common"), composite, composed)
    assert exc.value.patch_type == "PatchSet"


def test_valid_from_composite_patch(composite, composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(from_field_path="objectMeta.labels", to_field_path="objectMeta.labels")
    apply_patch(patch, composite, composed)
    assert composed == {"objectMeta": {"name": "cd", "labels": {"Test": "blah"}}}


def test_default_to_field_path(composite, composed):
    _require_imports()
    before = copy.deepcopy(composite)
    apply_patch(FromCompositeFieldPathPatch(from_field_path="objectMeta.labels"), composite, composed)
    assert composed == {"objectMeta": {"name": "cd", "labels": {"Test": "blah"}}}
    assert composite == before


def test_copied_value_does_not_alias_source(composite, composed):
    _require_imports()
    apply_patch(FromCompositeFieldPathPatch(from_field_path="objectMeta.labels"), composite, composed)
    composed["objectMeta"]["labels"]["Test"] = "changed"
    assert composite["objectMeta"]["labels"] == {"Test": "blah"}


def test_missing_optional_field_path_is_noop(composed):
    _require_imports()
    composite = {"objectMeta": {"name": "cp"}}
    patch = FromCompositeFieldPathPatch(from_field_path="objectMeta.labels", to_field_path="objectMeta.labels")
    apply_patch(patch, composite, composed)
    assert composed == {"objectMeta": {"name": "cd"}}


def test_missing_required_field_path_propagates(composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(
        from_field_path="wat",
        to_field_path="wat",
        policy=PatchPolicy(from_field_path=FromFieldPathPolicy.REQUIRED),
    )
    with pytest.raises(FieldNotFoundError) as exc:
        apply_patch(patch, {}, composed)
    assert exc.value.path == "wat"
    assert composed == {"objectMeta": {"name": "cd"}}


def test_non_not_found_read_error_propagates_with_optional_policy(composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(from_field_path="spec.field")
    with pytest.raises(FieldPathTypeError):
        apply_patch(patch, {"spec": "scalar"}, composed)


def test_filter_excludes_patch_type(composite, composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(from_field_path="objectMeta.labels", to_field_path="objectMeta.labels")
    apply_patch(patch, composite, composed, only=[PatchType.PATCH_SET])
    assert composed == {"objectMeta": {"name": "cd"}}


def test_filter_includes_patch_type(composite, composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(from_field_path="objectMeta.labels", to_field_path="objectMeta.labels")
    apply_patch(patch, composite, composed, only=[PatchType.FROM_COMPOSITE_FIELD_PATH])
    assert composed["objectMeta"]["labels"] == {"Test": "blah"}


def test_filter_skips_before_validation(composite, composed):
    """Um patch filtrado não é validado (campos obrigatórios ausentes não importam)."""
    _require_imports()
    apply_patch(FromConstantValuePatch(), composite, composed, only=[PatchType.TO_COMPOSITE_FIELD_PATH])
    assert composed == {"objectMeta": {"name": "cd"}}


def test_empty_filter_allows_all(composite, composed):
    _require_imports()
    apply_patch(FromCompositeFieldPathPatch(from_field_path="objectMeta.labels"), composite, composed, only=[])
    assert composed["objectMeta"]["labels"] == {"Test": "blah"}


def test_valid_to_composite_patch():
    """Direção: lê do composed em fromFieldPath, escreve no composite em toFieldPath."""
    _require_imports()
    composite = {"objectMeta": {"name": "cp"}}
    composed = {"objectMeta": {"name": "cd", "labels": {"Test": "blah"}}}
    patch = ToCompositeFieldPathPatch(from_field_path="objectMeta.labels", to_field_path="objectMeta.labels")
    apply_patch(patch, composite, composed)
    assert composite == {"objectMeta": {"name": "cp", "labels": {"Test": "blah"}}}
    assert composed == {"objectMeta": {"name": "cd", "labels": {"Test": "blah"}}}


def test_to_composite_distinct_paths():
    _require_imports()
    composite = {"status": {}}
    composed = {"status": {"atProvider": {"arn": "arn:aws:s3:::bucket"}}}
    patch = ToCompositeFieldPathPatch(from_field_path="status.atProvider.arn", to_field_path="status.bucketArn")
    apply_patch(patch, composite, composed)
    assert composite == {"status": {"bucketArn": "arn:aws:s3:::bucket"}}


def test_to_composite_missing_optional_is_noop():
    _require_imports()
    composite = {"status": {}}
    patch = ToCompositeFieldPathPatch(from_field_path="status.atProvider.arn", to_field_path="status.bucketArn")
    apply_patch(patch, composite, {})
    assert composite == {"status": {}}


def test_constant_patch_requires_to_field_path(composite, composed):
    _require_imports()
    with pytest.raises(RequiredFieldError) as exc:
        apply_patch(FromConstantValuePatch(), composite, composed)
    assert exc.value.field_name == "toFieldPath"
    assert exc.value.patch_type == "FromConstantValue"


def test_constant_patch_requires_constant_value(composite, composed):
    _require_imports()
    with pytest.raises(ConstantValueRequiredError):
        apply_patch(FromConstantValuePatch(to_field_path="objectMeta.generateName"), composite, composed)


def test_constant_patch_writes_value(composite, composed):
    _require_imports()
    patch = FromConstantValuePatch(
        to_field_path="objectMeta.generateName",
        constant_value=ConstantValue(type=ConstantType.STRING, string_value="prefix"),
    )
    apply_patch(patch, composite, composed)
    assert composed == {"objectMeta": {"name": "cd", "generateName": "prefix"}}
    assert composite["objectMeta"]["labels"] == {"Test": "blah"}


def test_constant_patch_propagates_constant_error(composite, composed):
    _require_imports()
    patch = FromConstantValuePatch(to_field_path="spec.replicas", constant_value=ConstantValue(type="int"))
    with pytest.raises(RequiredValueError):
        apply_patch(patch, composite, composed)
    assert "spec" not in composed


def test_transforms_applied_before_write(composite, composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(
        from_field_path="spec.parameters.size",
        to_field_path="spec.forProvider.storage",
        transforms=[MathTransform(multiply=10), StringTransform(format="%dGi")],
    )
    apply_patch(patch, composite, composed)
    assert composed["spec"]["forProvider"]["storage"] == "30Gi"


def test_transform_failure_prevents_write(composite, composed):
    _require_imports()
    patch = FromCompositeFieldPathPatch(
        from_field_path="spec.parameters.region",
        to_field_path="spec.forProvider.location",
        transforms=[MapTransform(pairs={"eu": "eu-west-1"})],
    )
    before = copy.deepcopy(composed)
    with pytest.raises(MapKeyNotFoundError):
        apply_patch(patch, composite, composed)
    assert composed == before


def test_non_finite_value_conversion_is_a_data_error(composed):
    _require_imports()
    composite = {"spec": {"parameters": {"ratio": float("inf")}}}
    patch = FromCompositeFieldPathPatch(
        from_field_path="spec.parameters.ratio",
        to_field_path="spec.forProvider.ratio",
        transforms=[ConvertTransform(to_type="int")],
    )
    before = copy.deepcopy(composed)
    with pytest.raises(ConversionFailedError):
        apply_patch(patch, composite, composed)
    assert composed == before
