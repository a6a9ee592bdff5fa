# tests/core/config/test_loader.py
"""
Testes do loader de compositions (load_composition).

Os testes asseguram que:
- o arquivo base é obrigatório e o local é opcional
- YAML e JSON são aceitos; outras extensões são rejeitadas
- root não-dict e sintaxe inválida geram erros tipados
- o override local é aplicado via deep-merge antes do parse
"""

import json

import pytest

try:
    from composition_patch.core.composition import FromCompositeFieldPathPatch, PatchSetPatch
    from composition_patch.core.config import (
        CompositionFileNotFoundError,
        ConfigParseError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
        load_composition,
        load_composition_document,
    )
    from composition_patch.core.errors import CompositionValidationError
except Exception as e:  # noqa: BLE001
    load_composition = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing composition loader API. Implement:"
            "- src/composition_patch/core/config/loader.py (load_composition)"
            "- src/composition_patch/core/config/errors.py"
            f"Import error: {_IMPORT_ERR}"
        )


def test_defaults_required(tmp_path):
    _require_imports()
    with pytest.raises(CompositionFileNotFoundError):
        load_composition(defaults_path=str(tmp_path / "missing.yaml"))


def test_load_yaml(tmp_path, composition_defaults_yaml):
    _require_imports()
    p = tmp_path / "composition.yaml"
    p.write_text(composition_defaults_yaml, encoding="utf-8")

    spec = load_composition(defaults_path=str(p))
    assert [ps.name for ps in spec.patch_sets] == ["common", "sizing"]
    assert isinstance(spec.resources[0].patches[0], PatchSetPatch)


def test_load_json(tmp_path):
    _require_imports()
    p = tmp_path / "composition.json"
    p.write_text(
        json.dumps({"resources": [{"name": "r", "patches": [{"fromFieldPath": "spec.a"}]}]}),
        encoding="utf-8",
    )
    spec = load_composition(defaults_path=str(p))
    assert spec.resources[0].patches == [FromCompositeFieldPathPatch(from_field_path="spec.a")]


def test_empty_file_is_empty_composition(tmp_path):
    _require_imports()
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    spec = load_composition(defaults_path=str(p))
    assert spec.patch_sets == []
    assert spec.resources == []


def test_unsupported_format(tmp_path):
    _require_imports()
    p = tmp_path / "composition.toml"
    p.write_text("a = 1", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_composition(defaults_path=str(p))


def test_root_must_be_mapping(tmp_path):
    _require_imports()
    p = tmp_path / "composition.yaml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_composition(defaults_path=str(p))


def test_parse_error(tmp_path):
    _require_imports()
    p = tmp_path / "composition.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigParseError):
        load_composition(defaults_path=str(p))


def test_local_override_is_merged(tmp_path, composition_defaults_yaml, composition_local_yaml):
    _require_imports()
    d = tmp_path / "composition.yaml"
    d.write_text(composition_defaults_yaml, encoding="utf-8")
    local = tmp_path / "composition.local.yaml"
    local.write_text(composition_local_yaml, encoding="utf-8")

    doc = load_composition_document(defaults_path=str(d), local_path=str(local))
    assert doc["patchSets"][0]["patches"][0]["toFieldPath"] == "objectMeta.labels.owner"
    assert doc["patchSets"][1]["patches"] == []
    # resources não estão no override: preservados
    assert doc["resources"][0]["name"] == "bucket"


def test_missing_local_is_ignored(tmp_path, composition_defaults_yaml):
    _require_imports()
    d = tmp_path / "composition.yaml"
    d.write_text(composition_defaults_yaml, encoding="utf-8")
    spec = load_composition(defaults_path=str(d), local_path=str(tmp_path / "nope.yaml"))
    assert len(spec.resources) == 1


def test_structural_error_surfaces_from_schema(tmp_path):
    _require_imports()
    p = tmp_path / "composition.yaml"
    p.write_text("resources: bucket\n", encoding="utf-8")
    with pytest.raises(CompositionValidationError):
        load_composition(defaults_path=str(p))
