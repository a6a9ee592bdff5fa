# tests/conftest.py
"""
Fixtures compartilhados para testes do Composition Patch.

As fixtures fornecem objetos composite/composed pequenos e determinísticos,
documentos de composition em YAML (como string, sem I/O) e um RenderContext
com identidade fixa.

Invariantes:
    - Nenhuma fixture realiza I/O
    - Cada teste recebe cópias novas (objetos são mutados pelos patches)
"""

import pytest
from datetime import datetime, timezone


@pytest.fixture
def composite() -> dict:
    """Composite com labels e parâmetros, no formato de árvore dict/list."""
    return {
        "objectMeta": {
            "name": "cp",
            "labels": {"Test": "blah"},
        },
        "spec": {
            "parameters": {"region": "us", "size": 3, "test": "value"},
        },
    }


@pytest.fixture
def composed() -> dict:
    return {"objectMeta": {"name": "cd"}}


@pytest.fixture
def composition_defaults_yaml() -> str:
    """Composition base com dois patch sets e um template que referencia ambos."""
    return """\
patchSets:
  - name: common
    patches:
      - type: FromCompositeFieldPath
        fromFieldPath: objectMeta.labels
      - type: FromConstantValue
        toFieldPath: objectMeta.generateName
        constantValue:
          type: string
          string: prefix-
  - name: sizing
    patches:
      - fromFieldPath: spec.parameters.size
        toFieldPath: spec.forProvider.storageGB
        transforms:
          - type: math
            math:
              multiply: 10
resources:
  - name: bucket
    base:
      apiVersion: storage.example.org/v1
      kind: Bucket
    patches:
      - type: PatchSet
        patchSetName: common
      - type: FromCompositeFieldPath
        fromFieldPath: spec.parameters.region
        toFieldPath: spec.forProvider.location
        transforms:
          - type: map
            map:
              us: us-east-1
              eu: eu-west-1
      - type: PatchSet
        patchSetName: sizing
"""


@pytest.fixture
def composition_local_yaml() -> str:
    """Override local: troca a lista de patch sets inteira (listas não são mescladas)."""
    return """\
patchSets:
  - name: common
    patches:
      - type: FromCompositeFieldPath
        fromFieldPath: objectMeta.name
        toFieldPath: objectMeta.labels.owner
  - name: sizing
    patches: []
"""


@pytest.fixture
def render_ctx():
    """RenderContext com run_id e created_at fixos."""
    from composition_patch.core.render.context import RenderContext

    return RenderContext(
        run_id="render-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )
