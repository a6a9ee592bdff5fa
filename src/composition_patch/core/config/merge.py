# src/composition_patch/core/config/merge.py
"""
Deep-merge de documentos de composition.

Uma composition pode ser declarada em um arquivo base (defaults) e ajustada
por um arquivo local. Este módulo resolve o documento final antes do parse
(`schema.parse_composition_spec`).

Política de merge (v1):
    - mapa + mapa → merge recursivo por chave
    - lista → sobrescrita total, sem merge elemento a elemento
      (`patchSets`, `resources`, `patches`, `transforms`)
    - escalar → sobrescrita direta
    - None em qualquer lado → sobrescrita direta
    - mapa/lista/escalar trocando de forma → `ConfigTypeConflictError`
      com o caminho completo da chave

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _shape(value: Any) -> str:
    if isinstance(value, dict):
        return "mapping"
    if isinstance(value, list):
        return "list"
    return type(value).__name__


def _child_path(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)


def _merge_value(base_value: Any, override_value: Any, path: str) -> Any:
    if base_value is None or override_value is None:
        return deepcopy(override_value)

    if isinstance(base_value, dict) and isinstance(override_value, dict):
        return _merge_mapping(base_value, override_value, path)

    base_shape, override_shape = _shape(base_value), _shape(override_value)
    if base_shape != override_shape:
        raise ConfigTypeConflictError(
            f"cannot merge '{path}': {base_shape} in defaults, {override_shape} in override",
            key_path=path,
        )

    return deepcopy(override_value)


def _merge_mapping(base: Dict[str, Any], override: Dict[str, Any], path: str) -> Dict[str, Any]:
    result: Dict[str, Any] = deepcopy(base)
    for key, override_value in override.items():
        child = _child_path(path, key)
        if key in result:
            result[key] = _merge_value(result[key], override_value, child)
        else:
            result[key] = deepcopy(override_value)
    return result


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Mescla o documento local sobre o documento base.

    Args:
        base (Dict[str, Any]): Documento base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Novo documento resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se a mesma chave mudar de forma; `key_path`
            aponta a chave (ex.: `patchSets`, `meta.labels`).
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"composition documents must be mappings, got {_shape(base)} and {_shape(override)}",
            key_path="",
        )
    return _merge_mapping(base, override, "")
