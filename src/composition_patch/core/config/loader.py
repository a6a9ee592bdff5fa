# src/composition_patch/core/config/loader.py
"""
Loader de compositions.

A composition efetiva é resolvida a partir de:
    - um arquivo base (obrigatório)
    - um arquivo local de overrides (opcional)

Responsabilidades do módulo:
    - Carregar arquivos em YAML ou JSON
    - Validar o tipo raiz
    - Resolver o documento final via deep-merge
    - Materializar a CompositionSpec tipada (`schema.parse_composition_spec`)

Limites explícitos:
    - Não faz inlining de patch sets (responsabilidade do chamador/renderer)
    - Não aplica patches
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from composition_patch.core.composition.schema import parse_composition_spec
from composition_patch.core.composition.types import CompositionSpec

from .merge import deep_merge
from .errors import (
    CompositionFileNotFoundError,
    ConfigParseError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de composition e valida sua estrutura básica.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        CompositionFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        ConfigParseError: Se o conteúdo não puder ser interpretado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise CompositionFileNotFoundError(f"Arquivo de composition não encontrado: {path}")

    suffix = path.suffix.lower()

    try:
        if suffix in {".yaml", ".yml"}:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)

        elif suffix == ".json":
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)

        else:
            raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigParseError(f"{path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Composition root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_composition_document(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """Documento resolvido (defaults + local), ainda na forma serializada."""
    effective = _load_file(Path(defaults_path))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


def load_composition(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> CompositionSpec:
    """
    Carrega e materializa a composition efetiva.

    Args:
        defaults_path (str): Caminho para o arquivo base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        CompositionSpec: composition tipada, ainda não inlined.

    Raises:
        ConfigError: falhas de arquivo, formato, parse ou merge.
        CompositionValidationError: documento estruturalmente inválido.
        InvalidPatchTypeError, TransformTypeNotSupportedError,
        TransformConfigRequiredError: tags ou configurações desconhecidas.
    """
    doc = load_composition_document(defaults_path=defaults_path, local_path=local_path)
    return parse_composition_spec(doc)
