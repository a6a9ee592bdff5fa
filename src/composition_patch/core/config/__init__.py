# src/composition_patch/core/config/__init__.py

"""
Camada de configuração: carregamento de compositions a partir de arquivos.

Responsabilidades do pacote:
    - Carregamento de YAML/JSON (base + overrides locais)
    - Resolução do documento final via deep-merge determinístico
    - Exceções tipadas para falhas estruturais de arquivo
"""

from .errors import (  # noqa: F401
    CompositionFileNotFoundError,
    ConfigError,
    ConfigParseError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_composition, load_composition_document  # noqa: F401
from .merge import deep_merge  # noqa: F401
