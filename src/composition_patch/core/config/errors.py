# src/composition_patch/core/config/errors.py
"""
Exceções da camada de configuração (carregamento de compositions).

Todas herdam de `ConfigError`. Representam falhas estruturais do arquivo
(ausente, formato desconhecido, root inválido, parse) ou do merge, e não
erros de resolução de patches.
"""


class ConfigError(Exception):
    """Exceção base para erros de carregamento de composition."""


class CompositionFileNotFoundError(ConfigError):
    """
    O arquivo base da composition não existe.

    O arquivo local (override) é opcional e sua ausência não é erro.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa (`dict`)."""


class ConfigParseError(ConfigError):
    """Falha de sintaxe ao interpretar YAML/JSON."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"resources": [...]}
        - override: {"resources": "bucket"}
    """

    def __init__(self, message: str, key_path: str = "") -> None:
        super().__init__(message)
        self.key_path = key_path
