"""Erros do colaborador de field path.

`FieldNotFoundError` é o tipo distinguível de "campo ausente". A política de
patches opcionais classifica erros por tipo, nunca pelo texto da mensagem.
"""

from __future__ import annotations

from typing import Any


class FieldPathError(Exception):
    """Erro base de leitura/escrita por field path."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message)
        self.path = path


class InvalidFieldPathError(FieldPathError):
    """Path mal formado (segmento vazio, colchete não fechado...)."""


class FieldNotFoundError(FieldPathError):
    """Nenhum valor existe no path informado."""

    def __init__(self, path: str) -> None:
        super().__init__(f"{path}: no such field", path)


class FieldPathTypeError(FieldPathError):
    """O path atravessa um valor do tipo errado (ex.: índice em um mapa)."""


def is_not_found(err: Any) -> bool:
    return isinstance(err, FieldNotFoundError)
