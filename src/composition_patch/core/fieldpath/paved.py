# src/composition_patch/core/fieldpath/paved.py
"""
Leitura e escrita de valores por field path sobre árvores de dados.

Um objeto "paved" é uma árvore de `dict`/`list`/escalares (o formato que
YAML e JSON produzem). O path é uma string com segmentos separados por
ponto e índices entre colchetes:

    spec.parameters.test
    spec.containers[0].name
    metadata.labels[app.example.io/name]

Regras do parser:
    - `[<inteiro>]` é índice de lista
    - `[<texto>]` é chave de mapa (permite pontos no nome)
    - segmentos vazios e colchetes sem fechamento são inválidos
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from .errors import FieldNotFoundError, FieldPathTypeError, InvalidFieldPathError


@dataclass(frozen=True)
class Segment:
    """Um passo do path: chave de mapa (`str`) ou índice de lista (`int`)."""

    key: Union[str, int]

    @property
    def is_index(self) -> bool:
        return isinstance(self.key, int)


def parse_path(path: str) -> List[Segment]:
    if not isinstance(path, str) or not path:
        raise InvalidFieldPathError("field path must be a non-empty string", str(path))

    segments: List[Segment] = []
    buf = ""
    i = 0
    # após "]" o próximo caractere deve ser "." ou "["
    after_bracket = False

    while i < len(path):
        ch = path[i]

        if ch == ".":
            if not buf and not after_bracket:
                raise InvalidFieldPathError(f"{path}: empty segment at position {i}", path)
            if buf:
                segments.append(Segment(buf))
                buf = ""
            after_bracket = False
            i += 1
            if i == len(path):
                raise InvalidFieldPathError(f"{path}: trailing period", path)
            continue

        if ch == "[":
            if buf:
                segments.append(Segment(buf))
                buf = ""
            end = path.find("]", i + 1)
            if end == -1:
                raise InvalidFieldPathError(f"{path}: unterminated '[' at position {i}", path)
            inner = path[i + 1:end]
            if not inner:
                raise InvalidFieldPathError(f"{path}: empty brackets at position {i}", path)
            if inner.isdigit():
                segments.append(Segment(int(inner)))
            else:
                segments.append(Segment(inner))
            after_bracket = True
            i = end + 1
            continue

        if ch == "]":
            raise InvalidFieldPathError(f"{path}: unexpected ']' at position {i}", path)

        if after_bracket:
            raise InvalidFieldPathError(f"{path}: expected '.' or '[' at position {i}", path)
        buf += ch
        i += 1

    if buf:
        segments.append(Segment(buf))

    return segments


class Paved:
    """Acesso por field path a um objeto `dict` (mutado in-place em `set_value`)."""

    def __init__(self, obj: Dict[str, Any]) -> None:
        if not isinstance(obj, dict):
            raise TypeError(f"paved object must be a dict, got {type(obj).__name__}")
        self.obj = obj

    def get_value(self, path: str) -> Any:
        current: Any = self.obj
        for seg in parse_path(path):
            if seg.is_index:
                if not isinstance(current, list):
                    raise FieldPathTypeError(f"{path}: {seg.key} is not an array index of an array", path)
                if seg.key >= len(current):
                    raise FieldNotFoundError(path)
                current = current[seg.key]
                continue

            if not isinstance(current, dict):
                raise FieldPathTypeError(f"{path}: {seg.key} is not a field of an object", path)
            if seg.key not in current:
                raise FieldNotFoundError(path)
            current = current[seg.key]

        return current

    def set_value(self, path: str, value: Any) -> None:
        segments = parse_path(path)
        current: Any = self.obj

        for n, seg in enumerate(segments):
            last = n == len(segments) - 1
            nxt = None if last else segments[n + 1]

            if seg.is_index:
                if not isinstance(current, list):
                    raise FieldPathTypeError(f"{path}: {seg.key} is not an array index of an array", path)
                while len(current) <= seg.key:
                    current.append(None)
            elif not isinstance(current, dict):
                raise FieldPathTypeError(f"{path}: {seg.key} is not a field of an object", path)

            if last:
                current[seg.key] = value
                return

            child = current[seg.key] if seg.is_index else current.get(seg.key)
            if child is None:
                child = [] if nxt.is_index else {}
                current[seg.key] = child
            current = child


def get_value(obj: Dict[str, Any], path: str) -> Any:
    return Paved(obj).get_value(path)


def set_value(obj: Dict[str, Any], path: str, value: Any) -> None:
    Paved(obj).set_value(path, value)
