# src/composition_patch/core/composition/transforms.py
"""
Pipeline de transforms de valores.

Um transform é uma função pura `valor -> valor`, parametrizada apenas pela
sua própria configuração. Os transforms de um patch são aplicados na ordem
declarada; cada um recebe a saída do anterior. Uma falha em qualquer passo
interrompe a cadeia e o valor não é escrito.

Tipos suportados (v1):
    - map: lookup de string em um mapa string -> string
    - math: multiplicação inteira
    - string: formatação printf (`%s`, `%d`, ...)
    - convert: conversão entre string, int, float e bool

`bool` nunca é tratado como inteiro, embora seja subclasse de `int` em Python.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Protocol, Sequence, Tuple, runtime_checkable

from composition_patch.core.errors import (
    ConversionFailedError,
    ConversionPairNotSupportedError,
    ConvertInputTypeNotSupportedError,
    MapKeyNotFoundError,
    MapTypeNotSupportedError,
    MathInputNonNumberError,
    MathNoMultiplierError,
)


class TransformType(str, Enum):
    MAP = "map"
    MATH = "math"
    STRING = "string"
    CONVERT = "convert"

    def __str__(self) -> str:
        return self.value


class ConvertType(str, Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"
    FLOAT = "float"

    def __str__(self) -> str:
        return self.value


# aliases aceitos em `toType`
_CONVERT_TYPE_ALIASES = {"float64": ConvertType.FLOAT, "int64": ConvertType.INT}


@runtime_checkable
class Transform(Protocol):
    """Contrato mínimo de um transform."""

    type: ClassVar[TransformType]

    def resolve(self, value: Any) -> Any:
        ...


def kind_of(value: Any) -> str:
    """Nome do tipo em runtime usado nas mensagens de erro."""
    if value is None:
        return "None"
    return type(value).__name__


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# -----------------------------
# map
# -----------------------------

@dataclass
class MapTransform:
    type: ClassVar[TransformType] = TransformType.MAP

    pairs: Dict[str, str] = field(default_factory=dict)

    def resolve(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise MapTypeNotSupportedError(kind_of(value))
        if value not in self.pairs:
            raise MapKeyNotFoundError(value)
        return self.pairs[value]


# -----------------------------
# math
# -----------------------------

@dataclass
class MathTransform:
    type: ClassVar[TransformType] = TransformType.MATH

    multiply: Optional[int] = None

    def resolve(self, value: Any) -> Any:
        if self.multiply is None:
            raise MathNoMultiplierError()
        if not _is_integer(value):
            raise MathInputNonNumberError(kind_of(value))
        return int(value) * int(self.multiply)


# -----------------------------
# string
# -----------------------------

# "%%" é um token próprio: a varredura nunca começa um verbo no segundo "%"
_FMT_TOKEN = re.compile(r"%%|%[-#0 +]*(?:\d+|\*)?(?:\.(?:\d+|\*))?[a-zA-Z]")


def _degraded_format(fmt: str, value: Any) -> str:
    """
    Formatação sem erro para verbo incompatível com o valor.

    O primeiro verbo vira `str(value)`, cada "%%" vira "%" e os demais
    verbos ficam como estão.
    """
    replaced = False

    def _sub(m: re.Match) -> str:
        nonlocal replaced
        token = m.group(0)
        if token == "%%":
            return "%"
        if replaced:
            return token
        replaced = True
        return str(value)

    return _FMT_TOKEN.sub(_sub, fmt)


@dataclass
class StringTransform:
    type: ClassVar[TransformType] = TransformType.STRING

    format: str = "%s"

    def resolve(self, value: Any) -> Any:
        try:
            return self.format % (value,)
        except (TypeError, ValueError, OverflowError):
            return _degraded_format(self.format, value)


# -----------------------------
# convert
# -----------------------------

_TRUE_LITERALS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_LITERALS = {"0", "f", "F", "FALSE", "false", "False"}


def _parse_bool(value: str) -> bool:
    if value in _TRUE_LITERALS:
        return True
    if value in _FALSE_LITERALS:
        return False
    raise ConversionFailedError(value, ConvertType.BOOL.value)


# inteiro decimal estrito: sem espaços, sem "_", dígitos ASCII
_INT_LITERAL = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: str) -> int:
    if not _INT_LITERAL.fullmatch(value):
        raise ConversionFailedError(value, ConvertType.INT.value)
    return int(value, 10)


def _parse_float(value: str) -> float:
    if value != value.strip() or "_" in value:
        raise ConversionFailedError(value, ConvertType.FLOAT.value)
    try:
        return float(value)
    except ValueError:
        raise ConversionFailedError(value, ConvertType.FLOAT.value) from None


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        raise ConversionFailedError(value, ConvertType.FLOAT.value) from None


def _float_to_int(value: float) -> int:
    # trunca em direção a zero; inf e nan não têm inteiro correspondente
    try:
        return int(value)
    except (OverflowError, ValueError):
        raise ConversionFailedError(value, ConvertType.INT.value) from None


def _format_float(value: float) -> str:
    """Decimal mais curto em notação fixa: 3.0 -> "3", 1e20 -> "100000000000000000000"."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


_CONVERSIONS: Dict[Tuple[ConvertType, ConvertType], Callable[[Any], Any]] = {
    (ConvertType.STRING, ConvertType.INT): _parse_int,
    (ConvertType.STRING, ConvertType.BOOL): _parse_bool,
    (ConvertType.STRING, ConvertType.FLOAT): _parse_float,
    (ConvertType.INT, ConvertType.STRING): str,
    (ConvertType.INT, ConvertType.BOOL): lambda v: v == 1,
    (ConvertType.INT, ConvertType.FLOAT): _int_to_float,
    (ConvertType.BOOL, ConvertType.STRING): _format_bool,
    (ConvertType.BOOL, ConvertType.INT): lambda v: 1 if v else 0,
    (ConvertType.BOOL, ConvertType.FLOAT): lambda v: 1.0 if v else 0.0,
    (ConvertType.FLOAT, ConvertType.STRING): _format_float,
    (ConvertType.FLOAT, ConvertType.INT): _float_to_int,
    (ConvertType.FLOAT, ConvertType.BOOL): lambda v: v == 1.0,
}


def _convert_kind(value: Any) -> Optional[ConvertType]:
    # bool antes de int: bool é subclasse de int
    if isinstance(value, bool):
        return ConvertType.BOOL
    if isinstance(value, int):
        return ConvertType.INT
    if isinstance(value, float):
        return ConvertType.FLOAT
    if isinstance(value, str):
        return ConvertType.STRING
    return None


def _target_type(to_type: Any) -> Optional[ConvertType]:
    if isinstance(to_type, ConvertType):
        return to_type
    if to_type in _CONVERT_TYPE_ALIASES:
        return _CONVERT_TYPE_ALIASES[to_type]
    try:
        return ConvertType(to_type)
    except ValueError:
        return None


@dataclass
class ConvertTransform:
    type: ClassVar[TransformType] = TransformType.CONVERT

    to_type: str = ConvertType.STRING.value

    def resolve(self, value: Any) -> Any:
        from_kind = _convert_kind(value)
        if from_kind is None:
            raise ConvertInputTypeNotSupportedError(kind_of(value))

        target = _target_type(self.to_type)
        if target is from_kind:
            return value

        conv = _CONVERSIONS.get((from_kind, target)) if target is not None else None
        if conv is None:
            raise ConversionPairNotSupportedError(from_kind.value, str(self.to_type))
        return conv(value)


def resolve_transforms(transforms: Sequence[Transform], value: Any) -> Any:
    """Aplica os transforms em ordem; a primeira falha é propagada sem alteração."""
    out = value
    for t in transforms:
        out = t.resolve(out)
    return out
