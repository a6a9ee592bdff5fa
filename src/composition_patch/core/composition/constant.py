"""
Resolução de valores constantes tipados.

`ConstantValue` mantém o tag (`type`) e um payload por tipo. O tag decide
qual payload é autoritativo; um tag sem o payload correspondente é erro
de configuração.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from composition_patch.core.errors import (
    ConstantValueTypeNotDefinedError,
    ConstantValueTypeNotSupportedError,
    RequiredValueError,
)


class ConstantType(str, Enum):
    STRING = "string"
    INT = "int"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


@dataclass
class ConstantValue:
    type: Union[ConstantType, str, None] = None
    string_value: Optional[str] = None
    int_value: Optional[int] = None
    bool_value: Optional[bool] = None

    def get_value(self) -> Any:
        if self.type is None or self.type == "":
            raise ConstantValueTypeNotDefinedError()

        try:
            ctype = ConstantType(self.type)
        except ValueError:
            raise ConstantValueTypeNotSupportedError(self.type) from None

        if ctype is ConstantType.STRING:
            value: Any = self.string_value
        elif ctype is ConstantType.INT:
            value = self.int_value
        else:
            value = self.bool_value

        if value is None:
            raise RequiredValueError(ctype.value)
        return value
