"""Field path: leitura/escrita tipada de valores em árvores dict/list."""

from .errors import (  # noqa: F401
    FieldNotFoundError,
    FieldPathError,
    FieldPathTypeError,
    InvalidFieldPathError,
    is_not_found,
)
from .paved import Paved, Segment, get_value, parse_path, set_value  # noqa: F401
