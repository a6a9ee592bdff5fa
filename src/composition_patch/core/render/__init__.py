"""Renderização: aplicação das listas de patches e log estruturado por passada."""

from .context import RenderContext  # noqa: F401
from .renderer import (  # noqa: F401
    FROM_COMPOSITE_PATCH_TYPES,
    TO_COMPOSITE_PATCH_TYPES,
    apply_patches,
    apply_to_composite,
    render,
    render_composed,
)
