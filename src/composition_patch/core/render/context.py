# src/composition_patch/core/render/context.py
"""
Contexto de renderização.

O `RenderContext` acompanha uma passada de renderização (uma chamada do
controller sobre um composite) e guarda:
    - identidade da passada (run_id, created_at)
    - metadados livres (`meta`)
    - eventos de log estruturados, um por patch
    - warnings por template

As funções de resolução de patches não registram nada; apenas o renderer
escreve neste contexto, e só quando um contexto é informado.

Invariantes:
    - Eventos sempre incluem `run_id` e `template`
    - Warnings são agrupados por nome de template
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass
class RenderContext:
    """Contexto de uma passada de renderização."""

    run_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    def log(self, *, template: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "template": template,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, template: str, message: str) -> None:
        if template not in self.warnings:
            self.warnings[template] = []
        self.warnings[template].append(message)
