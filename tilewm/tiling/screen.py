"""
tilewm.tiling.screen - Pantalla fisica con su seleccion de layout.

Cada Screen tiene un id asignado por el adaptador, una lista fija de
layouts disponibles y el layout activo. La lista no cambia despues de
construida; solo se rota el layout activo.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from tilewm.tiling.layouts import (
    Layout,
    MonocleLayout,
    SpreadLayout,
    StairLayout,
    TileLayout,
)

log = logging.getLogger(__name__)


def default_layouts() -> list[Layout]:
    """Crea una copia fresca de los layouts por defecto."""
    return [
        TileLayout(),
        MonocleLayout(),
        SpreadLayout(),
        StairLayout(),
    ]


class Screen:
    """
    Una pantalla fisica gestionada por el engine.

    Cada pantalla tiene sus propias instancias de layout, de modo que el
    estado de cada layout (ratio, espaciado) es independiente por pantalla.
    """

    def __init__(
        self,
        screen_id: int,
        layouts: Optional[Sequence[Layout]] = None,
    ) -> None:
        self._id = screen_id
        self._layouts: tuple[Layout, ...] = tuple(
            layouts if layouts is not None else default_layouts()
        )
        self.layout: Optional[Layout] = self._layouts[0] if self._layouts else None

    @property
    def id(self) -> int:
        return self._id

    @property
    def layouts(self) -> tuple[Layout, ...]:
        return self._layouts

    def cycle_layout(self, step: int = 1) -> Optional[Layout]:
        """Avanza el layout activo *step* posiciones (circular)."""
        if not self._layouts:
            return None

        try:
            index = self._layouts.index(self.layout)
        except ValueError:
            index = 0

        self.layout = self._layouts[(index + step) % len(self._layouts)]
        log.info("Screen %d layout -> %s", self._id, self.layout.name)
        return self.layout

    def __repr__(self) -> str:
        name = self.layout.name if self.layout is not None else "none"
        return f"Screen(id={self._id}, layout={name})"
