"""
tilewm.tiling.layouts - Layouts de tiling para organizar ventanas.

Cada layout implementa la interfaz base `Layout`. Recibe la lista
ordenada de tiles tileables de una pantalla y su area disponible, y
escribe en cada tile su geometria destino. El indice 0 es el master.

Los layouts tambien pueden interceptar comandos de usuario propios
(ajustar ratio, espaciado...) devolviendo True en handle_user_input().

Layouts disponibles:
    - TileLayout    : Master a la izquierda, stack a la derecha
    - MonocleLayout : Todas las ventanas ocupan toda el area
    - SpreadLayout  : Ventanas como cartas abiertas en abanico horizontal
    - StairLayout   : Ventanas en escalera hacia abajo-derecha
    - ColumnsLayout : Columnas de igual ancho (no esta entre los de defecto)
"""

from __future__ import annotations

import abc
import enum
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tilewm.tiling.rect import Rect
from tilewm.tiling.userinput import UserInput

if TYPE_CHECKING:
    from tilewm.tiling.tile import Tile

log = logging.getLogger(__name__)


# ============================================================================
# LayoutType enum
# ============================================================================
class LayoutType(enum.Enum):
    """Identificador de cada tipo de layout."""
    TILE = "tile"
    MONOCLE = "monocle"
    SPREAD = "spread"
    STAIR = "stair"
    COLUMNS = "columns"


# ============================================================================
# Layout (clase base abstracta)
# ============================================================================
class Layout(abc.ABC):
    """
    Interfaz abstracta para un layout de tiling.

    apply() debe escribir `geometry` en cada tile recibido. El engine se
    encarga de llevar esa geometria a la ventana real.

    Parametros comunes:
        - gap: Pixeles de margen alrededor de cada ventana.
    """

    def __init__(self, gap: int = 0) -> None:
        self._gap = max(0, gap)

    @property
    def gap(self) -> int:
        return self._gap

    @gap.setter
    def gap(self, value: int) -> None:
        self._gap = max(0, value)

    # ------------------------------------------------------------------
    # Interfaz abstracta
    # ------------------------------------------------------------------
    @property
    @abc.abstractmethod
    def layout_type(self) -> LayoutType:
        """Retorna el tipo de layout."""
        ...

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Nombre legible del layout."""
        ...

    @abc.abstractmethod
    def apply(self, tiles: Sequence[Tile], area: Rect) -> None:
        """
        Calcula la geometria de cada tile dentro de *area*.

        Args:
            tiles: Tiles tileables de la pantalla, en orden (0 = master).
            area:  Area disponible de la pantalla.
        """
        ...

    def handle_user_input(self, user_input: UserInput) -> bool:
        """
        Permite al layout consumir un comando propio.

        Returns:
            True si el comando fue manejado y el engine no debe
            interpretarlo.
        """
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(gap={self._gap})"


# ============================================================================
# TileLayout - Master a la izquierda, stack a la derecha
# ============================================================================
class TileLayout(Layout):
    """
    Layout master-stack.

    Con tantas ventanas como masters (o menos): una sola columna.
    Con mas: los masters ocupan la columna izquierda segun master_ratio,
    y el resto se apila en filas iguales en la columna derecha.

    Esquema (1 master, 3 ventanas):
        +----------+------+
        |          |  2   |
        |    1     +------+
        | (master) |  3   |
        +----------+------+

    Comandos propios:
        Left / Right        -> encoger / crecer el master
        Increase / Decrease -> mas / menos ventanas master
    """

    RATIO_STEP = 0.05

    def __init__(
        self,
        master_ratio: float = 0.55,
        master_count: int = 1,
        gap: int = 0,
    ) -> None:
        super().__init__(gap=gap)
        self._master_ratio = max(0.1, min(0.9, master_ratio))
        self._master_count = max(1, master_count)

    @property
    def layout_type(self) -> LayoutType:
        return LayoutType.TILE

    @property
    def name(self) -> str:
        return "Tile"

    @property
    def master_ratio(self) -> float:
        return self._master_ratio

    @master_ratio.setter
    def master_ratio(self, value: float) -> None:
        self._master_ratio = max(0.1, min(0.9, value))

    @property
    def master_count(self) -> int:
        return self._master_count

    @master_count.setter
    def master_count(self, value: int) -> None:
        self._master_count = max(1, value)

    def apply(self, tiles: Sequence[Tile], area: Rect) -> None:
        count = len(tiles)
        if count == 0:
            return

        if count <= self._master_count:
            rects = area.slice_rows(count)
        else:
            master_area, stack_area = area.split_horizontal(self._master_ratio)
            rects = (
                master_area.slice_rows(self._master_count)
                + stack_area.slice_rows(count - self._master_count)
            )

        for tile, rect in zip(tiles, rects):
            tile.geometry = rect.pad(self._gap)

    def handle_user_input(self, user_input: UserInput) -> bool:
        if user_input == UserInput.LEFT:
            self.master_ratio = self._master_ratio - self.RATIO_STEP
        elif user_input == UserInput.RIGHT:
            self.master_ratio = self._master_ratio + self.RATIO_STEP
        elif user_input == UserInput.INCREASE:
            self.master_count = self._master_count + 1
        elif user_input == UserInput.DECREASE:
            self.master_count = self._master_count - 1
        else:
            return False

        log.debug(
            "Tile: master_ratio=%.2f master_count=%d",
            self._master_ratio,
            self._master_count,
        )
        return True

    def __repr__(self) -> str:
        return (
            f"TileLayout(master_ratio={self._master_ratio:.2f}, "
            f"master_count={self._master_count}, gap={self._gap})"
        )


# ============================================================================
# MonocleLayout - Todas las ventanas ocupan toda el area
# ============================================================================
class MonocleLayout(Layout):
    """
    Layout tipo 'monocle'.

    Todas las ventanas reciben el area completa y se apilan una sobre
    otra. Solo la ventana con foco es visible en la practica.
    """

    @property
    def layout_type(self) -> LayoutType:
        return LayoutType.MONOCLE

    @property
    def name(self) -> str:
        return "Monocle"

    def apply(self, tiles: Sequence[Tile], area: Rect) -> None:
        full = area.pad(self._gap)
        for tile in tiles:
            tile.geometry = full.clone()


# ============================================================================
# SpreadLayout - Cartas en abanico horizontal
# ============================================================================
class SpreadLayout(Layout):
    """
    Layout tipo 'spread'.

    Todas las ventanas tienen el mismo ancho y se desplazan a la derecha
    una fraccion `space` del area respecto a la anterior, como cartas
    abiertas en abanico. El desplazamiento se recorta para que ninguna
    carta quede mas angosta que la mitad del area.

    Esquema (3 ventanas):
        +--+--+------------+
        |1 |2 |     3      |
        |  |  |            |
        +--+--+------------+
    """

    SPACE_STEP = 0.01

    def __init__(self, space: float = 0.07, gap: int = 0) -> None:
        super().__init__(gap=gap)
        self._space = max(0.01, min(0.3, space))

    @property
    def layout_type(self) -> LayoutType:
        return LayoutType.SPREAD

    @property
    def name(self) -> str:
        return "Spread"

    @property
    def space(self) -> float:
        return self._space

    @space.setter
    def space(self, value: float) -> None:
        self._space = max(0.01, min(0.3, value))

    def apply(self, tiles: Sequence[Tile], area: Rect) -> None:
        count = len(tiles)
        if count == 0:
            return

        offset = int(area.width * self._space)
        if count > 1:
            offset = min(offset, (area.width // 2) // (count - 1))
        card_w = area.width - offset * (count - 1)

        for i, tile in enumerate(tiles):
            card = Rect(area.x + i * offset, area.y, card_w, area.height)
            tile.geometry = card.pad(self._gap)

    def handle_user_input(self, user_input: UserInput) -> bool:
        if user_input == UserInput.INCREASE:
            self.space = self._space + self.SPACE_STEP
        elif user_input == UserInput.DECREASE:
            self.space = self._space - self.SPACE_STEP
        else:
            return False
        return True


# ============================================================================
# StairLayout - Ventanas en escalera
# ============================================================================
class StairLayout(Layout):
    """
    Layout tipo 'stair' (apilado en cascada).

    Cada ventana se desplaza `space` pixeles hacia abajo y a la derecha
    respecto a la anterior; todas comparten el mismo tamano. El paso se
    reduce si la escalera no cabe en el area.
    """

    SPACE_STEP = 8

    def __init__(self, space: int = 24, gap: int = 0) -> None:
        super().__init__(gap=gap)
        self._space = max(0, space)

    @property
    def layout_type(self) -> LayoutType:
        return LayoutType.STAIR

    @property
    def name(self) -> str:
        return "Stair"

    @property
    def space(self) -> int:
        return self._space

    @space.setter
    def space(self, value: int) -> None:
        self._space = max(0, value)

    def apply(self, tiles: Sequence[Tile], area: Rect) -> None:
        count = len(tiles)
        if count == 0:
            return

        step = self._space
        if count > 1:
            step = min(step, (min(area.width, area.height) // 2) // (count - 1))
        total = step * (count - 1)

        for i, tile in enumerate(tiles):
            stair = Rect(
                area.x + i * step,
                area.y + i * step,
                area.width - total,
                area.height - total,
            )
            tile.geometry = stair.pad(self._gap)

    def handle_user_input(self, user_input: UserInput) -> bool:
        if user_input == UserInput.INCREASE:
            self.space = self._space + self.SPACE_STEP
        elif user_input == UserInput.DECREASE:
            self.space = self._space - self.SPACE_STEP
        else:
            return False
        return True


# ============================================================================
# ColumnsLayout - Columnas de igual ancho
# ============================================================================
class ColumnsLayout(Layout):
    """
    Layout de columnas iguales, de izquierda a derecha en orden.

    No forma parte de los layouts por defecto; se pasa explicitamente a
    Screen cuando se quiere.

    Esquema (3 ventanas):
        +------+------+------+
        |  1   |  2   |  3   |
        +------+------+------+
    """

    @property
    def layout_type(self) -> LayoutType:
        return LayoutType.COLUMNS

    @property
    def name(self) -> str:
        return "Columns"

    def apply(self, tiles: Sequence[Tile], area: Rect) -> None:
        for tile, column in zip(tiles, area.slice_columns(len(tiles))):
            tile.geometry = column.pad(self._gap)
