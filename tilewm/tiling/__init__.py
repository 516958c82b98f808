"""
tilewm.tiling - Motor de tiling (organizacion automatica de ventanas).

Este paquete es independiente de la plataforma y contiene:
    - rect      : Estructura Rect para geometria de areas
    - userinput : UserInput - comandos abstractos de usuario
    - driver    : Protocolos Driver/Client (frontera con el adaptador)
    - tile      : Tile - ventana gestionada
    - screen    : Screen - pantalla con su seleccion de layout
    - rules     : Rule - reglas por clase de ventana
    - layouts   : Layouts de tiling (Tile, Monocle, Spread, Stair, Columns)
    - engine    : TilingEngine - motor principal de organizacion
"""

from tilewm.tiling.rect import Rect
from tilewm.tiling.userinput import UserInput
from tilewm.tiling.driver import Client, Driver
from tilewm.tiling.tile import Tile
from tilewm.tiling.rules import Rule
from tilewm.tiling.layouts import (
    Layout,
    LayoutType,
    TileLayout,
    MonocleLayout,
    SpreadLayout,
    StairLayout,
    ColumnsLayout,
)
from tilewm.tiling.screen import Screen, default_layouts
from tilewm.tiling.engine import LOOP_GUARD_LIMIT, TilingEngine

__all__ = [
    "Rect",
    "UserInput",
    "Client",
    "Driver",
    "Tile",
    "Rule",
    "Layout",
    "LayoutType",
    "TileLayout",
    "MonocleLayout",
    "SpreadLayout",
    "StairLayout",
    "ColumnsLayout",
    "Screen",
    "default_layouts",
    "LOOP_GUARD_LIMIT",
    "TilingEngine",
]
