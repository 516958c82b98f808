"""
tilewm.tiling.tile - Registro Tile.

Un Tile es la vista del engine sobre una ventana gestionada: su
geometria destino cuando esta tileada, la geometria recordada cuando
flota, y los contadores/flags que usa la reconciliacion.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tilewm.tiling.driver import Client
from tilewm.tiling.rect import Rect


@dataclass(eq=False)
class Tile:
    """
    Ventana gestionada por el TilingEngine.

    La igualdad es por identidad: dos Tiles nunca representan la misma
    ventana, y el engine los busca con `is`.

    Atributos:
        client:         Handle opaco del adaptador (no es propiedad del tile).
        geometry:       Ultima geometria calculada por el layout.
        float_geometry: Geometria recordada mientras flota.
        floating:       True si el tile esta fuera del layout.
        arrange_count:  Reintentos consecutivos de reconciliacion.
        is_error:       Flag pegajoso: el adaptador fallo con esta ventana.
    """

    client: Client
    geometry: Rect
    float_geometry: Rect = field(init=False)
    floating: bool = False
    arrange_count: int = 0
    is_error: bool = False

    def __post_init__(self) -> None:
        self.geometry = self.geometry.clone()
        self.float_geometry = self.geometry.clone()

    def __repr__(self) -> str:
        mode = "float" if self.floating else "tiled"
        error = " error" if self.is_error else ""
        return f"Tile({self.client!r}, {mode}, {self.geometry}{error})"
