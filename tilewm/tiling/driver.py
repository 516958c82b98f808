"""
tilewm.tiling.driver - Frontera entre el core y el adaptador del WM.

El core nunca toca ventanas reales: todo lo que necesita saber o hacer
con ellas pasa por un objeto que cumpla el protocolo Driver. Los handles
de ventana (Client) son opacos, se comparan por identidad, y su tiempo
de vida lo gestiona el adaptador.
"""

from __future__ import annotations

from typing import Optional, Protocol

from tilewm.tiling.rect import Rect


class Client(Protocol):
    """Handle de ventana del adaptador. El core solo escribe los marcadores."""

    keep_above: bool
    keep_below: bool


class Driver(Protocol):
    """Operaciones que el core requiere del adaptador."""

    def get_working_area(self, screen_id: int) -> Rect: ...

    def get_client_class_name(self, client: Client) -> str: ...

    def get_client_geometry(self, client: Client) -> Rect: ...

    def set_client_geometry(self, client: Client, geometry: Rect) -> None: ...

    def is_client_visible(self, client: Client, screen_id: int) -> bool:
        """Puede lanzar excepcion si el handle ya no es valido."""
        ...

    def is_client_full_screen(self, client: Client) -> bool: ...

    def get_client_screen(self, client: Client) -> int: ...

    def get_active_client(self) -> Optional[Client]: ...

    def set_active_client(self, client: Client) -> None: ...
