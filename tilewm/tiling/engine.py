"""
tilewm.tiling.engine - Motor principal de tiling.

El TilingEngine es el corazon del sistema de organizacion automatica.
Es duenio de todos los tiles, pantallas y reglas, y decide donde va
cada ventana. El adaptador (Driver) le notifica eventos y comandos; el
engine actualiza sus listas, pide a cada layout la geometria destino y
reconcilia esa geometria con la ventana real.

Responsabilidades:
    - Gestionar/soltar ventanas segun las reglas.
    - Mantener el orden global de tiles (indice 0 = master).
    - Aplicar el layout activo de cada pantalla sobre sus tiles visibles.
    - Evitar bucles de escritura con el WM (contador de reintentos).
    - Interpretar comandos de usuario (foco, mover, master, float, layout).

Todas las llamadas al adaptador que pueden fallar se protegen: un fallo
marca el tile con `is_error` y nunca escapa de la operacion en curso.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Optional, TypeVar

from tilewm.tiling.driver import Client, Driver
from tilewm.tiling.layouts import Layout
from tilewm.tiling.rect import Rect
from tilewm.tiling.rules import Rule, is_floating, is_ignored
from tilewm.tiling.screen import Screen
from tilewm.tiling.tile import Tile
from tilewm.tiling.userinput import UserInput

log = logging.getLogger(__name__)

T = TypeVar("T")

# Escrituras consecutivas permitidas antes de asumir un bucle con el WM.
LOOP_GUARD_LIMIT = 5


# ============================================================================
# TilingEngine
# ============================================================================
class TilingEngine:
    """
    Motor de tiling multi-pantalla.

    Uso tipico (desde el adaptador):
        engine = TilingEngine(driver)
        engine.add_screen(0)
        engine.update_rules([Rule("krunner", ignore=True)])
        if engine.manage_client(client):
            ...  # suscribirse a eventos de la ventana
        engine.handle_user_input(UserInput.SET_MASTER)
    """

    def __init__(self, driver: Driver) -> None:
        self._driver = driver
        self._tiles: list[Tile] = []
        self._screens: list[Screen] = []
        self._rules: list[Rule] = []

    # ------------------------------------------------------------------
    # Propiedades
    # ------------------------------------------------------------------
    @property
    def screens(self) -> list[Screen]:
        """Pantallas gestionadas (copia)."""
        return list(self._screens)

    @property
    def tiles(self) -> list[Tile]:
        """Tiles en orden global (copia)."""
        return list(self._tiles)

    @property
    def rules(self) -> list[Rule]:
        return list(self._rules)

    def get_tile(self, client: Optional[Client]) -> Optional[Tile]:
        """Retorna el tile de *client*, o None si no esta gestionado."""
        if client is None:
            return None
        for tile in self._tiles:
            if tile.client is client:
                return tile
        return None

    # ------------------------------------------------------------------
    # Organizacion
    # ------------------------------------------------------------------
    def arrange(self) -> None:
        """Recalcula y aplica el layout activo de cada pantalla."""
        log.debug("arrange: tiles=%d screens=%d", len(self._tiles), len(self._screens))

        for screen in self._screens:
            if screen.layout is None:
                continue

            try:
                area = self._driver.get_working_area(screen.id)
            except Exception:
                log.warning("No se pudo obtener el area de screen %d", screen.id, exc_info=True)
                continue

            visibles: list[Tile] = []
            for tile in self._get_visible_tiles(screen):
                full_screen = self._guard(
                    tile, lambda: self._driver.is_client_full_screen(tile.client)
                )
                if full_screen is None:
                    continue
                if full_screen:
                    self._set_markers(tile, above=False, below=False)
                    continue
                visibles.append(tile)

            tileables = [t for t in visibles if not t.floating]
            screen.layout.apply(tileables, area)

            for tile in tileables:
                self._apply_tile_geometry(tile, is_retry=False)
                self._set_markers(tile, below=True)

            for tile in visibles:
                if tile.floating:
                    self._set_markers(tile, above=True)

            log.debug(
                "Screen %d (%s): %d tileables, %d flotantes, area=%s",
                screen.id,
                screen.layout.name,
                len(tileables),
                len(visibles) - len(tileables),
                area,
            )

    def arrange_client(self, client: Client) -> None:
        """
        Reconcilia una sola ventana cuya geometria cambio externamente.

        Cada llamada cuenta como reintento: si el WM nunca respeta la
        geometria pedida, se deja de escribir tras LOOP_GUARD_LIMIT.
        """
        tile = self.get_tile(client)
        if tile is None or tile.is_error or tile.floating:
            return

        full_screen = self._guard(tile, lambda: self._driver.is_client_full_screen(client))
        if full_screen is None or full_screen:
            return

        self._apply_tile_geometry(tile, is_retry=True)

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------
    def manage_client(self, client: Client) -> bool:
        """
        Empieza a gestionar una ventana.

        Returns:
            True si se creo un Tile (el adaptador debe suscribirse a los
            eventos de la ventana), False si fue ignorada.
        """
        if self.get_tile(client) is not None:
            log.debug("Ventana ya gestionada: %r", client)
            return False

        try:
            class_name = self._driver.get_client_class_name(client)
            geometry = self._driver.get_client_geometry(client)
        except Exception:
            log.warning("No se pudo leer la ventana %r", client, exc_info=True)
            return False

        if is_ignored(self._rules, class_name):
            log.info("Ventana ignorada por regla: %r class=%s", client, class_name)
            return False

        tile = Tile(client, geometry)
        if is_floating(self._rules, class_name):
            self.set_floating(tile, True)

        self._tiles.append(tile)
        log.info(
            "TILE ADD [%d] %r class=%s floating=%s",
            len(self._tiles),
            client,
            class_name,
            tile.floating,
        )

        self.arrange()
        return True

    def unmanage_client(self, client: Client) -> None:
        """
        Deja de gestionar una ventana.

        Tambien elimina cualquier tile marcado con error. No falla si la
        ventana nunca estuvo gestionada.
        """
        count = len(self._tiles)
        self._tiles = [
            t for t in self._tiles if t.client is not client and not t.is_error
        ]

        if len(self._tiles) != count:
            log.info(
                "TILE REMOVE [%d] %r (%d eliminados)",
                len(self._tiles),
                client,
                count - len(self._tiles),
            )

        self.arrange()

    def add_screen(
        self,
        screen_id: int,
        layouts: Optional[Sequence[Layout]] = None,
    ) -> Optional[Screen]:
        """Agrega una pantalla. Un id repetido se ignora."""
        if any(s.id == screen_id for s in self._screens):
            log.warning("Screen %d ya existe", screen_id)
            return None

        screen = Screen(screen_id, layouts)
        self._screens.append(screen)
        log.info("Screen agregada: %r", screen)
        return screen

    def remove_screen(self, screen_id: int) -> None:
        self._screens = [s for s in self._screens if s.id != screen_id]
        log.info("Screen eliminada: %d (quedan %d)", screen_id, len(self._screens))

    def update_rules(self, rules: Iterable[Rule]) -> None:
        """Reemplaza todas las reglas. No afecta a tiles ya gestionados."""
        self._rules = list(rules)
        log.debug("Reglas actualizadas: %d", len(self._rules))

    # ------------------------------------------------------------------
    # Comandos de usuario
    # ------------------------------------------------------------------
    def handle_user_input(self, user_input: UserInput) -> None:
        """
        Interpreta un comando de usuario sobre la pantalla activa.

        El layout activo tiene prioridad. Si no hay ventana con foco, el
        comando se descarta.
        """
        screen = self._get_active_screen()
        if screen is None:
            log.debug("handle_user_input: %s sin pantalla activa", user_input.name)
            return

        log.debug("handle_user_input: input=%s screen=%d", user_input.name, screen.id)

        if screen.layout is not None and screen.layout.handle_user_input(user_input):
            self.arrange()
            return

        if user_input == UserInput.UP:
            self.move_focus(-1)
        elif user_input == UserInput.DOWN:
            self.move_focus(+1)
        elif user_input == UserInput.SHIFT_UP:
            self.move_tile(-1)
        elif user_input == UserInput.SHIFT_DOWN:
            self.move_tile(+1)
        elif user_input == UserInput.SET_MASTER:
            self.set_master()
        elif user_input == UserInput.FLOAT:
            tile = self._get_active_tile()
            if tile is not None:
                self.toggle_floating(tile)
        elif user_input == UserInput.CYCLE_LAYOUT:
            self.cycle_layout(+1)

        self.arrange()

    def move_focus(self, step: int) -> None:
        """Mueve el foco *step* posiciones entre los tiles visibles (circular)."""
        if step == 0:
            return

        tile = self._get_active_tile()
        screen = self._get_active_screen()
        if tile is None or screen is None:
            return

        visibles = self._get_visible_tiles(screen)
        if tile not in visibles:
            return

        index = visibles.index(tile)
        target = visibles[(index + step) % len(visibles)]
        self._guard(target, lambda: self._driver.set_active_client(target.client))

    def move_tile(self, step: int) -> None:
        """
        Desplaza el tile con foco *step* posiciones entre los tiles
        visibles de la pantalla activa, intercambiandolo paso a paso en
        la lista global.
        """
        if step == 0:
            return

        tile = self._get_active_tile()
        screen = self._get_active_screen()
        if tile is None or screen is None:
            return

        index = self._tiles.index(tile)
        direction = 1 if step > 0 else -1
        i = index + direction
        while step != 0 and 0 <= i < len(self._tiles):
            if self._is_tile_visible(self._tiles[i], screen):
                self._tiles[index] = self._tiles[i]
                self._tiles[i] = tile
                index = i
                step -= direction
            i += direction

    def set_master(self) -> None:
        """Lleva el tile con foco al indice global 0."""
        tile = self._get_active_tile()
        if tile is None or self._tiles[0] is tile:
            return

        self._tiles.remove(tile)
        self._tiles.insert(0, tile)
        log.info("Nuevo master: %r", tile.client)

    def cycle_layout(self, step: int = 1) -> None:
        screen = self._get_active_screen()
        if screen is None:
            return
        screen.cycle_layout(step)

    # ------------------------------------------------------------------
    # Flotantes
    # ------------------------------------------------------------------
    def set_floating(
        self,
        tile: Tile,
        value: bool,
        geometry: Optional[Rect] = None,
    ) -> None:
        """Pone el tile en modo flotante o tileado. Sin cambio, no hace nada."""
        if tile.floating == value:
            return
        tile.floating = value
        self._apply_float_mode(tile, geometry)

    def toggle_floating(self, tile: Tile, geometry: Optional[Rect] = None) -> None:
        tile.floating = not tile.floating
        self._apply_float_mode(tile, geometry)

    def set_client_float(
        self,
        client: Client,
        value: bool,
        geometry: Optional[Rect] = None,
    ) -> None:
        tile = self.get_tile(client)
        if tile is None:
            return
        self.set_floating(tile, value, geometry)

    def _apply_float_mode(self, tile: Tile, geometry: Optional[Rect]) -> None:
        """
        Al flotar, restaura la geometria dada o la recordada. Al volver a
        tilear, recuerda la geometria dada o la actual; el proximo
        arrange() ubica la ventana.
        """
        if tile.floating:
            target = geometry if geometry is not None else tile.float_geometry
            self._guard(
                tile, lambda: self._driver.set_client_geometry(tile.client, target.clone())
            )
            return

        if geometry is None:
            geometry = self._guard(tile, lambda: self._driver.get_client_geometry(tile.client))
            if geometry is None:
                return
        tile.float_geometry.copy_from(geometry)

    # ------------------------------------------------------------------
    # Privados
    # ------------------------------------------------------------------
    def _get_active_client(self) -> Optional[Client]:
        """Ventana con foco. Un fallo del adaptador cuenta como sin foco."""
        try:
            return self._driver.get_active_client()
        except Exception:
            log.warning("No se pudo obtener la ventana con foco", exc_info=True)
            return None

    def _get_active_screen(self) -> Optional[Screen]:
        client = self._get_active_client()
        if client is None:
            return None

        try:
            screen_id = self._driver.get_client_screen(client)
        except Exception:
            log.warning("No se pudo obtener la pantalla de %r", client, exc_info=True)
            return None

        for screen in self._screens:
            if screen.id == screen_id:
                return screen
        return None

    def _get_active_tile(self) -> Optional[Tile]:
        return self.get_tile(self._get_active_client())

    def _get_visible_tiles(self, screen: Screen) -> list[Tile]:
        return [t for t in self._tiles if self._is_tile_visible(t, screen)]

    def _is_tile_visible(self, tile: Tile, screen: Screen) -> bool:
        if tile.is_error:
            return False
        visible = self._guard(
            tile, lambda: self._driver.is_client_visible(tile.client, screen.id)
        )
        return bool(visible)

    def _apply_tile_geometry(self, tile: Tile, is_retry: bool) -> None:
        """
        Escribe la geometria destino solo si la ventana no la tiene ya.

        Un arrange() completo reinicia el contador; cada reintento lo
        incrementa y pasado LOOP_GUARD_LIMIT se deja de escribir.
        """
        current = self._guard(tile, lambda: self._driver.get_client_geometry(tile.client))
        if current is None:
            return

        if current == tile.geometry:
            tile.arrange_count = 0
            return

        tile.arrange_count = tile.arrange_count + 1 if is_retry else 0
        if tile.arrange_count > LOOP_GUARD_LIMIT:
            if tile.arrange_count == LOOP_GUARD_LIMIT + 1:
                log.warning(
                    "Posible bucle de geometria con %r: %s != %s, se deja de escribir",
                    tile.client,
                    current,
                    tile.geometry,
                )
            return

        self._guard(
            tile, lambda: self._driver.set_client_geometry(tile.client, tile.geometry.clone())
        )

    def _set_markers(
        self,
        tile: Tile,
        above: Optional[bool] = None,
        below: Optional[bool] = None,
    ) -> None:
        def _write() -> None:
            if above is not None:
                tile.client.keep_above = above
            if below is not None:
                tile.client.keep_below = below

        self._guard(tile, _write)

    def _guard(self, tile: Tile, action: Callable[[], T]) -> Optional[T]:
        """
        Ejecuta una llamada al adaptador. Si falla, marca el tile con
        error (pegajoso) y retorna None.
        """
        try:
            return action()
        except Exception:
            tile.is_error = True
            log.warning("Fallo del adaptador con %r, tile marcado con error", tile.client, exc_info=True)
            return None

    # ------------------------------------------------------------------
    # Informacion / debug
    # ------------------------------------------------------------------
    def dump_state(self) -> str:
        """Retorna un resumen del estado del engine."""
        lines = [
            "=== TilingEngine ===",
            f"    Screens: {len(self._screens)}",
        ]
        for screen in self._screens:
            lines.append(f"    {screen!r}")
        lines.append(f"    Reglas: {len(self._rules)}")
        lines.append(f"    Tiles: {len(self._tiles)}")
        for i, tile in enumerate(self._tiles):
            role = "master" if i == 0 else f"stack-{i}"
            lines.append(f"    [{role}] {tile!r}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TilingEngine("
            f"screens={len(self._screens)}, "
            f"tiles={len(self._tiles)}, "
            f"rules={len(self._rules)})"
        )
