"""
tilewm.core.host - HostDriver: glue between window-manager events and the engine.

A concrete platform adapter subclasses HostDriver and provides:

  1. The Driver queries the engine needs (geometry, visibility, focus...).
  2. Enumeration hooks: list_clients(), screen_count().
  3. Optional hooks: is_special_window(), is_client_moving(),
     watch_client(), register_shortcut().

HostDriver then translates raw events (window added/removed, geometry
changed, move/resize started and finished, screen count changed,
shortcut pressed) into engine operations. A window is "moving" only
between its own start and finish events. Handlers never let an
exception escape into the platform event loop; failures are logged and
the loop keeps running.
"""

from __future__ import annotations

import abc
import functools
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from tilewm.config.rules import DEFAULT_RULES, SHELL_CLASSES
from tilewm.config.shortcuts import MODIFIER, SHORTCUTS
from tilewm.core.combo_parser import ComboParseError
from tilewm.tiling.driver import Client
from tilewm.tiling.engine import TilingEngine
from tilewm.tiling.rect import Rect
from tilewm.tiling.rules import Rule
from tilewm.tiling.userinput import UserInput

log = logging.getLogger(__name__)


# Shortcut callbacks are called with no arguments
ShortcutCallback = Callable[[], None]


def _event_handler(fn):
    """Log and swallow exceptions so the platform event loop survives."""

    @functools.wraps(fn)
    def wrapper(self, *args):
        try:
            return fn(self, *args)
        except Exception:
            log.exception("Error in %s%r", fn.__name__, args)
            return None

    return wrapper


class HostDriver(abc.ABC):
    """
    Base class for platform adapters.

    Owns the TilingEngine and implements the Driver protocol through
    abstract methods, so a subclass only has to talk to the platform.

    Usage:
        driver = MyPlatformDriver()
        driver.start()      # rules, shortcuts, screens, existing windows
        ...                 # platform calls the on_* handlers
    """

    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        shortcuts: Optional[Sequence[tuple[str, str, UserInput]]] = None,
        modifier: Optional[str] = MODIFIER,
    ) -> None:
        self.engine = TilingEngine(self)
        self._rules = list(rules) if rules is not None else list(DEFAULT_RULES)
        self._shortcuts = list(shortcuts) if shortcuts is not None else list(SHORTCUTS)
        self._modifier = modifier
        # Clients inside a user move/resize (between start and finish events)
        self._moving: list[Client] = []

    # ------------------------------------------------------------------
    # Driver protocol (implemented by the platform)
    # ------------------------------------------------------------------
    @abc.abstractmethod
    def get_working_area(self, screen_id: int) -> Rect: ...

    @abc.abstractmethod
    def get_client_class_name(self, client: Client) -> str: ...

    @abc.abstractmethod
    def get_client_geometry(self, client: Client) -> Rect: ...

    @abc.abstractmethod
    def set_client_geometry(self, client: Client, geometry: Rect) -> None: ...

    @abc.abstractmethod
    def is_client_visible(self, client: Client, screen_id: int) -> bool: ...

    @abc.abstractmethod
    def is_client_full_screen(self, client: Client) -> bool: ...

    @abc.abstractmethod
    def get_client_screen(self, client: Client) -> int: ...

    @abc.abstractmethod
    def get_active_client(self) -> Optional[Client]: ...

    @abc.abstractmethod
    def set_active_client(self, client: Client) -> None: ...

    # ------------------------------------------------------------------
    # Platform hooks
    # ------------------------------------------------------------------
    @abc.abstractmethod
    def list_clients(self) -> list[Client]:
        """All top-level windows that currently exist."""
        ...

    @abc.abstractmethod
    def screen_count(self) -> int: ...

    def is_special_window(self, client: Client) -> bool:
        """True for docks, popups, tooltips and similar non-app windows."""
        return False

    def is_client_moving(self, client: Client) -> bool:
        """True while the user is dragging or resizing *client*."""
        return any(c is client for c in self._moving)

    def watch_client(self, client: Client) -> None:
        """Subscribe to per-window events once the engine accepted *client*."""

    def register_shortcut(
        self,
        sequence: str,
        title: str,
        callback: ShortcutCallback,
    ) -> bool:
        """
        Register a global shortcut. Platforms without shortcut support
        keep this default and return False.

        Raises:
            ComboParseError: If *sequence* is malformed.
        """
        return False

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Load rules, bind shortcuts, sync screens and adopt existing windows."""
        self.engine.update_rules(self._rules)
        self.bind_shortcuts()
        self.on_number_screens_changed(self.screen_count())

        for client in self.list_clients():
            self.on_client_added(client)

        log.info("Host started: %r", self.engine)

    def bind_shortcuts(self) -> int:
        """
        Register every configured shortcut.

        Returns:
            Number of shortcuts registered successfully.
        """
        count = 0
        for sequence, title, user_input in self._shortcuts:
            if self._modifier:
                sequence = f"{self._modifier}+{sequence}"
            callback = functools.partial(self.on_user_input, user_input)

            try:
                ok = self.register_shortcut(sequence, f"tilewm: {title}", callback)
            except ComboParseError as exc:
                log.error("Invalid shortcut %r (%s): %s", sequence, title, exc)
                continue

            if ok:
                count += 1
            else:
                log.debug("Shortcut not registered: %s (%s)", sequence, title)

        log.info("Shortcuts registered: %d/%d", count, len(self._shortcuts))
        return count

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    @_event_handler
    def on_client_added(self, client: Client) -> None:
        if self.is_special_window(client):
            return
        if self.get_client_class_name(client) in SHELL_CLASSES:
            return

        log.debug("on_client_added: %r", client)
        if self.engine.manage_client(client):
            self.watch_client(client)

    @_event_handler
    def on_client_removed(self, client: Client) -> None:
        log.debug("on_client_removed: %r", client)
        self._moving = [c for c in self._moving if c is not client]
        self.engine.unmanage_client(client)

    @_event_handler
    def on_geometry_changed(self, client: Client) -> None:
        if self.is_client_moving(client):
            return
        self.engine.arrange_client(client)

    @_event_handler
    def on_move_resize_started(self, client: Client) -> None:
        if not self.is_client_moving(client):
            log.debug("on_move_resize_started: %r", client)
            self._moving.append(client)

    @_event_handler
    def on_move_resize_finished(self, client: Client) -> None:
        """A window dropped by the user stays where it was dropped."""
        self._moving = [c for c in self._moving if c is not client]
        if self.is_client_moving(client):
            return
        self.engine.set_client_float(client, True, self.get_client_geometry(client))
        self.engine.arrange()

    @_event_handler
    def on_workspace_changed(self) -> None:
        """Desktop, activity, minimize, full-screen or screen-size change."""
        self.engine.arrange()

    @_event_handler
    def on_number_screens_changed(self, count: int) -> None:
        while len(self.engine.screens) < count:
            if self.engine.add_screen(len(self.engine.screens)) is None:
                break
        while len(self.engine.screens) > count:
            self.engine.remove_screen(len(self.engine.screens) - 1)

    @_event_handler
    def on_user_input(self, user_input: UserInput) -> None:
        self.engine.handle_user_input(user_input)
