"""
tilewm.core.win32_driver - Windows adapter built on pywin32.

Win32Driver implements every HostDriver hook against the Win32 API:

  - Geometry, class name, visibility and focus via win32gui.
  - Monitors / work areas via win32api (see tilewm.core.monitor).
  - Z-order markers via SetWindowPos (topmost for floating windows).
  - Global shortcuts via RegisterHotKey, dispatched from WM_HOTKEY.
  - A WinEvent hook (SetWinEventHook, out of context) whose events are
    translated into the HostDriver handlers, and a GetMessage loop that
    also serves hotkeys and a thread timer for monitor changes.

Event mapping:
    EVENT_OBJECT_SHOW           -> on_client_added (first time only)
    EVENT_OBJECT_DESTROY        -> on_client_removed
    EVENT_OBJECT_HIDE,
    EVENT_SYSTEM_MINIMIZESTART,
    EVENT_SYSTEM_MINIMIZEEND    -> on_workspace_changed
    EVENT_SYSTEM_MOVESIZESTART  -> on_move_resize_started
    EVENT_SYSTEM_MOVESIZEEND    -> on_move_resize_finished
    EVENT_OBJECT_LOCATIONCHANGE -> on_geometry_changed

Windows only: nothing in tilewm.tiling imports this module.
"""

from __future__ import annotations

import ctypes
import ctypes.wintypes
import logging
from typing import Optional

import win32api
import win32con
import win32gui

from tilewm.core.combo_parser import MOD_NOREPEAT, combo_to_str, parse_combo
from tilewm.core.host import HostDriver, ShortcutCallback
from tilewm.core.monitor import Monitor, get_monitors
from tilewm.tiling.rect import Rect

log = logging.getLogger(__name__)

user32 = ctypes.windll.user32

_Z_FLAGS = win32con.SWP_NOMOVE | win32con.SWP_NOSIZE | win32con.SWP_NOACTIVATE

# Style bits a borderless full-screen window has dropped
_FRAME_STYLE = win32con.WS_CAPTION | win32con.WS_THICKFRAME

# ============================================================================
# WinEvent constants
# ============================================================================
WINEVENT_OUTOFCONTEXT = 0x0000
WINEVENT_SKIPOWNPROCESS = 0x0002

EVENT_SYSTEM_MOVESIZESTART = 0x000A
EVENT_SYSTEM_MOVESIZEEND = 0x000B
EVENT_SYSTEM_MINIMIZESTART = 0x0016
EVENT_SYSTEM_MINIMIZEEND = 0x0017
EVENT_OBJECT_DESTROY = 0x8001
EVENT_OBJECT_SHOW = 0x8002
EVENT_OBJECT_HIDE = 0x8003
EVENT_OBJECT_LOCATIONCHANGE = 0x800B

EVENT_MIN = EVENT_SYSTEM_MOVESIZESTART
EVENT_MAX = EVENT_OBJECT_LOCATIONCHANGE

OBJID_WINDOW = 0
CHILDID_SELF = 0

# void callback(HWINEVENTHOOK, DWORD, HWND, LONG, LONG, DWORD, DWORD)
WinEventProc = ctypes.WINFUNCTYPE(
    None,
    ctypes.wintypes.HANDLE,   # hWinEventHook
    ctypes.wintypes.DWORD,    # event
    ctypes.wintypes.HWND,     # hwnd
    ctypes.c_long,            # idObject
    ctypes.c_long,            # idChild
    ctypes.wintypes.DWORD,    # idEventThread
    ctypes.wintypes.DWORD,    # dwmsEventTime
)


# ============================================================================
# Win32Client
# ============================================================================
class Win32Client:
    """
    Handle to a top-level window.

    Win32Driver keeps exactly one instance per HWND so the engine can
    compare clients by identity.
    """

    __slots__ = ("_hwnd", "_keep_above", "_keep_below")

    def __init__(self, hwnd: int) -> None:
        self._hwnd = hwnd
        self._keep_above = False
        self._keep_below = False

    @property
    def hwnd(self) -> int:
        return self._hwnd

    @property
    def keep_above(self) -> bool:
        return self._keep_above

    @keep_above.setter
    def keep_above(self, value: bool) -> None:
        if value == self._keep_above:
            return
        self._keep_above = value
        after = win32con.HWND_TOPMOST if value else win32con.HWND_NOTOPMOST
        win32gui.SetWindowPos(self._hwnd, after, 0, 0, 0, 0, _Z_FLAGS)

    @property
    def keep_below(self) -> bool:
        return self._keep_below

    @keep_below.setter
    def keep_below(self, value: bool) -> None:
        self._keep_below = value
        if value:
            self.keep_above = False

    def __repr__(self) -> str:
        try:
            title = win32gui.GetWindowText(self._hwnd)[:40]
        except Exception:
            title = "<gone>"
        return f"Win32Client({self._hwnd:#010x}, {title!r})"


# ============================================================================
# Win32Driver
# ============================================================================
class Win32Driver(HostDriver):
    """
    Windows platform adapter.

    Usage:
        driver = Win32Driver()
        driver.start()
        driver.run()     # blocks until stop() or Ctrl+C
    """

    def __init__(self, monitor_check_ms: int = 2000, **kwargs) -> None:
        super().__init__(**kwargs)
        self._monitor_check_ms = monitor_check_ms
        self._monitors: list[Monitor] = get_monitors()

        # One client per HWND
        self._clients: dict[int, Win32Client] = {}
        # HWNDs already offered to the engine
        self._known: set[int] = set()

        self._hotkeys: dict[int, ShortcutCallback] = {}
        self._next_hotkey_id = 1

        # Must stay referenced while the hook is installed
        self._hook_proc = None
        self._hook_handle = 0
        self._timer_id = 0
        self._thread_id = 0

    def _client(self, hwnd: int) -> Win32Client:
        client = self._clients.get(hwnd)
        if client is None:
            client = self._clients[hwnd] = Win32Client(hwnd)
        return client

    def _managed(self, hwnd: int) -> Optional[Win32Client]:
        """The client for *hwnd* if the engine has a tile for it."""
        client = self._clients.get(hwnd)
        if client is None or self.engine.get_tile(client) is None:
            return None
        return client

    # ------------------------------------------------------------------
    # Driver protocol
    # ------------------------------------------------------------------
    def get_working_area(self, screen_id: int) -> Rect:
        return self._monitors[screen_id].work_rect.clone()

    def get_client_class_name(self, client: Win32Client) -> str:
        return win32gui.GetClassName(client.hwnd)

    def get_client_geometry(self, client: Win32Client) -> Rect:
        return Rect.from_ltrb(*win32gui.GetWindowRect(client.hwnd))

    def set_client_geometry(self, client: Win32Client, geometry: Rect) -> None:
        hwnd = client.hwnd
        if win32gui.IsIconic(hwnd) or win32gui.IsZoomed(hwnd):
            win32gui.ShowWindow(hwnd, win32con.SW_RESTORE)
        win32gui.MoveWindow(hwnd, geometry.x, geometry.y, geometry.width, geometry.height, True)

    def is_client_visible(self, client: Win32Client, screen_id: int) -> bool:
        hwnd = client.hwnd
        if not win32gui.IsWindow(hwnd):
            raise LookupError(f"Window {hwnd:#010x} no longer exists")
        return (
            bool(win32gui.IsWindowVisible(hwnd))
            and not win32gui.IsIconic(hwnd)
            and self.get_client_screen(client) == screen_id
        )

    def is_client_full_screen(self, client: Win32Client) -> bool:
        """
        Borderless (no caption, no sizing frame) and covering the whole
        monitor. A tiled window filling a taskbar-less work area still
        has its frame, so it is not full-screen.
        """
        screen_id = self.get_client_screen(client)
        if screen_id < 0:
            return False
        if win32gui.GetWindowLong(client.hwnd, win32con.GWL_STYLE) & _FRAME_STYLE:
            return False
        return self.get_client_geometry(client) == self._monitors[screen_id].full_rect

    def get_client_screen(self, client: Win32Client) -> int:
        handle = int(win32api.MonitorFromWindow(client.hwnd, win32con.MONITOR_DEFAULTTONEAREST))
        for index, monitor in enumerate(self._monitors):
            if monitor.handle == handle:
                return index
        return -1

    def get_active_client(self) -> Optional[Win32Client]:
        hwnd = win32gui.GetForegroundWindow()
        return self._clients.get(hwnd) if hwnd else None

    def set_active_client(self, client: Win32Client) -> None:
        win32gui.SetForegroundWindow(client.hwnd)

    # ------------------------------------------------------------------
    # HostDriver hooks
    # ------------------------------------------------------------------
    def list_clients(self) -> list[Win32Client]:
        """Visible top-level windows. Listed windows count as offered."""
        hwnds: list[int] = []

        def _callback(hwnd: int, _: object) -> bool:
            if win32gui.IsWindowVisible(hwnd):
                hwnds.append(hwnd)
            return True

        win32gui.EnumWindows(_callback, None)
        self._known.update(hwnds)
        return [self._client(hwnd) for hwnd in hwnds]

    def screen_count(self) -> int:
        return len(self._monitors)

    def is_special_window(self, client: Win32Client) -> bool:
        """
        Child/owned windows, tool windows without WS_EX_APPWINDOW,
        non-activating overlays and untitled windows are never tiled.
        """
        hwnd = client.hwnd
        if not win32gui.IsWindowVisible(hwnd):
            return True
        if win32gui.GetParent(hwnd) or win32gui.GetWindow(hwnd, win32con.GW_OWNER):
            return True
        if not win32gui.GetWindowText(hwnd):
            return True

        ex_style = win32gui.GetWindowLong(hwnd, win32con.GWL_EXSTYLE)
        if ex_style & win32con.WS_EX_TOOLWINDOW and not ex_style & win32con.WS_EX_APPWINDOW:
            return True
        if ex_style & win32con.WS_EX_NOACTIVATE:
            return True
        return False

    def register_shortcut(self, sequence: str, title: str, callback: ShortcutCallback) -> bool:
        modifiers, vk = parse_combo(sequence)
        hotkey_id = self._next_hotkey_id

        if not user32.RegisterHotKey(None, hotkey_id, modifiers | MOD_NOREPEAT, vk):
            log.error("Failed to register hotkey %s (%s)", combo_to_str(modifiers, vk), title)
            return False

        self._hotkeys[hotkey_id] = callback
        self._next_hotkey_id += 1
        log.info("Hotkey registered: %s -> %s", combo_to_str(modifiers, vk), title)
        return True

    # ------------------------------------------------------------------
    # WinEvent dispatch
    # ------------------------------------------------------------------
    def _on_win_event(
        self,
        _hook: int,
        event: int,
        hwnd: int,
        id_object: int,
        id_child: int,
        _thread: int,
        _time: int,
    ) -> None:
        """WinEventProc callback. Only whole top-level windows matter."""
        if id_object != OBJID_WINDOW or id_child != CHILDID_SELF or not hwnd:
            return

        try:
            self._dispatch(event, hwnd)
        except Exception:
            log.exception("Error handling event %#06x for hwnd %#010x", event, hwnd)

    def _dispatch(self, event: int, hwnd: int) -> None:
        if event == EVENT_OBJECT_SHOW:
            self._window_shown(hwnd)
            return
        if event == EVENT_OBJECT_DESTROY:
            self._window_destroyed(hwnd)
            return

        client = self._managed(hwnd)
        if client is None:
            return

        if event == EVENT_SYSTEM_MOVESIZESTART:
            self.on_move_resize_started(client)
        elif event == EVENT_SYSTEM_MOVESIZEEND:
            self.on_move_resize_finished(client)
        elif event == EVENT_OBJECT_LOCATIONCHANGE:
            self.on_geometry_changed(client)
        elif event in (
            EVENT_OBJECT_HIDE,
            EVENT_SYSTEM_MINIMIZESTART,
            EVENT_SYSTEM_MINIMIZEEND,
        ):
            self.on_workspace_changed()

    def _window_shown(self, hwnd: int) -> None:
        if hwnd in self._known:
            # A managed window coming back from hidden
            if self._managed(hwnd) is not None:
                self.on_workspace_changed()
            return

        self._known.add(hwnd)
        self.on_client_added(self._client(hwnd))

    def _window_destroyed(self, hwnd: int) -> None:
        self._known.discard(hwnd)
        client = self._clients.pop(hwnd, None)
        if client is not None:
            self.on_client_removed(client)

    def _check_monitors(self) -> None:
        monitors = get_monitors()
        if monitors == self._monitors:
            return

        log.info("Monitors changed: %d -> %d", len(self._monitors), len(monitors))
        self._monitors = monitors
        self.on_number_screens_changed(len(monitors))
        self.on_workspace_changed()

    # ------------------------------------------------------------------
    # Message loop
    # ------------------------------------------------------------------
    def run(self) -> None:
        """
        Install the WinEvent hook and pump messages until stop().

        Must run on the thread that called start(), since hotkeys are
        delivered to the registering thread's queue.
        """
        self._hook_proc = WinEventProc(self._on_win_event)
        self._hook_handle = user32.SetWinEventHook(
            EVENT_MIN,
            EVENT_MAX,
            0,
            self._hook_proc,
            0,
            0,
            WINEVENT_OUTOFCONTEXT | WINEVENT_SKIPOWNPROCESS,
        )
        if not self._hook_handle:
            raise RuntimeError("SetWinEventHook failed")
        log.info("WinEvent hook installed (handle=%#x)", self._hook_handle)

        # Thread timer: also wakes GetMessage so Ctrl+C is noticed
        self._timer_id = user32.SetTimer(None, 0, self._monitor_check_ms, None)
        self._thread_id = win32api.GetCurrentThreadId()

        msg = ctypes.wintypes.MSG()
        try:
            while user32.GetMessageW(ctypes.byref(msg), None, 0, 0) > 0:
                if msg.message == win32con.WM_HOTKEY:
                    self._dispatch_hotkey(msg.wParam)
                elif msg.message == win32con.WM_TIMER and msg.wParam == self._timer_id:
                    self._check_monitors()
                else:
                    user32.TranslateMessage(ctypes.byref(msg))
                    user32.DispatchMessageW(ctypes.byref(msg))
        finally:
            self._shutdown()

    def stop(self) -> None:
        """Ask the message loop to exit. Safe to call from another thread."""
        if self._thread_id:
            win32api.PostThreadMessage(self._thread_id, win32con.WM_QUIT, 0, 0)

    def _dispatch_hotkey(self, hotkey_id: int) -> None:
        callback = self._hotkeys.get(hotkey_id)
        if callback is not None:
            callback()

    def _shutdown(self) -> None:
        if self._hook_handle:
            user32.UnhookWinEvent(self._hook_handle)
            self._hook_handle = 0
        self._hook_proc = None

        if self._timer_id:
            user32.KillTimer(None, self._timer_id)
            self._timer_id = 0
        self._thread_id = 0

        for hotkey_id in self._hotkeys:
            user32.UnregisterHotKey(None, hotkey_id)
        self._hotkeys.clear()
        log.info("Win32 event loop stopped")
