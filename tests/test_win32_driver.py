"""Windows-only tests for the pywin32 adapter."""

import pytest

pytest.importorskip("win32gui")

import win32con  # noqa: E402

from tilewm.core import win32_driver  # noqa: E402
from tilewm.core.monitor import Monitor  # noqa: E402
from tilewm.core.win32_driver import (  # noqa: E402
    EVENT_OBJECT_DESTROY,
    EVENT_OBJECT_LOCATIONCHANGE,
    EVENT_OBJECT_SHOW,
    EVENT_SYSTEM_MOVESIZEEND,
    EVENT_SYSTEM_MOVESIZESTART,
    Win32Client,
    Win32Driver,
)
from tilewm.tiling.rect import Rect  # noqa: E402

SCREEN = Rect(0, 0, 1200, 800)


@pytest.fixture
def driver(monkeypatch):
    monkeypatch.setattr(win32_driver, "get_monitors", lambda: [])
    return Win32Driver()


def send(driver, event, hwnd, id_object=0):
    driver._on_win_event(0, event, hwnd, id_object, 0, 0, 0)


class Recorder:
    """Replaces HostDriver handlers with call logs."""

    def __init__(self, driver, monkeypatch, *names):
        self.calls = []
        for name in names:
            monkeypatch.setattr(driver, name, self._record(name))

    def _record(self, name):
        def handler(*args):
            self.calls.append((name, *args))

        return handler


def test_one_client_per_hwnd(driver):
    assert driver._client(0x1234) is driver._client(0x1234)
    assert driver._client(0x1234) is not driver._client(0x5678)


def test_keep_below_drops_topmost_flag():
    client = Win32Client(0)
    client.keep_below = True
    assert client.keep_below is True
    assert client.keep_above is False


def test_no_monitors_no_screens(driver):
    assert driver.screen_count() == 0


def test_unknown_foreground_window_is_not_active(driver, monkeypatch):
    monkeypatch.setattr(win32_driver.win32gui, "GetForegroundWindow", lambda: 0x9999)
    assert driver.get_active_client() is None


class TestFullScreen:
    @pytest.fixture
    def bare_monitor(self, driver, monkeypatch):
        # No taskbar: work area == monitor area
        driver._monitors = [Monitor(1, "DISPLAY1", SCREEN.clone(), SCREEN.clone(), True)]
        monkeypatch.setattr(driver, "get_client_screen", lambda client: 0)
        monkeypatch.setattr(driver, "get_client_geometry", lambda client: SCREEN.clone())
        return driver

    def test_framed_window_filling_work_area_is_tiled(self, bare_monitor, monkeypatch):
        style = win32con.WS_OVERLAPPEDWINDOW | win32con.WS_VISIBLE
        monkeypatch.setattr(win32_driver.win32gui, "GetWindowLong", lambda hwnd, index: style)
        assert not bare_monitor.is_client_full_screen(Win32Client(0x10))

    def test_borderless_window_covering_monitor(self, bare_monitor, monkeypatch):
        style = win32con.WS_POPUP | win32con.WS_VISIBLE
        monkeypatch.setattr(win32_driver.win32gui, "GetWindowLong", lambda hwnd, index: style)
        assert bare_monitor.is_client_full_screen(Win32Client(0x10))


class TestWinEvents:
    HANDLERS = (
        "on_client_added",
        "on_client_removed",
        "on_geometry_changed",
        "on_move_resize_started",
        "on_move_resize_finished",
    )

    @pytest.fixture
    def managed(self, driver, monkeypatch):
        """Every window with a client counts as managed."""
        monkeypatch.setattr(driver.engine, "get_tile", lambda client: client)
        return driver

    def test_move_size_events_stay_on_their_window(self, managed, monkeypatch):
        rec = Recorder(managed, monkeypatch, *self.HANDLERS)
        a, b = managed._client(0xA), managed._client(0xB)

        send(managed, EVENT_SYSTEM_MOVESIZESTART, 0xB)
        send(managed, EVENT_OBJECT_LOCATIONCHANGE, 0xA)
        send(managed, EVENT_SYSTEM_MOVESIZEEND, 0xB)

        assert rec.calls == [
            ("on_move_resize_started", b),
            ("on_geometry_changed", a),
            ("on_move_resize_finished", b),
        ]

    def test_child_objects_are_ignored(self, managed, monkeypatch):
        rec = Recorder(managed, monkeypatch, *self.HANDLERS)
        managed._client(0xA)
        send(managed, EVENT_OBJECT_LOCATIONCHANGE, 0xA, id_object=-4)
        assert rec.calls == []

    def test_unmanaged_windows_get_no_move_events(self, driver, monkeypatch):
        rec = Recorder(driver, monkeypatch, *self.HANDLERS)
        send(driver, EVENT_SYSTEM_MOVESIZEEND, 0xC)
        assert rec.calls == []

    def test_listed_windows_are_not_offered_again(self, driver, monkeypatch):
        def enum_windows(callback, extra):
            for hwnd in (0x10, 0x20):
                callback(hwnd, extra)

        monkeypatch.setattr(win32_driver.win32gui, "EnumWindows", enum_windows)
        monkeypatch.setattr(win32_driver.win32gui, "IsWindowVisible", lambda hwnd: True)
        rec = Recorder(driver, monkeypatch, *self.HANDLERS)

        driver.list_clients()
        send(driver, EVENT_OBJECT_SHOW, 0x10)
        send(driver, EVENT_OBJECT_SHOW, 0x30)

        assert rec.calls == [("on_client_added", driver._client(0x30))]

    def test_destroy_removes_and_forgets(self, driver, monkeypatch):
        rec = Recorder(driver, monkeypatch, *self.HANDLERS)
        send(driver, EVENT_OBJECT_SHOW, 0x10)
        client = driver._clients[0x10]

        send(driver, EVENT_OBJECT_DESTROY, 0x10)
        assert rec.calls[-1] == ("on_client_removed", client)
        assert 0x10 not in driver._clients

        send(driver, EVENT_OBJECT_SHOW, 0x10)
        assert rec.calls[-1][0] == "on_client_added"
