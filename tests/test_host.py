"""Tests for HostDriver event glue."""

import logging

import pytest

from conftest import FakeClient, FakeDriver
from tilewm.config.shortcuts import SHORTCUTS
from tilewm.core.combo_parser import parse_combo
from tilewm.core.host import HostDriver
from tilewm.tiling.rect import Rect
from tilewm.tiling.userinput import UserInput


class FakeHost(FakeDriver, HostDriver):
    """HostDriver backed by the in-memory FakeDriver."""

    def __init__(self, clients=(), screens=1, **kwargs):
        FakeDriver.__init__(self, {i: Rect(i * 1000, 0, 1000, 800) for i in range(4)})
        HostDriver.__init__(self, **kwargs)
        self.clients = list(clients)
        self.reported_screens = screens
        self.special = set()
        self.watched = []
        self.registered = []

    def list_clients(self):
        return list(self.clients)

    def screen_count(self):
        return self.reported_screens

    def is_special_window(self, client):
        return client in self.special

    def watch_client(self, client):
        self.watched.append(client)

    def register_shortcut(self, sequence, title, callback):
        parse_combo(sequence)
        self.registered.append((sequence, title, callback))
        return True


def shortcut(host, sequence):
    for seq, _title, callback in host.registered:
        if seq == sequence:
            return callback
    raise KeyError(sequence)


@pytest.fixture
def host():
    host = FakeHost()
    host.start()
    return host


class TestScreens:
    def test_screen_count_follows_adapter(self, host):
        host.on_number_screens_changed(3)
        assert [s.id for s in host.engine.screens] == [0, 1, 2]

        host.on_number_screens_changed(1)
        assert [s.id for s in host.engine.screens] == [0]

    def test_start_syncs_screens(self):
        host = FakeHost(screens=2)
        host.start()
        assert [s.id for s in host.engine.screens] == [0, 1]


class TestStart:
    def test_adopts_existing_windows(self):
        app = FakeClient("app")
        krunner = FakeClient("krunner", class_name="krunner")
        shell = FakeClient("shell", class_name="plasmashell")
        popup = FakeClient("popup")

        host = FakeHost(clients=[app, krunner, shell, popup])
        host.special.add(popup)
        host.start()

        assert [t.client for t in host.engine.tiles] == [app]
        assert host.watched == [app]
        assert app.geometry == Rect(0, 0, 1000, 800)

    def test_binds_every_shortcut_with_modifier(self, host):
        assert len(host.registered) == len(SHORTCUTS)
        assert all(seq.startswith("Alt+") for seq, _, _ in host.registered)
        assert ("Alt+Shift+J", "tilewm: Move Down/Next") in [
            (seq, title) for seq, title, _ in host.registered
        ]

    def test_without_modifier(self):
        host = FakeHost(modifier=None)
        host.bind_shortcuts()
        assert host.registered[0][0] == "J"

    def test_invalid_shortcut_is_skipped(self, caplog):
        host = FakeHost(shortcuts=[
            ("Bogus", "Broken", UserInput.UP),
            ("J", "Down", UserInput.DOWN),
        ])
        with caplog.at_level(logging.ERROR, logger="tilewm.core.host"):
            assert host.bind_shortcuts() == 1
        assert "Invalid shortcut" in caplog.text

    def test_platform_without_shortcuts(self, host):
        assert HostDriver.register_shortcut(host, "Alt+J", "x", lambda: None) is False

    def test_shortcut_drives_engine(self, host):
        a, b = FakeClient("a"), FakeClient("b")
        host.on_client_added(a)
        host.on_client_added(b)
        host.active = b

        shortcut(host, "Alt+Return")()
        assert [t.client for t in host.engine.tiles] == [b, a]


class TestClientEvents:
    def test_removed(self, host):
        a = FakeClient("a")
        host.on_client_added(a)
        host.on_client_removed(a)
        assert host.engine.tiles == []

    def test_geometry_change_ignored_while_moving(self, host):
        a = FakeClient("a")
        host.on_client_added(a)
        a.geometry = Rect(3, 3, 30, 30)

        host.on_move_resize_started(a)
        host.on_geometry_changed(a)
        assert host.is_client_moving(a)
        assert a.geometry == Rect(3, 3, 30, 30)

    def test_geometry_change_reconciled_when_not_moving(self, host):
        a = FakeClient("a")
        host.on_client_added(a)
        a.geometry = Rect(3, 3, 30, 30)

        host.on_geometry_changed(a)
        assert a.geometry == Rect(0, 0, 1000, 800)

    def test_drop_after_drag_floats_window(self, host):
        a, b = FakeClient("a"), FakeClient("b")
        host.on_client_added(a)
        host.on_client_added(b)

        host.on_move_resize_started(a)
        a.geometry = Rect(5, 5, 200, 200)
        host.on_move_resize_finished(a)

        assert not host.is_client_moving(a)
        assert host.engine.get_tile(a).floating
        assert a.geometry == Rect(5, 5, 200, 200)
        assert a.keep_above is True
        assert b.geometry == Rect(0, 0, 1000, 800)

    def test_drag_of_one_window_does_not_float_others(self, host):
        a, b = FakeClient("a"), FakeClient("b")
        host.on_client_added(a)
        host.on_client_added(b)

        host.on_move_resize_started(b)
        a.geometry = Rect(40, 40, 100, 100)
        host.on_geometry_changed(a)
        assert a.geometry == Rect(0, 0, 550, 800)

        host.on_move_resize_finished(b)
        assert host.engine.get_tile(b).floating
        assert not host.engine.get_tile(a).floating
        assert a.geometry == Rect(0, 0, 1000, 800)

    def test_moves_are_tracked_per_window(self, host):
        a, b = FakeClient("a"), FakeClient("b")
        host.on_client_added(a)
        host.on_client_added(b)

        host.on_move_resize_started(a)
        host.on_move_resize_started(b)
        host.on_move_resize_finished(b)
        assert host.is_client_moving(a)
        assert not host.is_client_moving(b)

        host.on_client_removed(a)
        assert not host.is_client_moving(a)

    def test_handler_errors_are_logged_not_raised(self, host, monkeypatch, caplog):
        def boom():
            raise RuntimeError("boom")

        monkeypatch.setattr(host.engine, "arrange", boom)
        with caplog.at_level(logging.ERROR, logger="tilewm.core.host"):
            assert host.on_workspace_changed() is None
        assert "on_workspace_changed" in caplog.text
