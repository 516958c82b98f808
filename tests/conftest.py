"""Shared fakes and fixtures for tilewm tests."""

import pytest

from tilewm.tiling.engine import TilingEngine
from tilewm.tiling.layouts import ColumnsLayout, MonocleLayout
from tilewm.tiling.rect import Rect


class FakeClient:
    """Scriptable stand-in for an adapter window handle."""

    def __init__(self, name, class_name="app", geometry=None, screen=0):
        self.name = name
        self.class_name = class_name
        self.geometry = geometry if geometry is not None else Rect(10, 10, 300, 200)
        self.screen = screen
        self.visible = True
        self.full_screen = False
        self.broken = False
        self.honors_geometry = True
        self.keep_above = False
        self.keep_below = False

    def __repr__(self):
        return f"FakeClient({self.name!r})"


class FakeDriver:
    """In-memory Driver: records every geometry write."""

    def __init__(self, areas=None):
        self.areas = areas if areas is not None else {0: Rect(0, 0, 1200, 800)}
        self.active = None
        self.writes = []
        self.visibility_checks = 0

    def get_working_area(self, screen_id):
        return self.areas[screen_id].clone()

    def get_client_class_name(self, client):
        return client.class_name

    def get_client_geometry(self, client):
        if client.broken:
            raise RuntimeError("window is gone")
        return client.geometry.clone()

    def set_client_geometry(self, client, geometry):
        self.writes.append((client, geometry.clone()))
        if client.honors_geometry:
            client.geometry = geometry.clone()

    def is_client_visible(self, client, screen_id):
        self.visibility_checks += 1
        if client.broken:
            raise RuntimeError("window is gone")
        return client.visible and client.screen == screen_id

    def is_client_full_screen(self, client):
        return client.full_screen

    def get_client_screen(self, client):
        return client.screen

    def get_active_client(self):
        return self.active

    def set_active_client(self, client):
        self.active = client

    def writes_for(self, client):
        return [g for c, g in self.writes if c is client]


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def engine(driver):
    """Engine with one 1200x800 screen using equal columns, then monocle."""
    engine = TilingEngine(driver)
    engine.add_screen(0, [ColumnsLayout(), MonocleLayout()])
    return engine


@pytest.fixture
def abc_clients(engine):
    """Three managed windows A, B, C in that order."""
    clients = [FakeClient("A"), FakeClient("B"), FakeClient("C")]
    for client in clients:
        engine.manage_client(client)
    return clients
