"""
tilewm.core.monitor - Monitor enumeration on Windows.

Uses win32api from pywin32 to read each monitor's full rectangle and
its work area (minus taskbar and app bars). The list index is the
screen id handed to the tiling engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import win32api
import win32con

from tilewm.tiling.rect import Rect

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Monitor:
    """
    A physical monitor.

    Attributes:
        handle:     HMONITOR value.
        name:       Device name (e.g. r'\\\\.\\DISPLAY1').
        full_rect:  Whole monitor area.
        work_rect:  Work area (minus taskbar and bars).
        is_primary: True for the primary monitor.
    """

    handle: int
    name: str
    full_rect: Rect
    work_rect: Rect
    is_primary: bool = False


def get_monitors() -> list[Monitor]:
    """
    Enumerate connected monitors, primary first, then by device name.
    """
    monitors: list[Monitor] = []

    for hmonitor, _hdc, _rect in win32api.EnumDisplayMonitors(None, None):
        try:
            info = win32api.GetMonitorInfo(hmonitor)
        except Exception:
            log.warning("Could not read monitor info for %s", hmonitor)
            continue

        monitors.append(
            Monitor(
                handle=int(hmonitor),
                name=info["Device"],
                full_rect=Rect.from_ltrb(*info["Monitor"]),
                work_rect=Rect.from_ltrb(*info["Work"]),
                is_primary=bool(info["Flags"] & win32con.MONITORINFOF_PRIMARY),
            )
        )

    monitors.sort(key=lambda m: (not m.is_primary, m.name))
    log.debug("Monitors: %s", [m.name for m in monitors])
    return monitors
