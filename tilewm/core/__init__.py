"""
tilewm.core - Host adapter subsystem.

This package contains:
    - host          : HostDriver - platform-neutral event glue for the engine
    - combo_parser  : Shortcut sequence parsing ("Alt+Shift+J" -> flags, vk)
    - monitor       : Monitor enumeration via pywin32 (Windows only)
    - win32_driver  : Win32Driver - the Windows adapter (Windows only)

Only the platform-neutral modules are re-exported here.
"""

from tilewm.core.host import HostDriver
from tilewm.core.combo_parser import ComboParseError, parse_combo

__all__ = ["HostDriver", "ComboParseError", "parse_combo"]
