"""
tilewm.core.combo_parser - Shortcut sequence parser.

Turns readable sequences such as "Alt+Shift+J" into the (modifiers, vk)
pair that RegisterHotKey expects. The flag values are the Win32 ones,
but nothing here touches the OS, so sequences can be validated on any
platform.

    - Aliases: win = super = meta, ctrl = control.
    - Case-insensitive: "Alt+Shift+J" == "alt+shift+j".
    - Clear errors (ComboParseError) for malformed sequences.
"""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


# RegisterHotKey modifier flags
MOD_ALT = 0x0001
MOD_CONTROL = 0x0002
MOD_SHIFT = 0x0004
MOD_WIN = 0x0008
MOD_NOREPEAT = 0x4000

_MODIFIER_MAP: dict[str, int] = {
    "alt": MOD_ALT,
    "ctrl": MOD_CONTROL,
    "control": MOD_CONTROL,
    "shift": MOD_SHIFT,
    "win": MOD_WIN,
    "super": MOD_WIN,
    "meta": MOD_WIN,
}

# Order used when printing a combo back
_MODIFIER_NAMES: list[tuple[int, str]] = [
    (MOD_WIN, "Win"),
    (MOD_CONTROL, "Ctrl"),
    (MOD_ALT, "Alt"),
    (MOD_SHIFT, "Shift"),
]


# ============================================================================
# Virtual key name -> VK code
# ============================================================================
_VK_MAP: dict[str, int] = {}


def _build_vk_map() -> None:
    """Populate the VK name map on first use."""
    if _VK_MAP:
        return

    # Letters A-Z (VK 0x41 - 0x5A)
    for i in range(26):
        _VK_MAP[chr(ord("a") + i)] = 0x41 + i

    # Digits 0-9 (VK 0x30 - 0x39)
    for i in range(10):
        _VK_MAP[str(i)] = 0x30 + i

    # Function keys F1-F12
    for i in range(1, 13):
        _VK_MAP[f"f{i}"] = 0x70 + (i - 1)

    _VK_MAP.update(
        {
            "return": 0x0D,
            "enter": 0x0D,
            "escape": 0x1B,
            "space": 0x20,
            "tab": 0x09,
            "left": 0x25,
            "up": 0x26,
            "right": 0x27,
            "down": 0x28,
            "comma": 0xBC,
            "minus": 0xBD,
            "period": 0xBE,
            "slash": 0xBF,
            "backslash": 0xDC,
            "\\": 0xDC,
        }
    )


# ============================================================================
# Public API
# ============================================================================

class ComboParseError(ValueError):
    """Raised when a shortcut sequence cannot be parsed."""
    pass


def parse_combo(combo: str) -> tuple[int, int]:
    """
    Parse a shortcut sequence into (modifiers, vk).

    Args:
        combo: Sequence like "Alt+Shift+J". Parts separated by '+'.

    Returns:
        Tuple of (modifier_flags, virtual_key_code).

    Raises:
        ComboParseError: If the sequence is empty, has no key part or more
                         than one, has unknown tokens or repeated modifiers.
    """
    _build_vk_map()

    if not combo or not combo.strip():
        raise ComboParseError("Empty combo string")

    parts = [p.strip().lower() for p in combo.split("+")]
    parts = [p for p in parts if p]

    modifiers = 0
    vk: int | None = None

    for part in parts:
        if part in _MODIFIER_MAP:
            flag = _MODIFIER_MAP[part]
            if modifiers & flag:
                raise ComboParseError(f"Duplicate modifier {part!r} in combo: {combo!r}")
            modifiers |= flag
        elif part in _VK_MAP:
            if vk is not None:
                raise ComboParseError(
                    f"Multiple key parts in combo: {combo!r}. "
                    f"Only one non-modifier key is allowed."
                )
            vk = _VK_MAP[part]
        else:
            raise ComboParseError(f"Unknown key or modifier: {part!r} in combo: {combo!r}")

    if vk is None:
        raise ComboParseError(f"No key found in combo: {combo!r}")

    return modifiers, vk


def combo_to_str(modifiers: int, vk: int) -> str:
    """Convert (modifiers, vk) back to a readable sequence for logging."""
    _build_vk_map()

    parts = [name for flag, name in _MODIFIER_NAMES if modifiers & flag]

    vk_name = None
    for name, code in _VK_MAP.items():
        if code == vk:
            vk_name = name.upper() if len(name) == 1 else name.capitalize()
            break

    parts.append(vk_name if vk_name is not None else f"0x{vk:02X}")
    return "+".join(parts)


def is_valid_combo(combo: str) -> bool:
    """Check if a sequence is valid without raising."""
    try:
        parse_combo(combo)
        return True
    except ComboParseError:
        return False
