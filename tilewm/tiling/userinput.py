"""
tilewm.tiling.userinput - Comandos abstractos de usuario.

El adaptador traduce atajos de teclado a estos valores y los entrega a
TilingEngine.handle_user_input(). Los layouts pueden interceptarlos.
"""

from __future__ import annotations

import enum


class UserInput(enum.Enum):
    """Comando abstracto que el usuario puede emitir."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    SHIFT_UP = "shift_up"
    SHIFT_DOWN = "shift_down"
    SHIFT_LEFT = "shift_left"
    SHIFT_RIGHT = "shift_right"

    INCREASE = "increase"
    DECREASE = "decrease"

    SET_MASTER = "set_master"
    FLOAT = "float"
    CYCLE_LAYOUT = "cycle_layout"
