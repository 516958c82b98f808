"""
tilewm.config.shortcuts - Definicion de atajos del tiling.

Cada atajo es (secuencia, titulo, comando). El host antepone MODIFIER a
cada secuencia antes de registrarla:

    Foco (estilo vim):
        J / K               -> Siguiente / anterior
        H / L               -> Izquierda / derecha (los usa el layout)

    Mover ventana:
        Shift + J / K       -> Mover abajo / arriba en el orden
        Shift + H / L       -> Mover izquierda / derecha (los usa el layout)

    Layout:
        I / D               -> Aumentar / disminuir
        \\                   -> Siguiente layout

    Ventana:
        F                   -> Alternar flotante
        Return              -> Promover a master
"""

from __future__ import annotations

from tilewm.tiling.userinput import UserInput

MODIFIER = "Alt"

SHORTCUTS: list[tuple[str, str, UserInput]] = [
    ("J", "Down/Next", UserInput.DOWN),
    ("K", "Up/Prev", UserInput.UP),
    ("H", "Left", UserInput.LEFT),
    ("L", "Right", UserInput.RIGHT),

    ("Shift+J", "Move Down/Next", UserInput.SHIFT_DOWN),
    ("Shift+K", "Move Up/Prev", UserInput.SHIFT_UP),
    ("Shift+H", "Move Left", UserInput.SHIFT_LEFT),
    ("Shift+L", "Move Right", UserInput.SHIFT_RIGHT),

    ("I", "Increase", UserInput.INCREASE),
    ("D", "Decrease", UserInput.DECREASE),
    ("F", "Float", UserInput.FLOAT),
    ("Backslash", "Cycle Layout", UserInput.CYCLE_LAYOUT),

    ("Return", "Set master", UserInput.SET_MASTER),
]
