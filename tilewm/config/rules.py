"""
tilewm.config.rules - Reglas de gestion por defecto.

    DEFAULT_RULES : Reglas que el host carga en el engine al arrancar.
    SHELL_CLASSES : Clases de ventana del propio escritorio que el host
                    nunca ofrece al engine (barras, fondos, lanzadores).
"""

from __future__ import annotations

from tilewm.tiling.rules import Rule

DEFAULT_RULES: list[Rule] = [
    Rule("krunner", ignore=True),
]

SHELL_CLASSES: frozenset[str] = frozenset({
    "plasmashell",
    "Shell_TrayWnd",            # Taskbar
    "Shell_SecondaryTrayWnd",   # Taskbar del monitor secundario
    "Progman",                  # Escritorio
    "WorkerW",                  # Fondo de pantalla
})
