"""
tilewm.tiling.rules - Reglas declarativas por clase de ventana.

Las reglas se evaluan solo al gestionar una ventana. Una regla con
class_name vacio nunca coincide con nada.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class Rule:
    """
    Regla de gestion.

    Atributos:
        class_name: Clase de ventana a la que aplica (None = sin coincidencia).
        ignore:     Las ventanas que coinciden nunca se gestionan.
        floating:   Las ventanas que coinciden empiezan flotando.
    """

    class_name: Optional[str]
    ignore: bool = False
    floating: bool = False

    def __post_init__(self) -> None:
        if not self.class_name:
            object.__setattr__(self, "class_name", None)

    def matches(self, class_name: str) -> bool:
        return self.class_name is not None and self.class_name == class_name


def is_ignored(rules: Iterable[Rule], class_name: str) -> bool:
    """True si alguna regla que coincide pide ignorar la ventana."""
    return any(rule.ignore and rule.matches(class_name) for rule in rules)


def is_floating(rules: Iterable[Rule], class_name: str) -> bool:
    """True si alguna regla que coincide pide que la ventana flote."""
    return any(rule.floating and rule.matches(class_name) for rule in rules)
