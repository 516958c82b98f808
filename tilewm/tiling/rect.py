"""
tilewm.tiling.rect - Estructura geometrica Rect.

Define el rectangulo que describe tanto el area disponible de una
pantalla como la geometria destino de cada tile. Es mutable para poder
copiar geometria en sitio (copy_from), pero por convencion se trata
como un valor: quien necesite conservarlo debe usar clone().
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Rect:
    """
    Rectangulo definido por posicion (x, y) y dimensiones.

    Todas las coordenadas estan en pixeles del dispositivo. El core no
    valida que width/height sean no negativos: confia en el adaptador.

    Atributos:
        x:      Coordenada horizontal de la esquina superior-izquierda.
        y:      Coordenada vertical de la esquina superior-izquierda.
        width:  Ancho en pixeles.
        height: Alto en pixeles.
    """

    x: int
    y: int
    width: int
    height: int

    # ------------------------------------------------------------------
    # Copia
    # ------------------------------------------------------------------
    def clone(self) -> Rect:
        """Retorna una copia independiente."""
        return Rect(self.x, self.y, self.width, self.height)

    def copy_from(self, other: Rect) -> None:
        """Sobrescribe este rectangulo con los valores de *other*."""
        self.x = other.x
        self.y = other.y
        self.width = other.width
        self.height = other.height

    # ------------------------------------------------------------------
    # Propiedades derivadas
    # ------------------------------------------------------------------
    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    # ------------------------------------------------------------------
    # Operaciones geometricas
    # ------------------------------------------------------------------
    def split_horizontal(self, ratio: float = 0.5) -> tuple[Rect, Rect]:
        """
        Divide el rectangulo en columna izquierda / derecha.

        Args:
            ratio: Fraccion del ancho para la parte izquierda (0.0 - 1.0).

        Returns:
            Tupla (izquierda, derecha).
        """
        left_w = int(self.width * ratio)
        left = Rect(self.x, self.y, left_w, self.height)
        right = Rect(self.x + left_w, self.y, self.width - left_w, self.height)
        return left, right

    def slice_rows(self, count: int) -> list[Rect]:
        """
        Divide el rectangulo en *count* filas de igual alto.

        La ultima fila absorbe los pixeles sobrantes.
        """
        if count <= 0:
            return []

        base_h = self.height // count
        rects: list[Rect] = []
        y = self.y

        for i in range(count):
            h = base_h if i < count - 1 else self.height - (y - self.y)
            rects.append(Rect(self.x, y, self.width, h))
            y += h

        return rects

    def slice_columns(self, count: int) -> list[Rect]:
        """Divide el rectangulo en *count* columnas de igual ancho."""
        if count <= 0:
            return []

        base_w = self.width // count
        rects: list[Rect] = []
        x = self.x

        for i in range(count):
            w = base_w if i < count - 1 else self.width - (x - self.x)
            rects.append(Rect(x, self.y, w, self.height))
            x += w

        return rects

    def pad(self, gap: int) -> Rect:
        """
        Reduce el rectangulo aplicando un margen interior uniforme.

        Si el gap es mayor que las dimensiones, el ancho/alto queda en 0.
        """
        new_w = max(0, self.width - 2 * gap)
        new_h = max(0, self.height - 2 * gap)
        return Rect(self.x + gap, self.y + gap, new_w, new_h)

    # ------------------------------------------------------------------
    # Conversion a tupla Win32 (left, top, right, bottom)
    # ------------------------------------------------------------------
    def to_ltrb(self) -> tuple[int, int, int, int]:
        """Retorna (left, top, right, bottom) para compatibilidad Win32."""
        return (self.x, self.y, self.right, self.bottom)

    @classmethod
    def from_ltrb(cls, left: int, top: int, right: int, bottom: int) -> Rect:
        """Crea un Rect desde coordenadas (left, top, right, bottom)."""
        return cls(left, top, right - left, bottom - top)

    # ------------------------------------------------------------------
    # Representacion
    # ------------------------------------------------------------------
    def __str__(self) -> str:
        return f"Rect({self.width}x{self.height}+{self.x}+{self.y})"
