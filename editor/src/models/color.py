"""
Grid Map Editor - Color Domain Model

Canonical RGBA color representation for cells, marks, shadows and overlays.
Colors travel through snapshots as hex strings (#RRGGBB or #RRGGBBAA).
"""

from typing import Tuple


class Color:
    """Immutable RGBA color with uint8 storage.

    Instances are hashable and compare by value, so cells holding equal
    colors compare equal (used to detect no-op grid writes).
    """

    __slots__ = ('_r', '_g', '_b', '_a')

    def __init__(self, r: int, g: int, b: int, a: int = 255):
        """Direct construction from uint8 values (0-255).

        Args:
            r: Red component (0-255)
            g: Green component (0-255)
            b: Blue component (0-255)
            a: Alpha component (0-255), opaque by default
        """
        # Clamp to valid uint8 range
        self._r = max(0, min(255, int(r)))
        self._g = max(0, min(255, int(g)))
        self._b = max(0, min(255, int(b)))
        self._a = max(0, min(255, int(a)))

    @property
    def r(self) -> int:
        """Red component (0-255) - READ ONLY"""
        return self._r

    @property
    def g(self) -> int:
        """Green component (0-255) - READ ONLY"""
        return self._g

    @property
    def b(self) -> int:
        """Blue component (0-255) - READ ONLY"""
        return self._b

    @property
    def a(self) -> int:
        """Alpha component (0-255) - READ ONLY"""
        return self._a

    @property
    def alpha_f(self) -> float:
        """Alpha as a 0-1 float (used as a compositing opacity)"""
        return self._a / 255.0

    # ========================================
    # Derived Colors
    # ========================================

    def opaque(self) -> 'Color':
        """Same RGB with alpha forced to 255."""
        return Color(self._r, self._g, self._b, 255)

    def with_alpha(self, a: int) -> 'Color':
        return Color(self._r, self._g, self._b, a)

    # ========================================
    # Output Methods
    # ========================================

    def to_hex(self) -> str:
        """Convert to a lowercase hex string.

        Returns:
            '#rrggbb' for opaque colors, '#rrggbbaa' otherwise
        """
        if self._a == 255:
            return f"#{self._r:02x}{self._g:02x}{self._b:02x}"
        return f"#{self._r:02x}{self._g:02x}{self._b:02x}{self._a:02x}"

    def to_rgba(self) -> Tuple[int, int, int, int]:
        return (self._r, self._g, self._b, self._a)

    def to_qcolor(self):
        """Convert to PyQt5 QColor object.

        Returns:
            QColor: Qt color object for rendering
        """
        from PyQt5.QtGui import QColor
        return QColor(self._r, self._g, self._b, self._a)

    # ========================================
    # Static Factory Methods
    # ========================================

    @staticmethod
    def from_hex(hex_string: str, default_alpha: int = 255) -> 'Color':
        """Create Color from a hex string.

        Accepts #RGB, #RRGGBB and #RRGGBBAA, with or without the leading #.

        Args:
            hex_string: Hex color string
            default_alpha: Alpha used when the string carries no alpha byte

        Returns:
            Color object

        Raises:
            ValueError: If the string is not a valid hex color
        """
        if not isinstance(hex_string, str):
            raise ValueError(f"Color must be a hex string, got {type(hex_string).__name__}")

        digits = hex_string.strip().lstrip('#')
        if len(digits) == 3:
            digits = ''.join(c * 2 for c in digits)

        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {hex_string!r}")

        try:
            r = int(digits[0:2], 16)
            g = int(digits[2:4], 16)
            b = int(digits[4:6], 16)
            a = int(digits[6:8], 16) if len(digits) == 8 else default_alpha
        except ValueError:
            raise ValueError(f"Invalid hex color: {hex_string!r}") from None
        return Color(r, g, b, a)

    # ========================================
    # Comparison
    # ========================================

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.to_rgba() == other.to_rgba()

    def __hash__(self):
        return hash(self.to_rgba())

    def __repr__(self):
        return f"Color({self.to_hex()})"
