"""Deterministic icon and color defaults for categories."""

from typing import NamedTuple, Tuple


class StyleDefaults(NamedTuple):
    """Presentation defaults derived from a category name."""

    icon: str
    color: str


def _to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _utf16_code_units(text: str):
    """Yield the UTF-16 code units of text (surrogate pairs split in two)."""
    raw = text.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        yield raw[i] | (raw[i + 1] << 8)


class StyleAssigner:
    """Computes icon/color defaults from a category name.

    The result depends on nothing but the name, so the same name yields the
    same pair on every run and every platform. Only fields the caller left
    empty should be filled from here.
    """

    # First keyword found in the lower-cased name wins; order matters.
    ICON_KEYWORDS: Tuple[Tuple[str, str], ...] = (
        ("tutorial", "📚"),
        ("guide", "📋"),
        ("guideline", "📋"),
        ("reference", "📖"),
        ("faq", "❓"),
        ("documentation", "🔧"),
        ("meeting", "📝"),
        ("note", "📝"),
        ("policy", "📄"),
        ("procedure", "⚙️"),
        ("help", "❓"),
        ("support", "🆘"),
        ("knowledge", "🧠"),
        ("resource", "📦"),
        ("template", "📋"),
        ("example", "💡"),
    )

    FALLBACK_ICON = "📁"

    PALETTE: Tuple[str, ...] = (
        "#1976d2",
        "#388e3c",
        "#f57c00",
        "#7b1fa2",
        "#d32f2f",
        "#455a64",
        "#00796b",
        "#5d4037",
        "#616161",
        "#e91e63",
        "#9c27b0",
        "#3f51b5",
    )

    @classmethod
    def name_hash(cls, name: str) -> int:
        """Rolling hash of the name: h = c + (h << 5) - h, 32-bit signed wrap.

        Characters are taken as UTF-16 code units so the value matches
        implementations that hash JavaScript-style strings.
        """
        value = 0
        for unit in _utf16_code_units(name):
            value = _to_int32(unit + (value << 5) - value)
        return value

    @classmethod
    def pick_icon(cls, name: str) -> str:
        lowered = name.lower()
        for keyword, icon in cls.ICON_KEYWORDS:
            if keyword in lowered:
                return icon
        return cls.FALLBACK_ICON

    @classmethod
    def pick_color(cls, name: str) -> str:
        return cls.PALETTE[abs(cls.name_hash(name)) % len(cls.PALETTE)]

    @classmethod
    def assign_defaults(cls, name: str) -> StyleDefaults:
        """Compute the default (icon, color) pair for a category name.

        Args:
            name: Category name as stored (already trimmed).

        Returns:
            StyleDefaults with the keyword-matched icon and hash-picked color.
        """
        return StyleDefaults(icon=cls.pick_icon(name), color=cls.pick_color(name))
