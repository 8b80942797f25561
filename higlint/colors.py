"""Color parsing and WCAG contrast math."""

from __future__ import annotations

import re

RGBA = tuple[int, int, int, float]
RGB = tuple[float, float, float]

NAMED_COLORS: dict[str, RGBA] = {
    "white": (255, 255, 255, 1.0),
    "black": (0, 0, 0, 1.0),
}

_HEX_RE = re.compile(r"#([0-9a-f]{3,8})")
_RGB_RE = re.compile(r"rgba?\(([^)]+)\)")


def parse_color(value: str) -> RGBA | None:
    """Parse '#rgb', '#rgba', '#rrggbb', '#rrggbbaa', 'rgb()'/'rgba()' or a named color.

    Returns None if the value is not a color.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip().lower()
    if value in NAMED_COLORS:
        return NAMED_COLORS[value]

    rgba_match = _RGB_RE.fullmatch(value)
    if rgba_match:
        parts = [p.strip() for p in rgba_match.group(1).split(",")]
        if len(parts) not in (3, 4):
            return None
        try:
            r, g, b = (int(float(p)) for p in parts[:3])
            a = float(parts[3]) if len(parts) == 4 else 1.0
        except (ValueError, OverflowError):
            return None
        if not all(0 <= c <= 255 for c in (r, g, b)) or not 0.0 <= a <= 1.0:
            return None
        return r, g, b, a

    hex_match = _HEX_RE.fullmatch(value)
    if hex_match:
        h = hex_match.group(1)
        if len(h) in {3, 4}:
            r = int(h[0] * 2, 16)
            g = int(h[1] * 2, 16)
            b = int(h[2] * 2, 16)
            a = int(h[3] * 2, 16) / 255.0 if len(h) == 4 else 1.0
            return r, g, b, a
        if len(h) in {6, 8}:
            r = int(h[0:2], 16)
            g = int(h[2:4], 16)
            b = int(h[4:6], 16)
            a = int(h[6:8], 16) / 255.0 if len(h) == 8 else 1.0
            return r, g, b, a
    return None


def composite(fg: RGBA, bg: RGBA) -> RGB:
    """Blend a possibly translucent foreground over an opaque background."""
    alpha = fg[3]
    return (
        fg[0] * alpha + bg[0] * (1.0 - alpha),
        fg[1] * alpha + bg[1] * (1.0 - alpha),
        fg[2] * alpha + bg[2] * (1.0 - alpha),
    )


def relative_luminance(rgb: RGB) -> float:
    def channel(c: float) -> float:
        c = c / 255.0
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(rgb[0]) + 0.7152 * channel(rgb[1]) + 0.0722 * channel(rgb[2])


def luminance_contrast(l1: float, l2: float) -> float:
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio(foreground: RGBA, background: RGBA) -> float:
    """WCAG contrast ratio between a foreground and the background it sits on.

    Background alpha is ignored; surfaces are treated as opaque.
    """
    bg = (float(background[0]), float(background[1]), float(background[2]))
    fg = composite(foreground, background)
    return luminance_contrast(relative_luminance(fg), relative_luminance(bg))


def contrast_between(foreground: str, background: str) -> float:
    """Contrast ratio for two color strings. Raises ValueError on unparseable input."""
    fg = parse_color(foreground)
    if fg is None:
        raise ValueError(f"not a color: {foreground!r}")
    bg = parse_color(background)
    if bg is None:
        raise ValueError(f"not a color: {background!r}")
    return contrast_ratio(fg, bg)
