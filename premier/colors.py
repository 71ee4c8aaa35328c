from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Sequence

SHADE_SPREAD = 0.4

FALLBACK_PALETTE = [
    "rgba(102, 126, 234, 1)",
    "rgba(237, 100, 166, 1)",
    "rgba(255, 159, 64, 1)",
    "rgba(75, 192, 192, 1)",
    "rgba(153, 102, 255, 1)",
]

_ALPHA_TERM = re.compile(r",\s*([0-9]*\.?[0-9]+)\s*\)\s*$")


def shade_alpha(position: int, total: int) -> float:
    """Opacity for the ``position``-th of ``total`` series sharing a hue."""
    if total <= 0:
        raise ValueError(f"total must be positive, got {total}")
    return 1 - (position / total) * SHADE_SPREAD


def _format_alpha(alpha: float) -> str:
    return f"{round(alpha, 4):g}"


def generate_shade(base_color: str, position: int, total: int) -> str:
    """Swap the opacity term of an ``rgba(r, g, b, a)`` colour for the shade's alpha."""
    alpha = _format_alpha(shade_alpha(position, total))
    if not _ALPHA_TERM.search(base_color):
        raise ValueError(f"Expected an rgba(...) colour, got {base_color!r}")
    return _ALPHA_TERM.sub(f", {alpha})", base_color)


def assign_colors(
    names: Sequence[str],
    categories: Sequence[Optional[str]],
    category_colors: Mapping[str, str],
    fixed_colors: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Colour for each series, in order.

    Series with a known category get a shade of the category hue, ranked by
    their position among same-category series. Names in ``fixed_colors`` keep
    that colour; anything else cycles through the fallback palette.
    """
    fixed_colors = fixed_colors or {}
    totals: Dict[str, int] = {}
    for cat in categories:
        if cat in category_colors:
            totals[cat] = totals.get(cat, 0) + 1

    seen: Dict[str, int] = {}
    fallback_idx = 0
    out: List[str] = []
    for name, cat in zip(names, categories):
        if name in fixed_colors:
            out.append(fixed_colors[name])
        elif cat in category_colors:
            position = seen.get(cat, 0)
            seen[cat] = position + 1
            out.append(generate_shade(category_colors[cat], position, totals[cat]))
        else:
            out.append(FALLBACK_PALETTE[fallback_idx % len(FALLBACK_PALETTE)])
            fallback_idx += 1
    return out
