"""Ratio and percentage scales.

The wizard collects rates on the 0-100 scale; the engine only ever sees
ratios. ``percentage_to_ratio`` is the one place that crosses between them.
"""

from __future__ import annotations


class Ratio(float):
    """Fraction in decimal form, e.g. 0.7 for 70%."""

    def __repr__(self) -> str:
        return f"Ratio({float(self)!r})"


class Percentage(float):
    """Value on the 0-100 scale, e.g. 70 for 70%."""

    def __repr__(self) -> str:
        return f"Percentage({float(self)!r})"


def percentage_to_ratio(value: Percentage) -> Ratio:
    if isinstance(value, Ratio):
        raise TypeError(f"{value!r} is already a ratio")
    return Ratio(float(value) / 100.0)
