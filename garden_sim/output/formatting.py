"""String formatting for simulation output (CSV cells and stdout).

Missing values (None) always render as an empty cell.

Public API
----------
fmt_float    – Fixed-point number, ``FLOAT_PRECISION`` decimals by default.
fmt_currency – Money amount, ``CURRENCY_PRECISION`` decimals by default.
fmt_pct      – Percentage without the % sign.
"""

from __future__ import annotations

from garden_sim.config.defaults import CURRENCY_PRECISION, FLOAT_PRECISION


def _fixed(value: float | None, decimals: int) -> str:
    return "" if value is None else f"{value:.{decimals}f}"


def fmt_float(value: float | None, precision: int = FLOAT_PRECISION) -> str:
    """Format *value* with *precision* decimals, e.g. ``"3.1416"``."""
    return _fixed(value, precision)


def fmt_currency(value: float | None, precision: int = CURRENCY_PRECISION) -> str:
    """Format a money amount such as a net return, e.g. ``"-40.13"``."""
    return _fixed(value, precision)


def fmt_pct(
    value: float | None,
    precision: int = 2,
    *,
    already_pct: bool = False,
) -> str:
    """Format a percentage.

    Parameters
    ----------
    value:
        A fraction (``0.0735`` → ``"7.35"``) or, with ``already_pct=True``,
        a value already in percent such as ROI or success rate
        (``36.2`` → ``"36.20"``).
    precision:
        Decimal places.
    already_pct:
        Skip the ×100 scaling.
    """
    if value is None:
        return ""
    return _fixed(value if already_pct else value * 100.0, precision)
