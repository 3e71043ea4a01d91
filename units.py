"""Physical length <-> device pixel conversion."""

MM_PER_INCH = 25.4


def mm_to_px(mm: float, dpi: float) -> float:
    """Millimetres to pixels at *dpi*. Negative or zero dpi is the caller's problem."""
    return (mm / MM_PER_INCH) * dpi


def px_to_mm(px: float, dpi: float) -> float:
    return px / dpi * MM_PER_INCH
