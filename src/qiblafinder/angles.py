"""Angle helpers used by the direction engine."""


def normalize_to_scale(value: float, maximum: float) -> float:
    """Wrap value into [0, maximum)."""
    result = value % maximum
    # tiny negative inputs round up to exactly maximum
    return 0.0 if result >= maximum else result


def unwind_angle(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    return normalize_to_scale(angle, 360.0)


def signed_angle(angle: float) -> float:
    """Wrap an angle in degrees into (-180, 180]."""
    wrapped = unwind_angle(angle)
    return wrapped - 360.0 if wrapped > 180.0 else wrapped
