# Fixed-point and geodesy constants shared by the calculator and the client.

COORD_FACTOR = 1e7          # degrees are stored as int(degrees * 1e7)
EARTH_RADIUS_M = 6371000.0  # mean Earth radius [m]

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

def to_degrees(value: int) -> float:
    """Fixed-point coordinate -> degrees."""
    return value / COORD_FACTOR

def to_fixed(degrees: float) -> int:
    """Degrees -> fixed-point coordinate (truncated)."""
    return int(degrees * COORD_FACTOR)
