# Geodesy helpers: bounding-box containment and haversine distance.
# Haversine after http://www.movable-type.co.uk/scripts/latlong.html
import math

from models.constants import EARTH_RADIUS_M
from models.geo import Point, Rectangle

def in_range(point: Point, rect: Rectangle) -> bool:
    """Inclusive containment test; rect corners may be given in any order."""
    left = min(rect.lo.longitude, rect.hi.longitude)
    right = max(rect.lo.longitude, rect.hi.longitude)
    top = max(rect.lo.latitude, rect.hi.latitude)
    bottom = min(rect.lo.latitude, rect.hi.latitude)
    return left <= point.longitude <= right and bottom <= point.latitude <= top

def distance(p1: Point, p2: Point) -> int:
    """Great-circle distance in whole meters (truncated)."""
    lat1, lng1 = p1.degrees()
    lat2, lng2 = p2.degrees()
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return int(EARTH_RADIUS_M * c)
