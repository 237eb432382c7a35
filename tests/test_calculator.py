import itertools

from models.calculator import distance, in_range
from models.geo import Point, Rectangle

BERKSHIRE = Point(latitude=409146138, longitude=-746188906)

def test_distance_same_point_is_zero():
    assert distance(BERKSHIRE, BERKSHIRE) == 0
    assert distance(Point(), Point()) == 0

def test_distance_is_symmetric():
    points = [
        BERKSHIRE,
        Point(latitude=0, longitude=0),
        Point(latitude=-899999999, longitude=1799999999),
        Point(latitude=413628156, longitude=-749015468),
    ]
    for a, b in itertools.permutations(points, 2):
        assert distance(a, b) == distance(b, a)

def test_one_degree_of_latitude():
    # R * pi / 180 = 111194.93 m, truncated
    assert distance(Point(latitude=0, longitude=0), Point(latitude=10000000, longitude=0)) == 111194

def test_distance_truncates_to_int():
    d = distance(BERKSHIRE, Point(latitude=413628156, longitude=-749015468))
    assert isinstance(d, int) and d > 0

def test_in_range_inclusive_edges():
    rect = Rectangle(lo=Point(latitude=0, longitude=0), hi=Point(latitude=10, longitude=20))
    for lat, lon in [(0, 0), (10, 20), (0, 20), (10, 0), (5, 7)]:
        assert in_range(Point(latitude=lat, longitude=lon), rect)
    for lat, lon in [(-1, 0), (11, 5), (5, 21), (5, -1)]:
        assert not in_range(Point(latitude=lat, longitude=lon), rect)

def test_in_range_ignores_corner_order():
    a = Point(latitude=400000000, longitude=-750000000)
    b = Point(latitude=420000000, longitude=-730000000)
    swapped = [Rectangle(lo=a, hi=b), Rectangle(lo=b, hi=a),
               Rectangle(lo=Point(latitude=a.latitude, longitude=b.longitude),
                         hi=Point(latitude=b.latitude, longitude=a.longitude))]
    for rect in swapped:
        assert in_range(BERKSHIRE, rect)
        assert not in_range(Point(), rect)
