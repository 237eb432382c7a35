# Trip statistics over a stream of traversed points.
import time
from typing import Callable, Optional

from models.calculator import distance
from models.feature_store import FeatureStore
from models.geo import Point, RouteSummary


class RouteRecorder:
    """
    One recorder per RecordRoute call.
      start()      -> reset counters, start the timer
      add(point)   -> count point, count known feature, accumulate distance
      finish()     -> RouteSummary (elapsed whole seconds)
    """

    def __init__(self, store: FeatureStore, clock: Callable[[], float] = time.monotonic):
        self.store = store
        self.clock = clock
        self.start()

    def start(self):
        self.point_count = 0
        self.feature_count = 0
        self.distance = 0
        self.last_point: Optional[Point] = None
        self.started_at = self.clock()

    def add(self, point: Point):
        self.point_count += 1
        if self.store.get_exact(point).is_named:
            self.feature_count += 1
        if self.last_point is not None:
            self.distance += distance(self.last_point, point)
        self.last_point = point

    def finish(self) -> RouteSummary:
        elapsed = self.clock() - self.started_at
        return RouteSummary(
            point_count=self.point_count,
            feature_count=self.feature_count,
            distance=self.distance,
            elapsed_time=int(elapsed),
        )
