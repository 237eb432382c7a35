import time

from models.feature_store import FeatureStore
from models.geo import RouteSummary
from models.route_recorder import RouteRecorder

def tool_record_route(store: FeatureStore, stream, clock=time.monotonic) -> RouteSummary:
    """
    Input:  stream of Point
    Output: one RouteSummary once the caller ends its stream.
    A transport error while reading propagates and no summary is produced.
    """
    recorder = RouteRecorder(store, clock)
    for point in stream:
        recorder.add(point)
    return recorder.finish()
