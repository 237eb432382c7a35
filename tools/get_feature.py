from models.feature_store import FeatureStore
from models.geo import Feature, Point

def tool_get_feature(store: FeatureStore, point: Point) -> Feature:
    """
    Input:  Point
    Output: the stored Feature at that exact location, or an unnamed
            Feature carrying the queried location. Absence is not an error.
    """
    return store.get_exact(point)
