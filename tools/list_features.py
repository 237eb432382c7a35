from functools import partial

from models.calculator import in_range
from models.feature_store import FeatureStore
from models.geo import Rectangle

def tool_list_features(store: FeatureStore, rect: Rectangle, stream) -> int:
    """
    Input:  Rectangle (corners in any order)
    Output: every stored Feature inside it, streamed in store order.
    The first failed send aborts the call; already delivered features stay delivered.
    """
    sent = 0
    for feature in store.all_matching(partial(in_range, rect=rect)):
        stream.send(feature)
        sent += 1
    return sent
