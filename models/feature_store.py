# Read-only catalog of named features, loaded once from a JSON snapshot.
import json
from pathlib import Path
from typing import Callable, Iterable, Iterator, List

from pydantic import TypeAdapter, ValidationError

from models.geo import Feature, Point

SNAPSHOT = TypeAdapter(List[Feature])


class LoadError(Exception):
    """Snapshot could not be read or parsed; the server must not start."""


class FeatureStore:
    def __init__(self, features: Iterable[Feature] = ()):
        self._features = tuple(features)

    @classmethod
    def load(cls, path) -> "FeatureStore":
        """
        Load a snapshot: a JSON array of
          {"name": str, "location": {"latitude": int, "longitude": int}}
        Any I/O, JSON or schema problem raises LoadError.
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            features = SNAPSHOT.validate_python(data)
        except OSError as e:
            raise LoadError(f"Cannot read snapshot {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise LoadError(f"Snapshot {path} is not valid JSON: {e}") from e
        except ValidationError as e:
            raise LoadError(f"Snapshot {path} has invalid records: {e}") from e
        return cls(features)

    def __len__(self) -> int:
        return len(self._features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features)

    def get_exact(self, point: Point) -> Feature:
        """Stored feature at exactly `point`, else an unnamed feature there."""
        for feature in self._features:
            if feature.location == point:
                return feature
        return Feature(location=point)

    def all_matching(self, predicate: Callable[[Point], bool]) -> Iterator[Feature]:
        # New generator per call: restartable, insertion order.
        for feature in self._features:
            if predicate(feature.location):
                yield feature
