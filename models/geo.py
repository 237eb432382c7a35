# Wire messages of the RouteGuide service.
# Coordinates are fixed-point: degrees * 1e7, truncated to int32.
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from models.constants import INT32_MIN, INT32_MAX, to_degrees

def coordinate():
    return Field(default=0, ge=INT32_MIN, le=INT32_MAX)

def _utf8_text(value: str) -> str:
    # Lone surrogates survive JSON decoding but cannot be sent back out.
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"text is not valid UTF-8: {e.reason}") from e
    return value

Text = Annotated[str, AfterValidator(_utf8_text)]


class Message(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Point(Message):
    latitude: int = coordinate()
    longitude: int = coordinate()

    def degrees(self):
        """(lat, lon) in plain degrees."""
        return to_degrees(self.latitude), to_degrees(self.longitude)


class Rectangle(Message):
    # lo/hi may come in any order; consumers normalize per axis.
    lo: Point = Field(default_factory=Point)
    hi: Point = Field(default_factory=Point)


class Feature(Message):
    name: Text = ""
    location: Point = Field(default_factory=Point)

    @property
    def is_named(self) -> bool:
        return self.name != ""


class RouteNote(Message):
    location: Point = Field(default_factory=Point)
    message: Text = ""


class RouteSummary(Message):
    point_count: int = Field(default=0, ge=0)
    feature_count: int = Field(default=0, ge=0)
    distance: int = Field(default=0, ge=0)      # meters
    elapsed_time: int = Field(default=0, ge=0)  # seconds
