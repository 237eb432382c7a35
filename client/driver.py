# client/driver.py
# Exercises the four RouteGuide call shapes and shows the results with Rich.
import random, threading
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from client.route_client import RouteGuideClient
from models.geo import Feature, Point, Rectangle, RouteNote, RouteSummary
from models.constants import to_fixed

DEFAULT_NOTES = [
    RouteNote(location=Point(latitude=0, longitude=1), message="First message"),
    RouteNote(location=Point(latitude=0, longitude=2), message="Second message"),
    RouteNote(location=Point(latitude=0, longitude=3), message="Third message"),
    RouteNote(location=Point(latitude=0, longitude=1), message="Fourth message"),
    RouteNote(location=Point(latitude=0, longitude=2), message="Fifth message"),
    RouteNote(location=Point(latitude=0, longitude=3), message="Sixth message"),
]

VALID_POINT = Point(latitude=409146138, longitude=-746188906)
MISSING_POINT = Point(latitude=0, longitude=0)
SEARCH_AREA = Rectangle(
    lo=Point(latitude=400000000, longitude=-750000000),
    hi=Point(latitude=420000000, longitude=-730000000),
)

MIN_ROUTE_POINTS = 2
MAX_ROUTE_POINTS = 101


def format_point(p: Point) -> str:
    lat, lon = p.degrees()
    return f"({lat:.7f}, {lon:.7f})"


class ClientDriver:
    def __init__(self, client: RouteGuideClient, console: Optional[Console] = None,
                 logger=None, rng: Optional[random.Random] = None):
        self.client = client
        self.console = console or Console()
        self.log = logger
        self.rng = rng or random.Random()

    def _info(self, msg: str):
        if self.log:
            self.log.info(msg)

    def random_point(self) -> Point:
        """Whole-degree point, latitude in [-90, 90) and longitude in [-180, 180)."""
        lat = self.rng.randrange(180) - 90
        lon = self.rng.randrange(360) - 180
        return Point(latitude=to_fixed(lat), longitude=to_fixed(lon))

    def print_feature(self, point: Point) -> Feature:
        feature = self.client.get_feature(point)
        self._info(f"GetFeature {point.latitude},{point.longitude} -> {feature.name!r}")
        if feature.is_named:
            self.console.print(f"[green]Found[/green] {feature.name} at {format_point(feature.location)}")
        else:
            self.console.print(f"[yellow]No feature[/yellow] at {format_point(point)}")
        return feature

    def print_features(self, rect: Rectangle) -> List[Feature]:
        self._info(f"ListFeatures lo={rect.lo.model_dump()} hi={rect.hi.model_dump()}")
        table = Table(title="Features in area")
        table.add_column("Name"); table.add_column("Latitude"); table.add_column("Longitude")
        found = []
        for feature in self.client.list_features(rect):
            found.append(feature)
            lat, lon = feature.location.degrees()
            table.add_row(feature.name or "-", f"{lat:.7f}", f"{lon:.7f}")
        self.console.print(table)
        self._info(f"ListFeatures returned {len(found)} features")
        return found

    def run_record_route(self, count: Optional[int] = None) -> RouteSummary:
        if count is None:
            count = self.rng.randint(MIN_ROUTE_POINTS, MAX_ROUTE_POINTS)
        points = [self.random_point() for _ in range(count)]
        self._info(f"Traversing {len(points)} points")
        summary = self.client.record_route(points)
        table = Table(title="Route summary")
        table.add_column("Points"); table.add_column("Features")
        table.add_column("Distance (m)"); table.add_column("Elapsed (s)")
        table.add_row(str(summary.point_count), str(summary.feature_count),
                      str(summary.distance), str(summary.elapsed_time))
        self.console.print(table)
        return summary

    def run_route_chat(self, notes: Sequence[RouteNote] = DEFAULT_NOTES) -> List[RouteNote]:
        """
        Sender and receiver run on their own threads against one call;
        returns only after both finished. A failure in either aborts the call,
        which unblocks the other thread, and is re-raised after the join.
        """
        received: List[RouteNote] = []
        errors: List[Exception] = []
        call = self.client.route_chat()

        def send_all():
            try:
                for note in notes:
                    self._info(f"Sending {note.message!r} at {note.location.latitude},{note.location.longitude}")
                    call.send(note)
                call.close_send()
            except Exception as e:
                errors.append(e)
                call.abort()

        def receive_all():
            try:
                for note in call:
                    received.append(note)
                    self.console.print(f"Got message [bold]{note.message}[/bold] at {format_point(note.location)}")
            except Exception as e:
                errors.append(e)
                call.abort()

        sender = threading.Thread(target=send_all, name="route-chat-send", daemon=True)
        receiver = threading.Thread(target=receive_all, name="route-chat-recv", daemon=True)
        try:
            receiver.start()
            sender.start()
            sender.join()
            receiver.join()
        finally:
            call.close()
        if errors:
            raise errors[0]
        self._info(f"RouteChat received {len(received)} notes")
        return received

    def run_all(self):
        """Reference scenario. Each step's failure is logged and the next step still runs."""
        steps = [
            ("GetFeature (valid)", lambda: self.print_feature(VALID_POINT)),
            ("GetFeature (missing)", lambda: self.print_feature(MISSING_POINT)),
            ("ListFeatures", lambda: self.print_features(SEARCH_AREA)),
            ("RecordRoute", self.run_record_route),
            ("RouteChat", self.run_route_chat),
        ]
        failed = 0
        for title, step in steps:
            self.console.rule(title)
            try:
                step()
            except Exception as e:
                failed += 1
                if self.log:
                    self.log.error(f"{title} failed: {e}")
                self.console.print(f"[red]{title} failed:[/red] {e}")
        return failed
