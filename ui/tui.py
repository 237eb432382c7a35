# Simple TUI using Rich. Interactive front end for the RouteGuide client.
import os

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from client.driver import ClientDriver, SEARCH_AREA
from client.route_client import RouteGuideClient
from models.geo import Point, Rectangle
from rpc_handler import TransportError

console = Console()

def ask_point(label: str, default: Point) -> Point:
    lat = IntPrompt.ask(f"{label} latitude (deg*1e7)", default=default.latitude)
    lon = IntPrompt.ask(f"{label} longitude (deg*1e7)", default=default.longitude)
    return Point(latitude=lat, longitude=lon)

def main(address: str = None):
    address = address or os.getenv("SERVER_ADDRESS", "127.0.0.1:10101")
    console.print("[bold cyan]RouteGuide TUI[/bold cyan]")
    driver = ClientDriver(RouteGuideClient(address), console=console)
    while True:
        console.print("\n[bold]Menu[/bold]: 1) GetFeature  2) ListFeatures  3) RecordRoute  4) RouteChat  5) all  0) exit")
        choice = Prompt.ask("Choose", choices=["1","2","3","4","5","0"], default="1")
        if choice == "0":
            break
        try:
            if choice == "1":
                driver.print_feature(ask_point("Point", Point(latitude=409146138, longitude=-746188906)))
            elif choice == "2":
                lo = ask_point("Corner A", SEARCH_AREA.lo)
                hi = ask_point("Corner B", SEARCH_AREA.hi)
                driver.print_features(Rectangle(lo=lo, hi=hi))
            elif choice == "3":
                driver.run_record_route()
            elif choice == "4":
                driver.run_route_chat()
            else:
                driver.run_all()
        except (TransportError, ValueError) as e:
            console.print(f"[red]Call failed:[/red] {e}")

if __name__ == "__main__":
    main()
