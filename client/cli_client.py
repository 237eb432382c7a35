# Minimal CLI that runs the reference RouteGuide scenario against a server.
import argparse, os, random, sys

from rich.console import Console

from client.driver import ClientDriver
from client.route_client import RouteGuideClient
from logger import get_logger

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="RouteGuide JSON-RPC client")
    p.add_argument("--server-address", default=os.getenv("SERVER_ADDRESS", "127.0.0.1:10101"),
                   help="host:port of the RouteGuide server")
    p.add_argument("--timeout", type=float, default=float(os.getenv("CLIENT_TIMEOUT", "15")),
                   help="socket timeout in seconds")
    p.add_argument("--seed", type=int, default=None, help="seed for random routes")
    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    log = get_logger("client", "client.log")
    client = RouteGuideClient(args.server_address, timeout_sec=args.timeout)
    driver = ClientDriver(client, console=Console(), logger=log, rng=random.Random(args.seed))
    failed = driver.run_all()
    return 1 if failed else 0

if __name__ == "__main__":
    sys.exit(main())
