#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RouteGuide: JSON-RPC server over TCP with Content-Length framing.
Exposes: GetFeature, ListFeatures, RecordRoute, RouteChat
Logs all calls to logs/server.log
"""

import argparse, os, sys
from functools import partial

from rpc_handler import (
    TcpJsonRpcServer, RpcMethod,
    UNARY, SERVER_STREAM, CLIENT_STREAM, BIDI_STREAM,
)
from logger import get_logger
from models.feature_store import FeatureStore, LoadError
from models.geo import Feature, Point, Rectangle, RouteNote, RouteSummary
from models.note_board import NoteBoard
from tools.get_feature import tool_get_feature
from tools.list_features import tool_list_features
from tools.record_route import tool_record_route
from tools.route_chat import tool_route_chat

DEFAULT_PORT = "10101"
DEFAULT_FILE_PATH = "testdata/route_guide_db.json"

def build_methods(store: FeatureStore, board: NoteBoard):
    return {
        "GetFeature": RpcMethod(UNARY, partial(tool_get_feature, store), Point, Feature),
        "ListFeatures": RpcMethod(SERVER_STREAM, partial(tool_list_features, store), Rectangle, Feature),
        "RecordRoute": RpcMethod(CLIENT_STREAM, partial(tool_record_route, store), Point, RouteSummary),
        "RouteChat": RpcMethod(BIDI_STREAM, partial(tool_route_chat, board), RouteNote, RouteNote),
    }

def create_server(host: str, port: int, store: FeatureStore, board: NoteBoard = None, logger=None):
    board = board if board is not None else NoteBoard()
    return TcpJsonRpcServer((host, port), build_methods(store, board), logger=logger)

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="RouteGuide JSON-RPC server")
    p.add_argument("--host", default=os.getenv("HOST", "localhost"), help="listen address")
    p.add_argument("--port", type=int, default=int(os.getenv("PORT", DEFAULT_PORT)), help="listen port")
    p.add_argument("--file-path", default=os.getenv("FILE_PATH", DEFAULT_FILE_PATH),
                   help="feature snapshot (JSON array of {name, location})")
    return p.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    log = get_logger("server")
    try:
        store = FeatureStore.load(args.file_path)
    except LoadError as e:
        log.error(f"Refusing to start: {e}")
        return 1
    log.info(f"Loaded {len(store)} features from {args.file_path}")

    server = create_server(args.host, args.port, store, logger=log)
    log.info(f"Serving on {server.address}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        log.info("Shutting down")
    finally:
        server.server_close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
