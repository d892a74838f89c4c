# Folder Server v.0.1.0
# Copyright (C) 2025 EGT Maks Tymoshenko (Ukraine)
# License: MIT
# Summary: HTTP Handler, Threaded Server And Command Line Entry Point.

import argparse
import logging
import os
import socketserver
import sys
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import List, Optional, Tuple

from . import __version__
from .router import Router

log = logging.getLogger(__name__)

DEFAULT_PORT = 9000


@dataclass
class ServerConfig:
    root: str
    port: int = DEFAULT_PORT
    host: str = ""
    verbose: bool = False


# ---------------------- HTTP HANDLER ----------------------

class FolderRequestHandler(BaseHTTPRequestHandler):
    """
    Adapts One HTTP Connection To The Router's Writer Interface.
    The Router Is Taken From The Server That Accepted The Connection.
    """

    server_version = "FolderServer/" + __version__
    headers_sent = False

    def do_GET(self) -> None:
        self.headers_sent = False
        self.server.router.handle(self, self.command, self.path, self.headers)

    def do_HEAD(self) -> None:
        """Routed Like GET; write() Drops The Body."""
        self.do_GET()

    def end_headers(self) -> None:
        super().end_headers()
        self.headers_sent = True

    def write(self, data: bytes) -> None:
        if self.command == "HEAD":
            return
        self.wfile.write(data)

    def send_error(self, code: int, message: Optional[str] = None, explain: Optional[str] = None) -> None:
        """Plain-Text Error Body; Also Used By http.server For Malformed Requests."""
        self.log_error("code %d, message %s", code, message)
        if message is None:
            message = self.responses.get(code, ("Error",))[0]
        body = (message + "\n").encode("utf-8", "replace")
        self.send_response(code)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("X-Content-Type-Options", "nosniff")
        self.send_header("Connection", "close")
        if code >= 200 and code not in (204, 304):
            self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD" and code >= 200 and code not in (204, 304):
            self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:
        log.debug("%s - %s", self.address_string(), format % args)


# ---------------------- THREADED SERVER ----------------------

class ThreadedHTTPServer(socketserver.ThreadingMixIn, HTTPServer):
    """HTTPServer With Threads; Stops Cleanly On Ctrl+C."""
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, server_address: Tuple[str, int], router: Router) -> None:
        self.router = router
        super().__init__(server_address, FolderRequestHandler)


def build_server(config: ServerConfig) -> ThreadedHTTPServer:
    """Bind The Listening Socket. Raises OSError If The Port Is Taken."""
    router = Router(config.root, verbose=config.verbose)
    return ThreadedHTTPServer((config.host, config.port), router)


def run_server_forever(config: ServerConfig) -> int:
    """Start HTTP Server In Main Thread (Ctrl+C Stops It). Returns Process Exit Status."""
    try:
        httpd = build_server(config)
    except OSError as exc:
        log.error("Could not listen on port %d: %s", config.port, exc)
        return 1

    print(f"Serving directory {config.root} on HTTP port: {config.port}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\nStopping Server...")
    finally:
        httpd.server_close()
    print("Server Stopped.")
    return 0


# ---------------------- MAIN ----------------------

def parse_args(argv: Optional[List[str]] = None) -> ServerConfig:
    parser = argparse.ArgumentParser(
        prog="folder-server",
        description="Serve a directory over HTTP with a thumbnail grid and an image/video viewer.",
    )
    parser.add_argument("-port", type=int, default=DEFAULT_PORT, help=f"port to serve on (default: {DEFAULT_PORT})")
    parser.add_argument("-dir", default=".", help="the directory of static files to host (default: current directory)")
    parser.add_argument("-host", default="", help="interface to bind (default: all interfaces)")
    parser.add_argument("-v", action="store_true", help="log every request to stderr")
    args = parser.parse_args(argv)
    return ServerConfig(root=os.path.abspath(args.dir), port=args.port, host=args.host, verbose=args.v)


def main(argv: Optional[List[str]] = None) -> None:
    config = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not os.path.isdir(config.root):
        print(f"Not a directory: {config.root}")
        sys.exit(1)

    if config.verbose:
        log.info("Verbose mode enabled")
        log.info("Serving directory: %s", config.root)
        log.info("Listening on port: %d", config.port)

    sys.exit(run_server_forever(config))


if __name__ == "__main__":
    main()
