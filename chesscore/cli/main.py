from __future__ import annotations

import argparse
from typing import List, Optional

import uvicorn

from ..config import Settings


def main(argv: Optional[List[str]] = None) -> None:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Serve the chesscore HTTP API")
    parser.add_argument("--host", default=settings.host, help=f"bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"port (default: {settings.port})")
    args = parser.parse_args(argv)

    uvicorn.run(
        "chesscore.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
