#!/usr/bin/env python3
"""
AI Radar API server.

Usage:
    # Serve on localhost:8000
    python run_api.py

    # Bind to all interfaces with auto-reload
    python run_api.py --host 0.0.0.0 --port 8080 --reload
"""

import argparse
import logging

import uvicorn

from core.config import load_settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve the companies proxy and AI search endpoints",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print(f"Companies source: {settings.companies_url}")
    print(f"Search provider: {settings.search_provider}")
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
