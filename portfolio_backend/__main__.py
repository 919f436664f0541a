"""
Run the portfolio backend with uvicorn.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from portfolio_backend.app import create_app


def main() -> int:
    parser = argparse.ArgumentParser(description="Portfolio backend server")
    parser.add_argument("--host", type=str, default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5000)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
