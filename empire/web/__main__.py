"""Entry point for the web version: python -m empire.web"""

import argparse
import logging
from pathlib import Path

from empire.engine.save import SAVE_DIR
from empire.web.server import run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Money Empire — Web API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    parser.add_argument("--save-dir", type=Path, default=SAVE_DIR, help=f"Save directory (default: {SAVE_DIR})")
    parser.add_argument("--seed", type=int, default=None, help="Seed for gem rolls (default: random)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print(f"\n  💰 Money Empire (Web API)")
    print(f"  ➜ http://{args.host}:{args.port}/api/state\n")

    run_server(host=args.host, port=args.port, debug=args.debug, save_dir=args.save_dir, seed=args.seed)


if __name__ == "__main__":
    main()
