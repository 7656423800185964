"""Entry point for Money Empire."""

import argparse
import logging
from pathlib import Path

from empire.app import EmpireApp
from empire.engine.save import SAVE_DIR


def main() -> None:
    parser = argparse.ArgumentParser(description="Money Empire — idle tycoon")
    parser.add_argument("--save-dir", type=Path, default=SAVE_DIR, help=f"Save directory (default: {SAVE_DIR})")
    parser.add_argument("--seed", type=int, default=None, help="Seed for gem rolls (default: random)")
    parser.add_argument("--log-file", type=Path, default=None, help="Write diagnostics to this file")
    args = parser.parse_args()

    # The TUI owns the terminal, so logs only go to a file when asked
    if args.log_file is not None:
        logging.basicConfig(filename=args.log_file, level=logging.INFO)

    app = EmpireApp(save_dir=args.save_dir, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
