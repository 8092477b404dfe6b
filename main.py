#!/usr/bin/env python3
import argparse
import logging

from stepsched.config import load_config
from stepsched.runner import run_solve


def main() -> None:
    parser = argparse.ArgumentParser(description="Precedence-constrained task scheduler")
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to the YAML/JSON configuration file",
    )
    args = parser.parse_args()

    config = load_config(args.config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = run_solve(config)
    print(f"Result1: {result.order}")
    print(f"Result2: {result.makespan}")


if __name__ == "__main__":
    main()
