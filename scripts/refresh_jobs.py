# scripts/refresh_jobs.py
import argparse
import logging

from local_careers.config import DEFAULT_CONFIG_PATH
from local_careers.main import run


def main():
    parser = argparse.ArgumentParser(description="Import every feed listed in the config.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    run(args.config)


if __name__ == "__main__":
    main()
