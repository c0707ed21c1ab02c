# main.py - Seekr command line entry point
# Usage: seekr DIRECTORY   then type one search term per line (blank line quits)

import sys
import logging
import argparse

from indexer import FileSystemError, read_directory
from search import query_loop

log = logging.getLogger("seekr")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="seekr",
        description="Index a directory of text files and rank them by TF-IDF for a search term.",
    )
    parser.add_argument("directory", help="Root directory to index")
    return parser.parse_args(argv)


def main(argv=None, stdin=None, stdout=None):
    args = parse_args(argv)

    # ─── LOGGING ─────────────────────────────────────────────────────────────
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )

    try:
        index = read_directory(args.directory)
    except FileSystemError as e:
        print(f"Failed to read the directory {e.path}: {e.cause}", file=sys.stderr)
        return 1

    log.info("Ready. Enter one term per line, a blank line quits.")
    query_loop(index, stdin=stdin, stdout=stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
