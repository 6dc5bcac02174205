# src/serialbox/cli.py
import sys
import argparse
from pathlib import Path
from typing import Callable

# Module imports
from serialbox.core.demo import RecordDemo, intbox_demo, line_count_demo
from serialbox.errors import PersistenceError


def create_arg_parser(description: str):
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "workdir",
        type=str,
        nargs="?",
        default=".",
        help="Directory the demo files are written to (default: current directory)",
    )
    return parser


def run_demo(make_demo: Callable[[Path], RecordDemo], description: str, argv=None):
    try:
        # 1. Setup
        parser = create_arg_parser(description)
        args = parser.parse_args(argv)

        workdir = Path(args.workdir)
        if not workdir.is_dir():
            print(f"Error: Invalid directory '{workdir}'", file=sys.stderr)
            sys.exit(1)

        # 2. Round trip
        make_demo(workdir).run()

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except OSError as e:
        print(f"I/O error: {e}", file=sys.stderr)
        sys.exit(1)

    except PersistenceError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


def intbox_main(argv=None):
    """Entry point: round-trips an IntBox through box.ser."""
    run_demo(intbox_demo, "Serialize an IntBox to box.ser and read it back.", argv)


def linecount_main(argv=None):
    """Entry point: round-trips a LineCount of poem.txt through line-count.ser."""
    run_demo(
        line_count_demo,
        "Count the lines of poem.txt, serialize the summary to line-count.ser and read it back.",
        argv,
    )


if __name__ == "__main__":
    intbox_main()
