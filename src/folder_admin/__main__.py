"""Move the files of a directory into the subdirectories listed in its
FolderAdministratorConfig.json.
"""

import logging
import sys
from argparse import ArgumentParser
from collections.abc import Sequence
from pathlib import Path

from folder_admin import FolderAdminError, FolderAdministrator
from folder_admin import __name__ as fa_name


def main(argv: Sequence[str] | None = None) -> int:
    parser = ArgumentParser(prog="folder-admin", description=__doc__)
    parser.add_argument(
        "dir",
        nargs="?",
        type=Path,
        default=Path("."),
        help="the directory to organize (default: current directory)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="report every step"
    )
    parser.add_argument(
        "-p",
        "--print-config",
        action="store_true",
        help="print the loaded rules and exit",
    )
    parser.add_argument(
        "-c",
        "--create-only",
        action="store_true",
        help="create the rule directories without moving files",
    )
    args = parser.parse_args(argv)

    logger = logging.getLogger(fa_name)
    level = logger.level
    logger.setLevel(logging.INFO if args.verbose else logging.WARNING)

    handler = logging.StreamHandler()
    logger.addHandler(handler)

    try:
        admin = FolderAdministrator(args.verbose, root_dir=args.dir.resolve())
        if args.print_config:
            admin.print_config()
        elif args.create_only:
            admin.create_dirs()
        else:
            admin.move_files_to_dirs()

    except FolderAdminError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return 1

    finally:
        logger.removeHandler(handler)
        logger.setLevel(level)

    return 0


if __name__ == "__main__":
    sys.exit(main())
