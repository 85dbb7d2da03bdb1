# src/app/tracer.py
#!/usr/bin/env python3
"""Find every shortest trace between the two components on a board.

Usage:
    python -m src.app.tracer -s -c boards/grid1.dat
    python -m src.app.tracer -q -g boards/grid1.dat
    python -m src.app.tracer -c boards/grid1.dat        # storage from TRACER_STORAGE

Storage: -s stack (depth-first) or -q queue (breadth-first).
Output:  -c console or -g GUI (pygame viewer).
"""

# --- bootstrap import path so `from src...` works when run as a script ---
import sys
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

import argparse
import logging
from typing import List, Optional

from src.app.console import print_solutions
from src.core.board_loader import load_board
from src.core.explorer import Explorer
from src.core.storage import Discipline, discipline_from_env
from src.core.types import InvalidFileFormatError

log = logging.getLogger(__name__)


def resolve_storage(args: argparse.Namespace) -> Discipline:
    if args.storage is not None:
        return args.storage
    return discipline_from_env()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tracer",
        description="Find all shortest traces connecting '1' to '2' on a circuit board.",
    )
    storage = parser.add_mutually_exclusive_group()
    storage.add_argument("-s", dest="storage", action="store_const", const=Discipline.STACK,
                         help="use a stack (depth-first search)")
    storage.add_argument("-q", dest="storage", action="store_const", const=Discipline.QUEUE,
                         help="use a queue (breadth-first search)")
    output = parser.add_mutually_exclusive_group(required=True)
    output.add_argument("-c", dest="output", action="store_const", const="console",
                        help="print solutions to the console")
    output.add_argument("-g", dest="output", action="store_const", const="gui",
                        help="show solutions in the viewer")
    parser.add_argument("board", type=Path, help="board file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log search progress")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    discipline = resolve_storage(args)

    try:
        grid = load_board(args.board)
    except FileNotFoundError:
        print(f"File not found: {args.board}")
        return 1
    except InvalidFileFormatError as ex:
        print(f"Invalid file format: {ex}")
        return 1
    log.info("Loaded %dx%d board from %s", grid.num_rows, grid.num_cols, args.board)

    if args.output == "gui":
        from src.app.viewer import Viewer
        Viewer(grid, discipline=discipline, board_path=args.board).run()
        return 0

    explorer = Explorer(discipline=discipline)
    explorer.init(grid)
    print_solutions(explorer.run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
