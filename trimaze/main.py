import argparse
import itertools
import sys
import os
import logging

# Ensure project root is in path so we can import 'trimaze' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from trimaze.core.errors import MazeError

logger = logging.getLogger("trimaze")

EDGE_NAMES = {"left": 0, "right": 1, "base": 2}


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def load_maze(filepath: str):
    """Reads a .tmaz container or a plain-text maze, by extension."""
    if filepath.endswith(".tmaz"):
        from trimaze.io.serializer import MazeSerializer
        grid, meta = MazeSerializer.load(filepath)
        logger.info(f"Loaded {grid.rows}x{grid.cols} maze. Meta: {meta}")
        return grid

    from trimaze.io.loader import load_grid
    grid = load_grid(filepath)
    logger.info(f"Loaded {grid.rows}x{grid.cols} maze from {filepath}")
    return grid


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="trimaze: escape a triangular maze by following a wall")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Path Command
    path_parser = subparsers.add_parser("path", help="Print the escape path from a cell")
    hand_group = path_parser.add_mutually_exclusive_group(required=True)
    hand_group.add_argument("--rpath", action="store_true", help="Follow the right-hand rule")
    hand_group.add_argument("--lpath", action="store_true", help="Follow the left-hand rule")
    path_parser.add_argument("row", type=int, help="Start row (1-based)")
    path_parser.add_argument("col", type=int, help="Start column (1-based)")
    path_parser.add_argument("input_file", help="Path to maze file")
    path_parser.add_argument("--entry", type=str, default="right", choices=["left", "right", "base", "border"],
                             help="First edge tested in the start cell ('border' picks one from the walls)")
    path_parser.add_argument("--max-steps", type=int, default=None,
                             help="Abort after this many cells (default: 3*rows*cols+1, 0 = unbounded)")
    path_parser.add_argument("--record-events", type=str, help="Save walk events to binary file")
    path_parser.add_argument("--visual", action="store_true", help="Show visualization")
    path_parser.add_argument("--record", action="store_true", help="Record walk video")

    # Wall Command
    wall_parser = subparsers.add_parser("wall", help="Check one edge of a cell for a wall")
    wall_parser.add_argument("row", type=int, help="Row (1-based)")
    wall_parser.add_argument("col", type=int, help="Column (1-based)")
    wall_parser.add_argument("edge", type=int, choices=[0, 1, 2], help="0=left diagonal, 1=right diagonal, 2=top/bottom")
    wall_parser.add_argument("input_file", help="Path to maze file")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a random maze")
    gen_parser.add_argument("--rows", type=int, default=10, help="Maze rows")
    gen_parser.add_argument("--cols", type=int, default=20, help="Maze columns")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--exits", type=int, default=1, help="Number of openings on the boundary")
    gen_parser.add_argument("--out", type=str, help="Output file (.tmaz for binary, text otherwise; default stdout)")
    gen_parser.add_argument("--compress", action="store_true", help="zlib-compress .tmaz output")

    # Info Command
    info_parser = subparsers.add_parser("info", help="Print wall statistics")
    info_parser.add_argument("input_file", help="Path to maze file")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Replay a walk event log")
    replay_parser.add_argument("event_file", help="Path to event log file")
    replay_parser.add_argument("--maze", type=str, help="Maze file to load walls from")
    replay_parser.add_argument("--record", action="store_true", help="Record video")

    return parser


def cmd_path(args) -> int:
    from trimaze.algo.walker import Walker, bounded, state_bound
    from trimaze.core.geometry import Edge, Hand

    grid = load_maze(args.input_file)
    hand = Hand.RIGHT if args.rpath else Hand.LEFT
    entry = "border" if args.entry == "border" else Edge(EDGE_NAMES[args.entry])

    row, col = args.row - 1, args.col - 1
    if grid.in_bounds(row, col) and grid.is_sealed(row, col):
        logger.error(f"Start cell ({args.row}, {args.col}) is walled on every side")
        return 1

    evt_writer = None
    if args.record_events:
        from trimaze.core.events import EventWriter
        evt_writer = EventWriter(args.record_events)
        evt_writer.write_header(grid.rows, grid.cols, hand)
        logger.info(f"Recording events to {args.record_events}...")

    def observer(pos, facing):
        logger.debug(f"Step {pos.one_based()} facing {facing.name if facing else '-'}")
        if evt_writer:
            evt_writer.log_step(pos, facing)

    walker = Walker(grid, hand=hand, initial_edge=entry, observer=observer)
    try:
        path = walker.walk(row, col)

        max_steps = state_bound(grid) if args.max_steps is None else args.max_steps
        if max_steps > 0:
            path = bounded(path, max_steps)

        logger.info(f"Walking with the {hand.name.lower()} hand from ({args.row}, {args.col})...")

        if args.visual or args.record:
            from trimaze.viz.renderer import Renderer
            renderer = Renderer(grid, path_iter=iter(path), record=args.record)
            renderer.init_window()
            renderer.run_loop()
            if renderer.walk_finished:
                path = renderer.path
            else:
                logger.info("Window closed before the walker got out, finishing the walk headless...")
                path = itertools.chain(renderer.path, renderer.path_iter)

        for pos in path:
            r, c = pos.one_based()
            print(f"{r},{c}")
    finally:
        if evt_writer:
            evt_writer.close()

    logger.info(f"Done. Path Length: {walker.steps}")
    return 0


def cmd_wall(args) -> int:
    from trimaze.core.geometry import Edge

    grid = load_maze(args.input_file)
    if grid.has_wall(args.row - 1, args.col - 1, Edge(args.edge)):
        print(f"There is a wall on the specified border of cell ({args.row}, {args.col})")
    else:
        print(f"There is no wall on the specified border of cell ({args.row}, {args.col})")
    return 0


def cmd_generate(args) -> int:
    from trimaze.algo.dfs import RecursiveBacktracker

    logger.info(f"Generating {args.rows}x{args.cols} maze with DFS...")
    generator = RecursiveBacktracker(args.rows, args.cols, seed=args.seed, exits=args.exits)
    generator.run_all()
    grid = generator.grid()

    if not args.out:
        from trimaze.io.loader import dump_grid
        sys.stdout.write(dump_grid(grid))
    elif args.out.endswith(".tmaz"):
        from trimaze.io.serializer import MazeSerializer
        meta = {"algo": "dfs", "seed": args.seed, "exits": args.exits}
        MazeSerializer.save(grid, args.out, meta=meta, compress=args.compress)
        logger.info(f"Saved maze to {args.out}")
    else:
        from trimaze.io.loader import save_grid
        save_grid(grid, args.out)
        logger.info(f"Saved maze to {args.out}")
    return 0


def cmd_info(args) -> int:
    from trimaze.core.stats import calculate_stats

    grid = load_maze(args.input_file)
    stats = calculate_stats(grid)
    print(f"Size: {grid.rows}x{grid.cols} ({len(grid):,} cells)")
    for key, value in stats.items():
        if isinstance(value, float):
            print(f"{key:<16} {value:.2f}")
        else:
            print(f"{key:<16} {value}")
    if stats["sealed"]:
        logger.warning(f"{stats['sealed']} cell(s) are walled on every side")
    return 0


def cmd_replay(args) -> int:
    from trimaze.core.events import EventReader
    from trimaze.core.grid import TriGrid
    from trimaze.viz.replay import EventAdapter
    from trimaze.viz.renderer import Renderer

    logger.info(f"Replaying {args.event_file}...")
    with EventReader(args.event_file) as reader:
        rows, cols, hand = reader.read_header()
        logger.info(f"Log Header: {rows}x{cols}, {hand.name.lower()} hand")

        if args.maze:
            grid = load_maze(args.maze)
            if grid.rows != rows or grid.cols != cols:
                logger.warning(f"Maze file dims ({grid.rows}x{grid.cols}) do not match event file ({rows}x{cols}). Visuals may be wrong.")
        else:
            grid = TriGrid(rows, cols)

        adapter = EventAdapter(reader)
        renderer = Renderer(grid, path_iter=adapter.run(), record=args.record)
        renderer.init_window()
        renderer.run_loop()
    return 0


COMMANDS = {
    "path": cmd_path,
    "wall": cmd_wall,
    "generate": cmd_generate,
    "info": cmd_info,
    "replay": cmd_replay,
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    logger.debug(f"Running command: {args.command}")
    try:
        return COMMANDS[args.command](args)
    except MazeError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
