"""
Tenpair CLI - Command-line interface for the engine.

Usage:
    tenpair demo [--ticks N] [--interval-ms MS]   Lay out the opening board
                                                   and animate its edits
    tenpair play                                  Play in the terminal
"""

import argparse
import asyncio
import logging
import sys

from .config import GameConfig


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Tenpair - Number Pairing Puzzle Engine",
        prog="tenpair",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument("--width", type=int, default=None, help="Tiles per row")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    demo_parser = subparsers.add_parser("demo", help="Animate the opening board")
    demo_parser.add_argument("--ticks", type=int, default=None, help="Stop after N ticks")
    demo_parser.add_argument("--interval-ms", type=int, default=None, help="Delay between ticks")

    subparsers.add_parser("play", help="Play in the terminal")

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        config = _load_config(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.command == "demo":
        cmd_demo(args, config)
    elif args.command == "play":
        cmd_play(args, config)
    else:
        parser.print_help()
        sys.exit(1)


def _load_config(args) -> GameConfig:
    config = GameConfig.from_env()
    width = args.width if args.width is not None else config.grid_width
    tick_ms = getattr(args, "interval_ms", None)
    return GameConfig(
        grid_width=width,
        tick_ms=tick_ms if tick_ms is not None else config.tick_ms,
        environment=config.environment,
        allowed_origins=config.allowed_origins,
    )


def cmd_demo(args, config: GameConfig):
    """Lay out the opening board and let the scheduler draw it."""
    from .session import GameLoop

    loop = GameLoop.create(config)
    count = loop.create_initial_state()
    print(f"Queued {count} edits, delivering one every {config.tick_ms} ms")

    loop.scheduler.resume()

    if args.ticks is not None:
        asyncio.run(loop.scheduler.run(max_ticks=args.ticks))
    else:
        asyncio.run(loop.scheduler.run_until_idle())

    print(loop.adapter.render())
    print(f"\n{loop.adapter.applied} edits applied, {loop.pending_edits} pending")


def cmd_play(args, config: GameConfig):
    """
    Minimal terminal play.

    Commands: s <position> (toggle), p (pair), r <row> (remove row),
    g (append generation), q (quit)
    """
    from .session import GameLoop
    from .view import GridAdapter

    loop = GameLoop.create(config, adapter=GridAdapter(width=config.grid_width), scheduled=False)
    loop.create_initial_state()

    while True:
        loop.render_updates(loop.pending_edits)
        print(loop.adapter.render())
        try:
            line = input("> ").split()
        except EOFError:
            break
        if not line:
            continue

        command, rest = line[0], line[1:]
        if command == "q":
            break
        try:
            if command == "s":
                tile = loop.engine.tile_at(int(rest[0]))
                if tile is None:
                    print("No tile at that position")
                    continue
                result = loop.toggle_select(tile.tile_id)
            elif command == "p":
                result = loop.use_selected_pair()
            elif command == "r":
                result = loop.remove_row(int(rest[0]))
            elif command == "g":
                result = loop.append_generation()
            else:
                print("Unknown command")
                continue
        except (IndexError, ValueError):
            print("Missing or invalid argument")
            continue

        if not result:
            print(f"Rejected: {result.error}")


if __name__ == "__main__":
    main()
