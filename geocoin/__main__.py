"""Entry point: ``python -m geocoin``.

Supports two modes:
  - ``python -m geocoin``              → Launch the FastAPI server
  - ``python -m geocoin walk --path``  → Headless walk that logs the caches it passes
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocoin.engine.session import GameSession

logger = logging.getLogger(__name__)

_STEP_CODES = {"N": "NORTH", "E": "EAST", "S": "SOUTH", "W": "WEST"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Geocoin world engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--radius", type=int, default=8)
    srv.add_argument("--spawn-prob", type=float, default=0.1)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless walk ---
    walk = sub.add_parser("walk", help="Walk a fixed path without a server")
    walk.add_argument("--path", type=str, default="", help="Steps as a string of N/E/S/W, e.g. NNEESW")
    walk.add_argument("--lat", type=float, default=None)
    walk.add_argument("--lng", type=float, default=None)
    walk.add_argument("--radius", type=int, default=8)
    walk.add_argument("--spawn-prob", type=float, default=0.1)
    walk.add_argument("--collect", action="store_true", help="Collect one coin from every cache passed")
    walk.add_argument("--dump", action="store_true", help="Print the final save document to stdout")
    walk.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from geocoin.api.app import create_app
    from geocoin.config import GameConfig

    config = GameConfig(
        tile_visibility_radius=args.radius,
        cache_spawn_prob=args.spawn_prob,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_walk(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from geocoin.config import GameConfig
    from geocoin.core.enums import Direction
    from geocoin.engine.save import encode_save
    from geocoin.engine.session import GameSession
    from geocoin.errors import GeocoinError
    from geocoin.utils.logging import setup_logging

    config = GameConfig(
        tile_visibility_radius=args.radius,
        cache_spawn_prob=args.spawn_prob,
        log_level=args.log_level,
    )
    if args.lat is not None:
        config = replace(config, start_lat=args.lat)
    if args.lng is not None:
        config = replace(config, start_lng=args.lng)

    # Logs go to stderr so --dump output stays clean JSON.
    setup_logging(config.log_level, stream=sys.stderr)

    steps = args.path.upper()
    unknown = sorted(set(steps) - set(_STEP_CODES))
    if unknown:
        logger.error("Unknown step codes: %s (use N, E, S, W)", "".join(unknown))
        return 2

    try:
        session = GameSession(config)
        _report(session, args.collect)
        for code in steps:
            session.move(Direction[_STEP_CODES[code]])
            _report(session, args.collect)
    except GeocoinError as exc:
        logger.error("Walk failed: %s", exc)
        return 1

    logger.info(
        "Walk finished at %s after %d steps holding %d coins (%d caches seen)",
        session.player, session.step, len(session.holding), len(session.store),
    )
    if args.dump:
        print(encode_save(session.save()))
    return 0


def _report(session: GameSession, collect: bool) -> None:
    caches = session.visible_caches()
    logger.info("At %s: %d caches in view", session.player_cell, len(caches))
    for cache in caches:
        logger.debug("  (%d, %d): %s", cache.i, cache.j, " ".join(str(c) for c in cache.coins) or "empty")
        if collect:
            session.collect(session.board.canonical_cell(cache.i, cache.j))


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "walk":
        sys.exit(_run_walk(args))


if __name__ == "__main__":
    main()
