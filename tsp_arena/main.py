from __future__ import annotations

import argparse
import logging
import sys

from .arena import Arena
from .config import ArenaConfig
from .errors import ArenaError, InvalidRouteError
from .solution import emit_report


def _split(value: str) -> list[str]:
    return [tok.strip().upper() for tok in value.split(",") if tok.strip()]


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    defaults = ArenaConfig()
    parser.add_argument("--pool-size", type=int, default=defaults.pool_size, help="Number of cities (2..10)")
    parser.add_argument("--min-distance", type=int, default=defaults.min_distance, help="Smallest edge weight")
    parser.add_argument("--max-distance", type=int, default=defaults.max_distance, help="Largest edge weight")
    parser.add_argument("--budget", type=int, default=defaults.random_search_budget, help="Random search samples")
    parser.add_argument("--max-selected", type=int, default=defaults.max_selected, help="Brute-force city cap")
    parser.add_argument(
        "--exact-time-limit",
        type=float,
        default=defaults.exact_time_limit_sec,
        help="Brute-force wall-clock limit in seconds",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for generation and random search")


def _config_from_args(args: argparse.Namespace) -> ArenaConfig:
    return ArenaConfig(
        pool_size=args.pool_size,
        min_distance=args.min_distance,
        max_distance=args.max_distance,
        random_search_budget=args.budget,
        max_selected=args.max_selected,
        exact_time_limit_sec=args.exact_time_limit,
        seed=args.seed,
    ).validate()


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from .backend import create_app

    app = create_app(_config_from_args(args))
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    arena = Arena(_config_from_args(args))
    session = arena.new_game()
    print(f"Session {session.session_id}: home={session.home} cities={' '.join(session.cities)}", file=sys.stderr)
    selected = _split(args.select) if args.select else [c for c in session.cities if c != session.home][:4]
    if session.home in selected:
        raise InvalidRouteError(f"Home city {session.home} cannot be selected as a stop")
    if args.route:
        route = _split(args.route)
    else:
        # No guess given: submit the brute-force answer.
        route = list(arena.evaluator.exact.solve(session.model, session.home, selected)[0])
    report = arena.check_answer(session.session_id, route=route)
    emit_report(report)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="TSP Arena: route game server and solver comparison.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    _add_config_args(serve)
    serve.set_defaults(func=cmd_serve)

    play = sub.add_parser("play", help="Generate one round and print the algorithm comparison")
    play.add_argument("--select", default="", help="Comma-separated cities to visit, e.g. B,C,D")
    play.add_argument("--route", default="", help="Comma-separated home-to-home route, e.g. A,C,B,D,A")
    _add_config_args(play)
    play.set_defaults(func=cmd_play)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except ArenaError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
