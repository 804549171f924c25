"""
Doomspire CLI - Command-line interface for the engine.

Usage:
    doomspire play                 Play a bot-only game to the end
    doomspire board                Print a generated board
    doomspire serve                Run the HTTP API
"""

import argparse
import asyncio
import json
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Doomspire - Lords of Doomspire turn resolution engine",
        prog="doomspire",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every game event")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a bot-only game")
    play_parser.add_argument(
        "--players", nargs="+", default=["Alice", "Bob"], help="Player names (1-4)"
    )
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible game")
    play_parser.add_argument("--max-rounds", type=int, default=100, help="Round limit")
    play_parser.add_argument(
        "--bot", choices=["random", "first"], default="random", help="Bot playing every seat"
    )
    play_parser.add_argument("--log-json", action="store_true", help="Print the game log as JSON")

    # Board command
    board_parser = subparsers.add_parser("board", help="Print a generated board")
    board_parser.add_argument("--seed", type=int, help="Seed for the board layout")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "board":
        cmd_board(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args):
    """Play a bot-only game to the end."""
    from .engine_core.settings import GameSettings
    from .session import SessionManager

    manager = SessionManager(GameSettings(max_rounds=args.max_rounds))
    try:
        session = manager.create_session(
            player_names=args.players,
            seed=args.seed,
            agent_kind=args.bot,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    summary = asyncio.run(session.play_out())
    master = session.master

    if args.log_json:
        print(json.dumps(master.log.to_list(), indent=2))
    else:
        for entry in master.log.entries:
            who = entry.player_name or "-"
            print(f"[{entry.round:3d}] {who:<8} {entry.entry_type.value:<12} {entry.content}")

    print()
    if summary.winner:
        print(f"Winner: {summary.winner} ({summary.victory})")
    else:
        print("No winner")
    print(f"Rounds: {summary.rounds}  Turns: {summary.turns}  Failed turns: {summary.failed_turns}")
    for name in summary.final_fame:
        print(f"  {name}: fame {summary.final_fame[name]}, gold {summary.final_gold[name]}")


def cmd_board(args):
    """Print a generated board."""
    from .content.tiles import build_board, render_board

    print(render_board(build_board(seed=args.seed)))


def cmd_serve(args):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("doomspire.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()
