"""Play Treasure Seeker in the terminal.

Commands: n/s/e/w to move, ``look`` to list nearby caches, ``c <i> <j> <index>``
to collect, ``d <i> <j> [coin_id]`` to deposit, ``goto <lat> <lng>`` to jump
(simulates a geolocation fix), ``reset``, ``quit``.

Run with the default save file:

    uv run python -m examples.terminal.run

Start from a clean in-memory world with a fixed seed:

    uv run python -m examples.terminal.run --memory --seed 7
"""

from __future__ import annotations

import argparse
import shlex

from pydantic import ValidationError

from treasureseeker import (
    Config,
    GameSession,
    GameSettings,
    InMemoryPersistence,
    JsonPersistence,
    UserActionInvalidError,
    WindowUpdate,
    describe_cache,
    render_ascii_window,
)
from treasureseeker.logging_utils import log_error, log_info, log_notice


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"{Config.APP_NAME} terminal client")
    parser.add_argument("--memory", action="store_true", help="Do not read or write a save file")
    parser.add_argument("--save", default=str(Config.SAVE_PATH), help="Save file path")
    parser.add_argument("--seed", type=int, default=None, help="Seed for cache contents")
    parser.add_argument(
        "--radius",
        type=int,
        default=None,
        help="Visibility radius override (cells in each direction)",
    )
    return parser.parse_args()


def build_settings(args: argparse.Namespace) -> GameSettings:
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.radius is not None:
        overrides["visibility_radius"] = args.radius
    return GameSettings.from_config().with_overrides(**overrides)


def print_window(update: WindowUpdate) -> None:
    print(render_ascii_window(update.caches, update.center, radius=update.radius))


def handle(session: GameSession, words: list[str]) -> bool:
    """Apply one command. Returns False when the player quits."""

    command, rest = words[0].lower(), words[1:]

    if command in {"q", "quit", "exit"}:
        return False
    if command in {"n", "s", "e", "w", "north", "south", "east", "west"}:
        session.move(command)
    elif command == "look":
        for cell, cache in session.visible.items():
            print(describe_cache(cell, cache))
    elif command in {"c", "collect"} and len(rest) == 3:
        i, j, index = (int(value) for value in rest)
        coin = session.collect(session.registry.get_cell(i, j), index)
        log_info(f"Collected {coin.coin_id}. Coins: {session.inventory_count}")
    elif command in {"d", "deposit"} and len(rest) in (2, 3):
        cell = session.registry.get_cell(int(rest[0]), int(rest[1]))
        coin = session.deposit(cell, rest[2] if len(rest) == 3 else None)
        log_info(f"Deposited {coin.coin_id}. Coins: {session.inventory_count}")
    elif command == "goto" and len(rest) == 2:
        session.set_location(float(rest[0]), float(rest[1]))
    elif command == "reset":
        session.reset()
    else:
        log_notice(f"Unknown command: {' '.join(words)}")
    return True


def main(args: argparse.Namespace) -> None:
    try:
        settings = build_settings(args)
    except ValidationError as exc:
        log_error(f"Invalid settings: {exc.error_count()} error(s)\n{exc}")
        return

    persistence = InMemoryPersistence() if args.memory else JsonPersistence(args.save)
    session = GameSession.start(settings, persistence, listeners=[print_window])
    log_info(f"{Config.APP_NAME}: coins {session.inventory_count}, cell {session.player.cell}")

    try:
        while True:
            try:
                line = input("> ").strip()
            except EOFError:
                break
            if not line:
                continue
            try:
                if not handle(session, shlex.split(line)):
                    break
            except UserActionInvalidError as exc:
                log_notice(str(exc))
            except ValueError as exc:
                log_notice(f"Could not parse command: {exc}")
    finally:
        session.close()


if __name__ == "__main__":
    main(parse_args())
