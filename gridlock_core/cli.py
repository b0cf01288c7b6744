from __future__ import annotations

import argparse
from typing import Optional

from .engine import GameSnapshot, LevelCompleteData, PuzzleEngine
from .layout import pretty_layout
from .levels import get_total_levels
from .logging_config import configure_logging


def render(snapshot: GameSnapshot) -> str:
    """Text view of a snapshot: header line plus one row per conduit."""
    level = snapshot.level
    header = (
        f"Level {snapshot.level_id}/{get_total_levels()}: {level.name} [{level.difficulty}]"
        f"  moves={snapshot.moves}  progress={snapshot.progress:.0%}"
    )
    return header + "\n" + pretty_layout(snapshot.conduits, level.max_cores, snapshot.powered_conduits)


def autoplay(engine: PuzzleEngine, depth: int, max_moves: int) -> bool:
    """Follows hints until the level is solved, no hint exists, or `max_moves` is reached."""
    for _ in range(max_moves):
        if engine.get_state().is_complete:
            return True
        hint = engine.find_best_hint_move(depth)
        if hint is None:
            return False
        engine.move(hint.source, hint.target)
    return engine.get_state().is_complete


def _parse_move(text: str) -> Optional[tuple]:
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t != '']
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def main() -> None:
    parser = argparse.ArgumentParser(description='Gridlock conduit-sorting puzzle')
    parser.add_argument('--level', type=int, default=1, help='Level id to start on')
    parser.add_argument('--hint-depth', type=int, default=2, help='Lookahead depth for hints (2-3 is practical)')
    parser.add_argument('--autoplay', action='store_true', help='Follow hints instead of reading moves')
    parser.add_argument('--max-moves', type=int, default=200, help='Move limit for --autoplay')
    parser.add_argument('--log-level', default='WARNING', help='Logging level')
    args = parser.parse_args()

    configure_logging(args.log_level)
    engine = PuzzleEngine()
    completed = []
    engine.on_level_complete(completed.append)
    if not engine.init(args.level):
        parser.error(f'unknown level {args.level} (1..{get_total_levels()})')

    if args.autoplay:
        solved = autoplay(engine, args.hint_depth, args.max_moves)
        print(render(engine.get_state()))
        print('Solved.' if solved else 'Hints got stuck; no solution found.')
        return

    print(render(engine.get_state()))
    print("Enter 'from to', or u=undo r=restart h=hint n=next q=quit")
    while True:
        if completed:
            data: LevelCompleteData = completed.pop()
            print(f"Level {data.level_id} complete in {data.moves} moves!")
            if data.is_last_level:
                print('That was the last level.')
                return
        try:
            text = input('> ').strip().lower()
        except EOFError:
            return
        if text == 'q':
            return
        if text == 'u':
            if not engine.undo():
                print('Nothing to undo.')
        elif text == 'r':
            engine.restart()
        elif text == 'n':
            if not engine.next_level():
                print('No next level.')
        elif text == 'h':
            hint = engine.find_best_hint_move(args.hint_depth)
            if hint is None:
                print('No high-value move found. Try undo or restart to open a path.')
            else:
                print(f'Hint: {hint.source} -> {hint.target} (score {hint.score:g})')
            continue
        else:
            move = _parse_move(text)
            if move is None:
                print('Could not parse. Try again.')
                continue
            if not engine.move(*move):
                print('Illegal move. Try again.')
                continue
        print(render(engine.get_state()))


if __name__ == '__main__':
    main()
