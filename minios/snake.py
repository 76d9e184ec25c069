"""Snake game played on an ANSI terminal."""

from __future__ import annotations

import os
import random
import select
import sys
import time
from collections import deque
from contextlib import contextmanager
from enum import Enum
from typing import TextIO

MAX_ROW = 25
MAX_COL = 80

KEY_UP = "w"
KEY_DOWN = "s"
KEY_LEFT = "a"
KEY_RIGHT = "d"
KEY_QUIT = "q"

ESC_CLEAR_SCREEN = "\x1b[2J"

_START_ROW = 10
_START_COL = 20
_TICK_SECONDS = 0.01
_TICKS_PER_STEP = 50

_MOVES = {
    KEY_LEFT: (0, -1),
    KEY_RIGHT: (0, 1),
    KEY_UP: (-1, 0),
    KEY_DOWN: (1, 0),
}


class SnakeStatus(Enum):
    """What the snake ran into on its last move."""

    NONE = 0
    HIT_SELF = 1
    HIT_WALL = 2
    HIT_FOOD = 3


class SnakeGame:
    """Game state and drawing; ``body[0]`` is the head."""

    def __init__(
        self,
        rows: int = MAX_ROW,
        cols: int = MAX_COL,
        rng: random.Random | None = None,
        out: TextIO | None = None,
    ) -> None:
        if rows < 3 or cols < 3:
            raise ValueError("the map needs at least 3 rows and 3 columns")
        self.rows = rows
        self.cols = cols
        self.rng = rng if rng is not None else random.Random()
        self.out = out if out is not None else sys.stdout
        self.body: deque[tuple[int, int]] = deque()
        self.food: tuple[int, int] | None = None
        self.direction = KEY_LEFT
        self.status = SnakeStatus.NONE

    # drawing

    def show_char(self, row: int, col: int, ch: str) -> None:
        self.out.write(f"\x1b[{row};{col}H{ch}\x1b[{row};{col}H")

    def show_str(self, row: int, col: int, text: str) -> None:
        self.out.write(f"\x1b[{row};{col}H{text}")

    def clear(self) -> None:
        self.out.write(ESC_CLEAR_SCREEN)

    def flush(self) -> None:
        self.out.flush()

    # game state

    @property
    def head(self) -> tuple[int, int]:
        return self.body[0]

    @property
    def is_over(self) -> bool:
        return self.status in (SnakeStatus.HIT_SELF, SnakeStatus.HIT_WALL)

    def _init_map(self) -> None:
        self.clear()
        for col in range(1, self.cols - 1):
            self.show_char(0, col, "=")
            self.show_char(self.rows - 1, col, "=")
        for row in range(1, self.rows - 1):
            self.show_char(row, 0, "|")
            self.show_char(row, self.cols - 1, "|")

    def _init_snake(self) -> None:
        self.body = deque([(_START_ROW, _START_COL)])
        self.status = SnakeStatus.NONE
        self.direction = KEY_LEFT
        self.show_char(_START_ROW, _START_COL, "*")

    def init_game(self) -> None:
        """Draw the map, place a new snake and the first food."""
        self._init_map()
        self._init_snake()
        self.create_food()
        self.flush()

    def create_food(self) -> tuple[int, int]:
        """Place food at a random spot inside the walls, away from the head."""
        while True:
            food = (
                1 + self.rng.randrange(self.rows - 2),
                1 + self.rng.randrange(self.cols - 2),
            )
            if food != self.head:
                self.food = food
                self.show_char(food[0], food[1], "*")
                return food

    def _add_head(self, row: int, col: int) -> None:
        self.body.appendleft((row, col))
        self.show_char(row, col, "*")

    def _remove_tail(self) -> None:
        row, col = self.body.pop()
        self.show_char(row, col, " ")

    def move_forward(self, direction: str) -> SnakeStatus:
        """Move one step towards ``direction`` (w, a, s or d) and return the status.

        Unknown keys and moves back onto the second segment are ignored.
        """
        step = _MOVES.get(direction)
        if step is None:
            return self.status
        row, col = self.head
        nxt = (row + step[0], col + step[1])
        if len(self.body) > 1 and nxt == self.body[1]:
            return self.status

        self._add_head(*nxt)
        if self.is_hit_self():
            self.status = SnakeStatus.HIT_SELF
            self._remove_tail()
        elif self.is_hit_wall():
            self.status = SnakeStatus.HIT_WALL
            self._remove_tail()
        elif self.is_hit_food():
            self.food = None
            self.create_food()
            self.status = SnakeStatus.HIT_FOOD
        else:
            self._remove_tail()
            self.status = SnakeStatus.NONE
        self.direction = direction
        self.flush()
        return self.status

    def is_hit_self(self) -> bool:
        head = self.head
        return any(segment == head for segment in list(self.body)[1:])

    def is_hit_wall(self) -> bool:
        row, col = self.head
        return row <= 0 or col <= 0 or row >= self.rows - 1 or col >= self.cols - 1

    def is_hit_food(self) -> bool:
        return self.food is not None and self.head == self.food


@contextmanager
def _raw_input(stream: TextIO):
    """Turn off echo and line buffering on a terminal for the duration."""
    try:
        import termios
        import tty
    except ImportError:
        yield
        return
    try:
        fd = stream.fileno()
        saved = termios.tcgetattr(fd)
    except (OSError, ValueError, termios.error):
        yield
        return
    try:
        tty.setcbreak(fd)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _key_ready(stream: TextIO) -> bool:
    try:
        ready, _, _ = select.select([stream], [], [], 0)
    except (OSError, ValueError):
        return True
    return bool(ready)


def _read_key(stream: TextIO) -> str:
    try:
        data = os.read(stream.fileno(), 1)
        return data.decode("latin-1")
    except (OSError, ValueError, AttributeError):
        return stream.read(1)


def _show_welcome(game: SnakeGame, stdin: TextIO) -> None:
    game.clear()
    game.show_str(0, 0, "Welcome to snake game")
    game.show_str(1, 0, "Use a.w.s.d to move snake")
    game.show_str(2, 0, "Press any key to start game")
    game.flush()
    _read_key(stdin)


def _start_game(game: SnakeGame, stdin: TextIO) -> bool:
    """Run one round; return True if the player asked to quit."""
    ticks = 0
    while True:
        if _key_ready(stdin):
            ch = _read_key(stdin)
            if ch == "":
                return True
            game.move_forward(ch)
        else:
            ticks += 1
            if ticks % _TICKS_PER_STEP == 0:
                game.move_forward(game.direction)

        if game.is_over:
            row, col = game.rows // 2, game.cols // 2
            game.show_str(row, col, "GAME OVER.")
            game.show_str(row + 1, col, "Press Enter to continue, q to quit.")
            game.flush()
            while True:
                ch = _read_key(stdin)
                if ch in ("q", "Q", ""):
                    return True
                if ch in ("\n", "\r"):
                    return False
        time.sleep(_TICK_SECONDS)


def main(argv=None) -> int:
    """Play the game on the terminal until the player quits."""
    game = SnakeGame()
    stdin = sys.stdin
    with _raw_input(stdin):
        _show_welcome(game, stdin)
        quit_game = False
        while not quit_game:
            game.init_game()
            quit_game = _start_game(game, stdin)
    game.clear()
    game.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())