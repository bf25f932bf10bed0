"""
Snake rules for the evolution trainer.

The snake has a head (position + direction) and a body of segments ordered
head-adjacent first. Turning is throttled with a committed direction and at
most one buffered turn, so two key presses (or network decisions) in one
tick never fold the snake back through its neck.
"""

import math
from collections import deque
from enum import Enum
from typing import NamedTuple


class Direction(Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @staticmethod
    def get_index(direction):
        return {Direction.UP: 0, Direction.RIGHT: 1, Direction.DOWN: 2, Direction.LEFT: 3}[direction]

    @staticmethod
    def from_index(index):
        return CLOCKWISE[index % 4]

    @property
    def inverse(self):
        return Direction.from_index(Direction.get_index(self) + 2)

    def turn_right(self):
        return Direction.from_index(Direction.get_index(self) + 1)

    def turn_left(self):
        return Direction.from_index(Direction.get_index(self) - 1)


CLOCKWISE = (Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT)


class Move(Enum):
    # Relative moves for 3-wide network outputs
    STRAIGHT = 0
    RIGHT = 1
    LEFT = 2

    def apply_to(self, direction):
        if self is Move.RIGHT:
            return direction.turn_right()
        if self is Move.LEFT:
            return direction.turn_left()
        return direction


class Position(NamedTuple):
    x: int
    y: int

    def moved(self, direction):
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)

    def distance_to(self, other):
        return math.hypot(self.x - other[0], self.y - other[1])


class Segment(NamedTuple):
    position: Position
    direction: Direction


class SnakeState(Enum):
    RUNNING = 'running'
    ATE_FOOD = 'ate_food'
    ATE_SELF = 'ate_self'
    ATE_BORDER = 'ate_border'

    @property
    def is_terminal(self):
        return self in (SnakeState.ATE_SELF, SnakeState.ATE_BORDER)


class Snake:
    """Single snake on a bounded grid"""

    def __init__(self, position, grid, direction=Direction.RIGHT, body=None):
        self.grid = grid
        self.position = Position(*position)
        self.direction = direction

        # Committed direction of the last tick and the (optional) buffered turn
        self.last_direction = direction
        self.next_direction = None

        if body is None:
            body = [Segment(self.position.moved(direction.inverse), direction)]
        self.body = deque(Segment(Position(*pos), direction) for pos, direction in body)
        if not self.body:
            raise ValueError("Snake body needs at least one segment")

        self.state = SnakeState.RUNNING

    def __len__(self):
        return len(self.body) + 1

    @property
    def tail_direction(self):
        return self.body[-1].direction

    def cells(self):
        """Head position followed by every body position"""
        yield self.position
        for segment in self.body:
            yield segment.position

    def is_in_position(self, position):
        return any(cell == position for cell in self.cells())

    def eats_self(self):
        return any(segment.position == self.position for segment in self.body)

    def move_in_dir(self, new_direction):
        # Already turned this tick: buffer the request unless it reverses the new heading.
        # Otherwise turn now, unless that would reverse through the neck.
        if self.direction != self.last_direction and new_direction.inverse != self.direction:
            self.next_direction = new_direction
        elif new_direction.inverse != self.last_direction:
            self.direction = new_direction

    def move_relative(self, move):
        self.move_in_dir(move.apply_to(self.direction))

    def update_state(self, food_position):
        """Advance one tick and report what the head ran into"""
        if self.last_direction == self.direction and self.next_direction is not None:
            self.direction = self.next_direction
            self.next_direction = None

        self.body.appendleft(Segment(self.position, self.direction))
        self.position = self.position.moved(self.direction)

        # Priority: food, border, own body (checked before the tail moves on)
        if food_position is not None and self.position == food_position:
            state = SnakeState.ATE_FOOD
        elif not self.grid.contains(self.position):
            state = SnakeState.ATE_BORDER
        elif self.eats_self():
            state = SnakeState.ATE_SELF
        else:
            state = SnakeState.RUNNING

        if state is not SnakeState.ATE_FOOD:
            self.body.pop()

        self.last_direction = self.direction
        self.state = state
        return state
