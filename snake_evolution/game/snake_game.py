"""
Headless single-snake game used for fitness evaluation and replay.

Both the trainer and the pygame replay drive episodes through this class,
so replayed champions see exactly the rules and sensors they were scored on.
"""

import logging

import numpy as np

from ..config import GridConfig, RewardConfig
from .sensors import encode
from .snake import Direction, Move, Position, Snake, SnakeState

logger = logging.getLogger(__name__)

SPAWN_MARGIN = 2


def random_position(grid, rng, margin=0):
    return Position(int(rng.integers(margin, grid.width - margin)),
                    int(rng.integers(margin, grid.height - margin)))


def place_food(snake, rng):
    """Pick a free cell uniformly; None when the snake fills the board"""
    grid = snake.grid
    occupied = set(snake.cells())
    empty_cells = [(x, y) for x in range(grid.width) for y in range(grid.height)
                   if (x, y) not in occupied]

    if empty_cells:
        return Position(*empty_cells[int(rng.integers(len(empty_cells)))])
    return None  # Game won - no empty cells


class SnakeGame:
    """One episode at a time: spawn, step, respawn food, stop on death or stall"""

    def __init__(self, grid=None, rng=None, reward=None, relative_moves=False):
        # Args:
        #   grid: GridConfig
        #   rng: numpy Generator for spawn and food placement
        #   reward: RewardConfig supplying the stall and step caps
        #   relative_moves: actions are 0=straight, 1=right, 2=left instead of
        #                   0=up, 1=right, 2=down, 3=left
        self.grid = grid or GridConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.reward = reward or RewardConfig()
        self.relative_moves = relative_moves
        self.reset()

    def reset(self):
        self.snake = Snake(random_position(self.grid, self.rng, SPAWN_MARGIN), self.grid)
        self.food_position = place_food(self.snake, self.rng)

        # Game state
        self.score = 0
        self.steps = 0
        self.steps_without_food = 0
        self.last_state = SnakeState.RUNNING
        self.done = False
        self.won = False
        self.stalled = False

        return self.get_state()

    def get_state(self):
        return encode(self.snake, self.food_position)

    def apply_action(self, action):
        if self.relative_moves:
            self.snake.move_relative(Move(action))
        else:
            self.snake.move_in_dir(Direction.from_index(action))

    def step(self, action):
        """Execute one tick with the given action index; returns (state, done)"""
        if self.done:
            return self.get_state(), True

        self.steps += 1
        self.steps_without_food += 1

        self.apply_action(action)
        self.last_state = self.snake.update_state(self.food_position)

        if self.last_state is SnakeState.ATE_FOOD:
            self.score += 1
            self.steps_without_food = 0
            self.food_position = place_food(self.snake, self.rng)
            if self.food_position is None:
                self.done = True
                self.won = True
        elif self.last_state.is_terminal:
            self.done = True

        if not self.done and self.steps_without_food >= self.reward.max_steps_without_food:
            self.done = True
            self.stalled = True

        if self.reward.max_steps is not None and self.steps >= self.reward.max_steps:
            self.done = True

        if self.done:
            logger.debug("Episode over after %d steps, score %d (%s)",
                         self.steps, self.score, self.last_state.value)

        return self.get_state(), self.done
