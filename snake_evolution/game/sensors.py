"""
Sensor model: turns the snake and food into the network's input vector.

Eight rays leave the head (top, right, bottom, left, then the diagonals
top-right, bottom-right, bottom-left, top-left). Each ray reports the
distance to the wall, to the food and to the nearest body segment; a
target that is not on the ray reads as the board diagonal. All three are
divided by the board diagonal. The head direction and the tail segment's
direction follow as two one-hot blocks of four.
"""

import math
from dataclasses import dataclass

import numpy as np

from .snake import Direction

# Ray directions in grid coordinates (y grows downwards)
RAYS = (
    ('top', (0, -1)),
    ('right', (1, 0)),
    ('bottom', (0, 1)),
    ('left', (-1, 0)),
    ('top_right', (1, -1)),
    ('bottom_right', (1, 1)),
    ('bottom_left', (-1, 1)),
    ('top_left', (-1, -1)),
)

# Unit vectors of the rays (cos/sin of the 45 degree diagonals included)
UNIT_VECTORS = tuple((dx / math.hypot(dx, dy), dy / math.hypot(dx, dy)) for _, (dx, dy) in RAYS)

ALIGNMENT_TOLERANCE = 1e-5

FEATURE_SIZE = len(RAYS) * 3 + 4 + 4


@dataclass(frozen=True)
class DistanceInfo:
    distance_to_wall: float
    distance_to_food: float
    distance_to_body: float


@dataclass(frozen=True)
class Distances:
    top: DistanceInfo
    right: DistanceInfo
    bottom: DistanceInfo
    left: DistanceInfo
    top_right: DistanceInfo
    bottom_right: DistanceInfo
    bottom_left: DistanceInfo
    top_left: DistanceInfo

    def __iter__(self):
        for name, _ in RAYS:
            yield getattr(self, name)


def _wall_distance(head, step, grid):
    dx, dy = step
    limits = []
    if dx > 0:
        limits.append(grid.width - 1 - head.x)
    elif dx < 0:
        limits.append(head.x)
    if dy > 0:
        limits.append(grid.height - 1 - head.y)
    elif dy < 0:
        limits.append(head.y)
    # one cell along a diagonal is sqrt(2) long
    return min(limits) * math.hypot(dx, dy)


def _distance_on_ray(head, target, unit):
    """Distance from head to target if the target lies on the ray, else None"""
    offset_x = target[0] - head.x
    offset_y = target[1] - head.y
    length = math.hypot(offset_x, offset_y)
    if length == 0:
        return None
    if (abs(offset_x / length - unit[0]) <= ALIGNMENT_TOLERANCE
            and abs(offset_y / length - unit[1]) <= ALIGNMENT_TOLERANCE):
        return length
    return None


def get_distances(snake, food_position):
    """Read all 8 rays for the current snake and food"""
    grid = snake.grid
    head = snake.position
    sentinel = grid.max_distance

    readings = {}
    for (name, step), unit in zip(RAYS, UNIT_VECTORS):
        food = None
        if food_position is not None:
            food = _distance_on_ray(head, food_position, unit)

        body = None
        for segment in snake.body:
            distance = _distance_on_ray(head, segment.position, unit)
            if distance is not None and (body is None or distance < body):
                body = distance

        readings[name] = DistanceInfo(
            distance_to_wall=_wall_distance(head, step, grid),
            distance_to_food=sentinel if food is None else food,
            distance_to_body=sentinel if body is None else body,
        )

    return Distances(**readings)


def one_hot(direction):
    encoding = [0.0, 0.0, 0.0, 0.0]
    encoding[Direction.get_index(direction)] = 1.0
    return encoding


def encode(snake, food_position):
    """Feature vector of length FEATURE_SIZE for the network input layer"""
    max_distance = snake.grid.max_distance
    state = []

    for info in get_distances(snake, food_position):
        state.extend([
            info.distance_to_wall / max_distance,
            info.distance_to_food / max_distance,
            info.distance_to_body / max_distance,
        ])

    state.extend(one_hot(snake.direction))  # Current direction, 4 values
    state.extend(one_hot(snake.tail_direction))  # Tail direction, 4 values

    return np.array(state, dtype=np.float64)
