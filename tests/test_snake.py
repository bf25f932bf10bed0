import pytest

from snake_evolution.config import GridConfig
from snake_evolution.game import Direction, Move, Position, Segment, Snake, SnakeState

GRID = GridConfig(10, 10)
FAR_FOOD = Position(0, 0)


def test_direction_inverse_and_turns():
    assert Direction.UP.inverse is Direction.DOWN
    assert Direction.LEFT.inverse is Direction.RIGHT
    assert Direction.UP.turn_right() is Direction.RIGHT
    assert Direction.UP.turn_left() is Direction.LEFT
    assert [Direction.get_index(d) for d in Direction] == [0, 1, 2, 3]


def test_new_snake_has_one_segment_behind_head():
    snake = Snake((5, 5), GRID)

    assert snake.direction is Direction.RIGHT
    assert list(snake.body) == [Segment(Position(4, 5), Direction.RIGHT)]
    assert len(snake) == 2


@pytest.mark.parametrize("direction", list(Direction))
def test_cannot_reverse_into_itself(direction):
    snake = Snake((5, 5), GRID, direction=direction)
    snake.move_in_dir(direction.inverse)

    assert snake.direction is direction


def test_turn_applies_immediately():
    snake = Snake((5, 5), GRID)
    snake.move_in_dir(Direction.UP)

    assert snake.direction is Direction.UP
    snake.update_state(FAR_FOOD)
    assert snake.position == Position(5, 4)


def test_second_turn_in_same_tick_is_buffered():
    snake = Snake((5, 5), GRID)
    snake.move_in_dir(Direction.UP)
    snake.move_in_dir(Direction.LEFT)

    assert snake.direction is Direction.UP
    assert snake.next_direction is Direction.LEFT

    snake.update_state(FAR_FOOD)
    assert snake.position == Position(5, 4)

    snake.update_state(FAR_FOOD)
    assert snake.direction is Direction.LEFT
    assert snake.next_direction is None
    assert snake.position == Position(4, 4)


def test_quick_double_turn_cannot_fold_back():
    # UP then DOWN within one tick must not reverse the snake onto its neck
    snake = Snake((5, 5), GRID)
    snake.move_in_dir(Direction.UP)
    snake.move_in_dir(Direction.LEFT)
    snake.move_in_dir(Direction.RIGHT)

    state = snake.update_state(FAR_FOOD)
    assert state is SnakeState.RUNNING
    assert snake.position == Position(5, 4)


def test_relative_moves():
    snake = Snake((5, 5), GRID)
    snake.move_relative(Move.RIGHT)
    assert snake.direction is Direction.DOWN

    snake = Snake((5, 5), GRID)
    snake.move_relative(Move.LEFT)
    assert snake.direction is Direction.UP

    snake = Snake((5, 5), GRID)
    snake.move_relative(Move.STRAIGHT)
    assert snake.direction is Direction.RIGHT


def test_eating_food_grows_by_one():
    snake = Snake((5, 5), GRID)

    assert snake.update_state(Position(6, 5)) is SnakeState.ATE_FOOD
    assert snake.position == Position(6, 5)
    assert len(snake.body) == 2

    assert snake.update_state(FAR_FOOD) is SnakeState.RUNNING
    assert len(snake.body) == 2
    assert snake.body[0] == Segment(Position(6, 5), Direction.RIGHT)


def test_running_into_border():
    snake = Snake((9, 5), GRID)

    assert snake.update_state(FAR_FOOD) is SnakeState.ATE_BORDER
    assert snake.state.is_terminal
    assert len(snake.body) == 1


def test_running_into_top_border():
    snake = Snake((5, 0), GRID, direction=Direction.UP)
    assert snake.update_state(FAR_FOOD) is SnakeState.ATE_BORDER


def _hooked_snake():
    # head (5,5) heading left, body curls round so (5,4) is part of it
    body = [
        Segment(Position(6, 5), Direction.LEFT),
        Segment(Position(6, 4), Direction.DOWN),
        Segment(Position(5, 4), Direction.RIGHT),
        Segment(Position(4, 4), Direction.RIGHT),
    ]
    return Snake((5, 5), GRID, direction=Direction.LEFT, body=body)


def test_running_into_body():
    snake = _hooked_snake()
    snake.move_in_dir(Direction.UP)

    assert snake.update_state(FAR_FOOD) is SnakeState.ATE_SELF
    assert len(snake.body) == 4


def test_food_takes_priority_over_self_collision():
    snake = _hooked_snake()
    snake.move_in_dir(Direction.UP)

    assert snake.update_state(Position(5, 4)) is SnakeState.ATE_FOOD


def test_tail_cell_counts_before_it_moves_on():
    body = [
        Segment(Position(5, 6), Direction.UP),
        Segment(Position(6, 6), Direction.LEFT),
        Segment(Position(6, 5), Direction.DOWN),
    ]
    snake = Snake((5, 5), GRID, direction=Direction.UP, body=body)
    snake.move_in_dir(Direction.RIGHT)

    assert snake.update_state(FAR_FOOD) is SnakeState.ATE_SELF


def test_is_in_position_covers_head_and_body():
    snake = _hooked_snake()

    assert snake.is_in_position(Position(5, 5))
    assert snake.is_in_position(Position(6, 4))
    assert not snake.is_in_position(Position(0, 0))


def test_tail_direction():
    assert _hooked_snake().tail_direction is Direction.RIGHT


def test_empty_body_rejected():
    with pytest.raises(ValueError):
        Snake((5, 5), GRID, body=[])
