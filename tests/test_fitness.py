import numpy as np
import pytest

from snake_evolution.ai import NetworkSpec
from snake_evolution.config import GridConfig, RewardConfig
from snake_evolution.errors import ShapeMismatchError, WeightCountMismatchError
from snake_evolution.game import Move, Position, SnakeGame
from snake_evolution.train import SnakeFitness, evaluate

SPEC = NetworkSpec([32, 20, 12, 4], ['relu', 'relu', 'softmax'])


def random_chromosome(spec, seed):
    return np.random.default_rng(seed).uniform(-1, 1, size=spec.weight_count)


def test_reward_without_food_counts_steps():
    reward = RewardConfig()
    assert reward.score(0, 0) == pytest.approx(1.0)
    assert reward.score(10, 0) == pytest.approx(11.0)


def test_reward_rewards_food():
    reward = RewardConfig()
    assert reward.score(20, 1) > reward.score(20, 0)
    assert reward.score(40, 3) > reward.score(40, 2)


def test_reward_is_floored_at_zero():
    assert RewardConfig().score(10000, 1) == 0.0


def test_reward_coefficients_are_configurable():
    reward = RewardConfig(points_base=1.0, food_weight=10.0, food_exponent=1.0, penalty_step_scale=0.0)
    assert reward.score(5, 2) == pytest.approx(5 + 1 + 20)


def test_spawn_keeps_distance_from_walls():
    grid = GridConfig(10, 10)
    rng = np.random.default_rng(0)
    for _ in range(50):
        game = SnakeGame(grid, rng)
        x, y = game.snake.position
        assert 2 <= x < 8 and 2 <= y < 8
        assert game.food_position is not None
        assert not game.snake.is_in_position(game.food_position)


def circling_game(reward):
    # Turning right every tick walks a 2x2 loop just left of the spawn point
    game = SnakeGame(GridConfig(10, 10), np.random.default_rng(1), reward, relative_moves=True)
    game.food_position = Position(0, 0)
    while not game.done:
        game.step(Move.RIGHT.value)
    return game


def test_stalling_snake_is_stopped():
    game = circling_game(RewardConfig(max_steps_without_food=20))

    assert game.stalled
    assert game.steps == 20
    assert game.score == 0


def test_step_budget_ends_episode():
    game = circling_game(RewardConfig(max_steps_without_food=100, max_steps=7))

    assert game.done and not game.stalled
    assert game.steps == 7


def test_eating_food_resets_stall_counter():
    game = SnakeGame(GridConfig(10, 10), np.random.default_rng(2), relative_moves=True)
    game.food_position = game.snake.position.moved(game.snake.direction)

    state, done = game.step(Move.STRAIGHT.value)

    assert not done
    assert game.score == 1
    assert game.steps_without_food == 0
    assert len(game.snake.body) == 2
    assert not game.snake.is_in_position(game.food_position)
    assert state.shape == (32,)


def test_border_collision_ends_episode():
    game = SnakeGame(GridConfig(10, 10), np.random.default_rng(3))
    game.food_position = Position(0, 0)
    # action 1 keeps heading right until the wall
    while not game.done:
        game.step(1)

    assert game.last_state.is_terminal
    assert game.snake.position[0] == 10


def test_evaluate_is_reproducible_with_seed():
    chromosome = random_chromosome(SPEC, 0)
    first = evaluate(chromosome, SPEC, np.random.default_rng(42))
    second = evaluate(chromosome, SPEC, np.random.default_rng(42))

    assert first == second
    assert first >= 0.0 and np.isfinite(first)


def test_evaluate_relative_output_network():
    spec = NetworkSpec([32, 8, 3], ['relu', 'softmax'])
    score = evaluate(random_chromosome(spec, 1), spec, np.random.default_rng(5))

    assert score >= 0.0


def test_fitness_function_matches_evaluate():
    fitness = SnakeFitness(SPEC, GridConfig(12, 12), RewardConfig(max_steps_without_food=50))
    chromosome = random_chromosome(SPEC, 2)

    assert fitness(chromosome, np.random.default_rng(9)) == evaluate(
        chromosome, SPEC, np.random.default_rng(9), GridConfig(12, 12), RewardConfig(max_steps_without_food=50))


def test_wrong_chromosome_length_rejected():
    with pytest.raises(WeightCountMismatchError):
        evaluate(np.zeros(SPEC.weight_count - 1), SPEC, np.random.default_rng(0))


@pytest.mark.parametrize("layer_sizes", [[10, 4], [32, 5], [32, 2]])
def test_network_must_fit_the_game(layer_sizes):
    with pytest.raises(ShapeMismatchError):
        SnakeFitness(NetworkSpec(layer_sizes, ['softmax']))
