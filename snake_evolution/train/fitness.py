"""
Fitness evaluation: one full headless episode per chromosome.

The network reads the 32 ray/direction sensors. A 4-wide output picks an
absolute direction (up, right, down, left), a 3-wide output a relative move
(straight, right, left). The episode ends on a collision, when the snake
goes max_steps_without_food ticks without eating, or at the optional step
budget.
"""

import logging

import numpy as np

from ..ai.neural_network import NeuralNetwork
from ..config import GridConfig, RewardConfig
from ..errors import ShapeMismatchError
from ..game.sensors import FEATURE_SIZE
from ..game.snake_game import SnakeGame

logger = logging.getLogger(__name__)

ABSOLUTE_OUTPUTS = 4
RELATIVE_OUTPUTS = 3


def check_network_spec(network_spec):
    """Reject networks whose input or output width doesn't fit the game"""
    network_spec.validate()
    if network_spec.input_size != FEATURE_SIZE:
        raise ShapeMismatchError(
            f"First layer must take the {FEATURE_SIZE} sensor values, got {network_spec.input_size}")
    if network_spec.output_size not in (ABSOLUTE_OUTPUTS, RELATIVE_OUTPUTS):
        raise ShapeMismatchError(
            f"Output layer must have {ABSOLUTE_OUTPUTS} (absolute) or {RELATIVE_OUTPUTS} "
            f"(relative) neurons, got {network_spec.output_size}")


def play_episode(network, game):
    """Let `network` play `game` from a fresh reset until the episode ends"""
    state = game.reset()
    while not game.done:
        state, _ = game.step(network.act(state))
    return game


def evaluate(chromosome, network_spec, rng=None, grid=None, reward=None, device=None):
    """Score one chromosome by playing one episode"""
    reward = reward or RewardConfig()
    network = NeuralNetwork(network_spec, weights=chromosome, device=device)
    game = SnakeGame(grid or GridConfig(), rng if rng is not None else np.random.default_rng(), reward,
                     relative_moves=network_spec.output_size == RELATIVE_OUTPUTS)
    play_episode(network, game)
    return reward.score(game.steps, game.score)


class SnakeFitness:
    # Fitness function handed to the genetic algorithm: callable(chromosome, rng) -> float

    def __init__(self, network_spec, grid=None, reward=None, device=None):
        check_network_spec(network_spec)
        self.network_spec = network_spec
        self.grid = grid or GridConfig()
        self.reward = reward or RewardConfig()
        self.device = device

    def __call__(self, chromosome, rng):
        return evaluate(chromosome, self.network_spec, rng, self.grid, self.reward, self.device)
