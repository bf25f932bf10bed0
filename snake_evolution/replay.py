"""
Pygame replay of the champions collected during training.

One network is built once; each champion's weights are swapped in with
`update_weights` and played through the same headless SnakeGame the
trainer scored it with. Right arrow skips to the next champion, closing
the window stops the replay.
"""

import logging

import numpy as np
import pygame

from .ai.neural_network import NeuralNetwork
from .config import GridConfig, RewardConfig
from .game.snake_game import SnakeGame
from .train.fitness import RELATIVE_OUTPUTS, check_network_spec

logger = logging.getLogger(__name__)


class ReplayViewer:
    """Plays a list of champion chromosomes generation by generation"""

    def __init__(self, grid=None, reward=None, square_size=48, fps=10, start_fraction=0.95, seed=None):
        self.grid = grid or GridConfig()
        self.reward = reward or RewardConfig()
        self.square_size = square_size
        self.fps = fps
        self.start_fraction = start_fraction
        self.rng = np.random.default_rng(seed)

        self.width = self.grid.width * square_size
        self.height = self.grid.height * square_size

        # Colors
        self.WHITE = (255, 255, 255)
        self.BLACK = (0, 0, 0)
        self.RED = (255, 0, 0)
        self.GRAY = (128, 128, 128)
        self.HEAD = (15, 74, 4)
        self.BODY = (6, 140, 8)

    def play(self, champions, network_spec):
        check_network_spec(network_spec)
        if not champions:
            return

        pygame.init()
        window = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Snake AI - Genetic Algorithm Replay")
        clock = pygame.time.Clock()
        font = pygame.font.Font(None, 28)

        network = NeuralNetwork(network_spec, weights=champions[0])
        game = SnakeGame(self.grid, self.rng, self.reward,
                         relative_moves=network_spec.output_size == RELATIVE_OUTPUTS)

        index = min(int(self.start_fraction * len(champions)), len(champions) - 1)
        try:
            while index < len(champions):
                network.update_weights(champions[index])
                state = game.reset()
                skip = False

                while not game.done and not skip:
                    for event in pygame.event.get():
                        if event.type == pygame.QUIT:
                            return
                        if event.type == pygame.KEYDOWN and event.key == pygame.K_RIGHT:
                            skip = True

                    state, _ = game.step(network.act(state))
                    self.render(window, font, game, index + 1)
                    clock.tick(self.fps)

                logger.info("Generation %d champion scored %d", index + 1, game.score)
                index += 1
        finally:
            pygame.quit()

    def render(self, window, font, game, generation):
        window.fill(self.WHITE)

        # Draw grid lines
        for i in range(self.grid.width + 1):
            pygame.draw.line(window, self.GRAY, (i * self.square_size, 0),
                             (i * self.square_size, self.height), 1)
        for i in range(self.grid.height + 1):
            pygame.draw.line(window, self.GRAY, (0, i * self.square_size),
                             (self.width, i * self.square_size), 1)

        # Draw food
        if game.food_position is not None:
            pygame.draw.rect(window, self.RED, self._cell_rect(game.food_position))

        # Draw snake
        for segment in game.snake.body:
            pygame.draw.rect(window, self.BODY, self._cell_rect(segment.position))
        if self.grid.contains(game.snake.position):
            pygame.draw.rect(window, self.HEAD, self._cell_rect(game.snake.position))

        text = font.render(f"Current gen: {generation}, current score: {game.score}", True, self.BLACK)
        window.blit(text, (5, 5))

        pygame.display.flip()

    def _cell_rect(self, position):
        return pygame.Rect(position[0] * self.square_size, position[1] * self.square_size,
                           self.square_size, self.square_size)
