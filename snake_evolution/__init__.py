"""
Snake Evolution

Evolves the weights of a small feed-forward network that plays Snake, using
a genetic algorithm with a headless fitness-evaluation harness.
"""

from .ai import Activation, GeneticAlgorithm, Individual, NetworkSpec, NeuralNetwork, PopulationOptions
from .config import GridConfig, RewardConfig, TrainerOptions, load_trainer_options
from .errors import (ConfigurationError, InputSizeMismatchError, ShapeMismatchError,
                     SnakeEvolutionError, WeightCountMismatchError)
from .game import Direction, Snake, SnakeGame, SnakeState
from .train import SnakeFitness, SnakeTrainer, TrainingResult, evaluate

__all__ = ['Activation', 'GeneticAlgorithm', 'Individual', 'NetworkSpec', 'NeuralNetwork',
           'PopulationOptions', 'GridConfig', 'RewardConfig', 'TrainerOptions', 'load_trainer_options',
           'ConfigurationError', 'InputSizeMismatchError', 'ShapeMismatchError', 'SnakeEvolutionError',
           'WeightCountMismatchError', 'Direction', 'Snake', 'SnakeGame', 'SnakeState', 'SnakeFitness',
           'SnakeTrainer', 'TrainingResult', 'evaluate']
