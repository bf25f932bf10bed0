# config.py
"""
Configuration for the snake evolution trainer.
Typed, construct-time options plus an INI loader for the training entry point.
"""

import configparser
import math
import os
from dataclasses import dataclass, field
from typing import Optional

from .ai.genetic_algorithm import PopulationOptions
from .ai.neural_network import NetworkSpec
from .errors import ConfigurationError

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config.ini')

DEFAULT_LAYER_SIZES = (32, 20, 12, 4)
DEFAULT_ACTIVATIONS = ('relu', 'relu', 'softmax')


@dataclass(frozen=True)
class GridConfig:
    """Board size in cells"""
    width: int = 10
    height: int = 10

    def __post_init__(self):
        # the snake spawns at least 2 cells away from every wall
        if self.width < 5 or self.height < 5:
            raise ConfigurationError(f"Grid must be at least 5x5, got {self.width}x{self.height}")

    @property
    def max_distance(self):
        """Board diagonal; also the 'nothing on this ray' sentinel"""
        return math.hypot(self.width, self.height)

    def contains(self, position):
        return 0 <= position[0] < self.width and 0 <= position[1] < self.height


@dataclass(frozen=True)
class RewardConfig:
    """Reward shaping and episode caps used by the fitness evaluator"""
    points_base: float = 2.0
    food_weight: float = 500.0
    food_exponent: float = 2.1
    penalty_food_exponent: float = 1.2
    penalty_step_scale: float = 0.25
    penalty_step_exponent: float = 1.3
    max_steps_without_food: int = 150
    max_steps: Optional[int] = None

    def __post_init__(self):
        if self.max_steps_without_food < 1:
            raise ConfigurationError(
                f"max_steps_without_food must be >= 1, got {self.max_steps_without_food}")
        if self.max_steps is not None and self.max_steps < 1:
            raise ConfigurationError(f"max_steps must be >= 1 or None, got {self.max_steps}")

    def score(self, steps, food):
        """Episode score from steps survived and food eaten, floored at zero"""
        reward = (steps
                  + self.points_base ** food
                  + self.food_weight * food ** self.food_exponent
                  - food ** self.penalty_food_exponent
                  * (self.penalty_step_scale * steps) ** self.penalty_step_exponent)
        return max(reward, 0.0)


@dataclass(frozen=True)
class TrainerOptions:
    """Everything the trainer needs; the chromosome length comes from the network"""
    network: NetworkSpec = field(
        default_factory=lambda: NetworkSpec(DEFAULT_LAYER_SIZES, DEFAULT_ACTIVATIONS))
    grid: GridConfig = field(default_factory=GridConfig)
    reward: RewardConfig = field(default_factory=RewardConfig)
    population_size: int = 500
    gen_min_val: float = -1.0
    gen_max_val: float = 1.0
    crossing_prob: float = 0.9
    mutation_prob: float = 0.3
    mutation_range: float = 0.3
    n_of_generations: int = 2000
    num_threads: int = 1
    seed: Optional[int] = None

    def population_options(self):
        return PopulationOptions(
            population_size=self.population_size,
            number_of_chromosomes=self.network.weight_count,
            gen_min_val=self.gen_min_val,
            gen_max_val=self.gen_max_val,
            crossing_prob=self.crossing_prob,
            mutation_prob=self.mutation_prob,
            mutation_range=self.mutation_range,
            n_of_generations=self.n_of_generations,
        )


def _parse_list(value):
    return [item.strip() for item in value.split(',') if item.strip()]


def load_trainer_options(path=DEFAULT_CONFIG_PATH, **overrides):
    """Read TrainerOptions from an INI file; missing keys keep their defaults"""
    config = configparser.ConfigParser()
    if not config.read(path):
        raise ConfigurationError(f"Cannot read config file: {path}")

    defaults = TrainerOptions.__dataclass_fields__
    kwargs = {}

    try:
        if config.has_section('network'):
            network = config['network']
            kwargs['network'] = NetworkSpec(
                [int(size) for size in _parse_list(network.get('layer_sizes', ','.join(map(str, DEFAULT_LAYER_SIZES))))],
                _parse_list(network.get('activations', ','.join(DEFAULT_ACTIVATIONS))),
            )

        if config.has_section('grid'):
            kwargs['grid'] = GridConfig(
                width=config.getint('grid', 'width', fallback=GridConfig.width),
                height=config.getint('grid', 'height', fallback=GridConfig.height),
            )

        if config.has_section('reward'):
            reward = {}
            for name in ('points_base', 'food_weight', 'food_exponent', 'penalty_food_exponent',
                         'penalty_step_scale', 'penalty_step_exponent'):
                reward[name] = config.getfloat('reward', name, fallback=getattr(RewardConfig, name))
            reward['max_steps_without_food'] = config.getint(
                'reward', 'max_steps_without_food', fallback=RewardConfig.max_steps_without_food)
            max_steps = config.get('reward', 'max_steps', fallback='').strip()
            reward['max_steps'] = int(max_steps) if max_steps else None
            kwargs['reward'] = RewardConfig(**reward)

        if config.has_section('population'):
            for name in ('population_size', 'n_of_generations'):
                kwargs[name] = config.getint('population', name, fallback=defaults[name].default)
            for name in ('gen_min_val', 'gen_max_val', 'crossing_prob', 'mutation_prob', 'mutation_range'):
                kwargs[name] = config.getfloat('population', name, fallback=defaults[name].default)

        if config.has_section('training'):
            kwargs['num_threads'] = config.getint('training', 'num_threads', fallback=1)
            seed = config.get('training', 'seed', fallback='').strip()
            kwargs['seed'] = int(seed) if seed else None
    except ValueError as e:
        if isinstance(e, ConfigurationError):
            raise
        raise ConfigurationError(f"Invalid value in {path}: {e}") from e

    kwargs.update({key: value for key, value in overrides.items() if value is not None})
    return TrainerOptions(**kwargs)
