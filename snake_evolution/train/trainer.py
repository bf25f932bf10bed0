# Headless training loop for the evolved Snake player.
# Runs the genetic algorithm for n_of_generations and collects the best
# chromosome of every generation for the replay viewer.

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field, replace

import matplotlib.pyplot as plt
import numpy as np

from ..ai.genetic_algorithm import GeneticAlgorithm
from ..config import DEFAULT_CONFIG_PATH, load_trainer_options
from ..errors import SnakeEvolutionError
from .fitness import SnakeFitness

logger = logging.getLogger(__name__)


@dataclass
class TrainingResult:
    """Champions in generation order plus the network layout needed to rebuild them"""
    network_spec: object
    champions: list = field(default_factory=list)
    best_scores: list = field(default_factory=list)
    best_fitness_history: list = field(default_factory=list)
    avg_fitness_history: list = field(default_factory=list)


class SnakeTrainer:
    def __init__(self, options, device=None, progress_callback=None):
        # Validate everything up front so a bad network or option set fails before generation 0
        # Args:
        #   options: TrainerOptions
        #   device: torch device for the networks (cpu by default)
        #   progress_callback: optional callable(generation, best_score)
        self.options = options
        self.population_options = options.population_options()
        self.fitness = SnakeFitness(options.network, options.grid, options.reward, device)
        self.rng = np.random.default_rng(options.seed)
        self.progress_callback = progress_callback
        self.ga = None

    def run(self, replay=None):
        # Train and hand the champions to `replay(champions, network_spec)` if given
        n_of_generations = self.population_options.n_of_generations
        start_time = time.time()

        logger.info("Training | Pop: %d | Gen: %d | Genes: %d | Threads: %d",
                    self.population_options.population_size, n_of_generations,
                    self.population_options.number_of_chromosomes, self.options.num_threads)

        self.ga = GeneticAlgorithm(self.population_options, self.fitness, rng=self.rng,
                                   num_threads=self.options.num_threads)
        result = TrainingResult(network_spec=self.options.network)

        for gen in range(n_of_generations):
            gen_start = time.time()
            self.ga.evolve_generation()

            best_score = self.ga.best_score()
            result.best_scores.append(best_score)
            result.champions.append(self.ga.best_chromosome())

            logger.info("Gen %d: Best=%.1f Avg=%.1f (%.1fs)", gen + 1, best_score,
                        self.ga.avg_fitness_history[-1], time.time() - gen_start)
            if self.progress_callback:
                self.progress_callback(gen + 1, best_score)

        result.best_fitness_history = list(self.ga.best_fitness_history)
        result.avg_fitness_history = list(self.ga.avg_fitness_history)

        logger.info("Training completed in %.1f seconds", time.time() - start_time)

        if replay is not None and result.champions:
            replay(result.champions, result.network_spec)

        return result


def plot_evolution_progress(result):
    # Plot best and average fitness over generations (generation 0 is the random population)
    plt.figure(figsize=(12, 5))

    plt.subplot(1, 2, 1)
    plt.plot(result.best_fitness_history, label='Best Fitness', color='red', linewidth=2)
    plt.plot(result.avg_fitness_history, label='Average Fitness', color='blue', linewidth=2)
    plt.title('Fitness Evolution')
    plt.xlabel('Generation')
    plt.ylabel('Fitness')
    plt.legend()
    plt.grid(True, alpha=0.3)

    plt.subplot(1, 2, 2)
    plt.plot(range(1, len(result.best_scores) + 1), result.best_scores, color='green', linewidth=2)
    plt.title('Champion Score per Generation')
    plt.xlabel('Generation')
    plt.ylabel('Score')
    plt.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.show()


def build_parser():
    parser = argparse.ArgumentParser(description='Evolve a neural network that plays Snake')
    parser.add_argument('-c', '--config', type=str, default=DEFAULT_CONFIG_PATH,
                        help='INI file with training options (default: bundled config.ini)')
    parser.add_argument('-g', '--generations', type=int, default=None,
                        help='Number of generations (overrides the config file)')
    parser.add_argument('-p', '--population', type=int, default=None,
                        help='Population size (overrides the config file)')
    parser.add_argument('-t', '--threads', type=int, default=None,
                        help='Threads for parallel evaluation (overrides the config file)')
    parser.add_argument('-s', '--seed', type=int, default=None,
                        help='Seed for a reproducible run')
    parser.add_argument('--plot', action='store_true', help='Show evolution plots after training')
    parser.add_argument('--no-replay', action='store_true', help='Skip the pygame replay of champions')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    options = load_trainer_options(args.config, seed=args.seed)
    overrides = {'n_of_generations': args.generations, 'population_size': args.population,
                 'num_threads': args.threads}
    options = replace(options, **{key: value for key, value in overrides.items() if value is not None})

    replay = None
    if not args.no_replay:
        from ..replay import ReplayViewer
        replay = ReplayViewer(grid=options.grid, reward=options.reward, seed=options.seed).play

    trainer = SnakeTrainer(options)
    result = trainer.run(replay=replay)

    if result.best_scores:
        print(f"\nFinal best score: {result.best_scores[-1]:.1f}")
        print(f"Improvement: {result.best_scores[-1] - result.best_fitness_history[0]:.1f} points")

    if args.plot:
        plot_evolution_progress(result)

    return result


def run():
    try:
        main()
    except KeyboardInterrupt:
        print("\n\nTraining interrupted by user.")
        sys.exit(1)
    except SnakeEvolutionError as e:
        print(f"\nError: {e}")
        sys.exit(1)
