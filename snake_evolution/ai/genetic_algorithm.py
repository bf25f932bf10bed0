import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

import numpy as np

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

_SEED_HIGH = np.iinfo(np.int64).max


@dataclass(frozen=True)
class PopulationOptions:
    """Parameters of the genetic algorithm, fixed for the whole run"""
    population_size: int
    number_of_chromosomes: int
    gen_min_val: float = -1.0
    gen_max_val: float = 1.0
    crossing_prob: float = 0.9
    mutation_prob: float = 0.3
    mutation_range: float = 0.3
    n_of_generations: int = 2000

    def __post_init__(self):
        if self.population_size < 1:
            raise ConfigurationError(f"population_size must be >= 1, got {self.population_size}")
        if self.number_of_chromosomes < 1:
            raise ConfigurationError(
                f"number_of_chromosomes must be >= 1, got {self.number_of_chromosomes}")
        if not (math.isfinite(self.gen_min_val) and math.isfinite(self.gen_max_val)):
            raise ConfigurationError("Gene value range must be finite")
        if self.gen_min_val >= self.gen_max_val:
            raise ConfigurationError(
                f"gen_min_val ({self.gen_min_val}) must be below gen_max_val ({self.gen_max_val})")
        for name in ('crossing_prob', 'mutation_prob'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")
        if not (math.isfinite(self.mutation_range) and self.mutation_range >= 0):
            raise ConfigurationError(f"mutation_range must be >= 0, got {self.mutation_range}")
        if self.n_of_generations < 0:
            raise ConfigurationError(f"n_of_generations must be >= 0, got {self.n_of_generations}")


class Individual:
    # One chromosome (flat network weights) and the fitness it last scored.
    # Equality compares chromosomes only.

    def __init__(self, chromosome, fitness=0.0):
        self.chromosome = np.array(chromosome, dtype=np.float64)
        self.chromosome.flags.writeable = False
        self.fitness = fitness

    @classmethod
    def random(cls, number_of_chromosomes, min_val, max_val, rng):
        return cls(rng.uniform(min_val, max_val, size=number_of_chromosomes))

    def evaluate(self, fitness_fn, rng):
        self.fitness = float(fitness_fn(self.chromosome, rng))
        return self.fitness

    def copy(self):
        return Individual(self.chromosome, self.fitness)

    def __len__(self):
        return len(self.chromosome)

    def __eq__(self, other):
        if not isinstance(other, Individual):
            return NotImplemented
        return np.array_equal(self.chromosome, other.chromosome)

    __hash__ = None

    def __repr__(self):
        return f"Individual(genes={len(self.chromosome)}, fitness={self.fitness:.3f})"


def single_point_crossover(first, second, point):
    """Swap the gene tails of two equal-length chromosomes at `point`"""
    first = np.asarray(first)
    second = np.asarray(second)
    if len(first) != len(second):
        raise ValueError(f"Chromosome lengths differ: {len(first)} != {len(second)}")
    child1 = np.concatenate([first[:point], second[point:]])
    child2 = np.concatenate([second[:point], first[point:]])
    return child1, child2


class GeneticAlgorithm:
    # Genetic algorithm over flat weight vectors:
    # roulette-wheel selection, single-point crossover, uniform additive mutation

    def __init__(self, options, fitness_fn, rng=None, num_threads=1):
        # Create and evaluate the initial population
        # Args:
        #   options: PopulationOptions
        #   fitness_fn: callable(chromosome, rng) -> float
        #   rng: numpy Generator driving every random draw (seed it for reproducible runs)
        #   num_threads: number of threads for parallel evaluation
        self.options = options
        self.fitness_fn = fitness_fn
        self.rng = rng if rng is not None else np.random.default_rng()
        self.num_threads = max(1, int(num_threads))

        self.population_size = options.population_size
        self.crossing_prob = options.crossing_prob
        self.mutation_prob = options.mutation_prob
        self.mutation_range = options.mutation_range

        # Statistics tracking
        self.generation = 0
        self.best_fitness_history = []
        self.avg_fitness_history = []

        self.population = [
            Individual.random(options.number_of_chromosomes, options.gen_min_val,
                              options.gen_max_val, self.rng)
            for _ in range(self.population_size)
        ]
        self.evaluate_population(self.population)
        self._record_statistics()

    def _evaluate_worker(self, individual, seed, fitness_fn):
        return individual.evaluate(fitness_fn, np.random.default_rng(seed))

    def evaluate_population(self, individuals, fitness_fn=None):
        # Score every individual. Each one gets its own generator seeded from self.rng
        # up front, so results don't depend on thread scheduling.
        if fitness_fn is None:
            fitness_fn = self.fitness_fn
        start_time = time.time()
        seeds = self.rng.integers(0, _SEED_HIGH, size=len(individuals))

        if self.num_threads == 1:
            for individual, seed in zip(individuals, seeds):
                self._evaluate_worker(individual, seed, fitness_fn)
        else:
            with ThreadPoolExecutor(max_workers=self.num_threads) as executor:
                futures = [executor.submit(self._evaluate_worker, individual, seed, fitness_fn)
                           for individual, seed in zip(individuals, seeds)]
                for future in as_completed(futures):
                    future.result()

        logger.debug("Evaluated %d individuals in %.2fs", len(individuals), time.time() - start_time)

    def roulette_wheel_selection(self):
        # Fitness-proportionate selection of population_size individuals.
        # Negative fitness weighs zero; a non-positive or non-finite total falls back to uniform.
        weights = np.clip(np.array([ind.fitness for ind in self.population], dtype=np.float64), 0.0, None)
        total = weights.sum()
        n = len(self.population)

        if not np.isfinite(total) or total <= 0:
            logger.warning("Gen %d: fitness sum is %s, selecting uniformly", self.generation, total)
            indices = self.rng.integers(0, n, size=n)
        else:
            cumulative = np.cumsum(weights / total)
            samples = self.rng.random(n)
            # first bucket whose cumulative probability exceeds the sample
            indices = np.minimum(np.searchsorted(cumulative, samples, side='right'), n - 1)

        return [self.population[i].copy() for i in indices]

    def crossover(self, parent1, parent2):
        # Single-point crossover at a cut drawn from [1, len - 1)
        length = len(parent1)
        if length < 3:
            return parent1.copy(), parent2.copy()

        crossover_point = int(self.rng.integers(1, length - 1))
        child1, child2 = single_point_crossover(parent1.chromosome, parent2.chromosome, crossover_point)
        return Individual(child1), Individual(child2)

    def crossover_population(self, selected):
        # Bernoulli draw per individual; the chosen ones are paired in order.
        # An odd one out is carried over uncrossed.
        draws = self.rng.random(len(selected)) < self.crossing_prob
        to_cross = [ind for ind, draw in zip(selected, draws) if draw]
        not_to_cross = [ind for ind, draw in zip(selected, draws) if not draw]

        if len(to_cross) % 2 == 1:
            not_to_cross.append(to_cross.pop())

        crossed = []
        for parent1, parent2 in zip(to_cross[0::2], to_cross[1::2]):
            crossed.extend(self.crossover(parent1, parent2))

        return not_to_cross + crossed

    def mutate(self, individual):
        # Each gene, with probability mutation_prob, gets a uniform kick in [-range, range]
        genes = individual.chromosome
        mask = self.rng.random(len(genes)) < self.mutation_prob
        noise = self.rng.uniform(-self.mutation_range, self.mutation_range, size=len(genes))
        return Individual(np.where(mask, genes + noise, genes))

    def evolve_generation(self, fitness_fn=None):
        # Selection -> crossover -> mutation -> re-evaluation, then full replacement
        selected = self.roulette_wheel_selection()
        crossed = self.crossover_population(selected)
        offspring = [self.mutate(individual) for individual in crossed]

        self.evaluate_population(offspring, fitness_fn)

        self.population = offspring
        self.generation += 1
        self._record_statistics()

    def _record_statistics(self):
        fitnesses = [ind.fitness for ind in self.population]
        self.best_fitness_history.append(max(fitnesses))
        self.avg_fitness_history.append(float(np.mean(fitnesses)))

    def get_best_individual(self):
        # Highest fitness; on ties the last one seen wins
        best = None
        for individual in self.population:
            if best is None or individual.fitness >= best.fitness:
                best = individual
        return best

    def best_score(self):
        return self.get_best_individual().fitness

    def best_chromosome(self):
        return self.get_best_individual().chromosome.copy()
