"""
Genetic search over unit orderings.

A chromosome is a permutation of unit indices. Its fitness is the
utilization the shelf placer reaches when fed the units in that order.
Each generation: binary tournament selection, order-preserving prefix
crossover on consecutive pairs, swap mutation.

All randomness comes from the ``random.Random`` passed to ``place`` so a
fixed seed reproduces the layout exactly.
"""

import random
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Tuple

from core.exceptions import InvalidFieldValueError
from ..models.nesting_result import Algorithm, SheetSize, PartUnit, PlacedPart
from ..models.machine_config import NestingConfig
from .base_strategy import PackingStrategy, layout_metrics
from .guillotine import shelf_pack

logger = logging.getLogger(__name__)

Chromosome = Tuple[int, ...]


def random_chromosome(size: int, rng: random.Random) -> Chromosome:
    order = list(range(size))
    rng.shuffle(order)
    return tuple(order)


def tournament_selection(population: List[Chromosome], fitness: List[float],
                         rng: random.Random) -> List[Chromosome]:
    """Binary tournament, one winner per population slot. Ties go to the second pick."""
    selected = []
    for _ in range(len(population)):
        a = rng.randrange(len(population))
        b = rng.randrange(len(population))
        selected.append(population[a] if fitness[a] > fitness[b] else population[b])
    return selected


def prefix_crossover(parent_a: Chromosome, parent_b: Chromosome,
                     rng: random.Random) -> Chromosome:
    """Random-length prefix of A, then the rest in B's order."""
    point = rng.randrange(len(parent_a))
    prefix = parent_a[:point]
    taken = set(prefix)
    return prefix + tuple(gene for gene in parent_b if gene not in taken)


def crossover(selected: List[Chromosome], rng: random.Random) -> List[Chromosome]:
    """Pair consecutive parents; each pair yields a child plus the second parent."""
    offspring = []
    for i in range(0, len(selected), 2):
        if i + 1 < len(selected):
            offspring.append(prefix_crossover(selected[i], selected[i + 1], rng))
            offspring.append(selected[i + 1])
        else:
            offspring.append(selected[i])
    return offspring


def swap_mutation(chromosome: Chromosome, rng: random.Random) -> Chromosome:
    a = rng.randrange(len(chromosome))
    b = rng.randrange(len(chromosome))
    mutated = list(chromosome)
    mutated[a], mutated[b] = mutated[b], mutated[a]
    return tuple(mutated)


class GeneticStrategy(PackingStrategy):
    """Genetic algorithm evaluated through the shelf placer."""

    algorithm = Algorithm.GENETIC

    def __init__(self, config: Optional[NestingConfig] = None):
        super().__init__(config)
        params = self.config.genetic
        if params.population_size < 1:
            raise InvalidFieldValueError('genetic.population_size', params.population_size,
                                         "must be >= 1")
        if params.generations < 0:
            raise InvalidFieldValueError('genetic.generations', params.generations,
                                         "must be >= 0")
        if not 0.0 <= params.mutation_rate <= 1.0:
            raise InvalidFieldValueError('genetic.mutation_rate', params.mutation_rate,
                                         "must be within [0, 1]")

    def place(self, units: List[PartUnit], sheet: SheetSize, allow_rotation: bool,
              rng: Optional[random.Random] = None) -> List[PlacedPart]:
        if not units:
            return []

        if rng is None:
            rng = random.Random(self.config.genetic.seed)

        params = self.config.genetic
        cache: Dict[Chromosome, float] = {}

        def decode(chromosome: Chromosome) -> List[PartUnit]:
            return [units[i] for i in chromosome]

        def fitness_of(chromosome: Chromosome) -> float:
            layout = shelf_pack(decode(chromosome), sheet, allow_rotation)
            return layout_metrics(layout, sheet).utilization

        def evaluate(population: List[Chromosome]) -> List[float]:
            missing = [c for c in dict.fromkeys(population) if c not in cache]
            if params.workers > 1 and len(missing) > 1:
                with ThreadPoolExecutor(max_workers=params.workers) as executor:
                    for chromosome, value in zip(missing, executor.map(fitness_of, missing)):
                        cache[chromosome] = value
            else:
                for chromosome in missing:
                    cache[chromosome] = fitness_of(chromosome)
            return [cache[c] for c in population]

        population = [random_chromosome(len(units), rng) for _ in range(params.population_size)]
        best_chromosome: Optional[Chromosome] = None
        best_fitness = -1.0

        for generation in range(params.generations):
            fitness = evaluate(population)
            best_chromosome, best_fitness = self._track_best(
                population, fitness, best_chromosome, best_fitness
            )

            selected = tournament_selection(population, fitness, rng)
            offspring = crossover(selected, rng)
            population = [
                swap_mutation(c, rng) if rng.random() < params.mutation_rate else c
                for c in offspring
            ]

            logger.debug(f"Generation {generation + 1}/{params.generations}, "
                         f"best utilization: {best_fitness:.2f}%")

        final_fitness = evaluate(population)
        best_chromosome, best_fitness = self._track_best(
            population, final_fitness, best_chromosome, best_fitness
        )

        logger.info(f"Genetic search: {params.generations} generations, "
                    f"{len(cache)} orderings evaluated, best {best_fitness:.2f}%")

        return shelf_pack(decode(best_chromosome), sheet, allow_rotation)

    @staticmethod
    def _track_best(population: List[Chromosome], fitness: List[float],
                    best_chromosome: Optional[Chromosome],
                    best_fitness: float) -> Tuple[Chromosome, float]:
        """Keep the first individual with strictly higher fitness than seen so far."""
        for chromosome, value in zip(population, fitness):
            if value > best_fitness:
                best_chromosome, best_fitness = chromosome, value
        return best_chromosome, best_fitness
