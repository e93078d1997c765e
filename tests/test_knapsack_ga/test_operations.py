"""
Tests for GA operations: chromosome, fitness, selection, crossover,
mutation, and replacement.
"""

import itertools
import unittest
import numpy as np

from knapsack_ga.data_models import Chromosome
from knapsack_ga.fitness import evaluate, evaluate_population
from knapsack_ga.selection import tournament_selection
from knapsack_ga.crossover import single_point_crossover
from knapsack_ga.mutation import mutate
from knapsack_ga.replacement import select_survivors


class ScriptedRng:
    """Stand-in generator returning scripted integer draws."""

    def __init__(self, draws):
        self.draws = list(draws)

    def integers(self, low, high):
        value = self.draws.pop(0) if self.draws else 0
        assert low <= value < high
        return value


def make_population(fitnesses):
    return [Chromosome(genes=[0, 1], fitness=f) for f in fitnesses]


class TestChromosome(unittest.TestCase):
    """Test chromosome creation and copying."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_create(self):
        """Test random chromosome has binary genes and zero fitness."""
        chromosome = Chromosome.create(50, self.rng)

        self.assertEqual(len(chromosome), 50)
        self.assertEqual(chromosome.fitness, 0)
        self.assertTrue(set(chromosome.genes) <= {0, 1})

    def test_create_uses_both_values(self):
        """Test random genes are not constant over a long chromosome."""
        chromosome = Chromosome.create(200, self.rng)
        self.assertIn(0, chromosome.genes)
        self.assertIn(1, chromosome.genes)

    def test_copy_genes_is_independent(self):
        """Test gene snapshot does not alias the chromosome."""
        chromosome = Chromosome(genes=[1, 0, 1])
        snapshot = chromosome.copy_genes()

        chromosome.genes[0] = 0

        self.assertEqual(snapshot, [1, 0, 1])

    def test_copy(self):
        """Test deep copy keeps fitness and copies genes."""
        chromosome = Chromosome(genes=[1, 1, 0], fitness=7)
        clone = chromosome.copy()
        clone.genes.append(1)

        self.assertEqual(clone.fitness, 7)
        self.assertEqual(len(chromosome.genes), 3)

    def test_selected_indices(self):
        """Test selected indices lists genes set to 1."""
        self.assertEqual(Chromosome(genes=[1, 0, 0, 1]).selected_indices(), [0, 3])


class TestFitness(unittest.TestCase):
    """Test capacity-constrained fitness evaluation."""

    def setUp(self):
        self.weights = [2, 3, 4, 5]
        self.values = [3, 4, 5, 6]
        self.capacity = 5

    def test_feasible_selection_scores_value(self):
        """Test feasible selection scores the summed value."""
        chromosome = Chromosome(genes=[1, 1, 0, 0])
        fitness = evaluate(chromosome, self.weights, self.values, self.capacity)

        self.assertEqual(fitness, 7)
        self.assertEqual(chromosome.fitness, 7)

    def test_weight_equal_to_capacity_is_feasible(self):
        """Test capacity bound is inclusive."""
        chromosome = Chromosome(genes=[0, 0, 0, 1])
        self.assertEqual(evaluate(chromosome, self.weights, self.values, self.capacity), 6)

    def test_over_capacity_scores_zero_for_all_combinations(self):
        """Test every over-capacity gene combination scores 0."""
        for genes in itertools.product([0, 1], repeat=4):
            chromosome = Chromosome(genes=list(genes))
            fitness = evaluate(chromosome, self.weights, self.values, self.capacity)

            weight = sum(w for g, w in zip(genes, self.weights) if g)
            value = sum(v for g, v in zip(genes, self.values) if g)
            if weight > self.capacity:
                self.assertEqual(fitness, 0, f"genes={genes}")
            else:
                self.assertEqual(fitness, value, f"genes={genes}")

    def test_empty_selection_scores_zero(self):
        """Test empty selection scores 0."""
        chromosome = Chromosome(genes=[0, 0, 0, 0])
        self.assertEqual(evaluate(chromosome, self.weights, self.values, self.capacity), 0)

    def test_evaluate_is_idempotent(self):
        """Test re-evaluating an unmutated chromosome gives the same fitness."""
        rng = np.random.default_rng(7)
        for _ in range(20):
            chromosome = Chromosome.create(4, rng)
            first = evaluate(chromosome, self.weights, self.values, self.capacity)
            second = evaluate(chromosome, self.weights, self.values, self.capacity)
            self.assertEqual(first, second)

    def test_length_mismatch_raises(self):
        """Test mismatched lengths are rejected."""
        with self.assertRaises(ValueError):
            evaluate(Chromosome(genes=[1, 0]), self.weights, self.values, self.capacity)

        with self.assertRaises(ValueError):
            evaluate(Chromosome(genes=[1, 0, 0, 0]), self.weights, self.values[:3], self.capacity)

    def test_evaluate_population(self):
        """Test population evaluation overwrites stale fitness values."""
        population = [
            Chromosome(genes=[1, 0, 0, 0], fitness=99),
            Chromosome(genes=[1, 1, 1, 1], fitness=99),
        ]
        evaluate_population(population, self.weights, self.values, self.capacity)

        self.assertEqual([c.fitness for c in population], [3, 0])


class TestSelection(unittest.TestCase):
    """Test tournament selection."""

    def test_shared_sequence_pair(self):
        """Test parent B is the leader displaced by parent A."""
        population = make_population([0, 5, 3, 7, 7])
        rng = ScriptedRng([2, 1, 3, 4, 0, 0, 0, 0, 0, 0])

        parent_a, parent_b = tournament_selection(population, rng)

        self.assertIs(parent_a, population[3])
        self.assertIs(parent_b, population[1])

    def test_ties_keep_first_seen(self):
        """Test equal fitness never replaces the leader."""
        population = make_population([0, 4, 4])
        rng = ScriptedRng([2, 1] + [0] * 8)

        parent_a, parent_b = tournament_selection(population, rng)

        self.assertIs(parent_a, population[2])
        self.assertIs(parent_b, population[0])

    def test_all_zero_fitness_returns_first(self):
        """Test zero-fitness population yields population[0] twice."""
        population = make_population([0, 0, 0, 0])
        rng = np.random.default_rng(42)

        parent_a, parent_b = tournament_selection(population, rng)

        self.assertIs(parent_a, population[0])
        self.assertIs(parent_b, population[0])

    def test_single_fit_individual_found(self):
        """Test the only positive individual wins a long tournament."""
        population = make_population([0, 0, 0, 9, 0])
        rng = np.random.default_rng(42)

        parent_a, parent_b = tournament_selection(population, rng, rounds=200)

        self.assertIs(parent_a, population[3])
        self.assertIs(parent_b, population[0])

    def test_draws_exactly_rounds_samples(self):
        """Test the tournament consumes one draw per round."""
        rng = ScriptedRng(range(10))
        tournament_selection(make_population(range(20)), rng, rounds=7)
        self.assertEqual(rng.draws, [7, 8, 9])

    def test_empty_population_raises(self):
        """Test selection from empty population is rejected."""
        with self.assertRaises(ValueError):
            tournament_selection([], np.random.default_rng(42))


class TestCrossover(unittest.TestCase):
    """Test single-point crossover."""

    def setUp(self):
        self.parent_a = [1, 1, 1, 1, 1]
        self.parent_b = [0, 0, 0, 0, 0]
        self.rng = np.random.default_rng(42)

    def test_rate_one_swaps_tails_at_midpoint(self):
        """Test crossover rate 1.0 always cuts at len // 2."""
        for _ in range(10):
            child_a, child_b = single_point_crossover(self.parent_a, self.parent_b, 1.0, self.rng)
            self.assertEqual(child_a, [1, 1, 0, 0, 0])
            self.assertEqual(child_b, [0, 0, 1, 1, 1])

    def test_rate_zero_copies_parents(self):
        """Test crossover rate 0.0 returns exact copies."""
        for _ in range(10):
            child_a, child_b = single_point_crossover(self.parent_a, self.parent_b, 0.0, self.rng)
            self.assertEqual(child_a, self.parent_a)
            self.assertEqual(child_b, self.parent_b)

    def test_children_do_not_alias_parents(self):
        """Test children are newly allocated lists."""
        for rate in (0.0, 1.0):
            child_a, child_b = single_point_crossover(self.parent_a, self.parent_b, rate, self.rng)
            self.assertIsNot(child_a, self.parent_a)
            self.assertIsNot(child_b, self.parent_b)

            child_a[0] = 9
            self.assertEqual(self.parent_a[0], 1)

    def test_even_length_split(self):
        """Test midpoint on even-length parents."""
        child_a, child_b = single_point_crossover([1, 2, 3, 4], [5, 6, 7, 8], 1.0, self.rng)
        self.assertEqual(child_a, [1, 2, 7, 8])
        self.assertEqual(child_b, [5, 6, 3, 4])

    def test_length_mismatch_raises(self):
        """Test parents of different length are rejected."""
        with self.assertRaises(ValueError):
            single_point_crossover([1, 0], [1, 0, 1], 1.0, self.rng)


class TestMutation(unittest.TestCase):
    """Test bit-flip mutation."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_rate_zero_changes_nothing(self):
        """Test mutation rate 0.0 never flips a gene."""
        chromosome = Chromosome(genes=[1, 0, 1, 1, 0, 0])
        mutate(chromosome, 0.0, self.rng)
        self.assertEqual(chromosome.genes, [1, 0, 1, 1, 0, 0])

    def test_rate_one_flips_every_gene(self):
        """Test mutation rate 1.0 flips all genes."""
        chromosome = Chromosome(genes=[1, 0, 1, 1, 0, 0])
        mutate(chromosome, 1.0, self.rng)
        self.assertEqual(chromosome.genes, [0, 1, 0, 0, 1, 1])

    def test_mutation_is_in_place(self):
        """Test mutate returns None and edits the given gene list."""
        genes = [0, 0, 0]
        chromosome = Chromosome(genes=genes)

        self.assertIsNone(mutate(chromosome, 1.0, self.rng))
        self.assertIs(chromosome.genes, genes)
        self.assertEqual(genes, [1, 1, 1])

    def test_genes_stay_binary(self):
        """Test partial mutation keeps genes in {0, 1}."""
        chromosome = Chromosome.create(100, self.rng)
        mutate(chromosome, 0.5, self.rng)
        self.assertTrue(set(chromosome.genes) <= {0, 1})


class TestReplacement(unittest.TestCase):
    """Test elitist survivor selection."""

    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_survivor_count_matches_population(self):
        """Test survivors never exceed the old population size."""
        population = make_population([1, 2, 3, 4, 5])
        offspring = make_population([6, 7, 8, 9, 10])

        survivors = select_survivors(population, offspring, self.rng)

        self.assertEqual(len(survivors), 5)

    def test_truncation_keeps_fittest(self):
        """Test every survivor is at least as fit as every discarded individual."""
        population = make_population([5, 1, 9, 3, 3, 0])
        offspring = make_population([4, 8, 2, 6])
        pool = population + offspring

        survivors = select_survivors(population, offspring, self.rng)
        survivor_ids = {id(c) for c in survivors}
        discarded = [c for c in pool if id(c) not in survivor_ids]

        self.assertEqual(len(discarded), len(offspring))
        self.assertGreaterEqual(
            min(c.fitness for c in survivors),
            max(c.fitness for c in discarded)
        )
        self.assertEqual(sorted(c.fitness for c in survivors), [3, 4, 5, 6, 8, 9])

    def test_fewer_offspring_than_population(self):
        """Test M < N keeps population size."""
        population = make_population([1, 2, 3, 4, 5, 6, 7])
        offspring = make_population([10, 0, 0, 0, 0, 0])

        survivors = select_survivors(population, offspring, self.rng)

        self.assertEqual(len(survivors), 7)
        self.assertEqual(sorted(c.fitness for c in survivors), [2, 3, 4, 5, 6, 7, 10])

    def test_no_offspring(self):
        """Test empty offspring returns the old population reordered."""
        population = make_population([3, 1, 2])
        survivors = select_survivors(population, [], self.rng)

        self.assertEqual({id(c) for c in survivors}, {id(c) for c in population})

    def test_ties_resolved_by_pool_order(self):
        """Test stable sort prefers later pool entries among equal fitness at the cut."""
        population = make_population([1, 1])
        offspring = make_population([1])

        survivors = select_survivors(population, offspring, self.rng)

        # Survivors are taken from the top of the ascending pool
        self.assertEqual({id(c) for c in survivors}, {id(population[1]), id(offspring[0])})

    def test_survivors_are_shuffled_permutation(self):
        """Test survivors keep every selected individual exactly once."""
        population = make_population(range(20))

        survivors = select_survivors(population, [], self.rng)

        self.assertEqual(sorted(c.fitness for c in survivors), list(range(20)))
        self.assertEqual(len({id(c) for c in survivors}), 20)

    def test_survivor_order_is_seeded(self):
        """Test survivor order is reproducible for a fixed seed."""
        def order(seed):
            population = make_population(range(10))
            offspring = make_population(range(10, 20))
            survivors = select_survivors(population, offspring, np.random.default_rng(seed))
            return [c.fitness for c in survivors]

        self.assertEqual(order(3), order(3))
        self.assertEqual(sorted(order(3)), list(range(10, 20)))


if __name__ == '__main__':
    unittest.main()
