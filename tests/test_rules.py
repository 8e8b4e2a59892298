import math

import pytest

from rule_miner import MiningConfig
from rule_miner.mining import apriori
from rule_miner.mining.rules import (
    RuleGenerator,
    calculate_metrics,
    generate_association_rules,
    generate_splits,
)
from rule_miner.types import AssociationRule, PatternMetrics

from conftest import make_transactions, random_baskets

PERMISSIVE = MiningConfig(min_support=0.0, min_confidence=0.0, min_lift=0.0)


@pytest.mark.parametrize("k", [2, 3, 4, 5])
def test_split_completeness(k):
    items = tuple("abcde"[:k])
    splits = generate_splits(items)
    assert len(splits) == 2 ** k - 2
    assert len(set(splits)) == len(splits)
    for antecedent, consequent in splits:
        assert antecedent and consequent
        assert not set(antecedent) & set(consequent)
        assert sorted(antecedent + consequent) == list(items)


def test_scenario_metrics(scenario_transactions):
    config = MiningConfig(min_support=0.5, min_confidence=0.5, min_lift=0.0)
    itemsets = apriori.find_frequent_itemsets(scenario_transactions, config.min_support)
    rules = {(r.antecedent, r.consequent): r for r in
             generate_association_rules(scenario_transactions, itemsets, config)}

    assert set(rules) == {(("A",), ("B",)), (("B",), ("A",))}

    a_to_b = rules[(("A",), ("B",))]
    assert a_to_b.metrics.confidence == pytest.approx(2 / 3)
    assert a_to_b.metrics.support == pytest.approx(2 / 3)
    assert a_to_b.metrics.lift == pytest.approx(1.0)
    assert a_to_b.metrics.conviction == pytest.approx(1.0)
    assert a_to_b.quality_score == pytest.approx(0.5 * 2 / 3 + 0.3 * 1.0 + 0.2 * 2 / 3)

    b_to_a = rules[(("B",), ("A",))]
    assert b_to_a.metrics.confidence == pytest.approx(1.0)
    assert b_to_a.metrics.lift == pytest.approx(1.0)
    assert math.isinf(b_to_a.metrics.conviction)
    assert b_to_a.quality_score == pytest.approx(0.5 + 0.3 + 0.2 * 2 / 3)


def test_confidence_threshold_filters(scenario_transactions):
    config = MiningConfig(min_support=0.5, min_confidence=0.8, min_lift=0.0)
    itemsets = apriori.find_frequent_itemsets(scenario_transactions, config.min_support)
    rules = generate_association_rules(scenario_transactions, itemsets, config)
    assert [(r.antecedent, r.consequent) for r in rules] == [(("B",), ("A",))]


def test_lift_threshold_filters(scenario_transactions):
    config = MiningConfig(min_support=0.5, min_confidence=0.0, min_lift=1.01)
    itemsets = apriori.find_frequent_itemsets(scenario_transactions, config.min_support)
    assert generate_association_rules(scenario_transactions, itemsets, config) == []


def test_singleton_transactions_yield_no_rules():
    transactions = make_transactions([["A"], ["B"], ["A"], ["C"]])
    itemsets = apriori.find_frequent_itemsets(transactions, 0.0)
    assert itemsets
    assert generate_association_rules(transactions, itemsets, PERMISSIVE) == []


def test_zero_antecedent_count_gives_zero_confidence():
    metrics = calculate_metrics(antecedent_count=0, consequent_count=4, both_count=0, total=10, support=0.0)
    assert metrics.confidence == 0.0
    assert metrics.lift == 0.0
    assert metrics.conviction == pytest.approx(0.6)


def test_zero_consequent_count_gives_zero_lift():
    metrics = calculate_metrics(antecedent_count=5, consequent_count=0, both_count=0, total=10, support=0.0)
    assert metrics.confidence == 0.0
    assert metrics.lift == 0.0
    assert metrics.conviction == pytest.approx(1.0)


def test_degenerate_metrics_pass_zero_thresholds():
    generator = RuleGenerator(make_transactions([["A"]]), PERMISSIVE)
    metrics = calculate_metrics(antecedent_count=0, consequent_count=0, both_count=0, total=1, support=0.0)
    assert generator.passes(metrics)


def test_consequent_everywhere_gives_infinite_conviction():
    metrics = calculate_metrics(antecedent_count=5, consequent_count=10, both_count=4, total=10, support=0.4)
    assert metrics.confidence == pytest.approx(0.8)
    assert metrics.lift == pytest.approx(0.8)
    assert math.isinf(metrics.conviction)


def test_metrics_use_transaction_counts_not_itemset_support():
    transactions = make_transactions([["A", "B"], ["A"], ["B"], ["A", "B", "C"]])
    generator = RuleGenerator(transactions, PERMISSIVE)
    metrics = generator.rule_metrics(("A",), ("B",), support=0.5)
    assert metrics.confidence == pytest.approx(2 / 3)
    assert metrics.lift == pytest.approx((2 / 3) / 0.75)
    assert generator.count(("A", "B")) == 2


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_metric_bounds(seed):
    transactions = make_transactions(random_baskets(seed))
    itemsets = apriori.find_frequent_itemsets(transactions, 0.125)
    rules = generate_association_rules(transactions, itemsets, PERMISSIVE)
    assert rules
    for rule in rules:
        assert 0.0 <= rule.metrics.confidence <= 1.0
        assert rule.metrics.lift >= 0.0
        assert rule.metrics.conviction >= 0.0 or math.isinf(rule.metrics.conviction)
        assert not set(rule.antecedent) & set(rule.consequent)


def test_every_split_is_considered(grocery_transactions):
    itemsets = [f for f in apriori.find_frequent_itemsets(grocery_transactions, 0.25) if len(f.items) >= 2]
    rules = generate_association_rules(grocery_transactions, itemsets, PERMISSIVE)
    assert len(rules) == sum(2 ** len(f.items) - 2 for f in itemsets)


def test_quality_score_weights():
    rule = AssociationRule(("A",), ("B",), PatternMetrics(confidence=0.8, support=0.6, lift=1.5, conviction=2.0))
    assert rule.quality_score == pytest.approx(0.8 * 0.5 + 1.5 * 0.3 + 0.6 * 0.2)
    assert rule.items == ("A", "B")
