import pytest
from mlxtend.frequent_patterns import apriori as mlxtend_apriori
from mlxtend.frequent_patterns import fpgrowth as mlxtend_fpgrowth

from rule_miner.mining import apriori, fpgrowth
from rule_miner.mining.fpgrowth import FPTree, find_frequent_itemsets
from rule_miner.utils.frames import encode_transactions

from conftest import make_transactions, random_baskets


def as_support_map(itemsets):
    return {frozenset(f.items): f.support for f in itemsets}


def mlxtend_support_map(frame):
    return dict(zip(frame['itemsets'], frame['support']))


def test_fpgrowth(abc_transactions):
    frequent = as_support_map(find_frequent_itemsets(abc_transactions, 0.5))
    assert frequent == {
        frozenset({"A"}): 0.75, frozenset({"B"}): 0.75, frozenset({"C"}): 0.75,
        frozenset({"A", "B"}): 0.5, frozenset({"A", "C"}): 0.5, frozenset({"B", "C"}): 0.5,
    }


def test_fpgrowth_high_support(abc_transactions):
    frequent = find_frequent_itemsets(abc_transactions, 0.75)
    assert sorted(f.items for f in frequent) == [("A",), ("B",), ("C",)]


def test_fpgrowth_emits_single_items_in_frequency_order():
    transactions = make_transactions([["B", "A"], ["B"], ["C", "B"], ["C", "A"]])
    frequent = find_frequent_itemsets(transactions, 0.5)
    assert [f.items for f in frequent[:3]] == [("B",), ("A",), ("C",)]


def test_fpgrowth_itemsets_are_canonical_and_unique(grocery_transactions):
    frequent = find_frequent_itemsets(grocery_transactions, 0.25)
    keys = [f.items for f in frequent]
    assert len(keys) == len(set(keys))
    assert all(items == tuple(sorted(items)) for items in keys)


def test_tree_shares_prefixes():
    tree = FPTree()
    tree.insert(["A", "B", "C"])
    tree.insert(["A", "B"])
    tree.insert(["A", "D"])

    a = tree.root.children["A"]
    assert a.count == 3
    assert a.children["B"].count == 2
    assert a.children["B"].children["C"].count == 1
    assert a.children["D"].count == 1
    assert len(tree) == 4
    assert tree.item_counts() == {"A": 3, "B": 2, "C": 1, "D": 1}


def test_weighted_insert_matches_repeated_insert():
    weighted = FPTree()
    weighted.insert(["A", "B"], count=3)
    repeated = FPTree()
    for _ in range(3):
        repeated.insert(["A", "B"])
    assert weighted.item_counts() == repeated.item_counts() == {"A": 3, "B": 3}


def test_conditional_pattern_base():
    tree = FPTree()
    tree.insert(["A", "B", "C"])
    tree.insert(["A", "B", "C"])
    tree.insert(["A", "C"])
    tree.insert(["C"])

    base = sorted(tree.conditional_pattern_base("C"))
    assert base == [(("A",), 1), (("A", "B"), 2)]
    assert tree.conditional_pattern_base("A") == []
    assert tree.conditional_pattern_base("missing") == []


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
@pytest.mark.parametrize("min_support", [0.125, 0.25, 0.375])
def test_engine_equivalence(seed, min_support):
    transactions = make_transactions(random_baskets(seed))
    level_wise = apriori.find_frequent_itemsets(transactions, min_support)
    tree = fpgrowth.find_frequent_itemsets(transactions, min_support)

    assert len(level_wise) == len(tree)
    assert as_support_map(level_wise) == as_support_map(tree)


@pytest.mark.parametrize("min_support", [0.25, 0.375, 0.5])
def test_engines_agree_with_mlxtend(grocery_transactions, min_support):
    encoded = encode_transactions(grocery_transactions)
    expected_fp = mlxtend_support_map(mlxtend_fpgrowth(encoded, min_support=min_support, use_colnames=True))
    expected_ap = mlxtend_support_map(mlxtend_apriori(encoded, min_support=min_support, use_colnames=True))
    assert set(expected_fp) == set(expected_ap)

    for engine in (apriori, fpgrowth):
        found = as_support_map(engine.find_frequent_itemsets(grocery_transactions, min_support))
        assert set(found) == set(expected_fp)
        for itemset, support in found.items():
            assert support == pytest.approx(expected_fp[itemset])


def test_fpgrowth_ignores_empty_transactions():
    transactions = make_transactions([["A", "B"], [], ["A", "B"], ["A"]])
    frequent = as_support_map(find_frequent_itemsets(transactions, 0.5))
    assert frequent == {
        frozenset({"A"}): 0.75,
        frozenset({"B"}): 0.5,
        frozenset({"A", "B"}): 0.5,
    }
