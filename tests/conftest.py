import random

import pytest

from rule_miner import Transaction


def make_transactions(baskets):
    return [Transaction(f"tx{i + 1}", list(items)) for i, items in enumerate(baskets)]


def random_baskets(seed, n_transactions=16, items="abcdefgh", max_size=5):
    rng = random.Random(seed)
    baskets = []
    for _ in range(n_transactions):
        size = rng.randint(1, max_size)
        baskets.append(rng.sample(items, size))
    return baskets


@pytest.fixture
def abc_transactions():
    return make_transactions([
        ["A", "B", "C"],
        ["A", "B"],
        ["A", "C"],
        ["B", "C"],
    ])


@pytest.fixture
def scenario_transactions():
    return make_transactions([
        ["A", "B"],
        ["A", "B"],
        ["A", "C"],
    ])


@pytest.fixture
def grocery_transactions():
    return make_transactions([
        ["bread", "milk"],
        ["bread", "diapers", "beer", "eggs"],
        ["milk", "diapers", "beer", "cola"],
        ["bread", "milk", "diapers", "beer"],
        ["bread", "milk", "diapers", "cola"],
        ["bread", "milk", "beer"],
        ["milk", "diapers", "eggs"],
        ["bread", "diapers", "beer", "milk"],
    ])
