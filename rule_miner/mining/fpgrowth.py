"""
FP-Growth frequent itemset mining.

Transactions are compressed into a prefix tree (FP-Tree) whose paths follow a
fixed global item order: descending frequency, ties by ascending item id.
Larger itemsets are grown recursively from conditional trees, each built from
the weighted prefix paths of one item and discarded once its subtree is mined.
Memory is bounded by the tree size instead of the candidate lattice.
"""
import logging
from collections import Counter
from typing import Dict, Iterable, List, Sequence, Tuple

from rule_miner.mining.counting import min_support_count
from rule_miner.transaction import Transaction
from rule_miner.types import FrequentItemset, ItemSet, make_itemset

logger = logging.getLogger(__name__)

PatternBase = List[Tuple[Tuple[str, ...], int]]


class FPNode:
    __slots__ = ('item', 'count', 'parent', 'children')

    def __init__(self, item, parent=None):
        self.item = item
        self.count = 0
        self.parent = parent
        self.children: Dict[str, 'FPNode'] = {}


class FPTree:
    """Prefix tree with a header table linking all nodes of each item."""

    def __init__(self):
        self.root = FPNode(None)
        self.header: Dict[str, List[FPNode]] = {}

    def insert(self, items: Sequence[str], count: int = 1):
        """
        Insert one ordered path.

        Inserting with count=w builds the same tree as inserting the path w
        times with count=1.
        """
        node = self.root
        for item in items:
            child = node.children.get(item)
            if child is None:
                child = FPNode(item, parent=node)
                node.children[item] = child
                self.header.setdefault(item, []).append(child)
            child.count += count
            node = child

    def item_counts(self) -> Dict[str, int]:
        return {item: sum(node.count for node in nodes) for item, nodes in self.header.items()}

    def conditional_pattern_base(self, item: str) -> PatternBase:
        """
        Root-to-parent paths of every node labelled `item`, weighted by that
        node's count. Empty paths carry no items and are skipped.
        """
        patterns = []
        for node in self.header.get(item, []):
            path = []
            parent = node.parent
            while parent is not None and parent.item is not None:
                path.append(parent.item)
                parent = parent.parent
            if path:
                path.reverse()
                patterns.append((tuple(path), node.count))
        return patterns

    @classmethod
    def from_pattern_base(cls, patterns: PatternBase) -> 'FPTree':
        tree = cls()
        for path, count in patterns:
            tree.insert(path, count)
        return tree

    def __len__(self) -> int:
        return sum(len(nodes) for nodes in self.header.values())


def find_frequent_itemsets(
    transactions: Sequence[Transaction],
    min_support: float
) -> List[FrequentItemset]:
    """
    Find all frequent itemsets with FP-Growth.

    Args:
        transactions: Transactions to mine
        min_support: Minimum support threshold (fraction of transactions)

    Returns:
        Frequent single items first (most frequent first), then the itemsets
        grown from the least frequent item upwards
    """
    total = len(transactions)
    if total == 0:
        return []

    threshold = min_support_count(min_support, total)

    # Step 1: item frequencies, one count per transaction
    item_counts = Counter()
    for tx in transactions:
        item_counts.update(tx.item_set)

    # Step 2: frequent items in the global order
    frequent_items = sorted(
        ((item, count) for item, count in item_counts.items() if count >= threshold),
        key=lambda pair: (-pair[1], pair[0])
    )
    rank = {item: idx for idx, (item, _) in enumerate(frequent_items)}

    # Step 3: build the tree
    tree = FPTree()
    for tx in transactions:
        ordered = sorted((item for item in tx.item_set if item in rank), key=rank.__getitem__)
        if ordered:
            tree.insert(ordered)
    logger.debug(f"FP-Tree built: {len(frequent_items)} frequent items, {len(tree)} nodes")

    # Step 4: frequent single items
    frequent_itemsets = [
        FrequentItemset(items=(item,), support=count / total, count=count)
        for item, count in frequent_items
    ]

    # Step 5: grow larger itemsets, least frequent item first
    for item, _ in reversed(frequent_items):
        patterns = tree.conditional_pattern_base(item)
        if not patterns:
            continue
        conditional_tree = FPTree.from_pattern_base(patterns)
        for itemset, count in mine_conditional_tree(conditional_tree, (item,), threshold):
            frequent_itemsets.append(FrequentItemset(
                items=itemset,
                support=count / total,
                count=count
            ))

    return frequent_itemsets


def mine_conditional_tree(
    tree: FPTree,
    base_pattern: Tuple[str, ...],
    threshold: int
) -> Iterable[Tuple[ItemSet, int]]:
    """Yield (itemset, count) for every frequent extension of base_pattern."""
    surviving = sorted(
        ((item, count) for item, count in tree.item_counts().items() if count >= threshold),
        key=lambda pair: (pair[1], pair[0])
    )

    for item, count in surviving:
        pattern = base_pattern + (item,)
        yield make_itemset(pattern), count

        patterns = tree.conditional_pattern_base(item)
        if patterns:
            yield from mine_conditional_tree(FPTree.from_pattern_base(patterns), pattern, threshold)
