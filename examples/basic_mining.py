"""
Basic Rule Mining

Mines a small electronics basket set with both engines, prints the ranked
rules and saves the FP-Growth results to Excel and text.
"""
import logging
from datetime import datetime
from pathlib import Path

from rule_miner import MiningAlgorithm, MiningConfig, RuleMiner, Transaction
from rule_miner.utils import save_rule_mining_results, save_rules_text, setup_logging

setup_logging(logging.INFO)

# =============================================================================
# CONFIGURATION
# =============================================================================

OUTPUT_DIR = "out/basic_mining"

BASKETS = [
    ["Laptop", "Mouse", "USB Hub"],
    ["Laptop", "Mouse"],
    ["Laptop", "Keyboard"],
    ["Mouse", "Keyboard"],
    ["Laptop", "Mouse", "Keyboard"],
    ["Laptop", "USB Hub"],
]

MIN_SUPPORT = 0.3
MIN_CONFIDENCE = 0.6
MIN_LIFT = 0.0


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_example():
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(OUTPUT_DIR)

    transactions = [Transaction(f"tx{i}", items) for i, items in enumerate(BASKETS, start=1)]

    for algorithm in (MiningAlgorithm.APRIORI, MiningAlgorithm.FP_GROWTH):
        config = MiningConfig(
            min_support=MIN_SUPPORT,
            min_confidence=MIN_CONFIDENCE,
            min_lift=MIN_LIFT,
            algorithm=algorithm
        )
        miner = RuleMiner(config)
        miner.add_transactions(transactions)
        rules = miner.mine()

        print(f"\n{algorithm.value}: {miner.stats.rule_count} rules "
              f"from {miner.stats.frequent_itemset_count} frequent itemsets")
        for rule in rules:
            print(f"  {rule}  (confidence={rule.metrics.confidence:.3f}, "
                  f"lift={rule.metrics.lift:.3f}, quality={rule.quality_score:.3f})")

    metadata = {'dataset': 'electronics baskets', 'run': timestamp}
    save_rule_mining_results(
        rules,
        miner.stats,
        output_dir / f"rules_{timestamp}",
        parameters=config.to_dict(),
        metadata=metadata
    )
    save_rules_text(rules, output_dir / f"rules_{timestamp}", metadata=metadata)


if __name__ == '__main__':
    run_example()
