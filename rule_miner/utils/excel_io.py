import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

import pandas as pd

from rule_miner.mining.stats import MiningStats
from rule_miner.types import AssociationRule

logger = logging.getLogger(__name__)

RULE_SHEET_COLUMNS = ['antecedent', 'consequent', 'support', 'confidence', 'lift', 'conviction', 'quality_score']


def _with_suffix(output_path: Union[str, Path], suffix: str) -> Path:
    output_path = Path(output_path)
    if output_path.suffix != suffix:
        output_path = output_path.with_suffix(suffix)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def format_rule_for_excel(rule: AssociationRule) -> Dict[str, Any]:
    """
    Flatten a rule into one spreadsheet row.

    Antecedent and consequent become "item1 AND item2" strings, parseable by
    splitting on " AND ".
    """
    return {
        'antecedent': ' AND '.join(rule.antecedent),
        'consequent': ' AND '.join(rule.consequent),
        'support': rule.metrics.support,
        'confidence': rule.metrics.confidence,
        'lift': rule.metrics.lift,
        'conviction': rule.metrics.conviction,
        'quality_score': rule.quality_score,
    }


def save_rule_mining_results(
    rules: Sequence[AssociationRule],
    stats: Union[MiningStats, Dict[str, Any]],
    output_path: Union[str, Path],
    parameters: Dict[str, Any] = None,
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rule mining results to Excel with multiple sheets.

    Sheets:
        - Rules: All mined rules with metrics, in ranked order
        - Summary: Mining statistics plus metadata
        - Parameters: Mining configuration used

    Args:
        rules: Ranked rules returned by RuleMiner.mine()
        stats: MiningStats (or its dict form)
        output_path: Output file path (will add .xlsx if needed)
        parameters: Algorithm parameters used, e.g. MiningConfig.to_dict()
        metadata: Additional metadata (dataset name, timestamp, etc.)
    """
    output_path = _with_suffix(output_path, '.xlsx')
    stats = stats.to_dict() if isinstance(stats, MiningStats) else dict(stats)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        # Sheet 1: Rules
        rules_df = pd.DataFrame(
            [format_rule_for_excel(rule) for rule in rules], columns=RULE_SHEET_COLUMNS
        )
        rules_df.to_excel(writer, sheet_name='Rules', index=False, inf_rep='inf')

        # Sheet 2: Summary
        summary_data = {
            'Metric': list(stats.keys()),
            'Value': [str(v) for v in stats.values()]
        }
        if metadata:
            summary_data['Metric'].extend(list(metadata.keys()))
            summary_data['Value'].extend(str(v) for v in metadata.values())
        pd.DataFrame(summary_data).to_excel(writer, sheet_name='Summary', index=False)

        # Sheet 3: Parameters
        if parameters:
            params_df = pd.DataFrame({
                'Parameter': list(parameters.keys()),
                'Value': [str(v) for v in parameters.values()]
            })
            params_df.to_excel(writer, sheet_name='Parameters', index=False)

    logger.info(f"Results saved to: {output_path}")
    return output_path


def save_rules_text(
    rules: Sequence[AssociationRule],
    output_path: Union[str, Path],
    title: str = "MINED RULES",
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rules in human-readable text format.

    Args:
        rules: Ranked rules
        output_path: Output file path (will add .txt if needed)
        title: Title for the output file header
        metadata: Optional metadata to include in header
    """
    output_path = _with_suffix(output_path, '.txt')

    with open(output_path, 'w') as f:
        f.write("=" * 80 + "\n")
        f.write(f"{title}\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if metadata:
            for key, val in metadata.items():
                f.write(f"{key}: {val}\n")
        f.write("=" * 80 + "\n\n")

        if not rules:
            f.write("No rules found.\n")
        else:
            for i, rule in enumerate(rules, 1):
                _write_rule(f, rule, i)

        f.write("=" * 80 + "\n")
        f.write(f"Total rules: {len(rules)}\n")
        f.write("=" * 80 + "\n")

    logger.info(f"Rules saved to: {output_path}")
    return output_path


def _format_metric(value: float, decimals: int = 4) -> str:
    if math.isinf(value):
        return "inf"
    return f"{value:.{decimals}f}"


def _write_rule(f, rule: AssociationRule, rule_num: int):
    f.write(f"Rule #{rule_num}:\n")
    f.write(f"  IF {' AND '.join(rule.antecedent)}\n")
    f.write(f"  THEN {' AND '.join(rule.consequent)}\n\n")
    f.write("  Metrics:\n")

    metrics: List[tuple] = [
        ('Confidence', rule.metrics.confidence),
        ('Support', rule.metrics.support),
        ('Lift', rule.metrics.lift),
        ('Conviction', rule.metrics.conviction),
        ('Quality Score', rule.quality_score),
    ]
    for label, value in metrics:
        f.write(f"    {label:18s} {_format_metric(value)}\n")

    f.write("\n")
