from .excel_io import (
    save_rule_mining_results,
    save_rules_text,
    format_rule_for_excel
)
from .frames import encode_transactions, itemsets_to_frame, rules_to_frame
from .log import setup_logging

__all__ = [
    'save_rule_mining_results',
    'save_rules_text',
    'format_rule_for_excel',
    'encode_transactions',
    'itemsets_to_frame',
    'rules_to_frame',
    'setup_logging'
]
