from .rule import filter_rules, filter_rules_by_class, filter_rules_by_antecedent
from .report import format_result, format_rule, format_itemset, level_summary

__all__ = [
    'filter_rules', 'filter_rules_by_class', 'filter_rules_by_antecedent',
    'format_result', 'format_rule', 'format_itemset', 'level_summary'
]
