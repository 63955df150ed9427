"""
Two-pass stable ranking of class association rules.
"""
from typing import List, Optional, Sequence

import numpy as np

from carminer.rule_mining.config import RULE_METRICS
from carminer.rule_mining.rules import Rule


def rank_rules(
        rules: Sequence[Rule],
        num_rules: Optional[int] = None,
        metric: str = 'confidence'
) -> List[Rule]:
    """
    Order rules best first and keep at most num_rules of them.

    Pass 1 stable-sorts by negated support; the result is read back to
    front, so the buffer holds ascending support with equal supports in
    reverse discovery order. Pass 2 stable-sorts that buffer by the metric
    ascending and reads the top entries from the tail. The composite order
    is metric descending, then support descending, then discovery order.

    Args:
        rules: Rules in discovery order
        num_rules: Maximum number of rules to return (None for all)
        metric: Rule attribute to rank by

    Returns:
        Ranked list of at most num_rules rules
    """
    if metric not in RULE_METRICS:
        raise ValueError(f"Metric must be one of {list(RULE_METRICS)}, got '{metric}'")
    if not rules:
        return []

    negated_supports = np.array([-rule.support for rule in rules], dtype=np.float64)
    by_support = np.argsort(negated_supports, kind='stable')
    buffer = [rules[i] for i in by_support[::-1]]

    values = np.array([getattr(rule, metric) for rule in buffer], dtype=np.float64)
    by_metric = np.argsort(values, kind='stable')

    cap = len(buffer) if num_rules is None else min(num_rules, len(buffer))
    return [buffer[i] for i in by_metric[::-1][:cap]]
