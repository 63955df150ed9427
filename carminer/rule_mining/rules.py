"""
Class association rules derived from frequent labeled itemsets.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import numpy as np

from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.items import Item, ItemSet, LabeledItemSet, Level

EPSILON = 1e-6


@dataclass(frozen=True)
class Rule:
    """
    antecedent ==> class = label.

    Counts are absolute record counts:
        support: records matching the antecedent and the label
        antecedent_support: records matching the antecedent
        label_support: records carrying the label
    """
    antecedent: ItemSet
    label: Item
    confidence: float
    support: int
    antecedent_support: int
    label_support: int
    num_records: int
    lift: float
    leverage: float
    conviction: float

    @property
    def size(self) -> int:
        return self.antecedent.size

    @property
    def relative_support(self) -> float:
        return self.support / self.num_records if self.num_records else 0.0

    def to_dict(self, dataset: CategoricalDataset) -> Dict[str, Any]:
        """Rule in the antecedents/consequent dict format used by the miners."""
        antecedents = []
        for item in self.antecedent:
            feature, value = dataset.item_name(item)
            antecedents.append({'feature': feature, 'value': value})
        return {
            'antecedents': antecedents,
            'consequent': {'feature': dataset.class_name, 'value': dataset.label_name(self.label)},
            'support': self.relative_support,
            'confidence': self.confidence,
            'lift': self.lift,
            'leverage': self.leverage,
            'conviction': self.conviction,
            'antecedent_support': self.antecedent_support,
            'rule_support': self.support
        }


def make_rule(itemset: LabeledItemSet, label_support: int, num_records: int) -> Rule:
    """Build the rule antecedent ==> label of a counted labeled itemset."""
    n = float(num_records)
    premise = itemset.support
    support = itemset.class_support
    confidence = support / premise

    label_fraction = label_support / n
    lift = confidence / label_fraction if label_fraction > 0 else 0.0
    leverage = support / n - (premise / n) * label_fraction
    conviction = (premise * (n - label_support) / n) / (premise - support + 1)

    return Rule(
        antecedent=itemset.antecedent,
        label=itemset.label,
        confidence=confidence,
        support=support,
        antecedent_support=premise,
        label_support=int(label_support),
        num_records=num_records,
        lift=lift,
        leverage=leverage,
        conviction=conviction
    )


def generate_rules(
        levels: Sequence[Level],
        min_confidence: float,
        class_counts: np.ndarray,
        num_records: int
) -> List[Rule]:
    """
    One candidate rule per labeled itemset, kept if confident enough.

    Levels are visited in order and never modified. Itemsets whose label
    never co-occurs with the antecedent yield no rule.

    Args:
        levels: Frequent labeled itemsets of one mining cycle
        min_confidence: Minimum class_support / support
        class_counts: Records per class code
        num_records: Total number of records

    Returns:
        Rules in discovery order
    """
    rules = []
    for level in levels:
        for itemset in level:
            if itemset.class_support == 0:
                continue
            if itemset.confidence + EPSILON < min_confidence:
                continue
            rules.append(make_rule(itemset, int(class_counts[itemset.label.value]), num_records))
    return rules
