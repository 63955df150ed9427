"""
Human-readable summary of a mining run.
"""
from typing import Any, Dict, List, Sequence

from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.items import LabeledItemSet, Level
from carminer.rule_mining.rules import Rule
from carminer.rule_mining.search import MiningResult


def level_summary(levels: Sequence[Level]) -> List[Dict[str, Any]]:
    return [{'level': level.k, 'num_itemsets': len(level)} for level in levels]


def _format_items(items, dataset: CategoricalDataset) -> str:
    return ' '.join(f"{name}={value}" for name, value in (dataset.item_name(i) for i in items))


def format_itemset(itemset: LabeledItemSet, dataset: CategoricalDataset) -> str:
    label = f"{dataset.class_name}={dataset.label_name(itemset.label)}"
    return f"{_format_items(itemset.items, dataset)} {itemset.support} ==> {label} {itemset.class_support}"


def format_rule(rule: Rule, dataset: CategoricalDataset) -> str:
    label = f"{dataset.class_name}={dataset.label_name(rule.label)}"
    return (f"{_format_items(rule.antecedent, dataset)} {rule.antecedent_support} ==> "
            f"{label} {rule.support}    "
            f"conf:({rule.confidence:.2f}) lift:({rule.lift:.2f}) "
            f"lev:({rule.leverage:.2f}) conv:({rule.conviction:.2f})")


def format_result(result: MiningResult, dataset: CategoricalDataset, output_itemsets: bool = None) -> str:
    """
    Render a mining result as text.

    Args:
        result: Result of the adaptive support search
        dataset: Dataset the result was mined from
        output_itemsets: List every itemset per level (defaults to the run's config)

    Returns:
        Multi-line report
    """
    if output_itemsets is None:
        output_itemsets = result.config.output_itemsets

    title = "Apriori (class association rules)"
    lines = [
        title,
        "=" * len(title),
        "",
        f"Minimum support: {result.min_support:.2f} ({result.min_support_count} instances)",
        f"Minimum metric <confidence>: {result.config.min_metric:.2f}",
        f"Number of cycles performed: {result.cycles}",
        "",
        "Generated sets of large itemsets:",
    ]

    for level in result.levels:
        lines.append("")
        lines.append(f"Size of set of large itemsets L({level.k}): {len(level)}")
        if output_itemsets:
            lines.append("")
            lines.append(f"Large Itemsets L({level.k}):")
            lines.extend(format_itemset(itemset, dataset) for itemset in level)

    lines.append("")
    if result.rules:
        lines.append("Best rules found:")
        lines.append("")
        width = len(str(len(result.rules)))
        for i, rule in enumerate(result.rules, 1):
            lines.append(f"{i:>{width + 1}}. {format_rule(rule, dataset)}")
    else:
        lines.append("No rules found!")

    if result.exhausted:
        lines.append("")
        lines.append(f"Lower bound reached: {len(result.rules)} of {result.config.num_rules} rules found")

    return "\n".join(lines) + "\n"
