import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

logger = logging.getLogger(__name__)

RULE_METRICS = [
    ('confidence', 'Confidence'),
    ('support', 'Support'),
    ('lift', 'Lift'),
    ('leverage', 'Leverage'),
    ('conviction', 'Conviction'),
]


def _with_suffix(output_path: Union[str, Path], suffix: str) -> Path:
    output_path = Path(output_path)
    if output_path.suffix != suffix:
        output_path = output_path.with_suffix(suffix)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def _key_value_frame(values: Dict[str, Any], key_column: str) -> pd.DataFrame:
    # Cells hold scalars; containers are written as their repr
    return pd.DataFrame({
        key_column: list(values),
        'Value': [str(v) if isinstance(v, (list, tuple, dict)) or v is None else v
                  for v in values.values()]
    })


def save_rule_mining_results(
    rules: List[Dict[str, Any]],
    stats: Dict[str, Any],
    output_path: Union[str, Path],
    parameters: Dict[str, Any] = None,
    levels: List[Dict[str, Any]] = None
) -> Path:
    """
    Write one mining run to an Excel workbook.

    Sheets:
        - Rules: Ranked rules, antecedent written as "f1=v1 AND f2=v2"
        - Levels: Number of frequent labeled itemsets per level
        - Summary: Mining statistics
        - Parameters: Configuration used

    Args:
        rules: Rule dictionaries, best first
        stats: Statistics returned by the miner
        output_path: Target file (.xlsx is appended when missing)
        parameters: Miner configuration
        levels: Per-level summary rows ({'level', 'num_itemsets'})
    """
    output_path = _with_suffix(output_path, '.xlsx')

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        if rules:
            ranked = pd.DataFrame([format_rule_for_excel(r) for r in rules])
            ranked.insert(0, 'rank', range(1, len(ranked) + 1))
            ranked.to_excel(writer, sheet_name='Rules', index=False)
        if levels:
            pd.DataFrame(levels).to_excel(writer, sheet_name='Levels', index=False)
        _key_value_frame(stats, 'Metric').to_excel(writer, sheet_name='Summary', index=False)
        if parameters:
            _key_value_frame(parameters, 'Parameter').to_excel(writer, sheet_name='Parameters', index=False)

    logger.info("Results saved to: %s", output_path)
    return output_path


def format_rule_for_excel(rule: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten antecedents and consequent to "feature=value AND ..." strings.

    The strings split back into items on " AND " and then "=".
    """
    return {
        key: _format_itemset(value) if key in ('antecedents', 'consequent') else value
        for key, value in rule.items()
    }


def _format_itemset(val: Any) -> str:
    if isinstance(val, dict):
        # a single {'feature', 'value'} item or a {feature: value} mapping
        if set(val) == {'feature', 'value'}:
            val = [val]
        else:
            val = [{'feature': k, 'value': v} for k, v in val.items()]
    if isinstance(val, (list, tuple)):
        return ' AND '.join(
            f"{item['feature']}={item['value']}" if isinstance(item, dict) else str(item)
            for item in val
        )
    return str(val)


def save_rules_text(
    rules: List[Dict[str, Any]],
    output_path: Union[str, Path],
    title: str = "CLASS ASSOCIATION RULES",
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Write ranked rules as a plain IF/THEN listing.

    Args:
        rules: Rule dictionaries, best first
        output_path: Target file (.txt is appended when missing)
        title: Header line
        metadata: Extra "key: value" header lines
    """
    output_path = _with_suffix(output_path, '.txt')
    rule_line = "-" * 60

    lines = [rule_line, title, f"Written {datetime.now():%Y-%m-%d %H:%M}"]
    lines.extend(f"{key}: {val}" for key, val in (metadata or {}).items())
    lines.append(rule_line)
    lines.append("")

    if rules:
        for rank, rule in enumerate(rules, 1):
            lines.extend(_rule_lines(rule, rank))
        lines.append(f"Total rules: {len(rules)}")
    else:
        lines.append("No rules found.")

    Path(output_path).write_text("\n".join(lines) + "\n")
    logger.info("Rules saved to: %s", output_path)
    return output_path


def _rule_lines(rule: Dict[str, Any], rank: int) -> List[str]:
    lines = [
        f"[{rank}]",
        f"  IF {_format_itemset(rule.get('antecedents', []))}",
        f"  THEN {_format_itemset(rule.get('consequent', '?'))}",
    ]
    if 'rule_support' in rule:
        lines.append(f"  covers {rule['antecedent_support']} record(s), {rule['rule_support']} correct")
    lines.extend(
        f"    {label:<12}{rule[key]:.4f}" for key, label in RULE_METRICS
        if isinstance(rule.get(key), (int, float))
    )
    lines.append("")
    return lines
