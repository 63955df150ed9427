from typing import Any, Dict, Iterable, List


def filter_rules(rules: List[Dict[str, Any]], criterion: str, threshold: float) -> List[Dict[str, Any]]:
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rule dictionaries
        criterion: The rule metric to filter on (e.g., 'support', 'confidence', 'lift')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion, in their original order
    """
    return [rule for rule in rules if rule.get(criterion, float("-inf")) >= threshold]


def filter_rules_by_class(rules: List[Dict[str, Any]], classes: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Keep rules predicting one of the given class values.

    Values are compared as strings, so 'yes' matches True-like labels read
    from CSV files as text.
    """
    wanted = {str(c) for c in classes}
    return [rule for rule in rules if str(rule['consequent']['value']) in wanted]


def filter_rules_by_antecedent(
        rules: List[Dict[str, Any]],
        features: Iterable[str],
        match_any: bool = True
) -> List[Dict[str, Any]]:
    """
    Keep rules whose antecedent uses the given features.

    Args:
        rules: List of rule dictionaries
        features: Feature names to look for
        match_any: If True, one matching feature is enough; otherwise all must appear

    Returns:
        List of filtered rules
    """
    wanted = {f.lower() for f in features}
    if not wanted:
        return list(rules)

    filtered = []
    for rule in rules:
        used = {str(item['feature']).lower() for item in rule.get('antecedents', [])}
        if match_any and used & wanted:
            filtered.append(rule)
        elif not match_any and wanted <= used:
            filtered.append(rule)
    return filtered
