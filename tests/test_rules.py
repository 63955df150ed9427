from numpy.testing import assert_almost_equal

from carminer.rule_mining.items import Item
from carminer.rule_mining.lattice import build_levels
from carminer.rule_mining.rules import generate_rules


def _rules(dataset, min_count, min_confidence):
    levels = build_levels(dataset, min_count, dataset.num_records)
    return levels, generate_rules(levels, min_confidence, dataset.class_counts(), dataset.num_records)


def test_rules_in_discovery_order(example_dataset):
    _, rules = _rules(example_dataset, 4, 0.6)
    assert [(r.antecedent.key, r.label.value) for r in rules] == [
        (((0, 0),), 1),
        (((0, 1),), 0),
        (((1, 0),), 1),
        (((0, 0), (1, 0)), 1),
    ]
    assert_almost_equal([r.confidence for r in rules], [5 / 6, 3 / 4, 4 / 6, 1.0])
    assert [r.support for r in rules] == [5, 3, 4, 4]
    assert [r.antecedent_support for r in rules] == [6, 4, 6, 4]


def test_metrics(example_dataset):
    _, rules = _rules(example_dataset, 4, 0.6)
    rule = rules[-1]
    assert rule.label == Item(2, 1)
    assert rule.label_support == 6
    assert_almost_equal(rule.lift, 1.0 / 0.6)
    assert_almost_equal(rule.leverage, 0.4 - 0.4 * 0.6)
    assert_almost_equal(rule.conviction, 4 * (10 - 6) / 10 / 1)
    assert_almost_equal(rule.relative_support, 0.4)


def test_confidence_threshold_inclusive(example_dataset):
    _, rules = _rules(example_dataset, 4, 0.75)
    assert [r.confidence for r in rules if r.confidence < 0.75] == []
    assert any(abs(r.confidence - 0.75) < 1e-12 for r in rules)


def test_zero_class_support_yields_no_rule(example_dataset):
    levels, rules = _rules(example_dataset, 4, 0.0)
    zero = [i for level in levels for i in level if i.class_support == 0]
    assert zero
    assert len(rules) == sum(len(level) for level in levels) - len(zero)


def test_confidence_bound(random_dataset):
    levels, rules = _rules(random_dataset, 2, 0.0)
    assert rules
    for rule in rules:
        assert 0.0 <= rule.confidence <= 1.0
        assert 0 < rule.support <= rule.antecedent_support


def test_levels_untouched(random_dataset):
    levels = build_levels(random_dataset, 2, random_dataset.num_records)
    snapshot = [tuple(level) for level in levels]
    generate_rules(levels, 0.5, random_dataset.class_counts(), random_dataset.num_records)
    assert [tuple(level) for level in levels] == snapshot


def test_to_dict(example_dataset):
    _, rules = _rules(example_dataset, 4, 0.6)
    d = rules[-1].to_dict(example_dataset)
    assert d['antecedents'] == [{'feature': 'f1', 'value': 'a'}, {'feature': 'f2', 'value': 'x'}]
    assert d['consequent'] == {'feature': 'class', 'value': 'yes'}
    assert_almost_equal(d['support'], 0.4)
    assert_almost_equal(d['confidence'], 1.0)
