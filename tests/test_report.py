import pytest

from carminer.postprocessing.report import format_result, format_rule, level_summary
from carminer.rule_mining.config import AprioriCarConfig
from carminer.rule_mining.search import mine_class_association_rules


def _mine(dataset, **kwargs):
    params = dict(num_rules=3, min_metric=0.6, delta=0.1, lower_bound_min_support=0.1)
    params.update(kwargs)
    return mine_class_association_rules(dataset, AprioriCarConfig(**params))


@pytest.fixture(scope="module")
def result(example_dataset):
    return _mine(example_dataset)


def test_header(result, example_dataset):
    lines = format_result(result, example_dataset).splitlines()
    assert lines[0] == "Apriori (class association rules)"
    assert set(lines[1]) == {"="}
    assert "Minimum support: 0.40 (4 instances)" in lines
    assert "Minimum metric <confidence>: 0.60" in lines
    assert "Number of cycles performed: 6" in lines


def test_level_sizes(result, example_dataset):
    text = format_result(result, example_dataset)
    assert "Size of set of large itemsets L(1): 8" in text
    assert "Size of set of large itemsets L(2): 2" in text
    assert "Large Itemsets" not in text
    assert level_summary(result.levels) == [
        {'level': 1, 'num_itemsets': 8},
        {'level': 2, 'num_itemsets': 2},
    ]


def test_itemsets_listed_on_request(result, example_dataset):
    text = format_result(result, example_dataset, output_itemsets=True)
    assert "Large Itemsets L(1):" in text
    assert "f1=a 6 ==> class=yes 5" in text
    assert "f1=a f2=x 4 ==> class=no 0" in text


def test_rules_listed_best_first(result, example_dataset):
    lines = format_result(result, example_dataset).splitlines()
    start = lines.index("Best rules found:")
    assert lines[start + 2] == (
        " 1. f1=a f2=x 4 ==> class=yes 4    conf:(1.00) lift:(1.67) lev:(0.16) conv:(1.60)"
    )
    assert lines[start + 3].startswith(" 2. f1=a 6 ==> class=yes 5    conf:(0.83)")
    assert lines[start + 4].startswith(" 3. f1=b 4 ==> class=no 3    conf:(0.75)")


def test_format_rule(result, example_dataset):
    assert format_rule(result.rules[2], example_dataset).startswith("f1=b 4 ==> class=no 3")


def test_exhausted_and_empty(example_dataset):
    exhausted = _mine(example_dataset, num_rules=10)
    assert "Lower bound reached: 5 of 10 rules found" in format_result(exhausted, example_dataset)

    empty = _mine(example_dataset, num_rules=2, min_metric=1.0, delta=0.5, lower_bound_min_support=0.5)
    text = format_result(empty, example_dataset)
    assert "No rules found!" in text
    assert "Best rules found:" not in text
