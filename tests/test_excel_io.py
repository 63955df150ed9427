import pandas as pd
import pytest

from carminer.rule_mining.apriori_car import AprioriCarMiner
from carminer.utils.excel_io import format_rule_for_excel, save_rule_mining_results, save_rules_text


@pytest.fixture(scope="module")
def mined(example_df):
    miner = AprioriCarMiner(num_rules=3, min_confidence=0.6, delta=0.1, lower_bound_min_support=0.1)
    return miner.mine_rules(example_df)


def test_format_rule_for_excel(mined):
    rules, _ = mined
    formatted = format_rule_for_excel(rules[0])
    assert formatted['antecedents'] == "f1=a AND f2=x"
    assert formatted['consequent'] == "class=yes"
    assert formatted['confidence'] == rules[0]['confidence']
    assert isinstance(rules[0]['antecedents'], list)


def test_save_rule_mining_results(mined, tmp_path):
    rules, stats = mined
    path = save_rule_mining_results(
        rules,
        stats,
        tmp_path / "nested" / "results",
        parameters={'num_rules': 3, 'delta': 0.1},
        levels=[{'level': 1, 'num_itemsets': 8}, {'level': 2, 'num_itemsets': 2}]
    )
    assert path.suffix == '.xlsx'
    assert path.exists()

    sheets = pd.read_excel(path, sheet_name=None)
    assert list(sheets) == ['Rules', 'Levels', 'Summary', 'Parameters']

    rules_df = sheets['Rules']
    assert list(rules_df['rank']) == [1, 2, 3]
    assert list(rules_df['antecedents']) == ["f1=a AND f2=x", "f1=a", "f1=b"]
    assert list(sheets['Levels']['num_itemsets']) == [8, 2]

    summary = dict(zip(sheets['Summary']['Metric'], sheets['Summary']['Value']))
    assert summary['num_cycles'] == 6
    assert summary['level_sizes'] == "[8, 2]"


def test_save_without_rules(tmp_path):
    path = save_rule_mining_results([], {'num_rules': 0}, tmp_path / "empty.xlsx")
    assert list(pd.read_excel(path, sheet_name=None)) == ['Summary']


def test_save_rules_text(mined, tmp_path):
    rules, _ = mined
    path = save_rules_text(rules, tmp_path / "rules", metadata={'dataset': 'example'})
    text = path.read_text()
    assert path.suffix == '.txt'
    assert "dataset: example" in text
    assert "  IF f1=a AND f2=x\n" in text
    assert "  THEN class=yes\n" in text
    assert "Total rules: 3" in text

    empty = save_rules_text([], tmp_path / "none.txt")
    assert "No rules found." in empty.read_text()
