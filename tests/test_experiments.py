import pandas as pd
import pytest

from carminer.errors import ConfigurationError
from carminer.experiments.base import generate_output_filename, load_data, run_car_mining
from carminer.experiments.config import DataConfig, ExperimentConfig, FilterConfig
from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.config import AprioriCarConfig


def _mining(**kwargs):
    params = dict(num_rules=3, min_metric=0.6, delta=0.1, lower_bound_min_support=0.1)
    params.update(kwargs)
    return AprioriCarConfig(**params)


def test_load_csv_keeps_codes_categorical(tmp_path):
    path = tmp_path / "codes.csv"
    pd.DataFrame({'bin': [1, 2, 1, 3], 'cls': [0, 1, 0, 1]}).to_csv(path, index=False)

    df = load_data(DataConfig(path=str(path), name="codes"))
    dataset = CategoricalDataset.from_dataframe(df)
    assert dataset.feature_values == [('1', '2', '3')]
    assert dataset.class_values == ('0', '1')


def test_load_selects_columns(tmp_path, example_df):
    path = tmp_path / "example.csv"
    example_df.to_csv(path, index=False)
    df = load_data(DataConfig(path=str(path), name="example", columns=['f2', 'class']))
    assert list(df.columns) == ['f2', 'class']


def test_load_unsupported(tmp_path):
    with pytest.raises(ValueError):
        load_data(DataConfig(path=str(tmp_path / "data.json"), name="data"))


def test_run_car_mining(example_df):
    config = ExperimentConfig(name="test", data=DataConfig(path="unused.csv", name="example"),
                              mining=_mining())
    rules, stats = run_car_mining(example_df, config)
    assert stats['count'] == 3
    assert stats['levels'] == [{'level': 1, 'num_itemsets': 8}, {'level': 2, 'num_itemsets': 2}]
    assert "Best rules found:" in stats['report']


def test_filters_applied_after_ranking(example_df):
    config = ExperimentConfig(
        name="test",
        data=DataConfig(path="unused.csv", name="example"),
        mining=_mining(),
        filters=[FilterConfig(metric='lift', threshold=1.7)]
    )
    rules, stats = run_car_mining(example_df, config)
    assert stats['num_rules'] == 3
    assert stats['count'] == 1
    assert rules[0]['antecedents'] == [{'feature': 'f1', 'value': 'b'}]


def test_class_index_from_data_config(example_df):
    df = example_df[['class', 'f1', 'f2']]
    config = ExperimentConfig(
        name="test",
        data=DataConfig(path="unused.csv", name="example", class_index='first'),
        mining=_mining()
    )
    rules, _ = run_car_mining(df, config)
    assert rules[0]['consequent']['feature'] == 'class'
    assert config.mining.class_index == 'last'


def test_invalid_mining_config(example_df):
    config = ExperimentConfig(name="test", data=DataConfig(path="unused.csv", name="example"),
                              mining=_mining(metric_type='conviction'))
    with pytest.raises(ConfigurationError):
        run_car_mining(example_df, config)


def test_output_naming(tmp_path):
    config = ExperimentConfig(name="exp", data=DataConfig(path="d.csv", name="d"),
                              output_dir=str(tmp_path / "out"))
    assert config.get_output_path().is_dir()
    assert generate_output_filename("exp", "d").endswith("_exp_apriori_car_d")
    params = config.to_dict()
    assert params['dataset'] == 'd'
    assert params['num_rules'] is None
    assert params['filters'] == []
