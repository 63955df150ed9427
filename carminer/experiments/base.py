from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Tuple

import pandas as pd

from carminer.postprocessing.report import format_result, level_summary
from carminer.postprocessing.rule import filter_rules
from carminer.rule_mining.apriori_car import AprioriCarMiner
from carminer.rule_mining.config import AprioriCarConfig

from .config import DataConfig, ExperimentConfig, FilterConfig


def load_data(config: DataConfig) -> pd.DataFrame:
    # Read everything as text so discretized codes like "1" stay categorical
    path = Path(config.path)
    if path.suffix == '.csv':
        df = pd.read_csv(path, dtype=str)
    elif path.suffix in ['.xlsx', '.xls']:
        df = pd.read_excel(path, dtype=str)
    elif path.suffix == '.parquet':
        df = pd.read_parquet(path)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")
    return config.select(df)


def create_miner(config: AprioriCarConfig) -> AprioriCarMiner:
    return AprioriCarMiner.from_config(config)


def apply_filters(rules: List[Dict], filters: List[FilterConfig]) -> List[Dict]:
    result = rules
    for f in filters:
        result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
    return result


def run_car_mining(
    data: pd.DataFrame,
    config: ExperimentConfig
) -> Tuple[List[Dict], Dict[str, Any]]:
    """
    Mine, filter and summarise class association rules for one experiment.

    The class column comes from the data config unless the mining config
    names one explicitly.

    Returns:
        Tuple of (rules, stats); stats also holds 'levels' and the text 'report'
    """
    mining = config.mining
    if mining.class_index == 'last' and config.data.class_index != 'last':
        mining = replace(mining, class_index=config.data.class_index)

    miner = create_miner(mining)
    rules, stats = miner.mine_rules(data)
    rules = apply_filters(rules, config.filters)

    stats['count'] = len(rules)
    stats['levels'] = level_summary(miner.result_.levels)
    stats['report'] = format_result(miner.result_, miner.dataset_, mining.output_itemsets)
    return rules, stats


def generate_output_filename(experiment_name: str, dataset_name: str) -> str:
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return f"{timestamp}_{experiment_name}_apriori_car_{dataset_name}"
