"""
Class Association Rule Mining Experiment

Mines the top rules predicting the class column of a discretized dataset,
lowering the minimum support until enough confident rules are found.
"""
import logging

from carminer.rule_mining.config import AprioriCarConfig
from carminer.utils.excel_io import save_rule_mining_results, save_rules_text

from .base import generate_output_filename, load_data, run_car_mining
from .config import DataConfig, ExperimentConfig, FilterConfig

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

# =============================================================================
# CONFIGURATION
# =============================================================================

DATA_PATH = "../../data/processed/dataset_discretized.csv"
DATASET_NAME = "dataset"
OUTPUT_DIR = "../../out/car_rules"

CLASS_INDEX = 'last'

MINING_CONFIG = AprioriCarConfig(
    num_rules=50,
    min_metric=0.8,
    delta=0.05,
    lower_bound_min_support=0.01,
    upper_bound_min_support=1.0,
    remove_missing_columns=True,
    output_itemsets=False
)

# Filter thresholds applied after ranking
FILTERS = [
    FilterConfig(metric='lift', threshold=1.0),
]


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment():
    config = ExperimentConfig(
        name="car_mining",
        data=DataConfig(path=DATA_PATH, name=DATASET_NAME, class_index=CLASS_INDEX),
        mining=MINING_CONFIG,
        filters=FILTERS,
        output_dir=OUTPUT_DIR
    )

    print("=" * 70)
    print("CLASS ASSOCIATION RULE MINING EXPERIMENT")
    print("=" * 70)

    print("\n[1] Loading data...")
    df = load_data(config.data)
    print(f"  Shape: {df.shape}")

    print("\n[2] Mining rules...")
    rules, stats = run_car_mining(df, config)
    print(f"  Cycles: {stats['num_cycles']}")
    print(f"  Minimum support: {stats['min_support']:.3f} ({stats['min_support_count']} records)")
    print(f"  Rules after filters: {len(rules)}")
    if stats['exhausted']:
        print("  Lower bound reached before the rule target")

    print("\n" + stats['report'])

    print("[3] Saving results...")
    output_path = config.get_output_path()
    filename = generate_output_filename(config.name, config.data.name)
    summary = {k: v for k, v in stats.items() if k not in ('levels', 'report')}
    save_rule_mining_results(
        rules,
        summary,
        output_path / filename,
        parameters=config.to_dict(),
        levels=stats['levels']
    )
    save_rules_text(rules, output_path / filename, metadata={'dataset': config.data.name})

    print("\n" + "=" * 70)
    print("EXPERIMENT COMPLETE")
    print("=" * 70)
    print(f"Output: {output_path / filename}.xlsx")


if __name__ == '__main__':
    run_experiment()
