from .config import (
    DataConfig,
    ExperimentConfig,
    FilterConfig
)
from .base import (
    load_data,
    run_car_mining,
    create_miner,
    apply_filters,
    generate_output_filename
)

__all__ = [
    'DataConfig',
    'ExperimentConfig',
    'FilterConfig',
    'load_data',
    'run_car_mining',
    'create_miner',
    'apply_filters',
    'generate_output_filename'
]
