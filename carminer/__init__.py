"""
Class association rule mining with an adaptive minimum-support search.
"""
from carminer.errors import CarMinerError, ConfigurationError, DataTypeError
from carminer.preprocessing.dataset import CategoricalDataset
from carminer.rule_mining.apriori_car import AprioriCarMiner
from carminer.rule_mining.config import AprioriCarConfig
from carminer.rule_mining.search import AdaptiveSupportSearch, MiningResult, mine_class_association_rules

__version__ = '0.1.0'

__all__ = [
    'CarMinerError',
    'ConfigurationError',
    'DataTypeError',
    'CategoricalDataset',
    'AprioriCarMiner',
    'AprioriCarConfig',
    'AdaptiveSupportSearch',
    'MiningResult',
    'mine_class_association_rules'
]
