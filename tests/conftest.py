import sys
import logging

import numpy as np
import pandas as pd
import pytest

from carminer.preprocessing.dataset import CategoricalDataset


@pytest.fixture(scope="function", autouse=True)
def logger():
    logger = logging.getLogger("carminer")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    if not logger.handlers:
        formatter = logging.Formatter("%(asctime)s:%(name)s:%(message)s")
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


@pytest.fixture(scope="session")
def example_df():
    # Ten records, two binary features and a yes/no class:
    #   f1=a: 6 records (5 yes), f1=b: 4 (1 yes)
    #   f2=x: 6 records (4 yes), f2=y: 4 (2 yes)
    #   f1=a & f2=x: 4 records, all yes
    return pd.DataFrame({
        'f1': ['a', 'a', 'a', 'a', 'a', 'b', 'b', 'b', 'a', 'b'],
        'f2': ['x', 'x', 'y', 'y', 'x', 'x', 'y', 'y', 'x', 'x'],
        'class': ['yes', 'yes', 'yes', 'no', 'yes', 'no', 'no', 'yes', 'yes', 'no'],
    })


@pytest.fixture(scope="session")
def example_dataset(example_df):
    return CategoricalDataset.from_dataframe(example_df)


@pytest.fixture(scope="session")
def random_df():
    rng = np.random.RandomState(12345)
    n = 60
    return pd.DataFrame({
        'colour': rng.choice(['red', 'green', 'blue'], size=n),
        'size': rng.choice(['S', 'M', 'L'], size=n, p=[0.5, 0.3, 0.2]),
        'shape': rng.choice(['round', 'square'], size=n, p=[0.7, 0.3]),
        'texture': rng.choice(['soft', 'hard'], size=n),
        'label': rng.choice(['pos', 'neg'], size=n, p=[0.6, 0.4]),
    })


@pytest.fixture(scope="session")
def random_dataset(random_df):
    return CategoricalDataset.from_dataframe(random_df)
