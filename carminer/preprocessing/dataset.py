"""
Categorical dataset abstraction consumed by the miner.

The DataFrame is split into a feature-only view and a class-only view,
each column encoded to integer category codes with -1 marking a missing
value. Codes are what Items refer to; names are recovered through the
dataset when rules are reported.
"""
import logging
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from carminer.errors import ConfigurationError, DataTypeError
from carminer.rule_mining.items import Item

logger = logging.getLogger(__name__)

ClassIndex = Union[int, str]


def resolve_class_index(columns: Sequence[Any], class_index: ClassIndex = 'last') -> int:
    """
    Translate a class index option into a column position.

    Accepts 'first', 'last', a column name, or an integer position
    (negative positions count from the end).
    """
    n_columns = len(columns)
    if n_columns < 2:
        raise ConfigurationError(
            f"Need at least one feature column and a class column, got {n_columns} column(s)"
        )

    if isinstance(class_index, bool):
        raise ConfigurationError(f"Invalid class index: {class_index!r}")

    if isinstance(class_index, (int, np.integer)):
        position = int(class_index)
        if not -n_columns <= position < n_columns:
            raise ConfigurationError(
                f"Class index {position} out of range for {n_columns} columns"
            )
        return position % n_columns

    if isinstance(class_index, str):
        if class_index in columns:
            return list(columns).index(class_index)
        if class_index.lower() == 'first':
            return 0
        if class_index.lower() == 'last':
            return n_columns - 1

    raise ConfigurationError(f"Invalid class index: {class_index!r}")


def is_categorical(series: pd.Series) -> bool:
    if isinstance(series.dtype, pd.CategoricalDtype):
        return True
    if pd.api.types.is_bool_dtype(series):
        return True
    return not pd.api.types.is_numeric_dtype(series)


def _encode(series: pd.Series) -> Tuple[np.ndarray, Tuple[Any, ...]]:
    categorical = pd.Categorical(series)
    codes = np.asarray(categorical.codes, dtype=np.int64)
    return codes, tuple(categorical.categories)


class CategoricalDataset:
    """
    Read-only, code-encoded view of a categorical DataFrame.

    Attributes:
        features: int array (num_records x num_features) of category codes
        classes: int array (num_records,) of class codes
        feature_names: names of the feature columns, in column order
        feature_values: per feature, the tuple of category values
        class_name: name of the class column
        class_values: tuple of class values

    Class labels are Items whose attribute is num_features, i.e. the class
    column sits right after the features in the encoded view.
    """

    def __init__(
            self,
            features: np.ndarray,
            classes: np.ndarray,
            feature_names: Sequence[str],
            feature_values: Sequence[Tuple[Any, ...]],
            class_name: str,
            class_values: Tuple[Any, ...]
    ):
        features = np.array(features, dtype=np.int64, copy=True)
        classes = np.array(classes, dtype=np.int64, copy=True)
        if features.ndim != 2 or features.shape[0] != classes.shape[0]:
            raise ValueError(
                f"Feature view {features.shape} does not match class view {classes.shape}"
            )
        if features.shape[1] != len(feature_names) or len(feature_names) != len(feature_values):
            raise ValueError("Feature names and values must match the feature view")

        features.setflags(write=False)
        classes.setflags(write=False)
        self.features = features
        self.classes = classes
        self.feature_names = list(feature_names)
        self.feature_values = [tuple(values) for values in feature_values]
        self.class_name = class_name
        self.class_values = tuple(class_values)

    @classmethod
    def from_dataframe(
            cls,
            df: pd.DataFrame,
            class_index: ClassIndex = 'last',
            remove_missing_columns: bool = False
    ) -> 'CategoricalDataset':
        """
        Build a dataset from a DataFrame of categorical columns.

        Args:
            df: DataFrame with discretized/categorical features and a class column
            class_index: 'first', 'last', a column name or a position
            remove_missing_columns: Drop feature columns where every value is missing

        Raises:
            ConfigurationError: If the class index is invalid
            DataTypeError: If a column holds continuous (numeric) values
        """
        position = resolve_class_index(df.columns, class_index)
        class_col = df.columns[position]
        feature_cols = [c for i, c in enumerate(df.columns) if i != position]

        if remove_missing_columns:
            empty = [c for c in feature_cols if df[c].isna().all()]
            if empty:
                logger.info("Removing %d all-missing column(s): %s", len(empty), empty)
                feature_cols = [c for c in feature_cols if c not in empty]
            if not feature_cols:
                raise ConfigurationError("No feature columns left after removing missing columns")

        # An all-missing column carries no values, whatever dtype pandas gave it
        for col in feature_cols + [class_col]:
            if not df[col].isna().all() and not is_categorical(df[col]):
                raise DataTypeError(
                    f"Column '{col}' is numeric ({df[col].dtype}); "
                    f"discretize it before mining class association rules"
                )

        encoded = [_encode(df[col]) for col in feature_cols]
        if encoded:
            features = np.column_stack([codes for codes, _ in encoded])
        else:
            features = np.empty((len(df), 0), dtype=np.int64)
        classes, class_values = _encode(df[class_col])

        return cls(
            features=features,
            classes=classes,
            feature_names=[str(c) for c in feature_cols],
            feature_values=[values for _, values in encoded],
            class_name=str(class_col),
            class_values=class_values
        )

    @property
    def num_records(self) -> int:
        return self.features.shape[0]

    @property
    def num_features(self) -> int:
        return self.features.shape[1]

    @property
    def class_attribute(self) -> int:
        return self.num_features

    def class_labels(self) -> List[Item]:
        return [Item(self.class_attribute, code) for code in range(len(self.class_values))]

    def class_counts(self) -> np.ndarray:
        """Number of records per class code (missing classes not counted)."""
        present = self.classes[self.classes >= 0]
        return np.bincount(present, minlength=len(self.class_values))

    def item_name(self, item: Item) -> Tuple[str, Any]:
        if item.attribute == self.class_attribute:
            return self.class_name, self.class_values[item.value]
        return self.feature_names[item.attribute], self.feature_values[item.attribute][item.value]

    def label_name(self, label: Item) -> Any:
        return self.class_values[label.value]

    def describe_items(self, items: Iterable[Item]) -> Dict[str, Any]:
        return dict(self.item_name(item) for item in items)

    def __repr__(self):
        return (f"CategoricalDataset(num_records={self.num_records}, "
                f"num_features={self.num_features}, class_name='{self.class_name}')")
