from .dataset import CategoricalDataset, resolve_class_index, is_categorical

__all__ = [
    'CategoricalDataset', 'resolve_class_index', 'is_categorical'
]
