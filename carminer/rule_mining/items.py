"""
Item and itemset value types used by the lattice builder.

Items are integer (attribute, value) pairs over the category codes of a
CategoricalDataset. Everything here is immutable: counting a candidate
produces a new object instead of updating it in place.
"""
from dataclasses import dataclass, replace
from typing import Tuple

ItemKey = Tuple[Tuple[int, int], ...]
LabeledKey = Tuple[int, ItemKey]


@dataclass(frozen=True, order=True)
class Item:
    """A single attribute-value pair (column index, category code)."""
    attribute: int
    value: int

    def __repr__(self):
        return f"Item({self.attribute}={self.value})"


@dataclass(frozen=True)
class ItemSet:
    """
    Conjunction of items, at most one per attribute, sorted by attribute.

    support is the number of records matching every item.
    """
    items: Tuple[Item, ...]
    support: int = 0

    def __post_init__(self):
        attributes = [item.attribute for item in self.items]
        if attributes != sorted(set(attributes)):
            raise ValueError(f"Items must be sorted with one item per attribute, got {self.items}")
        if self.support < 0:
            raise ValueError(f"Support must be non-negative, got {self.support}")

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def key(self) -> ItemKey:
        return tuple((item.attribute, item.value) for item in self.items)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def issubset(self, other: 'ItemSet') -> bool:
        return set(self.items) <= set(other.items)


@dataclass(frozen=True)
class LabeledItemSet:
    """
    An antecedent itemset paired with one class label.

    class_support counts the records that match the antecedent and carry
    the label, so it never exceeds the antecedent support.
    """
    antecedent: ItemSet
    label: Item
    class_support: int = 0

    def __post_init__(self):
        if not 0 <= self.class_support <= self.antecedent.support:
            raise ValueError(
                f"Class support {self.class_support} outside [0, {self.antecedent.support}]"
            )

    @property
    def items(self) -> Tuple[Item, ...]:
        return self.antecedent.items

    @property
    def support(self) -> int:
        return self.antecedent.support

    @property
    def size(self) -> int:
        return self.antecedent.size

    @property
    def key(self) -> LabeledKey:
        return self.label.value, self.antecedent.key

    @property
    def confidence(self) -> float:
        if self.support == 0:
            return 0.0
        return self.class_support / self.support

    def with_counts(self, support: int, class_support: int) -> 'LabeledItemSet':
        """Return a copy carrying freshly counted supports."""
        return LabeledItemSet(
            antecedent=replace(self.antecedent, support=int(support)),
            label=self.label,
            class_support=int(class_support)
        )

    @classmethod
    def candidate(cls, items, label: Item) -> 'LabeledItemSet':
        """Uncounted itemset over the given items (sorted by attribute)."""
        return cls(antecedent=ItemSet(tuple(sorted(items))), label=label)


@dataclass(frozen=True)
class Level:
    """All frequent labeled itemsets of antecedent size k from one cycle."""
    k: int
    itemsets: Tuple[LabeledItemSet, ...]

    def __len__(self):
        return len(self.itemsets)

    def __iter__(self):
        return iter(self.itemsets)

    def __bool__(self):
        return bool(self.itemsets)

    def keys(self):
        return {itemset.key for itemset in self.itemsets}
