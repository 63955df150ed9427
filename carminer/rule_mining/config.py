from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Union

from carminer.errors import ConfigurationError

# Every metric a Rule carries; the ranker can order by any of them.
RULE_METRICS = ('confidence', 'lift', 'leverage', 'conviction')

# Metrics a mining run may rank by. Class association rules are ranked by
# confidence only.
SUPPORTED_METRICS = ('confidence',)


@dataclass
class AprioriCarConfig:
    num_rules: Optional[int] = None  # None: no cap, mine once at the lower bound
    min_metric: float = 0.5
    delta: float = 0.05
    lower_bound_min_support: float = 0.01
    upper_bound_min_support: float = 1.0
    remove_missing_columns: bool = False
    output_itemsets: bool = False
    class_index: Union[int, str] = 'last'
    metric_type: str = 'confidence'
    n_jobs: int = 1
    verbose: bool = False

    def validate(self) -> 'AprioriCarConfig':
        if self.num_rules is not None:
            if isinstance(self.num_rules, bool) or not isinstance(self.num_rules, int):
                raise ConfigurationError(f"num_rules must be an integer or None, got {self.num_rules!r}")
            if self.num_rules < 1:
                raise ConfigurationError(f"num_rules must be at least 1, got {self.num_rules}")

        if not self.delta > 0:
            raise ConfigurationError(f"delta must be positive, got {self.delta}")

        lower, upper = self.lower_bound_min_support, self.upper_bound_min_support
        if not 0.0 <= lower <= 1.0 or not 0.0 <= upper <= 1.0:
            raise ConfigurationError(
                f"Support bounds must lie in [0, 1], got lower={lower}, upper={upper}"
            )
        if lower > upper:
            raise ConfigurationError(
                f"Lower bound min support ({lower}) exceeds upper bound ({upper})"
            )

        if not 0.0 <= self.min_metric <= 1.0:
            raise ConfigurationError(f"Minimum confidence must lie in [0, 1], got {self.min_metric}")

        metric = str(self.metric_type).lower()
        if metric not in RULE_METRICS:
            raise ConfigurationError(
                f"Metric type must be one of {list(RULE_METRICS)}, got '{self.metric_type}'"
            )
        if metric not in SUPPORTED_METRICS:
            raise ConfigurationError(
                f"For class association rule mining the metric type has to be confidence, "
                f"got '{self.metric_type}'"
            )
        self.metric_type = metric

        if self.n_jobs == 0:
            raise ConfigurationError("n_jobs must be non-zero")

        if isinstance(self.class_index, bool) or not isinstance(self.class_index, (int, str)):
            raise ConfigurationError(f"Invalid class index: {self.class_index!r}")

        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
