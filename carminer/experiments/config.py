from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from carminer.rule_mining.config import AprioriCarConfig


@dataclass
class DataConfig:
    path: str
    name: str
    class_index: Union[int, str] = 'last'
    columns: List[str] = None  # None: use every column

    def select(self, df):
        return df[self.columns] if self.columns else df


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


@dataclass
class ExperimentConfig:
    name: str
    data: DataConfig
    mining: AprioriCarConfig = field(default_factory=AprioriCarConfig)
    filters: List[FilterConfig] = field(default_factory=list)
    output_dir: str = "./out"

    def get_output_path(self) -> Path:
        path = Path(self.output_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'data_path': self.data.path,
            'dataset': self.data.name,
            **self.mining.to_dict(),
            'filters': [f.to_dict() for f in self.filters]
        }
