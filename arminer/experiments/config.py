from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from pathlib import Path

from arminer.rule_mining.records import Options

DATA_FORMATS = ('basket', 'long', 'tabular')


@dataclass
class DataConfig:
    path: Optional[str]
    name: str
    # 'basket': one transaction per row, items joined by item_sep
    # 'long': one (transaction_col, item_col) pair per row
    # 'tabular': one transaction per row, each cell becomes "column__value"
    format: str = 'basket'
    item_sep: str = ','
    transaction_col: str = 'transaction_id'
    item_col: str = 'item'

    def __post_init__(self):
        if self.format not in DATA_FORMATS:
            raise ValueError(f"Data format must be one of {list(DATA_FORMATS)}, got '{self.format}'")


@dataclass
class AprioriConfig:
    min_support: float = 0.1
    min_confidence: float = 0.5
    min_lift: float = 0.0
    max_length: int = 0  # 0 means unbounded

    def to_options(self) -> Options:
        return Options(
            min_support=self.min_support,
            min_confidence=self.min_confidence,
            min_lift=self.min_lift,
            max_length=self.max_length
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.to_options().to_dict()


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


@dataclass
class RuleMiningConfig:
    miner_config: AprioriConfig = field(default_factory=AprioriConfig)
    mode: str = 'rules'  # 'rules', 'itemsets', 'both'
    filters: List[FilterConfig] = field(default_factory=list)
    miner_type: str = 'apriori'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'miner_type': self.miner_type,
            'miner_config': self.miner_config.to_dict(),
            'mode': self.mode,
            'filters': [f.to_dict() for f in self.filters]
        }


@dataclass
class ExperimentConfig:
    name: str
    data: DataConfig
    mining: RuleMiningConfig = field(default_factory=RuleMiningConfig)
    output_dir: str = "./out"

    def get_output_path(self) -> Path:
        path = Path(self.output_dir)
        path.mkdir(parents=True, exist_ok=True)
        return path
