# config.py
import json
from dataclasses import dataclass, fields, replace
from typing import Optional, Tuple

from .network import Network


@dataclass(frozen=True)
class TrainingConfig:
    # architecture: (width, activation name), input layer first
    layers: Tuple[Tuple[int, str], ...] = ((2, "identity"), (2, "sigmoid"), (1, "sigmoid"))

    # training
    learning_rate: float = 0.5
    epochs: int = 10_000
    batch_size: int = 4
    seed: Optional[int] = None

    # logging
    log_level: str = "INFO"

    def __post_init__(self):
        # lists coming from JSON become hashable tuples
        object.__setattr__(self, "layers", tuple((int(w), str(a)) for w, a in self.layers))
        if self.epochs < 0:
            raise ValueError(f"epochs must be >= 0, got {self.epochs}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")

    def with_(self, **kwargs) -> "TrainingConfig":
        """Convenience: clone with updated values"""
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, values: dict) -> "TrainingConfig":
        if not isinstance(values, dict):
            raise ValueError(f"Config must be a JSON object, got {type(values).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**values)

    @classmethod
    def from_json(cls, path: str) -> "TrainingConfig":
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def build_network(self) -> Network:
        """Fresh network with this architecture, learning rate and seed"""
        return Network(self.layers, learning_rate=self.learning_rate, rng=self.seed)
