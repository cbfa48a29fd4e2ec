from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from constants import Constants


class LogProbTable(Mapping):
    """Read-only two-level table: table[outer][inner] -> log-probability.

    Keys keep the order in which they were first seen during training, so
    iterating a table (or one of its rows) is deterministic.
    """

    def __init__(self, rows=None):
        self._rows = {outer: dict(inner) for outer, inner in (rows or {}).items()}

    def __getitem__(self, outer):
        return MappingProxyType(self._rows[outer])

    def __iter__(self):
        return iter(self._rows)

    def __len__(self):
        return len(self._rows)

    def __repr__(self):
        return f"LogProbTable({len(self._rows)} rows)"

    def log_prob(self, outer, inner):
        """Stored value, or None when the pair was never observed."""
        row = self._rows.get(outer)
        if row is None:
            return None
        return row.get(inner)

    def row_mass(self, outer):
        return float(np.sum(np.exp(np.fromiter(self._rows[outer].values(), dtype=float))))

    def inner_keys(self):
        keys = {}
        for row in self._rows.values():
            for inner in row:
                keys.setdefault(inner, None)
        return list(keys)


@dataclass(frozen=True)
class HmmModel:
    emissions: LogProbTable
    transitions: LogProbTable

    @property
    def tags(self):
        """Every tag that can be emitted, in first-seen order."""
        tags = dict.fromkeys(self.emissions)
        tags.update(dict.fromkeys(self.transitions.inner_keys()))
        tags.pop(Constants.START_POS, None)
        return list(tags)

    @property
    def vocabulary(self):
        return set(self.emissions.inner_keys())
