"""Simpson diversity index over joint gender x ethnicity categories."""

import numpy as np
import pandas as pd

JOINT_CATEGORY_COLUMNS = ["gender", "ethnicity"]


def simpson_index_from_counts(counts: np.ndarray | list[int]) -> float:
    """Return ``(1 - sum(p_i^2)) * 100`` for category counts; 0 when empty."""
    counts = np.asarray(counts, dtype=float)
    total = counts.sum()
    if total == 0:
        return 0.0
    proportions = counts / total
    return float((1.0 - np.square(proportions).sum()) * 100)


def simpson_diversity_index(group: pd.DataFrame) -> float:
    """Score a group of employees from 0 (homogeneous) towards 100 (evenly spread)."""
    if group.empty:
        return 0.0
    counts = group.groupby(JOINT_CATEGORY_COLUMNS, dropna=False).size()
    return simpson_index_from_counts(counts.to_numpy())
