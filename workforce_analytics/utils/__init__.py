"""Shared utilities for the workforce analytics engine."""

from workforce_analytics.utils.io import read_table, write_output
from workforce_analytics.utils.transforms import fold_text, normalize_columns
from workforce_analytics.utils.validators import validate_dataframe
from workforce_analytics.utils.types import Ethnicity, Gender, safe_percentage
