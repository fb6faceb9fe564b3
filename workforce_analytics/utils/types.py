"""Shared type definitions for the analytics engine."""

from enum import StrEnum


type Percentage = float


class Gender(StrEnum):
    FEMALE = "female"
    MALE = "male"
    OTHER = "other"
    UNKNOWN = "unknown"


class Ethnicity(StrEnum):
    WHITE = "white"
    BLACK = "black"
    BROWN = "brown"
    ASIAN = "asian"
    INDIGENOUS = "indigenous"
    NOT_DECLARED = "not_declared"
    UNKNOWN = "unknown"


class MatchMode(StrEnum):
    TOKEN = "token"
    SUBSTRING = "substring"


class PerformanceLabel(StrEnum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    NEEDS_ATTENTION = "Needs attention"
    CRITICAL = "Critical"


class DataQuality(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


def safe_percentage(part: float, whole: float) -> Percentage:
    """Return ``part / whole * 100``, or 0 when the denominator is zero."""
    if whole == 0:
        return 0.0
    return part / whole * 100


def classify_quality(gender_completeness: float, ethnicity_completeness: float) -> DataQuality:
    """Grade demographic data quality from two completeness fractions (0-1)."""
    match (gender_completeness, ethnicity_completeness):
        case (g, e) if g > 0.95 and e > 0.95:
            return DataQuality.HIGH
        case (g, e) if g > 0.80 and e > 0.80:
            return DataQuality.MEDIUM
        case (g, e) if g > 0.50 or e > 0.50:
            return DataQuality.LOW
        case _:
            return DataQuality.UNKNOWN
