"""Analytics configuration: tier catalog, quota tables and thresholds.

Everything here is immutable. A config is built once (from a jurisdiction
preset, optionally overridden by a TOML file) and handed to the engine.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path

from workforce_analytics.errors import ConfigurationError
from workforce_analytics.utils.io import load_toml_config
from workforce_analytics.utils.types import Ethnicity, MatchMode

logger = logging.getLogger(__name__)

type ConfigDict = dict[str, str | int | float | bool | list | dict]


@dataclass(frozen=True)
class HierarchyTier:
    name: str
    rank: int
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class TierCatalog:
    """Ordered set of hierarchy tiers. Rank 1 is the top of the organization."""

    tiers: tuple[HierarchyTier, ...]
    default_tier: str
    base_tier: str
    leadership_tier_count: int = 2
    precedence: tuple[str, ...] | None = None
    match_mode: MatchMode = MatchMode.TOKEN

    def __post_init__(self) -> None:
        names = [t.name for t in self.tiers]
        if not names:
            raise ConfigurationError("Tier catalog is empty")
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Duplicate tier names in catalog: {names}")
        ranks = [t.rank for t in self.tiers]
        if len(set(ranks)) != len(ranks):
            raise ConfigurationError(f"Duplicate tier ranks in catalog: {ranks}")
        for label, name in (("default", self.default_tier), ("base", self.base_tier)):
            if name not in names:
                raise ConfigurationError(f"Unknown {label} tier: {name!r}")
        if self.precedence is not None and sorted(self.precedence) != sorted(names):
            raise ConfigurationError("Tier precedence must list every catalog tier exactly once")
        if not 0 <= self.leadership_tier_count <= len(names):
            raise ConfigurationError(
                f"leadership_tier_count must be between 0 and {len(names)}"
            )

    @property
    def ordered(self) -> tuple[HierarchyTier, ...]:
        return tuple(sorted(self.tiers, key=lambda t: t.rank))

    @property
    def resolved_precedence(self) -> tuple[str, ...]:
        """Tie-break order when a title matches several tiers."""
        if self.precedence is not None:
            return self.precedence
        return tuple(t.name for t in self.tiers)

    @property
    def leadership_tiers(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.ordered[: self.leadership_tier_count])

    def get(self, name: str) -> HierarchyTier:
        for tier in self.tiers:
            if tier.name == name:
                return tier
        raise KeyError(name)


@dataclass(frozen=True)
class QuotaBracket:
    min_headcount: int
    required_percentage: float


@dataclass(frozen=True)
class QuotaTable:
    """Headcount-indexed minimum disability percentage."""

    name: str
    brackets: tuple[QuotaBracket, ...]

    def __post_init__(self) -> None:
        ordered = sorted(self.brackets, key=lambda b: b.min_headcount)
        thresholds = [b.min_headcount for b in ordered]
        if len(set(thresholds)) != len(thresholds):
            raise ConfigurationError(f"Duplicate headcount thresholds in quota table {self.name!r}")
        previous = 0.0
        for bracket in ordered:
            if not 0 <= bracket.required_percentage <= 100:
                raise ConfigurationError(
                    f"Quota percentage out of range: {bracket.required_percentage}"
                )
            # a bigger company can never owe a smaller share
            if bracket.required_percentage < previous:
                raise ConfigurationError(
                    f"Quota table {self.name!r} is not monotonic at {bracket.min_headcount}"
                )
            previous = bracket.required_percentage

    def required_percentage(self, headcount: int) -> float:
        for bracket in sorted(self.brackets, key=lambda b: b.min_headcount, reverse=True):
            if headcount >= bracket.min_headcount:
                return bracket.required_percentage
        return 0.0


@dataclass(frozen=True)
class ComplianceThresholds:
    min_completeness_pct: float = 90.0
    min_populated_tiers: int = 3


@dataclass(frozen=True)
class PerformanceThresholds:
    critical_leadership_women: float = 15.0
    attention_leadership_women: float = 25.0
    attention_disability: float = 2.0
    good_leadership_women: float = 35.0
    good_disability: float = 4.0

    def __post_init__(self) -> None:
        women = (
            self.critical_leadership_women,
            self.attention_leadership_women,
            self.good_leadership_women,
        )
        if list(women) != sorted(women) or self.attention_disability > self.good_disability:
            raise ConfigurationError("Performance thresholds must be non-decreasing")


DEFAULT_MINORITY_ETHNICITIES: frozenset[Ethnicity] = frozenset({
    Ethnicity.BLACK,
    Ethnicity.BROWN,
    Ethnicity.ASIAN,
    Ethnicity.INDIGENOUS,
})


@dataclass(frozen=True)
class AnalyticsConfig:
    catalog: TierCatalog
    quota_table: QuotaTable
    compliance: ComplianceThresholds = field(default_factory=ComplianceThresholds)
    performance: PerformanceThresholds = field(default_factory=PerformanceThresholds)
    minority_ethnicities: frozenset[Ethnicity] = DEFAULT_MINORITY_ETHNICITIES
    pay_gap_threshold: float = 10.0
    department_rank_size: int = 5
    trend_lookback_months: int = 12
    fetch_timeout_seconds: float = 30.0


# Portuguese/English title keywords, checked case- and accent-insensitively
DEFAULT_TIERS: tuple[HierarchyTier, ...] = (
    HierarchyTier(
        "C-Level", 1,
        ("ceo", "cfo", "cto", "coo", "presidente", "vice-presidente", "c-level", "chief", "president"),
    ),
    HierarchyTier("Diretoria", 2, ("diretor", "diretora", "director")),
    HierarchyTier("Gerência", 3, ("gerente", "manager", "gestor", "gestora")),
    HierarchyTier("Coordenação", 4, ("coordenador", "coordenadora", "coordinator", "supervisor", "supervisora")),
    HierarchyTier(
        "Operacional", 5,
        ("analista", "assistente", "técnico", "técnica", "especialista", "operador", "operadora",
         "analyst", "assistant", "technician", "specialist", "operator"),
    ),
    HierarchyTier(
        "Trainee/Estágio", 6,
        ("trainee", "estagiário", "estagiária", "intern", "aprendiz", "apprentice"),
    ),
)

DEFAULT_CATALOG = TierCatalog(
    tiers=DEFAULT_TIERS,
    default_tier="Operacional",
    base_tier="Operacional",
)

# Lei 8.213/91, art. 93
BRAZIL_QUOTA_TABLE = QuotaTable(
    name="BR Lei 8.213/91",
    brackets=(
        QuotaBracket(100, 2.0),
        QuotaBracket(201, 3.0),
        QuotaBracket(501, 4.0),
        QuotaBracket(1001, 5.0),
    ),
)

# Lei 4/2019: medium (75+) and large (250+) employers
PORTUGAL_QUOTA_TABLE = QuotaTable(
    name="PT Lei 4/2019",
    brackets=(
        QuotaBracket(75, 1.0),
        QuotaBracket(250, 2.0),
    ),
)

NO_QUOTA_TABLE = QuotaTable(name="none", brackets=())


def load_analytics_config(jurisdiction: str = "brazil") -> AnalyticsConfig:
    """Return the preset configuration for a jurisdiction."""
    match jurisdiction.lower():
        case "brazil" | "br":
            quota = BRAZIL_QUOTA_TABLE
        case "portugal" | "pt":
            quota = PORTUGAL_QUOTA_TABLE
        case "none":
            quota = NO_QUOTA_TABLE
        case other:
            raise ConfigurationError(f"Unknown jurisdiction: {other}")

    return AnalyticsConfig(catalog=DEFAULT_CATALOG, quota_table=quota)


def _catalog_from_dict(base: TierCatalog, data: ConfigDict) -> TierCatalog:
    overrides = {}
    if "tiers" in data:
        overrides["tiers"] = tuple(
            HierarchyTier(t["name"], int(t["rank"]), tuple(t["keywords"])) for t in data["tiers"]
        )
    for key in ("default_tier", "base_tier"):
        if key in data:
            overrides[key] = data[key]
    if "leadership_tier_count" in data:
        overrides["leadership_tier_count"] = int(data["leadership_tier_count"])
    if "precedence" in data:
        overrides["precedence"] = tuple(data["precedence"])
    if "match_mode" in data:
        overrides["match_mode"] = MatchMode(data["match_mode"])
    return dataclasses.replace(base, **overrides)


def config_from_dict(data: ConfigDict) -> AnalyticsConfig:
    """Build a config from a parsed TOML document layered over its jurisdiction preset."""
    try:
        config = load_analytics_config(data.get("jurisdiction", "brazil"))

        if "hierarchy" in data:
            config = dataclasses.replace(
                config, catalog=_catalog_from_dict(config.catalog, data["hierarchy"])
            )
        if "quota" in data:
            quota = data["quota"]
            config = dataclasses.replace(
                config,
                quota_table=QuotaTable(
                    name=quota.get("name", "custom"),
                    brackets=tuple(
                        QuotaBracket(int(b["min_headcount"]), float(b["required_percentage"]))
                        for b in quota.get("brackets", [])
                    ),
                ),
            )
        if "compliance" in data:
            config = dataclasses.replace(config, compliance=ComplianceThresholds(**data["compliance"]))
        if "performance" in data:
            config = dataclasses.replace(config, performance=PerformanceThresholds(**data["performance"]))
        if "analytics" in data:
            analytics = dict(data["analytics"])
            if "minority_ethnicities" in analytics:
                analytics["minority_ethnicities"] = frozenset(
                    Ethnicity(e) for e in analytics["minority_ethnicities"]
                )
            config = dataclasses.replace(config, **analytics)
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid analytics configuration: {exc}") from exc

    return config


def load_analytics_config_file(path: str | Path) -> AnalyticsConfig:
    """Load an analytics config from a TOML file."""
    try:
        data = load_toml_config(path)
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Could not read config {path}: {exc}") from exc
    logger.info("Loaded analytics config from %s", path)
    return config_from_dict(data)
