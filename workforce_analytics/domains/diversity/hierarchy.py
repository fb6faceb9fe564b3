"""Infer each employee's hierarchy tier from a free-text position title."""

import logging
import re

import pandas as pd

from workforce_analytics.config import HierarchyTier, TierCatalog
from workforce_analytics.utils.transforms import fold_text
from workforce_analytics.utils.types import MatchMode

logger = logging.getLogger(__name__)

type TitleTokens = tuple[str, ...]

_TOKEN_PATTERN = re.compile(r"[a-z0-9]+")


def tokenize_title(title: object) -> TitleTokens:
    """Split a title into lowercase, accent-free alphanumeric words."""
    return tuple(_TOKEN_PATTERN.findall(fold_text(title)))


def _contains_sequence(tokens: TitleTokens, keyword: TitleTokens) -> bool:
    width = len(keyword)
    if width == 0:
        return False
    return any(tokens[i:i + width] == keyword for i in range(len(tokens) - width + 1))


class HierarchyClassifier:
    """Map position titles to catalog tiers.

    Every tier is tested against the title. In ``token`` mode a keyword must
    appear as whole words ("diretor" does not match "diretoria"); in
    ``substring`` mode any substring hit counts. When more than one tier
    matches, the catalog's precedence list decides. A title matching nothing
    lands in the catalog's default tier.
    """

    def __init__(self, catalog: TierCatalog):
        self.catalog = catalog
        self.default_tier = catalog.get(catalog.default_tier)
        self._precedence = [catalog.get(name) for name in catalog.resolved_precedence]
        self._keyword_tokens = {
            tier.name: [tokenize_title(k) for k in tier.keywords] for tier in catalog.tiers
        }
        self._keyword_text = {
            tier.name: [fold_text(k) for k in tier.keywords] for tier in catalog.tiers
        }

    def _matches(self, tier: HierarchyTier, title: str, tokens: TitleTokens) -> bool:
        match self.catalog.match_mode:
            case MatchMode.TOKEN:
                return any(_contains_sequence(tokens, kw) for kw in self._keyword_tokens[tier.name])
            case MatchMode.SUBSTRING:
                return any(kw and kw in title for kw in self._keyword_text[tier.name])

    def matching_tiers(self, title: object) -> list[HierarchyTier]:
        """All tiers whose keywords hit ``title``, in precedence order."""
        folded = fold_text(title)
        tokens = tuple(_TOKEN_PATTERN.findall(folded))
        return [tier for tier in self._precedence if self._matches(tier, folded, tokens)]

    def classify(self, title: object) -> HierarchyTier:
        matches = self.matching_tiers(title)
        if not matches:
            return self.default_tier
        if len(matches) > 1:
            logger.debug(
                "Title %r matches %s; precedence picks %s",
                title, [t.name for t in matches], matches[0].name,
            )
        return matches[0]

    def classify_frame(self, employees: pd.DataFrame, title_col: str = "position_title") -> pd.DataFrame:
        """Return a copy of ``employees`` with ``tier`` and ``tier_rank`` columns."""
        result = employees.copy()
        titles = result[title_col].fillna("").astype(str)
        resolved = {title: self.classify(title) for title in titles.unique()}
        result["tier"] = titles.map(lambda t: resolved[t].name)
        result["tier_rank"] = titles.map(lambda t: resolved[t].rank).astype(int)

        fallback = int((result["tier"] == self.default_tier.name).sum())
        logger.info(
            "Classified %d employees into %d tiers (%d in default tier %s)",
            len(result), result["tier"].nunique(), fallback, self.default_tier.name,
        )
        return result
