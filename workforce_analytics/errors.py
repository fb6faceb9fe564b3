"""Exceptions raised by the analytics engine."""


class DiversityAnalyticsError(Exception):
    """Base exception for diversity analytics failures."""


class NoActiveEmployeesError(DiversityAnalyticsError):
    """Raised when a company has no active employees to analyse."""

    def __init__(self, company_id: str):
        self.company_id = company_id
        super().__init__(f"No active employees found for company {company_id!r}")


class DataFetchTimeoutError(DiversityAnalyticsError):
    """Raised when an upstream data provider does not answer in time."""


class ConfigurationError(DiversityAnalyticsError):
    """Raised for an invalid tier catalog, quota table or threshold set."""
