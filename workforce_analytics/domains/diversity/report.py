"""Console summary of an analytics result."""

import dataclasses

import pandas as pd
from rich.console import Console
from rich.table import Table

from workforce_analytics.domains.diversity.models import AnalyticsResult, DepartmentBreakdown
from workforce_analytics.utils.types import PerformanceLabel

type ResultFrames = dict[str, pd.DataFrame]

_LABEL_STYLES = {
    PerformanceLabel.EXCELLENT: "bold green",
    PerformanceLabel.GOOD: "green",
    PerformanceLabel.NEEDS_ATTENTION: "yellow",
    PerformanceLabel.CRITICAL: "bold red",
}


def result_frames(result: AnalyticsResult) -> ResultFrames:
    """Tabular views of the result, one DataFrame per section."""
    return {
        "tiers": pd.DataFrame([dataclasses.asdict(t) for t in result.by_hierarchy_level]),
        "funnel": pd.DataFrame([dataclasses.asdict(s) for s in result.pipeline_analysis.funnel]),
        "top_departments": pd.DataFrame([dataclasses.asdict(d) for d in result.top_diverse_departments]),
        "bottom_departments": pd.DataFrame([dataclasses.asdict(d) for d in result.bottom_diverse_departments]),
    }


def _tier_table(result: AnalyticsResult) -> Table:
    table = Table(title="Diversity by hierarchy level")
    table.add_column("Tier", style="cyan")
    table.add_column("Employees", justify="right")
    table.add_column("Women %", justify="right")
    table.add_column("PCD %", justify="right")
    table.add_column("Minorities %", justify="right")
    table.add_column("Women+minority %", justify="right")
    table.add_column("Simpson", justify="right")

    for t in result.by_hierarchy_level:
        table.add_row(
            t.tier,
            str(t.total_employees),
            f"{t.women_percentage:.1f}",
            f"{t.disability_percentage:.1f}",
            f"{t.minorities_percentage:.1f}",
            f"{t.women_minorities_percentage:.1f}",
            f"{t.diversity_score:.1f}",
        )
    return table


def _department_table(title: str, departments: tuple[DepartmentBreakdown, ...]) -> Table:
    table = Table(title=title)
    table.add_column("Department", style="cyan")
    table.add_column("Employees", justify="right")
    table.add_column("Simpson", justify="right")
    table.add_column("Women %", justify="right")
    table.add_column("PCD %", justify="right")
    table.add_column("Minorities %", justify="right")
    for d in departments:
        table.add_row(
            d.department,
            str(d.total_employees),
            f"{d.diversity_score:.1f}",
            f"{d.women_percentage:.1f}",
            f"{d.disability_percentage:.1f}",
            f"{d.minorities_percentage:.1f}",
        )
    return table


def render_result(result: AnalyticsResult, console: Console) -> None:
    """Print the headline figures and the per-tier / per-department tables."""
    label = result.performance_classification.label
    console.print(
        f"[bold]Company {result.company_id}[/bold] "
        f"({result.period_start.isoformat()} to {result.period_end.isoformat()}): "
        f"{result.total_employees} active employees"
    )
    console.print(
        f"  Women {result.women_percentage:.1f}% | PCD {result.disability_percentage:.1f}% | "
        f"Minorities {result.minorities_percentage:.1f}%"
    )
    console.print(f"  Performance: [{_LABEL_STYLES[label]}]{label}[/{_LABEL_STYLES[label]}]")
    for reason in result.performance_classification.reasons:
        console.print(f"    - {reason}")

    console.print(_tier_table(result))

    pipeline = result.pipeline_analysis
    console.print(
        f"Pipeline gap vs leadership: women {pipeline.gender_gap_top_vs_base:+.1f} pp, "
        f"PCD {pipeline.disability_gap_top_vs_base:+.1f} pp, "
        f"minorities {pipeline.ethnicity_gap_top_vs_base:+.1f} pp"
    )

    pay = result.pay_equity_preview
    flag = " [red](significant)[/red]" if pay.has_significant_gap else ""
    console.print(f"Pay gap (preview): {pay.pay_gap_percentage:.1f}%{flag}")

    quota = result.quota_compliance
    status = "[green]met[/green]" if quota.is_compliant else f"[red]not met, {quota.missing_hires} hires missing[/red]"
    console.print(
        f"Quota ({quota.regime}): {quota.current_percentage:.2f}% of "
        f"{quota.required_percentage:.0f}% required, {status}"
    )

    standard = result.standard_compliance
    console.print(
        f"GRI 405-1: {'[green]compliant[/green]' if standard.is_compliant else '[red]not compliant[/red]'} "
        f"(data quality {standard.data_quality})"
    )
    for missing, recommendation in zip(standard.missing_data, standard.recommendations):
        console.print(f"  - {missing}: {recommendation}")

    trend = result.trend_comparison
    baseline = trend.previous_period_end.isoformat() if trend.previous_period_end else "none"
    console.print(
        f"Trend since {baseline}: women {trend.change_women_percentage:+.1f} pp, "
        f"PCD {trend.change_disability_percentage:+.1f} pp"
    )

    console.print(_department_table("Most diverse departments", result.top_diverse_departments))
    console.print(_department_table("Least diverse departments", result.bottom_diverse_departments))
