"""
Growth Projection Example

Projects one stand under the three growth models and prints a yield
table for each, then compares the final-year basal area side by side.

Usage:
    python examples/growth_projection.py [years]
"""
import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from forestinv import (
    Analyzer,
    ExponentialGrowth,
    ForestInventory,
    LinearGrowth,
    LogisticGrowth,
    Plot,
    Species,
    Tree,
    setup_logging,
)

console = Console()

MODELS = {
    "Exponential 3%": ExponentialGrowth(annual_rate=0.03, mortality_rate=0.005),
    "Logistic (K=300)": LogisticGrowth(annual_rate=0.08, carrying_capacity=300.0, mortality_rate=0.005),
    "Linear +3 sq ft": LinearGrowth(annual_increment=3.0, mortality_rate=0.005),
}


def build_inventory():
    """Three 1/5 acre plots of young Douglas Fir."""
    df = Species("DF", "Douglas Fir")
    diameters = [
        [8.2, 10.1, 11.4, 9.6, 12.8],
        [7.5, 9.9, 13.2, 10.4],
        [9.1, 11.8, 8.7, 10.9, 12.2, 7.9],
    ]
    plots = []
    for plot_id, dbhs in enumerate(diameters, start=1):
        trees = [
            Tree(plot_id, tree_id, df, dbh=dbh, height=round(20 + 4.2 * dbh), expansion_factor=1.0)
            for tree_id, dbh in enumerate(dbhs, start=1)
        ]
        plots.append(Plot(plot_id=plot_id, size_acres=0.2, trees=trees))
    return ForestInventory(name="Young Douglas Fir", plots=plots)


def show_projection(label, projection, step=5):
    table = Table(title=label)
    table.add_column("Year", justify="center")
    table.add_column("TPA", justify="right")
    table.add_column("BA", justify="right")
    table.add_column("Cu Ft", justify="right")
    table.add_column("Bd Ft", justify="right")
    for point in projection:
        if point.year % step and point.year != projection.years:
            continue
        table.add_row(
            str(point.year),
            f"{point.tpa:.0f}",
            f"{point.basal_area:.1f}",
            f"{point.volume_cuft:.0f}",
            f"{point.volume_bdft:.0f}",
        )
    console.print(table)


def main():
    years = int(sys.argv[1]) if len(sys.argv) > 1 else 30
    setup_logging("INFO")

    console.print()
    console.rule("[bold blue]forestinv Growth Projection[/bold blue]")
    console.print()

    inventory = build_inventory()
    analyzer = Analyzer()
    metrics = analyzer.stand_metrics(inventory)
    console.print(Panel(
        f"[bold]{inventory.name}[/bold]: {metrics.total_tpa:.0f} TPA, "
        f"{metrics.total_basal_area:.1f} sq ft/ac BA, QMD {metrics.quadratic_mean_diameter:.1f}\""
    ))

    finals = {}
    for label, model in MODELS.items():
        projection = analyzer.project_growth(metrics, model=model, years=years)
        show_projection(label, projection)
        finals[label] = projection.final
        console.print()

    summary = Table(title=f"Year {years} Comparison")
    summary.add_column("Model", style="bold")
    summary.add_column("BA", justify="right")
    summary.add_column("Bd Ft", justify="right")
    for label, point in finals.items():
        summary.add_row(label, f"{point.basal_area:.1f}", f"{point.volume_bdft:.0f}")
    console.print(summary)


if __name__ == "__main__":
    main()
