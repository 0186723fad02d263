"""
Console reporter for resolved features.

Formats resolved features and registry fields using Rich.
"""

from typing import Any

from rich.console import Console
from rich.table import Table

from featuremap.features.base import DerivedFeature, Feature, WildcardFeature
from featuremap.features.registry import FieldRegistry


def feature_record(position: int, feature: Feature) -> dict[str, Any]:
    """Plain-dict description of one resolved feature."""
    record: dict[str, Any] = {
        "position": position,
        "name": feature.name,
        "kind": "wildcard" if isinstance(feature, WildcardFeature) else "derived",
        "data_type": feature.data_type.value,
    }
    if isinstance(feature, WildcardFeature):
        record["field"] = feature.field.name
    elif isinstance(feature, DerivedFeature):
        record["producer"] = feature.producer
        record["sources"] = [source.name for source in feature.sources]
    return record


class FeatureReporter:
    """Formats and displays resolution results to the console."""

    def __init__(self, console: Console) -> None:
        """
        Initialize feature reporter.

        Args:
            console: Rich Console instance for output.
        """
        self.console = console

    def print_features(self, features: list[Feature], title: str = "Resolved Features") -> None:
        """Print the resolved features as a table."""
        table = Table(title=title, show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Feature", style="cyan", no_wrap=True)
        table.add_column("Kind", justify="center")
        table.add_column("Type", style="blue")
        table.add_column("Origin", style="dim")

        for position, feature in enumerate(features):
            record = feature_record(position, feature)
            if record["kind"] == "wildcard":
                kind = "[green]wildcard[/green]"
                origin = f"field {record['field']}"
            else:
                kind = "[magenta]derived[/magenta]"
                sources = ", ".join(record.get("sources", []))
                origin = f"{record.get('producer') or '-'}({sources})"
            table.add_row(str(position), record["name"], kind, record["data_type"], origin)

        self.console.print(table)

    def print_fields(self, registry: FieldRegistry) -> None:
        """Print the registry fields and their last consumers."""
        table = Table(title="Registry Fields", show_header=True)
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Type", style="blue")
        table.add_column("Last consumer", style="dim")

        for name in registry.list_fields():
            field = registry.get_field(name)
            consumer = registry.last_consumer(name)
            consumer_label = getattr(consumer, "label", None) or "-"
            table.add_row(name, field.data_type.value, consumer_label)

        self.console.print(table)

    def print_summary(self, features: list[Feature], registry: FieldRegistry) -> None:
        """Print counts of output features and registry fields."""
        n_derived = sum(1 for feature in features if isinstance(feature, DerivedFeature))
        self.console.print(
            f"\n[bold]Output features:[/bold] {len(features)} "
            f"({len(features) - n_derived} wildcard, {n_derived} derived)"
        )
        self.console.print(f"[bold]Registry fields:[/bold] {len(registry)}")
