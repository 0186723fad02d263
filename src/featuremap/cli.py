"""Command-line interface for featuremap."""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

app = typer.Typer(
    name="featuremap",
    help="Resolve fitted column transformers into output feature descriptors.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


@app.command()
def resolve(
    model: Annotated[
        Path,
        typer.Argument(
            help="Fitted scikit-learn ColumnTransformer or Pipeline saved with joblib.",
            exists=True,
            dir_okay=False,
        ),
    ],
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration YAML file.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print one JSON object per feature."),
    ] = False,
) -> None:
    """Resolve the output features of a persisted fitted estimator."""
    import joblib

    from featuremap.compose.estimators import resolve_estimator
    from featuremap.config.loader import load_config
    from featuremap.errors import FeatureMapError
    from featuremap.features.registry import FieldRegistry
    from featuremap.report import FeatureReporter, feature_record
    from featuremap.utils.logging import configure_from_config

    fm_config = load_config(config)
    configure_from_config(fm_config.logging)

    estimator = joblib.load(model)
    registry = FieldRegistry.from_config(fm_config.resolver)

    try:
        features = resolve_estimator(estimator, registry, fm_config.resolver)
    except FeatureMapError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    if json_output:
        for position, feature in enumerate(features):
            typer.echo(json.dumps(feature_record(position, feature)))
        return

    reporter = FeatureReporter(console)
    reporter.print_features(features, title=f"Resolved Features ({model.name})")
    reporter.print_fields(registry)
    reporter.print_summary(features, registry)


@app.command()
def version() -> None:
    """Show version information."""
    from featuremap import __version__

    console.print(f"featuremap version {__version__}")


if __name__ == "__main__":
    app()
