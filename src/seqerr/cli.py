"""Command-line interface."""

from typing import Optional
import logging

import typer
from rich.console import Console
from rich.table import Table

from seqerr.core.errors import SeqErrError
from seqerr.core.states import StateSpace
from seqerr.core.error_models import ErrorModel

app = typer.Typer(help="seqerr: sequencing and genotype error models for tip likelihoods")
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(error: Exception) -> None:
    console.print(f"[red]Error: {error}[/red]")
    raise typer.Exit(code=1)


def _alphabet_for(model: ErrorModel, alphabet: Optional[str]) -> Optional[StateSpace]:
    from seqerr.states import GenotypeStateSpace, NucleotideStateSpace

    if alphabet is None:
        if model.states == 10:
            alphabet = "gt"
        elif model.states == 4:
            alphabet = "nt"
        else:
            return None

    spaces = {"nt": NucleotideStateSpace, "gt": GenotypeStateSpace}
    if alphabet not in spaces:
        raise typer.BadParameter(f"alphabet must be one of {', '.join(spaces)}")
    space = spaces[alphabet]()
    if len(space) != model.states:
        raise typer.BadParameter(
            f"alphabet '{alphabet}' has {len(space)} states but model has {model.states}"
        )
    return space


def _observed_mask(symbol: str, space: Optional[StateSpace]) -> int:
    if symbol.isdigit():
        return int(symbol)
    if space is None:
        raise typer.BadParameter(
            "symbols need a 4- or 10-state alphabet; pass an integer mask instead"
        )
    return space.encode(symbol)


@app.command()
def version():
    """Show seqerr version."""
    from seqerr import __version__
    console.print(f"seqerr version {__version__}")


@app.command()
def models():
    """List available error models and their parameters."""
    from seqerr.core.registry import ERROR_MODELS, DEFAULT_STATES

    table = Table(title="Error Models")
    table.add_column("Name", style="cyan")
    table.add_column("States", style="green")
    table.add_column("Parameter")
    table.add_column("Id")
    table.add_column("Default")
    table.add_column("Bounds")

    for name, model_cls in ERROR_MODELS.items():
        for i, spec in enumerate(model_cls.param_specs):
            table.add_row(
                name if i == 0 else "",
                str(DEFAULT_STATES[name]) if i == 0 else "",
                spec.name,
                str(spec.param_id),
                f"{spec.default:g}",
                f"[{spec.lower:g}, {spec.upper:g}]",
            )

    console.print(table)


@app.command()
def probs(
    model_string: str = typer.Argument(..., help="Model string, e.g. 'P17{0.01/0.05}'"),
    symbol: str = typer.Argument(..., help="Observed symbol (e.g. 'A', 'M', 'AC') or integer mask"),
    states: Optional[int] = typer.Option(None, "--states", "-n", help="Number of states"),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", "-a", help="Symbol alphabet: nt or gt"),
):
    """Show the tip likelihood vector for one observed symbol."""
    from seqerr.core.registry import parse_error_model
    from seqerr.core.reporting import format_error_model

    try:
        model = parse_error_model(model_string, states=states)
        space = _alphabet_for(model, alphabet)
        mask = _observed_mask(symbol, space)
        clv = model.compute_state_probs(mask)
    except SeqErrError as e:
        _fail(e)

    logger.debug("Observed %s encoded as mask %d", symbol, mask)

    table = Table(title=format_error_model(model))
    table.add_column("State", style="cyan")
    table.add_column("P(obs | state)", style="green", justify="right")
    for k, value in enumerate(clv):
        label = str(space[k]) if space is not None else str(k)
        table.add_row(label, f"{value:.6f}")

    console.print(table)


@app.command()
def distances():
    """Show the genotype mutation distance table."""
    from seqerr.states.genotypes import GENOTYPE_NAMES, MUTATION_DISTANCE

    table = Table(title="Genotype Mutation Distances")
    table.add_column("", style="cyan")
    for name in GENOTYPE_NAMES:
        table.add_column(name, justify="right")

    for name, row in zip(GENOTYPE_NAMES, MUTATION_DISTANCE):
        table.add_row(name, *(str(int(v)) for v in row))

    console.print(table)


@app.command()
def report(
    model_string: str = typer.Argument(..., help="Model string, e.g. 'PT19{0.01/0.05}'"),
    states: Optional[int] = typer.Option(None, "--states", "-n", help="Number of states"),
):
    """Print the one-line model summary."""
    from seqerr.core.registry import parse_error_model
    from seqerr.core.reporting import format_error_model

    try:
        model = parse_error_model(model_string, states=states)
    except SeqErrError as e:
        _fail(e)

    console.print(format_error_model(model), highlight=False)


if __name__ == "__main__":
    app()
