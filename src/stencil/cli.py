"""Command-line interface for stencil."""

import logging
from collections.abc import Callable
from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from stencil import __version__
from stencil.config import StencilConfig, load_config
from stencil.console import console
from stencil.matching import TemplateMatchInfo
from stencil.resolution import (
    InvalidParameterKind,
    ResolutionStatus,
    TemplateGroup,
    TemplateRequest,
    TemplateResolutionResult,
    perform_list_query,
    resolve_template,
)
from stencil.templates import (
    TemplateFileError,
    TemplateInfo,
    get_all_templates,
    load_templates_file,
)

logger = logging.getLogger(__name__)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"stencil [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def _filter_options(func: Callable[..., None]) -> Callable[..., None]:
    """Request criteria shared by `resolve` and `list`."""
    options = [
        click.argument("name", required=False),
        click.option("--language", "-l", help="Template language, e.g. C#."),
        click.option("--type", "template_type", help="Template type, e.g. project."),
        click.option("--baseline", help="Baseline configuration name."),
        click.option("--tag", "classification", help="Template classification."),
        click.option("--author", help="Template author."),
        click.option(
            "--param",
            "-p",
            "params",
            multiple=True,
            help="Template parameter as key=value (repeatable).",
        ),
        click.option(
            "--templates",
            "templates_file",
            type=click.Path(path_type=Path, dir_okay=False),
            help="Template corpus file (overrides configured corpus).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load_corpus(
    config: StencilConfig, templates_file: Path | None
) -> list[TemplateInfo]:
    """Load templates from an explicit file, the configured file, or the defaults."""
    path = templates_file
    if path is None and config.templates_file:
        path = Path(config.templates_file).expanduser()

    try:
        if path is not None:
            return load_templates_file(path)
        return get_all_templates()
    except TemplateFileError as e:
        raise click.ClickException(str(e)) from e


def _build_request(
    name: str | None,
    language: str | None,
    template_type: str | None,
    baseline: str | None,
    classification: str | None,
    author: str | None,
    params: tuple[str, ...],
) -> TemplateRequest:
    return TemplateRequest.from_pairs(
        params,
        name=name,
        language=language,
        template_type=template_type,
        baseline=baseline,
        classification=classification,
        author=author,
    )


def _describe(template: TemplateMatchInfo) -> str:
    info = template.info
    language = f" \\[{escape(info.language)}]" if info.language else ""
    return (
        f"[cyan]{escape(info.identity)}[/cyan]{language} "
        f"[dim](precedence {info.precedence})[/dim]"
    )


def _print_mismatch_reasons(result: TemplateResolutionResult) -> None:
    reasons = [
        (result.has_language_mismatch, "language"),
        (result.has_type_mismatch, "type"),
        (result.has_baseline_mismatch, "baseline"),
        (result.has_classification_mismatch, "tag"),
        (result.has_author_mismatch, "author"),
    ]
    names = [label for flag, label in reasons if flag]
    if names:
        joined = ", ".join(names)
        console.print(f"[dim]Some templates did not match on: {joined}[/dim]")


def _print_groups(groups: tuple[TemplateGroup, ...]) -> None:
    for group in groups:
        identity = escape(group.group_identity)
        short_name = escape(group.short_name or "-")
        console.print(f"  [cyan]{identity}[/cyan] ({short_name})")


def _print_invalid_parameters(
    group: TemplateGroup | None, result: TemplateResolutionResult
) -> None:
    for item in result.invalid_parameters:
        name = escape(item.name)
        value = escape(item.value or "")
        if item.kind is InvalidParameterKind.INVALID_NAME:
            console.print(f"  [red]✗[/red] Unknown parameter '{name}'")
        elif item.kind is InvalidParameterKind.INVALID_VALUE:
            console.print(
                f"  [red]✗[/red] '{value}' is not a valid value for '{name}'"
            )
            if group is not None:
                valid = group.get_valid_values_for_choice_parameter(item.name)
                if valid:
                    console.print(f"    [dim]Valid values: {', '.join(valid)}[/dim]")
        else:
            console.print(
                f"  [yellow]?[/yellow] '{value}' is ambiguous for '{name}'"
            )
            if group is not None and item.value:
                candidates = group.get_ambiguous_values_for_choice_parameter(
                    item.name, item.value
                )
                if candidates:
                    console.print(f"    [dim]Could be: {', '.join(candidates)}[/dim]")


def _print_result(result: TemplateResolutionResult) -> None:
    status = result.status
    group = result.unambiguous_group

    if status is ResolutionStatus.SINGLE_MATCH and result.singular_invokable_match:
        console.print(
            f"[green]✓[/green] {_describe(result.singular_invokable_match)}"
        )
        parameters = result.singular_invokable_match.valid_template_parameters
        for key, value in parameters.items():
            console.print(f"    {key} = {value}")
        return

    if status is ResolutionStatus.NO_MATCH:
        console.print("[yellow]No templates matched the request.[/yellow]")
        _print_mismatch_reasons(result)
        return

    if status is ResolutionStatus.AMBIGUOUS_TEMPLATE_GROUP_CHOICE:
        console.print("[yellow]Several templates match, be more specific:[/yellow]")
        _print_groups(result.groups)
        return

    if status is ResolutionStatus.AMBIGUOUS_PRECEDENCE and group is not None:
        console.print(
            f"[yellow]Several templates of '{escape(group.group_identity)}' have the "
            "same precedence:[/yellow]"
        )
        for template in group.get_highest_precedence_invokable_templates():
            console.print(f"  {_describe(template)}")
        return

    if status is ResolutionStatus.AMBIGUOUS_CHOICE:
        console.print("[yellow]A parameter value is ambiguous:[/yellow]")
    else:
        console.print("[red]Invalid parameters for the matched template:[/red]")
    _print_invalid_parameters(group, result)


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Stencil - pick the template a request refers to."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    if ctx.invoked_subcommand is None:
        console.print("[bold]stencil[/bold] - template selection")
        console.print("\nRun [cyan]stencil --help[/cyan] for available commands.")


@main.command()
@_filter_options
def resolve(
    name: str | None,
    language: str | None,
    template_type: str | None,
    baseline: str | None,
    classification: str | None,
    author: str | None,
    params: tuple[str, ...],
    templates_file: Path | None,
) -> None:
    """Resolve a request to the single template to invoke.

    Exits with status 0 when exactly one template was chosen and 1 otherwise.
    """
    config = load_config()
    templates = _load_corpus(config, templates_file)
    request = _build_request(
        name, language, template_type, baseline, classification, author, params
    )

    result = resolve_template(templates, request, config.default_language)
    logger.debug("Resolution status: %s", result.status.value)
    _print_result(result)

    if not result.is_success:
        raise SystemExit(1)


@main.command("list")
@_filter_options
def list_templates(
    name: str | None,
    language: str | None,
    template_type: str | None,
    baseline: str | None,
    classification: str | None,
    author: str | None,
    params: tuple[str, ...],
    templates_file: Path | None,
) -> None:
    """List templates matching the request."""
    config = load_config()
    templates = _load_corpus(config, templates_file)
    request = _build_request(
        name, language, template_type, baseline, classification, author, params
    )

    result = perform_list_query(templates, request, config.default_language)
    matches = result.exact_matched_templates
    if not matches:
        console.print("[yellow]No templates found.[/yellow]")
        if result.has_partial_matches:
            partial = ", ".join(
                t.info.identity for t in result.partially_matched_templates
            )
            console.print(f"[dim]Partially matching: {partial}[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Template", style="cyan", min_width=14)
    table.add_column("Short name")
    table.add_column("Language", style="dim")
    table.add_column("Type", style="dim")
    table.add_column("Tags", ratio=1)
    for template in matches:
        info = template.info
        table.add_row(
            info.name,
            ", ".join(info.short_names),
            info.language or "",
            info.template_type or "",
            "/".join(info.classifications),
        )
    console.print(table)
