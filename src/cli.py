"""CLI interface for postcraft."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from postcraft.blog.merge import lock_keyword
from postcraft.blog.models import BlogPost, Severity
from postcraft.blog.renderer import OutputFormat
from postcraft.config import load_config, merge_cli_overrides
from postcraft.contracts import (
    GenerateHTMLRequest,
    ParseDocumentRequest,
    RenderResultKind,
)
from postcraft.errors import PipelineReport
from postcraft.service import generate_html, parse_document

app = typer.Typer(
    name="postcraft",
    help="Parse, validate and render structured blog post drafts.",
)

console = Console()
_stderr_console = Console(stderr=True)

EXIT_INVALID = 1
EXIT_UPLOAD_REQUIRED = 2


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from postcraft import __version__

        console.print(f"postcraft {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Postcraft - turn blog drafts into SEO-ready HTML."""
    pass


def _read_document(path: Path) -> str:
    if not path.exists():
        _stderr_console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(EXIT_INVALID)
    return path.read_text(encoding="utf-8")


def _parse_image_urls(pairs: list[str]) -> dict[str, str]:
    """Turn repeated ``keyword=url`` options into a mapping."""
    urls: dict[str, str] = {}
    for pair in pairs:
        keyword, sep, url = pair.partition("=")
        if not sep or not keyword.strip() or not url.strip():
            _stderr_console.print(
                f"[red]Error:[/red] Expected KEYWORD=URL, got: {pair!r}"
            )
            raise typer.Exit(EXIT_INVALID)
        urls[keyword.strip()] = url.strip()
    return urls


def _load_image_file(path: Path) -> dict[str, str]:
    """Read a YAML mapping of image keyword to hosted URL."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        _stderr_console.print(f"[red]Error:[/red] Cannot read image map {path}: {exc}")
        raise typer.Exit(EXIT_INVALID) from exc
    if not isinstance(data, dict):
        _stderr_console.print(f"[red]Error:[/red] Image map {path} must be a mapping")
        raise typer.Exit(EXIT_INVALID)
    return {str(k): str(v) for k, v in data.items() if v}


@app.command(name="parse")
def parse_cmd(
    file: Annotated[Path, typer.Argument(help="Draft document to parse.")],
    previous: Annotated[
        Optional[Path],
        typer.Option(
            "--previous",
            help="JSON file with a previously parsed post whose locked keyword is kept.",
        ),
    ] = None,
    lock: Annotated[
        bool,
        typer.Option(
            "--lock-keyword",
            help="Lock the primary keyword in the output so later parses keep it.",
        ),
    ] = False,
) -> None:
    """Parse a draft into structured blog post JSON."""
    document = _read_document(file)

    prior: BlogPost | None = None
    if previous is not None:
        try:
            prior = BlogPost.model_validate_json(previous.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            _stderr_console.print(f"[red]Error:[/red] Cannot load previous post: {exc}")
            raise typer.Exit(EXIT_INVALID) from exc

    response = parse_document(ParseDocumentRequest(document=document, previous=prior))
    if not response.success or response.data is None:
        _stderr_console.print(f"[red]Error:[/red] {response.message}")
        raise typer.Exit(EXIT_INVALID)

    post = lock_keyword(response.data) if lock else response.data
    print(json.dumps(post.model_dump(mode="json", by_alias=True), indent=2))


@app.command(name="validate")
def validate_cmd(
    file: Annotated[Path, typer.Argument(help="Draft document to validate.")],
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to a .postcraft.toml file."),
    ] = None,
    intro_min_words: Annotated[
        Optional[int],
        typer.Option("--intro-min-words", help="Recommended minimum introduction length."),
    ] = None,
) -> None:
    """Check a draft against the content rules."""
    document = _read_document(file)
    config = merge_cli_overrides(load_config(config_path), intro_min_words=intro_min_words)

    response = parse_document(
        ParseDocumentRequest(document=document), rules=config.to_validation_rules()
    )
    if not response.success or response.validation is None:
        _stderr_console.print(f"[red]Error:[/red] {response.message}")
        raise typer.Exit(EXIT_INVALID)

    validation = response.validation
    if validation.diagnostics:
        table = Table(title="Validation")
        table.add_column("Section")
        table.add_column("Severity")
        table.add_column("Message")
        for diag in validation.diagnostics:
            style = "red" if diag.severity == Severity.ERROR else "yellow"
            table.add_row(diag.section, f"[{style}]{diag.severity}[/{style}]", diag.message)
        console.print(table)

    if validation.completed_sections:
        console.print(f"Completed: {', '.join(validation.completed_sections)}")

    if not validation.is_valid:
        console.print(f"[red]Invalid:[/red] {len(validation.errors)} error(s)")
        raise typer.Exit(EXIT_INVALID)
    console.print(f"[green]Valid[/green] ({len(validation.warnings)} warning(s))")


@app.command(name="render")
def render_cmd(
    file: Annotated[Path, typer.Argument(help="Draft document to render.")],
    output_format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="fragment or document."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write HTML here instead of stdout."),
    ] = None,
    image_url: Annotated[
        Optional[list[str]],
        typer.Option(
            "--image-url",
            help="Hosted URL for an image keyword, as KEYWORD=URL. Repeatable.",
        ),
    ] = None,
    images_file: Annotated[
        Optional[Path],
        typer.Option("--images-file", help="YAML mapping of image keyword to URL."),
    ] = None,
    featured_image_url: Annotated[
        Optional[str],
        typer.Option("--featured-image-url", help="Hosted URL of the featured image."),
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Blog title for the document and schema."),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", help="Publication date (ISO 8601)."),
    ] = None,
    author: Annotated[
        Optional[str],
        typer.Option("--author", help="Author name for the byline and schema."),
    ] = None,
    no_schema: Annotated[
        bool,
        typer.Option("--no-schema", help="Omit JSON-LD structured data."),
    ] = False,
    no_images: Annotated[
        bool,
        typer.Option("--no-images", help="Leave every image as a placeholder."),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full response as JSON."),
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", help="Path to a .postcraft.toml file."),
    ] = None,
    intro_min_words: Annotated[
        Optional[int],
        typer.Option("--intro-min-words", help="Recommended minimum introduction length."),
    ] = None,
) -> None:
    """Render a draft to HTML.

    Exits with status 2 when images still need uploading; the draft HTML
    is written anyway, with placeholders where the images go.
    """
    document = _read_document(file)

    urls: dict[str, str] = {}
    if images_file is not None:
        urls.update(_load_image_file(images_file))
    urls.update(_parse_image_urls(image_url or []))

    config = merge_cli_overrides(
        load_config(config_path),
        output_format=output_format,
        featured_image_url=featured_image_url,
        title=title,
        author=author,
        include_schema=False if no_schema else None,
        include_images=False if no_images else None,
        intro_min_words=intro_min_words,
        image_urls=urls,
    )
    options = config.to_render_options(blog_date=date)

    report = PipelineReport()
    response = generate_html(
        GenerateHTMLRequest(document=document, options=options),
        rules=config.to_validation_rules(),
        report=report,
    )

    if not report.success:
        _stderr_console.print(f"[red]Error:[/red] {response.message}")
        _stderr_console.print(report.summary_text(), markup=False)
        raise typer.Exit(EXIT_INVALID)

    if as_json:
        print(json.dumps(response.model_dump(mode="json", by_alias=True), indent=2))
    elif output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(response.html or "", encoding="utf-8")
        _stderr_console.print(f"[green]Wrote[/green] {output}")
    else:
        print(response.html or "")

    if report.errors:
        _stderr_console.print(report.summary_text(), markup=False)

    if response.kind == RenderResultKind.IMAGE_UPLOAD_REQUIRED:
        _stderr_console.print("[yellow]Images need uploading before publishing:[/yellow]")
        for ref in response.images:
            _stderr_console.print(f"  {ref.keyword} ({ref.section_id})")
        raise typer.Exit(EXIT_UPLOAD_REQUIRED)


if __name__ == "__main__":
    app()
