import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from dotenv import load_dotenv

from xml_json_etl.errors import ConversionError
from xml_json_etl.etl.load.json_writer import dumps_json, select_root, write_json
from xml_json_etl.etl.transform.plurals import ListDetection
from xml_json_etl.logging_setup import configure_logging, get_logger
from xml_json_etl.paths import Paths
from xml_json_etl.settings import Settings, config_path_for_env

console = Console(stderr=True)

app = typer.Typer(help="Convert XML documents to JSON")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Plan actions without making changes."
    ),
):
    load_dotenv(override=False)
    ctx.ensure_object(dict)
    ctx.obj["DRY_RUN"] = dry_run
    cfg_path = config_path_for_env()
    settings = Settings.load_or_default(cfg_path)
    ctx.obj["SETTINGS"] = settings

    configure_logging(
        level=settings.logging.level,
        format_type=settings.logging.format,
        structured=settings.logging.structured,
    )

    if ctx.invoked_subcommand is None:
        console.print(
            f"[bold cyan]xml-json-etl[/] loaded config: {cfg_path}, dry_run={dry_run}"
        )
        console.print(settings)


def _settings(ctx: typer.Context, env: Optional[str]) -> Settings:
    if env is None:
        return ctx.obj["SETTINGS"]
    s = Settings.load(config_path_for_env(env))
    configure_logging(
        level=s.logging.level,
        format_type=s.logging.format,
        structured=s.logging.structured,
    )
    return s


def _apply_overrides(
    s: Settings,
    strategy: Optional[ListDetection],
    ignore_attribute: Optional[List[str]],
    root_key: Optional[str],
    indent: Optional[int],
) -> Settings:
    converter = s.converter.model_copy()
    if strategy is not None:
        converter.list_detection = strategy
    if ignore_attribute:
        converter.ignore_attributes = list(ignore_attribute)
    if root_key is not None:
        converter.root_key = root_key
    if indent is not None:
        converter.indent = indent
    return s.model_copy(update={"converter": converter})


@app.command()
def convert(
    ctx: typer.Context,
    input_dir: Optional[Path] = typer.Argument(
        None, help="Directory containing XML files (default: data/xml)"
    ),
    output_dir: Optional[Path] = typer.Argument(
        None, help="Directory to write JSON to (default: data/json)"
    ),
    strategy: Optional[ListDetection] = typer.Option(
        None, "--strategy", case_sensitive=False, help="Singular-child list detection"
    ),
    ignore_attribute: Optional[List[str]] = typer.Option(
        None, "--ignore-attribute", help="Attribute name to drop (repeatable)"
    ),
    root_key: Optional[str] = typer.Option(
        None, "--root-key", help="Write only the value under this root element"
    ),
    indent: Optional[int] = typer.Option(None, "--indent", help="JSON indent spaces"),
    keep_going: Optional[bool] = typer.Option(
        None, "--keep-going/--fail-fast", help="Continue past documents that fail"
    ),
    env: Optional[str] = typer.Option(None, help="Config environment"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run", help="Plan actions without making changes."
    ),
):
    """Convert every *.xml file in INPUT_DIR to OUTPUT_DIR/<name>.json."""
    from xml_json_etl.etl.api import convert_directory

    s = _apply_overrides(_settings(ctx, env), strategy, ignore_attribute, root_key, indent)
    log = get_logger("xml_json_etl.convert")

    src = input_dir or Path(s.batch.input_dir or Paths.xml())
    dst = output_dir or Path(s.batch.output_dir or Paths.json())
    if not src.is_dir():
        raise typer.BadParameter(f"Input directory not found: {src}")

    planned_only = bool(
        dry_run if dry_run is not None else ctx.obj.get("DRY_RUN") or s.runtime.dry_run
    )
    log.info(
        "Starting conversion",
        input_dir=str(src),
        output_dir=str(dst),
        list_detection=s.converter.list_detection.value,
        dry_run=planned_only,
    )
    try:
        report = convert_directory(
            src,
            dst,
            s.to_convert_config(),
            root_key=s.converter.root_key,
            indent=s.converter.indent,
            keep_going=s.batch.keep_going if keep_going is None else keep_going,
            dry_run=planned_only,
        )
    except ConversionError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=1)

    for _, out in report.converted:
        console.print(f"File written to: {out}")
    for inp, out in report.planned:
        console.print(f"would write: {inp} -> {out}")
    for inp, err in report.failed.items():
        console.print(f"[red]failed[/] {inp}: {err}")
    if not report.ok:
        raise typer.Exit(code=1)


@app.command("convert-file")
def convert_file_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Input XML file path"),
    output_path: Optional[Path] = typer.Argument(
        None, help="Optional output JSON file path (default: stdout)"
    ),
    strategy: Optional[ListDetection] = typer.Option(
        None, "--strategy", case_sensitive=False, help="Singular-child list detection"
    ),
    ignore_attribute: Optional[List[str]] = typer.Option(
        None, "--ignore-attribute", help="Attribute name to drop (repeatable)"
    ),
    root_key: Optional[str] = typer.Option(
        None, "--root-key", help="Write only the value under this root element"
    ),
    indent: Optional[int] = typer.Option(None, "--indent", help="JSON indent spaces"),
    env: Optional[str] = typer.Option(None, help="Config environment"),
):
    """Convert a single XML file."""
    from xml_json_etl.etl.api import convert_file

    s = _apply_overrides(_settings(ctx, env), strategy, ignore_attribute, root_key, indent)
    if not input_path.is_file():
        raise typer.BadParameter(f"Input file not found: {input_path}")

    try:
        value = select_root(convert_file(input_path, s.to_convert_config()), s.converter.root_key)
    except ConversionError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(code=1)

    if output_path is None:
        typer.echo(dumps_json(value, indent=s.converter.indent))
    else:
        write_json(value, output_path, indent=s.converter.indent)
        console.print(f"File written to: {output_path}")


@app.command("show-config")
def show_config(
    ctx: typer.Context,
    env: Optional[str] = typer.Option(None, help="Config environment"),
):
    """Print the effective settings."""
    typer.echo(_settings(ctx, env).model_dump_json(indent=2))


@app.command()
def bootstrap(ctx: typer.Context):
    """Create the default data directories."""
    for p in Paths.ensure_all():
        console.print(f"ensured: {p}")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(130)
