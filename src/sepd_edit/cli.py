"""SEPD Commentary - list and edit player commentary name mappings."""
from __future__ import annotations

import json
from functools import wraps
from pathlib import Path

import click

from sepd_core.errors import CommentaryError
from sepd_core.ids import parse_ref
from sepd_core.protocol import DEFAULT_LAYOUT, LAYOUTS, resolve_layout

from .codec import CommentaryFile
from .export import write_parquet

FILE_ARG = click.Path(exists=True, dir_okay=False, path_type=Path)


def layout_options(fn):
    @click.option(
        "--layout",
        "layout_name",
        type=click.Choice(sorted(LAYOUTS), case_sensitive=False),
        default=DEFAULT_LAYOUT,
        envvar="SEPD_LAYOUT",
        show_default=True,
        help="Game edition preset",
    )
    @click.option(
        "--layout-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="JSON layout descriptor (overrides --layout)",
    )
    @wraps(fn)
    def wrapper(layout_name: str, layout_file: Path | None, **kwargs):
        try:
            layout = resolve_layout(layout_name, layout_file)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--layout-file")
        return fn(layout=layout, **kwargs)

    return wrapper


def fail_closed(fn):
    # Single-line reason, no stack trace.
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except (CommentaryError, ValueError, OSError) as e:
            click.echo(f"FATAL: {e}", err=True)
            raise SystemExit(1)

    return wrapper


def _save(doc: CommentaryFile, src: Path, out: Path | None) -> None:
    target = out or src
    doc.write(target)
    click.echo(f"PASS: {len(doc)} records written to {target}")


@click.group()
def main():
    pass


@main.command("list")
@click.argument("path", type=FILE_ARG)
@click.option("--json", "as_json", is_flag=True, help="Emit a JSON array")
@layout_options
@fail_closed
def list_cmd(path: Path, as_json: bool, layout):
    doc = CommentaryFile.read(path, layout)
    if as_json:
        rows = [{"key": r.key, "display_name": r.display_name} for r in doc.records]
        click.echo(json.dumps(rows, ensure_ascii=False))
        return
    for rec in doc.records:
        click.echo(f"{rec.key}\t{rec.display_name}")
    click.echo(f"Records: {len(doc)}")


@main.command("add")
@click.argument("path", type=FILE_ARG)
@click.argument("commentary_id", type=int)
@click.argument("name")
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@layout_options
@fail_closed
def add_cmd(path: Path, commentary_id: int, name: str, out: Path | None, layout):
    doc = CommentaryFile.read(path, layout)
    rec = doc.create(commentary_id, name)
    click.echo(f"Added {rec.key} -> {rec.display_name}")
    _save(doc, path, out)


@main.command("rename")
@click.argument("path", type=FILE_ARG)
@click.argument("ref")
@click.argument("name")
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@layout_options
@fail_closed
def rename_cmd(path: Path, ref: str, name: str, out: Path | None, layout):
    doc = CommentaryFile.read(path, layout)
    rec = doc.update(parse_ref(ref), name)
    click.echo(f"Renamed {rec.key} -> {rec.display_name}")
    _save(doc, path, out)


@main.command("remove")
@click.argument("path", type=FILE_ARG)
@click.argument("ref")
@click.option("-o", "--out", type=click.Path(dir_okay=False, path_type=Path), default=None)
@layout_options
@fail_closed
def remove_cmd(path: Path, ref: str, out: Path | None, layout):
    doc = CommentaryFile.read(path, layout)
    rec = doc.delete(parse_ref(ref))
    click.echo(f"Removed {rec.key} ({rec.display_name})")
    _save(doc, path, out)


@main.command("export")
@click.argument("path", type=FILE_ARG)
@click.argument("out", type=click.Path(dir_okay=False, path_type=Path))
@layout_options
@fail_closed
def export_cmd(path: Path, out: Path, layout):
    """Write the record list to Parquet in on-disk order."""
    doc = CommentaryFile.read(path, layout)
    n = write_parquet(doc.records, out)
    click.echo(f"PASS: {n} records exported to {out}")


if __name__ == "__main__":
    main()
