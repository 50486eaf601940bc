"""CLI entry point: python -m plotscript render|inspect|figure ..."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from plotscript.template import TemplateError

logger = logging.getLogger(__name__)


def _read_template(path: str) -> str:
    logger.info("Reading template %s", path)
    return Path(path).read_text(encoding="utf-8")


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        Path(output).write_text(text, encoding="utf-8")
        logger.info("Wrote %d chars to %s", len(text), output)
    else:
        sys.stdout.write(text)


def cmd_render(args: argparse.Namespace) -> None:
    from plotscript.config import load_data, parse_assignments
    from plotscript.template import Data, compile_template

    # Build render data: YAML file <- --set pairs
    values: dict[str, str] = {}
    if args.data:
        values.update(load_data(args.data))
    values.update(parse_assignments(args.set))

    template = compile_template(_read_template(args.template))
    missing = [name for name in template.variables() if name not in values]
    if missing:
        logger.warning("No value for %s; placeholders left as-is", ", ".join(missing))

    _write_output(template.render_string(Data(values)), args.output)


def cmd_inspect(args: argparse.Namespace) -> None:
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table

    from plotscript.template import ChunkKind, compile_template

    template = compile_template(_read_template(args.template))
    console = Console()

    table = Table(
        title=f"Chunks in {escape(args.template)}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Offset", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Text")

    for index, chunk in enumerate(template.chunks):
        text = template.text_of(chunk)
        if chunk.kind is ChunkKind.VARIABLE:
            kind = "[bold cyan]variable[/bold cyan]"
        else:
            kind = "literal"
        # Chunk text is user content, not rich markup
        table.add_row(
            str(index),
            kind,
            str(chunk.span.offset),
            str(chunk.span.length),
            escape(repr(text)),
        )

    console.print(table)
    variables = template.variables()
    if variables:
        console.print(f"Variables: {escape(', '.join(variables))}")


def cmd_figure(args: argparse.Namespace) -> None:
    from plotscript.postscript import DEFAULT_TEMPLATE, Document, sample_figure
    from plotscript.template import compile_template

    figure = sample_figure()
    if args.format == "display":
        _write_output(f"{figure}\n", args.output)
        return

    source = _read_template(args.template) if args.template else DEFAULT_TEMPLATE
    document = Document(compile_template(source))
    document.embed(figure)
    _write_output(str(document), args.output)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="plotscript",
        description="Render figures and {{name}} templates",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # -- render --
    p_render = subparsers.add_parser("render", help="Render a template file")
    p_render.add_argument("template", help="Path to the template file")
    p_render.add_argument("--data", default=None,
                          help="Path to a YAML mapping of variable values")
    p_render.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                          help="Set a variable (repeatable, overrides --data)")
    p_render.add_argument("--output", "-o", default=None,
                          help="Write to this file instead of stdout")
    p_render.set_defaults(func=cmd_render)

    # -- inspect --
    p_inspect = subparsers.add_parser("inspect", help="Show the compiled chunks of a template")
    p_inspect.add_argument("template", help="Path to the template file")
    p_inspect.set_defaults(func=cmd_inspect)

    # -- figure --
    p_figure = subparsers.add_parser("figure", help="Render the sample figure")
    p_figure.add_argument("--template", default=None,
                          help="Template with a {{figure}} placeholder (default: built-in PostScript)")
    p_figure.add_argument("--format", default="postscript", choices=["postscript", "display"])
    p_figure.add_argument("--output", "-o", default=None,
                          help="Write to this file instead of stdout")
    p_figure.set_defaults(func=cmd_figure)

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        args.func(args)
    except (TemplateError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
