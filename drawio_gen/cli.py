#!/usr/bin/env python3
"""drawio-gen CLI - compile JSON graph descriptions into draw.io diagrams."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import HOST, PORT
from .logging_config import configure_logging
from .analysis import summarize_model
from .pipeline import compile_diagram_sync
from .schema import description_json_schema, validate_description
from .shapes import list_categories, list_shapes
from .themes import list_themes
from .validation import validate_drawio_xml

logger = logging.getLogger(__name__)

FORMAT_SVG = "drawio-svg"
FORMAT_DRAWIO = "drawio"

EXAMPLES = """examples:
  echo '{"nodes":[{"id":"a","label":"Hello"}]}' | drawio-gen generate -o hello.drawio.svg
  drawio-gen generate input.json -o diagram.drawio.svg
  drawio-gen generate input.json --stdout --format drawio
  drawio-gen shapes flowchart
  drawio-gen themes
"""


def _json_out(data):
    print(json.dumps(data))


def _errors_out(title, errors):
    print(title, file=sys.stderr)
    for err in errors:
        print(f"  - {err}", file=sys.stderr)


def _read_input(path: Optional[str]) -> str:
    if path and path != "-":
        return Path(path).read_text(encoding="utf-8")
    if sys.stdin.isatty():
        raise ValueError(
            "No input file provided and stdin is a terminal.\n"
            "Usage: drawio-gen generate <input.json> -o <output>\n"
            "   or: echo '{\"nodes\":[...]}' | drawio-gen generate -o <output>"
        )
    return sys.stdin.read()


def resolve_format(format_flag: Optional[str], output: Optional[str]) -> str:
    """Output format from the -o suffix, else the --format flag."""
    if output and output.endswith(".drawio.svg"):
        return FORMAT_SVG
    if output and output.endswith(".drawio"):
        return FORMAT_DRAWIO
    if format_flag == FORMAT_DRAWIO:
        return FORMAT_DRAWIO
    return FORMAT_SVG


# ── Generate ─────────────────────────────────────────────────────────────────

def cmd_generate(args) -> int:
    try:
        data = json.loads(_read_input(args.input))
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        if args.json:
            _json_out({"error": True, "message": str(e)})
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1

    checked = validate_description(data)
    if not checked.ok:
        if args.json:
            _json_out({"error": True, "errors": checked.errors})
        else:
            _errors_out("Validation errors:", checked.errors)
        return 1

    result = compile_diagram_sync(checked.diagram)
    if not result.validation.valid:
        _errors_out("Generated XML has validation errors (this is a bug):", result.validation.errors)
        return 2

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    fmt = resolve_format(args.format, args.output)
    document = result.output(fmt)

    if args.stdout or not args.output:
        sys.stdout.write(document)
        return 0

    Path(args.output).write_text(document, encoding="utf-8")
    if args.json:
        _json_out({
            "success": True,
            "output": args.output,
            "format": fmt,
            "nodes": len(result.model.nodes),
            "edges": len(result.model.edges),
            "warnings": result.warnings,
            "summary": summarize_model(result.model).to_dict(),
        })
    else:
        print(f"Written to {args.output} ({len(result.model.nodes)} nodes, {len(result.model.edges)} edges)")
    return 0


# ── Validate ─────────────────────────────────────────────────────────────────

def cmd_validate(args) -> int:
    try:
        xml = Path(args.input).read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = validate_drawio_xml(xml)
    if args.json:
        _json_out(result.to_dict())
    else:
        if result.valid:
            print("Valid draw.io XML")
        else:
            _errors_out("Validation errors:", result.errors)
        if result.warnings:
            _errors_out("Warnings:", result.warnings)
    return 0 if result.valid else 1


# ── Reference ────────────────────────────────────────────────────────────────

def cmd_shapes(args) -> int:
    if not args.category:
        categories = list_categories()
        if args.json:
            _json_out({"categories": categories})
        else:
            print("Available shape categories:")
            for category in categories:
                print(f"  {category} ({len(list_shapes(category))} shapes)")
        return 0

    shapes = list_shapes(args.category)
    if not shapes:
        print(f'Unknown category "{args.category}". Available: {", ".join(list_categories())}', file=sys.stderr)
        return 1
    if args.json:
        _json_out({"category": args.category, "shapes": shapes})
    else:
        print(f'Shapes in "{args.category}":')
        for name in shapes:
            print(f"  {name}")
    return 0


def cmd_themes(args) -> int:
    themes = list_themes()
    if args.json:
        _json_out({"themes": [t.to_dict() for t in themes]})
    else:
        print("Available themes:")
        for theme in themes:
            print(f"  {theme.name} (background: {theme.background})")
    return 0


def cmd_schema(args) -> int:
    print(json.dumps(description_json_schema(), indent=2))
    return 0


# ── Service ──────────────────────────────────────────────────────────────────

def cmd_serve(args) -> int:
    import uvicorn

    uvicorn.run("drawio_gen.api:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drawio-gen",
        description="Generate draw.io diagrams from JSON graph descriptions.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("generate", help="Compile a JSON description (file or stdin)")
    p.add_argument("input", nargs="?", default=None)
    p.add_argument("-o", "--output", default=None, help="Output path (.drawio.svg or .drawio)")
    p.add_argument("--stdout", action="store_true", help="Write the document to stdout")
    p.add_argument("-f", "--format", choices=[FORMAT_SVG, FORMAT_DRAWIO], default=FORMAT_SVG)
    p.add_argument("--json", action="store_true", help="Machine-readable result")

    p = sub.add_parser("validate", help="Check an existing .drawio file")
    p.add_argument("input")
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("shapes", help="List shape categories or the shapes in one")
    p.add_argument("category", nargs="?", default=None)
    p.add_argument("--json", action="store_true")

    p = sub.add_parser("themes", help="List built-in themes")
    p.add_argument("--json", action="store_true")

    sub.add_parser("schema", help="Print the JSON schema of the input format")

    p = sub.add_parser("serve", help="Run the HTTP service")
    p.add_argument("--host", default=HOST)
    p.add_argument("--port", type=int, default=PORT)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or ("INFO" if args.command == "serve" else "WARNING"))

    cmd_map = {
        "generate": cmd_generate,
        "validate": cmd_validate,
        "shapes": cmd_shapes,
        "themes": cmd_themes,
        "schema": cmd_schema,
        "serve": cmd_serve,
    }
    return cmd_map[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
