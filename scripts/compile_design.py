"""
Command-line access to the invoice designer core.

    generate  feature flags -> design JSON
    compile   design JSON -> header.html, body.html, footer.html, styles.css
    preview   design JSON -> wireframe PNG
    fields    list the bindable data fields
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import invoice_designer
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from invoice_designer.common.field_catalog import DATA_FIELD_CATALOG
from invoice_designer.compiler import compile_design
from invoice_designer.core.models.page import PAGE_PRESETS
from invoice_designer.core.schemas.validator import DesignFormatError
from invoice_designer.core.utils.serialization import load_design_json, save_design_json
from invoice_designer.generator import FeatureFlags, generate_for_format
from invoice_designer.preview import save_wireframe

logger = logging.getLogger("compile_design")


def cmd_generate(args: argparse.Namespace) -> int:
    if args.all:
        flags = FeatureFlags.all_enabled(args.format)
    else:
        enabled = {name: True for name in args.flag or []}
        flags = FeatureFlags(template_format=args.format, **enabled)
    design = generate_for_format(flags)
    save_design_json(design, args.output)
    print(f"Wrote {len(design.elements)} elements to {args.output}")
    return 0


def cmd_compile(args: argparse.Namespace) -> int:
    design = load_design_json(args.design, strict=args.strict)
    compiled = compile_design(design)
    out_dir: Path = args.output_dir
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "header.html").write_text(compiled.header_html, encoding="utf-8")
    (out_dir / "body.html").write_text(compiled.body_html, encoding="utf-8")
    (out_dir / "footer.html").write_text(compiled.footer_html, encoding="utf-8")
    (out_dir / "styles.css").write_text(compiled.styles_css, encoding="utf-8")
    print(f"Compiled {args.design.name} ({compiled.mode} layout) into {out_dir}")
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    design = load_design_json(args.design)
    path = save_wireframe(design, args.output, scale=args.scale)
    print(f"Wrote wireframe to {path}")
    return 0


def cmd_fields(args: argparse.Namespace) -> int:
    for category in DATA_FIELD_CATALOG:
        print(f"{category.name}:")
        for f in category.fields:
            print(f"  {{{{{f.key}}}}}  {f.label}  (e.g. {f.example})")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Invoice template designer tools")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a default design from feature flags")
    gen.add_argument("--format", default="a4_portrait", choices=sorted(PAGE_PRESETS), help="Page preset")
    gen.add_argument(
        "--flag", action="append", choices=FeatureFlags.flag_names(),
        help="Enable a feature flag (repeatable)",
    )
    gen.add_argument("--all", action="store_true", help="Enable every feature flag")
    gen.add_argument("--output", "-o", type=Path, required=True, help="Design JSON to write")
    gen.set_defaults(func=cmd_generate)

    comp = sub.add_parser("compile", help="Compile a design JSON file")
    comp.add_argument("design", type=Path, help="Design JSON file")
    comp.add_argument("--output-dir", "-o", type=Path, default=Path("compiled"), help="Output directory")
    comp.add_argument("--strict", action="store_true", help="Validate against the full JSON schema")
    comp.set_defaults(func=cmd_compile)

    prev = sub.add_parser("preview", help="Render a wireframe PNG of a design")
    prev.add_argument("design", type=Path, help="Design JSON file")
    prev.add_argument("--output", "-o", type=Path, required=True, help="PNG to write")
    prev.add_argument("--scale", type=float, default=3.7795, help="Pixels per mm")
    prev.set_defaults(func=cmd_preview)

    fields = sub.add_parser("fields", help="List bindable data fields")
    fields.set_defaults(func=cmd_fields)

    args = parser.parse_args()

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except DesignFormatError as e:
        logger.error(f"Invalid design: {e}")
        return 2
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
