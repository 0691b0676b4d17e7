from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from fieldreport.adapters.factory import build_fetcher, build_store
from fieldreport.config import get_settings
from fieldreport.errors import FieldReportError
from fieldreport.report.forms import list_forms
from fieldreport.report.service import generate_report
from fieldreport.server import configure_logging, run_server


def _print_json(payload: dict | list) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def cmd_serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.host:
        settings.server_host = args.host
    if args.port:
        settings.server_port = args.port
    run_server(settings)
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        report = generate_report(
            args.form,
            args.record_id,
            store=build_store(settings),
            fetcher=build_fetcher(settings),
            settings=settings,
        )
    except (FieldReportError, ValueError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 1

    out_path = Path(args.out) if args.out else Path.cwd() / report.filename
    if out_path.is_dir():
        out_path = out_path / report.filename
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(report.content)

    _print_json(
        {
            'form': report.form_slug,
            'record_id': report.record_id,
            'path': str(out_path),
            'page_count': report.page_count,
            'size_bytes': report.size_bytes,
            'images_embedded': report.images_embedded,
            'images_skipped': report.images_skipped,
        }
    )
    return 0


def cmd_forms(args: argparse.Namespace) -> int:
    _print_json([form.model_dump(mode='json') for form in list_forms()])
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Field service report PDF generator')
    sub = parser.add_subparsers(dest='command', required=True)

    serve = sub.add_parser('serve', help='Run the HTTP report server')
    serve.add_argument('--host', required=False, help='Bind address override')
    serve.add_argument('--port', type=int, required=False, help='Port override')
    serve.set_defaults(func=cmd_serve)

    render = sub.add_parser('render', help='Render one report to a PDF file')
    render.add_argument('--form', required=True, help='Form slug, e.g. deutz-commissioning')
    render.add_argument('--record-id', required=True, help='Record ID')
    render.add_argument('--out', required=False, help='Output file or directory')
    render.set_defaults(func=cmd_render)

    forms = sub.add_parser('forms', help='List registered report forms')
    forms.set_defaults(func=cmd_forms)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == '__main__':
    raise SystemExit(main())
