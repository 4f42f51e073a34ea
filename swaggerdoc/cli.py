"""Command line entry point: dump or serve a merged Swagger descriptor."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from .app import build_docs_app
from .config import SwaggerConfig
from .generator import generate
from .utils.config import (
    debug_enabled,
    default_base_path,
    default_swagger_json,
    default_swagger_url,
    default_ui_dir,
)
from .utils.errors import SwaggerDocError
from .utils.logging import configure_root

logger = logging.getLogger("swaggerdoc.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swaggerdoc",
        description="Merge @swagger comments into a Swagger descriptor",
    )
    parser.add_argument("--debug", action="store_true", default=debug_enabled(), help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("apis", nargs="*", help="Documented .js, .coffee or .yml files, in merge order")
    common.add_argument(
        "--base-path",
        default=default_base_path(),
        help="Swagger basePath (env: SWAGGERDOC_BASE_PATH)",
    )
    common.add_argument("--title", default=None, help="info.title of the descriptor")
    common.add_argument("--api-version", default=None, help="info.version of the descriptor")
    common.add_argument("--swagger-version", default=None, help="Swagger version, default 2.0")

    commands = parser.add_subparsers(dest="command", required=True)

    dump = commands.add_parser("dump", parents=[common], help="Print the merged descriptor as JSON")
    dump.add_argument("-o", "--output", type=Path, default=None, help="Write to a file instead of stdout")

    serve = commands.add_parser("serve", parents=[common], help="Serve the descriptor and Swagger UI")
    serve.add_argument(
        "--ui",
        default=default_ui_dir(),
        help="Directory with Swagger UI assets (env: SWAGGERDOC_UI_DIR)",
    )
    serve.add_argument("--swagger-url", default=default_swagger_url(), help="URL prefix of the UI")
    serve.add_argument(
        "--swagger-json",
        default=default_swagger_json(),
        help="Descriptor path appended to the base path",
    )
    serve.add_argument("--host", default="127.0.0.1", help="Bind host, default: 127.0.0.1")
    serve.add_argument("--port", type=int, default=8000, help="Bind port, default: 8000")
    return parser


def _config(args: argparse.Namespace, **extra: object) -> SwaggerConfig:
    config = SwaggerConfig(
        base_path=args.base_path,
        apis=list(args.apis),
        info={"title": args.title} if args.title else None,
        api_version=args.api_version,
        **extra,
    )
    if args.swagger_version:
        config.swagger_version = args.swagger_version
    return config


def _dump(args: argparse.Namespace) -> int:
    # The UI directory is never served here; generation only requires it to be set.
    registry = generate(_config(args, swagger_ui="."))
    text = json.dumps(registry.build(), indent=2) + "\n"
    if args.output is None:
        sys.stdout.write(text)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text, encoding="utf-8")
        logger.info("Descriptor written to %s", args.output)
    return 0


def _serve(args: argparse.Namespace) -> int:
    config = _config(
        args,
        swagger_ui=args.ui,
        swagger_url=args.swagger_url,
        swagger_json=args.swagger_json,
    )
    app = build_docs_app(config, debug=args.debug)
    logger.info(
        "Swagger UI on http://%s:%s%s/", args.host, args.port, config.swagger_url.rstrip("/")
    )
    uvicorn.run(app, host=args.host, port=int(args.port))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_root(logging.DEBUG if args.debug else logging.INFO)
    try:
        if args.command == "dump":
            return _dump(args)
        return _serve(args)
    except SwaggerDocError as exc:
        logger.error("%s: %s", exc.code.value, exc)
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
