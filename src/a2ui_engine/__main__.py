"""
Replay tool.

Feeds a JSONL transcript of producer output through the pipeline and prints
the stream report plus the final surface snapshot:

    python -m a2ui_engine replay transcript.jsonl --surface main
    python -m a2ui_engine catalog
"""

import argparse
import asyncio
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Sequence

from .catalog.registry import CatalogRegistry
from .core.config import get_settings
from .core.container import create_container
from .core.errors import IdleTimeout, RootNotDefined
from .core.json import safe_json_dumps
from .core.logging_config import configure_logging, get_logger
from .monitoring.metrics import MetricsCollector
from .pipeline import StreamProcessor
from .protocol.validator import EnvelopeValidator
from .surface.state import Surface

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="a2ui_engine", description="A2UI protocol engine tools")
    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser("replay", help="Replay a JSONL transcript through the engine")
    replay.add_argument("file", type=Path, help="Transcript file (one message per line)")
    replay.add_argument("--surface", action="append", dest="surfaces", help="Surface id (repeatable, default: main)")
    replay.add_argument("--idle-timeout", type=float, default=None, help="Seconds to wait for each chunk")
    replay.add_argument("--chunk-size", type=int, default=64, help="Bytes per simulated network chunk")
    replay.add_argument("--render", action="store_true", help="Include the resolved render tree")

    sub.add_parser("catalog", help="Print catalog metadata")
    return parser


async def _chunks(data: bytes, size: int) -> AsyncIterator[bytes]:
    for start in range(0, len(data), size):
        yield data[start : start + size]
        await asyncio.sleep(0)


def _replay(args: argparse.Namespace) -> int:
    settings = get_settings()
    container = create_container(settings)
    registry = container.get(CatalogRegistry)
    validator = container.get(EnvelopeValidator)
    metrics = container.get(MetricsCollector)

    try:
        data = args.file.read_bytes()
    except OSError as e:
        logger.error("replay_read_failed", file=str(args.file), error=str(e))
        return 2

    surfaces = [
        Surface(surface_id, registry, require_create=settings.require_create, max_depth=settings.max_tree_depth)
        for surface_id in (args.surfaces or ["main"])
    ]
    processor = StreamProcessor(surfaces, validator, metrics, idle_timeout=args.idle_timeout)

    exit_code = 0
    try:
        report = asyncio.run(processor.process(_chunks(data, max(args.chunk_size, 1))))
        output: dict = {"report": report.to_dict()}
    except IdleTimeout as e:
        output = {"error": str(e), "linesDecoded": e.lines_decoded, "messagesApplied": e.messages_applied}
        exit_code = 1

    output["surfaces"] = {}
    for surface in surfaces:
        entry = surface.snapshot.to_dict()
        if args.render:
            try:
                entry["render"] = surface.render().to_dict()
            except RootNotDefined as e:
                entry["render"] = None
                entry["renderError"] = str(e)
        output["surfaces"][surface.surface_id] = entry

    print(safe_json_dumps(output, indent=2))
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    if args.command == "catalog":
        registry = create_container(settings).get(CatalogRegistry)
        print(safe_json_dumps(registry.metadata(), indent=2))
        return 0
    return _replay(args)


if __name__ == "__main__":
    sys.exit(main())
