from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Sequence

from dotenv import load_dotenv

from docoutline.interfaces import MappingTitleResolver, TitleResolver
from docoutline.logging_utils import configure_logging, get_logger
from docoutline.models.blocks import load_document
from docoutline.models.outline import OutlineNode
from docoutline.outline import OutlineBuilder, OutlineBuilderConfig, OutlineBuilderOptions
from docoutline.settings import get_settings
from docoutline.storage import SQLiteTitleStore

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    if Path(".env").exists():
        load_dotenv(".env", override=False)
    parser = argparse.ArgumentParser(description="Build the outline of a serialized block document.")
    parser.add_argument("document", type=Path, help="Document JSON file ({'title': ..., 'body': ...})")
    parser.add_argument(
        "--document-id",
        default=None,
        help="Identifier used in the title store (default: document file stem)",
    )
    parser.add_argument(
        "--titles-json",
        type=Path,
        default=None,
        help="JSON object mapping document ids to titles. Overrides the SQLite title store.",
    )
    parser.add_argument(
        "--titles-db",
        type=Path,
        default=None,
        help="SQLite title store (default: OUTLINE_TITLES_DB or artifacts/titles.db)",
    )
    parser.add_argument(
        "--record-references",
        action="store_true",
        help="Store this document's title and collected references in the title store.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the outline JSON here instead of stdout")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO)")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> OutlineNode:
    settings = get_settings()
    configure_logging((args.log_level or settings.log_level).upper())

    document = load_document(args.document)
    document_id = args.document_id or args.document.stem
    store: SQLiteTitleStore | None = None
    resolver: TitleResolver
    if args.titles_json:
        if args.record_references:
            raise ValueError("--record-references requires the SQLite title store, not --titles-json")
        resolver = MappingTitleResolver(json.loads(args.titles_json.read_text(encoding="utf-8")))
    else:
        store = SQLiteTitleStore(args.titles_db or settings.titles_db_path)
        resolver = store

    references: List[OutlineNode] = []
    builder = OutlineBuilder(OutlineBuilderConfig.from_settings(settings))
    outline = await builder.build(
        document,
        OutlineBuilderOptions(resolver=resolver, references_collector=references),
    )

    if args.record_references and store is not None:
        store.upsert_title(document_id, outline.title)
        store.record_references(document_id, references)
        logger.info("Registered %s with %d references", document_id, len(references))

    payload = json.dumps(
        {"outline": outline.to_dict(), "references": [node.to_dict() for node in references]},
        indent=2,
        ensure_ascii=False,
    )
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload + "\n", encoding="utf-8")
        print(f"Wrote outline to {args.output}")
    else:
        print(payload)
    return outline


__all__ = ["parse_args", "run"]
