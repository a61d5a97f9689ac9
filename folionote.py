from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from folionote_core.org_syntax import OutlineSyntaxError, strip_links
from folionote_core.outline import OutlineDocument
from folionote_sync.config import load_config, save_config
from folionote_sync.errors import FolionoteError
from folionote_sync.locator import find_section_by_page
from folionote_sync.models import SortOrder
from folionote_sync.scope import list_document_keys, resolve_scope
from folionote_sync.session import determine_mode
from folionote_sync.sorting import sort_notes


def _open_command(args: argparse.Namespace) -> int:
    from folionote_gui_lib import main as gui_main

    return gui_main(
        args.notes,
        document_key=args.key,
        source_path=args.source,
        config=load_config(args.config),
    )


def _sort_command(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    document = OutlineDocument.load(args.notes)
    mode = determine_mode(args.key, config)
    order = SortOrder.parse(args.order) if args.order else config.sort_order
    sort_notes(resolve_scope(mode, document), mode.page_property, order)
    if document.modified:
        document.save()
    else:
        logging.info("Notes already in %s order.", order.value)
    return 0


def _locate_command(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    document = OutlineDocument.load(args.notes)
    mode = determine_mode(args.key, config)
    section = find_section_by_page(resolve_scope(mode, document), mode.page_property, args.page)
    if section is None:
        logging.error("No note for page %d.", args.page)
        return 1
    print(strip_links(section.heading))
    return 0


def _keys_command(args: argparse.Namespace) -> int:
    for key in list_document_keys(OutlineDocument.load(args.notes)):
        print(key)
    return 0


def _config_command(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    if args.write:
        path = save_config(config, args.config)
        logging.info("Wrote config to %s", path)
    print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Keep PDF pages and outline notes in sync.")
    parser.add_argument("--config", type=Path, default=None, help="Path to a config.json to use.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_notes_arguments(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("notes", type=Path, help="Outline notes file.")
        sub.add_argument("--key", default=None, help="Document key (CUSTOM_ID) for multi-document notes.")

    open_parser = subparsers.add_parser("open", help="Open the notes next to their PDF.")
    add_notes_arguments(open_parser)
    open_parser.add_argument("--source", type=Path, default=None, help="Source PDF, overriding the notes.")
    open_parser.set_defaults(handler=_open_command)

    sort_parser = subparsers.add_parser("sort", help="Sort page notes by page number.")
    add_notes_arguments(sort_parser)
    sort_parser.add_argument("--order", choices=[o.value for o in SortOrder], default=None)
    sort_parser.set_defaults(handler=_sort_command)

    locate_parser = subparsers.add_parser("locate", help="Print the note heading for a page.")
    add_notes_arguments(locate_parser)
    locate_parser.add_argument("page", type=int)
    locate_parser.set_defaults(handler=_locate_command)

    keys_parser = subparsers.add_parser("keys", help="List document keys in multi-document notes.")
    keys_parser.add_argument("notes", type=Path)
    keys_parser.set_defaults(handler=_keys_command)

    config_parser = subparsers.add_parser("config", help="Show the effective configuration.")
    config_parser.add_argument(
        "--write",
        action="store_true",
        help="Write the effective configuration back, dropping unknown or invalid entries.",
    )
    config_parser.set_defaults(handler=_config_command)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (FolionoteError, OutlineSyntaxError) as exc:
        logging.error("%s", exc)
        return 1


def cli() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    sys.exit(main())


if __name__ == "__main__":
    cli()
