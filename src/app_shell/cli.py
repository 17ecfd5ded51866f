import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path

from pydantic import ValidationError

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteCardStore, SQLiteTemplateStore
from src.app_shell.config import build_facade
from src.components.binding import NoLayout
from src.components.distribution import DistributionFacade
from src.core.entities import BusinessCard, Template
from src.core.errors import EngineError, TemplateMissing
from src.rules.loader import load_rules

logger = logging.getLogger("cli")

DATA_DIR = os.environ.get("CARD_DATA_DIR", "./data")
RULES_PATH = os.environ.get("CARD_RULES_PATH", "rules.yaml")
MIGRATIONS_DIR = "migrations"


def db_path(data_dir: str) -> str:
    return str(Path(data_dir) / "cards.db")


def get_facade(args: argparse.Namespace) -> DistributionFacade:
    rules_path = Path(args.rules)
    if not rules_path.exists():
        logger.error("Rules file %s not found.", rules_path)
        sys.exit(1)

    rules = load_rules(rules_path)
    return build_facade(db_path(args.data_dir), rules)


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def handle_resolve(facade: DistributionFacade, args: argparse.Namespace) -> None:
    result = facade.resolve_card(args.card_id)
    if isinstance(result, NoLayout):
        print(f"No layout for card {result.card_id} ({result.reason}).")
        return
    print_json(asdict(result))


def handle_paper(facade: DistributionFacade, args: argparse.Namespace) -> None:
    try:
        layout = facade.export_paper_card(args.card_id)
    except TemplateMissing:
        print(f"No layout for card {args.card_id} (no_template).")
        return

    if args.json:
        print_json(asdict(layout))
        return

    print(
        f"Page {layout.page.width:.2f} x {layout.page.height:.2f} pt "
        f"({layout.orientation}, {layout.dpi} dpi, bleed {layout.bleed_pt:.2f} pt)"
    )
    for el in layout.elements:
        print(
            f" - {el.id}: x={el.box.x:.2f} y={el.box.y:.2f} "
            f"w={el.box.width:.2f} h={el.box.height:.2f}"
        )
    if layout.is_print_safe:
        print("Print safe.")
    for v in layout.violations:
        print(f"! {v.code} {v.element_id}: {v.message}")


def handle_vcard(facade: DistributionFacade, args: argparse.Namespace) -> None:
    payload = facade.export_contact(args.card_id)
    if args.output:
        Path(args.output).write_text(payload.text, encoding="utf-8", newline="")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(payload.text)


def handle_stats(facade: DistributionFacade, args: argparse.Namespace) -> None:
    print_json(facade.get_stats(args.card_id).as_dict())


def handle_import(args: argparse.Namespace) -> None:
    """Load template or card JSON files into the database."""
    path = db_path(args.data_dir)
    templates = SQLiteTemplateStore(path)
    cards = SQLiteCardStore(path)

    for file in args.files:
        raw = json.loads(Path(file).read_text(encoding="utf-8"))
        try:
            if args.kind == "template":
                templates.save_template(Template.model_validate(raw))
            else:
                cards.save_card(BusinessCard.model_validate(raw))
        except ValidationError as e:
            logger.error("Invalid %s in %s: %s", args.kind, file, e)
            sys.exit(1)
        print(f"Imported {args.kind} from {file}")


def handle_migrate(args: argparse.Namespace) -> None:
    Path(args.data_dir).mkdir(parents=True, exist_ok=True)
    migrator = SQLiteMigrator(db_path(args.data_dir), args.migrations)
    applied = migrator.run_migrations()
    if not applied:
        print("Database is up to date.")
    for filename in applied:
        print(f"Applied {filename}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="eBizCard engine CLI")
    parser.add_argument("--data-dir", default=DATA_DIR, help="Directory holding cards.db")
    parser.add_argument("--rules", default=RULES_PATH, help="Path to rules.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # resolve
    resolve_parser = subparsers.add_parser("resolve", help="Print a card's render tree")
    resolve_parser.add_argument("card_id")

    # paper
    paper_parser = subparsers.add_parser("paper", help="Print layout and print-safety report")
    paper_parser.add_argument("card_id")
    paper_parser.add_argument("--json", action="store_true", help="Full layout as JSON")

    # vcard
    vcard_parser = subparsers.add_parser("vcard", help="Export a card as vCard")
    vcard_parser.add_argument("card_id")
    vcard_parser.add_argument("-o", "--output", help="Write to file instead of stdout")

    # stats
    stats_parser = subparsers.add_parser("stats", help="View counts for a card")
    stats_parser.add_argument("card_id")

    # import
    import_parser = subparsers.add_parser("import", help="Load template/card JSON files")
    import_parser.add_argument("kind", choices=["template", "card"])
    import_parser.add_argument("files", nargs="+")

    # migrate
    migrate_parser = subparsers.add_parser("migrate", help="Apply pending migrations")
    migrate_parser.add_argument("--migrations", default=MIGRATIONS_DIR)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "migrate":
        handle_migrate(args)
        return 0
    if args.command == "import":
        handle_import(args)
        return 0

    facade = get_facade(args)
    handlers = {
        "resolve": handle_resolve,
        "paper": handle_paper,
        "vcard": handle_vcard,
        "stats": handle_stats,
    }
    try:
        handlers[args.command](facade, args)
    except EngineError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
