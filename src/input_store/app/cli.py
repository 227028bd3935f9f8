from __future__ import annotations

import argparse
import sys

from ..config.logging import configure_logging
from ..config.settings import Settings, load_settings
from ..storage import JSONStorage
from .doctor import run_doctor
from .rewrite import run_rewrite


def _build_storage(
    settings: Settings,
    *,
    db_path: str | None = None,
    default_data_path: str | None = None,
) -> JSONStorage:
    return JSONStorage(
        db_path or settings.db_path,
        default_data_path=default_data_path or settings.default_data_path,
    )


def _handle_doctor(args: argparse.Namespace) -> int:
    settings = load_settings()
    storage = _build_storage(
        settings, db_path=args.db_path, default_data_path=args.default_data_path
    )
    return run_doctor(storage, strict=args.strict)


def _handle_rewrite(args: argparse.Namespace) -> int:
    settings = load_settings()
    storage = _build_storage(
        settings, db_path=args.db_path, default_data_path=args.default_data_path
    )
    return run_rewrite(storage)


def _add_path_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db-path",
        help="Override the primary file (defaults to INPUT_STORE_DB_PATH).",
    )
    parser.add_argument(
        "--default-data-path",
        help="Override the seed file (defaults to INPUT_STORE_DEFAULT_DATA_PATH).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="input-store")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every storage read and write.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    doctor_parser = subparsers.add_parser(
        "doctor", help="Report primary and seed files and their record counts."
    )
    _add_path_options(doctor_parser)
    doctor_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when load() would return no records.",
    )
    doctor_parser.set_defaults(func=_handle_doctor)

    rewrite_parser = subparsers.add_parser(
        "rewrite", help="Load records and save them back in canonical form."
    )
    _add_path_options(rewrite_parser)
    rewrite_parser.set_defaults(func=_handle_rewrite)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(load_settings().log_level, verbose_storage=args.verbose)
    exit_code = args.func(args)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main(sys.argv[1:])
