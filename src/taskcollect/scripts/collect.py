"""CLI entry point for collecting and rendering vault tasks."""

import argparse
import logging
import sys
from pathlib import Path

from taskcollect.config import get_settings
from taskcollect.tasks.collector import collect_tasks
from taskcollect.tasks.render import render_markdown, write_rendered_file
from taskcollect.tasks.template import generate_task_list_template
from taskcollect.temporal.dates import DateFormatError, InvalidRangeError, YMD
from taskcollect.vault.connector import RootPathNotFoundError, VaultConnector

logger = logging.getLogger("taskcollect.scripts")


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(content)
    else:
        write_rendered_file(output, content)


def run_template(start: str | None, end: str | None, output: Path | None) -> int:
    if not start or not end:
        logger.error("template needs --start and --end (YYYY/MM/DD)")
        return 1
    try:
        text = generate_task_list_template(YMD.parse(start), YMD.parse(end))
    except (DateFormatError, InvalidRangeError) as e:
        logger.error("%s", e)
        return 1
    _emit(text, output)
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Collect day and week tasks from a vault")
    parser.add_argument(
        "command",
        nargs="?",
        default="render",
        choices=["render", "malformed", "template"],
        help="What to produce (default: render)",
    )
    parser.add_argument(
        "--vault-path",
        type=Path,
        default=None,
        help="Override vault path (default: from config/env)",
    )
    parser.add_argument(
        "--root",
        action="append",
        default=None,
        help="Folder inside the vault to collect from; repeatable (default: from config)",
    )
    parser.add_argument("--output", "-o", type=Path, default=None, help="Write to this file")
    parser.add_argument("--start", help="Template start date, YYYY/MM/DD")
    parser.add_argument("--end", help="Template end date, YYYY/MM/DD")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.command == "template":
        sys.exit(run_template(args.start, args.end, args.output))

    settings = get_settings()
    vault_path = args.vault_path if args.vault_path is not None else settings.vault_path
    if vault_path is None:
        logger.error("No vault path configured. Set TASKCOLLECT_VAULT_PATH or use --vault-path")
        sys.exit(1)

    vault_path = Path(vault_path)
    if not vault_path.exists():
        logger.error("Vault path does not exist: %s", vault_path)
        sys.exit(1)

    logger.info("Vault path: %s", vault_path)
    connector = VaultConnector(
        vault_path,
        include_patterns=settings.include_patterns,
        exclude_patterns=settings.exclude_patterns,
    )
    roots = args.root or settings.root_paths
    try:
        tasks = collect_tasks(connector, roots)
    except RootPathNotFoundError as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.command == "malformed":
        _emit("".join(f"{entry}\n" for entry in tasks.malformed_entries), args.output)
    else:
        _emit(render_markdown(tasks, old_task_days=settings.old_task_days), args.output)


if __name__ == "__main__":
    main()
