"""
vidkit command line: rename movie and TV episode files from online metadata.

Usage: vidkit [options] <file_or_directory> [...]
"""

import argparse
import sys
from pathlib import Path

import vidkit as vidkit_module
from vidkit.exceptions import ConfigError, ProbeError
from vidkit.rename import RenameResult, process_paths
from vidkit.utils import LogLevel, STATUS_FAIL, STATUS_NO_MATCH, logger, system_util
from vidkit.utils.config import (
    MOVIE_PROVIDERS,
    TV_PROVIDERS,
    Config,
    ProviderType,
    apply_env_keys,
    load_config,
    validate_config,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vidkit",
        usage="vidkit [options] <file_or_directory> [...]",
        description="Rename movie and TV episode files using metadata from TMDb, OMDb, TVMaze or TVDb "
                    "and technical details from ffprobe.",
        epilog="Example: vidkit --preview --recursive ~/Downloads",
    )
    parser.add_argument("paths", nargs="*", help="Video files or directories to process")
    parser.add_argument("--batch", action="store_true", help="Process files without prompting")
    parser.add_argument("--recursive", action="store_true", help="Process directories recursively")
    parser.add_argument("--lowercase", action="store_true", help="Convert filenames to lowercase")
    parser.add_argument("--scene-style", action="store_true", help="Use dots instead of spaces (scene style)")
    parser.add_argument("--organize", action="store_true", help="Organize files into directories")
    parser.add_argument("--no-overwrite", action="store_true", help="Don't overwrite existing files")
    parser.add_argument("--no-metadata", action="store_true", help="Skip metadata lookup")
    parser.add_argument("--preview", action="store_true", help="Preview mode (don't modify files)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {vidkit_module.__version__}")
    parser.add_argument("--lang", help="Metadata language (ISO 639-1 code, default: en)")
    parser.add_argument(
        "--movie-filename-template",
        help="Template for movie filenames (e.g., '{title} ({year}) [{resolution}]')",
    )
    parser.add_argument(
        "--tv-filename-template",
        help="Template for TV show filenames (e.g., '{title} S{season:02d}E{episode:02d} {episode_title}')",
    )
    parser.add_argument("--separator", help="Character to use as separator in filenames")
    parser.add_argument(
        "--movie-provider",
        choices=[p.value for p in MOVIE_PROVIDERS],
        help="Select movie metadata provider",
    )
    parser.add_argument(
        "--tv-provider",
        choices=[p.value for p in TV_PROVIDERS],
        help="Select TV show metadata provider",
    )
    parser.add_argument(
        "--movie-directory-template",
        help="Template for movie directory organization (e.g., 'Movies/{genre}/{title} ({year})')",
    )
    parser.add_argument(
        "--tv-directory-template",
        help="Template for TV show directory organization (e.g., 'TV/{genre}/{title}/Season {season:02d}')",
    )
    parser.add_argument(
        "--log-level",
        default="info",
        choices=[level.name.lower() for level in LogLevel],
        help="Console log level (default: info)",
    )
    parser.add_argument("--config", help="Path to config.json (default: $VIDKIT_CONFIG or ~/.config/vidkit)")
    return parser


def apply_args(cfg, args) -> None:
    """Override configuration values with command-line flags."""
    if args.batch:
        cfg.batch_mode = True
    if args.recursive:
        cfg.recursive = True
    if args.lowercase:
        cfg.lowercase = True
    if args.scene_style:
        cfg.scene_style = True
    if args.separator:
        cfg.separator = args.separator
    if args.no_overwrite:
        cfg.no_overwrite = True
    if args.preview:
        cfg.preview_mode = True
    if args.no_metadata:
        cfg.no_metadata = True
    if args.lang:
        cfg.language = args.lang
    if args.movie_filename_template:
        cfg.movie_format = args.movie_filename_template
    if args.tv_filename_template:
        cfg.tv_format = args.tv_filename_template
    if args.movie_provider:
        cfg.movie_provider = ProviderType(args.movie_provider)
    if args.tv_provider:
        cfg.tv_provider = ProviderType(args.tv_provider)

    # Directory organization is opt-in per run.
    cfg.organize_files = args.organize
    if args.movie_directory_template:
        cfg.movie_directory = args.movie_directory_template
    if args.tv_directory_template:
        cfg.tv_directory = args.tv_directory_template


def confirm_rename(source: Path, target: Path) -> bool:
    """Ask on the terminal before renaming; anything but 'y' declines."""
    logger.safe_print(f"\n  {source.name}\n-> {target}")
    try:
        response = input("Do you want to rename the file? (y/N): ")
    except EOFError:
        return False
    return response.strip().lower() == "y"


def print_summary(results: list[RenameResult]) -> None:
    for r in results:
        target = str(r.target) if r.target else "-"
        line = f"[{r.status}] {r.source} -> {target}"
        if r.message:
            line += f" ({r.message})"
        logger.safe_print(line)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logger.parse_log_level(args.log_level)
    logger.set_log_level(level)
    vidkit_module.DEBUG = level.value <= LogLevel.DEBUG.value

    try:
        cfg = load_config(Path(args.config).expanduser() if args.config else None)
    except ConfigError as e:
        logger.log("config.load_error", LogLevel.WARN, error=str(e), msg="Using default configuration")
        cfg = apply_env_keys(Config())

    apply_args(cfg, args)

    try:
        validate_config(cfg)
    except ConfigError as e:
        logger.safe_print(f"Error in configuration: {e}")
        return 1

    if not args.paths:
        parser.print_help()
        return 0

    try:
        system_util.require_binary("ffprobe")
    except ProbeError as e:
        logger.log("startup.error", LogLevel.ERROR, error=str(e))
        return 1

    confirm = None if (cfg.batch_mode or cfg.preview_mode) else confirm_rename
    results = process_paths([Path(p).expanduser() for p in args.paths], cfg, confirm=confirm)
    print_summary(results)

    failed = [r for r in results if r.status == STATUS_FAIL]
    no_match = [r for r in results if r.status == STATUS_NO_MATCH]
    logger.log("vidkit.done", LogLevel.INFO, files=len(results), failed=len(failed), no_match=len(no_match))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
