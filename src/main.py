# src/main.py — v1
"""CLI entry point: build, update-config, restore-config, write-redirects commands.

Usage:
    buildcore build [--command CMD] [--plugin CLASS_PATH ...] [options]
    buildcore update-config <mutations.json> [options]
    buildcore restore-config <mutations.json> [options]
    buildcore write-redirects <rules.json> [options]

Settings come from BUILDCORE_* environment variables and .env; the
flags below override them.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from buildcore.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
    except Exception as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    from buildcore.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="buildcore",
        description=f"buildcore v{__version__}: deploy configuration mutations",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--build-dir", type=Path, default=None,
        help="Build base directory (default: BUILDCORE_BUILD_DIR or .)",
    )
    common.add_argument(
        "--publish-dir", type=Path, default=None,
        help="Publish directory holding _headers/_redirects",
    )
    common.add_argument("--context", default=None, help="Deploy context name")
    common.add_argument("--branch", default=None, help="Git branch being built")

    subparsers = parser.add_subparsers(dest="command")

    # --- build ---
    p_build = subparsers.add_parser(
        "build", parents=[common],
        help="Run the build command and every plugin lifecycle hook",
    )
    p_build.add_argument(
        "--command", dest="build_command", default=None,
        help="Shell build command run at the start of onBuild",
    )
    p_build.add_argument(
        "--plugin", dest="plugins", action="append", default=[], metavar="CLASS_PATH",
        help="Plugin class path, loaded after BUILDCORE_PLUGINS (repeatable)",
    )
    p_build.set_defaults(func=_cmd_build)

    # --- update-config ---
    p_update = subparsers.add_parser(
        "update-config", parents=[common],
        help="Merge a mutation log into netlify.toml (backing up prior state)",
    )
    p_update.add_argument("mutations", type=Path, help="JSON file with the mutation log")
    p_update.set_defaults(func=_cmd_update_config)

    # --- restore-config ---
    p_restore = subparsers.add_parser(
        "restore-config", parents=[common],
        help="Restore netlify.toml and side files from the backup",
    )
    p_restore.add_argument("mutations", type=Path, help="JSON file with the mutation log")
    p_restore.set_defaults(func=_cmd_restore_config)

    # --- write-redirects ---
    p_redirects = subparsers.add_parser(
        "write-redirects", parents=[common],
        help="Write generated redirect/rewrite rules to _redirects",
    )
    p_redirects.add_argument(
        "rules", type=Path,
        help='JSON file: {"redirects": [...], "rewrites": [...]}',
    )
    p_redirects.set_defaults(func=_cmd_write_redirects)

    return parser


def _load_settings(args: argparse.Namespace) -> Any:
    from buildcore.config.settings import load_settings

    overrides = {
        "build_dir": args.build_dir,
        "publish_dir": args.publish_dir,
        "context": args.context,
        "branch": args.branch,
    }
    return load_settings(**{k: v for k, v in overrides.items() if v is not None})


def _read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


async def _cmd_build(args: argparse.Namespace, settings: Any) -> int:
    """Load plugins and run every lifecycle event of one build."""
    from buildcore.commands.dispatcher import CommandDispatcher
    from buildcore.commands.executors import LocalExecutors
    from buildcore.commands.registry import PluginRegistry
    from buildcore.commands.runner import BuildRunner, plan_commands
    from buildcore.core.models import BuildState
    from buildcore.storage.store_factory import create_store

    registry = PluginRegistry()
    registry.load_all([*settings.plugins, *args.plugins])

    paths = settings.config_paths()
    constants = {"config_path": paths.config_path, "publish_dir": settings.publish_dir}
    state = BuildState(
        build_dir=settings.build_dir,
        config_path=paths.config_path,
        node_path=settings.node_path,
        constants={k: v for k, v in constants.items() if v is not None},
    )
    runner = BuildRunner(CommandDispatcher(LocalExecutors(registry)), paths, create_store(settings))
    result = await runner.run(plan_commands(registry, args.build_command), state)

    if result.success:
        print(f"Build succeeded: {len(result.commands_run)} command(s) in {result.duration_ms}ms")
        return 0
    print(f"Build failed in {state.error.command_name}: {state.error.message}")
    return 1


async def _cmd_update_config(args: argparse.Namespace, settings: Any) -> int:
    """Apply a mutation log to the configuration file."""
    from buildcore.netlify_config.mutations import parse_mutations
    from buildcore.netlify_config.update import update_config
    from buildcore.storage.store_factory import create_store

    mutations = parse_mutations(_read_json(args.mutations))
    paths = settings.config_paths()
    await update_config(mutations, paths, create_store(settings))
    print(f"Updated {paths.config_path} with {len(mutations)} mutation(s)")
    return 0


async def _cmd_restore_config(args: argparse.Namespace, settings: Any) -> int:
    """Restore configuration files after a deploy."""
    from buildcore.netlify_config.backup import restore_config
    from buildcore.netlify_config.mutations import parse_mutations
    from buildcore.storage.store_factory import create_store

    mutations = parse_mutations(_read_json(args.mutations))
    await restore_config(mutations, settings.config_paths(), create_store(settings))
    print("Configuration restored" if mutations else "Nothing to restore")
    return 0


async def _cmd_write_redirects(args: argparse.Namespace, settings: Any) -> int:
    """Write generated rules to the publish directory's _redirects file."""
    from buildcore.netlify_config.redirects_file import RedirectRule, Rewrite, write_redirects_file
    from buildcore.storage.store_factory import create_store

    data = _read_json(args.rules)
    redirects = [RedirectRule(**r) for r in data.get("redirects", [])]
    rewrites = [Rewrite(**r) for r in data.get("rewrites", [])]
    publish_dir = settings.resolve(settings.publish_dir) or settings.build_dir

    path = await write_redirects_file(create_store(settings), publish_dir, redirects, rewrites)
    if path is None:
        print("No redirect rules to write")
    else:
        print(f"Wrote {len(redirects) + len(rewrites)} rule(s) to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
