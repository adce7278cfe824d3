"""
Command-line interface for treemirror.

Mirror one or more remote directory trees:

    treemirror https://download.example.com/linux/static/ --storage-root /srv/mirror --workers 4

or run a job described in a YAML file:

    treemirror jobs/docker.yml --dry-run
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from treemirror import __version__
from treemirror import config as env
from treemirror.container import ENV, Container
from treemirror.exceptions import ParseError
from treemirror.services.config_file_store import ConfigFileStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treemirror",
        description="Mirror a remote HTTP directory listing onto local storage.",
    )
    parser.add_argument("targets", nargs="+", help="A YAML job file, or one or more root URLs")
    parser.add_argument("--storage-root", default=None, help="Local directory receiving the mirror")
    parser.add_argument("--workers", type=int, default=None, help="Maximum simultaneous requests (default: 1)")
    parser.add_argument("--pool-size", type=int, default=None, help="Threads processing crawl tasks")
    parser.add_argument("--boundary", default=None, help="URL whose host and path prefix bound the crawl")
    parser.add_argument("--bind", dest="bind_address", default=None, help="Local IP address to download from")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help=(
            "Do everything except copying file bodies. Each download is left as an "
            "empty placeholder file, which later real runs treat as already present"
        ),
    )
    parser.add_argument("--repair-links", action="store_true", default=None, help="Update symlinks whose redirect target changed")
    parser.add_argument(
        "--no-recheck",
        dest="recheck_directories",
        action="store_false",
        default=None,
        help="Only crawl entries missing locally; do not revisit existing directories",
    )
    parser.add_argument("--log-level", default=env.LOG_LEVEL, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--version", action="version", version=f"treemirror {__version__}")
    return parser


def env_defaults() -> dict:
    return {
        "storage_root": env.storage_root(),
        "workers": env.workers(),
        "pool_size": env.pool_size(),
        "dry_run": env.dry_run(),
        "bind_address": env.bind_address(),
        "repair_links": env.repair_links(),
        "recheck_directories": env.recheck_directories(),
    }


def load_job(targets: Sequence[str], store: ConfigFileStore) -> tuple[dict, Optional[str]]:
    if len(targets) == 1 and targets[0].endswith((".yml", ".yaml")):
        return store.load_yaml_dict(targets[0]), targets[0]
    return {"root_urls": list(targets)}, None


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    container = Container()
    try:
        data, config_path = load_job(args.targets, ConfigFileStore())
        overrides = {
            "storage_root": args.storage_root,
            "workers": args.workers,
            "pool_size": args.pool_size,
            "boundary": args.boundary,
            "bind_address": args.bind_address,
            "dry_run": args.dry_run,
            "repair_links": args.repair_links,
            "recheck_directories": args.recheck_directories,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        cfg = container.config_parser().parse(data=data, config_path=config_path, defaults=env_defaults())
    except ParseError as e:
        logger.error("%s", e)
        return 2

    container.config.from_dict(
        {
            **ENV,
            "TREEMIRROR_WORKERS": cfg.workers,
            "TREEMIRROR_BIND_ADDRESS": cfg.bind_address,
            "TREEMIRROR_REPAIR_LINKS": cfg.repair_links,
        }
    )
    result = container.mirror_executor().mirror(cfg)
    for failure in result.failures:
        logger.debug("Failed: %s (%s)", failure.url, failure.error)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
