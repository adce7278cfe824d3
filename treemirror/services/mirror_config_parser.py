import os
from typing import Optional

from treemirror.domain.config import MirrorConfig
from treemirror.exceptions import ParseError, SeedUrlError
from treemirror.services.url_normalizer import normalize_url

DEFAULTS = {
    "storage_root": "./mirror",
    "workers": 1,
    "pool_size": None,
    "dry_run": False,
    "bind_address": None,
    "repair_links": False,
    "recheck_directories": True,
    "seeds_are_directories": True,
}


class MirrorConfigParser:
    """Parse a YAML/CLI dict into a MirrorConfig.

    Responsibility: schema/validation of mirror jobs, including seed URLs.
    It does NOT perform filesystem IO. Keys missing from `data` fall back to
    `defaults` (usually read from the environment), then to DEFAULTS.
    """

    def parse(self, *, data: dict, config_path: Optional[str] = None, defaults: Optional[dict] = None) -> MirrorConfig:
        if not isinstance(data, dict):
            raise ParseError(f"Config '{config_path}' must be a mapping")

        def option(name):
            value = data.get(name)
            if value is None and defaults is not None:
                value = defaults.get(name)
            return DEFAULTS[name] if value is None else value

        as_directories = bool(option("seeds_are_directories"))
        root_urls = data.get("root_urls") or []
        if isinstance(root_urls, str):
            root_urls = [root_urls]
        if not root_urls:
            raise ParseError("at least one root URL is required")
        seeds = [self.parse_seed(u, as_directory=as_directories) for u in root_urls]

        boundary = data.get("boundary")
        if boundary is not None:
            boundary = self.parse_seed(boundary, as_directory=True)

        try:
            return MirrorConfig(
                root_urls=tuple(seeds),
                storage_root=os.path.expanduser(str(option("storage_root"))),
                boundary=boundary,
                workers=self._positive_int("workers", option("workers")),
                pool_size=self._optional_positive_int("pool_size", option("pool_size")),
                dry_run=bool(option("dry_run")),
                bind_address=option("bind_address"),
                repair_links=bool(option("repair_links")),
                recheck_directories=bool(option("recheck_directories")),
                config_path=os.path.basename(config_path) if config_path else None,
            )
        except ValueError as e:
            raise ParseError(str(e)) from e

    def parse_seed(self, url, *, as_directory: bool = True) -> str:
        """Validate and canonicalize one seed URL.

        Seeds name directories by default, so they get a trailing slash.
        """
        if not isinstance(url, str) or not url.strip():
            raise SeedUrlError(str(url), "is empty")
        try:
            return normalize_url(url, is_directory=True if as_directory else None)
        except ValueError as e:
            raise SeedUrlError(url) from e

    def _positive_int(self, name: str, value) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ParseError(f"{name} must be a positive integer, got {value!r}") from None
        if number < 1:
            raise ParseError(f"{name} must be a positive integer, got {value!r}")
        return number

    def _optional_positive_int(self, name: str, value) -> Optional[int]:
        if value is None:
            return None
        return self._positive_int(name, value)
