#!/usr/bin/env python3

import os
import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import logging
import sys

import yaml

from .domain import Taxonomy
from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("orgpages")

CONFIG_FILENAMES = ['orgpages.json', 'orgpages.toml', 'orgpages.yaml', 'orgpages.yml']
ENV_PREFIX = "ORGPAGES_"
SECTIONS = ("github", "enrichment", "tags", "paths", "site", "logging")


def get_config_path() -> Optional[Path]:
    """Get the path to the configuration file.

    Checks in order:
    1. ORGPAGES_CONFIG environment variable
    2. orgpages.{json,toml,yaml,yml} in the working directory

    Returns None when no file is found; defaults and environment
    variables are enough to run.
    """
    if 'ORGPAGES_CONFIG' in os.environ:
        path = Path(os.environ['ORGPAGES_CONFIG']).expanduser()
        if not path.exists():
            raise ConfigError(f"ORGPAGES_CONFIG points to a missing file: {path}")
        return path

    for filename in CONFIG_FILENAMES:
        path = Path.cwd() / filename
        if path.exists():
            return path

    return None


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "org": "ubc-library-rc",
        "github": {
            "token": "",
            "api_url": "https://api.github.com",
            "user_agent": "orgpages",
            "per_page": 100,
            "timeout_seconds": 30,
            "max_retries": 3,
            "base_delay": 1.0,
            "max_delay": 60.0,
        },
        "enrichment": {
            "max_workers": 1,
        },
        "tags": {
            "workshop": "workshop",
            "featured": "featured",
        },
        # Research data management is listed by hand in the curated fragments
        "categories": {
            "data": "Data analysis and visualization",
            "digital-scholarship": "Digital scholarship",
            "geospatial": "Geographic information systems (GIS) and mapping",
        },
        "collation_locale": "",
        "paths": {
            "output_dir": ".",
            "fragments_dir": ".",
            "all_page": "all.html",
            "featured_page": "index.html",
            "all_fragment": "manual_all_list.html",
            "featured_fragment": "manual_featured_list.html",
        },
        "site": {
            "name": "UBC Library Research Commons",
            "logo": "images/rc-logo-square.png",
            "logo_alt": "UBC Research Commons logo",
            "stylesheet": "style.css",
            "all_title": "UBC Library Research Commons - Open Educational Materials",
            "all_heading": "Past and present workshops offered by the Research Commons",
            "featured_title": "UBC Library Research Commons - Featured workshops",
            "featured_heading": "Featured Workshops",
            "events_url": "https://researchcommons.library.ubc.ca/events/",
            "all_url": "",
            "featured_url": "",
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s",
        },
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key == "categories":
            # The taxonomy is replaced wholesale so its order is the file's order
            merged[key] = dict(value) if isinstance(value, dict) else value
        elif key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value

    return merged


def _coerce_env_value(value: str):
    if value.isdigit():
        return int(value)
    if value.lower() in ('true', 'yes', 'on'):
        return True
    if value.lower() in ('false', 'no', 'off'):
        return False
    return value


def apply_env_overrides(config, environ=None):
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern: ORGPAGES_SECTION_KEY
    For example: ORGPAGES_ENRICHMENT_MAX_WORKERS=4 or ORGPAGES_ORG=my-org.
    GITHUB_TOKEN is honoured when no token is configured otherwise.
    """
    environ = os.environ if environ is None else environ

    for env_key, value in environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue

        key_parts = env_key[len(ENV_PREFIX):].lower().split('_')
        typed_value = _coerce_env_value(value)

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if not matched_key:
                break

            if i + best_match_len == len(key_parts):
                # Token values stay strings even when they look numeric
                current_level[matched_key] = value if matched_key == 'token' else typed_value
                break

            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                break

    github = config.setdefault("github", {})
    if isinstance(github, dict) and not github.get("token") and environ.get("GITHUB_TOKEN"):
        github["token"] = environ["GITHUB_TOKEN"]

    return config


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read a JSON, TOML or YAML configuration file."""
    try:
        suffix = config_path.suffix.lower()
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                file_config = tomllib.load(f)
        elif suffix in ['.yaml', '.yml']:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f)
        else:
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading config from {config_path}: {e}") from e

    if file_config is None:
        return {}
    if not isinstance(file_config, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return file_config


def load_config_dict(environ=None) -> Dict[str, Any]:
    """Load configuration as a plain dict: defaults, file, then environment."""
    config = get_default_config()

    config_path = get_config_path()
    if config_path is not None:
        logger.debug(f"Using config from {config_path}")
        config = merge_configs(config, read_config_file(config_path))

    return apply_env_overrides(config, environ)


@dataclass(frozen=True)
class GitHubSettings:
    """How to reach the GitHub REST API."""
    token: Optional[str] = field(default=None, repr=False)
    api_url: str = "https://api.github.com"
    user_agent: str = "orgpages"
    per_page: int = 100
    timeout: float = 30
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 60.0


@dataclass(frozen=True)
class SiteText:
    """Fixed text and links placed around the generated listings."""
    name: str = ""
    logo: str = ""
    logo_alt: str = ""
    stylesheet: str = "style.css"
    all_title: str = ""
    all_heading: str = ""
    featured_title: str = ""
    featured_heading: str = ""
    events_url: str = ""
    all_url: str = ""
    featured_url: str = ""


@dataclass(frozen=True)
class SiteConfig:
    """
    Immutable run configuration.

    Built once at process start and handed to every component, so tests
    can construct one directly without touching the environment.
    """

    org: str
    taxonomy: Taxonomy
    github: GitHubSettings = field(default_factory=GitHubSettings)
    site: SiteText = field(default_factory=SiteText)
    workshop_tag: str = "workshop"
    featured_tag: str = "featured"
    max_workers: int = 1
    collation_locale: Optional[str] = None
    output_dir: Path = Path(".")
    fragments_dir: Path = Path(".")
    all_page: str = "all.html"
    featured_page: str = "index.html"
    all_fragment: str = "manual_all_list.html"
    featured_fragment: str = "manual_featured_list.html"
    log_level: str = "INFO"
    log_format: str = "%(levelname)s: %(message)s"

    def __post_init__(self):
        if not self.org:
            raise ConfigError("No organization configured (set ORGPAGES_ORG)")
        if self.max_workers < 1:
            raise ConfigError("enrichment.max_workers must be at least 1")

    def pages_url(self, name: str) -> str:
        """Canonical GitHub Pages URL for a repository of the organization."""
        return f"https://{self.org}.github.io/{name}/"

    @property
    def org_url(self) -> str:
        return f"https://github.com/{self.org}/"

    @property
    def featured_url(self) -> str:
        return self.site.featured_url or f"https://{self.org}.github.io/"

    @property
    def all_url(self) -> str:
        return self.site.all_url or f"https://{self.org}.github.io/{self.all_page}"

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'SiteConfig':
        """Build from a merged configuration dict."""
        for section in SECTIONS:
            if not isinstance(config.get(section, {}), dict):
                raise ConfigError(f"'{section}' must be a mapping")

        github = config.get("github", {})
        enrichment = config.get("enrichment", {})
        tags = config.get("tags", {})
        paths = config.get("paths", {})
        site = config.get("site", {})
        log = config.get("logging", {})

        categories = config.get("categories", {})
        if not isinstance(categories, dict):
            raise ConfigError("'categories' must map topic names to headings")

        try:
            return cls(
                org=str(config.get("org") or ""),
                taxonomy=Taxonomy.from_mapping(categories),
                github=GitHubSettings(
                    token=str(github["token"]) if github.get("token") else None,
                    api_url=str(github.get("api_url", "https://api.github.com")).rstrip('/'),
                    user_agent=str(github.get("user_agent", "orgpages")),
                    per_page=int(github.get("per_page", 100)),
                    timeout=float(github.get("timeout_seconds", 30)),
                    max_retries=int(github.get("max_retries", 3)),
                    base_delay=float(github.get("base_delay", 1.0)),
                    max_delay=float(github.get("max_delay", 60.0)),
                ),
                site=SiteText(**{k: str(v) for k, v in site.items() if k in SiteText.__dataclass_fields__}),
                workshop_tag=str(tags.get("workshop", "workshop")),
                featured_tag=str(tags.get("featured", "featured")),
                max_workers=int(enrichment.get("max_workers", 1)),
                collation_locale=str(config.get("collation_locale") or "") or None,
                output_dir=Path(str(paths.get("output_dir", "."))).expanduser(),
                fragments_dir=Path(str(paths.get("fragments_dir", "."))).expanduser(),
                all_page=str(paths.get("all_page", "all.html")),
                featured_page=str(paths.get("featured_page", "index.html")),
                all_fragment=str(paths.get("all_fragment", "manual_all_list.html")),
                featured_fragment=str(paths.get("featured_fragment", "manual_featured_list.html")),
                log_level=str(log.get("level", "INFO")).upper(),
                log_format=str(log.get("format", "%(levelname)s: %(message)s")),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e


def load_config(environ=None) -> SiteConfig:
    """Load the run configuration from defaults, file and environment."""
    return SiteConfig.from_dict(load_config_dict(environ))


def configure_logging(config: SiteConfig) -> None:
    """Apply the configured level and format to the orgpages logger."""
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {config.log_level!r}, using INFO")
        level = logging.INFO

    logging.getLogger().setLevel(level)
    logger.setLevel(level)
    for handler in logging.getLogger().handlers:
        handler.setFormatter(logging.Formatter(config.log_format))
