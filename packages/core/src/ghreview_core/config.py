import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "format": "table",  # table | plain | json
    "limit": 100,  # page size for comment and thread listings
    "repo": None,  # OWNER/REPO used when the PR argument is a bare number
    "api_url": "https://api.github.com",
    "templates": {},  # extra canned comment bodies, merged over the built-ins
}

FORMATS = ("table", "plain", "json")


def load_config(config_path: str = ".ghreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .ghreview.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "templates": dict(DEFAULT_CONFIG["templates"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    if not isinstance(config.get("templates"), dict):
        raise ValueError(f"'templates' in {config_path} must be a mapping of name to body.")
    if config.get("format") not in FORMATS:
        raise ValueError(f"'format' in {config_path} must be one of: {', '.join(FORMATS)}.")
    limit = config.get("limit")
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise ValueError(f"'limit' in {config_path} must be an integer.")

    # Credentials never come from the file.
    config["github_token"] = os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")

    return config
