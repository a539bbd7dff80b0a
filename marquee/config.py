"""
config.py - Configuration model for Marquee
"""

import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from rich.console import Console

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

console = Console()

API_KEY_ENV_VAR = "MARQUEE_API_KEY"
DEFAULT_API_URL = "https://api.themoviedb.org/3"
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w185_and_h278_bestv2"


class CatalogConfig(BaseModel):
    """Remote movie catalog endpoint and credential."""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    image_base_url: str = Field(
        default=DEFAULT_IMAGE_BASE_URL,
        description="Prefix joined with a record's poster path to build its image URL",
    )
    timeout: float = Field(default=10, gt=0, description="Total seconds allowed per catalog request")


class MarqueeConfig(BaseModel):
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    config_path: Optional[Path] = None


def resolve_config_path(args_config: Optional[str]) -> Path:
    if args_config:
        p = Path(args_config).expanduser()
        if p.is_dir():
            p = p / "config.toml"
        return p
    return Path.cwd() / "config.toml"


def load_config(config_path: Path) -> MarqueeConfig:
    """Load configuration from TOML file"""

    if not config_path.exists():
        console.print(f"[red][ERROR][/red] Configuration file not found: {config_path}")
        console.print("Please create config.toml with your catalog API key")
        sys.exit(1)

    try:
        with open(config_path, "rb") as f:
            config_data = tomllib.load(f)

        catalog = CatalogConfig(**config_data.get("catalog", {}))
        env_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
        if env_key:
            catalog = catalog.model_copy(update={"api_key": env_key})

        return MarqueeConfig(catalog=catalog, config_path=config_path)

    except Exception as e:
        console.print(f"[red][ERROR][/red] Error loading configuration: {e}")
        sys.exit(1)
