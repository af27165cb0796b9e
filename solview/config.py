"""
Configuration loader.

Reads an optional YAML config and lets environment variables override
the two endpoint URLs.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

load_dotenv()

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_MARKET_API_URL = "https://api.dexscreener.com"

DEFAULT_CONFIG: dict = {
    "rpc": {"url": DEFAULT_RPC_URL},
    "market": {"base_url": DEFAULT_MARKET_API_URL},
    "http": {"timeout": None},
}


def load_config(config_path: str = "config.yaml") -> dict:
    """
    Load configuration from YAML file, falling back to defaults.

    SOLVIEW_RPC_URL and SOLVIEW_MARKET_API_URL override the endpoints.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        for section, values in loaded.items():
            if isinstance(values, dict):
                config.setdefault(section, {}).update(values)
            else:
                config[section] = values

    rpc_url = os.getenv("SOLVIEW_RPC_URL")
    if rpc_url:
        config["rpc"]["url"] = rpc_url
    market_url = os.getenv("SOLVIEW_MARKET_API_URL")
    if market_url:
        config["market"]["base_url"] = market_url

    return config
