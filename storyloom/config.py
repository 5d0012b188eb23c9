import os

import yaml
from dotenv import load_dotenv

from storyloom.errors import ConfigError

DEFAULT_CONFIG = {
    'world': 'stories/worlds/key_and_vault.yaml',
    'session_id': 'local',
    'skip_intro': False,
    'log_level': 'WARNING',
    'debug_mode': False,
}

DEFAULT_CONFIG_YAML = """
# STORYLOOM CONFIGURATION
# -----------------------
# world: the YAML world file to play.
# skip_intro: start sessions in play instead of asking the intro question.
# log_level: DEBUG shows parser and dispatcher decisions.

world: stories/worlds/key_and_vault.yaml
session_id: local
skip_intro: false
log_level: WARNING
debug_mode: false
"""


def _as_bool(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


ENV_OVERRIDES = {
    'STORYLOOM_WORLD': ('world', str),
    'STORYLOOM_SESSION': ('session_id', str),
    'STORYLOOM_SKIP_INTRO': ('skip_intro', _as_bool),
    'STORYLOOM_LOG_LEVEL': ('log_level', lambda v: v.upper()),
    'STORYLOOM_DEBUG': ('debug_mode', _as_bool),
}


def load_config(path="config.yaml", use_env=True):
    """
    Loads config.yaml over the defaults, then applies STORYLOOM_* variables
    (a .env file is read first when present).
    """
    config = dict(DEFAULT_CONFIG)
    if path and os.path.exists(path):
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")
        config.update(data)

    if use_env:
        load_dotenv()
        for env_name, (key, convert) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is not None and value != "":
                config[key] = convert(value)
    return config


def write_default_config(path="config.yaml"):
    with open(path, "w") as f:
        f.write(DEFAULT_CONFIG_YAML.strip() + "\n")
