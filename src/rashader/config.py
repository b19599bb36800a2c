"""
Loader configuration - loads YAML config for the capability loader.
"""

import os
from pathlib import Path
from typing import Iterable, Optional

import yaml

from .capabilities import DEFAULT_RUNTIMES, CapabilitySet
from .errors import ConfigError

CONFIG_ENV_VAR = 'RASHADER_CONFIG'
DEFAULT_CONFIG_NAME = 'rashader.yml'


class LoaderConfig:
    """Capability loader configuration."""

    def __init__(self, library: Optional[str] = None,
                 runtimes: Iterable[str] = DEFAULT_RUNTIMES,
                 verbose: bool = False):
        """
        Initialize loader config.

        Args:
            library: Library name to open (None for the platform default)
            runtimes: Runtime capability groups to include
            verbose: Print load diagnostics
        """
        self.library = library
        self.runtimes = tuple(runtimes)
        self.verbose = verbose

        # Fail early on unknown runtimes rather than at load time
        self.capabilities = CapabilitySet(self.runtimes)

    def __repr__(self):
        return (f"LoaderConfig(library={self.library!r}, runtimes={list(self.runtimes)}, "
                f"verbose={self.verbose})")

    @classmethod
    def from_dict(cls, config_dict: Optional[dict]) -> 'LoaderConfig':
        """
        Create LoaderConfig from dictionary (loaded from YAML).

        Args:
            config_dict: Configuration dictionary

        Returns:
            LoaderConfig instance
        """
        config_dict = config_dict or {}
        if not isinstance(config_dict, dict):
            raise ConfigError("Loader config must be a mapping")

        library = config_dict.get('library')
        if library is not None and not isinstance(library, str):
            raise ConfigError(f"'library' must be a string, got {library!r}")

        runtimes = config_dict.get('runtimes', list(DEFAULT_RUNTIMES))
        if isinstance(runtimes, str):
            runtimes = [runtimes]
        if runtimes is None:
            runtimes = []
        if not isinstance(runtimes, list) or not all(isinstance(r, str) for r in runtimes):
            raise ConfigError(f"'runtimes' must be a list of runtime names, got {runtimes!r}")

        # YAML 'false' in quotes is a string; bool() would make it True
        verbose = config_dict.get('verbose', False)
        if not isinstance(verbose, bool):
            raise ConfigError(f"'verbose' must be true or false, got {verbose!r}")

        return cls(library=library, runtimes=runtimes, verbose=verbose)


def load_config(config_path: Optional[Path] = None) -> Optional[LoaderConfig]:
    """
    Load loader configuration from YAML file.

    Args:
        config_path: Path to config file (default: $RASHADER_CONFIG, then
            rashader.yml in the current directory)

    Returns:
        LoaderConfig instance, or None if config doesn't exist or can't be read
    """
    if config_path is None:
        config_path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_NAME))
    config_path = Path(config_path)

    if not config_path.exists():
        return None

    try:
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Warning: Failed to load loader config from {config_path}: {e}")
        return None

    return LoaderConfig.from_dict(config_dict)
