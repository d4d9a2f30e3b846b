"""Configuration file handling for bookland"""

import dataclasses
import pathlib
import tomllib
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

# Config file names, searched for in the working directory and its parents
CONFIG_FILENAMES = ["bookland.toml", ".bookland.toml"]

# Output formats understood by the command line program
OUTPUT_FORMATS = ["string", "barcode", "json"]


class ConfigurationError(Exception):
    """The config file contains a value we can't use"""


def find_file_in_parents(filenames: list[str]) -> Optional[pathlib.Path]:
    """Find a file in the current directory or any parent directory"""
    current = pathlib.Path.cwd()
    while current != current.parent:
        for filename in filenames:
            filepath = current / filename
            if filepath.exists():
                return filepath
        current = current.parent
    return None


def find_config_file() -> Optional[pathlib.Path]:
    """Find the config file.

    Searches for config files in the current directory and parent directories,
    using the filenames defined in CONFIG_FILENAMES.

    Returns:
        Path to the config file if found, None otherwise
    """
    return find_file_in_parents(CONFIG_FILENAMES)


def load_config_file(path: Optional[pathlib.Path]) -> Dict[str, Any]:
    """Load a TOML config file

    Returns an empty dict if there is no config file.
    """
    if path is None or not path.exists():
        return {}
    with open(path, "rb") as f:
        return tomllib.load(f)


T = TypeVar("T")


@dataclasses.dataclass
class ConfigurationParameter(Generic[T]):
    """A generic class for parameters set in the config file"""

    key: str
    vtype: Type[T]
    default: T
    choices: Optional[List[T]] = None

    def coerce(self, value: Any) -> T:
        """Convert a value from the config file to this parameter's type"""
        result = self.vtype(value)  # type: ignore[call-arg]
        if self.choices is not None and result not in self.choices:
            raise ConfigurationError(f"{self.key} must be one of {self.choices}, not {value!r}")
        return result


class ConfigurationParameterSet:
    """All parameters set in the config file"""

    @staticmethod
    def scalars() -> List[ConfigurationParameter]:
        """Scalar parameters are set directly"""
        return [
            ConfigurationParameter("debug", bool, False),
            ConfigurationParameter("verbose", bool, False),
            ConfigurationParameter("output_format", str, "string", choices=OUTPUT_FORMATS),
            ConfigurationParameter("normalize", bool, False),
        ]


def apply_config(parsed: Any, config_data: Dict[str, Any]) -> None:
    """Merge config file values into parsed command-line arguments

    Values given on the command line win over the config file,
    which wins over the parameter defaults.
    """
    for param in ConfigurationParameterSet.scalars():
        clival = getattr(parsed, param.key, None)
        if clival:
            setattr(parsed, param.key, clival)
        elif param.key in config_data:
            setattr(parsed, param.key, param.coerce(config_data[param.key]))
        else:
            setattr(parsed, param.key, param.default)


def get_example_config() -> str:
    """Get a string containing an example TOML config file"""
    result = ""
    for param in ConfigurationParameterSet.scalars():
        value = param.default
        if isinstance(value, str):
            value = f'"{value}"'
        elif isinstance(value, bool):
            # Make this look right for TOML
            value = str(value).lower()
        if param.choices:
            result += f"# One of: {', '.join(param.choices)}\n"
        result += f"{param.key} = {value}\n"
    return result
