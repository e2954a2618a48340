"""
Parsing of engine filter arguments into an opaque selector.
"""

from typing import Dict, Iterable, List

from .errors import ConfigError

FILTER_FORMAT_ERROR = "filters must be in NAME=VALUE(=VALUE) format"


def parse_filters(filter_strings: Iterable[str]) -> Dict[str, List[str]]:
    """
    Parse user-provided filters in "name=value" format.

    The value may itself contain "=" (e.g. "label=color=orange"). Values sharing
    a name are grouped, which the engine treats as alternatives for labels and
    names.

    Args:
        filter_strings: Filter strings in "name=value" format

    Returns:
        Mapping of filter name to values, in the order given

    Raises:
        ConfigError: If a filter string is malformed
    """
    selector: Dict[str, List[str]] = {}

    for filter_str in filter_strings:
        if "=" not in filter_str:
            raise ConfigError(f"{FILTER_FORMAT_ERROR}: {filter_str}")

        name, value = filter_str.split("=", 1)
        if not name or not value:
            raise ConfigError(f"{FILTER_FORMAT_ERROR}: {filter_str}")

        selector.setdefault(name, []).append(value)

    return selector
