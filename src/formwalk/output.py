"""Write a collected result document as JSON or YAML."""

from __future__ import annotations

import json
from typing import Mapping, TextIO

from ruamel.yaml import YAML

from .exceptions import ConfigError
from .values import StructuredValue


def dump_result(result: Mapping[str, StructuredValue], fmt: str, stream: TextIO) -> None:
    """Serialize ``result`` to ``stream`` keeping key order."""
    if fmt == "json":
        stream.write(json.dumps(result, indent=2, ensure_ascii=False))
        stream.write("\n")
        return

    if fmt == "yaml":
        yaml = YAML()
        yaml.default_flow_style = False
        yaml.dump(dict(result), stream)
        return

    raise ConfigError(f"Unsupported output format {fmt!r}")
