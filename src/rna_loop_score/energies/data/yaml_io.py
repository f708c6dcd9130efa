from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read a YAML parameter file whose top level is a mapping.

    Raises
    ------
    ValueError
        If the file is not a `.yml`/`.yaml` file or its root is not a mapping.
    FileNotFoundError
        If the file does not exist.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError(f"Only YAML parameter files are supported, got '{path_obj.name}'.")

    data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Parameter file '{path_obj.name}' must contain a mapping at its root.")

    return data
