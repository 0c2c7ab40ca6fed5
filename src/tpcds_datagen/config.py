from __future__ import annotations

import os
from typing import Any, Dict, Optional

import yaml


def load_dotenv(path: str = ".env") -> None:
    """Load environment variables from a .env file if present.

    Does not override variables already set in the environment. This is the
    place to put SPARK_HOME or PYSPARK_SUBMIT_ARGS (e.g. ``--jars`` pointing
    at the spark-sql-perf jar).
    """
    if not os.path.exists(path):
        return
    with open(path, "r") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, val = line.split("=", 1)
                os.environ.setdefault(key.strip(), val.strip().strip("\"'"))


def load_config(yaml_path: Optional[str] = None) -> Dict[str, Any]:
    """Load generation defaults from a YAML mapping.

    Keys are GenerationConfig field names. Returns an empty dict when no
    path is given.
    """
    if not yaml_path:
        return {}
    with open(yaml_path, "r") as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{yaml_path}: expected a mapping at top level, got {type(loaded).__name__}")
    return loaded
