from __future__ import annotations

import json
import os
import subprocess
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urlparse

MANIFEST_NAME = "_generation.json"


def tool_revision() -> Optional[str]:
    """Git commit of the checkout this package runs from, None outside a checkout."""
    package_dir = os.path.dirname(os.path.abspath(__file__))
    try:
        out = subprocess.check_output(
            ["git", "-C", package_dir, "rev-parse", "--short=12", "HEAD"],
            stderr=subprocess.DEVNULL,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode().strip() or None


def local_path(location: str) -> Optional[str]:
    """Driver-side path for an explicit ``file:`` location.

    Scheme-less paths are resolved by Spark against fs.defaultFS, which is
    usually not the driver's disk, so they get None like hdfs:// or s3a://.
    """
    parsed = urlparse(location)
    if parsed.scheme == "file" and parsed.path:
        return parsed.path
    return None


def write_manifest(
    output_dir: str,
    database: str,
    params: Dict[str, Any],
    spark_version: Optional[str] = None,
) -> str:
    os.makedirs(output_dir, exist_ok=True)
    manifest = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "tool_revision": tool_revision(),
        "spark_version": spark_version,
        "database": database,
        "params": params,
    }
    out_path = os.path.join(output_dir, MANIFEST_NAME)
    with open(out_path, "w") as f:
        json.dump(manifest, f, indent=2, sort_keys=True)
    return out_path
