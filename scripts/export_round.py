#!/usr/bin/env python3
"""Upload a saved round JSON (from ``python -m ghost_leg play -o``) to a bucket.

Usage:
    scripts/export_round.py results/round.json

Requires env vars:
    GHOST_LEG_S3_KEY_ID
    GHOST_LEG_S3_APPLICATION_KEY
    GHOST_LEG_S3_BUCKET_NAME
    GHOST_LEG_S3_HOST          (S3-compatible endpoint hostname)

Optional:
    GHOST_LEG_S3_PREFIX        (object-key prefix, default "ghost-leg")
"""

import os
import sys
from pathlib import Path

REQUIRED_VARS = (
    "GHOST_LEG_S3_KEY_ID",
    "GHOST_LEG_S3_APPLICATION_KEY",
    "GHOST_LEG_S3_BUCKET_NAME",
    "GHOST_LEG_S3_HOST",
)


def main() -> None:
    if len(sys.argv) != 2:
        print(f"Usage: {sys.argv[0]} ROUND_JSON", file=sys.stderr)
        sys.exit(1)

    round_path = Path(sys.argv[1])
    if not round_path.exists():
        print(f"No round file at {round_path}.", file=sys.stderr)
        sys.exit(1)

    for var in REQUIRED_VARS:
        if not os.environ.get(var):
            print(f"Missing env var: {var}", file=sys.stderr)
            sys.exit(1)

    from ghost_leg.export import DEFAULT_KEY_PREFIX, upload_to_s3

    host = os.environ["GHOST_LEG_S3_HOST"]
    keys = upload_to_s3(
        round_path,
        bucket_name=os.environ["GHOST_LEG_S3_BUCKET_NAME"],
        endpoint_url=f"https://{host}",
        key_id=os.environ["GHOST_LEG_S3_KEY_ID"],
        app_key=os.environ["GHOST_LEG_S3_APPLICATION_KEY"],
        prefix=os.environ.get("GHOST_LEG_S3_PREFIX", DEFAULT_KEY_PREFIX),
    )
    for key in keys:
        print(f"Uploaded {key}")


if __name__ == "__main__":
    main()
