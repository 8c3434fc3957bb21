"""Turn a finished round into selection records and JSON, with optional bucket upload."""

from __future__ import annotations

import json
from pathlib import Path

from ghost_leg.session import LadderSession


def selection_records(session: LadderSession, selection_type: str = "random") -> list[dict]:
    """One selection record per resolved player, in column order.

    Field names follow the restaurant directory's selection log.
    """
    return [
        {
            "userName": name,
            "restaurantId": prize.id,
            "restaurantName": prize.name,
            "restaurantImage": prize.image,
            "selectionType": selection_type,
        }
        for name, prize in session.outcomes()
    ]


def round_to_dict(session: LadderSession) -> dict:
    """Everything needed to redraw or audit a round."""
    ladder = session.ladder
    if ladder is None:
        return {"phase": session.phase, "players": list(session.player_names), "ladder": None}

    return {
        "phase": session.phase,
        "players": list(session.player_names),
        "ladder": {
            "column_count": ladder.column_count,
            "top": ladder.top,
            "bottom": ladder.bottom,
            "rungs": [{"y": r.y, "left": r.left, "right": r.right} for r in ladder.sorted_rungs()],
            "prizes": [p.id for p in ladder.prizes],
        },
        "played": list(session.played),
        "paths": {
            str(col): {
                "terminal_column": t.terminal_column,
                "rungs": [{"y": r.y, "left": r.left} for r in t.rungs],
            }
            for col, t in sorted(session.traversals.items())
        },
        "selections": selection_records(session),
    }


def write_round_json(session: LadderSession, path: Path | str) -> Path:
    """Write :func:`round_to_dict` output to *path*. Returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(round_to_dict(session), indent=2, ensure_ascii=False), encoding="utf-8")
    return path


DEFAULT_KEY_PREFIX = "ghost-leg"


def round_upload_files(round_path: Path | str, prefix: str = DEFAULT_KEY_PREFIX) -> dict[str, bytes]:
    """Object keys and bodies for one saved round.

    The full round goes under ``<prefix>/rounds/`` and its selection records
    alone under ``<prefix>/selections/``, both keyed by the round's file name.
    """
    round_path = Path(round_path)
    content = round_path.read_bytes()
    selections = json.loads(content).get("selections", [])
    prefix = prefix.strip("/")
    return {
        f"{prefix}/rounds/{round_path.name}": content,
        f"{prefix}/selections/{round_path.name}": json.dumps(
            selections, indent=2, ensure_ascii=False,
        ).encode("utf-8"),
    }


def upload_to_s3(
    round_path: Path | str,
    bucket_name: str,
    endpoint_url: str,
    key_id: str,
    app_key: str,
    prefix: str = DEFAULT_KEY_PREFIX,
) -> list[str]:
    """Upload a saved round to an S3-compatible bucket (e.g. Backblaze B2).

    Returns the object keys written.
    """
    import boto3  # type: ignore[import-untyped]

    s3 = boto3.client(
        "s3",
        endpoint_url=endpoint_url,
        aws_access_key_id=key_id,
        aws_secret_access_key=app_key,
    )

    files = round_upload_files(round_path, prefix=prefix)
    for key, content in files.items():
        s3.put_object(
            Bucket=bucket_name,
            Key=key,
            Body=content,
            ContentType="application/json; charset=utf-8",
        )
    return list(files)
