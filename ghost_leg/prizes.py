"""Prize records: restaurants a ladder round can land on."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Prize:
    """A restaurant from the directory. Only ``id`` and ``name`` are required."""

    id: str
    name: str
    category: str = ""
    distance: str = ""
    image: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Prize:
        # Directory exports use Mongo-style "_id"
        prize_id = data.get("_id", data.get("id"))
        if prize_id is None or not data.get("name"):
            raise ValueError(f"Restaurant record needs an id and a name: {data!r}")
        return cls(
            id=str(prize_id),
            name=data["name"],
            category=data.get("category", ""),
            distance=data.get("distance", ""),
            image=data.get("image", ""),
        )


def load_prizes(path: Path | str) -> list[Prize]:
    """Read a JSON array of restaurant objects."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of restaurants")
    return [Prize.from_dict(item) for item in data]


# ── Built-in directory ───────────────────────────────────────────────

SAMPLE_PRIZES: list[Prize] = [
    Prize("r1", "Kimchi House", "Korean", "5 min"),
    Prize("r2", "Golden Dragon", "Chinese", "8 min"),
    Prize("r3", "Sushi Bar Hana", "Japanese", "10 min"),
    Prize("r4", "Pasta Corner", "Western", "7 min"),
    Prize("r5", "Tteokbokki Stand", "Snack", "3 min"),
    Prize("r6", "Crispy Chicken", "Chicken", "12 min"),
    Prize("r7", "Pho Saigon", "Vietnamese", "9 min"),
    Prize("r8", "Corner Cafe", "Cafe", "2 min"),
]
