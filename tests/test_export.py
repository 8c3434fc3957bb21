"""Tests for round export: selection records, JSON, bucket upload."""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from ghost_leg.export import (
    DEFAULT_KEY_PREFIX,
    round_to_dict,
    round_upload_files,
    selection_records,
    upload_to_s3,
    write_round_json,
)
from ghost_leg.prizes import SAMPLE_PRIZES
from ghost_leg.session import LadderSession


@pytest.fixture
def finished_session() -> LadderSession:
    session = LadderSession(SAMPLE_PRIZES, rng=random.Random(4))
    session.set_players(3, ["Ann", "Bob", "Cy"])
    session.begin_prize_selection()
    for prize in SAMPLE_PRIZES[:3]:
        session.toggle_prize(prize.id)
    session.confirm_prizes()
    session.play(1)
    session.finish_animation()
    session.reveal_all()
    return session


def test_selection_records_one_per_player(finished_session: LadderSession) -> None:
    records = selection_records(finished_session)
    assert [r["userName"] for r in records] == ["Ann", "Bob", "Cy"]
    assert {r["restaurantId"] for r in records} == {"r1", "r2", "r3"}
    assert all(r["selectionType"] == "random" for r in records)


def test_selection_records_match_results(finished_session: LadderSession) -> None:
    records = selection_records(finished_session)
    for col, record in enumerate(records):
        assert record["restaurantName"] == finished_session.results[col].name


def test_selection_records_only_played_players() -> None:
    session = LadderSession(SAMPLE_PRIZES, rng=random.Random(0))
    session.set_players(2)
    session.begin_prize_selection()
    session.toggle_prize("r1")
    session.toggle_prize("r2")
    session.confirm_prizes()
    session.play(1)
    assert [r["userName"] for r in selection_records(session)] == ["Player 2"]


def test_round_to_dict_structure(finished_session: LadderSession) -> None:
    data = round_to_dict(finished_session)
    assert data["phase"] == "result"
    assert data["players"] == ["Ann", "Bob", "Cy"]
    assert data["ladder"]["column_count"] == 3
    assert len(data["ladder"]["rungs"]) == len(finished_session.ladder.rungs)
    assert data["played"][0] == 1
    assert set(data["paths"]) == {"0", "1", "2"}


def test_round_to_dict_rungs_sorted(finished_session: LadderSession) -> None:
    ys = [r["y"] for r in round_to_dict(finished_session)["ladder"]["rungs"]]
    assert ys == sorted(ys)


def test_round_to_dict_before_ladder() -> None:
    session = LadderSession(SAMPLE_PRIZES)
    assert round_to_dict(session)["ladder"] is None


def test_write_round_json(finished_session: LadderSession, tmp_path: Path) -> None:
    path = write_round_json(finished_session, tmp_path / "out" / "round.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["selections"]) == 3


def test_write_round_json_keeps_korean_names(tmp_path: Path) -> None:
    session = LadderSession(SAMPLE_PRIZES, rng=random.Random(2))
    session.set_players(names=["민수", "지영"])
    session.begin_prize_selection()
    session.toggle_prize("r1")
    session.toggle_prize("r2")
    session.confirm_prizes()
    session.reveal_all()
    path = write_round_json(session, tmp_path / "round.json")
    assert "민수" in path.read_text(encoding="utf-8")


# ── Upload ───────────────────────────────────────────────────────────

def test_upload_files_use_prefixed_keys(finished_session: LadderSession, tmp_path: Path) -> None:
    path = write_round_json(finished_session, tmp_path / "round.json")
    files = round_upload_files(path)
    assert list(files) == [
        f"{DEFAULT_KEY_PREFIX}/rounds/round.json",
        f"{DEFAULT_KEY_PREFIX}/selections/round.json",
    ]
    assert files[f"{DEFAULT_KEY_PREFIX}/rounds/round.json"] == path.read_bytes()


def test_upload_files_custom_prefix(finished_session: LadderSession, tmp_path: Path) -> None:
    path = write_round_json(finished_session, tmp_path / "monday.json")
    files = round_upload_files(path, prefix="lunch/")
    assert set(files) == {"lunch/rounds/monday.json", "lunch/selections/monday.json"}

    selections = json.loads(files["lunch/selections/monday.json"].decode("utf-8"))
    assert selections == selection_records(finished_session)


def test_upload_puts_each_file(finished_session: LadderSession, tmp_path: Path) -> None:
    path = write_round_json(finished_session, tmp_path / "round.json")
    fake_boto3 = MagicMock()
    client = fake_boto3.client.return_value

    with patch.dict(sys.modules, {"boto3": fake_boto3}):
        written = upload_to_s3(
            path,
            bucket_name="lunch",
            endpoint_url="https://s3.example.com",
            key_id="id",
            app_key="secret",
        )

    fake_boto3.client.assert_called_once_with(
        "s3",
        endpoint_url="https://s3.example.com",
        aws_access_key_id="id",
        aws_secret_access_key="secret",
    )
    keys = [c.kwargs["Key"] for c in client.put_object.call_args_list]
    assert keys == ["ghost-leg/rounds/round.json", "ghost-leg/selections/round.json"]
    assert written == keys
    assert all(c.kwargs["Bucket"] == "lunch" for c in client.put_object.call_args_list)
