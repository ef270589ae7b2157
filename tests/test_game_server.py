"""
Tests for the local JSON API and the run viewer.
"""

import pytest

from shadowword.web import EventEmitter, RunRecorder
from shadowword.web.game_server import GameServer
from shadowword.web.viewer_server import ViewerServer
from shadowword.core import GameOrchestrator


NAMES = ["Ann", "Ben", "Cat", "Dan", "Eve"]


@pytest.fixture
def client(orchestrator, word_settings):
    server = GameServer(orchestrator, default_settings=word_settings)
    server.app.config["TESTING"] = True
    return server.app.test_client()


def start(client):
    response = client.post("/api/round", json={"players": NAMES})
    assert response.status_code == 201
    return response.get_json()


def reveal_everyone(client):
    for _ in NAMES:
        assert client.post("/api/reveal").status_code == 200


def vote_everyone(client, pick):
    """Vote for every player; pick(voter_id, candidate_ids) returns a target id."""
    for _ in NAMES:
        ballot = client.get("/api/vote").get_json()
        target = pick(ballot["voter"]["id"], [c["id"] for c in ballot["candidates"]])
        assert client.post("/api/vote", json={"target_id": target}).status_code == 200


def test_state_hides_roles_until_results(client):
    state = start(client)

    assert state["phase"] == "role_reveal"
    assert [p["name"] for p in state["players"]] == NAMES
    assert all("is_liar" not in p for p in state["players"])
    assert state["content"] is None
    assert state["liar_guess_options"] == []


def test_reveal_endpoint(client, orchestrator):
    start(client)

    reveal = client.get("/api/reveal").get_json()

    assert reveal["player"]["name"] == "Ann"
    assert reveal["is_liar"] == orchestrator.players[0].is_liar
    assert client.post("/api/reveal").get_json()["progress"] == pytest.approx(0.2)


def test_reveal_past_end_is_conflict(client):
    start(client)
    reveal_everyone(client)

    response = client.post("/api/reveal")

    assert response.status_code == 409
    assert response.get_json()["operation"] == "mark_current_player_revealed"


def test_invalid_settings_rejected(client, orchestrator):
    response = client.post("/api/round", json={"players": ["Ann", "Ben"]})

    assert response.status_code == 400
    assert response.get_json()["errors"]
    assert orchestrator.phase.value == "setup"


def test_setup_failure_rejected(client):
    response = client.post("/api/round", json={
        "players": NAMES,
        "settings": {"difficulty": "easy", "selected_categories": ["Rocks"]},
    })
    assert response.status_code == 400


def test_unknown_phase(client):
    start(client)
    assert client.post("/api/phase", json={"phase": "dancing"}).status_code == 400


def test_skipping_reveals_is_conflict(client):
    start(client)
    assert client.post("/api/phase", json={"phase": "discussion"}).status_code == 409


def test_vote_validation(client):
    start(client)
    reveal_everyone(client)
    client.post("/api/phase", json={"phase": "discussion"})
    client.post("/api/phase", json={"phase": "voting"})

    voter = client.get("/api/vote").get_json()["voter"]["id"]

    assert client.post("/api/vote", json={}).status_code == 400
    assert client.post("/api/vote", json={"target_id": voter}).status_code == 400
    assert client.post("/api/vote", json={"target_id": "nobody"}).status_code == 409


def test_full_round_over_api(client, orchestrator):
    """Test a round played entirely through the API with the liar caught."""
    start(client)
    reveal_everyone(client)
    client.post("/api/phase", json={"phase": "discussion"})
    client.post("/api/phase", json={"phase": "voting"})

    liar_id = orchestrator.liars[0].id
    vote_everyone(client, lambda voter, candidates: liar_id if liar_id in candidates else candidates[0])

    state = client.post("/api/phase", json={"phase": "results"}).get_json()
    assert state["vote_result"]["kind"] == "liar_caught"
    assert any(p["is_liar"] for p in state["players"])

    state = client.post("/api/phase", json={"phase": "liar_guess"}).get_json()
    assert len(state["liar_guess_options"]) == 4

    guess = client.post("/api/liar-guess", json={"word": "dog"}).get_json()
    assert guess["correct"] is True
    assert guess["outcome"] == "liar_stolen_win"
    assert guess["liar_victory"] is True

    state = client.post("/api/phase", json={"phase": "game_over"}).get_json()
    assert state["outcome"] == "liar_stolen_win"

    again = client.post("/api/play-again")
    assert again.status_code == 201
    assert again.get_json()["phase"] == "role_reveal"
    assert [p["name"] for p in again.get_json()["players"]] == NAMES


def play_question_round_to_results(client, orchestrator):
    """Question mode round where everyone votes for the liar."""
    response = client.post("/api/round", json={
        "players": NAMES,
        "settings": {"game_mode": "question", "difficulty": "easy", "selected_categories": ["Food"]},
    })
    assert response.status_code == 201
    reveal_everyone(client)
    client.post("/api/phase", json={"phase": "discussion"})
    client.post("/api/phase", json={"phase": "voting"})

    liar_id = orchestrator.liars[0].id
    vote_everyone(client, lambda voter, candidates: liar_id if liar_id in candidates else candidates[0])

    state = client.post("/api/phase", json={"phase": "results"}).get_json()
    assert state["vote_result"]["kind"] == "liar_caught"


def test_question_mode_caught_liar_finishes(client, orchestrator):
    """Test that a liar caught in question mode ends the round with a group win."""
    play_question_round_to_results(client, orchestrator)

    assert client.post("/api/phase", json={"phase": "liar_guess"}).status_code == 409

    response = client.post("/api/phase", json={"phase": "game_over"})

    assert response.status_code == 200
    assert response.get_json()["phase"] == "game_over"
    assert response.get_json()["outcome"] == "group_wins"


def test_continue_from_results(client, orchestrator):
    play_question_round_to_results(client, orchestrator)

    state = client.post("/api/continue").get_json()

    assert state["phase"] == "game_over"
    assert state["outcome"] == "group_wins"
    assert client.post("/api/continue").status_code == 409


def test_game_over_waits_for_pending_guess(client, orchestrator):
    start(client)
    reveal_everyone(client)
    client.post("/api/phase", json={"phase": "discussion"})
    client.post("/api/phase", json={"phase": "voting"})
    liar_id = orchestrator.liars[0].id
    vote_everyone(client, lambda voter, candidates: liar_id if liar_id in candidates else candidates[0])
    client.post("/api/phase", json={"phase": "results"})

    assert client.post("/api/phase", json={"phase": "game_over"}).status_code == 409

    state = client.post("/api/continue").get_json()
    assert state["phase"] == "liar_guess"


def test_liar_guess_requires_word(client):
    start(client)
    assert client.post("/api/liar-guess", json={}).status_code == 400


def test_viewer_lists_recorded_runs(tmp_path, sample_catalog, game_config, rng, players, word_settings):
    runs_dir = str(tmp_path / "runs")
    recorder = RunRecorder(runs_dir)
    recorder.create_run("party")
    game = GameOrchestrator.create(sample_catalog, config=game_config, rng=rng,
                                   event_emitter=EventEmitter(recorder))
    game.start_round(word_settings, players)

    client = ViewerServer(runs_dir=runs_dir).app.test_client()

    runs = client.get("/api/runs").get_json()
    assert [r["name"] for r in runs] == ["party"]

    events = client.get("/api/runs/party/events").get_json()
    assert events["position"] == 3
    assert [e["event_type"] for e in events["events"]] == ["phase_change", "round_start", "state_update"]

    later = client.get("/api/runs/party/events?last_position=2").get_json()
    assert len(later["events"]) == 1

    assert client.get("/api/runs/missing/events").status_code == 404
    assert client.get("/api/runs/party/metadata").status_code == 404


def test_viewer_skips_corrupt_lines(tmp_path):
    runs_dir = str(tmp_path / "runs")
    recorder = RunRecorder(runs_dir)
    recorder.create_run("damaged")
    recorder.record_event("phase_change", {"previous": "setup", "phase": "role_reveal"})
    with open(recorder.events_file, 'a') as f:
        f.write("not json\n")

    response = ViewerServer(runs_dir=runs_dir).app.test_client().get("/api/runs/damaged/events")

    assert response.status_code == 200
    assert response.get_json()["position"] == 1
