"""Tests for the click CLI."""

import json

import pytest
from click.testing import CliRunner

from waypoint.cli import main
from waypoint.config import Config


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch):
    monkeypatch.setattr("waypoint.cli.load_config", lambda: Config())


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(
        json.dumps(
            {
                "meetings": [
                    {
                        "id": "m1",
                        "title": "Client Sync",
                        "startTime": "2025-06-03T10:00:00",
                        "endTime": "2025-06-03T11:00:00",
                        "location": "Paris, France",
                        "attendees": [{"id": "c1"}],
                    },
                    {
                        "id": "m2",
                        "title": "Sync",
                        "startTime": "2025-06-03T14:00:00",
                        "location": "Tokyo, Japan",
                    },
                ],
                "trips": [
                    {
                        "id": "t1",
                        "title": "Paris client visit",
                        "purpose": "client_visit",
                        "startDate": "2025-06-01",
                        "endDate": "2025-06-05",
                        "destinations": [
                            {
                                "id": "dest-1",
                                "city": "Paris",
                                "country": "France",
                                "arrivalDate": "2025-06-01",
                                "departureDate": "2025-06-05",
                            }
                        ],
                        "relatedContacts": ["c1"],
                    }
                ],
                "contacts": [{"id": "c1", "name": "Amélie", "company": "Paris Consulting"}],
            }
        )
    )
    return path


@pytest.fixture
def run(data_file):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(main, ["--data", str(data_file), *args])
    return _run


class TestNormalize:
    def test_prints_city_and_country(self):
        result = CliRunner().invoke(main, ["normalize", "paris, France"])
        assert result.exit_code == 0
        assert "city: Paris" in result.output
        assert "country: France" in result.output


class TestScore:
    def test_score(self, run):
        result = run("score", "m1", "t1")
        assert result.exit_code == 0
        assert "m1 -> t1: 11 (high)" in result.output

    def test_not_found_exits_1(self, run):
        result = run("score", "ghost", "t1")
        assert result.exit_code == 1
        assert "Error: Meeting with ID ghost not found" in result.output


class TestSuggest:
    def test_json(self, run):
        result = run("suggest", "t1", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [(d["meeting_id"], d["score"], d["label"]) for d in data] == [
            ("m1", 11, "high"),
            ("m2", 5, "high"),
        ]

    def test_text(self, run):
        result = run("suggest", "t1")
        assert "Client Sync" in result.output
        assert "[high" in result.output


class TestTripCommands:
    def test_create_trip_saves(self, run, data_file):
        result = run("create-trip", "m1", "m2")
        assert result.exit_code == 0
        assert "trip-2: Multi-City Business Trip: Paris, Tokyo" in result.output
        saved = json.loads(data_file.read_text())
        assert [t["id"] for t in saved["trips"]] == ["t1", "trip-2"]

    def test_link_and_unlink(self, run, data_file):
        assert run("link", "t1", "m1").exit_code == 0
        assert json.loads(data_file.read_text())["trips"][0]["relatedMeetings"] == ["m1"]
        assert run("unlink", "t1", "m1").exit_code == 0
        assert json.loads(data_file.read_text())["trips"][0]["relatedMeetings"] == []

    def test_tasks_json(self, run):
        run("link", "t1", "m1")
        result = run("tasks", "t1", "--json")
        data = json.loads(result.output)
        assert [t["category"] for t in data] == ["Meeting Preparation", "Follow-up"]
        assert data[0]["due_date"] == "2025-06-02"

    def test_contacts(self, run):
        result = run("contacts", "t1")
        assert "Amélie (Paris Consulting)" in result.output

    def test_unknown_trip(self, run):
        result = run("tasks", "nope")
        assert result.exit_code == 1
        assert "Trip with ID nope not found" in result.output


class TestClusters:
    def test_past_meetings_not_clustered(self, run):
        result = run("clusters")
        assert result.exit_code == 0
        assert "No travel clusters." in result.output
