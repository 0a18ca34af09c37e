# SPDX-License-Identifier: MIT
"""Tests for the in-memory park store."""

import json
import threading

import pytest

from parks_pipeline.engine import IngestAction
from parks_pipeline.models import MergeReason, ParkRecord
from parks_pipeline.store import ParkStore, atomic_write_json


@pytest.fixture
def store():
    return ParkStore()


class TestFindExisting:
    def test_matches_name_variants_within_state(self, store):
        stored = store.put(ParkRecord(name="Yosemite National Park", state="CA"))
        assert store.find_existing(ParkRecord(name="Yosemite NP", state="California")) == stored

    def test_other_state_does_not_match(self, store):
        store.put(ParkRecord(name="Pine Park", state="CA"))
        assert store.find_existing(ParkRecord(name="Pine Park", state="OR")) is None

    def test_generic_name_matches_literally(self, store):
        stored = store.put(ParkRecord(name="State Park", state="GA"))
        assert store.find_existing(ParkRecord(name="state park", state="GA")) == stored
        assert store.find_existing(ParkRecord(name="County Park", state="GA")) is None

    def test_missing_name_or_state(self, store):
        store.put(ParkRecord(name="Pine Park", state="CA"))
        assert store.find_existing(ParkRecord(name="Pine Park")) is None
        assert store.find_existing(ParkRecord(state="CA")) is None


class TestUpsert:
    """Read-decide-write through the engine."""

    def test_source_id_cannot_overwrite_another_park(self, store, engine, sample_park_data):
        nps = store.upsert({**sample_park_data, "id": "p1", "name": "Yosemite National Park"}, "NPS API", engine)
        scraped = store.upsert(
            {"id": "p1", "name": "Oak Grove", "state": "CA", "agency": "City"}, "web scrape", engine
        )

        assert scraped.action is IngestAction.ADDED
        assert scraped.record.id != "p1"
        assert scraped.record.id != nps.record.id
        assert len(store) == 2
        kept = store.get(nps.record.id)
        assert kept.name == "Yosemite National Park"
        assert kept.data_source_priority == 100

    def test_add_then_protect(self, store, engine, sample_park_data):
        added = store.upsert(sample_park_data, "NPS API", engine)
        assert added.action is IngestAction.ADDED
        assert added.record.id

        scraped = store.upsert({**sample_park_data, "description": "Scraped blurb about the park."},
                               "web scrape", engine)
        assert scraped.action is IngestAction.SKIPPED
        assert scraped.decision.reason is MergeReason.PROTECTED_HIGH_TRUST_SOURCE
        assert store.get(added.record.id).description == sample_park_data["description"]

    def test_equal_high_tier_needs_better_quality(self, store, engine, sample_park_data):
        store.upsert(sample_park_data, "NPS API", engine)
        again = store.upsert(sample_park_data, "nps api", engine)
        assert again.decision.reason is MergeReason.NO_IMPROVEMENT

    def test_updates_replace_whole_record_and_keep_id(self, store, engine, minimal_park_data):
        first = store.upsert({**minimal_park_data, "phone": "555-0100"}, "web search", engine)
        second = store.upsert(
            {**minimal_park_data, "description": "Oak groves, a creek and a small playground."},
            "manual entry",
            engine,
        )
        assert second.action is IngestAction.UPDATED
        assert second.decision.reason is MergeReason.HIGHER_PRIORITY_SOURCE
        assert second.record.id == first.record.id
        assert len(store) == 1

        stored = store.get(first.record.id)
        assert stored.data_source_priority == 80
        # Whole-record replace: the phone from the first source is gone
        assert stored.phone is None

    def test_invalid_candidate_leaves_store_untouched(self, store, engine):
        evaluation = store.upsert({"name": "Pine Park", "state": "CA"}, "NPS API", engine)
        assert evaluation.action is IngestAction.INVALID
        assert len(store) == 0

    @pytest.mark.integration
    def test_concurrent_upserts_end_on_highest_tier(self, store, engine, sample_park_data):
        sources = ["web scrape", "parks.ca.gov", "email", "manual", "state park api",
                   "recreation.gov", "NPS API", "blog"] * 4
        barrier = threading.Barrier(len(sources))

        def worker(source):
            barrier.wait()
            store.upsert(sample_park_data, source, engine)

        threads = [threading.Thread(target=worker, args=(s,)) for s in sources]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        parks = list(store)
        assert len(parks) == 1
        assert parks[0].data_source_priority == 100
        assert parks[0].data_quality_score == 100


class TestPersistence:
    def test_dump_and_load(self, tmp_path, store, engine, sample_park_data, minimal_park_data):
        store.upsert(sample_park_data, "NPS API", engine)
        store.upsert({**minimal_park_data, "acres": 4.2}, "web", engine)
        path = store.dump(tmp_path / "parks.json")

        loaded = ParkStore.load(path)
        assert len(loaded) == 2
        oak = loaded.find_existing(ParkRecord(name="Oak Park", state="CA"))
        assert oak.extra == {"acres": 4.2}
        assert oak.data_source_priority == 40

    def test_load_missing_file_is_empty(self, tmp_path):
        assert len(ParkStore.load(tmp_path / "missing.json")) == 0

    def test_load_rejects_non_array(self, tmp_path):
        path = tmp_path / "parks.json"
        path.write_text(json.dumps({"name": "Pine Park"}))
        with pytest.raises(ValueError):
            ParkStore.load(path)

    def test_atomic_write_leaves_no_temp_file(self, tmp_path):
        path = atomic_write_json(tmp_path / "out" / "data.json", [1, 2])
        assert json.loads(path.read_text()) == [1, 2]
        assert not (tmp_path / "out" / "data.json.tmp").exists()

    def test_atomic_write_failure_keeps_original(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("[1]")
        circular = []
        circular.append(circular)
        with pytest.raises(ValueError):
            atomic_write_json(path, circular)
        assert path.read_text() == "[1]"
        assert not (tmp_path / "data.json.tmp").exists()