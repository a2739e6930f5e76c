"""Tests for profile export loading."""

import json

import pandas as pd
import pytest
import yaml

from qcs.data_loading import load_profiles, load_profile_frame, frame_to_records


@pytest.fixture
def records(profile_a, profile_b):
    return [profile_a, profile_b]


class TestLoadProfiles:
    def test_json(self, tmp_path, records):
        path = tmp_path / "profiles.json"
        path.write_text(json.dumps(records))
        profiles = load_profiles(str(path))
        assert [p.user_id for p in profiles] == ["u1", "u2"]
        assert profiles[0].qualities.interests == ["hiking", "reading", "music"]
        assert profiles[1].requirements.height_range_min == 170

    def test_jsonl(self, tmp_path, records):
        path = tmp_path / "profiles.jsonl"
        path.write_text("\n".join(json.dumps(r) for r in records))
        profiles = load_profiles(str(path))
        assert len(profiles) == 2
        assert profiles[1].qualities.body_type == "athletic"

    def test_yaml(self, tmp_path, records):
        path = tmp_path / "profiles.yaml"
        path.write_text(yaml.safe_dump(records))
        assert len(load_profiles(str(path))) == 2

    def test_csv_with_json_cells(self, tmp_path, records):
        rows = []
        for r in records:
            row = dict(r)
            row["qualities"] = json.dumps(r["qualities"])
            row["requirements"] = json.dumps(r["requirements"])
            row["interests"] = json.dumps(r["qualities"]["interests"])
            rows.append(row)
        rows.append({"user_id": "003", "qualities": "not json"})
        path = tmp_path / "profiles.csv"
        pd.DataFrame(rows).to_csv(path, index=False)

        profiles = load_profiles(str(path))
        assert [p.user_id for p in profiles] == ["u1", "u2", "003"]
        assert profiles[0].interests == ["hiking", "reading", "music"]
        assert profiles[0].qualities.values == ["honesty", "family"]
        assert profiles[2].height is None
        assert profiles[2].qualities.interests == []

    def test_sample_data_loads(self):
        from pathlib import Path
        path = Path(__file__).parent.parent / "data" / "sample_profiles.json"
        profiles = load_profiles(str(path))
        assert len(profiles) == 5
        assert not profiles[4].is_active
        assert profiles[2].qualities.body_type == "average"


class TestErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_profile_frame(str(tmp_path / "missing.json"))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "profiles.txt"
        path.write_text("hello")
        with pytest.raises(ValueError):
            load_profile_frame(str(path))

    def test_empty_csv(self, tmp_path):
        path = tmp_path / "profiles.csv"
        path.write_text("")
        with pytest.raises(ValueError):
            load_profile_frame(str(path))

    def test_empty_json_list(self, tmp_path):
        path = tmp_path / "profiles.json"
        path.write_text("[]")
        with pytest.raises(ValueError):
            load_profile_frame(str(path))

    def test_json_object_rejected(self, tmp_path):
        path = tmp_path / "profiles.json"
        path.write_text('{"user_id": "u1"}')
        with pytest.raises(ValueError):
            load_profile_frame(str(path))


class TestFrameToRecords:
    def test_nan_becomes_none(self):
        df = pd.DataFrame([{"user_id": "u1", "height": 170.0}, {"user_id": "u2", "height": None}])
        records = frame_to_records(df)
        assert records[1]["height"] is None
        assert records[0]["height"] == 170.0

    def test_bad_list_cell(self):
        df = pd.DataFrame([{"interests": "[oops"}])
        assert frame_to_records(df)[0]["interests"] == []
