import json
from pathlib import Path

from structuring.parser import parse_resume_text


FIXTURE_PATH = Path(__file__).resolve().parent / "fixtures" / "resume_samples.json"


def test_resume_regressions():
    samples = json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))
    for sample in samples:
        expected = sample["expected"]

        result = parse_resume_text(sample["text"])
        basics = result.basics.to_dict()

        for key, value in expected.get("basics", {}).items():
            assert basics.get(key) == value, key

        for skill in expected.get("skills", []):
            assert skill in result.skills

        assert len(result.experiences) == len(expected["experiences"])
        for entry, want in zip(result.experiences, expected["experiences"]):
            for key, value in want.items():
                assert getattr(entry, key) == value, key
            assert entry.highlights
            assert entry.summary == entry.highlights[0]

        assert len(result.education) == len(expected["education"])
        for entry, want in zip(result.education, expected["education"]):
            for key, value in want.items():
                assert getattr(entry, key) == value, key


def test_regression_output_is_json_serialisable():
    samples = json.loads(FIXTURE_PATH.read_text(encoding="utf-8"))
    for sample in samples:
        payload = parse_resume_text(sample["text"]).to_dict()
        assert json.loads(json.dumps(payload)) == payload
