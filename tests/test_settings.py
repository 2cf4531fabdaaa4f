import json

import pytest

from structuring import settings
from structuring.education import extract_education
from structuring.parser import parse_resume_text


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv first so monkeypatch restores whatever load_config writes
    for key in ("RESUME_MAX_INPUT_CHARS", "RESUME_SKILLS_FILE"):
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_default_config_is_normalised():
    config = settings.EngineConfig(skill_keywords=("Python", " python ", "", "Go-Lang"))

    assert config.skill_keywords == ("python", "go-lang")
    assert config.heading_lookup["WORK EXPERIENCE"] == "work"
    assert config.role_hint_re.search("Senior ENGINEER")


def test_load_config_reads_env_file(tmp_path, monkeypatch):
    skills_file = tmp_path / "skills.json"
    skills_file.write_text(json.dumps(["Kotlin", "Ktor"]), encoding="utf-8")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local overrides\n"
        f"RESUME_SKILLS_FILE=\"{skills_file}\"\n"
        "RESUME_MAX_INPUT_CHARS=5000\n",
        encoding="utf-8",
    )

    config = settings.load_config(env_file)

    assert config.skill_keywords == ("kotlin", "ktor")
    assert config.max_input_chars == 5000
    result = parse_resume_text("Built Android apps in Kotlin with Ktor backends", config=config)
    assert result.skills == ("kotlin", "ktor")


def test_load_config_plain_text_vocabulary(tmp_path, monkeypatch):
    skills_file = tmp_path / "skills.txt"
    skills_file.write_text("Elixir\n\nPhoenix\n", encoding="utf-8")
    monkeypatch.setenv("RESUME_SKILLS_FILE", str(skills_file))

    config = settings.load_config(tmp_path / "missing.env")

    assert config.skill_keywords == ("elixir", "phoenix")
    assert config.max_input_chars == settings.MAX_INPUT_CHARS


def test_load_config_rejects_bad_limit(tmp_path, monkeypatch):
    monkeypatch.setenv("RESUME_MAX_INPUT_CHARS", "0")

    with pytest.raises(ValueError):
        settings.load_config(tmp_path / "missing.env")


def test_input_ceiling_truncates_text():
    config = settings.EngineConfig(max_input_chars=40)
    text = "Jane Smith\n" + "filler " * 10 + "\nreach me at jane@example.com"

    result = parse_resume_text(text, config=config)

    assert result.basics.name == "Jane Smith"
    assert result.basics.email is None


def test_education_vocabularies_are_configurable():
    lines_in = ["Université de Lyon", "Licence en informatique", "2016 - 2019"]
    config = settings.EngineConfig(school_hints=("Université",), degree_hints=("licence",))

    items = extract_education(lines_in, config)

    assert config.school_hints == ("université",)
    assert len(items) == 1
    assert items[0].school == "Université de Lyon"
    assert items[0].degree == "Licence en informatique"
    assert items[0].date == "2016 - 2019"
    assert extract_education(lines_in) == []


def test_empty_hint_list_matches_nothing():
    config = settings.EngineConfig(label_words=())

    assert not config.label_re.search("Email: jane@example.com")
