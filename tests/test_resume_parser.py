import structuring.parser as parser_module
from structuring.schema import ResumeParsed
from structuring.settings import DEFAULT_CONFIG

parse_resume_text = parser_module.parse_resume_text


SCENARIO_A = """Jane Smith
jane.smith@example.com | +1 (415) 555-0134
WORK EXPERIENCE
Software Engineer — Acme Corp
Jan 2020 - Dec 2021
• Built REST APIs in Python serving two million requests per day
• Migrated the deployment pipeline to Docker and AWS
EDUCATION
University of Washington
Bachelor of Science in Computer Science
GPA: 3.85
"""


def test_work_experience_header_dates_and_bullets():
    result = parse_resume_text(SCENARIO_A)

    assert len(result.experiences) == 1
    entry = result.experiences[0]
    assert entry.title == "Software Engineer"
    assert entry.company == "Acme Corp"
    assert entry.start == "Jan 2020"
    assert entry.end == "Dec 2021"
    assert "Built REST APIs in Python serving two million requests per day" in entry.highlights
    assert "Migrated the deployment pipeline to Docker and AWS" in entry.highlights
    assert entry.summary == entry.highlights[0]


def test_basics_and_skills_from_scenario_text():
    result = parse_resume_text(SCENARIO_A)

    assert result.basics.name == "Jane Smith"
    assert result.basics.email == "jane.smith@example.com"
    assert result.basics.phone == "+1 (415) 555-0134"
    assert result.basics.link is None
    assert result.basics.location is None
    assert result.skills == ("python", "docker", "aws")


def test_school_degree_and_gpa_form_one_education_entry():
    result = parse_resume_text(SCENARIO_A)

    assert len(result.education) == 1
    edu = result.education[0]
    assert edu.school == "University of Washington"
    assert edu.degree == "Bachelor of Science in Computer Science"
    assert edu.gpa == "3.85"


def test_unstructured_line_with_years_is_synthesized():
    text = "Jane Doe\nFreelance Web Developer 2018 2022 building storefronts for local shops"
    result = parse_resume_text(text)

    assert len(result.experiences) == 1
    entry = result.experiences[0]
    assert entry.start == "2018"
    assert entry.end == "2022"
    assert entry.title.startswith("Freelance Web Developer")


def test_skills_follow_vocabulary_order():
    result = parse_resume_text("Skills: React, Node.js, Docker")

    assert result.skills == ("react", "node", "docker")


def test_empty_text_returns_empty_record():
    result = parse_resume_text("")

    assert result == ResumeParsed.empty()
    assert result.to_dict() == {"basics": {}, "skills": [], "experiences": [], "education": []}


def test_same_role_in_two_sections_collapses_to_one_entry():
    text = """WORK EXPERIENCE
Data Analyst — Globex (Remote)
2019 - 2021
Built weekly revenue dashboards for finance
PROFILE
Data Analyst – GLOBEX
2019 – 2021
"""
    result = parse_resume_text(text)

    assert len(result.experiences) == 1
    entry = result.experiences[0]
    assert entry.company == "Globex"
    assert (entry.start, entry.end) == ("2019", "2021")
    assert entry.highlights == ("Built weekly revenue dashboards for finance",)


def test_wrapped_summary_lines_are_joined():
    text = """Alex Morgan
SUMMARY
Product-focused engineer with eight years of experience building
data platforms and developer tooling.
"""
    result = parse_resume_text(text)

    assert result.basics.summary == (
        "Product-focused engineer with eight years of experience building "
        "data platforms and developer tooling."
    )


def test_summary_is_capped():
    text = "SUMMARY\n" + " ".join(["experienced"] * 200)
    result = parse_resume_text(text)

    assert len(result.basics.summary) <= 650


def test_parse_is_deterministic():
    first = parse_resume_text(SCENARIO_A)
    second = parse_resume_text(SCENARIO_A)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_totality_on_hostile_inputs():
    samples = [
        None,
        "",
        "\n\n\n",
        "no line breaks at all just one long sentence about nothing",
        "\x00\x01\x02 (cid:12)(cid:7) garbage",
        b"\xff\xfe binary-ish bytes",
        12345,
        "x" * 250_000,
        "Engineer — " * 5000,
    ]
    for sample in samples:
        result = parse_resume_text(sample)
        assert isinstance(result, ResumeParsed)
        assert len(result.skills) <= 40
        assert len(result.experiences) <= 6
        assert len(result.education) <= 4
        for entry in result.experiences:
            assert len(entry.highlights) <= 4


def test_glyph_artifacts_are_removed():
    result = parse_resume_text("Jane(cid:3) Smith\nSUMMARY\nBuilds(cid:12) things")

    assert result.basics.name == "Jane Smith"
    assert "(cid" not in result.basics.summary


def test_experience_cap_and_highlight_cap():
    headers = [
        f"Software Engineer — Company {name}"
        for name in ("Alpha", "Bravo", "Charlie", "Delta", "Echo", "Foxtrot", "Golf", "Hotel")
    ]
    bullets = [f"Delivered milestone number {word} for the platform team" for word in
               ("one", "two", "three", "four", "five", "six", "seven", "eight")]
    text = "WORK EXPERIENCE\n" + headers[0] + "\n" + "\n".join(bullets) + "\n" + "\n".join(headers[1:])
    result = parse_resume_text(text)

    assert len(result.experiences) == 6
    assert len(result.experiences[0].highlights) == 4


def test_education_cap():
    schools = "\n".join(f"University of {name}" for name in ("Ashford", "Belmont", "Carlow", "Dunmore", "Elmwood"))
    result = parse_resume_text("EDUCATION\n" + schools)

    assert len(result.education) == 4


def test_skill_cap_with_large_vocabulary():
    vocab = [f"skill{i:02d}" for i in range(50)]
    config = DEFAULT_CONFIG.with_skills(vocab)
    result = parse_resume_text(" ".join(vocab), config=config)

    assert len(result.skills) == 40
    assert result.skills[0] == "skill00"


def test_debug_trace_is_printed_when_enabled(capsys):
    parser_module.set_debug(True)
    try:
        parse_resume_text(SCENARIO_A)
    finally:
        parser_module.set_debug(False)

    out = capsys.readouterr().out
    assert "[parser] parse: start" in out
    assert "[parser] split_sections" in out


def test_prose_words_do_not_become_skills():
    result = parse_resume_text(
        "Jane Doe\nDesigned scalable, trusted digital services and expressed requirements swiftly"
    )

    assert result.skills == ()
