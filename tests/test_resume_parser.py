from core.resume_parser import extract_name, parse_resume_text

RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567
Austin, TX

Summary: Backend engineer focused on search systems.

Skills: Python, FastAPI, Redis, Kubernetes

Experience
Acme Corp - Senior Engineer, built ranking services for search.

Globex - Engineer, maintained data pipelines and APIs.

Education
State University
BSc Computer Science

Certifications: AWS Certified Developer

Languages: English, Spanish
"""


def test_contact_fields():
    parsed = parse_resume_text(RESUME)
    assert parsed.name == "Jane Doe"
    assert parsed.email == "jane.doe@example.com"
    assert parsed.phone == "(555) 123-4567"
    assert parsed.location == "Austin, TX"
    assert parsed.summary == "Backend engineer focused on search systems."


def test_sections():
    parsed = parse_resume_text(RESUME)
    assert parsed.skills == ["Python", "FastAPI", "Redis", "Kubernetes"]
    assert len(parsed.experience) == 2
    assert parsed.experience[0].description.startswith("Acme Corp")
    assert [e.institution for e in parsed.education] == ["State University"]
    assert parsed.education[0].degree == "BSc Computer Science"
    assert parsed.certifications == ["AWS Certified Developer"]
    assert parsed.languages == ["English", "Spanish"]


def test_name_only_from_first_non_blank_line():
    assert extract_name("\n\nJohn Smith\nEngineer") == "John Smith"
    assert extract_name("CURRICULUM VITAE\nJohn Smith") == ""


def test_empty_text_gives_empty_fields():
    parsed = parse_resume_text("")
    assert parsed.email == ""
    assert parsed.skills == []
    assert parsed.experience == []
