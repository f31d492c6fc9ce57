import json

import pytest

from workflows.prospect_research import pipeline
from workflows.prospect_research.errors import InvalidModelOutput, NoCompaniesFound
from workflows.prospect_research.research import research_companies
from workflows.prospect_research.settings import Settings


class FakeLLM:
    def __init__(self, reply, settings=None):
        self.reply = reply
        self.settings = settings or Settings(gemini_api_key="k")
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        return self.reply


def _reply(*priorities):
    return "```json\n" + json.dumps({
        "companies": [{"Nome Azienda": f"Co {i}", "Priorità": p} for i, p in enumerate(priorities)]
    }) + "\n```"


def test_research_builds_prompt_from_settings():
    llm = FakeLLM(_reply("ALTA"), Settings(min_companies=5, max_companies=8))
    rows = research_companies("Hamburg", "Germany", "", client=llm)
    assert len(rows) == 1
    assert "find 5-8 REAL companies in Hamburg, Germany" in llm.prompts[0]


def test_pipeline_returns_url_total_and_counts():
    published = {}

    def publish(area, country, rows):
        published.update(area=area, country=country, rows=rows)
        return "https://docs.google.com/spreadsheets/d/abc"

    llm = FakeLLM(_reply("ALTA", "MEDIA", "MEDIA", "BASSA", "?"))
    result = pipeline.run_prospect_pipeline("Lyon", "France", client=llm, publish=publish)

    assert result == {
        "url": "https://docs.google.com/spreadsheets/d/abc",
        "total": 5,
        "counts": {"ALTA": 1, "MEDIA": 2, "BASSA": 1},
    }
    assert published["area"] == "Lyon"
    assert published["country"] == "France"
    assert len(published["rows"]) == 5


def test_no_companies_never_creates_a_sheet():
    def publish(*args):
        raise AssertionError("sheet must not be created")

    with pytest.raises(NoCompaniesFound) as exc:
        pipeline.run_prospect_pipeline("Nowhere", "Atlantis", client=FakeLLM('{"companies": []}'), publish=publish)
    assert str(exc.value) == pipeline.NO_COMPANIES_MSG


def test_invalid_model_output_propagates():
    with pytest.raises(InvalidModelOutput):
        pipeline.run_prospect_pipeline("Lyon", "France", client=FakeLLM("sorry, I can't"), publish=lambda *a: "")


def test_default_publisher_is_the_sheet_builder(monkeypatch):
    monkeypatch.setattr(pipeline, "create_prospect_sheet", lambda area, country, rows: f"url-{area}")
    result = pipeline.run_prospect_pipeline("Porto", "Portugal", client=FakeLLM(_reply("BASSA")))
    assert result["url"] == "url-Porto"
