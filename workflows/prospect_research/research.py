from __future__ import annotations
from typing import List, Optional

from workflows.AI_Integrations.llm_client import LLMClient
from workflows.prospect_research.logger import get_logger
from workflows.prospect_research.prompt_builder import build_research_prompt, format_location
from workflows.prospect_research.response_parser import parse_companies
from workflows.prospect_research.schema import ProspectRow
from workflows.prospect_research.settings import Settings

logger = get_logger()


def research_companies(
    area: str,
    country: str,
    region: str = "",
    client: Optional[LLMClient] = None,
    settings: Optional[Settings] = None,
) -> List[ProspectRow]:
    """One web-search generation for the geography, parsed into prospect rows."""
    settings = settings or (client.settings if client else Settings.from_env())
    client = client or LLMClient(settings)

    prompt = build_research_prompt(
        area,
        country,
        region,
        min_companies=settings.min_companies,
        max_companies=settings.max_companies,
    )
    logger.info(f"🔎 Researching prospects in {format_location(area, country, region)}")

    text = client.generate(prompt)
    companies = parse_companies(text)

    logger.info(f"📊 Parsed {len(companies)} companies from model reply")
    return companies
