from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional

from api.Google_Sheets.Prospect_Sheet.create_prospect_sheet import create_prospect_sheet
from workflows.AI_Integrations.llm_client import LLMClient
from workflows.prospect_research.errors import NoCompaniesFound
from workflows.prospect_research.logger import get_logger
from workflows.prospect_research.research import research_companies
from workflows.prospect_research.schema import ProspectRow, count_priorities

logger = get_logger()

NO_COMPANIES_MSG = "Nessuna azienda trovata. Prova con un'area diversa."

SheetPublisher = Callable[[str, str, List[ProspectRow]], str]


def run_prospect_pipeline(
    area: str,
    country: str,
    region: str = "",
    *,
    client: Optional[LLMClient] = None,
    publish: Optional[SheetPublisher] = None,
) -> Dict[str, Any]:
    """Research -> sheet -> {"url", "total", "counts"}. Raises NoCompaniesFound before any sheet is made."""
    publish = publish or create_prospect_sheet

    logger.info("🚀 Starting prospect pipeline...")
    companies = research_companies(area, country, region, client=client)
    if not companies:
        logger.warning(f"⚠️ No companies found for {area}, {country}")
        raise NoCompaniesFound(NO_COMPANIES_MSG)

    url = publish(area, country, companies)
    counts = count_priorities(companies)

    logger.info(f"✅ Prospect sheet ready: {url} ({len(companies)} companies, {counts})")
    return {"url": url, "total": len(companies), "counts": counts}
