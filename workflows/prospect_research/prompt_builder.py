from __future__ import annotations
import json

from workflows.prospect_research.schema import DEFAULT_STATUS, HEADERS

# ============================================
# 🔎 Prospect research prompt for the web-search model
# ============================================

COMPETITOR_BRANDS = [
    "Netafim", "Rivulis", "Irritec", "Hunter", "Rain Bird", "Toro", "Perrot",
    "Grundfos", "DAB", "Espa", "Caprari", "Bauer", "Naan", "Galcon", "K-Rain",
    "Eurodrip", "Idrofoglia", "Wilo", "Pedrollo",
]

COMPANY_TYPES = [
    "Irrigation dealers, distributors, and installers",
    "Landscape contractors offering irrigation services (GaLaBau in DE, paysagistes in FR, paesaggisti in IT, jardineros in ES, hoveniers in NL)",
    "Specialized irrigation retailers (Fachhandel)",
    "Agricultural irrigation companies and cooperatives",
    "Online B2B irrigation platforms",
    "Irrigation or landscaping industry associations (useful as gateway contacts)",
]

# Example value the model should put in each column of a company record
FIELD_HINTS = {
    "Nome Azienda": "full company name",
    "Città": "city",
    "Indirizzo": "street, postal code, city (empty string if unknown)",
    "Telefono": "+XX ... (empty string if unknown)",
    "Email": "email address (empty string if unknown)",
    "Sito Web": "website domain without https (empty string if unknown)",
    "Tipo": "Dealer / GaLaBau / Paesaggista / Fachhandel / SHK / E-commerce / Produttore / Associazione / Cooperativa",
    "Marchi Concorrenti Usati": "Brand1, Brand2 (empty string if unknown)",
    "Servizi Offerti": "brief description of services relevant to IREX",
    "Mercato Target": "Residenziale / Agricoltura / Sport / Verde pubblico / B2B",
    "Priorità": "ALTA or MEDIA or BASSA",
    "Note Commerciali": "useful commercial notes in Italian for the IREX sales team",
    "Nome Contatto": "contact person name (empty string if unknown)",
    "Stato": DEFAULT_STATUS,
}

research_prompt_template = """You are a B2B sales research assistant for IREX (Scarabelli Group), an Italian irrigation equipment manufacturer.

Search the web and find {min_companies}-{max_companies} REAL companies in {location} that operate in the irrigation industry.

Types to find:
{company_types}

COMPETITOR BRANDS — if a company uses any of these, set Priorità to ALTA:
{competitor_brands}

Priority rules:
- ALTA  → company openly uses declared competitor brands
- MEDIA → irrigation installer/dealer without declared brands; landscape contractor with irrigation services; cooperatives; e-commerce
- BASSA → plumber/SHK with irrigation as secondary service; maintenance-only landscapers; associations

Return ONLY valid JSON — no markdown, no explanation, nothing else:
{output_contract}"""


def format_location(area: str, country: str, region: str = "") -> str:
    location = f"{area}, {country}"
    if region:
        location += f" ({region})"
    return location


def output_contract() -> str:
    """JSON skeleton with every sheet column as a key, in sheet order."""
    example = {h: FIELD_HINTS[h] for h in HEADERS}
    return json.dumps({"companies": [example]}, ensure_ascii=False, indent=2)


def build_research_prompt(
    area: str,
    country: str,
    region: str = "",
    *,
    min_companies: int = 15,
    max_companies: int = 20,
) -> str:
    return research_prompt_template.format(
        min_companies=min_companies,
        max_companies=max_companies,
        location=format_location(area, country, region),
        company_types="\n".join(f"- {t}" for t in COMPANY_TYPES),
        competitor_brands=", ".join(COMPETITOR_BRANDS),
        output_contract=output_contract(),
    )
