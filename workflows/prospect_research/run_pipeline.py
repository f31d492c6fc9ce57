"""
Generate an IREX prospect sheet from the command line, without the HTTP API.

Usage:
    python3 -m workflows.prospect_research.run_pipeline --country Germany --area Hamburg
    python3 -m workflows.prospect_research.run_pipeline --country France --area Lyon --region Auvergne-Rhône-Alpes

Missing required values are asked for interactively.
"""
from __future__ import annotations
import argparse
import sys

from workflows.prospect_research.errors import ProspectPipelineError
from workflows.prospect_research.pipeline import run_prospect_pipeline


def _ask(value: str | None, label: str) -> str:
    value = (value or "").strip()
    if not value:
        value = input(f"{label}: ").strip()
    return value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate an IREX prospect Google Sheet.")
    parser.add_argument("--country", help="e.g. Germany, France, Italy")
    parser.add_argument("--area", help="city or area, e.g. Hamburg")
    parser.add_argument("--region", default="", help="optional region, e.g. Bavaria")
    args = parser.parse_args(argv)

    country = _ask(args.country, "🌍 Paese")
    area = _ask(args.area, "📍 Città / Area")
    if not country or not area:
        print("❌ I campi 'area' e 'country' sono obbligatori.")
        return 2

    try:
        result = run_prospect_pipeline(area, country, (args.region or "").strip())
    except ProspectPipelineError as e:
        print(f"❌ {e}")
        return 1

    counts = result["counts"]
    print(f"✅ Google Sheet pronto: {result['url']}")
    print(f"📊 {result['total']} aziende | ALTA {counts['ALTA']}, MEDIA {counts['MEDIA']}, BASSA {counts['BASSA']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
