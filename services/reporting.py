from __future__ import annotations

from typing import Dict, Optional

from models.scrape_summary import ScrapeSummary


def print_summary(summary: ScrapeSummary, extraction_stats: Optional[Dict] = None, api_usage: Optional[Dict] = None) -> None:
    """Print summary of one scrape run."""
    print("\n" + "="*60)
    print("AVALOQ CANDIDATE SCRAPER - SUMMARY")
    print("="*60)
    print(f"Started At: {summary.started_at.isoformat()}")
    print(f"Finished At: {summary.finished_at.isoformat() if summary.finished_at else 'N/A'}")
    print(f"Success: {summary.success}")
    print()
    print(f"  Total Found: {summary.total_found}")
    print(f"  Total Added: {summary.total_added}")
    print(f"  Duplicates Skipped: {summary.total_duplicates}")
    print(f"  Failed: {summary.total_failed}")
    if extraction_stats:
        print()
        print("Extraction Statistics:")
        print(f"  Successful Extractions: {extraction_stats.get('successful_extractions', 0)}")
        print(f"  Role Not Resolved: {extraction_stats.get('role_unresolved', 0)}")
        print(f"  Company Not Resolved: {extraction_stats.get('company_unresolved', 0)}")
        print(f"  Experience Unknown: {extraction_stats.get('experience_unknown', 0)}")
    if api_usage:
        print()
        print(f"API Calls Made: {api_usage.get('api_calls_made', 0)}")
        print(f"API Usage: {api_usage.get('estimated_daily_limit_used', 'N/A')}")
    print("="*60)
