#!/usr/bin/env python3
"""
Avaloq Candidate Scraper

Searches Google for LinkedIn profiles of Avaloq professionals in Singapore,
Malaysia and the Philippines, extracts structured candidate fields from each
hit and inserts new candidates into the configured store.

Runs one full scrape and exits: 0 on success, 1 on failure. Suitable for an
external scheduler; use `python cli.py serve` for the HTTP trigger surface.
"""

import logging
import sys

from config.settings import get_settings
from errors import ConfigurationError
from pipelines.scrape_candidates import build_scraper
from services.reporting import print_summary
from utils.logging_setup import init_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    init_logging(settings.log_level)
    logger.info("Starting LinkedIn scraper...")

    try:
        scraper = build_scraper(settings)
        summary = scraper.run()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Scraper failed: {e}")
        return 1

    print_summary(summary, scraper.extractor.get_extraction_stats())
    return 0 if summary.success else 1


if __name__ == "__main__":
    sys.exit(main())
