import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import date

from config.settings import get_settings
from data_extractor import extract
from db.connection import get_connection
from db import schema
from errors import ConfigurationError
from models.search_result_item import SearchResultItem
from pipelines.scrape_candidates import build_scraper
from services.reporting import print_summary
from utils.logging_setup import init_logging

logger = logging.getLogger(__name__)


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    print("Schema ready")


def cmd_run(args):
    settings = replace(get_settings(), db_path=args.db)
    try:
        scraper = build_scraper(settings)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1
    summary = scraper.run()
    api_usage = scraper.searcher.get_api_usage() if hasattr(scraper.searcher, "get_api_usage") else None
    print_summary(summary, scraper.extractor.get_extraction_stats(), api_usage)
    return 0 if summary.success else 1


def cmd_extract(args):
    item = SearchResultItem(title=args.title, snippet=args.snippet, link=args.link)
    today = date.fromisoformat(args.date) if args.date else None
    record = extract(item, args.country, today=today)
    print(json.dumps(record.to_store_fields(), indent=2, ensure_ascii=False))
    return 0


def _scheduled_scrape(settings, tracker):
    from pipelines.scrape_candidates import run_scrape

    if not tracker.try_start("scheduled"):
        logger.info("Scrape already running, skipping scheduled run")
        return
    tracker.execute("scheduled", lambda: run_scrape(settings))


def _start_cron(cron_spec: str, settings, tracker):
    from apscheduler.schedulers.background import BackgroundScheduler
    from apscheduler.triggers.cron import CronTrigger

    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        _scheduled_scrape,
        CronTrigger.from_crontab(cron_spec, timezone="UTC"),
        args=[settings, tracker],
        id="candidate-scrape",
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    logger.info(f"In-process schedule registered: {cron_spec} (UTC)")
    return scheduler


def cmd_serve(args):
    import uvicorn
    from api.app import create_app
    from services.run_tracker import RunTracker

    settings = get_settings()
    tracker = RunTracker()
    scheduler = _start_cron(args.cron, settings, tracker) if args.cron else None
    logger.info(f"{settings.service_name} listening on {args.host}:{args.port}")
    try:
        uvicorn.run(create_app(settings, tracker=tracker), host=args.host, port=args.port, log_level=settings.log_level.lower())
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
    return 0


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Avaloq candidate scraper CLI")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create the local candidates table")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_run = sub.add_parser("run", help="Run one full scrape and print the summary")
    p_run.set_defaults(func=cmd_run)

    p_srv = sub.add_parser("serve", help="Start the HTTP control surface")
    p_srv.add_argument("--host", default="0.0.0.0")
    p_srv.add_argument("--port", type=int, default=settings.port, help="Port (default from PORT, 3000)")
    p_srv.add_argument("--cron", default=None, help='Also run scrapes in-process on a crontab schedule, e.g. "0 2 * * *"')
    p_srv.set_defaults(func=cmd_serve)

    p_ext = sub.add_parser("extract", help="Run the field extractor on a single title/snippet and print JSON")
    p_ext.add_argument("--title", required=True)
    p_ext.add_argument("--snippet", default="")
    p_ext.add_argument("--link", default="")
    p_ext.add_argument("--country", default="Singapore")
    p_ext.add_argument("--date", default=None, help="Date Added override (YYYY-MM-DD)")
    p_ext.set_defaults(func=cmd_extract)
    return parser


def main(argv=None):
    settings = get_settings()
    init_logging(settings.log_level)
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
