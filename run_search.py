"""CLI entry point.

This script runs one job search and prints (or writes) the results as JSON.

Examples:
    python run_search.py "software engineer jobs in London"
    python run_search.py "data engineer" --location Berlin --remote remote --limit 30
    python run_search.py "backend developer" --job-type full-time --sort recent --out jobs.json

A bare query goes through the same free-text path a tool host uses
(location and limit come from settings). Any structured flag switches to an
explicit query built from the flags.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from job_search.config import settings
from job_search.errors import JobSearchError
from job_search.models import SearchQuery
from job_search.tool import chat_linkedin_jobs, get_default_search, records_to_json

STRUCTURED_FLAGS = ("location", "date_posted", "job_type", "remote", "salary", "experience", "sort", "limit", "page")


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Search LinkedIn job postings.")
    p.add_argument("query", type=str, help="Search text, e.g. 'software engineer jobs in London'.")
    p.add_argument("--out", type=str, default=None, help="Write JSON to this file instead of stdout.")
    p.add_argument("--location", type=str, default=None)
    p.add_argument("--date-posted", type=str, default=None, help="past month | past week | 24hr")
    p.add_argument("--job-type", type=str, default=None, help="full-time | part-time | contract | ...")
    p.add_argument("--remote", type=str, default=None, help="on-site | remote | hybrid")
    p.add_argument("--salary", type=str, default=None, help="40000 | 60000 | 80000 | 100000 | 120000")
    p.add_argument("--experience", type=str, default=None, help="internship | entry level | ... | executive")
    p.add_argument("--sort", type=str, default=None, help="recent | relevant")
    p.add_argument("--limit", type=int, default=None, help="Max jobs to return (0 = no cap).")
    p.add_argument("--page", type=int, default=None, help="Skip this many 25-job pages.")
    return p.parse_args()


def structured_query(args: argparse.Namespace) -> SearchQuery:
    return SearchQuery(
        keyword=args.query,
        location=args.location if args.location is not None else settings.DEFAULT_LOCATION,
        date_since_posted=args.date_posted,
        job_type=args.job_type,
        remote_filter=args.remote,
        salary=args.salary,
        experience_level=args.experience,
        sort_by=args.sort,
        limit=args.limit if args.limit is not None else settings.DEFAULT_LIMIT,
        page=args.page or 0,
    )


def main() -> int:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    args = parse_args()

    try:
        if any(getattr(args, f) is not None for f in STRUCTURED_FLAGS):
            output = records_to_json(get_default_search().search(structured_query(args)))
        else:
            output = chat_linkedin_jobs({"query": args.query})
    except (JobSearchError, ValueError) as exc:
        logging.getLogger(__name__).error("%s", exc)
        return 1
    finally:
        get_default_search().close()

    if args.out:
        out_path = Path(args.out).expanduser().resolve()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(output, encoding="utf-8")
        print(f"Wrote results to: {out_path}")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
