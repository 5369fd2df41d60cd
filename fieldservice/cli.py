import argparse
import logging
import os
from datetime import date, datetime
from typing import Optional

from .calendar import assemble_view
from .calendar.render import CalendarView
from .config import FIELDSERVICE_API_URL
from .services.job_feed import FeedResult, fetch_feed

logger = logging.getLogger(__name__)

ROLE_MARKERS = {"start": "[>", "middle": "==", "end": "<]", "single-day": "[]"}


def render_agenda(calendar_view: CalendarView) -> list[str]:
    """Plain-text agenda: one block per day that has jobs."""
    lines = [calendar_view.title, "=" * len(calendar_view.title)]
    busy = [cell for cell in calendar_view.cells if cell.segments]
    if not busy:
        lines.append("No jobs scheduled in this period.")
        return lines

    for cell in busy:
        lines.append("")
        lines.append(cell.date.strftime("%a %d/%m/%Y") + (" (today)" if cell.isToday else ""))
        for seg in cell.segments:
            kind = "activity" if seg.isActivity else "job"
            time_label = seg.startDate.strftime("%H:%M") if seg.showLabel else "     "
            lines.append(
                f"  {ROLE_MARKERS[seg.role]} {time_label} {seg.title} - {seg.clientName} "
                f"[{seg.status}, {kind}] {seg.progressPercentage}%"
            )
    return lines


def build_view(feed: FeedResult, anchor: date, view: str, now: Optional[datetime] = None) -> CalendarView:
    return assemble_view(feed.jobs, feed.clients, anchor, view, now=now)


def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Print the job calendar of a Field Service API as text.")
    ap.add_argument(
        "--api-url",
        default=FIELDSERVICE_API_URL,
        help="API base URL (default: env FIELDSERVICE_API_URL or http://localhost:8000)",
    )
    ap.add_argument(
        "--token",
        default=os.getenv("FIELDSERVICE_TOKEN"),
        help="Bearer session token (default: env FIELDSERVICE_TOKEN)",
    )
    ap.add_argument("--view", choices=("day", "week", "month"), default="week", help="Calendar view (default: week)")
    ap.add_argument("--date", default=None, help="Anchor date YYYY-MM-DD (default: today)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log fetch details")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.date:
        try:
            anchor = date.fromisoformat(args.date)
        except ValueError:
            ap.error(f"--date must be YYYY-MM-DD, got '{args.date}'")
    else:
        anchor = date.today()

    feed = fetch_feed(args.api_url, args.token)
    if feed.failed:
        logger.warning(f"Could not load: {', '.join(feed.failed)}")

    for line in render_agenda(build_view(feed, anchor, args.view)):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
