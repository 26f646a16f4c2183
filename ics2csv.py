#!/usr/bin/env python
'''
@File    :   ics2csv.py
@Time    :   2025/12/14 21:12:40
@Author  :   hongyu zhang
@Version :   1.0
@Desc    :   ICS to delimited text converter
'''
import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import NamedTuple, Protocol, Sequence

from dateutil.parser import isoparse
from icalendar import Calendar, Component, vDDDTypes

from handlers import console, file


__version__ = '1.0.0'

TIMESTAMP_PATTERN = re.compile(r'^\d{8}T([01]\d|2[0-3])[0-5]\d[0-5]\d$')


class TimestampParseError(ValueError):
    """Raised when an event timestamp is missing or not in YYYYMMDDThhmmss form."""


class CalendarParseError(ValueError):
    """Raised when the input is not a valid calendar document."""


class Row(NamedTuple):
    name: str
    date: str
    start_time: str
    end_time: str
    duration: str


class RowHandler(Protocol):
    def __call__(self, rows: Sequence[Row]) -> None: ...


@dataclass(frozen=True)
class Options:
    ics_path: str
    out_path: str = 'out.csv'
    summary_filter: str = ''
    name: str = 'yourName'
    delimiter: str = '\t'
    to_stdout: bool = False


def parse_time(value: str) -> datetime:
    """Parse a compact timestamp such as '20240105T093000'.

    Args:
        value: Timestamp text without separators or UTC offset

    Returns:
        Naive datetime in the same time reference as written

    Raises:
        TimestampParseError: If the layout or any component is invalid
    """
    if not TIMESTAMP_PATTERN.match(value):
        raise TimestampParseError(f"Invalid timestamp format: {value!r}. Expected YYYYMMDDThhmmss")

    try:
        return isoparse(value)
    except ValueError as e:
        raise TimestampParseError(f"Invalid timestamp {value!r}: {e}") from e


def format_duration(delta: timedelta) -> str:
    """Format a time span as HH:MM, truncating seconds.

    Raises:
        ValueError: If the span is negative
    """
    if delta < timedelta(0):
        raise ValueError(f"Negative duration: {delta}")

    total_minutes = int(delta.total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def format_date(dt: datetime) -> str:
    return f"{dt.year:04d}/{dt.month:02d}/{dt.day:02d}"


def format_clock(dt: datetime) -> str:
    return f"{dt.hour:02d}:{dt.minute:02d}"


def extract_timestamp(component: Component, key: str) -> str:
    """Return the raw text of a DTSTART/DTEND property as written in the file."""
    ddd: list[vDDDTypes] | vDDDTypes | None = component.get(key)
    if ddd is None:
        raise TimestampParseError(f"Event '{component.get('SUMMARY', '')}' has no {key}")

    if isinstance(ddd, list):
        ddd = ddd[0]

    return ddd.to_ical().decode('utf-8')


def load_calendar(path: str | Path) -> Calendar:
    """Read and parse a single ICS file.

    Raises:
        OSError: If the file cannot be read
        CalendarParseError: If the content is not a VCALENDAR
    """
    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as f:
            content = f.read().strip()
    except UnicodeDecodeError as e:
        raise CalendarParseError(f"{path} is not valid UTF-8: {e}") from e

    if not content:
        raise CalendarParseError(f"No content in file {path}")

    try:
        calendar = Calendar.from_ical(content)
    except ValueError as e:
        raise CalendarParseError(f"Error parsing calendar {path}: {e}") from e

    if not isinstance(calendar, Calendar) or calendar.name != 'VCALENDAR':
        raise CalendarParseError(f"{path} does not contain a VCALENDAR")

    return calendar


def select_events(calendar: Calendar, summary_filter: str = '') -> list[Component]:
    """Return the calendar's VEVENTs, keeping only exact SUMMARY matches if a filter is set."""
    events = [c for c in calendar.subcomponents if c.name == 'VEVENT']
    if not summary_filter:
        return events
    return [e for e in events if str(e.get('SUMMARY', '')) == summary_filter]


def build_row(event: Component, name: str) -> Row:
    start = parse_time(extract_timestamp(event, 'DTSTART'))
    end = parse_time(extract_timestamp(event, 'DTEND'))

    return Row(
        name=name,
        date=format_date(start),
        start_time=format_clock(start),
        end_time=format_clock(end),
        duration=format_duration(end - start),
    )


def sort_rows(rows: Sequence[Row]) -> list[Row]:
    # sorted() is stable, equal (date, start_time) keep their input order
    return sorted(rows, key=lambda row: (row.date, row.start_time))


def convert(calendar: Calendar, options: Options) -> list[Row]:
    events = select_events(calendar, options.summary_filter)
    logging.info(f"Selected {len(events)} event(s)")

    rows = []
    for event in events:
        row = build_row(event, options.name)
        logging.debug(f"{event.get('SUMMARY', '')}: {row}")
        rows.append(row)

    return sort_rows(rows)


def make_handler(options: Options) -> RowHandler:
    if options.to_stdout:
        return console.Handler(delimiter=options.delimiter)
    return file.Handler(options.out_path, delimiter=options.delimiter)


def single_char(value: str) -> str:
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"delimiter must be a single character, got {value!r}")
    if value in '"\r\n':
        raise argparse.ArgumentTypeError(f"delimiter cannot be a quote or line break, got {value!r}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> tuple[Options, str]:
    parser = argparse.ArgumentParser(
        prog='ics2csv',
        description='Converts an ics file to a csv file'
    )

    parser.add_argument(
        '-i', '--ics',
        type=str,
        required=True,
        help='path to the ics file'
    )

    parser.add_argument(
        '-c', '--csv',
        type=str,
        default='out.csv',
        help='path to the output csv file (default: out.csv)'
    )

    parser.add_argument(
        '-f', '--filter',
        type=str,
        default='',
        help='keep only events whose summary equals this text exactly'
    )

    parser.add_argument(
        '-n', '--name',
        type=str,
        default='yourName',
        help='your name, written in the first column of every row (default: yourName)'
    )

    parser.add_argument(
        '-d', '--delimiter',
        type=single_char,
        default='\t',
        help='field delimiter for the csv (default: tab)'
    )

    parser.add_argument(
        '-s', '--stdout',
        action='store_true',
        help='write to stdout instead of a file'
    )

    parser.add_argument(
        '-l', '--log-level',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='INFO',
        help='set the logging level (default: INFO)'
    )

    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'ics2csv {__version__}',
        help='show program version and exit'
    )

    args = parser.parse_args(argv)

    options = Options(
        ics_path=args.ics,
        out_path=args.csv,
        summary_filter=args.filter,
        name=args.name,
        delimiter=args.delimiter,
        to_stdout=args.stdout,
    )
    return options, args.log_level


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the ICS to CSV converter."""
    options, log_level = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        calendar = load_calendar(options.ics_path)
    except OSError as e:
        logging.error(f"Error reading file {options.ics_path}: {e}")
        sys.exit(1)
    except CalendarParseError as e:
        logging.error(str(e))
        sys.exit(1)

    try:
        rows = convert(calendar, options)
    except ValueError as e:
        logging.error(f"Error building rows: {e}")
        sys.exit(1)

    handler = make_handler(options)
    try:
        handler(rows)
    except BrokenPipeError:
        raise
    except (OSError, ValueError) as e:
        logging.error(f"Error writing rows: {e}")
        sys.exit(1)


def cli() -> None:
    try:
        main()
    except KeyboardInterrupt:
        print(file=sys.stderr)
        sys.exit(130)
    except BrokenPipeError:
        sys.stderr = open(os.devnull, 'w')
        sys.exit(1)


if __name__ == "__main__":
    cli()
