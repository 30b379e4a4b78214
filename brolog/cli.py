"""brolog command line: summarize a Bro/Zeek log directory, or dump one log as JSON."""

import json
import logging
import signal
import sys
from argparse import ArgumentParser

from brolog import __version__
from brolog.config import load_config
from brolog.dispatcher import LogDispatcher, open_log
from brolog.errors import BroLogError, ConfigError
from brolog.header import read_header
from brolog.log import configure_logging
from brolog.output import format_table_text, write_summary
from brolog.parsers import get_schema, record_to_dict, resolve_bool_encodings
from brolog.summary import Summarizer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="brolog",
        description="Decode Bro/Zeek logs and count records by configured fields.",
    )
    parser.add_argument(
        "--config",
        help="YAML configuration file (default: $BROLOG_CONFIG)",
    )
    parser.add_argument(
        "--bro-path",
        help="Directory of logs to read (overrides application.bro_path)",
    )
    parser.add_argument(
        "--out-path",
        help="Directory for summary output (overrides application.out_path)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of files processed in parallel",
    )
    parser.add_argument(
        "--log-level",
        help="trace, debug, info, warn, error or fatal",
    )
    parser.add_argument(
        "--print",
        action="store_true",
        help="Also print each summary table to stdout",
    )
    parser.add_argument(
        "--dump",
        metavar="FILE",
        help="Decode a single log and print its records as JSON lines",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def dump_log(path: str, encodings) -> int:
    """Print every record of *path* as one JSON object per line."""
    try:
        with open_log(path) as f:
            header, body = read_header(f)
            try:
                schema = get_schema(header.type_name)
            except KeyError as e:
                logger.error("%s: %s", path, e.args[0])
                return EXIT_FATAL
            for record in schema.decode(
                header, body, source=path, bool_encoding=encodings[schema.name]
            ):
                print(json.dumps(record_to_dict(record)))
    except OSError as e:
        logger.error("Cannot read %s: %s", path, e)
        return EXIT_FATAL
    except BroLogError as e:
        logger.error("%s: %s", path, e)
        return EXIT_FATAL
    return EXIT_OK


def run(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            bro_path=args.bro_path,
            out_path=args.out_path,
            workers=args.workers,
            log_level=args.log_level,
        )
        configure_logging(config.log_level, config.log_file)
    except ConfigError as e:
        print(f"brolog: {e}", file=sys.stderr)
        return EXIT_FATAL

    try:
        encodings = resolve_bool_encodings(config.bool_encoding)
        if args.dump:
            return dump_log(args.dump, encodings)
        summarizer = Summarizer.from_config(config.summarize_by)
    except ConfigError as e:
        logger.critical("%s", e)
        return EXIT_FATAL

    dispatcher = LogDispatcher(summarizer, workers=config.workers, bool_encodings=encodings)

    def signal_handler(signum, frame):
        logger.info("Received signal %d, stopping after the current records...", signum)
        dispatcher.cancel()

    previous = {sig: signal.signal(sig, signal_handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        stats = dispatcher.run(config.bro_path)
    except ConfigError as e:
        logger.critical("%s", e)
        return EXIT_FATAL
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    for path in write_summary(config.out_path, summarizer, stats):
        logger.info("Wrote %s", path)

    if args.print:
        for name in sorted(summarizer.tables):
            print(format_table_text(summarizer.tables[name]))
            print()

    return EXIT_INTERRUPTED if dispatcher.cancelled else EXIT_OK


def main():
    try:
        sys.exit(run())
    except BrokenPipeError:
        sys.exit(EXIT_OK)
