"""Command line entry point.

Example::

    doc-inspector --format markdown --conf conf.json --result-format json README.md
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .config import ConfigurationError, ConfigurationManager
from .config.models import Configuration
from .formatters import FORMATTERS, create_formatter
from .models.document import Document
from .models.enums import DocumentFormat
from .models.validation import ValidationError
from .parsers import DocumentParser
from .parsers.exceptions import ParseError
from .pipeline import ValidationPipeline
from .validators import get_validator_factory


logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doc-inspector",
        description="Check the prose of plain, wiki, Markdown, reST and Re:VIEW documents.",
    )
    parser.add_argument(
        "-f", "--format",
        choices=[f.value for f in DocumentFormat],
        default=None,
        help="input format (detected from the file extension when omitted)",
    )
    parser.add_argument("-c", "--conf", help="JSON configuration file")
    parser.add_argument(
        "-r", "--result-format",
        choices=sorted(FORMATTERS),
        default="plain",
        help="output format of the report",
    )
    parser.add_argument(
        "-l", "--limit",
        type=int,
        default=0,
        help="exit with 1 when more errors than this are found",
    )
    parser.add_argument("-L", "--lang", default="en", help="language of the default configuration")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    parser.add_argument("files", nargs="+", metavar="FILES")
    return parser


def load_configuration(path: Optional[str], lang: str = "en") -> Configuration:
    """
    Load the configuration file, or the default configuration when none is given.

    Raises:
        ConfigurationError: If the file is invalid.
    """
    if path is None:
        return ConfigurationManager.default(lang=lang)
    manager = ConfigurationManager()
    manager.load(path, validator_names=get_validator_factory().get_validator_names())
    return manager.configuration


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        configuration = load_configuration(args.conf, lang=args.lang)
        pipeline = ValidationPipeline.from_configuration(configuration)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    document_parser = DocumentParser()
    sentence_extractor = configuration.create_sentence_extractor()
    tokenizer = configuration.create_tokenizer()

    results: List[Tuple[Document, List[ValidationError]]] = []
    failed = 0
    for path in args.files:
        try:
            document = document_parser.parse_file(
                path,
                document_format=args.format,
                sentence_extractor=sentence_extractor,
                tokenizer=tokenizer,
            )
        except (OSError, ParseError) as exc:
            failed += 1
            print(f"Failed to read {path}: {exc}", file=sys.stderr)
            continue
        results.append((document, pipeline.check_document(document)))

    sys.stdout.write(create_formatter(args.result_format).format(results))

    error_count = sum(len(errors) for _, errors in results)
    logger.info(f"{error_count} errors in {len(results)} documents ({failed} unreadable)")
    if error_count > args.limit:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
