"""
Command-line interface for the ISO/IEC/IEEE 24765 glossary translator.

Commands:
    translate   Translate the English glossary into Japanese.
    resume      Continue an interrupted run from a checkpoint file.
    validate    Check a translated glossary and write a text report.

Usage:
    iso24765-translator translate
    iso24765-translator translate input/terms.json output/terms-ja.json --batch-size 5
    iso24765-translator resume output/terms-ja.backup-300.json
    iso24765-translator validate input/terms.json output/terms-ja.json report.txt

Exit codes:
    0    Success (validate: dataset is valid)
    1    Fatal error (validate: dataset has errors)
    2    Invalid command line
    130  Interrupted

Author: Leonardo Pacciani-Mori
License: MIT
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config.logging_config import get_logger, setup_logging
from .config.settings import (
    BATCH_SIZE,
    CHECKPOINT_INTERVAL,
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_REPORT_PATH,
    TRANSLATION_RETRY_COUNT,
    TRANSLATION_RETRY_DELAY,
)
from .core.dataset import load_terms, load_translated_terms
from .core.exceptions import GlossaryTranslatorError
from .translation.gateway import TranslationGateway
from .translation.processor import BatchProcessor, ProcessorConfig
from .translation.resume import resume
from .utils.progress import (
    TranslationProgressDisplay,
    print_run_summary,
    print_validation_summary,
)
from .validation import save_report, validate_files

logger = get_logger(__name__)


def create_gateway() -> TranslationGateway:
    """Gateway used by the translate and resume commands."""
    from .browser.chrome_translator import ChromeTranslatorGateway
    return ChromeTranslatorGateway()


def _add_run_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--batch-size",
        type=int,
        default=BATCH_SIZE,
        help=f"Number of terms translated concurrently (default: {BATCH_SIZE})"
    )
    parser.add_argument(
        "--retry-count",
        type=int,
        default=TRANSLATION_RETRY_COUNT,
        help=f"Attempts per field before falling back (default: {TRANSLATION_RETRY_COUNT})"
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=TRANSLATION_RETRY_DELAY,
        help=f"Base backoff delay in seconds (default: {TRANSLATION_RETRY_DELAY})"
    )
    parser.add_argument(
        "--checkpoint-interval",
        type=int,
        default=CHECKPOINT_INTERVAL,
        help=f"Terms between checkpoint files (default: {CHECKPOINT_INTERVAL})"
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable live progress display"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iso24765-translator",
        description="Translate the ISO/IEC/IEEE 24765 glossary from English to Japanese "
                    "with Chrome's built-in Translator API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Translate with default paths
    iso24765-translator translate

    # Resume from the last checkpoint
    iso24765-translator resume output/iso24765-translated-terminology.backup-300.json

    # Validate the result
    iso24765-translator validate
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    translate_parser = subparsers.add_parser("translate", help="Translate the glossary")
    translate_parser.add_argument("input", nargs="?", default=DEFAULT_INPUT_PATH,
                                  help=f"English glossary (default: {DEFAULT_INPUT_PATH})")
    translate_parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT_PATH,
                                  help=f"Output file (default: {DEFAULT_OUTPUT_PATH})")
    _add_run_options(translate_parser)

    resume_parser = subparsers.add_parser("resume", help="Resume from a checkpoint file")
    resume_parser.add_argument("checkpoint", help="Checkpoint file to resume from")
    resume_parser.add_argument("input", nargs="?", default=DEFAULT_INPUT_PATH,
                               help=f"English glossary (default: {DEFAULT_INPUT_PATH})")
    resume_parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT_PATH,
                               help=f"Output file (default: {DEFAULT_OUTPUT_PATH})")
    resume_parser.add_argument(
        "--retranslate-stale",
        action="store_true",
        help="Translate again checkpoint entries whose English source changed"
    )
    _add_run_options(resume_parser)

    validate_parser = subparsers.add_parser("validate", help="Validate a translated glossary")
    validate_parser.add_argument("input", nargs="?", default=DEFAULT_INPUT_PATH,
                                 help=f"English glossary (default: {DEFAULT_INPUT_PATH})")
    validate_parser.add_argument("translated", nargs="?", default=DEFAULT_OUTPUT_PATH,
                                 help=f"Translated glossary (default: {DEFAULT_OUTPUT_PATH})")
    validate_parser.add_argument("report", nargs="?", default=DEFAULT_REPORT_PATH,
                                 help=f"Report file (default: {DEFAULT_REPORT_PATH})")

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: The parsed arguments.
    """
    return build_parser().parse_args(argv)


def _processor_config(args: argparse.Namespace) -> ProcessorConfig:
    return ProcessorConfig(
        batch_size=args.batch_size,
        retry_count=args.retry_count,
        retry_delay=args.retry_delay,
        checkpoint_interval=args.checkpoint_interval,
    )


def _run_with_progress(args: argparse.Namespace, title: str, make_coroutine) -> BatchProcessor:
    """Build a processor, run the coroutine made from it and print the summary."""
    display = None if args.no_progress else TranslationProgressDisplay(title=title)
    processor = BatchProcessor(
        create_gateway(),
        config=_processor_config(args),
        progress_callback=display.update if display else None,
    )

    if display:
        with display:
            asyncio.run(make_coroutine(processor))
    else:
        asyncio.run(make_coroutine(processor))

    if not args.no_progress:
        print_run_summary(processor.statistics(), title=title)
    return processor


def run_translate(args: argparse.Namespace) -> int:
    logger.info("ISO/IEC/IEEE 24765 Terminology Translator")
    logger.info(f"  Input: {args.input}")
    logger.info(f"  Output: {args.output}")
    logger.info(f"  Batch size: {args.batch_size}")

    terms = load_terms(args.input)
    _run_with_progress(
        args,
        "Translating ISO 24765",
        lambda processor: processor.run(terms, output_path=args.output),
    )
    return 0


def run_resume(args: argparse.Namespace) -> int:
    logger.info(f"Resuming translation from checkpoint: {args.checkpoint}")

    checkpoint_terms = load_translated_terms(args.checkpoint)
    all_terms = load_terms(args.input)
    _run_with_progress(
        args,
        "Resuming ISO 24765 translation",
        lambda processor: resume(
            checkpoint_terms,
            all_terms,
            processor,
            output_path=args.output,
            retranslate_stale=args.retranslate_stale,
        ),
    )
    return 0


def run_validate(args: argparse.Namespace) -> int:
    logger.info(f"Validating {args.translated} against {args.input}")

    result = validate_files(args.input, args.translated)
    save_report(result, args.report)
    print_validation_summary(result)

    if result.is_valid:
        logger.info("Translation validation passed!")
        return 0
    logger.error(f"Translation validation failed with {len(result.errors)} errors")
    return 1


COMMANDS = {
    "translate": run_translate,
    "resume": run_resume,
    "validate": run_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the translator CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    args = parse_arguments(argv)

    if args.verbose:
        setup_logging(level=logging.DEBUG)
    else:
        setup_logging(level=logging.INFO)

    try:
        return COMMANDS[args.command](args)

    except KeyboardInterrupt:
        logger.warning("Translation interrupted by user")
        return 130

    except GlossaryTranslatorError as e:
        logger.error(f"{args.command.title()} failed: {str(e)}")
        return 1

    except Exception as e:
        logger.error(f"{args.command.title()} failed with error: {str(e)}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
