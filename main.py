#!/usr/bin/env python3
"""
Receipt Reconciliation Engine - Main Entry Point.

Parses OCR / PDF text dumps of receipts and invoices into structured,
reconciled records. It provides both a command-line interface and
programmatic access to the parsing pipeline.

Usage:
    Command Line:
        python main.py --input receipt.txt
        python main.py --input ./receipts/ --output ./parsed/
        cat receipt.txt | python main.py --input - --ocr-quality 80

    Python:
        from main import run_parsing
        results = run_parsing("receipt.txt")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, List, Dict, Any

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager, get_config
from src.input_handler import TextInputHandler, TextDocument
from src.pipeline import InvoiceParser
from src.utils.exceptions import InvoiceExtractionError
from src.utils.logger import setup_logger_from_config, get_logger
from src.utils.helpers import ensure_directory, generate_timestamp, safe_filename

STDIN_MARKER = "-"


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Receipt / invoice text reconciliation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Parse a single text dump:
        python main.py --input receipt.txt

    Parse a directory, one JSON file per receipt:
        python main.py --input ./receipts/ --output ./parsed/

    Read from stdin with an OCR-quality hint:
        cat receipt.txt | python main.py --input - --ocr-quality 80
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input text file, directory of text files, or '-' for stdin"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output .json file or directory (default: print to stdout)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to a configuration file merged over the defaults"
    )

    parser.add_argument(
        "--ocr-quality",
        type=float,
        default=None,
        help="OCR quality hint (0-100) added as a small confidence bonus"
    )

    parser.add_argument(
        "--display",
        action="store_true",
        help="Emit formatted display values instead of raw records"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    root_logger = setup_logger_from_config()

    if args.debug:
        root_logger.setLevel("DEBUG")
        for handler in root_logger.handlers:
            handler.setLevel("DEBUG")
    elif args.quiet:
        root_logger.setLevel("ERROR")

    logger = get_logger(__name__)
    logger.info(f"{config.get('project.name', 'receipt-reconciler')} "
                f"{config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")

    return config


def collect_documents(input_path: str, handler: TextInputHandler) -> List[TextDocument]:
    """
    Load the documents named by --input.

    Raises:
        FileNotFoundError: If the input path doesn't exist.
    """
    if input_path == STDIN_MARKER:
        return [TextDocument(filepath="<stdin>", filename="stdin", source="text",
                             text=sys.stdin.read())]

    path = Path(input_path)
    if path.is_dir():
        return handler.load_batch(path)
    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")
    return [handler.load(path)]


def run_parsing(
    input_path: str,
    output_path: Optional[str] = None,
    config_path: Optional[str] = None,
    ocr_quality: Optional[float] = None,
    display: bool = False
) -> List[Dict[str, Any]]:
    """
    Run the parsing pipeline over one input.

    Args:
        input_path: Text file, directory, or '-' for stdin.
        output_path: Output .json file or directory; None to skip writing.
        config_path: Optional configuration file.
        ocr_quality: Optional OCR-quality hint (0-100).
        display: Return display values instead of raw records.

    Returns:
        One dictionary per successfully loaded document.
    """
    logger = get_logger(__name__)
    ConfigurationManager(config_path)

    handler = TextInputHandler()
    parser = InvoiceParser()

    results = []
    for document in collect_documents(input_path, handler):
        if not document.success:
            logger.error(f"Skipping {document.filename}: {document.error}")
            continue

        record = parser.parse(document.text, ocr_quality)
        result = record.display() if display else record.to_dict()
        result['source_file'] = document.filepath
        results.append(result)

        logger.info(
            f"  {document.filename}: merchant '{record.merchant}', "
            f"status {record.status}, confidence {record.confidence}"
        )

    if output_path:
        write_results(results, output_path)

    return results


def write_results(results: List[Dict[str, Any]], output_path: str) -> List[Path]:
    """
    Write results as JSON.

    A path ending in .json receives the whole list; any other path is
    treated as a directory receiving one file per record, named after
    the merchant.

    Returns:
        Paths written.
    """
    logger = get_logger(__name__)
    indent = get_config("output.indent", 2)
    target = Path(output_path)

    if target.suffix.lower() == '.json':
        ensure_directory(target.parent)
        target.write_text(json.dumps(results, indent=indent, ensure_ascii=False), encoding='utf-8')
        logger.info(f"Wrote {len(results)} records to {target}")
        return [target]

    ensure_directory(target)
    timestamp = generate_timestamp()
    written = []
    for index, result in enumerate(results, start=1):
        base = safe_filename(str(result.get('merchant') or 'invoice'))
        path = target / f"{base}_{timestamp}_{index}.json"
        path.write_text(json.dumps(result, indent=indent, ensure_ascii=False), encoding='utf-8')
        written.append(path)

    logger.info(f"Wrote {len(written)} files to {target}")
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        results = run_parsing(
            input_path=args.input,
            output_path=args.output,
            config_path=args.config,
            ocr_quality=args.ocr_quality,
            display=args.display
        )

        if not results:
            logger.error("No documents were parsed")
            return 1

        if not args.output:
            print(json.dumps(results, indent=get_config("output.indent", 2), ensure_ascii=False))

        logger.info(f"Parsing complete. Processed {len(results)} documents.")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except InvoiceExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
