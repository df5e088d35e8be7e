#!/usr/bin/env python3
"""
Process a shipments JSON file from the command line.

Progress and summaries go to stderr; result JSON goes to stdout.
Results are also saved next to the input file unless --no-save.

Usage:
    python scripts/process_file.py "sample data/shipments.json"
    python scripts/process_file.py shipments.json --output results.json
    python scripts/process_file.py shipments.json --no-save > results.json
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional

# Allow imports from the project root when running as a script
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import structlog

from config import settings, configure_logging
from services.container_processor_service import get_container_processor_service
from services.shipment_loader_service import load_events_from_file
from models.container_summary import ProcessingResponse
from exceptions import AppError, EventValidationError

logger = structlog.get_logger(__name__)

RULE = "=" * 60


def err(message: str = "") -> None:
    """Print to stderr."""
    print(message, file=sys.stderr)


def save_results(results: dict, output_path: Path) -> bool:
    """Write results JSON; a failure is reported but not fatal."""
    try:
        output_path.write_text(json.dumps(results, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("results_save_failed", output_path=str(output_path), error=str(e))
        err(f"[WARNING] Could not save results to file: {e}")
        return False
    err(f"[OK] Results saved to: {output_path}")
    return True


def run(file_path: str, output: Optional[str] = None, save: bool = True) -> int:
    """
    Load, process and report one shipments file.

    Returns:
        Process exit code (0 on success)
    """
    try:
        resolved, shipments, events = load_events_from_file(file_path)
    except AppError as e:
        err(f"[ERROR] {e.message}")
        if e.details:
            err(f"        {e.details}")
        return 1

    err(f"[OK] Loaded file: {resolved}")
    err(f"[OK] Found {len(shipments)} shipment(s)")
    err(f"[OK] Extracted {len(events)} event(s) from shipments")
    err("\nProcessing events...\n")

    try:
        summaries = get_container_processor_service().process(events)
    except EventValidationError as e:
        err("Validation Errors:")
        for error in e.validation_errors:
            err(f"  - {error}")
        return 1

    response = ProcessingResponse.create(summaries, file_path=str(resolved))
    results = response.model_dump(mode="json", exclude_none=True)

    err(RULE)
    err("PROCESSING COMPLETE")
    err(RULE)
    err(f"File: {resolved}")
    err(f"Shipments Processed: {len(shipments)}")
    err(f"Containers Processed: {response.containers_processed}")
    err(f"Total Events: {len(events)}")
    err(RULE)

    print(json.dumps(results, indent=2))

    if save:
        output_path = Path(output) if output else resolved.parent / settings.results_filename
        save_results(results, output_path)

    err("\n[OK] Processing completed successfully!")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Process a shipments JSON file")
    parser.add_argument("file_path", help="Path to a JSON array of shipments")
    parser.add_argument("--output", help="Where to save results (default: next to the input file)")
    parser.add_argument("--no-save", action="store_true", help="Only print results, do not save them")
    args = parser.parse_args(argv)

    configure_logging(settings)
    return run(args.file_path, output=args.output, save=not args.no_save)


if __name__ == "__main__":
    sys.exit(main())
