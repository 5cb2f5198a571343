import argparse
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from dotenv import load_dotenv

from . import pricing_tables
from .assemblies import BUILT_IN, DEFAULT_REGISTRY, FLOOR, WALL
from .config import Config
from .config import load_config as load_runtime_config
from .estimate_writer import write_outputs
from .estimator import calculate_itemized_estimate
from .formatting import format_currency
from .models import COST_TYPES
from .price_book import DEFAULT_PRICE_BOOK, PriceBook, load_price_book
from .quick_estimate import calculate_quick_estimate
from .reporting import make_summary_text
from .validation import ProjectInputError, validate_project_payload

BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(BASE_DIR / ".env")

DEFAULT_CONFIG = load_runtime_config(os.environ, None)

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2

OPTION_TABLES: Dict[str, List[str]] = {
    "propertyLocation": pricing_tables.PROPERTY_LOCATIONS,
    "propertyAge": pricing_tables.PROPERTY_AGES,
    "propertyType": pricing_tables.PROPERTY_TYPES,
    "propertyCondition": pricing_tables.PROPERTY_CONDITIONS,
    "accessDifficulty": pricing_tables.ACCESS_DIFFICULTIES,
    "urgency": pricing_tables.URGENCY_OPTIONS,
    "roomType": pricing_tables.ROOM_TYPES,
    "floorFinish": pricing_tables.FLOOR_FINISHES,
    "wallFinish": pricing_tables.WALL_FINISHES,
    "builtInFurniture": pricing_tables.FURNITURE_OPTIONS,
    "ceilingHeight": pricing_tables.CEILING_HEIGHTS,
    "electricalScope": pricing_tables.ELECTRICAL_SCOPES,
    "plumbingScope": pricing_tables.PLUMBING_SCOPES,
}


def list_options() -> int:
    for field, options in OPTION_TABLES.items():
        logger.info("%s:", field)
        for option in options:
            logger.info("  - %s", option)
    logger.info("propertyCity (by propertyLocation):")
    for country in pricing_tables.PROPERTY_LOCATIONS:
        logger.info("  %s: %s", country, ", ".join(pricing_tables.get_cities_for_country(country)))
    logger.info("Priced selections (built-in assemblies):")
    for category in (FLOOR, WALL, BUILT_IN):
        logger.info("  %s:", category)
        for assembly in DEFAULT_REGISTRY.for_category(category):
            logger.info("    - %s (%s)", assembly.applies_to_value, assembly.code)
    return 0


def _read_payload(path: Path) -> object:
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def run(runtime_config: Optional[Config] = None) -> int:
    runtime_cfg = runtime_config or DEFAULT_CONFIG
    stage_counter = 0

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    def log_stage(message: str) -> None:
        nonlocal stage_counter
        stage_counter += 1
        logger.info("[pipeline:%02d] %s", stage_counter, message)

    def log_detail(message: str) -> None:
        logger.info("           %s", message)

    input_path = runtime_cfg.input_path
    if input_path is None:
        logger.error("No project input given (pass INPUT.json or set RENOCOST_INPUT).")
        return EXIT_INVALID_INPUT

    log_stage(f"Loading project input from {input_path}")
    try:
        project = validate_project_payload(_read_payload(input_path))
    except json.JSONDecodeError as exc:
        logger.error("Project input %s is not valid JSON: %s", input_path, exc)
        return EXIT_INVALID_INPUT
    except ProjectInputError as exc:
        logger.error("Project input %s failed validation:", input_path)
        for message in exc.messages:
            log_detail(message)
        return EXIT_INVALID_INPUT
    log_detail(
        f"location={project.property_location}/{project.property_city or '-'} "
        f"age={project.property_age} rooms={len(project.rooms)}"
    )

    if runtime_cfg.quick_mode:
        log_stage("Computing quick area-rate estimate")
        quick = calculate_quick_estimate(project)
        log_stage("Persisting estimator outputs to disk")
        outputs = write_outputs(quick, runtime_cfg.output_dir)
        logger.info("\n=== SUMMARY ===\n")
        logger.info(
            "Quick estimate: subtotal %s, total %s (%d rooms)",
            format_currency(quick.subtotal, quick.currency),
            format_currency(quick.total, quick.currency),
            len(quick.rooms),
        )
        logger.info("\nOutputs written:")
        for path in outputs.values():
            logger.info(" - %s", path)
        return 0

    price_book: PriceBook = DEFAULT_PRICE_BOOK
    if runtime_cfg.price_book_path is not None:
        log_stage(f"Loading price book from {runtime_cfg.price_book_path}")
        price_book = load_price_book(runtime_cfg.price_book_path)
    else:
        log_stage("Using built-in price catalog")
    log_detail(f"catalog_items={len(price_book.catalog)} assemblies={len(price_book.assemblies)}")
    by_type = {cost_type: len(price_book.catalog.by_cost_type(cost_type)) for cost_type in COST_TYPES}
    log_detail("items_by_cost_type => " + ", ".join(f"{k}={v}" for k, v in by_type.items() if v))

    log_stage("Computing itemized estimate")
    assumptions = runtime_cfg.assumptions()
    result = calculate_itemized_estimate(
        project,
        catalog=price_book.catalog,
        registry=price_book.assemblies,
        assumptions=assumptions,
    )
    log_detail(
        f"line_items={len(result.all_line_items)} combined_multiplier={result.multipliers.combined_project:.4f}"
    )
    for note in result.diagnostics:
        logger.warning("Warning: %s", note.message)

    log_stage("Persisting estimator outputs to disk")
    outputs = write_outputs(
        result,
        runtime_cfg.output_dir,
        write_breakdown_xlsx=runtime_cfg.write_xlsx,
        write_summary_pdf=runtime_cfg.write_pdf,
    )
    log_detail(f"outputs_written => {', '.join(str(p) for p in outputs.values())}")

    logger.info("\n=== SUMMARY ===\n")
    logger.info("%s", make_summary_text(result))
    logger.info("Inputs used:")
    logger.info(" - Project input: %s", input_path)
    logger.info(" - Price book: %s", price_book.source or "(built-in)")
    logger.info(
        " - Overhead %.0f%% | Contingency %.0f%% | Tax %.0f%%",
        assumptions.overhead_pct * 100,
        assumptions.contingency_pct * 100,
        assumptions.tax_rate * 100,
    )
    logger.info("\nOutputs written:")
    for path in outputs.values():
        logger.info(" - %s", path)
    return 0


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate an itemized renovation cost estimate from a project JSON file")
    parser.add_argument("input", nargs="?", help="Path to the project input JSON")
    parser.add_argument("--output-dir", help="Directory for generated outputs")
    parser.add_argument("--price-book", help="External price book (JSON, YAML or CSV directory)")
    parser.add_argument("--xlsx", action="store_true", help="Also write Estimate_Breakdown.xlsx")
    parser.add_argument("--pdf", action="store_true", help="Also write Estimate_Summary.pdf")
    parser.add_argument("--quick", action="store_true", help="Use the area-rate quick estimate instead of the BOQ")
    parser.add_argument("--list-options", action="store_true", help="Print the accepted option labels and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Increase logging verbosity")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    runtime_cfg = load_runtime_config(os.environ, args)
    log_level = logging.DEBUG if runtime_cfg.verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s")
    if args.list_options:
        return list_options()
    try:
        return run(runtime_config=runtime_cfg)
    except Exception:
        logger.exception("Fatal error during estimate generation")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
