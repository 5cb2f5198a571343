from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .cli import run as run_pipeline
from .config import load_config


@dataclass
class EstimateOptions:
    input_path: Optional[Path] = None
    output_dir: Optional[Path] = None
    price_book: Optional[Path] = None
    write_xlsx: bool = False
    write_pdf: bool = False
    quick: bool = False


def estimate(options: EstimateOptions) -> Dict[str, Path]:
    """Programmatic interface to run the estimator and return artifact paths.

    Returns a dict with keys: json, plus audit_csv / xlsx / pdf when written.
    """
    import os

    env = dict(os.environ)
    if options.input_path:
        env["RENOCOST_INPUT"] = str(options.input_path)
    if options.output_dir:
        env["RENOCOST_OUTPUT_DIR"] = str(options.output_dir)
    if options.price_book:
        env["RENOCOST_PRICE_BOOK"] = str(options.price_book)
    if options.write_xlsx:
        env["RENOCOST_WRITE_XLSX"] = "1"
    if options.write_pdf:
        env["RENOCOST_WRITE_PDF"] = "1"
    if options.quick:
        env["RENOCOST_QUICK_MODE"] = "1"

    cfg = load_config(env, None)
    rc = run_pipeline(runtime_config=cfg)
    if rc != 0:
        raise RuntimeError(f"Estimator run failed with code {rc}")

    from .estimate_writer import BREAKDOWN_XLSX, ESTIMATE_JSON, LINE_ITEMS_CSV, SUMMARY_PDF

    artifacts = {"json": cfg.output_dir / ESTIMATE_JSON}
    if not cfg.quick_mode:
        artifacts["audit_csv"] = cfg.output_dir / LINE_ITEMS_CSV
        if cfg.write_xlsx:
            artifacts["xlsx"] = cfg.output_dir / BREAKDOWN_XLSX
        if cfg.write_pdf:
            artifacts["pdf"] = cfg.output_dir / SUMMARY_PDF
    return artifacts
