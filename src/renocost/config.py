from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import SimpleNamespace
from typing import Mapping, Optional

from .models import EstimateAssumptions

_BOOLEAN_TRUE = {"1", "true", "yes", "on"}

_DEFAULTS = EstimateAssumptions()


@dataclass(frozen=True)
class Config:
    """Runtime configuration assembled from environment variables and CLI options."""

    base_dir: Path
    input_path: Optional[Path]
    output_dir: Path
    price_book_path: Optional[Path]
    write_xlsx: bool
    write_pdf: bool
    quick_mode: bool
    tax_rate: float
    overhead_pct: float
    contingency_pct: float
    verbose: bool = False

    def assumptions(self) -> EstimateAssumptions:
        return EstimateAssumptions(
            default_ceiling_height_m=_DEFAULTS.default_ceiling_height_m,
            wall_openings_pct=_DEFAULTS.wall_openings_pct,
            overhead_pct=self.overhead_pct,
            contingency_pct=self.contingency_pct,
            tax_rate=self.tax_rate,
        )


def _to_path(value: object | None) -> Optional[Path]:
    if value is None:
        return None
    if isinstance(value, Path):
        return value.expanduser().resolve()
    text = str(value).strip()
    if not text:
        return None
    return Path(text).expanduser().resolve()


def _to_float(value: object | None) -> Optional[float]:
    if value is None:
        return None
    text = str(value).replace("%", "").replace(",", ".").strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _to_rate(value: object | None, default: float) -> float:
    """Parse a fraction, accepting ``21`` as well as ``0.21``."""

    parsed = _to_float(value)
    if parsed is None or parsed < 0:
        return default
    return parsed / 100.0 if parsed > 1 else parsed


def _flag(value: object | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _BOOLEAN_TRUE


def _namespace(cli_args: object | None) -> SimpleNamespace:
    if cli_args is None:
        return SimpleNamespace()
    if isinstance(cli_args, SimpleNamespace):
        return cli_args
    if hasattr(cli_args, "__dict__"):
        return SimpleNamespace(**{k: v for k, v in vars(cli_args).items()})
    return SimpleNamespace()


def load_config(env: Mapping[str, str], cli_args: object | None = None) -> Config:
    """Build a runtime :class:`Config` from environment variables and CLI options."""

    base_dir = Path(__file__).resolve().parents[2]
    default_output_dir = (base_dir / "outputs").resolve()

    input_path = _to_path(env.get("RENOCOST_INPUT"))
    output_dir = _to_path(env.get("RENOCOST_OUTPUT_DIR")) or default_output_dir
    price_book_path = _to_path(env.get("RENOCOST_PRICE_BOOK"))
    write_xlsx = _flag(env.get("RENOCOST_WRITE_XLSX"))
    write_pdf = _flag(env.get("RENOCOST_WRITE_PDF"))
    quick_mode = _flag(env.get("RENOCOST_QUICK_MODE"))
    tax_rate = _to_rate(env.get("RENOCOST_TAX_RATE"), _DEFAULTS.tax_rate)
    overhead_pct = _to_rate(env.get("RENOCOST_OVERHEAD_PCT"), _DEFAULTS.overhead_pct)
    contingency_pct = _to_rate(env.get("RENOCOST_CONTINGENCY_PCT"), _DEFAULTS.contingency_pct)
    verbose = False

    cli_ns = _namespace(cli_args)
    if getattr(cli_ns, "input", None):
        input_path = _to_path(cli_ns.input) or input_path
    if getattr(cli_ns, "output_dir", None):
        output_dir = _to_path(cli_ns.output_dir) or output_dir
    if getattr(cli_ns, "price_book", None):
        price_book_path = _to_path(cli_ns.price_book)
    if getattr(cli_ns, "xlsx", False):
        write_xlsx = True
    if getattr(cli_ns, "pdf", False):
        write_pdf = True
    if getattr(cli_ns, "quick", False):
        quick_mode = True
    if getattr(cli_ns, "verbose", False):
        verbose = bool(cli_ns.verbose)

    return Config(
        base_dir=base_dir,
        input_path=input_path,
        output_dir=output_dir,
        price_book_path=price_book_path,
        write_xlsx=write_xlsx,
        write_pdf=write_pdf,
        quick_mode=quick_mode,
        tax_rate=tax_rate,
        overhead_pct=overhead_pct,
        contingency_pct=contingency_pct,
        verbose=verbose,
    )


__all__ = ["Config", "load_config"]
