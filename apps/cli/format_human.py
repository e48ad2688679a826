"""Human-readable parse summaries for CLI output."""

from __future__ import annotations

from tabdent.indental.models import IndentalResult
from tabdent.tablatal.models import TableResult


def render_summary(fmt: str, result: IndentalResult | TableResult) -> str:
    """Render a one-screen summary of a parse result."""

    lines: list[str] = [f"format={fmt} result={'VALID' if result.valid else 'INVALID'}"]

    if isinstance(result, IndentalResult):
        lines.append(f"categories: {len(result.categories)}")
        for name in result.categories:
            lines.append(f"{name} ({len(result.data[name])})")
    else:
        lines.append(f"keys: {', '.join(result.keys) if result.keys else 'none'}")
        lines.append(f"rows: {len(result.data)}")

    if result.errors:
        lines.append(f"errors: {len(result.errors)}")
        lines.extend(f"  {error}" for error in result.errors)
    else:
        lines.append("errors: none")

    return "\n".join(lines)
