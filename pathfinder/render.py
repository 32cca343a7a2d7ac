"""Plain-text rendering of reports for the terminal."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pathfinder.models.report import PathsReport, Report, TokensReport, UnionReport
from pathfinder.models.types import canonical_json


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True, default=str)


def _key_value_bullets(values: Mapping[str, Any], indent: str = "     - ") -> list[str]:
    return [f"{indent}{key}: {_format_value(values[key])}" for key in sorted(values)]


def render_tokens(report: TokensReport) -> str:
    lines = [f"Found {len(report.tokens)} tokens:"]
    lines.extend(report.tokens)
    return "\n".join(lines)


def render_paths(report: PathsReport) -> str:
    if report.is_empty:
        return f"No path found from {report.token_in} → {report.token_out}."

    lines = [
        f"Found {len(report.paths)} path(s) from {report.token_in} → {report.token_out} "
        f"(maxDepth={report.max_depth}, k={report.k or 'ALL'})"
    ]
    for idx, path in enumerate(report.paths, start=1):
        lines.append("")
        lines.append(f"=== PATH #{idx} ===")
        lines.append(f"Tokens: {' -> '.join(path.tokens)}")
        lines.append("Adapters to add (ordered):")
        for i, pool in enumerate(path.pools, start=1):
            lines.append(f"  {i}. [{pool.adapter}] {pool.id}")
            lines.append(f"     - tokens: {', '.join(pool.tokens)}")
            lines.append(f"     - parameters: {canonical_json(pool.parameters)}")
            lines.append(f"     - arguments: {canonical_json(pool.arguments)}")
        lines.append(
            "Compatibility tokens to add (union of all tokens in pools used on this path):"
        )
        lines.append(f"  {', '.join(path.compatibility_tokens)}")
    return "\n".join(lines)


def render_union(report: UnionReport) -> str:
    if report.is_empty:
        return "No adapters found that lie on any path between the selected tokens."

    lines = ["", "## Adapters to Whitelist (union over all valid routes)", ""]
    for idx, group in enumerate(report.groups, start=1):
        lines.append(f"{idx}. **{group.adapter}**")
        if group.arguments:
            lines.append("   - Arguments:")
            lines.extend(_key_value_bullets(group.arguments))
        lines.append("   - Pools:")
        for i, pool in enumerate(group.pools, start=1):
            lines.append(f"     {i}. Parameters:")
            lines.extend(_key_value_bullets(pool.parameters))
        lines.append("")

    lines.append(f"**Tokens to add as collaterals ({len(report.tokens)}):**")
    lines.extend(f"- {token}" for token in report.tokens)
    return "\n".join(lines)


def render_text(report: Report) -> str:
    """Render any report as terminal text."""
    if isinstance(report, TokensReport):
        return render_tokens(report)
    if isinstance(report, UnionReport):
        return render_union(report)
    return render_paths(report)


def render_json(report: Report) -> str:
    """Render any report as indented JSON (key order follows the model)."""
    return report.model_dump_json(indent=2)


__all__ = ["render_json", "render_paths", "render_text", "render_tokens", "render_union"]
