"""Readable terminal output for measurement results."""

from __future__ import annotations

import sys

from ..state import PhaseResult, SessionResult

# ANSI color codes (disabled if not a tty)
_USE_COLOR = sys.stdout.isatty()


def _c(code: str, text: str) -> str:
    if not _USE_COLOR:
        return text
    return f"\033[{code}m{text}\033[0m"


def bold(text: str) -> str:
    return _c("1", text)


def green(text: str) -> str:
    return _c("32", text)


def red(text: str) -> str:
    return _c("31", text)


def section_header(title: str, width: int = 60) -> str:
    """Create a prominent section header."""
    padding = width - len(title) - 4
    left = padding // 2
    right = padding - left
    return bold(f"{'─' * left}[ {title} ]{'─' * right}")


def format_result_inline(result: SessionResult) -> str:
    """One-line summary of an aggregate, as printed while a phase runs."""
    parts = [f"{result.goodput_mbps:8.2f} Mbit/s", f"{result.elapsed_seconds:5.2f}s"]
    if result.retransmission_ratio is not None:
        parts.append(f"retrans={result.retransmission_ratio:.2%}")
    if result.min_rtt is not None:
        parts.append(f"minrtt={result.min_rtt / 1000:.1f}ms")
    return " · ".join(parts)


def format_phase(phase: PhaseResult) -> str:
    """Multi-line summary of a finished phase."""
    result = phase.result
    status = green("✓ OK") if phase.ok else red("✗ FAILED")
    retrans = "n/a" if result.retransmission_ratio is None else f"{result.retransmission_ratio:.4f}"
    min_rtt = "n/a" if result.min_rtt is None else f"{result.min_rtt / 1000:.2f} ms"
    lines = [
        section_header(phase.role.value.upper()),
        f"{status}  {bold(f'{result.goodput_mbps:.2f} Mbit/s')}",
        f"  retransmission ratio  {retrans}",
        f"  min RTT               {min_rtt}",
        f"  elapsed               {result.elapsed_seconds:.2f} s",
        f"  streams               {phase.streams - len(phase.errors)}/{phase.streams} ok",
    ]
    for error in phase.errors:
        lines.append(red(f"  {error.message}"))
    return "\n".join(lines)


__all__ = ["format_phase", "format_result_inline", "section_header"]
