"""Rendering of per-volume summaries and the server-wide aggregate."""

from dataclasses import dataclass

from volquota.core.output import Verdict
from volquota.lib.units import Formatter, format_raw
from volquota.parsers import VolumeRecord
from volquota.thresholds import Usage, classify, evaluate


@dataclass(frozen=True)
class VolumeResult:
    """Evaluation of one volume against the thresholds."""

    name: str
    usage: Usage
    verdict: Verdict
    summary: str


def summarize_volume(name: str, usage: Usage, fmt: Formatter = format_raw) -> str:
    """Full summary: name, percent, and quota/used/free detail."""
    return (
        f"{name} {usage.percent}% used "
        f"({fmt(usage.quota_kb)} quota, {fmt(usage.used_kb)} used, {fmt(usage.free_kb)} free)"
    )


def short_summary(summary: str) -> str:
    """Drop the parenthetical detail from a summary."""
    head, _, _ = summary.partition(" (")
    return head


def check_volume(
    record: VolumeRecord,
    warning: int,
    critical: int,
    fmt: Formatter = format_raw,
) -> VolumeResult:
    """Evaluate one volume record. A missing quota counts as zero."""
    usage = evaluate(record.quota_kb or 0, record.size_kb or 0)
    return VolumeResult(
        name=record.name,
        usage=usage,
        verdict=classify(usage.percent, warning, critical),
        summary=summarize_volume(record.name, usage, fmt),
    )


def aggregate(results: list[VolumeResult]) -> tuple[Verdict, str]:
    """
    Reduce many volume results to one verdict and message.

    Criticals suppress warnings. When nothing is over a threshold the
    message is just the volume count.

    Args:
        results: Per-volume results

    Returns:
        (verdict, message)
    """
    buckets: dict[Verdict, list[str]] = {Verdict.CRITICAL: [], Verdict.WARNING: []}
    ok_count = 0
    for result in sorted(results, key=lambda r: r.name):
        if result.verdict in buckets:
            buckets[result.verdict].append(short_summary(result.summary))
        else:
            ok_count += 1

    for verdict in (Verdict.CRITICAL, Verdict.WARNING):
        if buckets[verdict]:
            return verdict, ", ".join(buckets[verdict])

    noun = "volume" if ok_count == 1 else "volumes"
    return Verdict.OK, f"{ok_count} {noun} ok"
