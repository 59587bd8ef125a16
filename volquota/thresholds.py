"""Usage arithmetic and threshold classification."""

from dataclasses import dataclass

from volquota.core.output import Verdict


@dataclass(frozen=True)
class Usage:
    """Computed usage of one volume, in kilobytes."""

    quota_kb: int
    used_kb: int
    free_kb: int
    percent: int


def evaluate(quota_kb: int, used_kb: int) -> Usage:
    """
    Compute free space and percent used.

    Free space never goes below zero, so an overdrawn volume reads
    100%. The percentage is truncated, not rounded: 89.9% is 89. A zero
    quota reads 0%.

    Args:
        quota_kb: Configured quota
        used_kb: Observed usage

    Returns:
        Usage for the volume
    """
    free = max(0, quota_kb - used_kb)
    if quota_kb <= 0:
        percent = 0
    else:
        percent = (100 * (quota_kb - free)) // quota_kb
    return Usage(quota_kb=quota_kb, used_kb=used_kb, free_kb=free, percent=percent)


def classify(percent: int, warning: int, critical: int) -> Verdict:
    """Map a percentage to a verdict. A value equal to a threshold stays below it."""
    if percent > critical:
        return Verdict.CRITICAL
    if percent > warning:
        return Verdict.WARNING
    return Verdict.OK
