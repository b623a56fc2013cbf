"""Shared Rich display functions for pending versions and run outcomes."""

from cjsmirror.core.diff import MirrorDiff
from cjsmirror.models.outcome import Outcome
from cjsmirror.utils.formatting import console, create_version_table, print_step


def narrate(message: str, depth: int = 0) -> None:
    """Print pipeline progress to the console."""
    print_step(message, depth)


def print_pending_table(diff: MirrorDiff) -> None:
    """Print the versions that still need mirroring.

    Args:
        diff: Result of comparing source and mirror listings.
    """
    table = create_version_table(f"{diff.source.package} → {diff.mirror.package}")
    for index, version in enumerate(diff.missing, start=1):
        table.add_row(str(index), version, diff.source.package, diff.mirror.package)
    console.print(table)
    console.print(
        f"\n[muted]{len(diff.missing)} pending, "
        f"{len(diff.source.versions)} source, "
        f"{len(diff.mirror.versions)} mirrored[/muted]"
    )


def print_outcome_summary(outcome: Outcome, dry_run: bool = False) -> None:
    """Print a one-line summary of what a run published and skipped.

    Args:
        outcome: Outcome returned by the pipeline.
        dry_run: Whether publishing was simulated.
    """
    verb = "Dry-run published" if dry_run else "Published"
    parts = [f"[success]{verb} {len(outcome.published)}[/success]"]
    if outcome.skipped:
        parts.append(f"[warning]skipped {len(outcome.skipped)}[/warning]")
    console.print("Summary: " + ", ".join(parts))
    if outcome.published:
        console.print(f"[muted]{', '.join(outcome.published)}[/muted]")
