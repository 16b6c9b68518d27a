"""Plain-text rendering for the CLI.

Nothing in the generation core imports this module; it only turns records
into terminal output.
"""

from __future__ import annotations

from sheetgen.rules.types import CharacterRecord, RulesDataset
from sheetgen.rules.validator import RulesValidationReport


def format_character(record: CharacterRecord) -> str:
    """Render one character sheet as plain text."""
    lines = [
        f"{record.background} {record.nature}",
        "=" * len(f"{record.background} {record.nature}"),
        f"HP: {record.hp}",
        f"Shreds of Insight: {record.shreds}",
        "",
        "Stats:",
    ]
    lines.extend(f"  {name}: {value}" for name, value in record.stats.items())

    lines.append("")
    lines.append("Abilities:")
    for ability in record.abilities:
        if ability.effect:
            lines.append(f"  {ability.name}: {ability.effect}")
        else:
            lines.append(f"  {ability.name}")
    if not record.abilities:
        lines.append("  (none)")

    lines.append("")
    lines.append(f"Talent: {record.talent}")
    return "\n".join(lines)


def format_rules_listing(rules: RulesDataset) -> str:
    """List the stats and the lockable nature and background keys."""
    lines = ["Stats:"]
    lines.extend(f"  {name}" for name in rules.stats)

    lines.append("")
    lines.append("Natures:")
    for key, nature in rules.natures.items():
        lines.append(f"  {key:<20} {nature.name} (hp {nature.hp})")

    lines.append("")
    lines.append("Backgrounds:")
    for key, background in rules.backgrounds.items():
        lines.append(f"  {key:<20} {background.name}")
    return "\n".join(lines)


def format_validation_report(report: RulesValidationReport) -> str:
    """Render a validation report."""
    lines = [
        f"Stats:       {len(report.stats)}",
        f"Natures:     {len(report.natures)}",
        f"Backgrounds: {len(report.backgrounds)}",
        f"Talents:     {len(report.talents)}",
        f"Rules hash:  {report.rules_hash}",
    ]
    if report.is_valid:
        lines.append("Status:      OK")
    else:
        lines.append(f"Status:      {len(report.missing_components)} problem(s)")
        lines.extend(f"  - {message}" for message in report.missing_components)
    return "\n".join(lines)
