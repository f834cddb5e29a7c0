"""
Command-line interface for kinship scoring.

Scores a pedigree of relatives of a missing person and suggests which
relatives to sample next.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kinship_score import __version__
from kinship_score.core.engine import KinshipScoreEngine, create_engine
from kinship_score.core.interpret import StrengthLabel
from kinship_score.core.loader import load_pedigree
from kinship_score.core.models import (
    FamilyMember,
    MarkerProfile,
    RelationType,
    SelectionReason,
    SelectionResult,
)
from kinship_score.core.profiles import ProfileRegistry

console = Console()

PROFILE_CHOICE = click.Choice([p.value for p in MarkerProfile])

PROFILES_OPTION = click.option(
    "--profiles",
    "profiles_path",
    type=click.Path(exists=True, dir_okay=False),
    envvar="KINSHIP_SCORE_PROFILES",
    help="YAML file with scoring profiles (defaults to the bundled table)",
)

STRENGTH_COLORS = {
    StrengthLabel.STRONG: "green",
    StrengthLabel.FAIR: "blue",
    StrengthLabel.LIMITED: "yellow",
    StrengthLabel.WEAK: "red",
}


@click.group()
@click.version_option(version=__version__, prog_name="kinship-score")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, verbose):
    """
    Kinship score estimator.

    Estimates the identification power of family reference samples for a
    missing person.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# =============================================================================
# Helpers
# =============================================================================

def _build_engine(file: str, profile: Optional[str], profiles_path: Optional[str]) -> KinshipScoreEngine:
    """Load a pedigree file into a new engine, exiting on bad input."""
    try:
        store, file_profile = load_pedigree(file)
        chosen = MarkerProfile(profile) if profile else (file_profile or MarkerProfile.STR_22)
        return create_engine(chosen, store.all(), profiles_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading pedigree: {escape(str(e))}[/red]")
        sys.exit(1)


def _print_result(engine: KinshipScoreEngine, result: SelectionResult) -> None:
    member = engine.pedigree.get(result.member_id)
    name = escape(member.display_name() if member else result.member_id)

    if result.accepted:
        console.print(
            f"[green]+{result.contribution:.3f}[/green] {name} "
            f"(total {result.total_score:.3f})"
        )
    else:
        console.print(f"[yellow]{result.reason.value}[/yellow] {name}")
        if result.message:
            console.print(f"  [dim]{result.message}[/dim]")


def _member_status(member: FamilyMember) -> str:
    if member.selected:
        return "[green]selected[/green]"
    if member.redundant:
        return "[dim]redundant[/dim]"
    return ""


def _print_summary(engine: KinshipScoreEngine) -> None:
    table = Table(title=f"Pedigree ({engine.profile.markers} STR markers)")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Relation")
    table.add_column("Base", justify="right")
    table.add_column("Status")

    for member in engine.pedigree.all():
        table.add_row(
            escape(member.id),
            escape(member.display_name()),
            member.relation.value,
            f"{engine.base_score(member.relation):.2f}",
            _member_status(member),
        )

    console.print(table)

    label = engine.get_interpretation()
    color = STRENGTH_COLORS.get(label, "white")
    console.print(Panel(
        f"[{color}]{label.description}[/{color}]",
        title=f"Kinship score: {engine.total_score:.3f}",
        subtitle=f"Saturation at {engine.saturation_threshold:g}",
    ))


# =============================================================================
# Commands
# =============================================================================

@cli.command("profiles")
@PROFILES_OPTION
def profiles_cmd(profiles_path: Optional[str]):
    """Show the score table of every marker profile."""
    try:
        registry = ProfileRegistry(profiles_path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error loading profiles: {escape(str(e))}[/red]")
        sys.exit(1)

    profiles = registry.all_profiles()

    table = Table(title="Scoring Profiles")
    table.add_column("Relation", style="bold")
    for profile in profiles:
        table.add_column(profile.name, justify="right")

    table.add_row("saturation", *[f"{p.saturation_threshold:g}" for p in profiles])
    for relation in RelationType:
        table.add_row(relation.value, *[f"{p.base_score(relation):g}" for p in profiles])

    console.print(table)


@cli.command("score")
@click.argument("file", type=click.Path(exists=True))
@click.option("--profile", "-p", type=PROFILE_CHOICE, help="STR marker profile (overrides the file)")
@click.option("--select", "-s", "selections", multiple=True, help="Member ID to select, in order")
@PROFILES_OPTION
def score_cmd(file: str, profile: Optional[str], selections: tuple, profiles_path: Optional[str]):
    """Score a pedigree file for the given selections."""
    engine = _build_engine(file, profile, profiles_path)

    for member_id in selections:
        _print_result(engine, engine.select(member_id))

    console.print()
    _print_summary(engine)


@cli.command("suggest")
@click.argument("file", type=click.Path(exists=True))
@click.option("--profile", "-p", type=PROFILE_CHOICE, help="STR marker profile (overrides the file)")
@click.option("--select", "-s", "selections", multiple=True, help="Member ID already sampled")
@PROFILES_OPTION
def suggest_cmd(file: str, profile: Optional[str], selections: tuple, profiles_path: Optional[str]):
    """Rank relatives by what sampling them next would add."""
    engine = _build_engine(file, profile, profiles_path)

    for member_id in selections:
        result = engine.select(member_id)
        if not result.accepted:
            _print_result(engine, result)

    rankings = engine.rank_candidates()
    if not rankings:
        console.print("[yellow]No unselected relatives left[/yellow]")
        return

    table = Table(title=f"Next samples (current score {engine.total_score:.3f})")
    table.add_column("#", style="dim")
    table.add_column("ID")
    table.add_column("Relation")
    table.add_column("Adds", justify="right")
    table.add_column("Note")

    for i, ranking in enumerate(rankings, 1):
        note = "" if ranking.reason is SelectionReason.OK else ranking.reason.value
        table.add_row(
            str(i),
            escape(ranking.member_id),
            ranking.relation.value,
            f"{ranking.expected_contribution:.3f}",
            note,
        )

    console.print(table)


@cli.command("demo")
@click.option("--profile", "-p", type=PROFILE_CHOICE, default="22", help="STR marker profile")
@PROFILES_OPTION
def demo_cmd(profile: str, profiles_path: Optional[str]):
    """Run the reference example pedigree."""
    mother = FamilyMember(id="mother", relation=RelationType.PARENT)
    father = FamilyMember(id="father", relation=RelationType.PARENT)
    sibling1 = FamilyMember(id="sibling1", relation=RelationType.SIBLING)
    child1 = FamilyMember(id="child1", relation=RelationType.CHILD)
    grandchild1 = FamilyMember(id="grandchild1", relation=RelationType.GRANDCHILD)

    engine = create_engine(profile, [mother, father, sibling1, child1, grandchild1], profiles_path)
    engine.pedigree.link("child1", "grandchild1")

    for member_id in ("mother", "father", "child1", "grandchild1"):
        _print_result(engine, engine.select(member_id))

    console.print()
    _print_summary(engine)


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
