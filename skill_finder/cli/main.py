"""CLI entry point for skill matching against the Neo4j skill graph."""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Iterator

import click
from config.config import Config
from config.logging_utils import get_logger, setup_logging
from graph_store.skill_store import GraphStoreConnectionError, SkillStore
from matching.skill_matcher import SkillMatcher
from matching.structured_extractor import StructuredExtractor
from tabulate import tabulate
from utils.model_utils import to_dict

logger = get_logger(__name__)


def _check_config(ctx: click.Context, config: Config, require_openai: bool) -> None:
    errors = config.validate(require_openai=require_openai)
    if errors:
        for error in errors:
            click.echo(f"Config error: {error}", err=True)
        ctx.exit(1)


@contextmanager
def _open_store(ctx: click.Context, require_openai: bool = False) -> Iterator[SkillStore]:
    """Validate settings, connect to the graph and yield the store; the driver is closed on exit."""
    config: Config = ctx.obj["config"]
    _check_config(ctx, config, require_openai)
    try:
        store = SkillStore.from_config(config)
    except GraphStoreConnectionError as exc:
        logger.error(str(exc))
        click.secho(f"❌ {exc}", fg="red", err=True)
        ctx.exit(1)

    with store:
        yield store


@contextmanager
def _open_matcher(ctx: click.Context) -> Iterator[SkillMatcher]:
    config: Config = ctx.obj["config"]
    with _open_store(ctx, require_openai=True) as store:
        yield SkillMatcher(store, StructuredExtractor(config=config), config=config)


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Logging level (defaults to LOG_LEVEL from .env)",
)
@click.pass_context
def cli(ctx, log_level):
    """Skill Finder CLI - find the right person for a problem"""
    config = Config()

    setup_logging(
        log_dir=str(config.log_dir),
        log_level=log_level or config.log_level,
        retention_days=config.log_file_retention_days,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command()
@click.argument("problem")
@click.option("--as-json", is_flag=True, help="Print the full report as JSON")
@click.pass_context
def match(ctx, problem, as_json):
    """Find the person best suited to solve PROBLEM"""
    with _open_matcher(ctx) as matcher:
        report = matcher.run(problem)

    if report is None:
        click.secho("No relevant skills found for this problem", fg="yellow")
        return

    if as_json:
        click.echo(json.dumps(to_dict(report), indent=2, ensure_ascii=False))
        return

    click.echo(click.style("\n🧩 Relevant skills", fg="cyan", bold=True))
    click.echo(", ".join(report.relevant_skills))

    click.echo(click.style("\n👥 Candidates", fg="cyan", bold=True))
    if report.person_skills:
        table_data = [
            [name, ", ".join(skills)] for name, skills in report.person_skills.items()
        ]
        click.echo(tabulate(table_data, headers=["Person", "Skills"], tablefmt="grid"))
    else:
        click.echo("Nobody holds any of these skills")

    if report.match is None:
        click.secho("\n❌ No matching person returned", fg="red")
        return

    click.secho(f"\n✅ Best match: {report.match.person_name}", fg="green", bold=True)
    click.echo(report.match.reason)


@cli.command()
@click.pass_context
def skills(ctx):
    """List all skills in the graph"""
    with _open_store(ctx) as store:
        all_skills = store.list_all_skills()

    if not all_skills:
        click.echo("❌ No skills found")
        return

    click.echo(f"\n📋 {len(all_skills)} skills in database:")
    click.echo(tabulate([[name] for name in all_skills], headers=["Skill"], tablefmt="grid"))


@cli.command()
@click.argument("person")
@click.argument("skill")
@click.pass_context
def assign(ctx, person, skill):
    """Give PERSON the skill SKILL"""
    with _open_store(ctx) as store:
        store.assign_skill(person, skill)

    click.secho(f"✅ {person} has skill {skill}", fg="green")


@cli.command()
@click.argument("person")
@click.argument("text")
@click.option(
    "--persist",
    is_flag=True,
    help="Store extracted skills even when PERSIST_EXTRACTED_SKILLS is off",
)
@click.pass_context
def extract(ctx, person, text, persist):
    """Extract the skills of PERSON from TEXT"""
    with _open_matcher(ctx) as matcher:
        extracted = matcher.record_person_skills(
            person, text, persist=True if persist else None
        )

    if not extracted:
        click.echo("❌ No skills extracted")
        return

    click.echo(f"\n🧩 Skills of {person}: {', '.join(extracted)}")


if __name__ == "__main__":
    cli()
