"""dataverifier CLI - record verification commands."""

import json
import sys
from pathlib import Path

import click
import yaml

from dataverifier.config import get_config
from dataverifier.errors import ConfigurationError
from dataverifier.filters import builtin_filter_names
from dataverifier.loader import ProfileLoader
from dataverifier.results import Results
from dataverifier.schema import Profile
from dataverifier.types import FieldStatus
from dataverifier.verifier import Verifier


def _resolve_profile(profile: str) -> Profile:
    """Load a profile from a path, or by name from the profile directory."""
    path = Path(profile)
    if not path.exists():
        path = get_config().get_profile_path(profile)
    if not path.exists():
        raise click.ClickException(f"Profile '{profile}' not found")
    return ProfileLoader().load(path)


def _load_record(record_file: str) -> dict:
    with open(record_file) as fh:
        try:
            record = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise click.ClickException(f"{record_file} is not valid JSON or YAML: {exc}")
    if not isinstance(record, dict):
        raise click.ClickException(
            f"{record_file} must contain a mapping, got {type(record).__name__}"
        )
    return record


def _echo_summary(label: str, results: Results) -> None:
    status = "OK" if results.success else "FAIL"
    click.echo(
        f"{status}  {label} ({results.valid_count} valid, "
        f"{results.invalid_count} invalid, {results.missing_count} missing)"
    )
    for name, fr in results.fields.items():
        line = f"  {fr.status.value.upper():<8} {name}"
        if fr.status == FieldStatus.INVALID and fr.reason:
            line += f": {fr.reason}"
        click.echo(line)


@click.command("check")
@click.argument("profile")
@click.argument("record_file", type=click.Path(exists=True))
@click.option("--filter", "-f", "extra_filters", multiple=True,
              help="Global filter applied to every field (repeatable)")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              help="Output format (default: text)")
@click.option("--fail-on-invalid", is_flag=True, help="Exit with code 1 if any field is invalid")
def check(profile: str, record_file: str, extra_filters: tuple, output_format: str, fail_on_invalid: bool):
    """Verify a record file against a profile.

    PROFILE is a path to a profile YAML file, or a profile name looked up
    as <name>.profile.yaml in DATAVERIFIER_PROFILE_DIR.

    RECORD_FILE is a JSON or YAML file holding a single mapping.

    Example:

        dataverifier check signup.profile.yaml form.json

        dataverifier check signup form.yaml --filter trim --format json
    """
    record = _load_record(record_file)

    try:
        loaded = _resolve_profile(profile)
        results = Verifier(loaded, filters=list(extra_filters)).verify(record)
    except (ConfigurationError, yaml.YAMLError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    if output_format == "json":
        out = {
            "profile": loaded.name,
            "success": results.success,
            "valid_count": results.valid_count,
            "invalid_count": results.invalid_count,
            "missing_count": results.missing_count,
            "results": results.to_dict(),
        }
        click.echo(json.dumps(out, indent=2, default=str))
    else:
        _echo_summary(loaded.name, results)

    if fail_on_invalid and not results.success:
        sys.exit(1)


@click.command("filters")
def filters():
    """List built-in filter names."""
    for name in builtin_filter_names():
        click.echo(name)


@click.command("show")
@click.argument("frozen_file", type=click.Path(exists=True))
def show(frozen_file: str):
    """Summarise results previously written with Results.freeze().

    Example:

        dataverifier show results.json
    """
    text = Path(frozen_file).read_text()
    try:
        results = Results.thaw(text)
    except ValueError as exc:
        raise click.ClickException(f"{frozen_file} does not hold frozen results: {exc}")
    _echo_summary(Path(frozen_file).name, results)
