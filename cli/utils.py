# cli/utils.py
import json
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

import click

from core.models.library import LibraryItem


def load_json_list(path: str) -> List[dict]:
    """Read a JSON file that must contain a list of objects."""
    with Path(path).open(encoding='utf-8') as handle:
        data = json.load(handle)
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a JSON list")
    return [record for record in data if isinstance(record, dict)]


def parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def print_library(items: List[LibraryItem]) -> None:
    """Print library items in a readable format."""
    if not items:
        click.echo(click.style("Library is empty", fg='yellow'))
        return
    click.echo("-" * 80)
    for item in items:
        purchased = item.purchased_at.isoformat() if item.purchased_at else 'unknown'
        click.echo(
            click.style(item.title or '(untitled)', fg='cyan') +
            f" [{item.type or '?'}] id={item.product_id} source={item.source.value}"
        )
        click.echo(f"  Purchased: {purchased}  Progress: {item.progress}  File: {item.file_path}")
    click.echo("-" * 80)
