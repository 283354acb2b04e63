# cli/main.py
import click
from core.config import get_settings
from core.sa.database import Database
from core.utils.logging import setup_logging
from .commands.db import db
from .commands.catalog import catalog
from .commands.library import library
from .commands.purchases import purchases
from .commands.dev import dev

@click.group()
@click.option('--database-url', envvar='DATABASE_URL', default=None, help='Database connection string')
@click.option('--verbose/--no-verbose', default=False, help='Show debug logging')
@click.pass_context
def cli(ctx, database_url, verbose):
    """shelfstream digital library CLI"""
    setup_logging('DEBUG' if verbose else get_settings().log_level)
    ctx.ensure_object(dict)
    ctx.obj['database'] = Database(database_url)

cli.add_command(db)
cli.add_command(catalog)
cli.add_command(library)
cli.add_command(purchases)
cli.add_command(dev)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
