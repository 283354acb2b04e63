import click
from core.config import get_settings
from core.errors import StorefrontError
from core.legacy.demo_users import DemoUserStore
from core.services.library_reconciler import LibraryReconciler
from core.services.library_service import LibraryService
from ..utils import print_library

@click.group()
def library():
    """Library management commands"""
    pass

@library.command()
@click.argument('user_id')
@click.option('--email', default=None, help='Key of the user in the demo users file')
@click.option('--demo-users', default=None, type=click.Path(dir_okay=False), help='Demo users JSON file (defaults to DEMO_USERS_PATH)')
@click.pass_context
def show(ctx, user_id: str, email: str, demo_users: str):
    """Show a user's reconciled library

    Runs the same reconciliation as the my-library endpoint, including the
    one-time migration from purchases.

    Example:
        shelfstream library show 42 --email reader@example.com
    """
    demo_path = demo_users or get_settings().demo_users_path
    demo_store = DemoUserStore(demo_path) if demo_path else None
    with ctx.obj['database'].get_db() as session:
        items = LibraryReconciler(session, demo_store).reconcile(user_id, user_key=email)
        print_library(items)

@library.command()
@click.argument('user_id')
@click.argument('product_id')
@click.pass_context
def add(ctx, user_id: str, product_id: str):
    """Add a digital product to a user's library"""
    with ctx.obj['database'].get_db() as session:
        try:
            items = LibraryService(session).add_product(user_id, product_id)
        except StorefrontError as e:
            raise click.ClickException(e.message)
        click.echo(click.style(f"Added {product_id} for user {user_id}", fg='green'))
        print_library(items)
