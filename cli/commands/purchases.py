import click
from core.sa.models import Purchase
from core.sa.repositories import ProductRepository
from ..utils import load_json_list, parse_timestamp

@click.group()
def purchases():
    """Legacy purchase history commands"""
    pass

@purchases.command(name='import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_purchases(ctx, path: str):
    """Import historical purchases from a JSON list

    Records look like {"userId": "42", "productId": "abc", "purchaseDate": "2024-01-01T00:00:00"}.
    Purchases of unknown products are skipped.
    """
    imported = skipped = 0
    with ctx.obj['database'].get_db() as session:
        products = ProductRepository(session)
        for record in load_json_list(path):
            user_id = record.get('userId')
            product_id = record.get('productId')
            if not user_id or products.get_by_id(product_id) is None:
                click.echo(click.style(f"Skipping purchase: {record}", fg='yellow'))
                skipped += 1
                continue
            session.add(Purchase(
                user_id=str(user_id),
                product_id=str(product_id),
                purchased_at=parse_timestamp(record.get('purchaseDate') or record.get('purchasedAt')),
            ))
            imported += 1

    click.echo(click.style("Imported: ", fg='blue') + click.style(str(imported), fg='green'))
    click.echo(click.style("Skipped: ", fg='blue') + click.style(str(skipped), fg='yellow'))
