import click
from sqlalchemy.exc import IntegrityError
from core.sa.models import ProductType
from core.sa.repositories import ProductRepository
from ..utils import load_json_list

PRODUCT_FIELDS = {
    'id': ('id', '_id'),
    'title': ('title',),
    'type': ('type',),
    'file_path': ('filePath', 'file_path'),
    'thumbnail': ('thumbnail',),
    'description': ('description',),
    'price': ('price',),
    'discount': ('discount',),
    'stock': ('stock',),
    'language': ('language',),
    'volume': ('volume',),
}

def _product_fields(record: dict) -> dict:
    fields = {}
    for column, keys in PRODUCT_FIELDS.items():
        for key in keys:
            if record.get(key) not in (None, ''):
                fields[column] = record[key]
                break
    if 'id' in fields:
        fields['id'] = str(fields['id'])
    return fields

@click.group()
def catalog():
    """Product catalog commands"""
    pass

@catalog.command(name='import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_products(ctx, path: str):
    """Import products from a JSON list

    Each record needs a title and a type (EBOOK, AUDIOBOOK, HARDCOVER or
    PAPERBACK); id, filePath and thumbnail are optional.

    Example:
        shelfstream catalog import products.json
    """
    imported = skipped = 0
    with ctx.obj['database'].get_db() as session:
        repo = ProductRepository(session)
        for record in load_json_list(path):
            fields = _product_fields(record)
            product_type = ProductType.from_label(fields.get('type'))
            if not fields.get('title') or product_type is None:
                click.echo(click.style(f"Skipping invalid record: {record}", fg='yellow'))
                skipped += 1
                continue
            fields['type'] = product_type.value
            if fields.get('id') and repo.get_by_id(fields['id']):
                click.echo(click.style(f"Skipping existing product: {fields['id']}", fg='yellow'))
                skipped += 1
                continue
            try:
                repo.create_product(**fields)
                imported += 1
            except IntegrityError as e:
                session.rollback()
                click.echo(click.style(f"Failed to import {fields.get('title')}: {e}", fg='red'))
                skipped += 1

    click.echo(click.style("Imported: ", fg='blue') + click.style(str(imported), fg='green'))
    click.echo(click.style("Skipped: ", fg='blue') + click.style(str(skipped), fg='yellow'))

@catalog.command(name='list')
@click.option('--type', 'product_type', type=click.Choice([t.value for t in ProductType]), default=None, help='Only list one product type')
@click.pass_context
def list_products(ctx, product_type):
    """List catalog products"""
    with ctx.obj['database'].get_db() as session:
        products = ProductRepository(session).list_products(ProductType(product_type) if product_type else None)
        if not products:
            click.echo("No products found")
            return
        for product in products:
            click.echo(f"{product.id}  {product.type:<10} {product.title}  ({product.file_path or '-'})")
