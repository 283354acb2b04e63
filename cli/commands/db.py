import click

@click.group()
def db():
    """Database commands"""
    pass

@db.command()
@click.pass_context
def init(ctx):
    """Create all tables"""
    database = ctx.obj['database']
    database.init_db()
    click.echo(click.style("Database initialized: ", fg='green') + database.connection_string)
