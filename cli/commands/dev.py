import click
from api.auth import create_access_token

@click.group()
def dev():
    """Development helper commands"""
    pass

@dev.command()
@click.argument('user_id')
@click.option('--email', default=None, help='Email claim to embed')
def token(user_id: str, email: str):
    """Print a bearer token for a user, signed with JWT_SECRET"""
    click.echo(create_access_token(user_id, email=email))
