"""Seed a staff account: python -m users.create_user USERNAME --role admin"""

import asyncio

import click

from config import get_settings
from database.connection import create_client
from database.user_store import UserStore, UsernameTaken
from models.user import Role


async def create_staff_user(username: str, password: str, role: Role) -> str:
    settings = get_settings()
    client = create_client(settings)
    try:
        users = UserStore(client[settings.DATABASE_NAME]["users"])
        await users.ensure_indexes()
        return await users.create(username, password, role)
    finally:
        client.close()


@click.command()
@click.argument("username")
@click.option("--role", type=click.Choice([role.value for role in Role]), default=Role.MANAGER.value, show_default=True)
@click.password_option()
def main(username: str, role: str, password: str) -> None:
    """Create a staff user that can log in to the booking dashboard."""
    try:
        user_id = asyncio.run(create_staff_user(username, password, Role(role)))
    except UsernameTaken:
        raise click.ClickException(f"User '{username}' already exists")
    click.echo(f"Created {role} '{username}' ({user_id})")


if __name__ == "__main__":
    main()
