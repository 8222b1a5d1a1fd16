import click

from library_app.errors import LibraryError
from library_app.extensions import db
from library_app.services.user_service import UserService


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (use `flask db upgrade` once migrations exist)."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("create-admin")
    @click.argument("email")
    @click.argument("name")
    @click.argument("password")
    def create_admin(email, name, password):
        """Create an admin account."""
        try:
            user = UserService.for_session(db.session).create_user(name, email, password, role="admin")
        except LibraryError as e:
            raise click.ClickException(e.message)
        click.echo(f"Admin created: {user.id}")
