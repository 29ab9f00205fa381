"""
Flask CLI commands for database and user management.

Commands:
- flask init-db: Create all tables
- flask create-user: Create a user with any role
- flask seed: Create the default admin (idempotent)
"""

import click
from flask import current_app
from vyaapar.database import create_all, get_session
from vyaapar.exceptions import VyaaparError
from vyaapar.models import User, UserRole
from vyaapar.services import user_service


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create database tables."""
        create_all()
        click.echo(click.style('Database tables created.', fg='green'))

    @app.cli.command('create-user')
    @click.option('--login-id', prompt=True, help='Login ID')
    @click.option('--email', prompt=True, help='Email address')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Password')
    @click.option('--role', prompt=True,
                  type=click.Choice([r.value for r in UserRole], case_sensitive=False),
                  help='User role')
    @click.option('--name', default=None, help='Display name')
    def create_user(login_id, email, password, role, name):
        """Create a new user."""
        try:
            user = user_service.create_user(
                get_session(),
                login_id=login_id,
                email=email,
                password=password,
                role=role,
                name=name
            )
        except VyaaparError as e:
            click.echo(click.style(f'Error creating user: {e.message}', fg='red'))
            raise SystemExit(1)

        click.echo(click.style('\nUser created successfully!', fg='green', bold=True))
        click.echo(f'   Login ID: {user.login_id}')
        click.echo(f'   Role: {user.role.value}')
        click.echo(f'   ID: {user.id}')

    @app.cli.command('seed')
    def seed():
        """Create tables and the default super admin if missing."""
        create_all()
        db_session = get_session()
        login_id = current_app.config['SEED_ADMIN_LOGIN_ID']

        if db_session.query(User).filter_by(login_id=login_id).first():
            click.echo(click.style(f'Admin "{login_id}" already exists, nothing to do.', fg='yellow'))
            return

        user_service.create_user(
            db_session,
            login_id=login_id,
            email=current_app.config['SEED_ADMIN_EMAIL'],
            password=current_app.config['SEED_ADMIN_PASSWORD'],
            role=UserRole.SUPER_ADMIN,
            name='Super Admin'
        )
        click.echo(click.style(f'\nSuper admin "{login_id}" created.', fg='green', bold=True))
        click.echo('   Change the default password after the first login.')
