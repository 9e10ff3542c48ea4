from attendance_app import create_app
from attendance_app.curriculum import get_curriculum
from attendance_app.seed import ensure_admin_teacher
from flask.cli import with_appcontext
from flask_migrate import upgrade, migrate, init
import click

app = create_app()


@app.cli.command("db-init")
@with_appcontext
def db_init():
    """Initializes migrations directory"""
    init()


@app.cli.command("db-migrate")
@with_appcontext
def db_migrate():
    """Creates a new migration"""
    migrate()


@app.cli.command("db-upgrade")
@with_appcontext
def db_upgrade():
    """Applies migrations"""
    upgrade()


@app.cli.command("seed-teacher")
@click.option("--username", default=None, help="Defaults to ADMIN_TEACHER_USERNAME")
@click.option("--password", default=None, help="Defaults to ADMIN_TEACHER_PASSWORD")
@with_appcontext
def seed_teacher(username, password):
    """Creates the admin teacher account, or promotes an existing one"""
    try:
        user, created = ensure_admin_teacher(username, password)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f"{'Created' if created else 'Found'} teacher {user.username}")


@app.cli.command("reload-curriculum")
@with_appcontext
def reload_curriculum():
    """Re-reads the curriculum spreadsheet"""
    rows = get_curriculum().reload()
    click.echo(f"Loaded {rows} curriculum rows")


if __name__ == "__main__":
    app.run()
