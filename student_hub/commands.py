import click
from flask.cli import with_appcontext

from student_hub.extensions import db
from student_hub.enums.app_enum import RoleEnum
from student_hub.models import User


@click.command("create-admin")
@click.option("--name", default="Admin User", show_default=True)
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.option("--department", default="Administration", show_default=True)
@with_appcontext
def create_admin_command(name, email, password, department):
    """Create the admin account, or reset its credentials if one exists."""
    if len(password) < 8:
        raise click.BadParameter("must be at least 8 characters long", param_hint="--password")

    admin = User.query.filter_by(role=RoleEnum.admin).first()
    created = admin is None
    if created:
        admin = User(role=RoleEnum.admin, is_active=True)
        db.session.add(admin)

    admin.name = name
    admin.email = email.lower()
    admin.department = department
    admin.set_password(password)
    db.session.commit()

    click.echo(f"Admin {'created' if created else 'updated'}: {admin.email}")
