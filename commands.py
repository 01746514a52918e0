import click
from flask.cli import with_appcontext

from models import db
from models.courses import Course
from models.users import ROLES, User


@click.command("create-user")
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.option("--full-name", required=True)
@click.option("--role", type=click.Choice(ROLES), default="student", show_default=True)
@with_appcontext
def create_user(email, password, full_name, role):
    """Create a user, or reset the password of an existing one."""
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user:
        user.set_password(password)
        db.session.commit()
        click.echo(f"Password updated for {email}")
        return

    user = User(email=email, full_name=full_name, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    click.echo(f"Created {role} {email} (id {user.id})")


@click.command("create-course")
@click.option("--title", required=True)
@click.option("--description", default=None)
@with_appcontext
def create_course(title, description):
    """Create a course for syllabus authoring."""
    course = Course(title=title, description=description)
    db.session.add(course)
    db.session.commit()
    click.echo(f"Created course {title} (id {course.id})")


def register_commands(app):
    app.cli.add_command(create_user)
    app.cli.add_command(create_course)
