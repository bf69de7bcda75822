"""Database CLI commands."""
import click
from flask import Blueprint
from flask.cli import with_appcontext
from inkwell.extensions import db
from inkwell.models.base import utcnow
from inkwell.models.category import Category
from inkwell.models.post import Post, PostStatus
from inkwell.models.tag import Tag
from inkwell.models.user import User, UserRole

bp = Blueprint("blog_cli", __name__, cli_group="blog")

SAMPLE_CATEGORIES = [
    {"name": "Technology", "slug": "technology", "color": "#3b82f6",
     "description": "Programming, tools and what is new in tech"},
    {"name": "Design", "slug": "design", "color": "#8b5cf6",
     "description": "Interface design, UX and creative work"},
    {"name": "Tutorial", "slug": "tutorial", "color": "#10b981",
     "description": "Step by step guides"},
    {"name": "News", "slug": "news", "color": "#f59e0b",
     "description": "Announcements and release notes"},
]

SAMPLE_TAGS = [
    {"name": "Python", "slug": "python", "color": "#3776ab"},
    {"name": "Flask", "slug": "flask", "color": "#000000"},
    {"name": "SQLAlchemy", "slug": "sqlalchemy", "color": "#d71f00"},
    {"name": "CSS", "slug": "css", "color": "#06b6d4"},
    {"name": "JavaScript", "slug": "javascript", "color": "#f7df1e"},
    {"name": "Accessibility", "slug": "accessibility", "color": "#2d3748"},
]

SAMPLE_ADMIN = {
    "oauth_subject": "seed-admin",
    "email": "admin@inkwell.local",
    "first_name": "Admin",
    "last_name": "Inkwell",
    "role": UserRole.ADMIN,
}

SAMPLE_POSTS = [
    {
        "title": "Building a blog with Flask",
        "slug": "building-a-blog-with-flask",
        "excerpt": "From the app factory to the admin dashboard: the pieces of a small Flask blog.",
        "content": (
            "<h2>Why Flask?</h2>\n<p>Flask keeps the core small and lets extensions "
            "handle the database, forms and sign-in.</p>\n<h2>Project layout</h2>\n"
            "<p>Models, services and blueprints each get their own package so routes "
            "stay thin.</p>"
        ),
        "category": "tutorial",
        "tags": ["python", "flask", "sqlalchemy"],
        "status": PostStatus.PUBLISHED,
        "featured": True,
    },
    {
        "title": "Designing readable article pages",
        "slug": "designing-readable-article-pages",
        "excerpt": "Line length, type scale and contrast for long-form reading.",
        "content": (
            "<p>Readers stay longer on pages that are comfortable to read. Keep lines "
            "between 60 and 75 characters and give headings room to breathe.</p>"
        ),
        "category": "design",
        "tags": ["css", "accessibility"],
        "status": PostStatus.PUBLISHED,
        "featured": False,
    },
    {
        "title": "Query filters without the boilerplate",
        "slug": "query-filters-without-the-boilerplate",
        "excerpt": "Turning query strings into SQLAlchemy filters.",
        "content": "<p>Draft notes on search forms, pagination and sorting.</p>",
        "category": "technology",
        "tags": ["python", "sqlalchemy"],
        "status": PostStatus.DRAFT,
        "featured": False,
    },
]


def seed_taxonomy() -> tuple[int, int]:
    """Create missing sample categories and tags; returns how many were added."""
    created_categories = 0
    for values in SAMPLE_CATEGORIES:
        if not Category.get_by_slug(values["slug"]):
            db.session.add(Category(**values))
            created_categories += 1

    created_tags = 0
    for values in SAMPLE_TAGS:
        if not Tag.get_by_slug(values["slug"]):
            db.session.add(Tag(**values))
            created_tags += 1

    db.session.commit()
    return created_categories, created_tags


def seed_admin() -> User:
    admin = User.find_by_email(SAMPLE_ADMIN["email"])
    if not admin:
        admin = User(**SAMPLE_ADMIN)
        db.session.add(admin)
        db.session.commit()
    return admin


def seed_posts(author: User) -> int:
    created = 0
    for values in SAMPLE_POSTS:
        if Post.get_by_slug(values["slug"]):
            continue

        values = dict(values)
        category = Category.get_by_slug(values.pop("category"))
        tags = [Tag.get_by_slug(slug) for slug in values.pop("tags")]
        post = Post(
            author_id=author.id,
            category=category,
            tags=[tag for tag in tags if tag],
            published_at=utcnow() if values["status"] == PostStatus.PUBLISHED else None,
            **values
        )
        db.session.add(post)
        created += 1

    db.session.commit()
    return created


@bp.cli.command("init")
@with_appcontext
def init_db():
    """Create the database tables."""
    click.echo("Creating database tables...")
    db.create_all()
    click.echo("✅ Database initialization completed!")


@bp.cli.command("reset")
@click.confirmation_option(prompt="This will delete all data. Are you sure?")
@with_appcontext
def reset_db():
    """Reset the database (drop and recreate all tables)."""
    click.echo("Dropping all database tables...")
    db.drop_all()

    click.echo("Recreating database tables...")
    db.create_all()

    click.echo("✅ Database reset completed!")


@bp.cli.command("seed")
@with_appcontext
def seed_db():
    """Seed the database with sample data; running it again adds nothing new."""
    click.echo("Seeding database with sample data...")
    db.create_all()

    categories, tags = seed_taxonomy()
    click.echo(f"Created {categories} categories and {tags} tags")

    admin = seed_admin()
    click.echo(f"Admin user: {admin.email}")

    posts = seed_posts(admin)
    click.echo(f"Created {posts} posts")

    click.echo("✅ Database seeding completed!")


@bp.cli.command("promote")
@click.argument("email")
@click.argument("role", type=click.Choice([role.value for role in UserRole]))
@with_appcontext
def promote_user(email, role):
    """Give the user with EMAIL a new ROLE."""
    user = User.find_by_email(email)
    if not user:
        raise click.ClickException(f"No user with email {email}")

    user.role = UserRole(role)
    db.session.commit()
    click.echo(f"✅ {user.email} is now {role}")
