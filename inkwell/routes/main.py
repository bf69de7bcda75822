"""Main routes for the homepage, static pages and crawler files."""
import logging
from flask import (
    Blueprint, render_template, current_app, flash, redirect, url_for, make_response
)

from inkwell.forms.contact import ContactForm
from inkwell.models.category import Category
from inkwell.models.post import Post
from inkwell.models.tag import Tag
from inkwell.services.contact import submit_contact_message

logger = logging.getLogger(__name__)

main_bp = Blueprint("main", __name__)

STATIC_PAGES = [
    ("main.index", "daily", "1.0"),
    ("blog.list_posts", "daily", "0.9"),
    ("main.about", "monthly", "0.6"),
    ("main.contact", "monthly", "0.5"),
    ("main.privacy", "yearly", "0.3"),
    ("main.terms", "yearly", "0.3"),
]


@main_bp.route("/")
def index():
    """Homepage with featured and latest posts."""
    featured_posts = Post.find_featured(limit=3)
    featured_ids = {post.id for post in featured_posts}
    recent_posts = [post for post in Post.find_recent(limit=9) if post.id not in featured_ids][:6]

    return render_template(
        "index.html",
        title="Home",
        featured_posts=featured_posts,
        recent_posts=recent_posts,
        categories=Category.with_published_counts(limit=6),
    )


@main_bp.route("/about")
def about():
    """About page."""
    return render_template("pages/about.html", title="About")


@main_bp.route("/privacy")
def privacy():
    """Privacy policy."""
    return render_template("pages/privacy.html", title="Privacy Policy")


@main_bp.route("/terms")
def terms():
    """Terms of use."""
    return render_template("pages/terms.html", title="Terms of Use")


@main_bp.route("/contact", methods=["GET", "POST"])
def contact():
    """Contact form; submissions are logged and acknowledged."""
    form = ContactForm()

    if form.validate_on_submit():
        submit_contact_message(form.to_data())
        flash("Thanks for your message! We will get back to you soon.", "success")
        return redirect(url_for("main.contact"))

    return render_template("pages/contact.html", title="Contact", form=form)


@main_bp.route("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": current_app.config["APP_NAME"],
        "version": current_app.config["APP_VERSION"],
    }


@main_bp.route("/sitemap.xml")
def sitemap():
    """Sitemap of static pages, published posts, categories and tags."""
    base_url = current_app.config["APP_URL"].rstrip("/")
    entries = [
        {"loc": base_url + url_for(endpoint), "changefreq": changefreq, "priority": priority}
        for endpoint, changefreq, priority in STATIC_PAGES
    ]

    for post in Post.published().all():
        entries.append({
            "loc": base_url + url_for("blog.view_post", slug=post.slug),
            "lastmod": post.updated_at,
            "changefreq": "weekly",
            "priority": "0.8",
        })

    for category in Category.get_all_ordered():
        entries.append({
            "loc": base_url + url_for("blog.category", slug=category.slug),
            "changefreq": "weekly",
            "priority": "0.7",
        })

    for tag in Tag.get_all_ordered():
        entries.append({
            "loc": base_url + url_for("blog.tag", slug=tag.slug),
            "changefreq": "weekly",
            "priority": "0.5",
        })

    response = make_response(render_template("sitemap.xml", entries=entries))
    response.headers["Content-Type"] = "application/xml"
    return response


@main_bp.route("/robots.txt")
def robots():
    """Keep crawlers out of the dashboard, the API and the sign-in flow."""
    base_url = current_app.config["APP_URL"].rstrip("/")
    lines = [
        "User-agent: *",
        "Allow: /",
        "Disallow: /dashboard/",
        "Disallow: /api/",
        "Disallow: /auth/",
        f"Sitemap: {base_url}/sitemap.xml",
    ]
    response = make_response("\n".join(lines) + "\n")
    response.headers["Content-Type"] = "text/plain"
    return response
