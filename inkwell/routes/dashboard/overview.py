"""Dashboard overview and analytics screens."""
from flask import render_template, request

from inkwell.services.dashboard_service import get_dashboard_service
from . import dashboard_bp, moderators_only


@dashboard_bp.route("/")
@moderators_only
def index():
    """Totals, recent activity and the six-month post chart."""
    stats = get_dashboard_service().get_stats()
    peak = max((row['posts'] for row in stats['monthly_data']), default=0)
    return render_template("dashboard/index.html", title="Dashboard", stats=stats, monthly_peak=peak)


@dashboard_bp.route("/analytics")
@moderators_only
def analytics():
    """Status breakdowns for a period plus the most popular posts and categories."""
    service = get_dashboard_service()
    days = request.args.get("days", 30, type=int)
    if days not in (7, 30, 90, 365):
        days = 30

    return render_template(
        "dashboard/analytics.html",
        title="Analytics",
        days=days,
        posts_by_status=service.posts_by_status(days),
        comments_by_status=service.comments_by_status(days),
        popular_posts=service.popular_posts(limit=10),
        popular_categories=service.popular_categories(limit=10),
    )
