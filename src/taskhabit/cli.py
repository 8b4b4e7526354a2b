"""Flask CLI commands for TaskHabit."""

from __future__ import annotations

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("taskhabit-seed")
    @click.option("--user", "username", default="local", show_default=True, help="Owner of the demo data")
    @click.option("--force", is_flag=True, default=False, help="Seed even when the user has tasks")
    def taskhabit_seed(username: str, force: bool) -> None:
        """Seed starter tasks and a habit for a local user."""

        from .extensions import get_services
        from .services.seed import run_demo_seed

        summary = run_demo_seed(get_services().session_factory, username=username, force=force)
        if summary.seeded:
            click.echo(f"Seeded demo data for {username!r} (user id {summary.user_id}).")
        else:
            click.echo(f"{username!r} already has data; use --force to add more.")
        click.echo(f"Tasks: {summary.tasks}  Habits: {summary.habits}")

    @app.cli.command("taskhabit-summary")
    @click.option("--user", "username", default="local", show_default=True)
    def taskhabit_summary(username: str) -> None:
        """Print the analytics summary for a user."""

        from .extensions import get_services
        from .services.seed import ensure_user

        services = get_services()
        user = ensure_user(services.session_factory, username)
        summary = services.analytics.summary(user.id)
        for key, value in summary.to_dict().items():
            click.echo(f"{key.replace('_', ' ')}: {value}")
