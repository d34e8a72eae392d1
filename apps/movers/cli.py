import json

import click

from .blueprints.movers import run_revision
from .revisions import REVISIONS


def register_cli(app):
    @app.cli.command("movers.fetch")
    @click.option("--revision", default=None, help="Revision id (default: MOVERS_DEFAULT_REVISION)")
    @click.option("--limit", default=None, help="Upstream fetch size")
    @click.option("--order-by", "order_by", default=None, help="Ranking window, e.g. 30d")
    @click.option("--page", default=None)
    @click.option("--top", default=None, help="Output truncation count")
    @click.pass_context
    def movers_fetch(ctx, revision, limit, order_by, page, top):
        """Run one revision and print its JSON envelope."""
        args = {"limit": limit, "orderBy": order_by, "page": page, "top": top}
        args = {k: v for k, v in args.items() if v is not None}
        body, status, _headers = run_revision(
            revision or app.config["MOVERS_DEFAULT_REVISION"], args, app.config
        )

        if isinstance(body, dict):
            click.echo(json.dumps(body, indent=2))
        else:
            click.echo(body)
        if status >= 400:
            click.echo(f"HTTP {status}", err=True)
            ctx.exit(1)

    @app.cli.command("movers.revisions")
    def movers_revisions():
        """List the available revisions."""
        for r in REVISIONS.values():
            click.echo(f"{r.id:<18} limit={r.default_limit:<3} {r.description}")
