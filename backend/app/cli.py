"""Comandos de consola (``flask check-profile``, ``flask show-policy``)."""
import json

import click
from flask import Flask, current_app
from flask.cli import with_appcontext

from .services.profile import process_profile, render_profile_html


@click.command("check-profile")
@with_appcontext
@click.option("--name", default="", help="Nombre tal como lo escribiría el usuario.")
@click.option("--email", default="", help="Email sin normalizar.")
@click.option("--comment", default="", help="Comentario; puede contener HTML.")
@click.option("--html", "show_html", is_flag=True, help="Muestra además la tarjeta HTML resultante.")
def check_profile(name: str, email: str, comment: str, show_html: bool = False):
    """
    Ejecuta el pipeline del perfil con la política configurada, como lo haría
    el formulario del cliente, e imprime el resultado JSON.
    """
    outcome = process_profile(
        {"name": name, "email": email, "comment": comment},
        current_app.extensions["profile_policy"],
        current_app.extensions["sanitize_policy"],
    )
    click.echo(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))

    if not outcome.ok:
        raise SystemExit(1)
    if show_html:
        click.echo(render_profile_html(outcome.saved))


@click.command("show-policy")
@with_appcontext
def show_policy():
    """Imprime la política de validación y sanitización activa."""
    payload = {
        "validation": current_app.extensions["profile_policy"].to_dict(),
        "sanitize": current_app.extensions["sanitize_policy"].to_dict(),
    }
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def register_cli(app: Flask) -> None:
    app.cli.add_command(check_profile)
    app.cli.add_command(show_policy)
