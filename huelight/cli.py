"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
from collections.abc import Callable

import typer

from huelight.api import Client
from huelight.core.colors import COLORS
from huelight.core.errors import HuelightError
from huelight.core.light import Light

app = typer.Typer(help="Control lights on a home-automation bridge")


def _build_client(ctx: typer.Context) -> Client:
    options = ctx.obj or {}
    return Client.from_config(host=options.get("host"), username=options.get("username"))


def _describe(light: Light) -> str:
    power = "on" if light.state.on else "off"
    return f"{light.index}: {light.name} [{power}] bri={light.state.bri}"


def _run(ctx: typer.Context, ref: str, action_name: str, action: Callable[[Light], None]) -> None:
    try:
        light = _build_client(ctx).find(ref)
        action(light)
        typer.echo(f"{action_name} -> {_describe(light)}")
    except HuelightError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.callback()
def main(
    ctx: typer.Context,
    host: str | None = typer.Option(None, "--host", help="Bridge host or IP"),
    username: str | None = typer.Option(None, "--username", help="Bridge API username"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    ctx.obj = {"host": host, "username": username}


@app.command("lights")
def list_lights(ctx: typer.Context) -> None:
    """Scan the bridge and list lights in index order."""
    try:
        lights = _build_client(ctx).lights()
        if not lights:
            typer.echo("No lights found")
            return
        for light in lights:
            typer.echo(_describe(light))
    except HuelightError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("show")
def show_light(ctx: typer.Context, light: str) -> None:
    """Show all attributes of a light given by index or exact name."""
    try:
        found = _build_client(ctx).find(light)
        typer.echo(f"{found.index}: {found.name} ({found.type}, {found.modelid})")
        state = found.state
        typer.echo(f"  on={state.on} reachable={state.reachable}")
        typer.echo(f"  bri={state.bri} hue={state.hue} sat={state.sat} ct={state.ct}")
        typer.echo(f"  xy={state.xy[0]:.4f},{state.xy[1]:.4f} colormode={state.colormode}")
        typer.echo(f"  effect={state.effect} alert={state.alert}")
    except HuelightError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("on")
def turn_on(ctx: typer.Context, light: str) -> None:
    """Turn a light on."""
    _run(ctx, light, "on", lambda found: found.turn_on())


@app.command("off")
def turn_off(ctx: typer.Context, light: str) -> None:
    """Turn a light off."""
    _run(ctx, light, "off", lambda found: found.turn_off())


@app.command("toggle")
def toggle(ctx: typer.Context, light: str) -> None:
    """Flip a light's power state."""
    _run(ctx, light, "toggle", lambda found: found.toggle())


@app.command("blink")
def blink(
    ctx: typer.Context,
    light: str,
    seconds: int = typer.Option(3, "--seconds", min=0, help="Blink duration"),
) -> None:
    """Pulse a light's brightness, then restore it."""
    _run(ctx, light, "blink", lambda found: found.blink(seconds))


@app.command("colorloop")
def colorloop(
    ctx: typer.Context,
    light: str,
    off: bool = typer.Option(False, "--off", help="Stop the color loop"),
) -> None:
    """Start or stop the color loop effect."""
    _run(ctx, light, "colorloop", lambda found: found.color_loop(not off))


@app.command("color")
def set_color(ctx: typer.Context, light: str, color: str) -> None:
    """Set a light to a named color."""
    _run(ctx, light, f"color {color}", lambda found: found.set_color(color))


@app.command("colors")
def list_colors() -> None:
    """List the named colors."""
    for name, (x, y) in COLORS.items():
        typer.echo(f"{name}: {x:.4f},{y:.4f}")


@app.command("brightness")
def set_brightness(ctx: typer.Context, light: str, bri: int) -> None:
    """Turn a light on at the given brightness (1-254)."""
    _run(ctx, light, f"brightness {bri}", lambda found: found.set_brightness(bri))


@app.command("rename")
def rename(ctx: typer.Context, light: str, name: str) -> None:
    """Rename a light."""
    _run(ctx, light, "rename", lambda found: found.set_name(name))


@app.command("delete")
def delete(ctx: typer.Context, light: str) -> None:
    """Remove a light from the bridge."""
    try:
        found = _build_client(ctx).find(light)
        found.delete()
        typer.echo(f"Deleted light {found.index} ({found.name})")
    except HuelightError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
