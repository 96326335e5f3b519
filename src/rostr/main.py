"""
Rostr - CLI Entry Point.

QA tooling for inspecting and driving a device's onboarding/invite state.

Usage:
    rostr progress              Show onboarding progress
    rostr mark <step>           Mark an onboarding step done
    rostr reset                 Reset onboarding (not in production)
    rostr capture <url>         Capture a launch URL
    rostr --help                Show help
"""

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from rostr.config import get_settings
from rostr.logging_setup import configure_logging
from rostr.onboarding import STEP_ORDER, OnboardingStep
from rostr.session import AppSession
from rostr.storage import build_store

app = typer.Typer(
    name="rostr",
    help="Rostr - onboarding and invite state tooling.",
    add_completion=False,
)
console = Console()


def _session() -> AppSession:
    settings = get_settings()
    configure_logging(settings.log_level)
    return AppSession(build_store(settings), settings)


@app.command()
def progress() -> None:
    """Show onboarding progress and the next step."""
    session = _session()
    state = asyncio.run(session.tracker.get_progress())

    table = Table(title="Onboarding")
    table.add_column("Step")
    table.add_column("Done")
    for step in STEP_ORDER:
        done = step in state.completed
        table.add_row(step.value, "[green]yes[/green]" if done else "[dim]no[/dim]")
    console.print(table)

    next_step = state.next_step
    if next_step is None:
        console.print("[bold green]Onboarding complete[/bold green]")
    else:
        console.print(f"Next step: [bold]{next_step.value}[/bold]")


@app.command()
def mark(step: str = typer.Argument(..., help="Step to mark done, e.g. create-circle")) -> None:
    """Mark an onboarding step as done."""
    try:
        onboarding_step = OnboardingStep(step)
    except ValueError:
        choices = ", ".join(s.value for s in STEP_ORDER)
        console.print(f"[red]Unknown step {step!r}. Choose one of: {choices}[/red]")
        raise typer.Exit(code=1)

    session = _session()
    asyncio.run(session.tracker.mark_step(onboarding_step))
    console.print(f"✅ Marked {onboarding_step.value}")


@app.command()
def reset() -> None:
    """Reset all onboarding flags (QA only)."""
    settings = get_settings()
    if settings.is_production:
        console.print("[red]Refusing to reset onboarding in production[/red]")
        raise typer.Exit(code=1)

    session = _session()
    asyncio.run(session.tracker.reset_onboarding())
    console.print("Onboarding reset")


@app.command()
def capture(url: str = typer.Argument(..., help="Launch URL to capture")) -> None:
    """Capture a deep link or App Store redirect URL."""
    session = _session()

    async def _run():
        await session.referrals.load()
        return await session.capture.handle_url(url)

    params = asyncio.run(_run())
    if params is None:
        console.print("[yellow]No invite or referral parameters found[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"Captured: {params}")


@app.command()
def clipboard(text: str = typer.Argument(..., help="Clipboard text to scan")) -> None:
    """Capture a circle invite from clipboard text."""
    session = _session()
    stored = asyncio.run(session.capture.handle_clipboard(text))
    if stored:
        console.print("Stored pending invite; clipboard should be cleared")
    else:
        console.print("[dim]Nothing captured[/dim]")


@app.command()
def invite(
    clear: bool = typer.Option(False, "--clear", help="Clear the pending invite"),
) -> None:
    """Show (or clear) the pending circle invite."""
    session = _session()
    if clear:
        asyncio.run(session.invites.clear_pending_invite())
        console.print("Pending invite cleared")
        return

    pending = asyncio.run(session.invites.get_pending_invite())
    if pending is None:
        console.print("[dim]No pending invite[/dim]")
    else:
        console.print_json(pending.model_dump_json(by_alias=True))


@app.command()
def referral(
    clear: bool = typer.Option(False, "--clear", help="Clear the referral record"),
) -> None:
    """Show (or clear) the stored referral record."""
    session = _session()

    async def _run():
        data = await session.referrals.load()
        if clear:
            await session.referrals.clear_referral_data()
        return data

    data = asyncio.run(_run())
    if clear:
        console.print("Referral cleared")
    elif data is None:
        console.print("[dim]No referral data[/dim]")
    else:
        console.print_json(data.model_dump_json(exclude_none=True))


@app.command()
def route(
    group: str = typer.Option("(auth)", "--group", "-g", help="Current route group"),
    screen: Optional[str] = typer.Option(None, "--screen", "-s", help="Current screen"),
    signed_in: bool = typer.Option(False, "--signed-in", help="Treat the user as authenticated"),
) -> None:
    """Show where the navigation gate would send the user."""
    session = _session()
    asyncio.run(session.referrals.load())
    session.set_auth_state(is_authenticated=signed_in)

    redirect = session.next_redirect(group, screen)
    if redirect is None:
        console.print("No redirect")
    else:
        console.print(f"Redirect to [bold]{redirect.route}[/bold] {redirect.params or ''}")


if __name__ == "__main__":
    app()
