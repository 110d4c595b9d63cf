"""CLI commands for wedding planner administration."""

import asyncio
from datetime import date
from uuid import UUID

import typer

from src.config.database import async_session_manager, run_migrations
from src.errors import DomainError
from src.guests.dtos import GuestRole, InviteGuestDTO, Side
from src.guests.features.manage_guests.write_model import SqlGuestRegistryWriteModel
from src.guests.features.submit_rsvp.write_model import SqlRSVPWriteModel
from src.headcount.features.compute_snapshot.write_model import SqlSnapshotWriteModel
from src.headcount.repository.read_models import SqlHeadcountReadModel
from src.invitations.features.partner_invitation.write_model import (
    SqlPartnerInvitationWriteModel,
)
from src.models.user import User
from src.notifications.sink import SqlNotificationSink
from src.weddings.features.create_wedding.write_model import SqlWeddingCreateWriteModel

app = typer.Typer(help="CLI commands for wedding planner administration")


def _run(coro):
    """Run a coroutine, turning domain errors into a red message and exit code 1."""
    try:
        return asyncio.run(coro)
    except DomainError as e:
        typer.secho(e.message, fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def migrate():
    """Upgrade the database to the latest schema."""
    asyncio.run(run_migrations())
    typer.secho("Database is up to date.", fg=typer.colors.GREEN)


@app.command()
def create_user(
    email: str = typer.Option(..., help="Email address of the new user"),
    full_name: str = typer.Option("", help="Display name"),
):
    """Create a user account."""
    async def _create_user():
        async with async_session_manager() as session:
            user = User(email=email.strip().lower(), full_name=full_name)
            session.add(user)
            await session.flush()
            return user.uuid

    user_id = _run(_create_user())
    typer.secho("User created!", fg=typer.colors.GREEN)
    typer.secho(f"  User ID: {user_id}", fg=typer.colors.CYAN)


@app.command()
def invite_partner(
    sender_id: str = typer.Argument(..., help="UUID of the user sending the invitation"),
    email: str = typer.Argument(..., help="Partner's email address"),
    message: str = typer.Option(None, help="Optional personal message"),
):
    """Invite a partner to form a couple."""
    write_model = SqlPartnerInvitationWriteModel(notification_sink=SqlNotificationSink())
    result = _run(write_model.create_partner_invitation(UUID(sender_id), email, message=message))

    typer.secho("Partner invitation created!", fg=typer.colors.GREEN)
    typer.secho(f"  Code: {result.code}", fg=typer.colors.CYAN)
    typer.secho(f"  Expires: {result.expires_at:%Y-%m-%d %H:%M} UTC", fg=typer.colors.BLUE)


@app.command()
def accept_partner(
    code: str = typer.Argument(..., help="6 character invitation code"),
    user_id: str = typer.Argument(..., help="UUID of the user accepting"),
):
    """Accept a partner invitation, creating the couple."""
    write_model = SqlPartnerInvitationWriteModel(notification_sink=SqlNotificationSink())
    couple = _run(write_model.accept_partner_invitation(code, UUID(user_id)))

    typer.secho("Couple created!", fg=typer.colors.GREEN)
    typer.secho(f"  Couple ID: {couple.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Engaged on: {couple.engaged_date}", fg=typer.colors.BLUE)


@app.command()
def create_wedding(
    user_id: str = typer.Argument(..., help="UUID of either partner"),
    name: str = typer.Option(..., help="Wedding name"),
    wedding_date: str = typer.Option(..., "--date", help="Wedding date, YYYY-MM-DD"),
    venue: str = typer.Option(..., help="Main venue"),
    city: str = typer.Option(..., help="City"),
    guest_limit: int = typer.Option(None, help="Maximum number of guests"),
):
    """Create the couple's wedding with its canonical events."""
    write_model = SqlWeddingCreateWriteModel(notification_sink=SqlNotificationSink())
    result = _run(
        write_model.create_wedding_with_events(
            UUID(user_id),
            name=name,
            date=date.fromisoformat(wedding_date),
            venue=venue,
            city=city,
            guest_limit=guest_limit,
        )
    )

    typer.secho("Wedding created!", fg=typer.colors.GREEN)
    typer.secho(f"  Wedding ID: {result.wedding_id}", fg=typer.colors.CYAN)
    typer.secho(f"  Events created: {result.events_created}", fg=typer.colors.BLUE)


@app.command()
def invite_guest(
    wedding_id: str = typer.Argument(..., help="Wedding UUID"),
    full_name: str = typer.Argument(..., help="Guest's full name"),
    side: Side = typer.Option(Side.GROOM, help="Whose side the guest is on"),
    role: GuestRole = typer.Option(GuestRole.FRIEND, help="Relationship to the couple"),
    email: str = typer.Option(None, help="Guest's email"),
    send: bool = typer.Option(True, help="Mark the invitation as sent"),
):
    """Add a guest to a wedding."""
    write_model = SqlGuestRegistryWriteModel()
    details = InviteGuestDTO(full_name=full_name, side=side, role=role, email=email)
    create = write_model.invite_guest if send else write_model.add_guest
    guest = _run(create(UUID(wedding_id), details))

    typer.secho("Guest added!", fg=typer.colors.GREEN)
    typer.secho(f"  Guest ID: {guest.id}", fg=typer.colors.CYAN)
    typer.secho(f"  Status: {guest.status.value}", fg=typer.colors.BLUE)


@app.command()
def rsvp(
    event_id: str = typer.Argument(..., help="Event UUID"),
    guest_id: str = typer.Argument(..., help="Guest UUID"),
    wedding_id: str = typer.Argument(..., help="Wedding UUID"),
    status: str = typer.Option("attending", help="attending, not_attending, maybe or pending"),
    adults: int = typer.Option(1, help="Number of adults"),
    teens: int = typer.Option(0, help="Number of teens"),
    children: int = typer.Option(0, help="Number of children"),
):
    """Submit or update a guest's RSVP for an event."""
    write_model = SqlRSVPWriteModel()
    result = _run(
        write_model.submit_or_update_rsvp(
            UUID(event_id), UUID(guest_id), UUID(wedding_id), status, adults, teens, children
        )
    )

    typer.secho(result.message, fg=typer.colors.GREEN)
    typer.secho(f"  Headcount: {result.rsvp.display_headcount}", fg=typer.colors.CYAN)


@app.command()
def snapshot(
    event_id: str = typer.Argument(..., help="Event UUID"),
    side: Side = typer.Option(None, help="Only count guests on this side"),
):
    """Compute a new headcount snapshot for an event."""
    result = _run(SqlSnapshotWriteModel().compute_snapshot(UUID(event_id), side=side))

    typer.secho("Snapshot recorded!", fg=typer.colors.GREEN)
    typer.secho(
        f"  Invited: {result.total_invited}  Attending: {result.total_attending}  "
        f"Declined: {result.total_declined}  Maybe: {result.total_maybe}  "
        f"Pending: {result.total_pending}",
        fg=typer.colors.BLUE,
    )
    typer.secho(f"  Headcount: {result.display_headcount}", fg=typer.colors.CYAN)
    typer.secho(
        f"  Vegetarian: {result.vegetarian_count}  Vegan: {result.vegan_count}  "
        f"Halal: {result.halal_count}",
        fg=typer.colors.MAGENTA,
    )


@app.command()
def headcount(
    wedding_id: str = typer.Argument(..., help="Wedding UUID"),
    refresh: bool = typer.Option(False, help="Recompute every event before reporting"),
):
    """Show the latest headcount of every event in a wedding."""
    async def _headcount():
        if refresh:
            await SqlSnapshotWriteModel().refresh_wedding_snapshots(UUID(wedding_id))
        return await SqlHeadcountReadModel().wedding_headcount_overview(UUID(wedding_id))

    overview = _run(_headcount())

    for item in overview.events:
        if item.snapshot is None:
            typer.secho(f"  {item.event_name}: no snapshot yet", fg=typer.colors.YELLOW)
        else:
            typer.secho(
                f"  {item.event_name}: {item.snapshot.display_headcount} "
                f"({item.snapshot.total_attending} attending)",
                fg=typer.colors.BLUE,
            )
    typer.secho(f"Total headcount: {round(overview.total_headcount, 2)}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
