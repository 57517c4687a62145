"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional, Tuple

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.json_store import JsonSalonStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import AppointmentConflictError, SalonSlotsError
from ..domain.models import Appointment
from ..domain.results import NoSchedule, NoSlotsAvailable, RejectionReason, ScheduleIssue
from ..domain.schedule_resolver import ScheduleResolver
from ..domain.slot_calculator import SlotCalculator
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="salonslots",
    help="Horários disponíveis e conflitos de agenda dos profissionais do salão",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log de depuração.")]

NO_SCHEDULE_MESSAGES = {
    ScheduleIssue.NOT_CONFIGURED: "Este profissional não tem um horário de trabalho definido.",
    ScheduleIssue.INVALID_TIME: "O horário de trabalho deste profissional está em um formato inválido.",
    ScheduleIssue.ABSENT: "O profissional está ausente no dia selecionado.",
    ScheduleIssue.ON_LEAVE: "O profissional está afastado (férias ou folga) neste período.",
}

REJECTION_LABELS = {
    RejectionReason.PAST: "já passaram",
    RejectionReason.OVERRUN: "ultrapassam o fim do expediente",
    RejectionReason.BOOKED: "ocupados por agendamentos",
    RejectionReason.LUNCH: "no horário de almoço",
}


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _build_service(
    config_file: Optional[Path], verbose: bool
) -> Tuple[AppConfig, JsonSalonStore, AvailabilityService]:
    """Load configuration and wire store, calculator and service together."""
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)

    _configure_logging("DEBUG" if verbose else config.log_level)

    store = JsonSalonStore(
        data_file=config.resolve_data_file(config_path),
        timezone=config.timezone,
    )
    calculator = SlotCalculator(
        resolver=ScheduleResolver(timezone=config.timezone),
        interval_minutes=config.defaults.slot_interval_minutes,
    )
    return config, store, AvailabilityService(store=store, slot_calculator=calculator)


def _service_identifier(value: str) -> int | str:
    return int(value) if value.isdigit() else value


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Erro:[/bold red] {escape(message)}")
    raise typer.Exit(1)


@app.command()
def slots(
    professional_id: Annotated[int, typer.Argument(help="ID do profissional")],
    date: Annotated[Optional[str], typer.Option("--date", help="Data (YYYY-MM-DD). Padrão: hoje")] = None,
    service: Annotated[Optional[str], typer.Option("--service", "-s", help="Nome ou ID do serviço")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Duração do serviço em minutos")] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    List bookable start times for a professional on a date.

    Examples:

        salonslots slots 3 --date 2025-03-14 --service Corte

        salonslots slots 3 --duration 60
    """
    try:
        config, _, availability = _build_service(config_file, verbose)
        tz = config.timezone

        if date:
            target_date = pendulum.from_format(date, "YYYY-MM-DD", tz=tz).date()
        else:
            target_date = pendulum.now(tz).date()

        if duration is not None:
            service_minutes = duration
        elif service:
            service_minutes = asyncio.run(availability.service_duration(_service_identifier(service)))
        else:
            service_minutes = config.defaults.service_duration_minutes

        result = asyncio.run(
            availability.available_slots(
                professional_id=professional_id,
                target_date=target_date,
                service_duration_minutes=service_minutes,
            )
        )
    except (FileNotFoundError, SalonSlotsError, ValueError) as e:
        _fail(str(e))

    console.print(
        f"\n[bold cyan]📅 {target_date.format('DD/MM/YYYY')}[/bold cyan] "
        f"· serviço de {service_minutes} min\n"
    )

    if isinstance(result, NoSchedule):
        console.print(f"[yellow]{NO_SCHEDULE_MESSAGES[result.issue]}[/yellow]\n")
        return

    if isinstance(result, NoSlotsAvailable):
        console.print("[yellow]Nenhum horário disponível para este profissional no dia selecionado.[/yellow]")
        for reason, count in result.rejections.items():
            console.print(f"  [dim]{count} horário(s) {REJECTION_LABELS[reason]}[/dim]")
        console.print()
        return

    console.print(f"[bold green]✓ {len(result.slots)} horário(s) disponível(is):[/bold green]\n")
    console.print("  " + "  ".join(slot.label for slot in result.slots))
    console.print()


@app.command()
def check(
    professional_id: Annotated[int, typer.Argument(help="ID do profissional")],
    start: Annotated[str, typer.Option("--start", help="Início (YYYY-MM-DD HH:mm)")],
    end: Annotated[Optional[str], typer.Option("--end", help="Fim (YYYY-MM-DD HH:mm)")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Duração em minutos, se --end não for informado")] = None,
    exclude: Annotated[Optional[int], typer.Option("--exclude", help="ID do agendamento em edição")] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Check a booking against the professional's existing appointments.
    """
    try:
        config, _, availability = _build_service(config_file, verbose)
        tz = config.timezone

        start_at = pendulum.parse(start, tz=tz)
        if end:
            end_at = pendulum.parse(end, tz=tz)
        else:
            minutes = duration if duration is not None else config.defaults.service_duration_minutes
            end_at = start_at.add(minutes=minutes)

        candidate = Appointment(professional_id=professional_id, start=start_at, end=end_at)
        asyncio.run(availability.check_booking(candidate, exclude_appointment_id=exclude))
    except AppointmentConflictError as e:
        conflicting = e.conflicting
        console.print("[bold red]✗ Conflito de Horário:[/bold red] O profissional já tem um agendamento neste horário.")
        console.print(
            escape(
                f"  #{conflicting.id} {conflicting.time_range}"
                f" {conflicting.client_name} {conflicting.service}".rstrip()
            )
        )
        raise typer.Exit(1)
    except (FileNotFoundError, SalonSlotsError, ValueError) as e:
        _fail(str(e))

    console.print(f"[green]✓ Horário livre:[/green] {candidate.time_range}")


@app.command()
def professionals(
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    List professionals with their default working hours.
    """
    try:
        _, store, _ = _build_service(config_file, verbose)
        people = asyncio.run(store.list_professionals())
    except (FileNotFoundError, SalonSlotsError) as e:
        _fail(str(e))

    if not people:
        console.print("[yellow]Nenhum profissional cadastrado.[/yellow]")
        return

    table = Table(
        title="Profissionais",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("ID", style="dim")
    table.add_column("Nome", style="bold yellow")
    table.add_column("Expediente")
    table.add_column("Almoço")
    table.add_column("Ausências", justify="right")

    for person in people:
        hours = person.working_hours
        table.add_row(
            str(person.id),
            person.name,
            f"{hours.start} - {hours.end}" if hours.has_schedule() else "—",
            f"{hours.lunch_start} - {hours.lunch_end}" if hours.has_lunch() else "—",
            str(len(person.absences)),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def services(
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    List the services offered and how long each one takes.
    """
    try:
        _, store, _ = _build_service(config_file, verbose)
        offered = asyncio.run(store.list_services())
    except (FileNotFoundError, SalonSlotsError) as e:
        _fail(str(e))

    if not offered:
        console.print("[yellow]Nenhum serviço cadastrado.[/yellow]")
        return

    table = Table(title="Serviços", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Serviço", style="bold yellow")
    table.add_column("Duração", justify="right")
    table.add_column("Preço", justify="right")

    for service in offered:
        table.add_row(
            str(service.id),
            service.name,
            f"{service.duration_minutes} min",
            f"R$ {service.price // 100},{service.price % 100:02d}",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
