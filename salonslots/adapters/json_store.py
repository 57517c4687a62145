"""
Salon records loaded from a JSON export of the hosted database.

Rows are validated with pydantic and converted into domain models. Field
names follow the database columns (``work_start_time``, ``appointment_date``,
``end_date`` ...).
"""

import datetime
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import pendulum
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..domain.exceptions import DataStoreError, NotFoundError
from ..domain.models import Appointment, Professional, Service, TimeOff, WorkingHours

logger = logging.getLogger(__name__)


def _pendulum_date(value: datetime.date) -> pendulum.Date:
    return pendulum.date(value.year, value.month, value.day)


class ScheduleRecord(BaseModel):
    """One row of a professional's weekly schedule (0=Sunday, database convention)."""
    day_of_week: int = Field(ge=0, le=6)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None

    def python_weekday(self) -> int:
        """Convert to Python's weekday numbering (0=Monday)."""
        return (self.day_of_week - 1) % 7

    def to_working_hours(self) -> WorkingHours:
        return WorkingHours(
            start=self.start_time,
            end=self.end_time,
            lunch_start=self.lunch_start_time,
            lunch_end=self.lunch_end_time,
        )


class AbsenceRecord(BaseModel):
    date: datetime.date
    reason: str = ""


class ExceptionRecord(BaseModel):
    """A date range the professional is away (vacation, training), both ends inclusive."""
    start_date: datetime.date
    end_date: datetime.date
    description: str = ""

    @model_validator(mode="after")
    def validate_range(self):
        if self.end_date < self.start_date:
            raise ValueError(f"end_date {self.end_date} is before start_date {self.start_date}")
        return self

    def to_domain(self) -> TimeOff:
        return TimeOff(
            start_date=_pendulum_date(self.start_date),
            end_date=_pendulum_date(self.end_date),
            description=self.description,
        )


class ProfessionalRecord(BaseModel):
    # Time strings are kept raw; malformed values mean "no schedule", not a load error.
    id: int
    name: str
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    lunch_start_time: Optional[str] = None
    lunch_end_time: Optional[str] = None
    schedules: List[ScheduleRecord] = Field(default_factory=list)
    absences: List[AbsenceRecord] = Field(default_factory=list)
    exceptions: List[ExceptionRecord] = Field(default_factory=list)

    def to_domain(self) -> Professional:
        return Professional(
            id=self.id,
            name=self.name,
            working_hours=WorkingHours(
                start=self.work_start_time,
                end=self.work_end_time,
                lunch_start=self.lunch_start_time,
                lunch_end=self.lunch_end_time,
            ),
            weekly_schedule={
                schedule.python_weekday(): schedule.to_working_hours()
                for schedule in self.schedules
            },
            absences=frozenset(
                _pendulum_date(absence.date) for absence in self.absences
            ),
            time_off=tuple(exception.to_domain() for exception in self.exceptions),
        )


class ServiceRecord(BaseModel):
    id: int
    name: str
    duration: int = Field(gt=0)
    price: int = 0

    def to_domain(self) -> Service:
        return Service(id=self.id, name=self.name, duration_minutes=self.duration, price=self.price)


class AppointmentRecord(BaseModel):
    id: int
    professional_id: int
    appointment_date: str
    end_date: str
    client_name: str = ""
    service: str = ""
    price: int = 0
    attended: bool = False


class SalonDataFile(BaseModel):
    professionals: List[ProfessionalRecord] = Field(default_factory=list)
    services: List[ServiceRecord] = Field(default_factory=list)
    appointments: List[AppointmentRecord] = Field(default_factory=list)


class JsonSalonStore:
    """
    Read-only salon store backed by a JSON file.

    The file is parsed once on construction. Invalid appointment rows are
    skipped with a warning so one bad record does not hide a whole agenda.
    """

    def __init__(self, data_file: Path, timezone: str = "America/Sao_Paulo"):
        self.data_file = data_file
        self.timezone = timezone
        self._load()

    def _load(self) -> None:
        if not self.data_file.exists():
            raise DataStoreError(f"Salon data file not found: {self.data_file}")

        try:
            with open(self.data_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise DataStoreError(f"Invalid JSON in {self.data_file}: {exc}") from exc

        try:
            data = SalonDataFile.model_validate(raw)
        except ValidationError as exc:
            raise DataStoreError(f"Invalid salon records in {self.data_file}: {exc}") from exc

        self._professionals: Dict[int, Professional] = {
            record.id: record.to_domain() for record in data.professionals
        }
        self._services: List[Service] = [record.to_domain() for record in data.services]
        self._appointments: List[Appointment] = []

        for record in data.appointments:
            appointment = self._to_appointment(record)
            if appointment is not None:
                self._appointments.append(appointment)

        logger.info(
            "Loaded %d professionals, %d services, %d appointments from %s",
            len(self._professionals), len(self._services),
            len(self._appointments), self.data_file,
        )

    def _to_appointment(self, record: AppointmentRecord) -> Optional[Appointment]:
        try:
            start = pendulum.parse(record.appointment_date, tz=self.timezone)
            end = pendulum.parse(record.end_date, tz=self.timezone)
            return Appointment(
                id=record.id,
                professional_id=record.professional_id,
                start=start,
                end=end,
                client_name=record.client_name,
                service=record.service,
                price=record.price,
            )
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping appointment %s: %s", record.id, exc)
            return None

    async def get_professional(self, professional_id: int) -> Professional:
        try:
            return self._professionals[professional_id]
        except KeyError:
            raise NotFoundError(f"Professional {professional_id} not found") from None

    async def list_professionals(self) -> List[Professional]:
        return sorted(self._professionals.values(), key=lambda p: p.name.lower())

    async def get_service(self, identifier: Union[int, str]) -> Service:
        """Find a service by id or by (case-insensitive) name."""
        for service in self._services:
            if isinstance(identifier, int) and service.id == identifier:
                return service
            if isinstance(identifier, str) and service.name.lower() == identifier.lower():
                return service
        raise NotFoundError(f"Service {identifier!r} not found")

    async def list_services(self) -> List[Service]:
        return list(self._services)

    async def list_appointments(self) -> List[Appointment]:
        return list(self._appointments)
