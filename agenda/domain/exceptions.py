"""
Domain exception hierarchy for availability and appointment scheduling.

Every failure the scheduling core can report is a subclass of
``SchedulingError`` and belongs to exactly one kind (not found, role
violation, invalid input, conflict, unavailable). Callers map kinds to
their own responses; the core never raises a generic failure.
"""


class SchedulingError(Exception):
    """Base class for all scheduling errors."""

    default_message = "Scheduling request rejected."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


# Kinds


class NotFoundError(SchedulingError):
    """A referenced person does not exist."""


class RoleViolationError(SchedulingError):
    """A person exists but does not hold the role the operation needs."""


class InvalidInputError(SchedulingError):
    """Malformed or semantically invalid input."""


class ConflictError(SchedulingError):
    """The request collides with existing or sibling data."""


class UnavailableError(SchedulingError):
    """The professional has not published time covering the request."""


# Not found


class ProfessionalNotFoundError(NotFoundError):
    default_message = "Professional not found."


class ClientNotFoundError(NotFoundError):
    default_message = "Client not found."


# Role


class NotAProfessionalError(RoleViolationError):
    default_message = "User is not a professional."


# Invalid input


class InvalidTimeFormatError(InvalidInputError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid time format: {value!r}. Expected HH:MM.")


class InvalidDayOfWeekError(InvalidInputError):
    def __init__(self, day_of_week: object):
        self.day_of_week = day_of_week
        super().__init__(f"Invalid day of week: {day_of_week!r}. Must be 0-6.")


class InvalidRangeError(InvalidInputError):
    def __init__(self, start_time: object, end_time: object):
        self.start_time = start_time
        self.end_time = end_time
        super().__init__(
            f"Invalid availability range: start time ({start_time}) must be before end time ({end_time})."
        )


class InvalidDurationError(InvalidInputError):
    default_message = "Invalid appointment duration."


class PastBookingError(InvalidInputError):
    default_message = "Cannot book appointments in the past."


class SelfBookingError(InvalidInputError):
    default_message = "Professional cannot book an appointment with themselves."


# Conflict


class OverlappingSlotsError(ConflictError):
    """Two slots of one batch overlap on the same day."""

    def __init__(self, day_of_week: int, first, second):
        self.day_of_week = day_of_week
        self.first = first
        self.second = second
        super().__init__(
            f"Overlapping availability slots on day {day_of_week}: "
            f"{first.start_time}-{first.end_time} overlaps with {second.start_time}-{second.end_time}."
        )


class SlotTakenError(ConflictError):
    default_message = "Professional already has an appointment at this time."


# Unavailable


class NoAvailabilityThatDayError(UnavailableError):
    default_message = "Professional is not available on this day."


class OutsideAvailabilityError(UnavailableError):
    default_message = "Requested time is not within professional availability."


# Notifications


class UnknownChannelError(SchedulingError):
    def __init__(self, channel: object):
        self.channel = channel
        super().__init__(f"No sender registered for channel: {channel}.")
