"""
Named states of the booking wizard.

Each state carries exactly the data its screen needs, so a state such as
"duplicate found" cannot exist without the duplicate booking it shows.
"""

from dataclasses import asdict, dataclass
from datetime import date as Date
from typing import Any, ClassVar, Dict, Optional, Union

from ..enums import WizardStep
from .booking import Booking, BookingDraft, ExistingBooking
from .private_tour import PrivateTourRequest


def _draft_payload(draft: BookingDraft) -> Dict[str, Any]:
    data = asdict(draft)
    data["date"] = draft.date.isoformat()
    return data


@dataclass(frozen=True)
class DateSelection:
    """Pick a date, then the party size, then a tour time."""

    step: ClassVar[WizardStep] = WizardStep.DATE_SELECTION

    date: Optional[Date] = None
    guests: int = 1
    slots_shown: bool = False

    def payload(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat() if self.date else None,
            "guests": self.guests,
            "slots_shown": self.slots_shown,
        }


@dataclass(frozen=True)
class ContactForm:
    step: ClassVar[WizardStep] = WizardStep.CONTACT_FORM

    draft: BookingDraft

    def payload(self) -> Dict[str, Any]:
        return {"draft": _draft_payload(self.draft)}


@dataclass(frozen=True)
class PhoneEnrichment:
    """Optional phone/country for a booking that already exists."""

    step: ClassVar[WizardStep] = WizardStep.PHONE_ENRICHMENT

    booking: Booking

    def payload(self) -> Dict[str, Any]:
        return {"booking": self.booking.model_dump(mode="json")}


@dataclass(frozen=True)
class DuplicateFound:
    step: ClassVar[WizardStep] = WizardStep.DUPLICATE_FOUND

    existing: ExistingBooking
    draft: BookingDraft

    def payload(self) -> Dict[str, Any]:
        return {
            "existing": self.existing.model_dump(mode="json"),
            "draft": _draft_payload(self.draft),
        }


@dataclass(frozen=True)
class PrivateTourGuests:
    step: ClassVar[WizardStep] = WizardStep.PRIVATE_TOUR_GUESTS

    guests: int
    preferred_date: Optional[Date] = None

    def payload(self) -> Dict[str, Any]:
        return {
            "guests": self.guests,
            "preferred_date": self.preferred_date.isoformat() if self.preferred_date else None,
        }


@dataclass(frozen=True)
class PrivateTourContact:
    step: ClassVar[WizardStep] = WizardStep.PRIVATE_TOUR_CONTACT

    guests: int
    preferred_date: Optional[Date] = None

    def payload(self) -> Dict[str, Any]:
        return {
            "guests": self.guests,
            "preferred_date": self.preferred_date.isoformat() if self.preferred_date else None,
        }


@dataclass(frozen=True)
class PrivateTourSubmitted:
    """Request sent; ``accepted`` is False when the endpoint rejected it."""

    step: ClassVar[WizardStep] = WizardStep.PRIVATE_TOUR_SUBMITTED

    request: PrivateTourRequest
    accepted: bool

    def payload(self) -> Dict[str, Any]:
        return {"request": self.request.model_dump(mode="json")}


@dataclass(frozen=True)
class Finished:
    """Wizard is done; ``redirect_url`` is None when it was closed."""

    step: ClassVar[WizardStep] = WizardStep.FINISHED

    redirect_url: Optional[str] = None

    def payload(self) -> Dict[str, Any]:
        return {"redirect_url": self.redirect_url}


WizardState = Union[
    DateSelection,
    ContactForm,
    PhoneEnrichment,
    DuplicateFound,
    PrivateTourGuests,
    PrivateTourContact,
    PrivateTourSubmitted,
    Finished,
]
