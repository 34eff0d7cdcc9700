from .events import Event, Application, RegistrationRequirement, PaymentSettings
from .clients import Client
from .registration import RegistrationToken, RegistrationSubmission
from .tickets import Ticket, TICKET_STATUS_ACTIVE

__all__ = [
    'Event', 'Application', 'RegistrationRequirement', 'PaymentSettings',
    'Client',
    'RegistrationToken', 'RegistrationSubmission',
    'Ticket', 'TICKET_STATUS_ACTIVE',
]
