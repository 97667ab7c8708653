"""
Domain Errors

Business-rule failures raised by the booking services. Every error is
synchronous, returned to the caller in the same request and never retried.
The API layer renders them through ``shared.api.exception_handler``.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = 400
    default_code = "domain_error"
    default_message = "Operação inválida."

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.code = self.default_code
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "code": self.code, **self.extra}


class ValidationError(DomainError):
    """Missing or malformed input (area id, date, slot label, rules)."""

    default_code = "validation_error"
    default_message = "Dados inválidos."


class NotFoundError(DomainError):
    status_code = 404
    default_code = "not_found"
    default_message = "Registro não encontrado."


class PermissionDeniedError(DomainError):
    """Actor lacks rights over the target reservation or area."""

    status_code = 403
    default_code = "permission_denied"
    default_message = "Acesso negado."


class ConflictError(DomainError):
    status_code = 409
    default_code = "conflict"


class DuplicateNameError(ConflictError):
    default_code = "duplicate_name"
    default_message = "Já existe uma área com este nome no condomínio."


class DuplicateBookingError(ConflictError):
    default_code = "duplicate_booking"
    default_message = "Você já possui uma reserva (pendente ou aprovada) para esta área nesta data."


class QuotaExceededError(ConflictError):
    default_code = "quota_exceeded"
    default_message = "Não há mais vagas disponíveis para esta área nesta data."


class SlotTakenError(ConflictError):
    default_code = "slot_taken"
    default_message = "Este horário já está reservado ou aguardando aprovação."


class ApprovalConflictError(ConflictError):
    default_code = "approval_conflict"
    default_message = "Não é possível aprovar: já existe outra reserva aprovada para este horário."


class InvalidStateError(ConflictError):
    default_code = "invalid_state"
    default_message = "A reserva não está em um status que permita esta operação."


class CancellationWindowError(DomainError):
    default_code = "cancellation_window"

    def __init__(self, required_hours: int, hours_until: float) -> None:
        super().__init__(
            f"Cancelamento deve ser feito com pelo menos {required_hours} horas de antecedência.",
            required_hours=required_hours,
            hours_until=round(hours_until, 2),
        )
        self.required_hours = required_hours
        self.hours_until = hours_until
