"""Domain error taxonomy shared by every module.

Services raise these (or module-specific subclasses); the API layer
never builds error responses by hand.  ``api_exception_handler`` maps
each family to its HTTP status via ``status_code``:

- ``ValidationError``  -> 400 (malformed / missing / out-of-range input)
- ``NotFoundError``    -> 404 (referenced entity absent)
- ``ConflictError``    -> 409 (duplicate unique key)
- ``IntegrityError``   -> 400 (deletion blocked by dependents)
- ``InternalError``    -> 500 (unexpected store failure)
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 500
    default_message = "Ocorreu um erro no servidor."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    status_code = 400
    default_message = "Os dados enviados estão incorretos."


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Registro não encontrado."


class ConflictError(DomainError):
    status_code = 409
    default_message = "Registro já existe."


class IntegrityError(DomainError):
    """Deletion refused because other records still reference the entity.

    ``dependents`` carries the exact count reported to the caller.
    """

    status_code = 400
    default_message = "Existem registros vinculados."

    def __init__(self, message: str | None = None, dependents: int = 0) -> None:
        self.dependents = dependents
        super().__init__(message)


class InternalError(DomainError):
    status_code = 500


class InvalidIdentifier(ValidationError):
    default_message = "ID inválido."
