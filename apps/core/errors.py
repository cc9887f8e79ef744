# apps/core/errors.py
import logging

from django.contrib import messages
from django.db import DatabaseError, IntegrityError
from django.db.models import ProtectedError

logger = logging.getLogger(__name__)

FOREIGN_KEY_HINT = 'foreign key'
GENERIC_DELETE_MESSAGE = "Nie udało się usunąć rekordu."
GENERIC_SAVE_MESSAGE = "Nie udało się zapisać zmian."


def is_foreign_key_error(exc: Exception) -> bool:
    if isinstance(exc, ProtectedError):
        return True
    return isinstance(exc, IntegrityError) and FOREIGN_KEY_HINT in str(exc).lower()


def delete_with_feedback(request, obj, dependents_message: str,
                         generic_message: str = GENERIC_DELETE_MESSAGE) -> bool:
    """
    Usuwa obiekt i pokazuje komunikat.
    Blokada przez powiązane rekordy dostaje przyjazne wyjaśnienie, reszta - ogólny błąd.
    """
    try:
        obj.delete()
    except (ProtectedError, DatabaseError) as e:
        logger.exception("Delete of %s %s failed", type(obj).__name__, obj.pk)
        messages.error(request, dependents_message if is_foreign_key_error(e) else generic_message)
        return False
    return True
