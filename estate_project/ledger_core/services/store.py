import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction

from ..exceptions import NotFound, StoreFailure

logger = logging.getLogger(__name__)


@contextmanager
def atomic_write():
    """
    All-or-nothing block for multi-record writes.
    Database errors roll the block back and surface as StoreFailure.
    """
    try:
        with transaction.atomic():
            yield
    except DatabaseError as exc:
        logger.error("store rejected write: %s", exc)
        raise StoreFailure(str(exc)) from exc


def fetch(model, pk, *, lock=False, **filters):
    """
    Get one row by primary key or raise NotFound.
    With lock=True the row stays locked (select_for_update)
    until the surrounding transaction ends.
    """
    qs = model.objects.select_for_update() if lock else model.objects.all()
    try:
        return qs.get(pk=pk, **filters)
    except model.DoesNotExist:
        raise NotFound(f"{model.__name__} {pk} does not exist") from None
