"""Models whose rows are written once and never changed afterwards"""

from django.db import models


class ImmutableRecordError(Exception):
    """Raised on any attempt to update or delete an append-only row"""

    def __init__(self, model_name: str, action: str):
        self.model_name = model_name
        self.action = action
        super().__init__(f"{model_name} rows are append-only and cannot be {action}")


class AppendOnlyQuerySet(models.QuerySet):
    """a queryset that refuses bulk updates and deletes"""

    def update(self, **kwargs):
        raise ImmutableRecordError(self.model.__name__, "updated")

    def delete(self):
        raise ImmutableRecordError(self.model.__name__, "deleted")


class AppendOnlyModel(models.Model):
    """
    Base for append-only tables. A row can be inserted once; saving an existing
    row or deleting one raises ImmutableRecordError. Rows still disappear when
    their parent is deleted through a cascade.
    """

    objects = AppendOnlyQuerySet.as_manager()

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecordError(type(self).__name__, "updated")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableRecordError(type(self).__name__, "deleted")
