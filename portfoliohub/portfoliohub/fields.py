from bson import ObjectId
from django.db import models


def new_object_id():
    return str(ObjectId())


class ObjectIdField(models.CharField):
    """Primary key holding a Mongo-style ObjectId as its 24-char hex string."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('max_length', 24)
        kwargs.setdefault('default', new_object_id)
        kwargs.setdefault('editable', False)
        super().__init__(*args, **kwargs)

    def deconstruct(self):
        name, path, args, kwargs = super().deconstruct()
        for key in ('max_length', 'default', 'editable'):
            kwargs.pop(key, None)
        return name, path, args, kwargs


def is_object_id(value):
    return isinstance(value, str) and ObjectId.is_valid(value)
