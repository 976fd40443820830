# fsmstore/model/record.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, List, Mapping, Optional, Tuple, Union

from fsmstore.core.errors import ConfigurationError, PersistenceError, RecordNotSaved
from fsmstore.model.backend import StorageBackend

logger = logging.getLogger(__name__)

# A hook or validation is either a method name or a callable taking the record.
# Validations return an error message, or a falsy value when the record passes.
Callback = Union[str, Callable[["Record"], Any]]


def _has_setter(cls: type, name: str) -> bool:
    return hasattr(type(getattr(cls, name, None)), "__set__")


class Record:
    """
    A minimal record/model base. Every value lives in ``attributes``, a plain
    dictionary that is also the row handed to the storage backend. Names listed
    in ``fields`` get generated accessors; assigning to any other public name
    that the class does not declare a setter for raises AttributeError.

        class Article(Record, backend=MemoryBackend()):
            fields = ("title", "body")
    """

    fields: ClassVar[Tuple[str, ...]] = ()
    table_name: ClassVar[Optional[str]] = None
    backend: ClassVar[Optional[StorageBackend]] = None
    _before_validation: ClassVar[List[Callback]] = []
    _validations: ClassVar[List[Callback]] = []

    def __init_subclass__(cls, backend: Optional[StorageBackend] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if backend is not None:
            cls.backend = backend
        # subclasses extend, never mutate, their parent's callback lists
        cls._before_validation = list(cls._before_validation)
        cls._validations = list(cls._validations)

    @classmethod
    def before_validation(cls, hook: Callback, prepend: bool = False) -> None:
        """
        Register a hook run at the start of every validation pass, in order.

        :param hook: Method name or callable taking the record.
        :param prepend: Run before the hooks already registered.
        """
        if prepend:
            cls._before_validation.insert(0, hook)
        else:
            cls._before_validation.append(hook)

    @classmethod
    def validates(cls, check: Callback) -> None:
        cls._validations.append(check)

    @classmethod
    def table(cls) -> str:
        return cls.table_name or cls.__name__

    @classmethod
    def find(cls, record_id: int) -> "Record":
        row = cls._require_backend().fetch(cls.table(), record_id)
        if row is None:
            raise PersistenceError(f"{cls.__name__} {record_id} not found", {"id": record_id})
        record = cls()
        object.__setattr__(record, "_id", record_id)
        record.attributes.clear()
        record.attributes.update(row)
        return record

    @classmethod
    def _require_backend(cls) -> StorageBackend:
        if cls.backend is None:
            raise ConfigurationError(f"{cls.__name__} has no storage backend", {"owner": cls.__name__})
        return cls.backend

    def __init__(self, **values: Any) -> None:
        object.__setattr__(self, "attributes", {name: None for name in self.fields})
        object.__setattr__(self, "errors", [])
        object.__setattr__(self, "_id", None)
        for name, value in values.items():
            setattr(self, name, value)

    def __getattr__(self, name: str) -> Any:
        if name in type(self).fields and "attributes" in self.__dict__:
            return self.__dict__["attributes"].get(name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in type(self).fields:
            self.attributes[name] = value
        elif name.startswith("_") or _has_setter(type(self), name):
            object.__setattr__(self, name, value)
        else:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute setter '{name}'")

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def new_record(self) -> bool:
        return self._id is None

    def valid(self) -> bool:
        """
        Run the before-validation hooks, then the validations. Error messages
        are collected in ``errors``.
        """
        for hook in type(self)._before_validation:
            self._call(hook)

        self.errors.clear()
        for check in type(self)._validations:
            message = self._call(check)
            if message:
                self.errors.append(str(message))
        return not self.errors

    def save(self) -> bool:
        """
        Validate and persist every attribute.

        :return: False if validation failed.
        :raises PersistenceError: If the backend rejects the row.
        """
        if not self.valid():
            logger.debug("%s not saved: %s", type(self).__name__, "; ".join(self.errors))
            return False

        backend = self._require_backend()
        row = dict(self.attributes)
        if self.new_record:
            object.__setattr__(self, "_id", backend.insert(self.table(), row))
        else:
            backend.replace(self.table(), self._id, row)
        return True

    def update_attributes(self, values: Mapping[str, Any]) -> bool:
        """
        Assign and persist only the given attributes, skipping validation.

        :raises RecordNotSaved: If the record was never saved.
        """
        for name, value in values.items():
            setattr(self, name, value)
        if self.new_record:
            raise RecordNotSaved(
                f"Cannot update attributes of a new {type(self).__name__}", {"attributes": list(values)}
            )
        self._require_backend().update(self.table(), self._id, dict(values))
        return True

    def reload(self) -> "Record":
        """Replace the in-memory attributes with the persisted row."""
        row = self._require_backend().fetch(self.table(), self._id) if not self.new_record else None
        if row is None:
            raise PersistenceError(f"{type(self).__name__} {self._id} not found", {"id": self._id})
        self.attributes.clear()
        self.attributes.update(row)
        return self

    def _call(self, callback: Callback) -> Any:
        if isinstance(callback, str):
            return getattr(self, callback)()
        return callback(self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self._id} {self.attributes!r}>"
