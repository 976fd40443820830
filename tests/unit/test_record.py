# tests/unit/test_record.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from fsmstore.core.errors import ConfigurationError, PersistenceError, RecordNotSaved
from fsmstore.model.record import Record


@pytest.fixture
def article_class(backend):
    class Article(Record, backend=backend):
        fields = ("title", "body")

        @property
        def headline(self):
            return (self.title or "").upper()

        @headline.setter
        def headline(self, value):
            self.title = value.lower()

    return Article


# -----------------------------------------------------------------------------
# ATTRIBUTES
# -----------------------------------------------------------------------------


def test_declared_fields_live_in_attributes(article_class):
    article = article_class(title="hello")
    assert article.title == "hello"
    assert article.body is None
    assert article.attributes == {"title": "hello", "body": None}


def test_undeclared_setter_raises(article_class):
    article = article_class()
    with pytest.raises(AttributeError, match="no attribute setter 'colour'"):
        article.colour = "red"
    with pytest.raises(AttributeError):
        article_class(colour="red")


def test_undeclared_getter_raises(article_class):
    with pytest.raises(AttributeError, match="no attribute 'colour'"):
        article_class().colour


def test_property_setters_are_declared_setters(article_class):
    article = article_class()
    article.headline = "BIG NEWS"
    assert article.title == "big news"
    assert article.headline == "BIG NEWS"


def test_attribute_bag_accepts_any_key(article_class):
    article = article_class()
    article.attributes["extra"] = 1
    assert article.attributes["extra"] == 1


# -----------------------------------------------------------------------------
# VALIDATION
# -----------------------------------------------------------------------------


def test_before_validation_hooks_run_in_order(article_class):
    calls = []
    article_class.before_validation(lambda r: calls.append("second"))
    article_class.before_validation(lambda r: calls.append("first"), prepend=True)
    assert article_class().valid()
    assert calls == ["first", "second"]


def test_hooks_by_method_name(backend):
    class Slugged(Record, backend=backend):
        fields = ("title", "slug")

        def make_slug(self):
            self.slug = (self.title or "").replace(" ", "-")

    Slugged.before_validation("make_slug")
    record = Slugged(title="a b")
    record.valid()
    assert record.slug == "a-b"


def test_validations_collect_errors(article_class):
    article_class.validates(lambda r: None if r.title else "title can't be blank")
    article_class.validates(lambda r: None if r.body else "body can't be blank")
    article = article_class(body="x")
    assert not article.valid()
    assert article.errors == ["title can't be blank"]

    article.title = "t"
    assert article.valid()
    assert article.errors == []


def test_subclass_extends_parent_callbacks(article_class):
    article_class.validates(lambda r: None if r.title else "title can't be blank")

    class Draft(article_class):
        pass

    Draft.validates(lambda r: "drafts are never valid")
    assert len(Draft._validations) == 2
    assert len(article_class._validations) == 1


# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------


def test_save_inserts_then_replaces(article_class, backend):
    article = article_class(title="a")
    assert article.new_record
    assert article.save()
    assert not article.new_record
    assert backend.fetch("Article", article.id) == {"title": "a", "body": None}

    article.body = "b"
    assert article.save()
    assert backend.fetch("Article", article.id) == {"title": "a", "body": "b"}


def test_save_returns_false_when_invalid(article_class, backend):
    article_class.validates(lambda r: None if r.title else "title can't be blank")
    backend_insert = MagicMock(wraps=backend.insert)
    backend.insert = backend_insert
    assert article_class().save() is False
    backend_insert.assert_not_called()


def test_save_propagates_backend_errors(article_class, backend):
    backend.insert = MagicMock(side_effect=PersistenceError("disk full"))
    with pytest.raises(PersistenceError, match="disk full"):
        article_class(title="a").save()


def test_update_attributes_persists_only_given_fields(article_class, backend):
    article = article_class(title="a", body="b")
    article.save()
    article.body = "unsaved"
    assert article.update_attributes({"title": "z"})
    assert backend.fetch("Article", article.id) == {"title": "z", "body": "b"}
    assert article.title == "z"


def test_update_attributes_skips_validation(article_class):
    article = article_class(title="a")
    article.save()
    article_class.validates(lambda r: "always invalid")
    assert article.update_attributes({"body": "b"})


def test_update_attributes_on_new_record(article_class):
    with pytest.raises(RecordNotSaved):
        article_class().update_attributes({"title": "a"})


def test_find_and_reload(article_class):
    article = article_class(title="a")
    article.save()
    found = article_class.find(article.id)
    assert found.id == article.id
    assert found.title == "a"

    found.update_attributes({"title": "b"})
    assert article.reload().title == "b"


def test_find_missing(article_class):
    with pytest.raises(PersistenceError, match="not found"):
        article_class.find(404)


def test_reload_new_record(article_class):
    with pytest.raises(PersistenceError):
        article_class().reload()


def test_table_name(article_class):
    assert article_class.table() == "Article"

    class Named(Record):
        table_name = "named_rows"

    assert Named.table() == "named_rows"


def test_missing_backend():
    class Orphan(Record):
        fields = ("title",)

    with pytest.raises(ConfigurationError, match="no storage backend"):
        Orphan(title="a").save()
