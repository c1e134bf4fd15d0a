"""Tests for the generic subjects, the subject factory and value formatting."""

import re

import pytest

from certainty_playwright import assert_that
from certainty_playwright.element.subject import ElementSubject
from certainty_playwright.subject.base import ListSubject, StringSubject, Subject
from certainty_playwright.subject.factory import SubjectFactory, default_factory
from certainty_playwright.subject.format import format_value


class TestFormatValue:

    @pytest.mark.parametrize("value,expected", [
        ("5", "'5'"),
        (5, "5"),
        (None, "None"),
        (True, "True"),
        (["a", 1], "['a', 1]"),
        (("a",), "('a',)"),
        (RuntimeError("stale element"), "stale element"),
        (RuntimeError(), "RuntimeError"),
    ])
    def test_format(self, value, expected):
        assert format_value(value) == expected


class TestSubject:
    """Generic assertions report through the failure strategy and chain."""

    def test_passing_assertions_chain(self, soft):
        subject = Subject(soft, 3)

        result = subject.is_equal_to(3).is_not_equal_to(4).is_not_none().is_in(1, 2, 3)

        assert result is subject
        assert not soft.has_failures()

    def test_failures_are_described_by_name(self, soft):
        Subject(soft, 3).named("count").is_equal_to(4).is_none()

        assert soft.get_messages() == [
            "Expected count to be equal to 4, actual value was 3.",
            "Expected count to be None, actual value was 3.",
        ]

    def test_unnamed_subject_describes_its_value(self, soft):
        Subject(soft, "on").is_true()

        assert soft.get_messages() == ["Expected 'on' to be True, actual value was 'on'."]

    def test_custom_failure_message_prefix(self, soft):
        Subject(soft, 1).with_message("cart badge").is_falsy()

        assert soft.get_messages() == ["cart badge: Expected 1 to be falsy, actual value was 1."]

    def test_instance_checks(self, soft):
        Subject(soft, "x").is_instance_of(str).is_instance_of(int)

        assert soft.get_messages() == ["Expected 'x' to be an instance of int, actual type was str."]


class TestStringAndListSubjects:

    def test_string_assertions(self, soft):
        subject = StringSubject(soft, "Order #1234 confirmed").named("banner")

        subject.starts_with("Order").ends_with("confirmed").contains("#1234")
        subject.matches(r"#\d{4}").matches(re.compile(r"^\d+$")).has_length(3)

        assert soft.get_messages() == [
            "Expected banner to match pattern '^\\\\d+$', actual value was 'Order #1234 confirmed'.",
            "Expected banner to have length 3, actual length was 21.",
        ]

    def test_empty_string(self, soft):
        StringSubject(soft, "").named("label").is_empty().is_not_empty()

        assert soft.get_messages() == ["Expected label to not be empty."]

    def test_list_assertions(self, soft):
        subject = ListSubject(soft, ["btn", "primary"]).named("classes")

        subject.contains("btn").does_not_contain("primary")
        subject.contains_all(c for c in ["btn", "large"])
        subject.contains_exactly("btn", "primary")

        assert soft.get_messages() == [
            "Expected classes to not contain 'primary'.",
            "Expected classes to contain all of ['btn', 'large'], missing ['large'].",
        ]


class TestSubjectFactory:

    def test_builtin_dispatch(self, soft):
        factory = SubjectFactory()

        assert type(factory.new_subject(soft, "text")) is StringSubject
        assert type(factory.new_subject(soft, ["a"])) is ListSubject
        assert type(factory.new_subject(soft, ("a",))) is ListSubject
        assert type(factory.new_subject(soft, 1)) is Subject
        assert type(factory.new_subject(soft, None)) is Subject

    def test_latest_registration_wins(self, soft):
        class First(Subject):
            pass

        class Second(Subject):
            pass

        factory = SubjectFactory()
        factory.add_type(lambda v: isinstance(v, int), First)
        factory.add_type(lambda v: isinstance(v, int), Second)

        assert type(factory.new_subject(soft, 1)) is Second
        assert type(factory.new_subject(soft, "1")) is StringSubject

    def test_vocabulary_covers_every_subject_class(self):
        class Custom(Subject):
            def is_shiny(self):
                return self

        factory = SubjectFactory()
        factory.add_type(lambda v: False, Custom)
        vocabulary = factory.assertion_vocabulary()

        assert {"is_equal_to", "starts_with", "contains_exactly", "named", "is_shiny"} <= vocabulary
        assert "describe" not in vocabulary
        assert "fail" not in vocabulary
        assert not any(name.startswith("_") for name in vocabulary)

    def test_default_factory_knows_element_subjects(self):
        assert ElementSubject in default_factory().subject_classes()
        assert "has_class" in default_factory().assertion_vocabulary()

    def test_assert_that_uses_given_strategy(self, soft):
        subject = assert_that("abc", soft)

        subject.is_equal_to("abd")

        assert isinstance(subject, StringSubject)
        assert soft.get_failure_count() == 1
