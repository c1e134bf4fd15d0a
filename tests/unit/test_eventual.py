"""Tests for EventualSubject, EventualAttribute and AttributeValue."""

import asyncio

import pytest

from certainty_playwright.core.exceptions import (
    AssertionFailedError,
    DeferredCallError,
    UnsupportedOperationError,
)
from certainty_playwright.element.eventual import (
    AttributeValue,
    EventualAttribute,
    EventualSubject,
    SettleState,
    _Eventual,
    loosely_equal,
)
from certainty_playwright.subject.base import StringSubject, Subject
from certainty_playwright.subject.factory import SubjectFactory
from certainty_playwright.subject.failure import RaisingFailureStrategy

from tests.fakes import FakeElement


class RecordingSubject(Subject):
    """Subject that remembers every assertion replayed onto it."""

    def __init__(self, failure_strategy, value):
        super().__init__(failure_strategy, value)
        self.received = []

    def check(self, label):
        self.received.append(label)
        return self


@pytest.fixture()
def recording_factory():
    factory = SubjectFactory()
    factory.add_type(lambda value: True, RecordingSubject)
    return factory


async def resolve_later(gate, value):
    await gate.wait()
    return value


async def reject_later(gate, error):
    await gate.wait()
    raise error


class TestEventualSubject:
    """Deferred assertions on a value produced by a pending operation."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1, 5])
    async def test_recorded_calls_replay_in_order_once(self, soft, recording_factory, count):
        gate = asyncio.Event()
        parent = Subject(soft, "parent")
        eventual = EventualSubject(
            parent, resolve_later(gate, "value"), "value of parent", factory=recording_factory
        )

        for i in range(count):
            eventual.check(i)
        assert eventual.state == SettleState.PENDING

        gate.set()
        result = await eventual

        assert result == "value"
        assert eventual.state == SettleState.SETTLED_OK
        assert isinstance(eventual.resolved, RecordingSubject)
        assert eventual.resolved.received == list(range(count))
        assert not soft.has_failures()

    @pytest.mark.asyncio
    async def test_resolved_subject_inherits_parent_context(self, soft, recording_factory):
        parent = Subject(soft, "parent").with_message("login form")
        eventual = EventualSubject(parent, asyncio.sleep(0, result="v"), "text of button",
                                   factory=recording_factory)
        assert not eventual.done()

        await eventual

        resolved = eventual.resolved
        assert eventual.done()
        assert resolved.failure_strategy is soft
        assert resolved.name == "text of button"
        assert resolved.failure_message == "login form"

    @pytest.mark.asyncio
    async def test_failed_operation_reports_once_and_replays_nothing(self, soft, recording_factory):
        gate = asyncio.Event()
        error = RuntimeError("stale element")
        parent = Subject(soft, "parent")
        eventual = EventualSubject(parent, reject_later(gate, error), "text of element",
                                   factory=recording_factory)
        eventual.check("never").check("again")

        gate.set()
        result = await eventual

        assert result is error
        assert eventual.state == SettleState.SETTLED_ERROR
        assert eventual.resolved is None
        assert soft.get_messages() == ["Failed to access text of element with error: stale element."]

    @pytest.mark.asyncio
    async def test_failure_message_prefix_applies_to_access_errors(self, soft):
        parent = Subject(soft, "parent").with_message("checkout")

        await EventualSubject(parent, _raise(ValueError("gone")), "id of element")

        assert soft.get_messages() == ["checkout: Failed to access id of element with error: gone."]

    @pytest.mark.asyncio
    async def test_default_factory_builds_string_subject(self, soft):
        parent = Subject(soft, "parent")
        eventual = EventualSubject(parent, asyncio.sleep(0, result="Sign in"), "text of element")
        eventual.starts_with("Sign").is_equal_to("Sign out")

        await eventual

        assert isinstance(eventual.resolved, StringSubject)
        assert soft.get_messages() == [
            "Expected text of element to be equal to 'Sign out', actual value was 'Sign in'."
        ]

    @pytest.mark.asyncio
    async def test_recording_after_settlement_fails_loudly(self, soft, recording_factory):
        parent = Subject(soft, "parent")
        eventual = EventualSubject(parent, asyncio.sleep(0, result="v"), "v", factory=recording_factory)
        await eventual

        with pytest.raises(DeferredCallError):
            eventual.check("late")
        assert eventual.resolved.received == []

    @pytest.mark.asyncio
    async def test_unknown_assertion_is_rejected_at_call_site(self, soft):
        parent = Subject(soft, "parent")
        eventual = EventualSubject(parent, asyncio.sleep(0, result="v"), "v")

        with pytest.raises(AttributeError):
            eventual.is_a_teapot()
        await eventual

    @pytest.mark.asyncio
    async def test_unsupported_replay_surfaces_as_misuse(self, soft):
        parent = Subject(soft, "parent")
        eventual = EventualSubject(parent, asyncio.sleep(0, result=None), "id of element")
        eventual.starts_with("main")

        with pytest.raises(UnsupportedOperationError):
            await eventual
        assert not soft.has_failures()

    @pytest.mark.asyncio
    async def test_raising_strategy_propagates_through_completion(self):
        parent = Subject(RaisingFailureStrategy(), "parent")
        eventual = EventualSubject(parent, asyncio.sleep(0, result="a"), "text of element")
        eventual.is_equal_to("b")

        with pytest.raises(AssertionFailedError, match="to be equal to 'b'"):
            await eventual.wait()


async def _raise(error):
    raise error


class TestEventualAttribute:
    """Deferred attribute lookups that require the attribute to exist."""

    @pytest.mark.asyncio
    async def test_present_attribute_replays_with_value(self, soft):
        element = FakeElement(attributes={"data-x": "5"})
        parent = Subject(soft, element).named("element")

        eventual = EventualAttribute(parent, "data-x").with_value("5").with_value(5)
        result = await eventual

        assert result == "5"
        assert isinstance(eventual.resolved, AttributeValue)
        assert not soft.has_failures()

    @pytest.mark.asyncio
    async def test_value_mismatch_message(self, soft):
        parent = Subject(soft, FakeElement(attributes={"type": "button"})).named("element")

        await EventualAttribute(parent, "type").with_value("submit")

        assert soft.get_messages() == [
            "Expected element to have an attribute 'type' with value 'submit', "
            "actual value was 'button'."
        ]

    @pytest.mark.asyncio
    async def test_absent_attribute_reports_once_and_skips_with_value(self, soft):
        parent = Subject(soft, FakeElement()).named("element")

        eventual = EventualAttribute(parent, "disabled").with_value("true")
        result = await eventual

        assert result is None
        assert eventual.state == SettleState.SETTLED_ERROR
        assert soft.get_messages() == ["Expected element to have attribute disabled."]

    @pytest.mark.asyncio
    async def test_access_error_message(self, soft):
        error = ConnectionError("session closed")
        parent = Subject(soft, FakeElement(error=error)).named("element")

        eventual = EventualAttribute(parent, "href").with_value("/home")
        result = await eventual

        assert result is error
        assert soft.get_messages() == [
            "Failed to access attribute 'href' of element with error: session closed."
        ]

    @pytest.mark.asyncio
    async def test_empty_attribute_counts_as_present(self, soft):
        parent = Subject(soft, FakeElement(attributes={"disabled": ""})).named("element")

        await EventualAttribute(parent, "disabled")

        assert not soft.has_failures()

    @pytest.mark.asyncio
    async def test_only_with_value_can_be_chained(self, soft):
        parent = Subject(soft, FakeElement(attributes={"id": "a"})).named("element")
        eventual = EventualAttribute(parent, "id")

        with pytest.raises(AttributeError):
            eventual.is_equal_to("a")
        await eventual


class TestAttributeValue:
    """Loose equality used by with_value()."""

    @pytest.mark.parametrize("actual,expected", [
        ("5", "5"),
        ("5", 5),
        ("5", 5.0),
        ("2.5", 2.5),
        ("true", True),
        ("false", False),
    ])
    def test_loosely_equal(self, actual, expected):
        assert loosely_equal(actual, expected)

    @pytest.mark.parametrize("actual,expected", [
        ("5", "6"),
        ("5", 6),
        ("abc", 1),
        ("", 0),
        (" ", 0),
        ("1", True),
        ("0", False),
        ("true", False),
        ("5", None),
    ])
    def test_loosely_unequal(self, actual, expected):
        assert not loosely_equal(actual, expected)

    def test_with_value_formats_expected_value(self, soft):
        parent = Subject(soft, None).named("field")

        AttributeValue(parent, "maxlength", "10").with_value(12)

        assert soft.get_messages() == [
            "Expected field to have an attribute 'maxlength' with value 12, actual value was '10'."
        ]

    def test_attribute_value_is_immutable(self, soft):
        value = AttributeValue(Subject(soft, None), "id", "a")

        with pytest.raises(AttributeError):
            value.value = "b"


class TestEventualBase:

    def test_settle_hook_must_be_implemented(self, soft):
        class WithoutSettle(_Eventual):
            pass

        with pytest.raises(TypeError):
            WithoutSettle(Subject(soft, None), [])
