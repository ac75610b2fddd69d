"""Tests for notification dispatch and sinks."""

import pytest

from conftest import FailingSink, RecordingSink
from support_desk.errors import SinkError
from support_desk.notifications import LogSink, NotificationDispatcher
from support_desk.notifications.templates import ticket_created_message, welcome_message


def test_dispatch_delivers_to_sink():
    sink = RecordingSink()
    dispatcher = NotificationDispatcher(sink)

    assert dispatcher.dispatch("alice@x.com", "Hello", "Body") is True
    assert sink.sent == [("alice@x.com", "Hello", "Body")]


@pytest.mark.parametrize(
    "error",
    [
        SinkError("smtp relay refused"),
        RuntimeError("unexpected"),
        ConnectionError("socket closed"),
    ],
)
def test_dispatch_absorbs_sink_failures(error):
    sink = FailingSink(error)
    dispatcher = NotificationDispatcher(sink)

    assert dispatcher.dispatch("alice@x.com", "Hello", "Body") is False
    assert sink.attempts == 1


def test_failure_does_not_poison_later_dispatches():
    failing = FailingSink()
    dispatcher = NotificationDispatcher(failing)
    dispatcher.dispatch("a@x.com", "s", "b")

    recording = RecordingSink()
    dispatcher.sink = recording
    assert dispatcher.dispatch("b@x.com", "s", "b") is True
    assert recording.sent == [("b@x.com", "s", "b")]


def test_send_welcome_uses_sender_signature():
    sink = RecordingSink()
    dispatcher = NotificationDispatcher(sink, sender="Helpdesk")

    assert dispatcher.send_welcome("alice@x.com", "Alice") is True

    to, subject, body = sink.sent[0]
    assert to == "alice@x.com"
    assert body.startswith("Dear Alice,")
    assert body.endswith("Helpdesk")


def test_send_ticket_created():
    sink = RecordingSink()
    dispatcher = NotificationDispatcher(sink)

    dispatcher.send_ticket_created("alice@x.com", "Printer on fire", 42)

    to, subject, body = sink.sent[0]
    assert subject == "New Ticket Created - #42"
    assert "Title: Printer on fire" in body
    assert "Ticket ID: 42" in body
    assert body.endswith("Support Team")


def test_templates_are_pure():
    assert welcome_message("Alice", "Team") == welcome_message("Alice", "Team")
    assert ticket_created_message("t", 1, "Team")[0] == "New Ticket Created - #1"


def test_log_sink_never_raises():
    sink = LogSink(sender="Support Team")
    sink.notify("alice@x.com", "Hello", "Body")


def test_dispatcher_over_log_sink_reports_success():
    assert NotificationDispatcher(LogSink()).dispatch("alice@x.com", "Hello", "Body") is True


def test_sink_error_is_not_exposed_outward():
    error = SinkError("api key rejected by provider")
    assert "api key" not in str(error.to_dict())
    assert error.detail == "api key rejected by provider"
