"""Unit tests for scripted session execution"""

import asyncio

import pytest

from web2glass.apps.base_app import BaseTemplateApp
from web2glass.session.runner import SessionReport, SessionRunner, SessionStepError, statusCallback_create
from web2glass.session.script import ScriptMessageBuilder as Build


class TestSessionRunner:
    """Step dispatch"""

    def test_steps_drive_the_app(self, bridge_context, bridge):
        app = BaseTemplateApp(bridge_context)
        runner = SessionRunner(app, bridge)

        report = asyncio.run(
            runner.script_run(
                [
                    Build.connectMessage_create(),
                    Build.webActionMessage_create("counter_increment"),
                    Build.bridgeEventMessage_create({"eventType": 0}),
                    Build.waitMessage_create(1),
                    Build.actionMessage_create(),
                ]
            )
        )

        assert report.steps_run == 5
        assert app.state.counter == 2
        assert app.state.active is True
        assert bridge.displayedText_get("base-counter") == "Counter: 2 | Last: web: main action button"

    def test_unknown_web_action_stops_session(self, bridge_context, bridge):
        runner = SessionRunner(BaseTemplateApp(bridge_context), bridge)

        with pytest.raises(SessionStepError, match="Unknown panel action"):
            asyncio.run(runner.script_run([Build.webActionMessage_create("url_add", "x")]))

    def test_web_action_needs_name(self, bridge_context, bridge):
        runner = SessionRunner(BaseTemplateApp(bridge_context), bridge)
        message = Build.webActionMessage_create("counter_increment")
        message.payload["name"] = 3

        with pytest.raises(SessionStepError):
            asyncio.run(runner.step_run(message))

    def test_web_action_with_wrong_arguments(self, bridge_context, bridge):
        runner = SessionRunner(BaseTemplateApp(bridge_context), bridge)

        with pytest.raises(SessionStepError):
            asyncio.run(runner.step_run(Build.webActionMessage_create("counter_increment", 1, 2)))

    def test_bridge_event_needs_simulator(self, mock_context):
        runner = SessionRunner(BaseTemplateApp(mock_context), None)

        with pytest.raises(SessionStepError, match="simulator"):
            asyncio.run(runner.step_run(Build.bridgeEventMessage_create({"eventType": 0})))

    def test_bridge_event_before_connect_warns(self, bridge_context, bridge, caplog):
        app = BaseTemplateApp(bridge_context)
        runner = SessionRunner(app, bridge)

        asyncio.run(runner.step_run(Build.bridgeEventMessage_create({"eventType": 0})))

        assert app.state.active is False
        assert "before connect" in caplog.text

    def test_failed_main_action_does_not_end_session(self, bridge_context, bridge, statuses):
        bridge.reject_updates = True
        bridge.reject_rebuilds = True
        app = BaseTemplateApp(bridge_context)
        runner = SessionRunner(app, bridge)

        report = asyncio.run(
            runner.script_run(
                [
                    Build.connectMessage_create(),
                    Build.actionMessage_create(),
                    Build.webActionMessage_create("counter_increment"),
                ]
            )
        )

        assert report.steps_run == 3
        assert app.state.counter == 2
        assert "Base template: action failed" in statuses

    def test_negative_wait_rejected(self, bridge_context, bridge):
        runner = SessionRunner(BaseTemplateApp(bridge_context), bridge)

        with pytest.raises(SessionStepError):
            asyncio.run(runner.step_run(Build.waitMessage_create(-1)))


class TestStatusCallback:
    """Host status line"""

    def test_records_and_echoes(self, capsys):
        import sys

        report = SessionReport()
        status_set = statusCallback_create(report, sys.stdout)

        status_set("REST API ready")

        assert report.statuses == ["REST API ready"]
        assert capsys.readouterr().out == "[status] REST API ready\n"
