"""End-to-end routing tests for SlackBot."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from slack_fixtures import FakeContext, make_slack_event
from slack_router import INVALID_TOKEN_MESSAGE, ConfigError, SlackBot, SlackBotConfig

HELP_LINES = [
    "testA (tA, A): Test command A",
    "testB arg1 arg2 arg3:3: Test command B",
    "testC arg1 arg2...: Test command C",
    "help: display this help message",
]
HELP_ENVELOPE = {
    "text": "Available commands:",
    "attachments": [{"text": "\n".join(HELP_LINES)}],
    "response_type": "ephemeral",
}


def _build_bot() -> SlackBot:
    bot = SlackBot(token="token")

    def command_a(bot, event, done):
        done(None, bot.ephemeral_response("A response"))

    def command_b(bot, event, done):
        done(None, bot.ephemeral_response("B response"))

    def command_c(bot, event, done):
        done(None, bot.ephemeral_response(" ".join(event["args"]["arg2"])))

    bot.add_command("testA", "Test command A", command_a)
    bot.add_command(
        "testB", "Test command B", command_b, args=["arg1", "arg2", {"arg3": 3}]
    )
    bot.add_command("testC", "Test command C", command_c, args=["arg1", "arg2..."])
    bot.alias_command("testA", "tA", "A")
    return bot


def _route(bot: SlackBot, text: str, **kwargs) -> FakeContext:
    context = FakeContext()
    bot.build_router()(make_slack_event(text, **kwargs), context)
    return context


def test_invalid_token_fails() -> None:
    context = _route(_build_bot(), "help", token="foo")

    context.fail.assert_called_once_with(INVALID_TOKEN_MESSAGE)
    context.done.assert_not_called()


def test_missing_token_fails_when_configured() -> None:
    context = _route(_build_bot(), "testA", token=None)

    context.fail.assert_called_once_with("Invalid Slack token")
    context.done.assert_not_called()


@pytest.mark.parametrize("text", ["help", "", "   ", "invalid", "help testA"])
def test_help_is_the_fallback(text: str) -> None:
    context = _route(_build_bot(), text)

    context.done.assert_called_once_with(None, HELP_ENVELOPE)
    context.fail.assert_not_called()


def test_routes_to_command_name() -> None:
    context = _route(_build_bot(), "testA")

    context.done.assert_called_once_with(
        None, {"text": "A response", "response_type": "ephemeral"}
    )


@pytest.mark.parametrize("alias", ["tA", "A"])
def test_alias_matches_canonical_command(alias: str) -> None:
    bot = _build_bot()
    via_name = _route(bot, "testA")
    via_alias = _route(bot, alias)

    assert via_alias.done.call_args == via_name.done.call_args


def test_splats_the_last_argument() -> None:
    context = _route(_build_bot(), "testC these are all my words")

    context.done.assert_called_once_with(
        None, {"text": "are all my words", "response_type": "ephemeral"}
    )


def test_splats_when_only_one_argument_is_left() -> None:
    context = _route(_build_bot(), "testC arg1 arg2")

    context.done.assert_called_once_with(
        None, {"text": "arg2", "response_type": "ephemeral"}
    )


def test_passes_the_entire_event_to_the_handler() -> None:
    bot = _build_bot()
    handler = Mock()
    bot.add_command("testC", "Test command C", handler, args=["arg1", "arg2..."])
    context = FakeContext()
    event = make_slack_event("testC arg1 arg2", foo="bar")

    bot.build_router()(event, context)

    handler.assert_called_once()
    called_bot, called_event, called_done = handler.call_args.args
    assert called_bot is bot
    assert called_event is event
    assert called_done is context.done
    assert event == {
        "body": {"token": "token", "text": "testC arg1 arg2"},
        "foo": "bar",
        "args": {"arg1": "arg1", "arg2": ["arg2"]},
    }


def test_handler_error_is_passed_through() -> None:
    bot = SlackBot()
    error = RuntimeError("boom")
    bot.add_command("broken", "Broken", lambda bot, event, done: done(error, None))

    context = _route(bot, "broken")

    context.done.assert_called_once_with(error, None)


def test_handler_exception_propagates() -> None:
    bot = SlackBot()

    def explode(bot, event, done):
        raise ValueError("handler bug")

    bot.add_command("explode", "Explodes", explode)

    with pytest.raises(ValueError, match="handler bug"):
        _route(bot, "explode")


def test_echo_example() -> None:
    bot = SlackBot(token="token")

    @bot.command("echo", "Greetings", args=["title", {"lastName": "User"}, "words..."])
    def echo(bot, event, done):
        args = event["args"]
        response = f"Hello {args['title']} {args['lastName']}"
        if args["words"]:
            response += ", " + " ".join(args["words"])
        done(None, bot.ephemeral_response(response))

    context = _route(bot, "echo Sir User how are you today?")
    context.done.assert_called_once_with(
        None,
        {"text": "Hello Sir User, how are you today?", "response_type": "ephemeral"},
    )

    context = _route(bot, "echo Dame")
    context.done.assert_called_once_with(
        None, {"text": "Hello Dame User", "response_type": "ephemeral"}
    )


def test_no_token_accepts_any_request() -> None:
    bot = SlackBot()
    bot.add_command(
        "test", "Test", lambda bot, event, done: done(None, bot.ephemeral_response("test"))
    )

    for token in (None, "", "whatever"):
        context = _route(bot, "test", token=token)
        context.done.assert_called_once_with(None, bot.ephemeral_response("test"))
        context.fail.assert_not_called()


def test_event_without_body_routes_to_help_when_unchecked() -> None:
    bot = SlackBot()
    context = FakeContext()
    event: dict = {}

    bot.route(event, context.done, context.fail)

    context.done.assert_called_once_with(None, bot.help_response())
    assert event["args"] == {}


def test_help_for_empty_registry() -> None:
    context = _route(SlackBot(), "anything")

    context.done.assert_called_once_with(
        None,
        {
            "text": "Available commands:",
            "attachments": [{"text": "help: display this help message"}],
            "response_type": "ephemeral",
        },
    )


def test_dangling_alias_routes_to_help() -> None:
    bot = SlackBot()
    bot.alias_command("later", "l")

    context = _route(bot, "l")

    context.done.assert_called_once_with(None, bot.help_response())


def test_in_channel_response() -> None:
    bot = SlackBot()
    bot.add_command(
        "shout",
        "Shout",
        lambda bot, event, done: done(None, bot.in_channel_response("HI", ["more"])),
    )

    context = _route(bot, "shout")

    context.done.assert_called_once_with(
        None,
        {
            "text": "HI",
            "attachments": [{"text": "more"}],
            "response_type": "in_channel",
        },
    )


def test_from_config_uses_token() -> None:
    bot = SlackBot.from_config(SlackBotConfig(token="secret"))

    assert _route(bot, "help", token="secret").done.called
    assert _route(bot, "help", token="token").fail.called


def test_help_name_is_reserved() -> None:
    bot = SlackBot()

    with pytest.raises(ConfigError):
        bot.add_command("help", "Mine", lambda bot, event, done: None)
    with pytest.raises(ConfigError):
        bot.alias_command("help", "h")
