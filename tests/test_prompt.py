"""Tests for operator prompts."""

import pytest

from bsd_hardener.prompt import ask_target_user, confirm


@pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", " Yes "])
def test_confirm_affirmative(scripted_input, answer):
    assert confirm("Proceed?", input_func=scripted_input([answer])) is True


@pytest.mark.parametrize("answer", ["n", "N", "no", "No"])
def test_confirm_negative(scripted_input, answer):
    assert confirm("Proceed?", input_func=scripted_input([answer])) is False


def test_confirm_reprompts_on_invalid_input(scripted_input):
    messages = []
    answers = scripted_input(["", "maybe", "yep", "n"])

    assert confirm("Proceed?", input_func=answers, output=messages.append) is False
    assert len(answers.prompts) == 4
    assert messages == ["Please answer 'y' or 'n'."] * 3


def test_confirm_shows_question(scripted_input):
    answers = scripted_input(["y"])
    confirm("Install packages?", input_func=answers)
    assert answers.prompts == ["Install packages? [y/n]: "]


def test_confirm_propagates_eof():
    def closed(prompt):
        raise EOFError

    with pytest.raises(EOFError):
        confirm("Proceed?", input_func=closed)


def test_ask_target_user_retries_until_valid(scripted_input):
    messages = []
    answers = scripted_input(["", "bad name", "bob", "alice"])

    user = ask_target_user(
        lambda name: name == "alice", input_func=answers, output=messages.append
    )

    assert user == "alice"
    assert "Empty username" in messages
    assert "Invalid username format: bad name" in messages
    assert "No such user: bob" in messages


def test_ask_target_user_refuses_admin_accounts(scripted_input):
    messages = []
    answers = scripted_input(["root", "alice"])

    user = ask_target_user(
        lambda name: True,
        input_func=answers,
        output=messages.append,
        is_admin=lambda name: name == "root",
    )

    assert user == "alice"
    assert messages == ["Refusing to harden administrative account: root"]
