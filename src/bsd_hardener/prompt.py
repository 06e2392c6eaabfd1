"""Interactive operator prompts."""

from typing import Callable, Optional

from bsd_hardener.utils.validation import Validator

YES = ("y", "yes")
NO = ("n", "no")


def confirm(
    question: str,
    input_func: Optional[Callable[[str], str]] = None,
    output: Optional[Callable[[str], None]] = None,
) -> bool:
    """Ask a yes/no question until the answer is unambiguous.

    There is no default answer and no timeout. EOFError from the input
    function propagates to the caller.
    """
    read = input_func or input
    say = output or print
    while True:
        answer = read(f"{question} [y/n]: ").strip().lower()
        if answer in YES:
            return True
        if answer in NO:
            return False
        say("Please answer 'y' or 'n'.")


def ask_target_user(
    user_exists: Callable[[str], bool],
    input_func: Optional[Callable[[str], str]] = None,
    output: Optional[Callable[[str], None]] = None,
    is_admin: Optional[Callable[[str], bool]] = None,
) -> str:
    """Ask for the account the user-directed steps will act on.

    Administrative accounts are refused, since the steps take privileges
    away from the chosen user.
    """
    read = input_func or input
    say = output or print
    while True:
        username = read("Username to harden: ").strip()
        errors = Validator.validate_username(username)
        if errors:
            for error in errors:
                say(error)
            continue
        if not user_exists(username):
            say(f"No such user: {username}")
            continue
        if is_admin and is_admin(username):
            say(f"Refusing to harden administrative account: {username}")
            continue
        return username
