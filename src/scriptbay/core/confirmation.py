"""Confirmation prompts as an injectable port.

Commands ask before running anything. The policy for answering (interactive
prompt, always-yes under --yes, or a scripted fake in tests) is decided by
whoever builds the context, not by the code asking the question.
"""

from abc import ABC, abstractmethod

import click


class ConfirmationPort(ABC):
    """Asks the user a yes/no question."""

    @abstractmethod
    def confirm(self, message: str) -> bool:
        """Return True if the user accepted."""
        ...


class InteractiveConfirmation(ConfirmationPort):
    """Prompts on the terminal with click.confirm (default: no)."""

    def confirm(self, message: str) -> bool:
        return click.confirm(message, default=False, err=True)


class AssumeYesConfirmation(ConfirmationPort):
    """Accepts every question without prompting (--yes)."""

    def confirm(self, message: str) -> bool:
        return True
