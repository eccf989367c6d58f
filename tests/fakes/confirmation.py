"""Fake ConfirmationPort implementation for testing."""

from scriptbay.core.confirmation import ConfirmationPort


class FakeConfirmationPort(ConfirmationPort):
    """Answers prompts from a predetermined policy and records every question.

    Examples:
        # Accept everything (default)
        >>> port = FakeConfirmationPort()

        # Decline everything
        >>> port = FakeConfirmationPort(answer=False)

        # Answer per prompt, in order
        >>> port = FakeConfirmationPort(answers=[True, False])
    """

    def __init__(self, *, answer: bool = True, answers: list[bool] | None = None) -> None:
        self._answer = answer
        self._answers = list(answers) if answers is not None else None
        self._prompts: list[str] = []

    @property
    def prompts(self) -> list[str]:
        """Questions asked so far, in order.

        This property is for test assertions only.
        """
        return self._prompts

    def confirm(self, message: str) -> bool:
        self._prompts.append(message)
        if self._answers is not None:
            return self._answers.pop(0)
        return self._answer
