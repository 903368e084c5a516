"""
Confirmation gate — one place that answers every yes/no question.
"""

from __future__ import annotations

import logging
from typing import Callable

import click

from lazyboot.core.models.policy import ConfirmationMode, ConfirmationPolicy

logger = logging.getLogger(__name__)

_YES = frozenset({"y", "yes"})
_NO = frozenset({"n", "no"})


def _click_prompt(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=": ")


class ConfirmationGate:
    """Answers questions according to a ConfirmationPolicy.

    In automatic modes the question is still logged, annotated with the
    answer, so the run log shows every decision that was taken.
    """

    def __init__(
        self,
        policy: ConfirmationPolicy,
        prompt_fn: Callable[[str], str] | None = None,
    ):
        self._policy = policy
        self._prompt = prompt_fn or _click_prompt

    @property
    def policy(self) -> ConfirmationPolicy:
        return self._policy

    def ask(self, prompt: str) -> bool:
        if self._policy.mode == ConfirmationMode.ALWAYS_YES:
            logger.info("%s (Automatically answering: yes)", prompt)
            return True

        if self._policy.mode == ConfirmationMode.ALWAYS_NO:
            logger.info("%s (Automatically answering: no)", prompt)
            return False

        while True:
            answer = (self._prompt(f"{prompt} [y/n]") or "").strip().lower()
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            logger.error("Please answer with 'y' or 'n'")
