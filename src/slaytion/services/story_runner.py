"""Turn loop that drives a story session through its ports."""
from __future__ import annotations

import logging

from slaytion.domain.errors import InvalidChoiceError
from slaytion.services.ports import InputPort, PresentationPort
from slaytion.services.story_session import StorySession

logger = logging.getLogger(__name__)


def play_session(session: StorySession, presenter: PresentationPort, input_port: InputPort) -> int:
    """Run the session to its ending and return the final score.

    Rejected choices are reported to the presenter and the same prompt is
    asked again; they never end the loop.
    """
    if not session.started:
        session.begin()
    prompt = session.current_prompt()
    presenter.show_prompt(prompt)
    while not session.is_over:
        choice_index = input_port.read_choice(prompt)
        try:
            result = session.advance(choice_index)
        except InvalidChoiceError as exc:
            logger.debug("Re-prompting after invalid choice: %s", exc)
            presenter.show_invalid_choice(str(exc))
            continue
        prompt = result.prompt
        presenter.show_prompt(prompt)
    presenter.show_summary(session.score)
    return session.score
