import pytest

from slaytion.data.repositories import StoryRepository
from slaytion.domain.errors import InvalidChoiceError, SessionStateError
from slaytion.domain.story_graph import StoryGraphBuilder
from slaytion.services.story_session import NodeEnteredEvent, SessionEndedEvent, StorySession
from tests.helpers.story_fakes import make_loop_graph


def _sample_session() -> StorySession:
    session = StorySession(StoryRepository().graph())
    session.begin()
    return session


def _snapshot(session: StorySession):
    return session.current, session.score, session.is_over, session.visits


def test_begin_applies_start_delta_once() -> None:
    session = StorySession(make_loop_graph())
    assert session.score == 0

    result = session.begin()

    assert session.score == 1
    assert result.prompt.node_id == "hub"
    assert result.prompt.score == 1
    assert result.events == [NodeEnteredEvent(node_id="hub", score_delta=1, score=1)]
    assert not result.is_over


def test_begin_twice_is_rejected() -> None:
    session = StorySession(make_loop_graph())
    session.begin()

    with pytest.raises(SessionStateError):
        session.begin()
    assert session.score == 1
    assert session.visits == ("hub",)


def test_advance_before_begin_is_rejected() -> None:
    session = StorySession(make_loop_graph())

    with pytest.raises(SessionStateError):
        session.advance(0)
    assert session.score == 0


def test_winning_path_scores_three() -> None:
    session = _sample_session()
    assert session.score == 0

    session.advance(0)
    assert session.current.id == "left"
    assert session.score == 1

    session.advance(1)
    assert session.current.id == "challange"
    assert session.score == 1

    session.advance(0)
    assert session.current.id == "Challange win"
    assert session.score == 3

    session.advance(0)
    assert session.current.id == "Final Challange"
    assert session.score == 3

    result = session.advance(1)
    assert session.current.id == "end2"
    assert session.score == 3
    assert session.is_over
    assert session.status == "ended"
    assert result.final_score == 3
    assert result.prompt.choices == ()
    assert result.prompt.is_terminal


def test_losing_path_scores_minus_seven() -> None:
    session = _sample_session()

    session.advance(1)
    assert session.current.id == "right"
    assert session.score == -2

    session.advance(1)
    assert session.current.id == "Challange Lose"
    assert session.score == -7

    session.advance(0)
    assert session.current.id == "Final Challange"
    assert session.score == -7

    result = session.advance(0)
    assert session.current.id == "end1"
    assert session.score == -7
    assert result.is_over
    assert result.events[-1] == SessionEndedEvent(node_id="end1", final_score=-7)


@pytest.mark.parametrize("bad_index", [5, -1, 2])
def test_out_of_range_choice_leaves_state_unchanged(bad_index) -> None:
    session = _sample_session()
    before = _snapshot(session)

    with pytest.raises(InvalidChoiceError):
        session.advance(bad_index)

    assert _snapshot(session) == before
    assert session.current.id == "start"


@pytest.mark.parametrize("bad_index", [None, "1", 1.0, True])
def test_non_integer_choice_is_invalid(bad_index) -> None:
    session = _sample_session()
    before = _snapshot(session)

    with pytest.raises(InvalidChoiceError):
        session.advance(bad_index)

    assert _snapshot(session) == before


def test_session_remains_playable_after_invalid_choice() -> None:
    session = _sample_session()

    with pytest.raises(InvalidChoiceError):
        session.advance(7)
    session.advance(0)

    assert session.current.id == "left"
    assert session.score == 1


def test_ended_session_rejects_every_choice() -> None:
    session = _sample_session()
    for index in (0, 1, 0, 0, 1):
        session.advance(index)
    before = _snapshot(session)

    for index in (0, 1, -1, 0):
        with pytest.raises(InvalidChoiceError):
            session.advance(index)
        assert _snapshot(session) == before


def test_current_prompt_is_idempotent() -> None:
    session = _sample_session()
    session.advance(0)

    first = session.current_prompt()
    second = session.current_prompt()

    assert first == second
    assert first.node_id == "left"
    assert first.score == 1
    assert first.choices == ("Check your eyelashes.", "Get ready for the mini challenge.")
    assert not first.is_terminal
    assert session.visits == ("start", "left")


def test_prompt_after_advance_reflects_entry_score() -> None:
    session = _sample_session()

    result = session.advance(1)

    assert result.prompt == session.current_prompt()
    assert result.prompt.score == -2


def test_cycles_apply_delta_on_every_visit() -> None:
    graph = make_loop_graph()
    session = StorySession(graph)
    session.begin()

    for index in (0, 0, 0, 0, 1):
        session.advance(index)

    assert session.visits == ("hub", "bonus", "hub", "bonus", "hub", "exit")
    expected = sum(graph.node_by_id(node_id).score_delta for node_id in session.visits)
    assert session.score == expected == 8
    assert session.is_over


def test_terminal_start_node_ends_on_begin() -> None:
    graph = StoryGraphBuilder().add_node("only", "Nothing to do.", 4).build("only")
    session = StorySession(graph)

    result = session.begin()

    assert result.final_score == 4
    assert session.is_over
    with pytest.raises(InvalidChoiceError):
        session.advance(0)


def test_graph_can_back_several_sessions() -> None:
    graph = make_loop_graph()
    first = StorySession(graph)
    second = StorySession(graph)
    first.begin()
    second.begin()

    first.advance(0)

    assert first.current.id == "bonus"
    assert second.current.id == "hub"
    assert second.score == 1


def test_invalid_choices_are_not_logged_as_warnings(caplog) -> None:
    session = _sample_session()

    with caplog.at_level("DEBUG", logger="slaytion.services.story_session"):
        for bad_index in (9, "x"):
            with pytest.raises(InvalidChoiceError):
                session.advance(bad_index)

    rejected = [record for record in caplog.records if "Rejected" in record.getMessage()]
    assert len(rejected) == 2
    assert all(record.levelname == "DEBUG" for record in rejected)
