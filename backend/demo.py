"""Create demo sessions for development/testing."""

from garlic.instructions import MoveAction, SayAndMoveAction, SpeakAction
from garlic.sessions import Session, SessionItem, SessionLibrary


def _action(phrase: str, move: str = "") -> SayAndMoveAction:
    return SayAndMoveAction(say_item=SpeakAction(phrase=phrase), move_item=MoveAction(name=move))


DEMO_SESSIONS = [
    Session(
        name="Session 1",
        description="Getting to know each other.",
        items=[
            SessionItem(actions=[
                _action("Hello, I am Pepper. I am six years old and would like to get to know you. What is your name?", "hello_a010"),
                _action("Very nice", "NiceReaction_01"),
                _action("That is sad", "SadReaction_01"),
            ]),
            SessionItem(actions=[_action("How old are you?", "question_right_hand_a001")]),
            SessionItem(actions=[_action("Do you have brothers or sisters?", "question_both_hands_a007")]),
            SessionItem(actions=[
                _action("I came here alone, but my family is big and spread all over the world.", "both_hands_high_b001"),
            ]),
        ],
    ),
    Session(
        name="Session 2",
        items=[
            SessionItem(actions=[_action("Q1")]),
            SessionItem(actions=[_action("Q2")]),
        ],
    ),
]


def create_demo_data(library: SessionLibrary) -> None:
    """Delete all existing sessions and create fresh demo sessions."""
    for session in library.store.list():
        library.delete(session.id)
    for session in DEMO_SESSIONS:
        library.create(session)
