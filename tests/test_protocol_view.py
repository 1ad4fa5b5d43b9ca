from algorun.state import StateModel
from algorun.status import State, StatusModel
from algorun.ui.messages import WindowSizeMsg
from algorun.ui.protocol_view import ProtocolView, make_protocol_view
from algorun.ui.style import strip_ansi


def status(voting=True, needs_update=True):
    return StatusModel(
        state="SYNCING",
        version="v0.0.0-test",
        network="test-v1",
        voting=voting,
        needs_update=needs_update,
        last_round=0,
    )


def test_hidden():
    view = ProtocolView(data=status(), terminal_width=60, terminal_height=40, is_visible=False)
    assert view.view() == ""


def test_hidden_height():
    view = ProtocolView(data=status(), terminal_width=70, terminal_height=20, is_visible=True)
    assert view.view() == ""


def test_loading():
    view = ProtocolView(data=status(), terminal_width=0, terminal_height=0)
    assert view.view() == "Loading...\n\n\n\n\n\n"


def test_visible_wide():
    view = ProtocolView(data=status(), terminal_width=160, terminal_height=80)
    text = strip_ansi(view.view())
    lines = text.split("\n")
    assert lines[0].startswith("╭Protocol")
    assert len(lines) == 7
    assert "[UPDATE AVAILABLE]" in text
    assert " Node: v0.0.0-test" in text
    assert " Network: test-v1" in text
    assert " Protocol Voting: true" in text
    assert "Upgrade Available" not in text
    assert all(len(line) == 80 for line in lines)


def test_visible_small():
    view = ProtocolView(data=status(), terminal_width=80, terminal_height=40)
    text = strip_ansi(view.view())
    assert "[UPDATE AVAILABLE]" not in text
    assert " Upgrade Available: true" in text
    assert all(len(line) == 80 for line in text.split("\n"))


def test_no_vote_or_upgrade():
    wide = strip_ansi(
        ProtocolView(data=status(False, False), terminal_width=160, terminal_height=80).view()
    )
    assert " Protocol Voting: false" in wide
    assert "UPDATE" not in wide
    small = strip_ansi(
        ProtocolView(data=status(False, False), terminal_width=80, terminal_height=40).view()
    )
    assert "Upgrade Available" not in small
    assert " Protocol Voting: false" in small


def test_messages():
    state = StateModel(status=StatusModel(last_round=1337, needs_update=True, state=State.SYNCING))
    view = make_protocol_view(state)
    assert view.view() == "Loading...\n\n\n\n\n\n"
    view.handle_message(WindowSizeMsg(120, 80))
    assert (view.terminal_width, view.terminal_height) == (120, 80)
    assert "[UPDATE AVAILABLE]" in strip_ansi(view.view())
    assert view.handle_message(StatusModel()) is None
    assert view.data == StatusModel()
    assert "[UPDATE AVAILABLE]" not in strip_ansi(view.view())


def test_make_protocol_view_copies_status():
    state = StateModel(status=StatusModel(version="v1"))
    view = make_protocol_view(state)
    state.status.version = "v2"
    assert view.data.version == "v1"
    assert view.is_visible