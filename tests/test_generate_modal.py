from datetime import timedelta

import pytest

from algorun.metrics import MetricsModel
from algorun.state import StateModel
from algorun.status import State, StatusModel
from algorun.ui.generate_modal import GenerateModal, Range, Step, TextInput
from algorun.ui.messages import KeyMsg, ModalEvent, ModalType, WindowSizeMsg
from algorun.ui.style import strip_ansi, visible_width

VALID_ADDRESS = "7777777777777777777777777777777777777777777777777774MSJUVU"


def make_state():
    return StateModel(
        status=StatusModel(state=State.STABLE, version="v-test", network="v-test-network"),
        metrics=MetricsModel(enabled=True, window=100, round_time=timedelta(seconds=2), tps=2.5),
    )


def test_set_address_and_steps():
    m = GenerateModal("ABC", make_state())
    m.set_address("TUIDKH2C7MUHZDD77MAMUREJRKNK25SYXB7OAFA6JFBB24PEL5UX4S4GUU")
    assert m.address == "TUIDKH2C7MUHZDD77MAMUREJRKNK25SYXB7OAFA6JFBB24PEL5UX4S4GUU"
    assert m.input.value == m.address
    m.set_step(Step.ADDRESS)
    assert m.step == Step.ADDRESS
    assert m.controls == "( esc to cancel )"


@pytest.mark.parametrize("range_", [Range.DAY, Range.MONTH, Range.ROUND])
def test_duration_enter_advances_to_waiting(range_):
    m = GenerateModal("ABC", make_state())
    m.set_step(Step.DURATION)
    m.range = range_
    m.input_two.set_value("1")
    cmd = m.handle_message(KeyMsg("enter"))
    assert callable(cmd)
    assert m.step == Step.WAITING
    assert m.title == "Generating Keys"
    assert m.border_color == "9"
    assert m.controls == ""


@pytest.mark.parametrize("text", ["0", "-3", "abc", ""])
def test_invalid_duration(text):
    m = GenerateModal("ABC", make_state())
    m.set_step(Step.DURATION)
    m.input_two.set_value(text)
    assert m.handle_message(KeyMsg("enter")) is None
    assert m.step == Step.DURATION
    assert m.input_two_error == "Error: duration must be a positive number"


def test_invalid_address():
    m = GenerateModal("", make_state())
    m.input.set_value("ABC")
    assert m.handle_message(KeyMsg("enter")) is None
    assert m.input_error == "Error: invalid address"
    assert "Error: invalid address" in strip_ansi(m.view())


def test_valid_address_moves_to_duration():
    m = GenerateModal("", make_state())
    m.input.set_value(VALID_ADDRESS)
    cmd = m.handle_message(KeyMsg("enter"))
    assert cmd() == ModalType.GENERATE
    assert m.step == Step.DURATION
    assert m.title == "Validity Range"
    assert m.controls == "( (s)witch range )"
    assert m.input_two.focused
    assert not m.input.focused


def test_switch_range_cycles():
    m = GenerateModal("ABC", make_state())
    m.set_step(Step.DURATION)
    seen = []
    for _ in range(4):
        assert m.handle_message(KeyMsg("s")) is None
        seen.append(m.range)
    assert seen == [Range.MONTH, Range.ROUND, Range.DAY, Range.MONTH]


def test_s_in_address_step_is_typed():
    m = GenerateModal("", make_state())
    m.handle_message(KeyMsg("s"))
    assert m.input.value == "s"
    assert m.range == Range.DAY


def test_typing_into_duration():
    m = GenerateModal("ABC", make_state())
    m.set_step(Step.DURATION)
    m.handle_message(KeyMsg("1"))
    m.handle_message(KeyMsg("2"))
    m.handle_message(KeyMsg("backspace"))
    assert m.input_two.value == "1"
    assert m.input.value == ""


def test_escape():
    m = GenerateModal("ABC", make_state())
    event = m.handle_message(KeyMsg("esc"))()
    assert isinstance(event, ModalEvent)
    assert event.type == ModalType.CANCEL
    m.set_step(Step.WAITING)
    assert m.handle_message(KeyMsg("esc")) is None


def test_window_size():
    m = GenerateModal("ABC", make_state())
    m.handle_message(WindowSizeMsg(80, 40))
    assert (m.width, m.height) == (80, 40)


def test_views():
    m = GenerateModal("ABC", make_state())
    visible = strip_ansi(m.view())
    assert "Create keys required to participate in Algorand consensus." in visible
    assert "Account address:" in visible
    assert "Wallet Address" in visible
    assert visible_width(visible) == 70

    m.set_step(Step.DURATION)
    assert "Duration in days:" in strip_ansi(m.view())
    m.handle_message(KeyMsg("s"))
    assert "Duration in months:" in strip_ansi(m.view())

    m.set_step(Step.WAITING)
    visible = strip_ansi(m.view())
    assert "Generating Participation Keys..." in visible
    assert "Please wait. This operation can take a few minutes." in visible


def test_text_input_char_limit_and_focus():
    field = TextInput(char_limit=3)
    field.handle_key(KeyMsg("a"))
    assert field.value == ""
    field.focus()
    for ch in "abcd":
        field.handle_key(KeyMsg(ch))
    assert field.value == "abc"
    field.set_value("wxyz")
    assert field.value == "wxy"
    assert strip_ansi(field.view()) == "> wxy"