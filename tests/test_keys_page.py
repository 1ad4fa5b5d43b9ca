from datetime import timedelta

from algorun.accounts import Account
from algorun.api import AccountParticipation, ParticipationKey
from algorun.metrics import MetricsModel
from algorun.state import StateModel
from algorun.status import State, StatusModel
from algorun.ui.keys_page import KeysPage
from algorun.ui.messages import AccountSelected, DeleteFinished, KeyMsg, ModalEvent, ModalType, Page, WindowSizeMsg
from algorun.ui.style import strip_ansi

VOTE_KEY = b"TESTKEY"


def make_keys():
    participation = AccountParticipation(
        selection_participation_key=VOTE_KEY,
        state_proof_key=VOTE_KEY,
        vote_first_valid=0,
        vote_key_dilution=100,
        vote_last_valid=30000,
        vote_participation_key=VOTE_KEY,
    )
    return [
        ParticipationKey(address="ABC", id="1234", key=participation),
        ParticipationKey(
            address="ABC",
            id="5678",
            key=AccountParticipation(vote_participation_key=b"OTHER"),
            last_vote=7,
        ),
        ParticipationKey(address="XYZ", id="9999", key=AccountParticipation()),
    ]


def make_state(keys):
    status = StatusModel()
    status.state = State.STABLE
    status.last_round = 0
    return StateModel(
        status=status,
        metrics=MetricsModel(enabled=True, window=100, round_time=timedelta(seconds=2)),
        accounts={
            "ABC": Account(
                address="ABC",
                status="Online",
                keys=2,
                participation=AccountParticipation(vote_participation_key=VOTE_KEY),
            )
        },
        participation_keys=keys,
    )


def select_abc(page):
    page.handle_message(
        AccountSelected(
            address="ABC",
            participation=AccountParticipation(vote_participation_key=VOTE_KEY),
        )
    )


def test_new_without_keys():
    page = KeysPage("ABC", None)
    assert page.address == "ABC"
    key, active = page.selected_key()
    assert key is None
    assert active is False
    assert page.handle_message(KeyMsg("enter")) is None


def test_account_selected_marks_active_key():
    page = KeysPage("ABC", None)
    page.data = make_keys()
    select_abc(page)
    key, active = page.selected_key()
    assert active is True
    assert key.address == "ABC"
    assert key.id == "1234"
    assert page.address == "ABC"


def test_rows_filtered_and_sorted():
    page = KeysPage("ABC", make_keys())
    select_abc(page)
    assert page.rows() == [
        ["1234", "ABC", "YES", "N/A", "N/A"],
        ["5678", "ABC", "N/A", "7", "N/A"],
    ]


def test_no_address_means_no_rows():
    assert KeysPage("", make_keys()).rows() == []


def test_delete_finished_removes_key():
    page = KeysPage("ABC", make_keys())
    page.handle_message(DeleteFinished(id="1234"))
    assert [row[0] for row in page.rows()] == ["5678"]
    assert all(key.id != "1234" for key in page.data)


def test_state_message_takes_keys_then_participation():
    keys = make_keys()
    page = KeysPage("ABC", None)
    state = make_state(keys)
    page.handle_message(state)
    assert page.data is keys
    assert page.participation.vote_participation_key == VOTE_KEY
    assert page.rows()[0][2] == "N/A"
    page.handle_message(state)
    assert page.rows()[0][2] == "YES"


def test_esc_returns_to_accounts():
    command = KeysPage("ABC", make_keys()).handle_message(KeyMsg("esc"))
    assert command() == Page.ACCOUNTS


def test_enter_opens_info_modal():
    page = KeysPage("ABC", make_keys())
    select_abc(page)
    event = page.handle_message(KeyMsg("enter"))()
    assert isinstance(event, ModalEvent)
    assert event.type == ModalType.INFO
    assert event.key.id == "1234"
    assert event.active is True
    assert event.address == "ABC"


def test_window_size_and_view():
    page = KeysPage("ABC", make_keys())
    page.handle_message(WindowSizeMsg(width=80, height=40))
    assert (page.width, page.height) == (78, 37)
    text = strip_ansi(page.view())
    assert "Keys" in text
    assert "accounts | keys" in text
    assert "1234" in text
    assert "9999" not in text