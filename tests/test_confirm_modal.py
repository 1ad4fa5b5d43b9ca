from datetime import timedelta

from algorun.accounts import Account
from algorun.api import AccountParticipation, ParticipationKey
from algorun.metrics import MetricsModel
from algorun.state import StateModel
from algorun.status import State, StatusModel
from algorun.ui.confirm_modal import ConfirmModal
from algorun.ui.messages import DeleteFinished, KeyMsg, ModalEvent, ModalType, WindowSizeMsg
from algorun.ui.style import strip_ansi


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code
        self.reason = "OK"
        self.text = ""

    def json(self):
        return None


class FakeClient:
    def __init__(self):
        self.deleted = []

    def delete_participation_key_by_id(self, key_id):
        self.deleted.append(key_id)
        return FakeResponse()


def make_key():
    return ParticipationKey(
        address="ABC",
        id="KEY-ONE",
        key=AccountParticipation(
            selection_participation_key=b"TESTKEY",
            state_proof_key=b"TESTKEY",
            vote_participation_key=b"TESTKEY",
            vote_last_valid=30000,
            vote_key_dilution=100,
        ),
    )


def make_state(client=None):
    return StateModel(
        status=StatusModel(state=State.STABLE, version="v-test", network="v-test-network"),
        metrics=MetricsModel(enabled=True, window=100, round_time=timedelta(seconds=2)),
        participation_keys=[make_key()],
        accounts={"ABC": Account(address="ABC", status="Offline", keys=1)},
        client=client,
    )


def test_new_has_no_key_and_delete_command():
    client = FakeClient()
    model = ConfirmModal(make_state(client))
    assert model.active_key is None
    model.active_key = make_key()
    command = model.handle_message(KeyMsg("y"))
    assert command() == DeleteFinished(err=None, id="KEY-ONE")
    assert client.deleted == ["KEY-ONE"]


def test_defaults():
    model = ConfirmModal(make_state())
    assert (model.title, model.border_color) == ("Delete Key", "9")
    assert strip_ansi(model.controls) == "( (y)es | (n)o )"


def test_view_without_key():
    assert ConfirmModal(make_state()).view() == "No key selected"


def test_view_with_key():
    model = ConfirmModal(make_state())
    model.active_key = make_key()
    model.handle_message(WindowSizeMsg(80, 40))
    text = strip_ansi(model.view())
    assert "Are you sure you want to delete this key from your node?" in text
    assert "Account Address:" in text
    assert "ABC" in text
    assert "KEY-ONE" in text
    assert (model.width, model.height) == (80, 40)


def test_no_and_escape_cancel():
    model = ConfirmModal(make_state())
    model.active_key = make_key()
    for key in ("n", "esc"):
        assert model.handle_message(KeyMsg(key))() == ModalEvent(type=ModalType.CANCEL)


def test_unrelated_key_does_nothing():
    model = ConfirmModal(make_state())
    model.active_key = make_key()
    assert model.handle_message(KeyMsg("x")) is None
    assert model.active_key.id == "KEY-ONE"