import json
from datetime import timedelta

from algorun.accounts import Account
from algorun.api import AccountParticipation, ParticipationKey
from algorun.metrics import MetricsModel
from algorun.participation import ShortLinkResponse
from algorun.state import StateModel
from algorun.status import State, StatusModel
from algorun.ui.info_modal import InfoModal
from algorun.ui.messages import KeyMsg, ModalEvent, ModalType, WindowSizeMsg
from algorun.ui.style import strip_ansi, visible_width


class FakeResponse:
    def __init__(self, text):
        self.status_code = 200
        self.reason = "OK"
        self.text = text

    def json(self):
        return json.loads(self.text)


class FakeHttp:
    def __init__(self):
        self.posted = []

    def post(self, url, content_type, body):
        self.posted.append((url, body))
        return FakeResponse('{"id": "1234"}')


def make_key():
    return ParticipationKey(
        address="ABC",
        id="KEY-ONE",
        key=AccountParticipation(
            selection_participation_key=b"TESTKEY",
            state_proof_key=b"TESTKEY",
            vote_participation_key=b"TESTKEY",
            vote_first_valid=0,
            vote_last_valid=30000,
            vote_key_dilution=100,
        ),
    )


def make_state(http=None):
    return StateModel(
        status=StatusModel(state=State.STABLE, version="v-test", network="v-test-network"),
        metrics=MetricsModel(enabled=True, window=100, round_time=timedelta(seconds=2)),
        participation_keys=[make_key()],
        accounts={"ABC": Account(address="ABC", status="Offline", keys=1, incentive_eligible=True)},
        http=http,
    )


def test_online_active_key_offers_offline():
    model = InfoModal(make_state())
    model.participation = make_key()
    model.state.accounts["ABC"].status = "Online"
    model.active = True
    model.update_state()
    assert model.border_color == "1"
    assert strip_ansi(model.controls) == "( take (o)ffline )"


def test_inactive_key_offers_delete_and_online():
    model = InfoModal(make_state())
    model.participation = make_key()
    model.update_state()
    assert model.border_color == "3"
    assert strip_ansi(model.controls) == "( (d)elete | take (o)nline )"


def test_defaults_without_key():
    model = InfoModal(make_state())
    model.update_state()
    assert model.title == "Key Information"
    assert strip_ansi(model.controls) == "( (d)elete | (o)nline )"
    assert model.view() == "No key selected"


def test_view_shows_key_details():
    model = InfoModal(make_state())
    model.participation = make_key()
    text = strip_ansi(model.view())
    assert "Account: ABC" in text
    assert "Participation ID: KEY-ONE" in text
    assert "Selection Key: VEVTVEtFWQ" in text
    assert "State Proof Key: VEVTVEtFWQ" in text
    assert "Vote Last Valid: 30000" in text
    assert "Vote Key Dilution: 100" in text


def test_view_wraps_to_width():
    model = InfoModal(make_state())
    model.participation = make_key()
    model.handle_message(WindowSizeMsg(20, 40))
    assert (model.width, model.height) == (20, 40)
    assert all(visible_width(line) <= 20 for line in model.view().split("\n"))


def test_delete_key_only_when_inactive():
    model = InfoModal(make_state())
    model.participation = make_key()
    assert model.handle_message(KeyMsg("d"))() == ModalType.CONFIRM
    model.active = True
    assert model.handle_message(KeyMsg("d")) is None


def test_escape_cancels():
    model = InfoModal(make_state())
    assert model.handle_message(KeyMsg("esc"))() == ModalEvent(type=ModalType.CANCEL)


def test_online_creates_short_link():
    http = FakeHttp()
    model = InfoModal(make_state(http))
    model.participation = make_key()
    result = model.handle_message(KeyMsg("o"))()
    assert result == ShortLinkResponse(id="1234")
    assert http.posted[0][0] == "http://b.nodekit.run/online"


def test_offline_when_active():
    http = FakeHttp()
    model = InfoModal(make_state(http))
    model.participation = make_key()
    model.active = True
    result = model.handle_message(KeyMsg("o"))()
    assert result == ShortLinkResponse(id="1234")
    assert http.posted[0][0] == "http://b.nodekit.run/offline"