import json

import pytest

from maci_signer.errors import InvalidFormat, InvalidFrame
from maci_signer.messages import (
    CancelSignatureRequestMessage,
    ConnectedMessage,
    ConnectMessage,
    DisconnectedMessage,
    DisconnectMessage,
    SignedMessage,
    SignMessage,
    encode_message,
    parse_message,
)
from maci_signer.pairing import parse_pairing_payload

SIGN_FRAME = json.dumps({
    "action": "sign",
    "data": {"pollId": "3", "title": "Best fruit", "selectedOption": "mango"},
    "hash": "12345",
    "signatureId": "r1",
})


def test_parse_sign_frame():
    msg = parse_message(SIGN_FRAME)
    assert isinstance(msg, SignMessage)
    assert msg.signature_id == "r1"
    assert msg.hash == "12345"
    assert msg.data.poll_id == "3"
    assert msg.data.selected_option == "mango"


@pytest.mark.parametrize(
    "frame, cls",
    [
        ('{"action": "connected", "peerId": "p1"}', ConnectedMessage),
        ('{"action": "disconnected"}', DisconnectedMessage),
        ('{"action": "cancel-signature-request", "signatureId": "r1"}',
         CancelSignatureRequestMessage),
    ],
)
def test_parse_inbound_actions(frame, cls):
    assert isinstance(parse_message(frame), cls)


@pytest.mark.parametrize(
    "frame",
    [
        "not json",
        "[]",
        '{"peerId": "p1"}',
        '{"action": "dance"}',
        '{"action": "connected"}',
        '{"action": "sign", "hash": "1", "signatureId": "r1"}',
    ],
)
def test_parse_rejects_bad_frames(frame):
    with pytest.raises(InvalidFrame):
        parse_message(frame)


def test_encode_uses_camel_case():
    frame = encode_message(ConnectMessage(peer_id="p1", public_key="macipk.01"))
    assert json.loads(frame) == {
        "action": "connect", "peerId": "p1", "publicKey": "macipk.01",
    }
    frame = encode_message(SignedMessage(signature_id="r1", signature='{"S":"1"}'))
    assert json.loads(frame) == {
        "action": "signed", "signatureId": "r1", "signature": '{"S":"1"}',
    }
    assert json.loads(encode_message(DisconnectMessage())) == {"action": "disconnect"}


def test_encoded_frames_parse_back():
    for msg in (
        ConnectMessage(peer_id="p1", public_key="macipk.01"),
        DisconnectMessage(),
        CancelSignatureRequestMessage(signature_id="r9"),
    ):
        assert parse_message(encode_message(msg)) == msg


# ── pairing payload ─────────────────────────────────────────────────────

def test_parse_pairing_payload():
    assert parse_pairing_payload('{"webId": "peer-123"}') == "peer-123"


@pytest.mark.parametrize(
    "payload",
    ["", "peer-123", "[]", '{"webId": ""}', '{"webId": 5}', '{"id": "x"}'],
)
def test_parse_pairing_payload_rejects(payload):
    with pytest.raises(InvalidFormat):
        parse_pairing_payload(payload)
