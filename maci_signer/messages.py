"""
Wire messages exchanged with the voting-session peer.

One JSON object per channel frame, tagged by ``action``:

    connect                  peerId, publicKey                    out
    connected                peerId                               in
    disconnect               -                                    out
    disconnected             -                                    in
    sign                     data{pollId,title,selectedOption},
                             hash, signatureId                    in
    signed                   signatureId, signature               out
    cancel-signature-request signatureId                          both

Field names on the wire are camelCase; the models expose snake_case.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import InvalidFrame


class _Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ConnectMessage(_Message):
    action: Literal["connect"] = "connect"
    peer_id: str = Field(alias="peerId")
    public_key: str = Field(alias="publicKey")


class ConnectedMessage(_Message):
    action: Literal["connected"] = "connected"
    peer_id: str = Field(alias="peerId")


class DisconnectMessage(_Message):
    action: Literal["disconnect"] = "disconnect"


class DisconnectedMessage(_Message):
    action: Literal["disconnected"] = "disconnected"


class SignData(_Message):
    poll_id: str = Field(alias="pollId")
    title: str
    selected_option: str = Field(alias="selectedOption")


class SignMessage(_Message):
    action: Literal["sign"] = "sign"
    data: SignData
    hash: str
    signature_id: str = Field(alias="signatureId")


class SignedMessage(_Message):
    action: Literal["signed"] = "signed"
    signature_id: str = Field(alias="signatureId")
    signature: str  # JSON text of the wire signature


class CancelSignatureRequestMessage(_Message):
    action: Literal["cancel-signature-request"] = "cancel-signature-request"
    signature_id: str = Field(alias="signatureId")


Message = Annotated[
    Union[
        ConnectMessage,
        ConnectedMessage,
        DisconnectMessage,
        DisconnectedMessage,
        SignMessage,
        SignedMessage,
        CancelSignatureRequestMessage,
    ],
    Field(discriminator="action"),
]

_MESSAGE_ADAPTER: TypeAdapter[Message] = TypeAdapter(Message)


def parse_message(frame: Union[str, bytes]) -> Message:
    """Decode one frame; raises ``InvalidFrame`` for anything unrecognised."""
    try:
        return _MESSAGE_ADAPTER.validate_json(frame)
    except ValidationError as exc:
        raise InvalidFrame(
            f"undecodable frame ({exc.error_count()} error(s))"
        ) from exc


def encode_message(message: _Message) -> str:
    return message.model_dump_json(by_alias=True)
