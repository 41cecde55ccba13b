import attrs


@attrs.define(frozen=True)
class EmailMessage:
    to: str
    sender: str
    reply_to: str
    subject: str
    html: str
    text: str
