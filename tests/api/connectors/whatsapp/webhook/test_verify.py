import pytest

from api.connectors.whatsapp.webhook.verify import verify_webhook_challenge


def test_verify_webhook_challenge_ok() -> None:
    challenge = verify_webhook_challenge(
        hub_mode="subscribe",
        hub_verify_token="token",
        hub_challenge="abc123",
        expected_token="token",
    )
    assert challenge == "abc123"


@pytest.mark.parametrize(
    ("hub_mode", "hub_verify_token", "expected_token"),
    [
        ("unsubscribe", "token", "token"),
        (None, "token", "token"),
        ("subscribe", "wrong", "token"),
        ("subscribe", None, "token"),
        ("subscribe", "token", None),
        ("subscribe", "", ""),
    ],
)
def test_verify_webhook_challenge_rejected(
    hub_mode: str | None,
    hub_verify_token: str | None,
    expected_token: str | None,
) -> None:
    result = verify_webhook_challenge(
        hub_mode=hub_mode,
        hub_verify_token=hub_verify_token,
        hub_challenge="x",
        expected_token=expected_token,
    )
    assert result is None
