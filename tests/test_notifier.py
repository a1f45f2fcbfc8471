"""Tests for the SMS notifiers."""

import logging
from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from vidshare.config import Settings
from vidshare.services.notifier import (
    EmailGatewayNotifier,
    LoggingNotifier,
    build_notifier,
)


@pytest.fixture
def smtp_settings():
    return Settings(
        smtp_host="smtp.test",
        smtp_port=2525,
        email_from="otp@vidshare.test",
        sms_gateway_domain="sms.example.com",
    )


@pytest.mark.asyncio
async def test_logging_notifier(caplog):
    with caplog.at_level(logging.INFO, logger="vidshare.services.notifier"):
        assert await LoggingNotifier().deliver("5550001", "hello") is True
    assert "[SIMULATED SMS] To: 5550001, Message: hello" in caplog.text


@pytest.mark.asyncio
async def test_gateway_sends_to_sms_address(smtp_settings):
    notifier = EmailGatewayNotifier(smtp_settings)
    with patch("vidshare.services.notifier.aiosmtplib.send", new_callable=AsyncMock) as send:
        assert await notifier.deliver("5550001", "Your code") is True

    send.assert_awaited_once()
    msg = send.await_args.args[0]
    assert msg["To"] == "5550001@sms.example.com"
    assert msg["From"] == "otp@vidshare.test"
    assert send.await_args.kwargs["hostname"] == "smtp.test"
    assert send.await_args.kwargs["port"] == 2525
    assert send.await_args.kwargs["username"] is None


@pytest.mark.asyncio
async def test_gateway_failure_falls_back_to_log(smtp_settings, caplog):
    notifier = EmailGatewayNotifier(smtp_settings)
    failing = AsyncMock(side_effect=aiosmtplib.SMTPException("relay refused"))
    with patch("vidshare.services.notifier.aiosmtplib.send", failing):
        with caplog.at_level(logging.INFO, logger="vidshare.services.notifier"):
            assert await notifier.deliver("5550001", "Your code") is False

    assert "[FALLBACK SMS] To: 5550001" in caplog.text


@pytest.mark.asyncio
async def test_gateway_connection_error(smtp_settings):
    notifier = EmailGatewayNotifier(smtp_settings)
    failing = AsyncMock(side_effect=ConnectionRefusedError())
    with patch("vidshare.services.notifier.aiosmtplib.send", failing):
        assert await notifier.deliver("5550001", "Your code") is False


def test_build_notifier_without_smtp():
    assert isinstance(build_notifier(Settings(smtp_host="")), LoggingNotifier)


def test_build_notifier_with_smtp(smtp_settings):
    assert isinstance(build_notifier(smtp_settings), EmailGatewayNotifier)
