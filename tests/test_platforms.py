"""Tests for the platform authentication gateways."""

import asyncio
from enum import Enum

import pytest

from idle_lock.platforms import darwin, factory, linux, windows
from idle_lock.platforms.base import AuthOutcome, AuthResult, NullAuthGateway


def test_null_gateway_has_no_challenge():
    gateway = NullAuthGateway()

    assert asyncio.run(gateway.has_challenge()) is False
    assert asyncio.run(gateway.challenge("x")).outcome is AuthOutcome.FAILED


@pytest.mark.parametrize(
    "name, expected",
    [
        ("linux", "LinuxAuthGateway"),
        ("darwin", "DarwinAuthGateway"),
        ("windows", "WindowsAuthGateway"),
        ("plan9", "NullAuthGateway"),
    ],
)
def test_factory_picks_gateway_by_platform(monkeypatch, name, expected):
    monkeypatch.setattr(factory, "get_platform_name", lambda: name)

    assert type(factory.get_auth_gateway()).__name__ == expected


class TestLinuxGateway:
    @pytest.fixture
    def gateway(self, monkeypatch):
        monkeypatch.setattr(linux.shutil, "which", lambda cmd: f"/usr/bin/{cmd}")
        return linux.LinuxAuthGateway(user="alice")

    def fake_run(self, monkeypatch, gateway, returncode, output):
        calls = []

        async def run(command, timeout):
            calls.append(command)
            return returncode, output

        monkeypatch.setattr(gateway, "_run", run)
        return calls

    def test_missing_tools_means_no_challenge(self, monkeypatch):
        monkeypatch.setattr(linux.shutil, "which", lambda cmd: None)
        gateway = linux.LinuxAuthGateway(user="alice")

        assert asyncio.run(gateway.has_challenge()) is False

    def test_enrolled_fingers_mean_challenge(self, monkeypatch, gateway):
        calls = self.fake_run(
            monkeypatch, gateway, 0, "Fingerprints for user alice:\n - #0: right-index-finger\n"
        )

        assert asyncio.run(gateway.has_challenge()) is True
        assert calls == [["fprintd-list", "alice"]]

    def test_no_enrolled_fingers(self, monkeypatch, gateway):
        self.fake_run(monkeypatch, gateway, 0, "User alice has no fingers enrolled for x.")

        assert asyncio.run(gateway.has_challenge()) is False

    def test_list_timeout_means_no_challenge(self, monkeypatch, gateway):
        async def run(command, timeout):
            raise asyncio.TimeoutError()

        monkeypatch.setattr(gateway, "_run", run)

        assert asyncio.run(gateway.has_challenge()) is False

    @pytest.mark.parametrize(
        "returncode, output, outcome",
        [
            (0, "Verify result: verify-match (done)", AuthOutcome.SUCCESS),
            (1, "Verify result: verify-no-match (done)", AuthOutcome.FAILED),
            (-2, "", AuthOutcome.CANCELLED),
            (2, "Impossible to verify", AuthOutcome.FAILED),
        ],
    )
    def test_verify_outcomes(self, monkeypatch, gateway, returncode, output, outcome):
        calls = self.fake_run(monkeypatch, gateway, returncode, output)

        result = asyncio.run(gateway.challenge("Unlock"))

        assert result.outcome is outcome
        assert calls == [["fprintd-verify", "alice"]]

    def test_verify_timeout_is_failure(self, monkeypatch, gateway):
        async def run(command, timeout):
            raise asyncio.TimeoutError()

        monkeypatch.setattr(gateway, "_run", run)

        result = asyncio.run(gateway.challenge("Unlock"))
        assert result.outcome is AuthOutcome.FAILED
        assert "timed out" in result.reason


class FakeNSError:
    def __init__(self, code, description="failed"):
        self._code = code
        self._description = description

    def code(self):
        return self._code

    def localizedDescription(self):
        return self._description


def test_darwin_reply_mapping():
    assert darwin._to_result(True, None) == AuthResult.success()
    assert darwin._to_result(False, FakeNSError(-2)) == AuthResult.cancelled()
    assert darwin._to_result(False, FakeNSError(-1, "Authentication failed")) == (
        AuthResult.failed("Authentication failed")
    )


def test_darwin_without_framework(monkeypatch):
    monkeypatch.setattr(darwin, "LOCAL_AUTH_AVAILABLE", False)
    gateway = darwin.DarwinAuthGateway()

    assert asyncio.run(gateway.has_challenge()) is False
    assert asyncio.run(gateway.challenge("x")).outcome is AuthOutcome.FAILED


class FakeVerificationResult(Enum):
    VERIFIED = 0
    DEVICE_NOT_PRESENT = 1
    NOT_CONFIGURED_FOR_USER = 2
    DISABLED_BY_POLICY = 3
    DEVICE_BUSY = 4
    RETRIES_EXHAUSTED = 5
    CANCELED = 6


@pytest.mark.parametrize(
    "value, expected",
    [
        (FakeVerificationResult.VERIFIED, AuthResult.success()),
        (FakeVerificationResult.CANCELED, AuthResult.cancelled()),
        (
            FakeVerificationResult.RETRIES_EXHAUSTED,
            AuthResult.failed("verification result RETRIES_EXHAUSTED"),
        ),
        (
            FakeVerificationResult.DEVICE_BUSY,
            AuthResult.failed("verification result DEVICE_BUSY"),
        ),
    ],
)
def test_windows_verification_mapping(monkeypatch, value, expected):
    monkeypatch.setattr(windows, "UserConsentVerificationResult", FakeVerificationResult)

    assert windows._to_result(value) == expected


def test_windows_verification_drives_challenge(monkeypatch):
    class FakeVerifier:
        @staticmethod
        async def request_verification_async(prompt_message):
            return FakeVerificationResult.CANCELED

    monkeypatch.setattr(windows, "WINRT_AVAILABLE", True)
    monkeypatch.setattr(windows, "UserConsentVerifier", FakeVerifier)
    monkeypatch.setattr(windows, "UserConsentVerificationResult", FakeVerificationResult)

    result = asyncio.run(windows.WindowsAuthGateway().challenge("Unlock"))

    assert result.outcome is AuthOutcome.CANCELLED


def test_windows_without_winrt(monkeypatch):
    monkeypatch.setattr(windows, "WINRT_AVAILABLE", False)
    gateway = windows.WindowsAuthGateway()

    assert asyncio.run(gateway.has_challenge()) is False
    assert asyncio.run(gateway.challenge("x")).outcome is AuthOutcome.FAILED
