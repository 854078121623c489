"""Linux authentication through fprintd."""

import asyncio
import getpass
import shutil
from typing import Optional, Tuple

from idle_lock.platforms.base import AuthenticationGateway, AuthResult
from idle_lock.utils.logger import get_logger

LIST_TIMEOUT_SECONDS = 5
VERIFY_TIMEOUT_SECONDS = 60


class LinuxAuthGateway(AuthenticationGateway):
    """Fingerprint verification using the fprintd command line tools."""

    def __init__(self, user: Optional[str] = None):
        self.logger = get_logger()
        self.user = user or getpass.getuser()

    async def has_challenge(self) -> bool:
        if not shutil.which("fprintd-list") or not shutil.which("fprintd-verify"):
            self.logger.debug("fprintd tools not found")
            return False

        try:
            returncode, output = await self._run(
                ["fprintd-list", self.user], LIST_TIMEOUT_SECONDS
            )
        except asyncio.TimeoutError:
            self.logger.warning("fprintd-list timed out")
            return False
        except Exception as e:
            self.logger.error(f"Error querying fprintd: {e}")
            return False

        if returncode != 0 or "no fingers enrolled" in output.lower():
            self.logger.info(f"No enrolled fingerprints for {self.user}")
            return False
        return True

    async def challenge(self, prompt_message: str) -> AuthResult:
        self.logger.info(f"{prompt_message} (touch the fingerprint reader)")
        try:
            returncode, output = await self._run(
                ["fprintd-verify", self.user], VERIFY_TIMEOUT_SECONDS
            )
        except asyncio.TimeoutError:
            return AuthResult.failed("fingerprint verification timed out")
        except Exception as e:
            return AuthResult.failed(str(e))

        if returncode == 0 and "verify-match" in output:
            return AuthResult.success()
        if returncode < 0:
            # Terminated by a signal, e.g. the user interrupting the prompt
            return AuthResult.cancelled()
        if "verify-no-match" in output:
            return AuthResult.failed("fingerprint did not match")
        return AuthResult.failed(f"fprintd-verify exited with {returncode}")

    async def _run(self, command, timeout: float) -> Tuple[int, str]:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise
        return process.returncode, stdout.decode(errors="replace")
