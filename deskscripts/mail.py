"""SMTP transport construction."""

from __future__ import annotations

import logging
import shlex
import smtplib
import ssl
from dataclasses import dataclass, field
from email.message import EmailMessage

from .config import SmtpConfig
from .exceptions import CommandError, MailError
from .process import CommandRunner, Runner, run_success

_LOGGER = logging.getLogger("deskscripts.mail")

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    user: str
    password: str = field(repr=False)


@dataclass
class SmtpTransport:
    """Implicit-TLS SMTP relay bound to one host and account.

    Creating a transport does not open a connection; :meth:`send` does.
    """

    host: str
    port: int
    credentials: Credentials
    timeout: float = DEFAULT_TIMEOUT

    def send(self, message: EmailMessage) -> None:
        """Log in and send *message*.

        Raises:
            MailError: If the connection, login or delivery fails.
        """

        _LOGGER.debug("Connecting to %s:%s as %s", self.host, self.port, self.credentials.user)
        try:
            with smtplib.SMTP_SSL(
                self.host,
                self.port,
                timeout=self.timeout,
                context=ssl.create_default_context(),
            ) as client:
                client.login(self.credentials.user, self.credentials.password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            _LOGGER.error("Sending mail through %s failed: %s", self.host, exc)
            raise MailError(f"Failed to send mail through {self.host}: {exc}") from exc
        _LOGGER.info("Sent message %r through %s", message.get("Subject", ""), self.host)


def get_smtp_password(pass_command: str, *, runner: Runner | None = None) -> str:
    """Run the configured password command and return its trimmed output."""

    argv = shlex.split(pass_command)
    if not argv:
        raise MailError("SMTP pass_command is empty")

    try:
        result = run_success(argv, runner=runner or CommandRunner(), log_output=False)
    except CommandError as exc:
        raise MailError(f"Password lookup '{argv[0]}' failed: {exc}") from exc

    password = result.stdout.strip()
    if not password:
        raise MailError(f"Password lookup '{argv[0]}' returned nothing")
    return password


def new_transport(smtp: SmtpConfig, *, runner: Runner | None = None) -> SmtpTransport:
    """Resolve the SMTP password and build a transport for *smtp*."""

    if not smtp.host.strip():
        raise MailError("SMTP host is empty")

    credentials = Credentials(smtp.user, get_smtp_password(smtp.pass_command, runner=runner))
    transport = SmtpTransport(host=smtp.host, port=smtp.port, credentials=credentials)
    _LOGGER.info("Built SMTP transport for %s@%s:%s", smtp.user, smtp.host, smtp.port)
    return transport


__all__ = ["Credentials", "SmtpTransport", "get_smtp_password", "new_transport"]
