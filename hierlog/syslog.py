"""An appender that sends events to a syslog daemon over UDP."""

from __future__ import annotations

import socket

from hierlog.appender import Appender, LayoutAppender
from hierlog.errors import FactoryParams
from hierlog.event import LoggingEvent

__all__ = [
    "LOG_EMERG",
    "LOG_ALERT",
    "LOG_CRIT",
    "LOG_ERR",
    "LOG_WARNING",
    "LOG_NOTICE",
    "LOG_INFO",
    "LOG_DEBUG",
    "LOG_USER",
    "DEFAULT_PORT",
    "MAX_PACKET_SIZE",
    "RemoteSyslogAppender",
    "to_syslog_priority",
    "create_remote_syslog_appender",
]

LOG_EMERG = 0
LOG_ALERT = 1
LOG_CRIT = 2
LOG_ERR = 3
LOG_WARNING = 4
LOG_NOTICE = 5
LOG_INFO = 6
LOG_DEBUG = 7
LOG_USER = 1 << 3

DEFAULT_PORT = 514
MAX_PACKET_SIZE = 900

_PRIORITIES = (LOG_EMERG, LOG_ALERT, LOG_CRIT, LOG_ERR, LOG_WARNING, LOG_NOTICE, LOG_INFO, LOG_DEBUG)


def to_syslog_priority(priority: int) -> int:
    """Translate a priority value to the matching syslog severity."""
    shifted = int(priority) + 1
    index = shifted // 100 if shifted >= 0 else -((-shifted) // 100)
    if index < 0:
        return LOG_EMERG
    if index > 7:
        return LOG_DEBUG
    return _PRIORITIES[index]


class RemoteSyslogAppender(LayoutAppender):
    """Sends formatted events as syslog datagrams to a relay host.

    Failing to resolve the host or open the socket is silent; events are
    then dropped.
    """

    def __init__(
        self,
        name: str,
        syslog_name: str,
        relayer: str,
        facility: int = -1,
        port_number: int = -1,
    ) -> None:
        super().__init__(name)
        self.syslog_name = syslog_name
        self.relayer = relayer
        self.facility = LOG_USER if facility == -1 else facility
        self.port_number = DEFAULT_PORT if port_number == -1 else port_number
        self._socket: socket.socket | None = None
        self._ip_addr: str | None = None
        self.open()

    @property
    def connected(self) -> bool:
        """True when the host was resolved and a socket is open."""
        return self._socket is not None and self._ip_addr is not None

    def open(self) -> None:
        if self._ip_addr is None:
            try:
                self._ip_addr = socket.gethostbyname(self.relayer)
            except (OSError, UnicodeError):
                return
        try:
            self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError:
            self._socket = None

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def reopen(self) -> bool:
        self.close()
        self.open()
        return True

    def _send(self, packet: bytes) -> None:
        try:
            self._socket.sendto(packet, (self._ip_addr, self.port_number))
        except OSError:
            pass

    def _append(self, event: LoggingEvent) -> None:
        if not self.connected:
            return
        data = self.layout.format(event).encode("utf-8")
        preamble = f"<{self.facility + to_syslog_priority(event.priority)}>".encode("ascii")
        chunk = MAX_PACKET_SIZE - len(preamble)
        while data:
            # split messages that do not fit into one packet
            if len(preamble) + len(data) > MAX_PACKET_SIZE:
                self._send(preamble + data[:chunk])
                data = data[chunk:]
            else:
                self._send(preamble + data)
                break


def create_remote_syslog_appender(params: FactoryParams) -> Appender:
    name, syslog_name, relayer = params.required(
        "remote syslog appender", "name", "syslog_name", "relayer"
    )
    facility = params.optional("facility", -1)
    port_number = params.optional("port", -1)
    return RemoteSyslogAppender(name, syslog_name, relayer, facility, port_number)