"""IGV batch port client for sending commands to a running IGV."""

import abc
import logging
import socket
from typing import Optional

from ..utils.exceptions import DriverError

logger = logging.getLogger(__name__)

SUCCESS_RESPONSE = "OK"


class Transport(abc.ABC):
    """A line-based text connection to IGV."""

    @abc.abstractmethod
    def send_line(self, text: str) -> None:
        """Send one line of text, adding the newline terminator."""

    @abc.abstractmethod
    def read_line(self) -> Optional[str]:
        """Read one line without its terminator, or None at end of stream."""

    @abc.abstractmethod
    def close(self) -> None:
        """Release the connection."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SocketTransport(Transport):
    """Transport over a TCP socket to the IGV batch port."""

    def __init__(self, sock: socket.socket):
        """
        Initialize socket transport.

        Args:
            sock: Connected socket. The transport owns it from now on.
        """
        self.sock = sock
        self._reader = sock.makefile("r", encoding="utf-8", errors="replace", newline="")

    @classmethod
    def connect(
        cls, host: str, port: int, timeout: Optional[float] = None
    ) -> "SocketTransport":
        """
        Open a connection to IGV.

        Args:
            host: IGV host name or IP address.
            port: IGV batch port.
            timeout: Connect and read timeout in seconds. None blocks forever.

        Returns:
            Connected transport.

        Raises:
            DriverError: If the connection cannot be established.
        """
        try:
            sock = socket.create_connection((host, port), timeout=timeout)
        except (OSError, UnicodeError) as e:
            raise DriverError(f"Could not connect to IGV at {host}:{port}: {e}") from e
        return cls(sock)

    def send_line(self, text: str) -> None:
        try:
            self.sock.sendall((text + "\n").encode("utf-8"))
        except OSError as e:
            raise DriverError(f"Failed to send command to IGV: {e}") from e

    def read_line(self) -> Optional[str]:
        try:
            line = self._reader.readline()
        except socket.timeout as e:
            raise DriverError("Timed out waiting for a response from IGV") from e
        except OSError as e:
            raise DriverError(f"Failed to read response from IGV: {e}") from e
        if not line:
            return None
        return line.rstrip("\r\n")

    def close(self) -> None:
        try:
            self._reader.close()
        finally:
            self.sock.close()


class IGVClient:
    """Sends batch commands to IGV and checks each reply."""

    def __init__(self, transport: Transport):
        """
        Initialize IGV client.

        Args:
            transport: Open connection to IGV.
        """
        self.transport = transport

    def execute(self, command: str) -> str:
        """
        Send one command and wait for its acknowledgement.

        Args:
            command: Batch command, without a trailing newline.

        Returns:
            The response line, which is always "OK".

        Raises:
            DriverError: If the command is malformed, the connection fails, or
                IGV replies with anything other than "OK".
        """
        if "\n" in command or "\r" in command:
            raise DriverError(f"Command must be a single line: {command!r}")

        logger.info(f"> {command}")
        self.transport.send_line(command)
        response = self.transport.read_line()

        if response is None:
            raise DriverError(f"IGV closed the connection after: {command}")
        if response != SUCCESS_RESPONSE:
            logger.error(response)
            raise DriverError(
                f"Unexpected response from IGV to {command!r}: {response!r}",
                response=response,
            )
        return response
