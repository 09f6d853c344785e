from __future__ import annotations

import socket

import pytest

from polaroid.igv.client import IGVClient, SocketTransport
from polaroid.igv.commands import IGVCommands
from polaroid.utils.exceptions import DriverError


@pytest.fixture
def socket_pair():
    ours, theirs = socket.socketpair()
    theirs.settimeout(5)
    transport = SocketTransport(ours)
    yield transport, theirs
    transport.close()
    theirs.close()


def _received(sock, expected_lines):
    data = b""
    while data.count(b"\n") < expected_lines:
        chunk = sock.recv(4096)
        if not chunk:
            break
        data += chunk
    return data.decode("utf-8").splitlines()


def test_socket_transport_writes_newline_terminated_lines(socket_pair):
    transport, igv = socket_pair

    transport.send_line("goto chr1:100-200")

    assert igv.recv(4096) == b"goto chr1:100-200\n"


def test_socket_transport_reads_one_line_at_a_time(socket_pair):
    transport, igv = socket_pair
    igv.sendall(b"OK\r\nERROR\n")

    assert transport.read_line() == "OK"
    assert transport.read_line() == "ERROR"


def test_socket_transport_end_of_stream(socket_pair):
    transport, igv = socket_pair
    igv.shutdown(socket.SHUT_WR)

    assert transport.read_line() is None


def test_socket_transport_read_timeout():
    ours, theirs = socket.socketpair()
    ours.settimeout(0.05)
    with SocketTransport(ours) as transport:
        with pytest.raises(DriverError, match="Timed out"):
            transport.read_line()
    theirs.close()


def test_connect_refused_raises_driver_error():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()

    with pytest.raises(DriverError, match=f"127.0.0.1:{port}"):
        SocketTransport.connect("127.0.0.1", port, timeout=1)


def test_connect_to_listening_server():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(1)
    port = server.getsockname()[1]
    try:
        with SocketTransport.connect("127.0.0.1", port) as transport:
            conn, _ = server.accept()
            with conn:
                conn.settimeout(5)
                transport.send_line("new")
                assert conn.recv(4096) == b"new\n"
                conn.sendall(b"OK\n")
                assert transport.read_line() == "OK"
    finally:
        server.close()


def test_client_accepts_ok(socket_pair):
    transport, igv = socket_pair
    igv.sendall(b"OK\n")

    assert IGVClient(transport).execute("new") == "OK"
    assert _received(igv, 1) == ["new"]


def test_client_rejects_other_response(socket_pair):
    transport, igv = socket_pair
    igv.sendall(b"Error: file not found\n")

    with pytest.raises(DriverError) as excinfo:
        IGVClient(transport).execute("load missing.bam")

    assert excinfo.value.response == "Error: file not found"


def test_client_rejects_multiline_command(socket_pair):
    transport, igv = socket_pair

    with pytest.raises(DriverError, match="single line"):
        IGVClient(transport).execute("new\ngoto chr1")


def test_commands_format(socket_pair):
    transport, igv = socket_pair
    igv.sendall(b"OK\n" * 7)
    commands = IGVCommands(IGVClient(transport))

    commands.new()
    commands.load("/data/a.bam")
    commands.snapshot_directory("/data/snaps")
    commands.goto("chr1:1-10")
    commands.collapse()
    commands.sort_base("chr1:1-10")
    commands.snapshot("001_chr1_1-10")

    assert _received(igv, 7) == [
        "new",
        "load /data/a.bam",
        "snapshotDirectory /data/snaps",
        "goto chr1:1-10",
        "collapse",
        "sort base chr1:1-10",
        "snapshot 001_chr1_1-10",
    ]


def test_client_rejects_undecodable_response(socket_pair):
    transport, igv = socket_pair
    igv.sendall(b"\xff\xfeERR\n")

    with pytest.raises(DriverError) as excinfo:
        IGVClient(transport).execute("new")

    assert excinfo.value.response.endswith("ERR")


def test_connect_to_invalid_host_name_raises_driver_error():
    with pytest.raises(DriverError, match="a..b"):
        SocketTransport.connect("a..b", 60151, timeout=1)
