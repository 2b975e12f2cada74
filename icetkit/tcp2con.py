"""Expose a console program's standard input and output on a TCP port."""

from __future__ import annotations

import os
import queue
import re
import shlex
import socket
import subprocess
import sys
import threading
import time
from dataclasses import dataclass
from typing import Sequence

APPNAME = "tcp2con 1.0"
DEFAULT_LISTEN_PORT = 9001
BUFSIZE = 4096
LOCALHOST = "127.0.0.1"
FLUSH_DELAY = 1.0

PROCESS_EXIT = "process exit"
CLIENT_SHUTDOWN = "client socket shutdown"

USAGE = (
    "Usage: {prog} [options] commandline [command line arguments]\n\n"
    "Available options:\n\n"
    "-v      : print version information and exit.\n"
    "-p=port : set listening port number (default {port}).\n"
    "-o      : once - exit after one session.\n"
    "-a      : public access. Allows access from addresses other than localhost.\n"
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageError(Exception):
    """The command line cannot be used to start a session."""


@dataclass(frozen=True)
class Options:
    """Settings taken from the command line."""

    command: tuple[str, ...] = ()
    port: int = DEFAULT_LISTEN_PORT
    once: bool = False
    public: bool = False
    show_version: bool = False
    warnings: tuple[str, ...] = ()

    @property
    def command_line(self) -> str:
        """The command and its arguments joined by single spaces."""
        return " ".join(self.command)


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_args(argv: Sequence[str]) -> Options:
    """Parse options up to the first argument that does not start with a dash."""
    args = list(argv)
    if not args:
        raise UsageError(USAGE.format(prog="tcp2con", port=DEFAULT_LISTEN_PORT))

    port = DEFAULT_LISTEN_PORT
    once = False
    public = False
    warnings: list[str] = []
    index = 0
    for index, arg in enumerate(args):
        if not arg.startswith("-"):
            break
        letter = arg[1:2]
        if letter == "v":
            return Options(show_version=True)
        if letter == "o":
            once = True
        elif letter == "a":
            public = True
        elif letter == "p":
            if len(arg) >= 4 and arg[2] == "=":
                value = _leading_int(arg[3:])
                if value > 0:
                    port = value
        else:
            warnings.append(f"Warning: unknown argument {arg}")
    else:
        raise UsageError("Error: no command given")

    return Options(
        command=tuple(args[index:]),
        port=port,
        once=once,
        public=public,
        warnings=tuple(warnings),
    )


def welcome_message(command_line: str) -> bytes:
    """The greeting sent to a client when it connects."""
    return f"Welcome to {APPNAME} running {command_line}\r\n".encode("latin-1", "replace")


def _split_command(command_line: str) -> list[str] | str:
    if os.name == "nt":
        return command_line
    return shlex.split(command_line)


def _proc_to_net(proc: subprocess.Popen, conn: socket.socket) -> None:
    while True:
        try:
            data = proc.stdout.read(BUFSIZE)
        except (OSError, ValueError):
            break
        if not data:
            break
        try:
            conn.sendall(data)
        except OSError:
            break


def _net_to_proc(proc: subprocess.Popen, conn: socket.socket) -> None:
    while True:
        try:
            data = conn.recv(BUFSIZE)
        except OSError:
            break
        if not data:
            break
        view = memoryview(data)
        try:
            while view:
                written = proc.stdin.write(view)
                view = view[written or 0:]
        except (OSError, ValueError):
            break


def _close_socket(conn: socket.socket) -> None:
    try:
        conn.shutdown(socket.SHUT_RDWR)
    except OSError:
        pass
    conn.close()


def run_session(conn: socket.socket, command_line: str) -> str | None:
    """Run the command with its console joined to a connected socket.

    Returns why the session ended, or None if the client could not be greeted.
    """
    try:
        conn.sendall(welcome_message(command_line))
    except OSError:
        conn.close()
        return None

    print(f"Executing command: {command_line}")
    try:
        proc = subprocess.Popen(
            _split_command(command_line),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=0,
        )
    except OSError:
        conn.close()
        raise
    print(f"Created pid {proc.pid}")

    finished: queue.Queue[str] = queue.Queue()

    def worker(target, reason: str) -> None:
        try:
            target(proc, conn)
        finally:
            finished.put(reason)

    threads = {
        PROCESS_EXIT: threading.Thread(
            target=worker, args=(_proc_to_net, PROCESS_EXIT), daemon=True
        ),
        CLIENT_SHUTDOWN: threading.Thread(
            target=worker, args=(_net_to_proc, CLIENT_SHUTDOWN), daemon=True
        ),
    }
    for thread in threads.values():
        thread.start()
    print("Session in progress.")

    reason = finished.get()
    print(f"Session closing due to {reason}.")
    threads[reason].join()

    if reason == PROCESS_EXIT:
        time.sleep(FLUSH_DELAY)  # let the last output reach the client
    _close_socket(conn)
    if proc.poll() is None:
        proc.terminate()
    proc.wait()

    for thread in threads.values():
        thread.join()
    for pipe in (proc.stdout, proc.stdin):
        try:
            pipe.close()
        except OSError:
            pass

    print("Done.\n")
    return reason


def serve(options: Options) -> None:
    """Listen for clients and run one session per connection."""
    command_line = options.command_line
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind(("" if options.public else LOCALHOST, options.port))
        listener.listen(1)
        while True:
            print(f"Listening on port {options.port}...")
            try:
                conn, (host, port) = listener.accept()
            except OSError as exc:
                print(f"accept failed with error: {exc}")
                if options.once:
                    break
                continue
            print(f"Client connected: {host}:{port}")
            if not options.public and host != LOCALHOST:
                print("Denying connection from non-local client.\n")
                conn.close()
            else:
                run_session(conn, command_line)
            if options.once:
                break


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line and serve the given command."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        options = parse_args(argv)
    except UsageError as exc:
        print(exc)
        return 1

    if options.show_version:
        print(APPNAME)
        return 0
    for warning in options.warnings:
        print(warning)

    executable = options.command[0]
    try:
        open(executable, "rb").close()
    except OSError:
        print(f"Error: file {executable} not found")
        return 1

    try:
        serve(options)
    except OSError as exc:
        print(f"failed with error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())