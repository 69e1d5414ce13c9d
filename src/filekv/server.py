import logging
import socket
from threading import Thread
from typing import Optional

from filekv.configuration import ServerConfiguration
from filekv.request_handler import RequestHandler

logger = logging.getLogger(__name__)


class Server:
    """
    A TCP server that serves one request per connection, one connection at a time.

    Each accepted connection is read once, answered and closed before the next one is
    accepted. Connections waiting in the meantime queue up in the listen backlog.
    """

    def __init__(self, handler: RequestHandler, configuration: ServerConfiguration) -> None:
        self.worker: Optional[Thread] = None
        self.handler = handler
        self.configuration = configuration

        self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self.socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self.socket.bind((self.configuration.host, self.configuration.port))
            self.socket.listen(self.configuration.backlog)
        except OSError:
            self.socket.close()
            raise

        # accept() wakes up periodically so that stop() is noticed
        self.socket.settimeout(self.configuration.poll_timeout / 1000)

        logger.info("Server is listening on %s...", self.configuration.url())

        self.is_running = False

    def listen(self) -> None:
        while self.is_running:
            try:
                connection, address = self.socket.accept()
            except socket.timeout:
                continue
            except OSError as err:
                if not self.is_running:
                    break
                logger.error("Error in accept: %s", err)
                continue

            logger.info("Connection established with %s:%d", *address)
            self.handle_connection(connection)

    def handle_connection(self, connection: socket.socket) -> None:
        """
        Read one request from the connection, reply and close it.

        A connection that fails or closes before sending anything is dropped without a reply.
        """
        with connection:
            connection.settimeout(self.configuration.connection_timeout)
            try:
                data = connection.recv(self.configuration.buffer_size - 1)
            except OSError as err:
                logger.warning("Error in read: %s", err)
                return

            if not data:
                logger.warning("Connection closed before sending a request")
                return

            reply = self.handler.handle(data)

            try:
                connection.sendall(reply)
            except OSError as err:
                logger.warning("Error sending reply: %s", err)

    def serve_forever(self) -> None:
        self.is_running = True
        try:
            self.listen()
        finally:
            self.is_running = False

    def start(self) -> None:
        self.is_running = True
        self.worker = Thread(target=self.listen, daemon=True)
        self.worker.start()

    def stop(self) -> None:
        self.is_running = False
        if self.worker is not None:
            self.worker.join()
            self.worker = None
        self.socket.close()
        logger.info("Server stopped")
