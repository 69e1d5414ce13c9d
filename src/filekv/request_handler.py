import logging

from filekv import protocol
from filekv.commands import Command, Set, Get, Delete
from filekv.configuration import ProtocolLimits
from filekv.key_value_storage import KeyValueStorage, InvalidKeyError

logger = logging.getLogger(__name__)


class RequestHandler:
    """
    Turns one request into one reply by running it against the storage.
    """

    def __init__(self, storage: KeyValueStorage, limits: ProtocolLimits = ProtocolLimits()) -> None:
        self.storage = storage
        self.limits = limits

    def handle(self, data: bytes) -> bytes:
        """
        Parse a request, execute it and build the reply.

        :param data: the bytes received on the connection.
        :return: the reply bytes to send back before closing the connection.
        """
        logger.info("Received command: %r", data)
        try:
            command = protocol.parse_request(data, self.limits)
        except protocol.MalformedRequestError:
            logger.warning("Malformed request: %r", data)
            return protocol.MALFORMED

        return self.dispatch(command)

    def dispatch(self, command: Command) -> bytes:
        if isinstance(command, Set):
            return self.on_set(command)
        elif isinstance(command, Get):
            return self.on_get(command)
        elif isinstance(command, Delete):
            return self.on_delete(command)
        else:
            logger.warning("Unknown command: %r", command)
            return protocol.ERROR

    def on_set(self, command: Set) -> bytes:
        try:
            self.storage[command.key] = command.value
        except (InvalidKeyError, OSError):
            logger.exception("Error writing record %r", command.key)
            return protocol.ERROR
        return protocol.OK

    def on_get(self, command: Get) -> bytes:
        try:
            value = self.storage[command.key]
        except KeyError:
            return protocol.NOT_FOUND
        except (InvalidKeyError, OSError):
            logger.exception("Error reading record %r", command.key)
            return protocol.ERROR
        return protocol.found(value)

    def on_delete(self, command: Delete) -> bytes:
        # DEL never reports whether the record existed
        try:
            del self.storage[command.key]
        except KeyError:
            logger.debug("Record %r does not exist", command.key)
        except (InvalidKeyError, OSError) as err:
            logger.warning("Error removing record %r: %s", command.key, err)
        return protocol.OK
