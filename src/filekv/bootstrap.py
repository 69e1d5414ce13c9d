from filekv.configuration import ServerConfiguration
from filekv.key_value_storage import KeyValueStorage
from filekv.request_handler import RequestHandler
from filekv.server import Server


class ServerBootstrap:

    def __init__(self, configuration: ServerConfiguration) -> None:
        self.configuration = configuration

        self.storage = KeyValueStorage(self.configuration.storage_path,
                                       self.configuration.limits.max_value_length)

        self.handler = RequestHandler(self.storage, self.configuration.limits)

        self.server = Server(self.handler, self.configuration)

    def start(self) -> None:
        self.storage.open()
        self.server.start()

    def run(self) -> None:
        self.storage.open()
        try:
            self.server.serve_forever()
        finally:
            self.stop()

    def stop(self) -> None:
        self.server.stop()
