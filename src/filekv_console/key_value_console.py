import cmd

from filekv.client import KeyValueClient, ResponseError, ConnectionTimeout


class KeyValueStorageShell(cmd.Cmd):
    intro = "Welcome to the filekv shell. Type help or ? to list commands.\n"
    prompt = "fkv> "

    def __init__(self, client: KeyValueClient, **kwargs) -> None:
        super().__init__(**kwargs)
        self.client = client

    def onecmd(self, line: str) -> bool:
        try:
            return super().onecmd(line)
        except (ResponseError, ConnectionTimeout, OSError) as err:
            self.stdout.write(f"Error: {err}\n")
            return False

    def do_set(self, arg: str) -> None:
        """
        Set a key-value pair in the store.

        Usage: set <key> <value>
        """
        key, _, value = arg.strip().partition(" ")
        if not key:
            self.stdout.write("Usage: set <key> <value>\n")
            return

        self.client.set(key, value.encode())

    def do_get(self, arg: str) -> None:
        """
        Get the value for a given key from the store.

        Usage: get <key>
        """
        value = self.client.get(arg.strip())

        if value is not None:
            self.stdout.write(f"{value.decode(errors='replace')}\n")
        else:
            self.stdout.write("Key not found\n")

    def do_delete(self, arg: str) -> None:
        """
        Delete a key-value pair from the store.

        Usage: delete <key>
        """
        self.client.delete(arg.strip())

    def do_quit(self, _) -> bool:
        """
        Quit the shell.

        Usage: quit
        """
        return True
