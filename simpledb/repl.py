"""
Interactive REPL for the database.
"""

from typing import Optional

from .config import Settings, get_settings
from .engine import DatabaseEngine
from .logging import setup_logging

HELP_TEXT = """
Available commands:
  exit, quit           - Exit the REPL
  help                 - Show this help
  info                 - Show database information

Queries:
  CREATE TABLE <name> (<col> <type>, ...)   - types: int, double, string, bool
  INSERT INTO <table> VALUES (<v1>, ...)
  SELECT * FROM <table> [WHERE <col> <op> <value>]
  SELECT <col1>, <col2> FROM <table> [WHERE <col> <op> <value>]
  DROP TABLE <table>
  SHOW TABLES
  DESCRIBE <table>  or  DESC <table>

Examples:
  CREATE TABLE users (id int, name string, age int)
  INSERT INTO users VALUES (1, Alice, 25)
  SELECT name, age FROM users WHERE age > 20
"""


class DatabaseREPL:
    """Command-line REPL for interacting with the database."""

    def __init__(self, engine: Optional[DatabaseEngine] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.engine = engine or DatabaseEngine(self.settings)
        self.running = False

    def run(self):
        """Run the REPL until exit, EOF or interrupt."""
        self.running = True
        if self.settings.repl.show_banner:
            print("SimpleDB REPL")
            print("Type 'exit' or 'quit' to exit")
            print("Type 'help' for help\n")

        while self.running:
            try:
                line = input(self.settings.repl.prompt).strip()
            except KeyboardInterrupt:
                print("\nInterrupted")
                break
            except EOFError:
                print()
                break
            self.handle(line)

    def handle(self, line: str):
        """Process a single line of input."""
        command = line.lower()
        if not command:
            return
        if command in ('exit', 'quit'):
            self.running = False
            print("Goodbye!")
        elif command == 'help':
            print(HELP_TEXT)
        elif command == 'info':
            self._print_info()
        else:
            result = self.engine.execute(line)
            if result.ok:
                print(result.text)
            else:
                print(f"Error: {result.message}")

    def _print_info(self):
        info = self.engine.database_info()
        print("=== SimpleDB Database Information ===")
        print(f"Total tables: {info['tables']}")
        print(f"Total rows: {info['rows']}")


def main():
    """Main entry point for the REPL."""
    import argparse

    settings = get_settings()
    parser = argparse.ArgumentParser(description="SimpleDB REPL")
    parser.add_argument("--log-level", default=settings.observability.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Log level")
    parser.add_argument("--log-format", default=settings.observability.log_format,
                        choices=["json", "console"], help="Log format")

    args = parser.parse_args()
    setup_logging(args.log_level, args.log_format)

    repl = DatabaseREPL(settings=settings)
    repl.run()


if __name__ == "__main__":
    main()
