"""Interactive admin console for the Library Catalog.

The operator logs in with the shared admin identity and then picks actions
from a menu:

    1  View Available Books
    2  View Users
    3  Add New Book
    4  Issue Book
    5  Return Book
    q  Quit

Everything typed here is a raw string. Book and user IDs are parsed with
``parse_record_id`` before they reach the circulation repository, and each
action runs in its own session.
"""

import argparse
import getpass
import logging
import sys
from collections.abc import Callable

from .config import LibraryConfig, get_config
from .database.circulation_repository import CirculationRepository
from .database.repository import BookNotFound, NotFoundError, StorageError, UserNotFound
from .database.session import DatabaseManager, get_db_manager
from .tools.circulation import parse_record_id

logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], None]


class AdminConsole:
    """Menu-driven presentation layer over the catalog."""

    def __init__(
        self,
        config: LibraryConfig,
        db_manager: DatabaseManager,
        input_func: InputFunc | None = None,
        password_func: InputFunc | None = None,
        output: OutputFunc = print,
    ):
        self.config = config
        self.db_manager = db_manager
        self._input = input_func or input
        self._password = password_func or getpass.getpass
        self._output = output
        self.actions: dict[str, tuple[str, Callable[[], None]]] = {
            "1": ("View Available Books", self.view_available_books),
            "2": ("View Users", self.view_users),
            "3": ("Add New Book", self.add_book),
            "4": ("Issue Book", self.issue_book),
            "5": ("Return Book", self.return_book),
        }

    def _ask(self, prompt: str, secret: bool = False) -> str | None:
        """Prompt for one line; None when the operator closes the input."""
        try:
            return (self._password if secret else self._input)(prompt)
        except (EOFError, KeyboardInterrupt):
            return None

    # === Session ===

    def login(self) -> bool:
        username = self._ask("Enter username: ")
        password = self._ask("Enter password: ", secret=True) if username is not None else None

        if not self.config.check_credentials(username, password):
            logger.warning("Rejected console login for %r", username)
            self._output("Invalid credentials. Exiting...")
            return False

        logger.info("Admin %s logged in", username)
        return True

    def run(self) -> int:
        """Log in, prepare the database and serve the menu. Returns an exit code."""
        if not self.login():
            return 1

        try:
            self.db_manager.init_database()
        except StorageError:
            logger.exception("Database bootstrap failed")
            self._output("Failed to connect to the database. Exiting...")
            return 1

        while True:
            self._output("")
            for key, (label, _) in self.actions.items():
                self._output(f"  {key}  {label}")
            self._output("  q  Quit")

            choice = self._ask("Choose an option: ")
            if choice is None or choice.strip().lower() in {"q", "quit", "exit"}:
                return 0

            action = self.actions.get(choice.strip())
            if action is None:
                self._output(f"Unknown option: {choice.strip()}")
                continue
            action[1]()

    # === Actions ===

    def view_available_books(self) -> None:
        try:
            with self.db_manager.session_scope() as session:
                books = CirculationRepository.for_session(session).list_available()
        except StorageError:
            logger.exception("Listing available books failed")
            self._output("Failed to retrieve books.")
            return

        self._output("Available Books")
        for book in books:
            self._output(f"ID: {book.id}, Title: {book.title}, Author: {book.author}")
        if not books:
            self._output("(none)")

    def view_users(self) -> None:
        try:
            with self.db_manager.session_scope() as session:
                users = CirculationRepository.for_session(session).users.list_users()
        except StorageError:
            logger.exception("Listing users failed")
            self._output("Failed to retrieve users.")
            return

        self._output("Users")
        for user in users:
            self._output(f"ID: {user.id}, Name: {user.name}, Username: {user.username}")
        if not users:
            self._output("(none)")

    def add_book(self) -> None:
        title = self._ask("Enter the book title: ")
        if title is None:
            return
        author = self._ask("Enter the book author: ")
        if author is None:
            return

        try:
            with self.db_manager.session_scope() as session:
                book = CirculationRepository.for_session(session).books.add_book(title, author)
        except StorageError:
            logger.exception("Adding book failed")
            self._output("Failed to add book.")
            return

        self._output(f"Book added successfully. (ID: {book.id})")

    def issue_book(self) -> None:
        raw_book_id = self._ask("Enter the book ID: ")
        if raw_book_id is None:
            return

        try:
            with self.db_manager.session_scope() as session:
                repo = CirculationRepository.for_session(session)

                book_id = parse_record_id(raw_book_id)
                if book_id is None:
                    raise BookNotFound(raw_book_id.strip())
                # The user is only asked for once the book is known to exist
                repo.resolve_book(book_id)

                raw_user_id = self._ask("Enter the user ID: ")
                if raw_user_id is None:
                    return
                user_id = parse_record_id(raw_user_id)
                if user_id is None:
                    raise UserNotFound(raw_user_id.strip())

                repo.issue(book_id, user_id)
        except NotFoundError as e:
            logger.info("Issue declined: %s", e)
            self._output(f"Failed to issue book. {e}.")
            return
        except StorageError:
            logger.exception("Issuing book failed")
            self._output("Failed to issue book.")
            return

        self._output("Book issued successfully.")

    def return_book(self) -> None:
        raw_book_id = self._ask("Enter the book ID: ")
        if raw_book_id is None:
            return

        try:
            book_id = parse_record_id(raw_book_id)
            if book_id is None:
                raise BookNotFound(raw_book_id.strip())
            with self.db_manager.session_scope() as session:
                CirculationRepository.for_session(session).return_book(book_id)
        except NotFoundError as e:
            logger.info("Return declined: %s", e)
            self._output(f"Failed to return book. {e}.")
            return
        except StorageError:
            logger.exception("Returning book failed")
            self._output("Failed to return book.")
            return

        self._output("Book returned successfully.")


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``library-admin``."""
    parser = argparse.ArgumentParser(description="Library Catalog admin console")
    parser.add_argument(
        "--database-url",
        help="Override the configured SQLite database URL",
    )
    args = parser.parse_args(argv)

    config = get_config()
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    db_manager = get_db_manager(args.database_url)
    try:
        return AdminConsole(config, db_manager).run()
    finally:
        db_manager.close()


if __name__ == "__main__":
    sys.exit(main())
