"""
Auction Console

Numbered text menus over the command dispatcher. Input and output are
injected so the loop can be driven from scripts and tests.
"""

import argparse
import logging
from typing import Callable, List

from auction.catalog import AuctionCatalog
from auction.config import AuctionConfig

from .dispatcher import CommandDispatcher, CommandResult
from .session import Session

logger = logging.getLogger(__name__)

GUEST_MENU = [
    "1. Register",
    "2. Login",
    "3. Exit",
]

MEMBER_MENU = [
    "1. Add item to auction",
    "2. View auction items",
    "3. Place a bid",
    "4. View my bids",
    "5. Add item to watchlist",
    "6. View my watchlist",
    "7. Declare winners",
    "8. View auction history",
    "9. Logout",
]


class ConsoleApp:
    """Interactive menu loop for one operator session"""

    def __init__(
        self,
        session: Session,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self.session = session
        self.dispatcher = CommandDispatcher(session)
        self._input = input_fn
        self._output = output_fn

    def run(self) -> None:
        """Run menus until the operator exits or input is exhausted"""
        self._output("Welcome to the Online Auction System!")
        try:
            while True:
                if self.session.is_authenticated:
                    self._member_turn()
                elif not self._guest_turn():
                    break
        except EOFError:
            logger.debug("[CONSOLE] Input closed")
        self._output("Exiting the system. Goodbye!")

    def _guest_turn(self) -> bool:
        """Show the guest menu once; returns False when the operator exits"""
        self._output("")
        self._show(GUEST_MENU)
        choice = self._read_choice()

        if choice == 1:
            username = self._input("Enter username: ")
            password = self._input("Enter password: ")
            self._render(self.dispatcher.register(username, password))
        elif choice == 2:
            username = self._input("Enter username: ")
            password = self._input("Enter password: ")
            self._render(self.dispatcher.login(username, password))
        elif choice == 3:
            return False
        else:
            self._output("Invalid option. Please try again.")
        return True

    def _member_turn(self) -> None:
        self._output("")
        self._show(MEMBER_MENU)
        choice = self._read_choice()

        try:
            if choice == 1:
                name = self._input("Enter item name: ")
                starting_price = self._input("Enter starting price: ")
                reserve_price = self._input("Enter reserve price: ")
                duration = self._read_int("Enter auction duration in minutes: ")
                increment = self._input("Enter minimum bid increment: ")
                self._render(self.dispatcher.add_item(
                    name, starting_price, reserve_price, duration, increment
                ))
            elif choice == 2:
                self._render(self.dispatcher.list_items())
            elif choice == 3:
                self._render(self.dispatcher.list_items())
                position = self._read_int("Select item index to bid on: ")
                amount = self._input("Enter your bid amount: ")
                self._render(self.dispatcher.place_bid(position, amount))
            elif choice == 4:
                self._render(self.dispatcher.list_my_bids())
            elif choice == 5:
                self._render(self.dispatcher.list_items())
                position = self._read_int("Select item index to add to watchlist: ")
                self._render(self.dispatcher.add_to_watchlist(position))
            elif choice == 6:
                self._render(self.dispatcher.list_my_watchlist())
            elif choice == 7:
                self._render(self.dispatcher.declare_winners())
            elif choice == 8:
                self._render(self.dispatcher.list_history())
            elif choice == 9:
                self._render(self.dispatcher.logout())
            else:
                self._output("Invalid option. Please try again.")
        except ValueError:
            self._output("Invalid number. Please try again.")

    def _read_choice(self) -> int:
        try:
            return self._read_int("Choose an option: ")
        except ValueError:
            return 0

    def _read_int(self, prompt: str) -> int:
        return int(self._input(prompt).strip())

    def _show(self, lines: List[str]) -> None:
        for line in lines:
            self._output(line)

    def _render(self, result: CommandResult) -> None:
        self._show(result.lines)


def main():
    """Command-line entry point for the auction console"""
    parser = argparse.ArgumentParser(
        description="Interactive online auction marketplace"
    )

    parser.add_argument(
        '--currency',
        type=str,
        default=None,
        help='Currency symbol for rendered amounts (default: $ or AUCTION_CURRENCY_SYMBOL)'
    )

    parser.add_argument(
        '--allow-duplicate-users',
        action='store_true',
        help='Accept registrations for usernames that already exist'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    config = AuctionConfig.from_env()
    if args.currency is not None:
        config.currency_symbol = args.currency
    if args.allow_duplicate_users:
        config.allow_duplicate_usernames = True

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    session = Session(catalog=AuctionCatalog(config), config=config)
    ConsoleApp(session).run()


if __name__ == "__main__":
    main()
