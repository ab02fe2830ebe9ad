import os
import sys
from typing import Optional

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.client import ClientError, DashboardState, ReservationClient, DASHBOARD

HELP = """Commands:
  search [YYYY-MM-DD] [HH:MM] [guests]   find restaurants with open tables
  book <n>                               book result number n
  dashboard                              show my reservations
  cancel <booking id>                    cancel a reservation
  home                                   back to search
  exit"""


class ReservationCLI:
    def __init__(self, state: Optional[DashboardState] = None):
        self.state = state or DashboardState(ReservationClient())
        self.running = True

    def start(self):
        print("\n🍽️  Welcome to Reserve.PH!")
        print("Type 'help' for commands or 'exit' to quit.\n")
        self._show_results()

        while self.running:
            try:
                line = input("\n> ").strip()
            except (KeyboardInterrupt, EOFError):
                print("\n👋 Goodbye!")
                self.running = False
                continue
            self.handle(line)

    def handle(self, line: str):
        parts = line.split()
        if not parts:
            return
        command, args = parts[0].lower(), parts[1:]

        if command in ['exit', 'quit', 'bye']:
            print("\n👋 Thank you for using Reserve.PH!")
            self.running = False
        elif command == 'help':
            print(HELP)
        elif command == 'search':
            self._search(args)
        elif command == 'book':
            self._book(args)
        elif command == 'dashboard':
            self.state.show_dashboard()
            self._show_dashboard()
        elif command == 'home':
            self.state.show_home()
            self._print_results()
        elif command == 'cancel':
            self._cancel(args)
        else:
            print(f"❓ Unknown command '{command}'. Type 'help' for commands.")

    def _search(self, args):
        try:
            date = args[0] if len(args) > 0 else None
            time = args[1] if len(args) > 1 else None
            party_size = int(args[2]) if len(args) > 2 else None
        except ValueError:
            print("❌ Guests must be a number")
            return
        self.state.update_search(date=date, time=time, party_size=party_size)
        self.state.show_home()
        self._show_results()

    def _show_results(self):
        try:
            self.state.run_search()
        except ClientError as e:
            print(f"❌ {e}")
            return
        self._print_results()

    def _print_results(self):
        print(f"\n🔍 {self.state.search_query_display}")
        if not self.state.restaurants:
            print("No restaurants found matching your criteria. Try another time or party size!")
            return
        for n, r in enumerate(self.state.restaurants, start=1):
            print(f"  {n}. {r['name']} ({r['cuisine']}) - Remaining Slots: {r['available_slots']}")

    def _book(self, args):
        try:
            restaurant = self.state.restaurants[int(args[0]) - 1]
        except (IndexError, ValueError):
            print("❌ Usage: book <result number>")
            return

        params = self.state.search_params
        answer = input(
            f"Confirm booking at {restaurant['name']} for {params['party_size']} people "
            f"at {params['time']}? (A small deposit of ₱{self.state.deposit:.0f} is required.) [y/N] "
        )
        if answer.strip().lower() not in ('y', 'yes'):
            return

        try:
            self.state.book(restaurant)
        except ClientError as e:
            print(f"❌ {e}")
            return
        print(f"✅ BOOKING CONFIRMED! Your table at {restaurant['name']} is reserved.")
        self._print_results()

    def _show_dashboard(self):
        print("\n📋 My Reservations")
        if not self.state.user_bookings:
            print("You have no active or past bookings.")
            return
        print(f"{'ID':<6} {'Restaurant':<22} {'Date & Time':<20} {'Party':<6} {'Status':<10}")
        print("-" * 68)
        for b in self.state.user_bookings:
            when = f"{b['date']} @ {b['time']}"
            print(f"{b['id']:<6} {b['restaurant']:<22} {when:<20} {b['party']:<6} {b['status']:<10}")

    def _cancel(self, args):
        try:
            booking_id = int(args[0])
        except (IndexError, ValueError):
            print("❌ Usage: cancel <booking id>")
            return
        if self.state.cancel(booking_id):
            print(f"Booking #{booking_id} cancelled.")
        else:
            print(f"❌ No confirmed booking #{booking_id}")
        if self.state.current_view == DASHBOARD:
            self._show_dashboard()


def main():
    ReservationCLI().start()

if __name__ == "__main__":
    main()
